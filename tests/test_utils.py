import logging
from datetime import date

import pytest

from utils import app_config
from utils.currency import format_currency
from utils.date_helpers import (
    format_date,
    friendly_month,
    month_label,
    normalize_date,
    parse_date,
)
from utils.logging_setup import setup_logging


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
    return tmp_path


def test_load_config_missing_or_corrupt(config_dir):
    assert app_config.load_config() == {}
    (config_dir / "config.json").write_text("{not json", encoding="utf-8")
    assert app_config.load_config() == {}
    (config_dir / "config.json").write_text("[1, 2]", encoding="utf-8")
    assert app_config.load_config() == {}


def test_db_folder_round_trip(config_dir):
    assert app_config.get_db_folder() is None
    app_config.set_db_folder("/data/finance")
    assert app_config.get_db_folder() == "/data/finance"
    assert not (config_dir / "config.tmp").exists()

    app_config.set_db_folder(None)
    assert app_config.get_db_folder() is None


def test_log_level(config_dir):
    assert app_config.get_log_level() == "INFO"
    app_config.save_config({"log_level": "debug"})
    assert app_config.get_log_level() == "DEBUG"
    app_config.save_config({"log_level": "chatty"})
    assert app_config.get_log_level() == "INFO"
    app_config.set_log_level("warning")
    assert app_config.load_config()["log_level"] == "WARNING"
    with pytest.raises(ValueError):
        app_config.set_log_level("loud")
    assert app_config.get_log_file() == config_dir / "logs.txt"


def test_setup_logging_writes_errors_to_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "logs.txt"
    try:
        setup_logging("WARNING", log_file=log_file)
        logging.getLogger("finance.test").info("not written")
        logging.getLogger("finance.test").error("disk full")
        for handler in root.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "disk full" in text
        assert "not written" not in text
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_parse_and_normalize_dates():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date(" 2024.03.01 ") == date(2024, 3, 1)
    assert parse_date("2023-02-29") is None
    assert parse_date("") is None
    assert normalize_date("2024/1/5") == "2024-01-05"
    assert normalize_date("yesterday") is None
    assert format_date(date(2024, 12, 1)) == "2024-12-01"


def test_month_labels():
    assert month_label(2024, 1) == "Jan 2024"
    assert friendly_month(2026, 2) == "February 2026"


def test_format_currency():
    assert format_currency(1234.5) == "₹1,234.50"
    assert format_currency(-20, "$") == "$-20.00"
