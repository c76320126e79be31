APP_NAME = "Personal Finance Tracker"
APP_WIDTH = 1200
APP_HEIGHT = 780
DB_FILE = "finance.db"

DATE_FORMAT = "%Y-%m-%d"

INCOME = "Income"
EXPENSE = "Expense"
CATEGORY_TYPES = (INCOME, EXPENSE)

# Used when a category name is not in the categories table
FALLBACK_INCOME_CATEGORIES = frozenset(
    name.lower() for name in ("Salary", "Bonus", "Investment", "Gift", "Other Income")
)

DEFAULT_CATEGORIES = [
    {"name": "Salary",        "type": INCOME,  "icon": "💼"},
    {"name": "Bonus",         "type": INCOME,  "icon": "🎁"},
    {"name": "Investment",    "type": INCOME,  "icon": "📈"},
    {"name": "Gift",          "type": INCOME,  "icon": "🎉"},
    {"name": "Other Income",  "type": INCOME,  "icon": "💰"},
    {"name": "Food",          "type": EXPENSE, "icon": "🍔"},
    {"name": "Rent",          "type": EXPENSE, "icon": "🏠"},
    {"name": "Transport",     "type": EXPENSE, "icon": "🚗"},
    {"name": "Entertainment", "type": EXPENSE, "icon": "🎬"},
    {"name": "Utilities",     "type": EXPENSE, "icon": "💡"},
    {"name": "Healthcare",    "type": EXPENSE, "icon": "🏥"},
    {"name": "Other",         "type": EXPENSE, "icon": "📦"},
]

DEFAULT_SETTINGS = [
    ("appearance_mode", "system"),
    ("currency_symbol", "₹"),
]

TYPE_COLORS = {
    INCOME:  "#4CAF50",
    EXPENSE: "#F44336",
}

CHART_COLORS = [
    "#F44336",  # red
    "#2196F3",  # blue
    "#4CAF50",  # green
    "#FF9800",  # orange
    "#9C27B0",  # purple
    "#00BCD4",  # cyan
    "#FF5722",  # deep orange
    "#3F51B5",  # indigo
]
