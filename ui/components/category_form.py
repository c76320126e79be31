import logging
import sqlite3

import customtkinter as ctk
from services.category_service import CategoryService
from models.category import Category
from utils.constants import CATEGORY_TYPES, EXPENSE, TYPE_COLORS

logger = logging.getLogger(__name__)

# Quick picks shown under the icon entry
ICON_CHOICES = ("💼", "🎁", "📈", "💰", "🍔", "🏠", "🚗", "🎬", "💡", "🏥", "🛒", "📦")


class CategoryForm(ctk.CTkToplevel):
    """Add or edit a category.

    On edit, switching the type shows a notice: the classifier looks the type
    up live, so every past transaction under this name moves with it.
    """

    def __init__(
        self,
        master,
        category_service: CategoryService,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = category_service
        self._category = category
        self.saved = False

        self._name_var = ctk.StringVar(value=category.name if category else "")
        self._type_var = ctk.StringVar(value=category.type if category else EXPENSE)
        self._icon_var = ctk.StringVar(value=category.icon if category else "")
        self._notice_var = ctk.StringVar()
        self._error_var = ctk.StringVar()

        self.title("Edit Category" if category else "New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)
        self._build()

        for var in (self._name_var, self._type_var, self._icon_var):
            var.trace_add("write", lambda *_: self._update_preview())
        self._update_preview()

        self.bind("<Return>", lambda _e: self._on_save())
        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        self._center()

    def _field(self, row: int, label: str, widget, sticky: str = "ew"):
        ctk.CTkLabel(self, text=label).grid(row=row, column=0, padx=(16, 8), pady=4, sticky="e")
        widget.grid(row=row, column=1, padx=(0, 16), pady=4, sticky=sticky)

    def _build(self):
        name_entry = ctk.CTkEntry(self, textvariable=self._name_var, width=220)
        self._field(0, "Name:", name_entry)
        name_entry.focus_set()

        self._field(1, "Type:", ctk.CTkSegmentedButton(
            self, values=list(CATEGORY_TYPES), variable=self._type_var,
        ), sticky="w")

        self._field(2, "Icon:", ctk.CTkEntry(
            self, textvariable=self._icon_var, width=60, placeholder_text="🙂",
        ), sticky="w")

        picks = ctk.CTkFrame(self, fg_color="transparent")
        self._field(3, "", picks, sticky="w")
        for i, icon in enumerate(ICON_CHOICES):
            ctk.CTkButton(
                picks, text=icon, width=28, height=28,
                fg_color="transparent", hover_color=("gray80", "gray30"),
                command=lambda v=icon: self._icon_var.set(v),
            ).grid(row=i // 6, column=i % 6, padx=1, pady=1)

        self._preview = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=14, weight="bold"))
        self._field(4, "Preview:", self._preview, sticky="w")

        for row, var, color in ((5, self._notice_var, "#FF9800"), (6, self._error_var, "#F44336")):
            ctk.CTkLabel(
                self, textvariable=var, text_color=color,
                wraplength=300, anchor="w", justify="left",
            ).grid(row=row, column=0, columnspan=2, padx=16, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=7, column=0, columnspan=2, padx=16, pady=(8, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

    def _update_preview(self):
        type_ = self._type_var.get()
        preview = Category(id=0, name=self._name_var.get().strip() or "…", type=type_,
                           icon=self._icon_var.get().strip())
        self._preview.configure(
            text=f"{preview.display_name}  ({type_})",
            text_color=TYPE_COLORS.get(type_, "gray60"),
        )
        if self._category and type_ != self._category.type:
            self._notice_var.set(
                f"Past '{self._category.name}' transactions will count as {type_} from now on."
            )
        else:
            self._notice_var.set("")

    def _on_save(self):
        name = self._name_var.get()
        type_ = self._type_var.get()
        icon = self._icon_var.get()
        try:
            if self._category:
                self._svc.update(self._category.id, name, type_, icon)
            else:
                self._svc.create(name, type_, icon)
        except ValueError as e:
            logger.warning("Category rejected: %s", e)
            self._error_var.set(str(e))
            return
        except sqlite3.Error as e:
            logger.exception("Saving category failed")
            self._error_var.set(f"Could not save category: {e}")
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
