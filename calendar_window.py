"""Month calendar window with day notes (tkinter) positioned above the taskbar."""

import calendar as _cal
import logging
from datetime import date
from tkinter import font as tkfont
from tkinter import messagebox
import tkinter as tk

from calendar_logic import day_headers, day_of_year, grid_weeks, week_numbers
from calendar_state import (
    EDIT,
    cancel,
    delete,
    go_today,
    initial_state,
    navigate,
    open_for_create,
    open_for_edit,
    save,
    select,
    visible_cells,
)
from notes import (
    Note,
    NoteValidationError,
    day_key,
    note_count,
    notes_for,
    parse_day_key,
    validate_title,
)
from settings import bounds, load_settings, save_settings

logger = logging.getLogger("mini_calendar.window")

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OTHER_BG = "#F7F7F7"
OTHER_FG = "#AAAAAA"
NOTE_BG = "#BFDBFE"
WN_FG = "#888888"

_MAX_WEEKS = 6
_NOTES_PER_CELL = 2


class _MonthPanel:
    """Pre-allocated widget pool for one month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "wk_header", "day_headers",
                 "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict,
                 on_click, on_double_click) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))

        self.wk_header = tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=GRID_BG, fg=WN_FG, width=3,
        )
        self.wk_header.grid(row=1, column=0)

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=GRID_BG, width=3)
            lbl.grid(row=1, column=col + 1)
            self.day_headers.append(lbl)

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(_MAX_WEEKS):
            grid_row = r + 2
            wn = tk.Label(
                self.frame, font=fonts["wn"], bg=GRID_BG, fg=WN_FG, width=3,
            )
            wn.grid(row=grid_row, column=0)
            self.week_nums.append(wn)

            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=GRID_BG, highlightthickness=1,
                    highlightbackground="#E5E5E5", borderwidth=0,
                )
                cell.grid(row=grid_row, column=c + 1, padx=1, pady=1)
                cell.bind("<Button-1>", on_click)
                cell.bind("<Double-Button-1>", on_double_click)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarWindow:
    """Month calendar with per-day notes that appears above the taskbar."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        settings = load_settings()
        self.first_weekday: int = settings["first_weekday"]
        self.require_title: bool = settings["require_title"]
        min_date, max_date = bounds(settings)

        self.state = initial_state(date.today(), min_date, max_date)

        # Widget-to-date mapping (filled during _render)
        self._widget_dates: dict[int, date] = {}
        self._listed_notes: list[Note] = []
        self._editor_dlg: tk.Toplevel | None = None
        self.on_notes_changed = None

        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "wn": self.font_wn, "cell_w": 84, "cell_h": 64,
        }
        self._build_shell()
        self._render()

        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self.font_note = tkfont.Font(family=base, size=7)

    @staticmethod
    def _title() -> str:
        return f"Mini Calendar  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Build shell (once) — nav bar + month panel + notes list + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        # Navigation row: ◀  Today  ▶
        nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._navigate(-1))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="left", expand=True)
        btn_today.bind("<Button-1>", lambda _e: self._go_today())

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._navigate(1))

        self._panel = _MonthPanel(
            self._outer, self._panel_fonts,
            self._on_cell_click, self._on_cell_double_click,
        )
        self._panel.frame.pack()

        # Notes of the selected day
        notes_frame = tk.LabelFrame(
            self._outer, font=self.font_bold, bg=GRID_BG, padx=6, pady=4,
        )
        notes_frame.pack(fill="x", pady=(6, 0))
        self._notes_frame = notes_frame

        self._notes_list = tk.Listbox(
            notes_frame, height=4, font=self.font_normal, activestyle="none",
            selectbackground=SEL_BG, selectforeground="black",
        )
        self._notes_list.pack(side="left", fill="both", expand=True)
        self._notes_list.bind("<Double-Button-1>", lambda _e: self._edit_selected())

        btns = tk.Frame(notes_frame, bg=GRID_BG)
        btns.pack(side="right", padx=(6, 0))
        tk.Button(btns, text="Add", width=7, command=self.open_add_note).pack(pady=1)
        tk.Button(btns, text="Edit", width=7, command=self._edit_selected).pack(pady=1)
        tk.Button(btns, text="Delete", width=7, command=self._delete_selected).pack(pady=1)

        # Footer
        self._footer_label = tk.Label(
            self._outer, font=self.font_normal, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Render from state (cheap reconfigure, no widget creation)
    # ------------------------------------------------------------------
    def _render(self) -> None:
        self._widget_dates.clear()
        state = self.state
        panel = self._panel
        month = state.current_month
        panel.header.configure(text=f"{_cal.month_name[month.month]} {month.year}")

        for col, abbr in enumerate(day_headers(self.first_weekday)):
            fg = "#CC0000" if abbr in ("Sat", "Sun") else "#333333"
            panel.day_headers[col].configure(text=abbr, fg=fg)

        cells = visible_cells(state, self.first_weekday)
        rows = grid_weeks(cells)
        weeks = week_numbers(cells)
        today = date.today()

        for r in range(_MAX_WEEKS):
            if r < len(rows):
                panel.week_nums[r].configure(text=weeks[r])
                for c, cell in enumerate(rows[r]):
                    canvas = panel.day_cells[r][c]
                    self._draw_cell(canvas, cell.date, cell.in_current_month, today)
                    self._widget_dates[id(canvas)] = cell.date
            else:
                # Keep the panel height constant for 4/5-week months
                panel.week_nums[r].configure(text="")
                for canvas in panel.day_cells[r]:
                    canvas.delete("all")
                    canvas.configure(bg=GRID_BG, cursor="")

        self._render_notes()
        self._footer_label.configure(text=self._footer_text())

    def _draw_cell(self, canvas: tk.Canvas, d: date, in_month: bool,
                   today: date) -> None:
        canvas.delete("all")
        is_today = d == today
        is_selected = d == self.state.selected_date
        if is_selected:
            bg = SEL_BG
        elif in_month:
            bg = GRID_BG
        else:
            bg = OTHER_BG
        canvas.configure(bg=bg, cursor="hand2")

        w = int(canvas["width"])
        if is_today:
            canvas.create_oval(2, 2, 20, 20, fill=ACCENT, outline="")
            fg = "white"
        elif not in_month:
            fg = OTHER_FG
        else:
            fg = "black"
        canvas.create_text(11, 11, text=str(d.day), fill=fg,
                           font=self.font_bold if is_today else self.font_normal)

        day_notes = notes_for(self.state.notes, d)
        y = 24
        for note in day_notes[:_NOTES_PER_CELL]:
            canvas.create_rectangle(2, y, w - 2, y + 14, fill=NOTE_BG, outline="")
            canvas.create_text(4, y + 7, text=self._shorten(note.title, w - 8),
                               anchor="w", font=self.font_note)
            y += 16
        if len(day_notes) > _NOTES_PER_CELL:
            canvas.create_text(w - 4, y + 4, anchor="e", fill="#555555",
                               text=f"+{len(day_notes) - _NOTES_PER_CELL}",
                               font=self.font_note)

    def _shorten(self, text: str, max_px: int) -> str:
        if self.font_note.measure(text) <= max_px:
            return text
        while text and self.font_note.measure(text + "…") > max_px:
            text = text[:-1]
        return text + "…"

    def _render_notes(self) -> None:
        selected = self.state.selected_date
        self._notes_frame.configure(text=f"Notes  {day_key(selected)}")
        self._listed_notes = notes_for(self.state.notes, selected)
        self._notes_list.delete(0, "end")
        for note in self._listed_notes:
            self._notes_list.insert("end", note.title or "(untitled)")

    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        total = note_count(self.state.notes)
        if not total:
            return today_str
        return f"{total} note{'s' if total != 1 else ''}     {today_str}"

    def _apply(self, new_state) -> None:
        changed = new_state.notes is not self.state.notes
        self.state = new_state
        self._render()
        if changed and self.on_notes_changed is not None:
            self.on_notes_changed(note_count(new_state.notes))

    # ------------------------------------------------------------------
    # Cell events
    # ------------------------------------------------------------------
    def _on_cell_click(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d:
            self._apply(select(self.state, d))

    def _on_cell_double_click(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d:
            self._apply(select(self.state, d))
            self.open_add_note()

    def _selected_note(self) -> Note | None:
        sel = self._notes_list.curselection()
        if not sel:
            return None
        return self._listed_notes[sel[0]]

    def _edit_selected(self) -> None:
        note = self._selected_note()
        if note is not None:
            self._open_editor(open_for_edit(self.state, note))

    def _delete_selected(self) -> None:
        note = self._selected_note()
        if note is not None:
            self._apply(delete(self.state, note))

    # ------------------------------------------------------------------
    # Note editor dialog
    # ------------------------------------------------------------------
    def open_add_note(self) -> None:
        self._open_editor(open_for_create(self.state))

    def _open_editor(self, new_state) -> None:
        if self._editor_dlg is not None:
            self._editor_dlg.lift()
            return
        self._apply(new_state)
        editor = self.state.editor

        dlg = tk.Toplevel(self.root)
        dlg.title("Edit Note" if editor.mode == EDIT else "Add Note")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.transient(self.root)
        self._editor_dlg = dlg

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Date (YYYY-MM-DD):", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        date_entry = tk.Entry(frame, width=14, font=self.font_normal)
        date_entry.insert(0, day_key(editor.form_date))
        date_entry.grid(row=0, column=1, sticky="w", padx=(8, 0), pady=4)

        tk.Label(frame, text="Title:", font=self.font_normal).grid(
            row=1, column=0, sticky="w", pady=4,
        )
        title_entry = tk.Entry(frame, width=32, font=self.font_normal)
        title_entry.insert(0, editor.form_title)
        title_entry.grid(row=1, column=1, padx=(8, 0), pady=4)
        title_entry.focus_set()

        def on_save(_e=None) -> None:
            try:
                d = parse_day_key(date_entry.get())
            except ValueError as exc:
                messagebox.showwarning("Invalid date", str(exc), parent=dlg)
                return
            title = title_entry.get()
            if self.require_title:
                try:
                    title = validate_title(title)
                except NoteValidationError as exc:
                    messagebox.showwarning("Missing title", str(exc), parent=dlg)
                    return
            self._close_editor()
            self._apply(save(self.state, d, title))

        def on_cancel(_e=None) -> None:
            self._close_editor()
            self._apply(cancel(self.state))

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=2, column=0, columnspan=2, pady=(8, 0))
        tk.Button(btn_frame, text="Cancel", width=8, command=on_cancel).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Save", width=8, command=on_save).pack(
            side="left", padx=4,
        )
        dlg.bind("<Return>", on_save)
        dlg.bind("<Escape>", on_cancel)
        dlg.protocol("WM_DELETE_WINDOW", on_cancel)

    def _close_editor(self) -> None:
        if self._editor_dlg is not None:
            self._editor_dlg.destroy()
            self._editor_dlg = None

    # ------------------------------------------------------------------
    # ESC hides the window (the editor handles its own ESC)
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        self.hide()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Week starts on:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        weekday_var = tk.IntVar(value=self.first_weekday)
        for i, (label, value) in enumerate((("Sunday", _cal.SUNDAY),
                                            ("Monday", _cal.MONDAY))):
            tk.Radiobutton(
                frame, text=label, variable=weekday_var, value=value,
                font=self.font_normal,
            ).grid(row=0, column=i + 1, sticky="w", padx=(8, 0))

        require_var = tk.BooleanVar(value=self.require_title)
        tk.Checkbutton(
            frame, text="Reject notes without a title", variable=require_var,
            font=self.font_normal,
        ).grid(row=1, column=0, columnspan=3, sticky="w", pady=4)

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=2, column=0, columnspan=3, pady=(8, 0))

        def on_ok() -> None:
            self.first_weekday = weekday_var.get()
            self.require_title = require_var.get()
            settings = load_settings()
            settings["first_weekday"] = self.first_weekday
            settings["require_title"] = self.require_title
            try:
                save_settings(settings)
            except OSError:
                logger.exception("Could not save settings")
            dlg.destroy()
            self._render()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        new_state, moved = navigate(self.state, direction)
        if not moved:
            logger.info("Navigation clamped at %s", day_key(self.state.current_month))
            self.root.bell()
            return
        self._apply(new_state)

    def _go_today(self) -> None:
        self._apply(go_today(self.state, date.today()))

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self._apply(go_today(self.state, date.today()))
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right above taskbar
    # ------------------------------------------------------------------
    def _work_area(self) -> tuple[int, int]:
        """Return (right, bottom) of the usable screen area."""
        try:
            import ctypes
            import ctypes.wintypes
            rect = ctypes.wintypes.RECT()
            ctypes.windll.user32.SystemParametersInfoW(0x0030, 0, ctypes.byref(rect), 0)
            return rect.right, rect.bottom
        except (ImportError, AttributeError, ValueError):
            # Not on Windows: assume a 40px panel at the bottom
            return self.root.winfo_screenwidth(), self.root.winfo_screenheight() - 40

    def _position_window(self) -> None:
        self.root.update_idletasks()
        work_right, work_bottom = self._work_area()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = work_right - win_w - 12
        y = work_bottom - win_h - 12
        self.root.geometry(f"+{x}+{y}")
