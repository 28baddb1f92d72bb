"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import threading
from datetime import date

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from logging_config import setup_logging
from settings import load_settings
from tray_icon import create_tray, tray_title


def main() -> None:
    settings = load_settings()
    setup_logging(level=getattr(logging, settings["log_level"]),
                  log_file=settings["log_file"])

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    cal_win = CalendarWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_add_note() -> None:
        def _add() -> None:
            cal_win.show()
            cal_win.open_add_note()
        cal_win.root.after(0, _add)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_add_note=on_add_note, on_settings=on_settings)

    def on_notes_changed(total: int) -> None:
        tray.title = tray_title(date.today(), total)

    cal_win.on_notes_changed = on_notes_changed

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
