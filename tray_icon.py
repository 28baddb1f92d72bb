"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu


def tray_title(today: date, note_total: int = 0) -> str:
    title = f"Mini Calendar – {today.isoformat()}"
    if note_total:
        title += f" ({note_total} note{'s' if note_total != 1 else ''})"
    return title


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_add_note: Callable[[], None] | None = None,
    on_settings: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_add_note is not None:
        items.append(MenuItem("Add Note…", lambda _icon, _item: on_add_note()))
    if on_settings is not None:
        items.append(MenuItem("Settings", lambda _icon, _item: on_settings()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    icon = pystray.Icon("mini-calendar-notes", icon_image, tray_title(date.today()), menu)
    return icon
