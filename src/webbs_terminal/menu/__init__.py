"""Menu runtime: items, sessions, navigation and the login dialogue."""

from webbs_terminal.menu.item import (
    ActionType,
    DuplicateHotkeyError,
    MenuItem,
    validate_hotkeys,
)
from webbs_terminal.menu.navigator import MenuNavigator, NavigationEvent, NavigationResult
from webbs_terminal.menu.screen import compose_screen, overlay_items
from webbs_terminal.menu.session import MenuSession, SessionStore
from webbs_terminal.menu.store import (
    LayoutStore,
    MemoryLayoutStore,
    MemoryMenuItemStore,
    MenuItemStore,
)

__all__ = [
    "ActionType",
    "DuplicateHotkeyError",
    "MenuItem",
    "validate_hotkeys",
    "MenuNavigator",
    "NavigationEvent",
    "NavigationResult",
    "compose_screen",
    "overlay_items",
    "MenuSession",
    "SessionStore",
    "LayoutStore",
    "MemoryLayoutStore",
    "MemoryMenuItemStore",
    "MenuItemStore",
]
