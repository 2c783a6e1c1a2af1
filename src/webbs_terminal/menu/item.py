"""Menu items and the hotkey uniqueness rule."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

from webbs_terminal.core.color import check_color

MenuId = Union[int, str]


class ActionType(str, Enum):
    """What selecting a menu item asks the caller to do."""
    SUBMENU = "submenu"
    COMMAND = "command"
    SCRIPT = "script"
    EXTERNAL = "external"


# Payload key holding the interesting value for each action type
PAYLOAD_KEYS = {
    ActionType.SUBMENU: "menu_id",
    ActionType.COMMAND: "command",
    ActionType.SCRIPT: "script_path",
    ActionType.EXTERNAL: "program",
}


class DuplicateHotkeyError(ValueError):
    """Two visible items in one menu share a hotkey."""

    def __init__(self, menu_id: MenuId | None, hotkey: str):
        self.menu_id = menu_id
        self.hotkey = hotkey
        super().__init__(f"Hotkey {hotkey!r} is already used in menu {menu_id!r}")


def normalize_hotkey(hotkey: str) -> str:
    """Canonical (upper-case) form used for comparisons."""
    return hotkey.upper()


@dataclass(frozen=True)
class MenuItem:
    """
    One selectable entry on a menu screen.

    ``payload`` is a small bag whose shape depends on the action:
    ``{"menu_id": ...}`` for submenus, ``{"command": ...}``,
    ``{"script_path": ...}`` or ``{"program": ...}`` otherwise.
    """
    hotkey: str
    label: str
    action_type: ActionType = ActionType.COMMAND
    payload: dict[str, Any] = field(default_factory=dict)
    x: int = 0
    y: int = 0
    min_user_level: int = 1
    visible: bool = True
    display_order: int = 0
    fg: int = 7
    bg: int = 0
    highlight_fg: int = 11
    menu_id: MenuId | None = None
    item_id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.hotkey, str) or len(self.hotkey) != 1:
            raise ValueError(f"Hotkey must be a single character, got {self.hotkey!r}")
        object.__setattr__(self, "action_type", ActionType(self.action_type))
        check_color(self.fg, "fg")
        check_color(self.bg, "bg")
        check_color(self.highlight_fg, "highlight_fg")

    def matches(self, hotkey: str) -> bool:
        """Case-insensitive hotkey comparison."""
        return normalize_hotkey(self.hotkey) == normalize_hotkey(hotkey)

    def is_available(self, user_level: int) -> bool:
        """Visible and permitted for a user at ``user_level``."""
        return self.visible and self.min_user_level <= user_level

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.display_order, self.y, self.x)

    @property
    def target_menu_id(self) -> MenuId | None:
        """Submenu target, or None if this is not a usable submenu item."""
        if self.action_type is not ActionType.SUBMENU:
            return None
        return self.payload.get("menu_id")

    @property
    def caption(self) -> str:
        """Text drawn on screen for this item."""
        return f"[{self.hotkey}] {self.label}"

    def to_dict(self) -> dict:
        """Row shape used by the menu item store."""
        return {
            "id": self.item_id,
            "menu_id": self.menu_id,
            "hotkey": self.hotkey,
            "label": self.label,
            "x_position": self.x,
            "y_position": self.y,
            "action_type": self.action_type.value,
            "action_data": dict(self.payload),
            "min_user_level": self.min_user_level,
            "is_visible": self.visible,
            "display_order": self.display_order,
            "foreground_color": self.fg,
            "background_color": self.bg,
            "highlight_fg_color": self.highlight_fg,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MenuItem":
        return cls(
            hotkey=data["hotkey"],
            label=data.get("label", ""),
            action_type=ActionType(data.get("action_type", ActionType.COMMAND)),
            payload=dict(data.get("action_data") or {}),
            x=data.get("x_position", 0),
            y=data.get("y_position", 0),
            min_user_level=data.get("min_user_level", 1),
            visible=data.get("is_visible", True),
            display_order=data.get("display_order", 0),
            fg=data.get("foreground_color", 7),
            bg=data.get("background_color", 0),
            highlight_fg=data.get("highlight_fg_color", 11),
            menu_id=data.get("menu_id"),
            item_id=data.get("id"),
        )


def validate_hotkeys(items: Iterable[MenuItem], menu_id: MenuId | None = None) -> None:
    """
    Check that visible items use distinct hotkeys (case-insensitive).

    Hidden items are ignored; an author may park an item with a
    clashing key while it is switched off.

    Raises:
        DuplicateHotkeyError: On the first clash found
    """
    seen: set[str] = set()
    for item in items:
        if not item.visible:
            continue
        key = normalize_hotkey(item.hotkey)
        if key in seen:
            raise DuplicateHotkeyError(menu_id if menu_id is not None else item.menu_id, item.hotkey)
        seen.add(key)
