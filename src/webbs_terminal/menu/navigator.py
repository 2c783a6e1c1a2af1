"""Hotkey navigation between menus."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from webbs_terminal.codec.ansi_encoder import (
    AnsiEncoder,
    clear_screen,
    color_sequence,
    reset,
    to_transport,
)
from webbs_terminal.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from webbs_terminal.core.grid import GridDocument
from webbs_terminal.menu.item import ActionType, MenuId, MenuItem
from webbs_terminal.menu.screen import DEFAULT_PROMPT, compose_screen
from webbs_terminal.menu.session import MenuSession
from webbs_terminal.menu.store import LayoutStore, MenuItemStore

logger = logging.getLogger(__name__)

# Feedback colour per action, as shown after a selection
_ACTION_FEEDBACK = {
    ActionType.COMMAND: (10, "Executing"),
    ActionType.SCRIPT: (11, "Running script"),
    ActionType.EXTERNAL: (12, "Launching"),
}


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of one hotkey press."""
    matched: bool
    action_type: ActionType | None = None
    payload: dict[str, Any] | None = None
    next_menu_id: MenuId | None = None
    item: MenuItem | None = None

    def to_dict(self) -> dict:
        """Wire shape: matched plus whichever action fields apply."""
        data: dict[str, Any] = {"matched": self.matched}
        if self.action_type is not None:
            data["actionType"] = self.action_type.value
        if self.payload is not None:
            data["payload"] = dict(self.payload)
        if self.next_menu_id is not None:
            data["nextMenuId"] = self.next_menu_id
        return data


NO_MATCH = NavigationResult(matched=False)


@dataclass(frozen=True)
class NavigationEvent:
    """Audit record for a navigation attempt, matched or not."""
    menu_id: MenuId
    user_level: int
    hotkey: str
    result: NavigationResult
    session_id: str | None = None


class MenuNavigator:
    """
    Resolves hotkeys to menu actions.

    The navigator only decides *which* action was chosen. Submenu
    selections move the session to another menu; commands, scripts
    and external programs are handed back to the caller with their
    payload untouched.

    Every attempt is passed to ``on_event`` (if given) so the caller
    can audit it; the navigator keeps no history itself.

    Example:
        nav = MenuNavigator(items, layouts)
        session = sessions.create("main", user_level=5)
        screen = nav.render(session)
        result = nav.select(session, "m")
    """

    def __init__(
        self,
        items: MenuItemStore,
        layouts: LayoutStore | None = None,
        encoder: AnsiEncoder | None = None,
        on_event: Callable[[NavigationEvent], None] | None = None,
        prompt: str = DEFAULT_PROMPT,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ):
        self.items = items
        self.layouts = layouts
        self.encoder = encoder or AnsiEncoder()
        self.on_event = on_event
        self.prompt = prompt
        self.width = width
        self.height = height

    def available_items(self, menu_id: MenuId, user_level: int) -> list[MenuItem]:
        """Items this user can see, in display order."""
        visible = [i for i in self.items.items_for(menu_id) if i.is_available(user_level)]
        return sorted(visible, key=lambda i: i.sort_key)

    def find_item(self, menu_id: MenuId, user_level: int, hotkey: str) -> MenuItem | None:
        """The available item bound to ``hotkey``, if any."""
        if not isinstance(hotkey, str) or len(hotkey) != 1:
            return None
        for item in self.available_items(menu_id, user_level):
            if item.matches(hotkey):
                return item
        return None

    def navigate(self, menu_id: MenuId, user_level: int, hotkey: str) -> NavigationResult:
        """Resolve a hotkey without any session state."""
        result = self._resolve(menu_id, user_level, hotkey)
        self._emit(NavigationEvent(menu_id, user_level, hotkey, result))
        return result

    def select(self, session: MenuSession, hotkey: str) -> NavigationResult:
        """
        Resolve a hotkey for a session and apply the transition.

        Only a submenu with a target moves the session; every other
        outcome leaves it where it was.
        """
        menu_id = session.current_menu_id
        result = self._resolve(menu_id, session.user_level, hotkey)
        if result.next_menu_id is not None:
            session.current_menu_id = result.next_menu_id
        self._emit(NavigationEvent(menu_id, session.user_level, hotkey, result, session.session_id))
        return result

    def render(self, session: MenuSession) -> str:
        """ANSI text for the session's current menu."""
        menu_id = session.current_menu_id
        doc = self.layouts.load(menu_id) if self.layouts is not None else None
        if doc is None:
            logger.debug("No layout for menu %r, using a blank screen", menu_id)
            doc = GridDocument(self.width, self.height)
        items = self.available_items(menu_id, session.user_level)
        return compose_screen(doc, items, self.encoder, self.prompt)

    def render_bytes(self, session: MenuSession, encoding: str = "cp437") -> bytes:
        """The current menu encoded for the client's transport."""
        return to_transport(self.render(session), encoding)

    def invalid_selection_message(self) -> str:
        """Retry text to show after an unmatched hotkey."""
        return f"{color_sequence(9)}Invalid selection. Please try again.{reset()}"

    def feedback(self, result: NavigationResult) -> str:
        """Short ANSI status line describing a selection."""
        if not result.matched or result.action_type is None:
            return self.invalid_selection_message()
        if result.action_type is ActionType.SUBMENU:
            return clear_screen() + "Loading menu..."
        color, verb = _ACTION_FEEDBACK[result.action_type]
        label = result.item.label if result.item else ""
        return f"{color_sequence(color)}{verb}: {label}{reset()}"

    def _resolve(self, menu_id: MenuId, user_level: int, hotkey: str) -> NavigationResult:
        item = self.find_item(menu_id, user_level, hotkey)
        if item is None:
            logger.info("No selection for hotkey %r in menu %r at level %d",
                        hotkey, menu_id, user_level)
            return NO_MATCH

        next_menu_id = None
        if item.action_type is ActionType.SUBMENU:
            next_menu_id = item.target_menu_id
            if next_menu_id is None:
                logger.warning("Submenu item %r in menu %r has no target menu",
                               item.label, menu_id)

        return NavigationResult(
            matched=True,
            action_type=item.action_type,
            payload=dict(item.payload),
            next_menu_id=next_menu_id,
            item=item,
        )

    def _emit(self, event: NavigationEvent) -> None:
        logger.debug("Navigation %s", event)
        if self.on_event is not None:
            self.on_event(event)
