"""Persistence seams for menu layouts and items."""

import dataclasses
import itertools
import logging
from typing import Protocol

from webbs_terminal.core.grid import GridDocument
from webbs_terminal.menu.item import MenuId, MenuItem, validate_hotkeys

logger = logging.getLogger(__name__)


class LayoutStore(Protocol):
    """One current GridDocument per menu."""

    def save(self, menu_id: MenuId, doc: GridDocument) -> None: ...

    def load(self, menu_id: MenuId) -> GridDocument | None: ...


class MenuItemStore(Protocol):
    """Menu items per menu, editable by item id."""

    def items_for(self, menu_id: MenuId) -> list[MenuItem]: ...

    def create(self, menu_id: MenuId, item: MenuItem) -> MenuItem: ...

    def update(self, item_id: int, **changes) -> MenuItem: ...

    def delete(self, item_id: int) -> MenuItem: ...


class MemoryLayoutStore:
    """
    In-memory LayoutStore.

    Saving overwrites the previous layout for the menu; layouts are
    not versioned. Both directions copy, so callers never share a
    grid with the store.
    """

    def __init__(self):
        self._layouts: dict[MenuId, GridDocument] = {}

    def save(self, menu_id: MenuId, doc: GridDocument) -> None:
        self._layouts[menu_id] = doc.copy()
        logger.debug("Saved layout for menu %r (%dx%d)", menu_id, doc.width, doc.height)

    def load(self, menu_id: MenuId) -> GridDocument | None:
        doc = self._layouts.get(menu_id)
        return doc.copy() if doc is not None else None

    def __contains__(self, menu_id: object) -> bool:
        return menu_id in self._layouts


class MemoryMenuItemStore:
    """
    In-memory MenuItemStore.

    Assigns item ids on create and keeps the hotkey rule: within a
    menu, visible items never share a hotkey.

    Raises:
        DuplicateHotkeyError: From create/update on a clash
        KeyError: From update/delete on an unknown item id
    """

    def __init__(self, items: dict[MenuId, list[MenuItem]] | None = None):
        self._items: dict[int, MenuItem] = {}
        self._ids = itertools.count(1)
        for menu_id, menu_items in (items or {}).items():
            for item in menu_items:
                self.create(menu_id, item)

    def items_for(self, menu_id: MenuId) -> list[MenuItem]:
        return [item for item in self._items.values() if item.menu_id == menu_id]

    def get(self, item_id: int) -> MenuItem:
        return self._items[item_id]

    def create(self, menu_id: MenuId, item: MenuItem) -> MenuItem:
        item = dataclasses.replace(item, menu_id=menu_id, item_id=next(self._ids))
        validate_hotkeys([*self.items_for(menu_id), item], menu_id)
        self._items[item.item_id] = item
        return item

    def update(self, item_id: int, **changes) -> MenuItem:
        current = self._items[item_id]
        changes.pop("item_id", None)
        changes.pop("menu_id", None)
        updated = dataclasses.replace(current, **changes)
        others = [i for i in self.items_for(current.menu_id) if i.item_id != item_id]
        validate_hotkeys([*others, updated], current.menu_id)
        self._items[item_id] = updated
        return updated

    def delete(self, item_id: int) -> MenuItem:
        return self._items.pop(item_id)
