"""Pytest configuration: shared fixtures and external test files."""

import os
from pathlib import Path
from typing import Optional

import pytest

from webbs_terminal.core.grid import BoxStyle, GridDocument
from webbs_terminal.menu.item import ActionType, MenuItem
from webbs_terminal.menu.navigator import MenuNavigator
from webbs_terminal.menu.store import MemoryLayoutStore, MemoryMenuItemStore


def get_test_art_dir() -> Optional[Path]:
    """
    Get external art directory from environment or default locations.

    Set WEBBS_TERMINAL_TEST_DIR environment variable to specify a custom location.
    """
    # Check environment variable first
    if env_path := os.environ.get("WEBBS_TERMINAL_TEST_DIR"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    # Check common default locations
    defaults = [
        Path.home() / "ansi-art",
        Path.home() / "Documents" / "ansi-art",
    ]

    for default in defaults:
        if default.exists():
            # Verify it has .ans files
            ans_files = list(default.glob("*.ans"))[:1]
            if ans_files:
                return default

    return None


@pytest.fixture(scope="session")
def test_art_dir() -> Path:
    """Fixture providing external art directory, skips if unavailable."""
    art_dir = get_test_art_dir()
    if art_dir is None:
        pytest.skip(
            "External art directory not found. "
            "Set WEBBS_TERMINAL_TEST_DIR or place .ans files in ~/ansi-art"
        )
    return art_dir


@pytest.fixture(scope="session")
def sample_ans_files(test_art_dir: Path) -> list[Path]:
    """Get list of .ans files for testing."""
    files = list(test_art_dir.glob("*.ans"))
    if not files:
        pytest.skip(f"No .ans files found in {test_art_dir}")
    # Limit to avoid very slow tests
    return sorted(files)[:50]


@pytest.fixture
def single_ans_file(sample_ans_files: list[Path]) -> Path:
    """Get a single .ans file for quick tests."""
    return sample_ans_files[0]


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Generate test cases from fixtures."""
    if "ans_file" in metafunc.fixturenames:
        art_dir = get_test_art_dir()
        files = sorted(art_dir.glob("*.ans"))[:50] if art_dir else []
        metafunc.parametrize("ans_file", files, ids=lambda p: p.name)


# -----------------------------------------------------------------------------
# Shared fixtures for screens and menus
# -----------------------------------------------------------------------------

@pytest.fixture
def main_screen() -> GridDocument:
    """A small framed menu screen."""
    doc = GridDocument(30, 6)
    doc.set_pen(fg=14, bg=1)
    doc.draw_box(0, 0, 29, 5, BoxStyle.DOUBLE)
    doc.set_pen(fg=15, bg=0)
    doc.place_text(2, 1, "MAIN MENU")
    return doc


@pytest.fixture
def main_items() -> list[MenuItem]:
    return [
        MenuItem("M", "Messages", ActionType.SUBMENU, {"menu_id": "messages"}, x=2, y=2),
        MenuItem("F", "Files", ActionType.SUBMENU, {"menu_id": "files"}, x=2, y=3,
                 display_order=1),
        MenuItem("W", "Who's Online", ActionType.COMMAND, {"command": "who"}, x=2, y=4,
                 display_order=2),
        MenuItem("S", "Sysop", ActionType.EXTERNAL, {"program": "sysop.exe"}, x=16, y=2,
                 min_user_level=100, display_order=3),
        MenuItem("H", "Hidden", ActionType.SCRIPT, {"script_path": "hidden.sh"}, x=16, y=3,
                 visible=False),
    ]


@pytest.fixture
def item_store(main_items: list[MenuItem]) -> MemoryMenuItemStore:
    return MemoryMenuItemStore({"main": main_items})


@pytest.fixture
def layout_store(main_screen: GridDocument) -> MemoryLayoutStore:
    store = MemoryLayoutStore()
    store.save("main", main_screen)
    return store


@pytest.fixture
def navigator(item_store: MemoryMenuItemStore, layout_store: MemoryLayoutStore) -> MenuNavigator:
    return MenuNavigator(item_store, layout_store, width=30, height=6)
