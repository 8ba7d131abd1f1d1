"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
_SRC_PATH = Path(__file__).parent.parent / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))


def pytest_configure(config):
    """Register the markers added below."""
    config.addinivalue_line("markers", "macos: tests for the atomacos binding")
    config.addinivalue_line("markers", "integration: end-to-end engine tests")


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        if "macos" in item.nodeid.lower():
            item.add_marker("macos")
        if "end_to_end" in item.nodeid.lower() or "batch" in item.nodeid.lower():
            item.add_marker("integration")


@pytest.fixture
def search_config():
    from axlocator.config import SearchConfig

    return SearchConfig()


@pytest.fixture
def engine(search_config):
    from axlocator.search import SearchEngine

    return SearchEngine(config=search_config)


@pytest.fixture
def matcher():
    from axlocator.search import CriterionMatcher

    return CriterionMatcher()


@pytest.fixture
def save_cancel_tree():
    """Application > Window > [Button "Save", Button "Cancel"]."""
    from fake_tree import FakeElement

    save = FakeElement("AXButton", "Save", actions=["AXPress"], AXIdentifier="save-btn")
    cancel = FakeElement("AXButton", "Cancel", actions=["AXPress"], AXIdentifier="cancel-btn")
    window = FakeElement("AXWindow", "Document", children=[save, cancel])
    app = FakeElement("AXApplication", "TextEdit", children=[window])
    return {"app": app, "window": window, "save": save, "cancel": cancel}


@pytest.fixture
def two_window_tree():
    """
    Application > [Button "Menu", Window "Dialog" > Group > Button "OK",
    Window "Inspector" > StaticText].
    """
    from fake_tree import FakeElement

    button = FakeElement("AXButton", "OK", actions=["AXPress"])
    button_window = FakeElement("AXWindow", "Dialog", children=[FakeElement("AXGroup", children=[button])])
    empty_window = FakeElement(
        "AXWindow", "Inspector", children=[FakeElement("AXStaticText", "No selection")]
    )
    menu_button = FakeElement("AXButton", "Menu", actions=["AXPress"])
    app = FakeElement("AXApplication", "Preview", children=[menu_button, button_window, empty_window])
    return {
        "app": app,
        "menu_button": menu_button,
        "button_window": button_window,
        "empty_window": empty_window,
        "button": button,
    }
