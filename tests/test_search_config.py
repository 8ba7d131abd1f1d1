"""
Tests for SearchConfig and its environment overrides.
"""

import pytest

from axlocator.config import SearchConfig
from axlocator.config import search_config as search_config_module
from axlocator.config.search_config import (
    get_search_config,
    load_search_config_from_env,
    set_search_config,
)

ENV_VARS = [
    "AXLOCATOR_MAX_DEPTH_SEARCH",
    "AXLOCATOR_MAX_DEPTH_COLLECT",
    "AXLOCATOR_PATH_STEP_DEPTH",
    "AXLOCATOR_DEBUG_LOGS",
    "AXLOCATOR_VERBOSE",
    "AXLOCATOR_TRACE_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(search_config_module, "load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = SearchConfig()
    assert config.default_max_depth_search == 10
    assert config.default_max_depth_collect_all == 5
    assert config.default_path_step_depth == 3
    assert config.collect_debug_logs is False
    assert config.trace_file is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AXLOCATOR_MAX_DEPTH_SEARCH", "25")
    monkeypatch.setenv("AXLOCATOR_PATH_STEP_DEPTH", "1")
    monkeypatch.setenv("AXLOCATOR_DEBUG_LOGS", "yes")
    monkeypatch.setenv("AXLOCATOR_TRACE_FILE", "/tmp/axlocator.ndjson")
    config = load_search_config_from_env()
    assert config.default_max_depth_search == 25
    assert config.default_max_depth_collect_all == 5
    assert config.default_path_step_depth == 1
    assert config.collect_debug_logs is True
    assert config.trace_file == "/tmp/axlocator.ndjson"


def test_env_keeps_base_values(monkeypatch):
    monkeypatch.setenv("AXLOCATOR_VERBOSE", "")
    config = load_search_config_from_env(SearchConfig(default_max_depth_collect_all=2, verbose=True))
    assert config.default_max_depth_collect_all == 2
    assert config.verbose is True


@pytest.mark.parametrize("raw", ["deep", "-1"])
def test_env_rejects_bad_depths(monkeypatch, raw):
    monkeypatch.setenv("AXLOCATOR_MAX_DEPTH_SEARCH", raw)
    with pytest.raises(ValueError, match="AXLOCATOR_MAX_DEPTH_SEARCH"):
        load_search_config_from_env()


def test_process_wide_config(monkeypatch):
    monkeypatch.setattr(search_config_module, "_active_config", search_config_module.DEFAULT_SEARCH)
    custom = SearchConfig(default_max_depth_search=4)
    set_search_config(custom)
    assert get_search_config() is custom
