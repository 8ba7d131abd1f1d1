"""
Tests for SearchTrace, SearchLogEntry serialization and logging setup.
"""

import json
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from axlocator.config import SearchConfig
from axlocator.schemas.search_log import SearchLogEntry
from axlocator.search import SearchEngine
from axlocator.utils.logging import SearchTrace, setup_logging, silence_logging


class TestSearchLogEntry:
    def test_compact_keys(self):
        entry = SearchLogEntry(
            depth=2,
            max_depth=10,
            status="found",
            element_role="AXButton",
            element_title="Save",
            criteria={"role": "Button"},
            is_match=True,
        )
        assert json.loads(entry.to_ndjson()) == {
            "d": 2,
            "eR": "AXButton",
            "eT": "Save",
            "mD": 10,
            "c": {"role": "Button"},
            "s": "found",
            "iM": True,
        }

    def test_parses_compact_form(self):
        entry = SearchLogEntry.model_validate({"d": 1, "mD": 3, "s": "maxD"})
        assert entry.depth == 1
        assert entry.status == "maxD"


class TestSearchTrace:
    def test_collects_formatted_lines(self):
        trace = SearchTrace(collect=True)
        trace.info("Found %d element(s)", 2)
        trace.debug("plain message")
        assert trace.drain_lines() == ["[INFO] Found 2 element(s)", "[DEBUG] plain message"]
        assert trace.drain_lines() == []

    def test_forwards_to_logger(self, caplog):
        trace = SearchTrace(logger=logging.getLogger("tests.trace"))
        with caplog.at_level(logging.WARNING, logger="tests.trace"):
            trace.warning("Path step %d failed", 1)
        assert "Path step 1 failed" in caplog.text
        assert trace.lines == []

    def test_visits_not_recorded_without_trace_file(self):
        for trace in (SearchTrace(), SearchTrace(collect=True)):
            trace.record_visit(0, 5, "vis")
            assert trace.entries == []

    def test_flush_appends_ndjson(self, tmp_path):
        path = tmp_path / "traces" / "search.ndjson"
        trace = SearchTrace(trace_file=path)
        trace.record_visit(0, 5, "vis", role="AXApplication")
        trace.record_visit(1, 5, "found", role="AXButton", is_match=True)
        assert trace.flush() == 2
        assert trace.flush() == 0
        trace.record_visit(2, 5, "maxD")
        trace.flush()
        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["s"] for line in lines] == ["vis", "found", "maxD"]

    def test_flush_failure_is_logged(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        trace = SearchTrace(logger=logging.getLogger("tests.flush"), trace_file=blocker / "search.ndjson")
        trace.record_visit(0, 1, "vis")
        with caplog.at_level(logging.WARNING, logger="tests.flush"):
            assert trace.flush() == 0
        assert "Could not write search trace" in caplog.text
        assert trace.entries == []

    def test_engine_writes_trace_file(self, tmp_path, save_cancel_tree):
        path = tmp_path / "search.ndjson"
        engine = SearchEngine(config=SearchConfig(trace_file=str(path)))
        engine.find_element(
            save_cancel_tree["app"], {"criteria": [{"attribute": "title", "value": "Save"}]}
        )
        records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert [r["s"] for r in records] == ["noMatch", "noMatch", "found"]
        assert records[-1]["eT"] == "Save"
        assert records[-1]["c"] == {"title": "Save"}


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("axlocator")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class TestLoggingSetup:
    def test_setup_installs_single_rich_handler(self, restore_package_logger):
        console = Console(file=None, record=True)
        setup_logging(verbose=True, console=console)
        logger = setup_logging(verbose=True, console=console)
        assert logger is restore_package_logger
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.DEBUG

    def test_quiet_by_default(self, restore_package_logger):
        assert setup_logging().level == logging.WARNING
        assert logging.getLogger("atomacos").level == logging.CRITICAL

    def test_silence(self, restore_package_logger):
        silence_logging()
        assert restore_package_logger.propagate is False
        assert not isinstance(restore_package_logger.handlers[0], RichHandler)
