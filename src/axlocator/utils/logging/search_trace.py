"""
Logging context passed explicitly through the search components.

There is no process-wide trace: each SearchEngine builds one SearchTrace and
hands it to its matcher, traverser and path resolver. Messages always go to a
standard logging.Logger; when collection is enabled they are also kept so batch
results can return them as debug_logs. Visit records are only kept when a trace
file is configured, and every flush empties them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...schemas.search_log import SearchLogEntry

DEFAULT_LOGGER_NAME = "axlocator.search"


class SearchTrace:
    """
    Logger wrapper with optional line collection and visit records.

    Args:
        logger: Logger to forward messages to
        collect: Keep formatted lines in memory until drain_lines()
        trace_file: Record visits and append them to this NDJSON file on flush()
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        collect: bool = False,
        trace_file: Optional[Union[str, Path]] = None,
    ):
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.collect = collect
        self.trace_file = Path(trace_file) if trace_file else None
        self.lines: List[str] = []
        self.entries: List[SearchLogEntry] = []

    @property
    def records_visits(self) -> bool:
        return self.trace_file is not None

    def log(self, level: int, message: str, *args: Any) -> None:
        self.logger.log(level, message, *args)
        if self.collect:
            text = message % args if args else message
            self.lines.append(f"[{logging.getLevelName(level)}] {text}")

    def debug(self, message: str, *args: Any) -> None:
        self.log(logging.DEBUG, message, *args)

    def info(self, message: str, *args: Any) -> None:
        self.log(logging.INFO, message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self.log(logging.WARNING, message, *args)

    def error(self, message: str, *args: Any) -> None:
        self.log(logging.ERROR, message, *args)

    def record_visit(
        self,
        depth: int,
        max_depth: int,
        status: str,
        role: Optional[str] = None,
        title: Optional[str] = None,
        identifier: Optional[str] = None,
        criteria: Optional[Dict[str, str]] = None,
        is_match: Optional[bool] = None,
    ) -> None:
        """Store a compact record of one visited node."""
        if not self.records_visits:
            return
        self.entries.append(
            SearchLogEntry(
                depth=depth,
                max_depth=max_depth,
                status=status,
                element_role=role,
                element_title=title,
                element_identifier=identifier,
                criteria=criteria,
                is_match=is_match,
            )
        )

    def drain_lines(self) -> List[str]:
        lines, self.lines = self.lines, []
        return lines

    def flush(self) -> int:
        """
        Append recorded visit entries to the trace file as NDJSON.

        Returns:
            Number of entries written. Entries are dropped after a failed
            write too.
        """
        entries, self.entries = self.entries, []
        if self.trace_file is None or not entries:
            return 0
        try:
            self.trace_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.trace_file, "a", encoding="utf-8") as f:
                for entry in entries:
                    f.write(entry.to_ndjson() + "\n")
        except OSError as e:
            self.logger.warning("Could not write search trace to %s: %s", self.trace_file, e)
            return 0
        return len(entries)
