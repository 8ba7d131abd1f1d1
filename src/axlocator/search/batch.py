"""
Sequential batch processing.

Queries run strictly in submission order on the calling context. A failing
query is recorded in its own BatchResult and never stops the ones after it.
"""

import logging
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from ..exceptions import AXLocatorError, InvalidLocatorError
from ..schemas.batch import BatchCommand, BatchQuery, BatchResult, ElementSummary
from ..tools.accessibility.attribute_names import AX_IDENTIFIER, AX_TITLE
from ..tools.accessibility.protocol import AccessibleElement

logger = logging.getLogger(__name__)


class BatchProcessor:
    """
    Runs BatchQuery objects against a SearchEngine.

    Args:
        engine: Engine providing the search operations and the trace
    """

    def __init__(self, engine):
        self.engine = engine

    def run(
        self, queries: Sequence[Any], root: Optional[AccessibleElement] = None
    ) -> List[BatchResult]:
        """
        Run every query and return one result per query, in order.

        Args:
            queries: BatchQuery objects or their JSON dict form
            root: Root element for queries without an ``application``
        """
        results = []
        for index, raw in enumerate(queries):
            results.append(self._run_one(index, raw, root))
        succeeded = sum(1 for r in results if r.success)
        self.engine.trace.info("Batch finished: %d/%d succeeded", succeeded, len(results))
        return results

    def _run_one(self, index: int, raw: Any, root: Optional[AccessibleElement]) -> BatchResult:
        command_id = _raw_command_id(raw, index)
        command: Optional[str] = None
        try:
            query = raw if isinstance(raw, BatchQuery) else BatchQuery.model_validate(raw)
            command_id = query.command_id or command_id
            command = query.command.value
            result = self._execute(query, root)
            result.command_id = command_id
        except ValidationError as e:
            error = InvalidLocatorError(f"Invalid batch query {index}: {e}")
            result = _failure(command_id, command, error)
        except AXLocatorError as e:
            result = _failure(command_id, command, e)
        except Exception as e:
            logger.exception("Batch query %s failed unexpectedly", command_id)
            result = BatchResult(
                command_id=command_id,
                command=command,
                success=False,
                error=str(e),
                error_type="internal_error",
            )
        if self.engine.trace.collect:
            result.debug_logs = self.engine.trace.drain_lines()
        return result

    def _execute(self, query: BatchQuery, root: Optional[AccessibleElement]) -> BatchResult:
        engine = self.engine
        if query.application:
            anchor = engine.resolve_application(query.application)
        elif root is not None:
            anchor = root
        else:
            raise InvalidLocatorError(
                "Query has no 'application' and the batch has no root element"
            )

        locator = query.locator
        path_hint = list(query.path_hint)
        command = query.command

        if command is BatchCommand.FIND:
            found = engine.search(anchor, locator, max_depth=query.max_depth, path_hint=path_hint)
            return self._success(
                query,
                [found.element],
                visited_count=found.visited_count,
                depth_limit_reached=found.depth_limit_reached,
            )
        if command is BatchCommand.FIND_ALL:
            found = engine.search_all(
                anchor, locator, max_depth=query.max_depth, limit=query.limit, path_hint=path_hint
            )
            return self._success(
                query,
                found.elements,
                visited_count=found.visited_count,
                depth_limit_reached=found.depth_limit_reached,
            )
        if command is BatchCommand.COLLECT:
            criteria = query.criteria if query.criteria is not None else locator.criteria
            path = list(locator.root_path_hint) + path_hint
            collected = engine.collect(
                anchor,
                criteria=criteria,
                max_depth=query.max_depth,
                include_ignored=query.include_ignored,
                limit=query.limit,
                match_all=locator.match_all,
                path_hint=path,
            )
            return self._success(
                query,
                collected.elements,
                visited_count=collected.visited_count,
                depth_limit_reached=collected.depth_limit_reached,
            )
        if command is BatchCommand.RESOLVE_PATH:
            element = engine.resolve_path(anchor, list(locator.root_path_hint) + path_hint)
            return self._success(query, [element])
        if command is BatchCommand.GET_ATTRIBUTE:
            value = engine.get_attribute(
                anchor, locator, query.attribute, max_depth=query.max_depth, path_hint=path_hint
            )
            return self._success(query, [], value=value.to_native())
        if command is BatchCommand.SET_ATTRIBUTE:
            element = engine.set_attribute(
                anchor,
                locator,
                query.attribute,
                query.value,
                max_depth=query.max_depth,
                path_hint=path_hint,
            )
            return self._success(query, [element])
        if command is BatchCommand.PERFORM_ACTION:
            element = engine.perform_action(
                anchor, locator, query.action, max_depth=query.max_depth, path_hint=path_hint
            )
            return self._success(query, [element])
        raise InvalidLocatorError(f"Unsupported batch command: {command}")

    def _success(
        self,
        query: BatchQuery,
        elements: Sequence[AccessibleElement],
        value: Any = None,
        visited_count: Optional[int] = None,
        depth_limit_reached: bool = False,
    ) -> BatchResult:
        return BatchResult(
            command_id=query.command_id,
            command=query.command.value,
            success=True,
            elements=[self.engine.call(self.summarize, e) for e in elements],
            value=value,
            visited_count=visited_count,
            depth_limit_reached=depth_limit_reached,
        )

    def summarize(self, element: AccessibleElement) -> ElementSummary:
        accessor = self.engine.accessor
        return ElementSummary(
            role=accessor.role(element),
            title=accessor.read_text(element, AX_TITLE),
            identifier=accessor.read_text(element, AX_IDENTIFIER),
            computed_name=accessor.computed_name(element) or None,
            pid=accessor.process_id(element),
            description=accessor.describe_safely(element),
        )


def _raw_command_id(raw: Any, index: int) -> str:
    if isinstance(raw, BatchQuery) and raw.command_id:
        return raw.command_id
    if isinstance(raw, dict):
        for key in ("command_id", "commandId", "id"):
            if raw.get(key):
                return str(raw[key])
    return f"query-{index}"


def _failure(command_id: str, command: Optional[str], error: AXLocatorError) -> BatchResult:
    return BatchResult(
        command_id=command_id,
        command=command,
        success=False,
        error=str(error),
        error_type=error.error_type,
    )
