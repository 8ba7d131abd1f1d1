"""
Schemas for batch queries and their per-query results.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from .locator import Criterion, Locator, PathStep


class BatchCommand(str, Enum):
    """Operations a batch query can run."""

    FIND = "find"
    FIND_ALL = "findAll"
    COLLECT = "collect"
    RESOLVE_PATH = "resolvePath"
    GET_ATTRIBUTE = "getAttribute"
    SET_ATTRIBUTE = "setAttribute"
    PERFORM_ACTION = "performAction"

    @classmethod
    def _missing_(cls, value: object) -> Optional["BatchCommand"]:
        if not isinstance(value, str):
            return None
        folded = value.replace("_", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == folded:
                return member
        return None


class BatchQuery(BaseModel):
    """
    One sub-query of a batch.

    ``application`` selects the root through the engine's application
    resolver; without it the batch's root element is used.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    command_id: str = Field(
        default="",
        validation_alias=AliasChoices("command_id", "commandId", "id"),
        description="Caller-chosen id echoed in the result",
    )
    command: BatchCommand = Field(default=BatchCommand.FIND)
    application: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("application", "app")
    )
    locator: Locator = Field(default_factory=Locator)
    path_hint: Tuple[PathStep, ...] = Field(
        default=(), validation_alias=AliasChoices("path_hint", "pathHint")
    )
    criteria: Optional[Tuple[Criterion, ...]] = Field(
        default=None, description="Collect filter; defaults to the locator's criteria"
    )
    max_depth: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("max_depth", "maxDepth")
    )
    limit: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("limit", "maxElements")
    )
    include_ignored: bool = Field(
        default=False, validation_alias=AliasChoices("include_ignored", "includeIgnored")
    )
    action: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("action", "actionName")
    )
    attribute: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("attribute", "attributeName")
    )
    value: Any = Field(default=None, validation_alias=AliasChoices("value", "actionValue"))

    @model_validator(mode="after")
    def _check_command_arguments(self) -> "BatchQuery":
        if self.command is BatchCommand.PERFORM_ACTION and not self.action:
            raise ValueError("performAction requires 'action'")
        if self.command in (BatchCommand.GET_ATTRIBUTE, BatchCommand.SET_ATTRIBUTE):
            if not self.attribute:
                raise ValueError(f"{self.command.value} requires 'attribute'")
        if self.command is BatchCommand.RESOLVE_PATH and not (
            self.path_hint or self.locator.root_path_hint
        ):
            raise ValueError("resolvePath requires 'path_hint'")
        return self


class ElementSummary(BaseModel):
    """Short description of a matched element."""

    role: Optional[str] = Field(default=None, description="Role as reported, e.g. AXButton")
    title: Optional[str] = None
    identifier: Optional[str] = None
    computed_name: Optional[str] = None
    pid: Optional[int] = None
    description: str = Field(default="", description="Log-style description")


class BatchResult(BaseModel):
    """
    Outcome of one sub-query. A failed sub-query never aborts the batch.
    """

    command_id: str = ""
    command: Optional[str] = None
    success: bool
    elements: List[ElementSummary] = Field(default_factory=list)
    value: Any = Field(default=None, description="Attribute value for getAttribute")
    error: Optional[str] = None
    error_type: Optional[str] = None
    visited_count: Optional[int] = None
    depth_limit_reached: bool = False
    debug_logs: List[str] = Field(default_factory=list)

    def format_summary(self) -> str:
        """One-line human-readable summary."""
        label = self.command_id or self.command or "query"
        if not self.success:
            return f"✗ {label}: {self.error_type}: {self.error}"
        if self.value is not None:
            return f"✓ {label}: {self.value!r}"
        return f"✓ {label}: {len(self.elements)} element(s)"
