"""
Locator wire schema: criteria, path steps and locators.

Accepts the JSON shapes callers actually send:
- criteria keys "match_type" or "matchType"
- path steps as flat criteria, grouped steps or legacy "Key=Value,..." strings
- locator keys "matchAll"/"match_all", "rootElementPathHint"/"path_from_root",
  "requireAction"/"require_action"
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..tools.accessibility.attribute_names import (
    COMPUTED_NAME,
    normalize_attribute_name,
)


class MatchType(str, Enum):
    """How a criterion's expected value is compared to the actual value."""

    EXACT = "exact"
    CONTAINS = "contains"
    REGEX = "regex"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS_ANY = "containsAny"

    @classmethod
    def _missing_(cls, value: object) -> Optional["MatchType"]:
        if not isinstance(value, str):
            return None
        folded = value.replace("_", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == folded:
                return member
        return None


# Inspector-style keys used by legacy path segments.
_SEGMENT_KEY_ALIASES: Dict[str, str] = {
    "Role": "AXRole",
    "Title": "AXTitle",
    "Subrole": "AXSubrole",
    "Identifier": "AXIdentifier",
    "DOMId": "AXDOMIdentifier",
    "PID": "PID",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Criterion(BaseModel):
    """
    One attribute test.

    The attribute name is kept as given; ``key`` is the canonical name used
    for lookup (e.g. "role" -> "AXRole").
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    attribute: str = Field(description="Attribute name or alias")
    value: str = Field(description="Expected value")
    match_type: MatchType = Field(
        default=MatchType.EXACT,
        validation_alias=AliasChoices("match_type", "matchType"),
    )

    @field_validator("attribute")
    @classmethod
    def _attribute_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("criterion attribute must not be empty")
        return v.strip()

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("criterion value must not be null")
        if isinstance(v, (bool, int, float)):
            return _stringify(v)
        return v

    @field_validator("match_type", mode="before")
    @classmethod
    def _default_match_type(cls, v: Any) -> Any:
        return MatchType.EXACT if v is None else v

    @property
    def key(self) -> str:
        return normalize_attribute_name(self.attribute)

    def describe(self) -> str:
        return f"{self.attribute} {self.match_type.value} '{self.value}'"

    def __str__(self) -> str:
        return self.describe()


def parse_path_segment(segment: str) -> List[Criterion]:
    """
    Parse a legacy path segment into exact criteria.

    Accepts "AXRole=AXWindow,AXTitle=Doc" and Inspector-style
    "Role:Window,Title:Doc". Pairs without a delimiter are skipped.

    Raises:
        ValueError: the segment yields no criteria
    """
    criteria = []
    for pair in segment.split(","):
        pair = pair.strip()
        if not pair:
            continue
        positions = [i for i in (pair.find("="), pair.find(":")) if i > 0]
        if not positions:
            continue
        cut = min(positions)
        key, value = pair[:cut].strip(), pair[cut + 1 :].strip()
        if not key:
            continue
        criteria.append(
            Criterion(attribute=_SEGMENT_KEY_ALIASES.get(key, key), value=value)
        )
    if not criteria:
        raise ValueError(f"path segment {segment!r} produced no usable criteria")
    return criteria


class PathStep(BaseModel):
    """
    One level of a path hint.

    ``depth`` counts levels below the current anchor (1 = direct children).
    None means the configured default step depth.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    criteria: Tuple[Criterion, ...] = Field(min_length=1)
    match_all: bool = Field(
        default=True,
        validation_alias=AliasChoices("match_all", "matchAll", "matchAllCriteria"),
    )
    depth: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices(
            "depth", "max_depth_for_step", "maxDepthForStep", "max_depth", "maxDepth"
        ),
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"criteria": parse_path_segment(data)}
        if isinstance(data, Criterion):
            return {"criteria": [data]}
        if not isinstance(data, dict) or "criteria" in data:
            if isinstance(data, dict):
                step_type = data.get("match_type", data.get("matchType"))
                if step_type is not None:
                    data = dict(data)
                    data["criteria"] = [
                        _with_default_match_type(c, step_type) for c in data["criteria"]
                    ]
                    data.pop("match_type", None)
                    data.pop("matchType", None)
            return data
        # Flat form: the step itself is a single criterion.
        flat = dict(data)
        step = {"criteria": [{k: flat.pop(k) for k in list(flat) if k in _CRITERION_KEYS}]}
        step.update(flat)
        return step

    def describe(self) -> str:
        joiner = " AND " if self.match_all else " OR "
        text = joiner.join(c.describe() for c in self.criteria)
        return f"[{text}]" + (f" depth={self.depth}" if self.depth is not None else "")


_CRITERION_KEYS = frozenset({"attribute", "value", "match_type", "matchType"})


def _with_default_match_type(criterion: Any, step_type: Any) -> Any:
    if isinstance(criterion, dict) and "match_type" not in criterion and "matchType" not in criterion:
        return {**criterion, "match_type": step_type}
    return criterion


class Locator(BaseModel):
    """
    Full query: criteria plus optional root path hint and required action.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    criteria: Tuple[Criterion, ...] = Field(default=())
    match_all: bool = Field(
        default=True, validation_alias=AliasChoices("match_all", "matchAll")
    )
    root_path_hint: Tuple[PathStep, ...] = Field(
        default=(),
        validation_alias=AliasChoices(
            "root_path_hint", "rootElementPathHint", "path_from_root", "pathFromRoot"
        ),
    )
    require_action: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("require_action", "requireAction")
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("criteria", "rootElementPathHint", "path_from_root", "root_path_hint"):
            if data.get(key) is None:
                data.pop(key, None)
        criteria = data.get("criteria")
        if isinstance(criteria, dict):
            # {"role": "AXButton", "title": "Save"} shorthand
            data["criteria"] = [
                {"attribute": k, "value": v} for k, v in criteria.items()
            ]
        name_contains = data.pop("computedNameContains", None) or data.pop(
            "computed_name_contains", None
        )
        if name_contains:
            data["criteria"] = list(data.get("criteria") or []) + [
                {"attribute": COMPUTED_NAME, "value": name_contains, "match_type": "contains"}
            ]
        return data

    @field_validator("require_action")
    @classmethod
    def _blank_action_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @property
    def has_path_hint(self) -> bool:
        return len(self.root_path_hint) > 0

    def describe(self) -> str:
        joiner = " AND " if self.match_all else " OR "
        text = joiner.join(c.describe() for c in self.criteria) or "<no criteria>"
        if self.require_action:
            text += f" requiring {self.require_action}"
        return text

