"""
Compact per-node search log records.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SearchLogEntry(BaseModel):
    """
    One visited node during a search, serialized with short keys.

    Status values: "vis" (visited), "found", "partial", "noMatch",
    "maxD" (branch truncated by max depth), "cycle", "ignored".
    """

    model_config = ConfigDict(populate_by_name=True)

    depth: int = Field(alias="d", description="Depth of the node below the anchor")
    element_role: Optional[str] = Field(default=None, alias="eR")
    element_title: Optional[str] = Field(default=None, alias="eT")
    element_identifier: Optional[str] = Field(default=None, alias="eI")
    max_depth: int = Field(alias="mD", description="Max depth of the traversal")
    criteria: Optional[Dict[str, str]] = Field(default=None, alias="c")
    status: str = Field(alias="s")
    is_match: Optional[bool] = Field(default=None, alias="iM")

    def to_ndjson(self) -> str:
        """Single-line JSON with the compact keys, nulls omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
