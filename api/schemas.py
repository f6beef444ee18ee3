from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class SelectionStateModel(BaseModel):
    search: str = ""
    filter_column: Optional[str] = None
    filter_value: Optional[str] = None
    hidden: List[str] = Field(default_factory=list)
    sort_direction: Literal["asc", "desc"] = "desc"
    top_n: int = 15


class ChartRequestModel(SelectionStateModel):
    name_column: Optional[str] = None
    value_column: Optional[str] = None
    group_column: Optional[str] = None


class FilterValuesResponse(BaseModel):
    column: Optional[str] = None
    values: List[str]
