"""
Table Schemas
=============
Models for table documents rendered offline by ``logz render``.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from logz.policy import DEFAULT_THRESHOLDS, LatencyThresholds, RowLevel, level_for_duration


class TableRow(BaseModel):
    """One body row of a table document"""

    cells: List[str] = Field(default_factory=list, description="Cell texts, left to right")
    level: Optional[RowLevel] = Field(default=None, description="Explicit row class")
    duration: Optional[float] = Field(
        default=None, ge=0, description="Latency in seconds, used when level is unset"
    )
    error: bool = Field(default=False, description="Operation failed")

    def resolve_level(
        self, thresholds: LatencyThresholds = DEFAULT_THRESHOLDS
    ) -> Optional[RowLevel]:
        """Explicit level first, then error, then latency; None leaves the row unstyled."""
        if self.level is not None:
            return self.level
        if self.error:
            return RowLevel.ERROR
        if self.duration is not None:
            return level_for_duration(self.duration, thresholds=thresholds)
        return None


class TableDocument(BaseModel):
    """Columns plus rows of a sortable table"""

    columns: List[str] = Field(default_factory=list)
    rows: List[TableRow] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "columns": ["Query", "Duration"],
                "rows": [
                    {"cells": ["select 1 from dual", "0.002"], "duration": 0.002},
                    {"cells": ["select * from t", "1.3"], "error": True},
                ],
            }
        }
