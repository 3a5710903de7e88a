# src/bond_spread/data/schemas/dataset.py
import datetime as _dt
from typing import List, Optional

from pydantic import BaseModel, Field

from bond_spread.alignment.schemas import AlignmentResult, Observation


class BondDataset(BaseModel):
    treasury_series: str = Field(..., description="FRED id of the Treasury series")
    corporate_series: str = Field(..., description="FRED id of the corporate series")
    requested_start: _dt.date
    requested_end: _dt.date
    treasury: List[Observation] = Field(default_factory=list)
    corporate: List[Observation] = Field(default_factory=list)
    result: AlignmentResult
    warnings: List[str] = Field(default_factory=list)
    fetched_at: Optional[_dt.date] = None
