"""Report filter models, independent of the portal backend."""

import math

from pydantic import BaseModel


class LengthFilter(BaseModel):
    """
    Inclusive bounds on the length of the collection found at a field path.

    The defaults admit every record with at least one entry.
    """
    minimum: int = 1
    maximum: float = math.inf

    def contains(self, length: int) -> bool:
        return self.minimum <= length <= self.maximum


class ReportMatch(BaseModel):
    """
    One record whose measured field length passed the LengthFilter.
    """
    record_id: str
    length: int

    def __str__(self) -> str:
        return f"{self.record_id} - {self.length}"
