"""Report page models and the tagged result of a page fetch."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ReportPage(BaseModel):
    """
    One page of a /report/ listing.

    Attributes:
        total: Number of records matching the query across all pages, as reported by the portal.
        graph: The records of this page (JSON key "@graph"). Empty on the terminal page.
    """
    model_config = ConfigDict(populate_by_name=True)

    total: int | None = None
    graph: list[dict] = Field(alias="@graph")

    @property
    def is_terminal(self) -> bool:
        return len(self.graph) == 0


class PageSuccess(BaseModel):
    ok: Literal[True] = True
    page: ReportPage


class PageFailure(BaseModel):
    """
    A page fetch that failed at the transport or response level.
    """
    ok: Literal[False] = False
    url: str
    error: str
    status_code: int | None = None


PageResult = PageSuccess | PageFailure
