"""Cart models and the tagged result of a cart PUT."""

from typing import Literal

from pydantic import BaseModel


class CartSuccess(BaseModel):
    ok: Literal[True] = True
    name: str
    cart_id: str | None = None


class CartFailure(BaseModel):
    ok: Literal[False] = False
    name: str
    error: str
    status_code: int | None = None


CartResult = CartSuccess | CartFailure


class CartBatchResult(BaseModel):
    """
    Outcome of a bulk cart creation, in request order.
    """
    created: list[CartSuccess] = []
    failed: list[CartFailure] = []

    @property
    def requested(self) -> int:
        return len(self.created) + len(self.failed)
