"""Bulk cart creation service."""

from tqdm import tqdm

from portal.clients.portal.PortalClientInterface import PortalClientInterface
from portal.clients.portal.models.Cart import CartBatchResult, CartFailure
from portal.helper.HelperConfig import HelperConfig


def make_cart_name(prefix: str, number: int) -> str:
    return f"{prefix} {number}"


class CartService:
    """Creates numbered carts one PUT at a time."""

    def __init__(
        self,
        helper_config: HelperConfig,
        portal_client: PortalClientInterface,
        show_progress: bool = True,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._portal_client = portal_client
        self._show_progress = show_progress

    async def do_create_carts(self, count: int, prefix: str = "Cart", start: int = 1) -> CartBatchResult:
        """Create `count` carts named "<prefix> <n>" for n = start … start + count - 1.

        A failed PUT is logged and recorded; the remaining carts are still created.

        Args:
            count (int): Number of carts to create.
            prefix (str): Name prefix.
            start (int): Number of the first cart.

        Returns:
            CartBatchResult: Created and failed carts in request order.
        """
        if count < 0:
            raise ValueError(f"Cart count must not be negative, got {count}")

        batch = CartBatchResult()
        with tqdm(total=count, disable=not self._show_progress, unit="cart") as progress:
            for number in range(start, start + count):
                name = make_cart_name(prefix, number)
                result = await self._portal_client.do_put_cart(name=name)
                if isinstance(result, CartFailure):
                    batch.failed.append(result)
                else:
                    batch.created.append(result)
                progress.update(1)

        self.logging.info("Created %d of %d carts", len(batch.created), count)
        return batch
