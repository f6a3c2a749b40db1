from unittest.mock import AsyncMock, MagicMock

import pytest

from carts.services.CartService import CartService, make_cart_name
from portal.clients.portal.models.Cart import CartFailure, CartSuccess


@pytest.fixture
def portal_client():
    client = MagicMock()
    client.do_put_cart = AsyncMock(side_effect=lambda name: CartSuccess(name=name, cart_id=f"/carts/{name[-1]}/"))
    return client


class TestCartService:
    def test_cart_name(self):
        assert make_cart_name("Cart", 3) == "Cart 3"

    @pytest.mark.asyncio
    async def test_creates_carts_in_order(self, helper_config, portal_client):
        service = CartService(helper_config=helper_config, portal_client=portal_client, show_progress=False)

        batch = await service.do_create_carts(count=3, prefix="Test cart")

        names = [call.kwargs["name"] for call in portal_client.do_put_cart.await_args_list]
        assert names == ["Test cart 1", "Test cart 2", "Test cart 3"]
        assert [cart.name for cart in batch.created] == names
        assert batch.failed == []
        assert batch.requested == 3

    @pytest.mark.asyncio
    async def test_start_number(self, helper_config, portal_client):
        service = CartService(helper_config=helper_config, portal_client=portal_client, show_progress=False)

        batch = await service.do_create_carts(count=2, start=7)

        assert [cart.name for cart in batch.created] == ["Cart 7", "Cart 8"]

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_the_batch(self, helper_config):
        client = MagicMock()
        client.do_put_cart = AsyncMock(
            side_effect=[
                CartSuccess(name="Cart 1"),
                CartFailure(name="Cart 2", error="forbidden", status_code=403),
                CartSuccess(name="Cart 3"),
            ]
        )
        service = CartService(helper_config=helper_config, portal_client=client, show_progress=False)

        batch = await service.do_create_carts(count=3)

        assert client.do_put_cart.await_count == 3
        assert [cart.name for cart in batch.created] == ["Cart 1", "Cart 3"]
        assert [cart.name for cart in batch.failed] == ["Cart 2"]

    @pytest.mark.asyncio
    async def test_zero_count_sends_nothing(self, helper_config, portal_client):
        service = CartService(helper_config=helper_config, portal_client=portal_client, show_progress=False)

        batch = await service.do_create_carts(count=0)

        assert batch.requested == 0
        portal_client.do_put_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_negative_count_is_rejected(self, helper_config, portal_client):
        service = CartService(helper_config=helper_config, portal_client=portal_client, show_progress=False)

        with pytest.raises(ValueError):
            await service.do_create_carts(count=-1)
