"""Cart runner entry point.

Creates a batch of empty, numbered carts on a portal.

Usage:
    python -m carts.cart_runner -k prod -n 20 -p "Test cart"
"""

import argparse
import asyncio
import sys

from carts.services.CartService import CartService
from portal.clients.portal.PortalClientManager import PortalClientManager
from portal.clients.portal.models.Cart import CartBatchResult
from portal.helper.HelperConfig import HelperConfig
from portal.helper.KeyfileHelper import get_keypair
from portal.logging.logging_setup import setup_logging

VERSION = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portal-carts", description="Create numbered carts on a portal.")
    parser.add_argument("-V", "--version", action="version", version=VERSION)
    parser.add_argument("-k", "--key", default="localhost", help="key of keyfile")
    parser.add_argument("-f", "--keyfile", default="keypairs.json", help="keyfile name/path")
    parser.add_argument("-n", "--count", type=int, default=1, help="number of carts to create")
    parser.add_argument("-p", "--prefix", default="Cart", help="cart name prefix")
    parser.add_argument("-s", "--start", type=int, default=1, help="number of the first cart")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug flag")
    return parser


async def main(argv: list[str] | None = None) -> CartBatchResult:
    """Create the requested carts and print what happened."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(debug=args.debug)
    config = HelperConfig(logger=logger)

    keypair = get_keypair(args.keyfile, args.key)
    portal_client = PortalClientManager(helper_config=config).get_client(keypair)
    cart_service = CartService(helper_config=config, portal_client=portal_client)

    logger.info("Creating %d carts on %s", args.count, keypair.server, color="cyan")
    try:
        await portal_client.boot()
        batch = await cart_service.do_create_carts(count=args.count, prefix=args.prefix, start=args.start)
    finally:
        await portal_client.close()

    for cart in batch.created:
        print(f"{cart.name} - {cart.cart_id or 'created'}")
    for cart in batch.failed:
        logger.error("Cart '%s' was not created: %s", cart.name, cart.error)
    print(f"\n{len(batch.created)} of {batch.requested} carts created")
    return batch


def run() -> None:
    batch = asyncio.run(main())
    if batch.failed:
        sys.exit(1)


if __name__ == "__main__":
    run()
