"""Report runner entry point.

Lists records of one type from a portal and prints those whose collection at the
parent of a dotted field path has a length inside the requested range.

Usage:
    python -m report.report_runner -k prod -t Experiment -p files.@id -g 2 -l 10
"""

import argparse
import asyncio
import math

from portal.clients.portal.PortalClientManager import PortalClientManager
from portal.helper.HelperConfig import HelperConfig
from portal.helper.KeyfileHelper import get_keypair
from portal.logging.logging_setup import setup_logging
from portal.models.report import LengthFilter, ReportMatch
from report.services.ReportService import ReportService

VERSION = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portal-report",
        description="Report records whose array field length lies within a range.",
    )
    parser.add_argument("-V", "--version", action="version", version=VERSION)
    parser.add_argument("-k", "--key", default="localhost", help="key of keyfile")
    parser.add_argument("-f", "--keyfile", default="keypairs.json", help="keyfile name/path")
    parser.add_argument("-t", "--type", dest="record_type", default="Experiment", help="type of objects to search")
    parser.add_argument("-p", "--property", default="files.@id", help="property to search")
    parser.add_argument("-a", "--filter", default="", help="additional filters")
    parser.add_argument("-g", "--greater", type=int, default=1, help="filter to array lengths >= this")
    parser.add_argument("-l", "--less", type=float, default=math.inf, help="filter to array lengths <= this")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug flag")
    return parser


async def main(argv: list[str] | None = None) -> list[ReportMatch]:
    """Run one report and print its matches."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(debug=args.debug)
    config = HelperConfig(logger=logger)

    keypair = get_keypair(args.keyfile, args.key)
    portal_client = PortalClientManager(helper_config=config).get_client(keypair)
    report_service = ReportService(helper_config=config, portal_client=portal_client)

    logger.info("Fetching %s records from %s", args.record_type, keypair.server, color="cyan")
    try:
        await portal_client.boot()
        results = await report_service.do_fetch_report(
            record_type=args.record_type,
            field=args.property,
            length_filter=LengthFilter(minimum=args.greater, maximum=args.less),
            filters=args.filter,
        )
    finally:
        await portal_client.close()

    print(f"\n{len(results)} results")
    for result in results:
        print(result)
    return results


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
