"""
CLI for direct-context UPC lookups (development).

Usage:
    python -m upclookup 012345678905
    python -m upclookup "0 12345 67890 5" --proxy http://127.0.0.1:8000 --go-upc-key KEY

Exit codes: 0 found, 1 not found, 2 invalid barcode.
"""

import argparse
import asyncio
import logging
import sys

from upclookup.core.context import LookupContext
from upclookup.core.errors import InvalidArgumentError
from upclookup.core.lookup import lookup_upc


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="upclookup",
        description="Resolve a UPC/EAN barcode to product metadata",
    )

    parser.add_argument("upc", help="Barcode, any formatting (non-digits are stripped)")

    parser.add_argument(
        "--proxy",
        metavar="URL",
        help="Route Go-UPC / UPCItemDB through the dev forwarding proxy at URL",
    )

    parser.add_argument("--go-upc-key", help="Go-UPC API key (default: GO_UPC_API_KEY)")
    parser.add_argument("--upcitemdb-key", help="UPCItemDB API key (default: UPCITEMDB_API_KEY)")

    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-provider timeout in seconds (default: PROVIDER_TIMEOUT_SECONDS)",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Log provider activity")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.proxy:
        overrides["proxy_base_url"] = args.proxy
    if args.go_upc_key is not None:
        overrides["go_upc_key"] = args.go_upc_key
    if args.upcitemdb_key is not None:
        overrides["upcitemdb_key"] = args.upcitemdb_key
    if args.timeout is not None:
        overrides["timeout"] = args.timeout

    context = LookupContext.from_settings(**overrides)

    try:
        record = asyncio.run(lookup_upc(args.upc, context))
    except InvalidArgumentError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    if record is None:
        print("No product found for that UPC code", file=sys.stderr)
        return 1

    print(record.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
