"""
Convert an amount between two currencies from the command line.

Usage:
    fxrates USD PLN 10
    fxrates usd eur 250 --ttl 30
"""

import argparse
import logging
import sys

from fxrates.core.config import settings
from fxrates.core.exceptions import InvalidArgument, RateFetchFailed
from fxrates.core.wiring import build_conversion_service

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert an amount between currencies")
    parser.add_argument("from_currency", help="Source currency code, e.g. USD")
    parser.add_argument("to_currency", help="Target currency code, e.g. PLN")
    parser.add_argument("amount", type=float, help="Amount to convert")
    parser.add_argument(
        "--ttl",
        type=float,
        default=None,
        help=f"Rate cache TTL in seconds (default: {settings.rate_cache_ttl_seconds})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    cfg = settings
    if args.ttl is not None:
        cfg = settings.model_copy(update={"rate_cache_ttl_seconds": args.ttl})

    try:
        service = build_conversion_service(cfg)
    except InvalidArgument as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    try:
        result = service.convert(args.from_currency, args.to_currency, args.amount)
    except InvalidArgument as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except RateFetchFailed as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        close = getattr(service.loader, "close", None)
        if close is not None:
            close()

    print(f"{args.amount} {args.from_currency.upper()} = {result} {args.to_currency.upper()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
