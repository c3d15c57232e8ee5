"""Command-line host for the auction.

Each invocation applies one operation on behalf of ``--caller`` inside a
single SQLite write transaction (reload snapshot, operate, save), and prints
the auction record as JSON.  Log lines go to stderr.

Usage::

    auction start-selling --caller alice --product Book --price 10
    auction offer --caller bob --price 20
    auction accept --caller alice
    auction pay --caller bob --amount 20
    auction balance --account alice
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from auction.app import Services, configure_logging, initialize_services
from auction.config import get_settings
from auction.domain.errors import AuctionError

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for auction operations.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Drive a single-listing auction")
    parser.add_argument(
        "--db",
        type=str,
        help="Path to the auction database (default: AUCTION_DB_PATH or data/auction.db)",
    )
    parser.add_argument(
        "--auction-id",
        type=str,
        help="Auction instance to operate on (default: AUCTION_AUCTION_ID or 'default')",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    start = sub.add_parser("start-selling", help="List a product")
    start.add_argument("--caller", required=True)
    start.add_argument("--product", required=True)
    start.add_argument("--price", type=int, required=True, help="Asking price")

    offer = sub.add_parser("offer", help="Bid on the current listing")
    offer.add_argument("--caller", required=True)
    offer.add_argument("--price", type=int, required=True)

    accept = sub.add_parser("accept", help="Accept the highest offer (seller only)")
    accept.add_argument("--caller", required=True)

    pay = sub.add_parser("pay", help="Pay for an accepted offer (winner only)")
    pay.add_argument("--caller", required=True)
    pay.add_argument("--amount", type=int, required=True)

    sub.add_parser("show", help="Print the current auction record")

    balance = sub.add_parser("balance", help="Print an account's ledger balance")
    balance.add_argument("--account", required=True)

    return parser


def run_command(args: argparse.Namespace, services: Services) -> str:
    """Apply the parsed command and return the text to print.

    Raises:
        AuctionError: If the machine rejects the operation.
        pydantic.ValidationError: If an argument is malformed.
    """
    if args.command == "balance":
        return json.dumps(
            {"account": args.account, "balance": services.ledger.balance(args.account)}
        )
    if args.command == "show":
        return services.machine.auction.model_dump_json(indent=2)

    with services.transaction() as machine:
        if args.command == "start-selling":
            machine.start_selling(args.caller, args.product, args.price)
        elif args.command == "offer":
            machine.offer(args.caller, args.price)
        elif args.command == "accept":
            machine.accept_offer(args.caller)
        elif args.command == "pay":
            machine.pay(args.caller, args.amount)

    return services.machine.auction.model_dump_json(indent=2)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, apply one operation, and print the result.

    Returns:
        ``0`` on success, ``1`` if the auction rejected the operation, ``2``
        if an argument failed validation.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.db:
        overrides["db_path"] = Path(args.db)
    if args.auction_id:
        overrides["auction_id"] = args.auction_id
    settings = get_settings().model_copy(update=overrides)

    configure_logging(production=settings.production, file=sys.stderr)
    services = initialize_services(settings)

    try:
        print(run_command(args, services))
    except AuctionError as exc:
        print(f"error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return EXIT_REJECTED
    except ValidationError as exc:
        print(f"error: invalid input: {exc.errors()[0]['msg']}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    finally:
        services.close()

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
