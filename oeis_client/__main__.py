"""Command-line access to the OEIS.

Usage:
    python -m oeis_client search 1 2 3 5 8
    python -m oeis_client search --keyword core --author Sloane
    python -m oeis_client bfile A000045
    python -m oeis_client xrefs A000045
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from .client import create_client
from .config import load_config
from .models import MoreTerms, Multi, NoMatch, OEISSequence, Partial, SearchError, Single
from .search import fetch_more_terms, fetch_xrefs, search

logger = logging.getLogger("oeis_client")


def _print_records(records: Iterable[OEISSequence]) -> None:
    for record in records:
        print(f"{record.id}  {record.name or ''}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oeis_client", description="Query the OEIS")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--env-file", default=None, help="Load OEIS_* settings from a .env file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search by terms, identifier or text")
    p_search.add_argument("terms", nargs="*", help="Identifier, integers or free text")
    p_search.add_argument("--keyword")
    p_search.add_argument("--author")
    p_search.add_argument("--name")
    p_search.add_argument("--start", type=int)
    p_search.add_argument("--no-truncate", action="store_true", help="Send every term")
    p_search.add_argument("--ignore-sign", action="store_true", help="Match terms up to sign")

    p_bfile = sub.add_parser("bfile", help="Print the extended term list of a sequence")
    p_bfile.add_argument("id")

    p_xrefs = sub.add_parser("xrefs", help="List the sequences a sequence refers to")
    p_xrefs.add_argument("id")
    p_xrefs.add_argument("--max-concurrency", type=int, default=None)
    return parser


def _search_input(terms: list[str]) -> Optional[str]:
    if not terms:
        return None
    return " ".join(terms)


def _lookup(identifier: str, client, config) -> Optional[OEISSequence]:
    outcome = search(identifier, client=client, config=config)
    if isinstance(outcome, Single):
        return outcome.sequence
    if isinstance(outcome, SearchError):
        logger.error("%s: %s", outcome.category.value, outcome.message)
    else:
        logger.error("No single sequence found for %s", identifier)
    return None


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = load_config(env_path=args.env_file)
    with create_client(config) as client:
        if args.command == "search":
            outcome = search(
                _search_input(args.terms),
                client=client,
                config=config,
                keyword=args.keyword,
                author=args.author,
                name=args.name,
                start=args.start,
                may_truncate=not args.no_truncate,
                respect_sign=not args.ignore_sign,
            )
            if isinstance(outcome, Single):
                _print_records([outcome.sequence])
            elif isinstance(outcome, (Multi, Partial)):
                _print_records(outcome.sequences)
            elif isinstance(outcome, NoMatch):
                print(outcome.message)
            else:
                logger.error("%s: %s", outcome.category.value, outcome.message)
                return 1
            return 0

        record = _lookup(args.id, client, config)
        if record is None:
            return 1

        if args.command == "bfile":
            result = fetch_more_terms(record, client=client, config=config)
            if not isinstance(result, MoreTerms):
                logger.error("%s: %s", result.category.value, result.message)
                return 1
            print(", ".join(str(term) for term in result.sequence))
            return 0

        related = fetch_xrefs(
            record,
            client=client,
            config=config,
            max_concurrency=args.max_concurrency,
        )
        if isinstance(related, SearchError):
            logger.error("%s: %s", related.category.value, related.message)
            return 1
        _print_records(related)
        return 0


if __name__ == "__main__":
    sys.exit(main())
