"""Command line interface for building and querying static search indexes."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sbf_search.config import IndexConfig
from sbf_search.core.errors import SBFError
from sbf_search.search.index import build_search_index, dumps_index, loads_index, search
from sbf_search.search.page import render_page

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sbf-search",
        description="Build a client-side full-text search page from documents",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_cmd = subparsers.add_parser(
        "build",
        help="Build a search page from a JSON list of documents",
        description=(
            "INPUT is a JSON list of documents, each with 'url', 'title' and "
            "either 'body' or 'term_frequency'."
        ),
    )
    build_cmd.add_argument("input", type=Path, help="JSON file with the documents")
    build_cmd.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("search.html"),
        help="Output file (default: search.html)",
    )
    build_cmd.add_argument(
        "-f",
        "--false-positive-rate",
        type=float,
        default=0.01,
        help="Target false positive rate; lower means larger filters (default: 0.01)",
    )
    build_cmd.add_argument(
        "-w",
        "--width",
        type=int,
        default=4,
        help="Bits per counter; estimates are capped at 2^width - 1 (default: 4)",
    )
    build_cmd.add_argument(
        "--no-quantize",
        action="store_true",
        help="Use raw term counts instead of their rank across documents",
    )
    build_cmd.add_argument(
        "--template", type=Path, help="HTML template with UNIQUE_SEARCH_INDEX_PLACEHOLDER"
    )
    build_cmd.add_argument(
        "--index-only",
        action="store_true",
        help="Write the JSON search index instead of an HTML page",
    )

    query_cmd = subparsers.add_parser("query", help="Search a JSON search index")
    query_cmd.add_argument("index", type=Path, help="JSON file written by build --index-only")
    query_cmd.add_argument("words", nargs="+", help="Words to search for")
    return parser


def _build(args: argparse.Namespace) -> int:
    config = IndexConfig(
        false_positive_rate=args.false_positive_rate,
        width=args.width,
        quantize=not args.no_quantize,
    )
    documents = json.loads(args.input.read_text(encoding="utf-8"))
    if not isinstance(documents, list):
        logger.error(f"{args.input} must contain a JSON list of documents")
        return 1

    logger.info(f"Indexing {len(documents)} documents from {args.input}")
    items = build_search_index(documents, config)

    if args.index_only:
        output = dumps_index(items)
    else:
        template = args.template.read_text(encoding="utf-8") if args.template else None
        output = render_page(items, template)

    args.output.write_text(output, encoding="utf-8")
    logger.info(f"Wrote {args.output} ({len(output)} characters)")
    return 0


def _query(args: argparse.Namespace) -> int:
    items = loads_index(args.index.read_text(encoding="utf-8"))
    for result in search(items, " ".join(args.words)):
        print(f"{result['score']}\t{result['url']}\t{result['title']}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    handlers = {"build": _build, "query": _query}
    try:
        return handlers[args.command](args)
    except SBFError as e:
        logger.error(f"Invalid input: {e}")
    except json.JSONDecodeError as e:
        logger.error(f"Could not parse JSON: {e}")
    except OSError as e:
        logger.error(f"I/O error: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
