"""Command line entry point: query the wiki index or run the HTTP server."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import sys

import orjson
from rich.console import Console
from rich.table import Table

from wiki_search.config import Settings
from wiki_search.domain.search import SearchPage
from wiki_search.observability.logging import configure_logging
from wiki_search.search.search_index import SearchIndex
from wiki_search.service_layer.search_service import SearchService


logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a value >= 1, got {value}")
    return value


def _port(raw: str) -> int:
    value = _positive_int(raw)
    if value > 65535:
        raise argparse.ArgumentTypeError(f"expected a port <= 65535, got {value}")
    return value


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wiki-search", description="Search the StarMC wiki")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Run a query against the markdown corpus")
    search.add_argument("query", help="Query text (Latin words and/or Chinese)")
    search.add_argument("--page", type=_positive_int, default=1, help="1-based page number")
    search.add_argument("--page-size", type=_positive_int, default=None, help="Results per page")
    search.add_argument("--docs-dir", default=None, help="Markdown corpus root (default: DOCS_DIR)")
    search.add_argument("--format", choices=("json", "table"), default="json", help="Output format")

    serve = subparsers.add_parser("serve", help="Run the HTTP search server")
    serve.add_argument("--host", default=None, help="Bind host (default: HOST)")
    serve.add_argument("--port", type=_port, default=None, help="Bind port (default: PORT)")

    return parser


def _print_table(result: SearchPage, console: Console) -> None:
    table = Table(title=f"{result.total} matches (page {result.page})")
    table.add_column("#", justify="right")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Score", justify="right")
    offset = (result.page - 1) * result.page_size
    for rank, hit in enumerate(result.results, start=offset + 1):
        table.add_row(str(rank), hit.slug, hit.title, f"{hit.score:.4f}")
    console.print(table)


def run_search(args: argparse.Namespace, settings: Settings, *, console: Console | None = None) -> int:
    docs_dir = args.docs_dir or settings.docs_dir
    page_size = args.page_size or settings.default_page_size
    if page_size > settings.max_page_size:
        logger.error("--page-size %d exceeds MAX_PAGE_SIZE %d", page_size, settings.max_page_size)
        return 2

    service = SearchService(SearchIndex.from_directory(docs_dir, highlight_mode=settings.highlight_mode))
    result = service.search(args.query, args.page, page_size)

    if args.format == "table":
        _print_table(result, console or Console())
    else:
        sys.stdout.write(orjson.dumps(result.model_dump(), option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
    return 0


def run_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from wiki_search.app import create_app
    from wiki_search.observability.tracing import init_tracing

    host = args.host or settings.host
    port = args.port or settings.port
    init_tracing()
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        access_log=settings.access_log,
        log_config=None,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    # stdout carries the JSON result
    configure_logging(
        "warning" if args.command == "search" else settings.log_level,
        settings.log_json,
        access_log=settings.access_log,
        stream=sys.stderr,
    )

    if args.command == "search":
        return run_search(args, settings)
    return run_serve(args, settings)


if __name__ == "__main__":
    sys.exit(main())
