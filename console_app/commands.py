"""Command-line interface for the short-link registry."""

import argparse
import json
import sys
from typing import List, Optional, Sequence, TextIO

from shortlinks.errors import RedirectError, RegistryError
from shortlinks.events import StoredEventSink
from shortlinks.registry import LinkRegistry
from shortlinks.schemas import LinkRequest

from .formatting import render_events, render_links
from .views import EventView, LinkView, StatisticsView

EPILOG = """
Examples:
  # Shorten up to five URLs at once
  %(prog)s shorten https://example.com/long/url https://github.com/user/repo

  # Shorten with validity (minutes) and a custom code
  %(prog)s shorten --row https://example.com/long/url 120 mylink

  # Follow a short code (counts a visit)
  %(prog)s visit mylink

  # Show live links and statistics
  %(prog)s list
  %(prog)s stats

  # Show the event log
  %(prog)s logs --limit 20
"""


class UsageError(Exception):
    """Command line input that cannot be turned into link requests."""


def build_requests(
    urls: Sequence[str],
    rows: Optional[Sequence[Sequence[str]]],
    max_batch_size: int,
) -> List[LinkRequest]:
    """Turn positional URLs and ``--row`` groups into link requests.

    Args:
        urls: Bare URLs (default validity, random code)
        rows: Groups of URL, optional validity and optional custom code
        max_batch_size: Largest batch accepted

    Returns:
        Link requests in the order given (positional URLs first)

    Raises:
        UsageError: If a row has too many fields or the batch is too large
    """
    requests = [LinkRequest(url=url) for url in urls]

    for fields in rows or []:
        if len(fields) > 3:
            raise UsageError(f"--row takes URL [VALIDITY [CODE]], got {len(fields)} values")
        url, validity, code = (list(fields) + [None, None])[:3]
        requests.append(LinkRequest(url=url, validity_minutes=validity, custom_code=code))

    if not requests:
        raise UsageError("Nothing to shorten: give at least one URL")
    if len(requests) > max_batch_size:
        raise UsageError(f"At most {max_batch_size} URLs can be shortened at once")

    return requests


class LinkShortenerCLI:
    """Command-line interface over a link registry."""

    def __init__(
        self,
        registry: LinkRegistry,
        base_url: str,
        max_batch_size: int = 5,
        event_log: Optional[StoredEventSink] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        """Initialize CLI.

        Args:
            registry: Registry the commands act on
            base_url: Base URL short links are displayed under
            max_batch_size: Largest batch ``shorten`` accepts
            event_log: Stored event sink read by ``logs`` (None disables it)
            out: Stream for results (stdout if not given)
            err: Stream for failures (stderr if not given)
        """
        self.registry = registry
        self.base_url = base_url
        self.max_batch_size = max_batch_size
        self.event_log = event_log
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _print(self, payload: dict) -> None:
        print(json.dumps(payload, indent=2), file=self.out)

    def _fail(self, error: str, **extra) -> int:
        print(json.dumps({"success": False, "error": error, **extra}, indent=2), file=self.err)
        return 1

    def _view(self, record) -> LinkView:
        return LinkView.from_record(record, self.base_url, self.registry.clock.now())

    async def shorten(self, urls: Sequence[str], rows: Optional[Sequence[Sequence[str]]] = None) -> int:
        """Shorten a batch of URLs."""
        try:
            requests = build_requests(urls, rows, self.max_batch_size)
        except UsageError as e:
            return self._fail(str(e))

        try:
            records = await self.registry.create_batch(requests)
        except RegistryError as e:
            return self._fail(e.message, kind=e.kind, row=e.row)

        self._print({
            "success": True,
            "message": f"{len(records)} link(s) created",
            "links": [self._view(r).model_dump(mode="json") for r in records],
        })
        return 0

    async def visit(self, short_code: str) -> int:
        """Resolve a short code the way a redirect would."""
        try:
            original_url = await self.registry.resolve(short_code)
        except RedirectError as e:
            # Visitors only ever see the generic outcome; the kind is kept for logs
            return self._fail("Link unavailable, back to start", kind=e.kind, short_code=short_code)

        self._print({
            "success": True,
            "short_code": short_code,
            "original_url": original_url,
        })
        return 0

    async def list_links(self, as_json: bool = False) -> int:
        """List live links, newest first."""
        links = [self._view(r) for r in await self.registry.list_all()]

        if as_json:
            self._print({
                "success": True,
                "count": len(links),
                "links": [link.model_dump(mode="json") for link in links],
            })
        else:
            print(render_links(links), file=self.out)
        return 0

    async def stats(self) -> int:
        """Show registry statistics."""
        stats = StatisticsView(**await self.registry.get_statistics())
        self._print({"success": True, "statistics": stats.model_dump()})
        return 0 if stats.healthy else 1

    async def logs(self, limit: int = 50, as_json: bool = False) -> int:
        """Show recently stored events."""
        if self.event_log is None:
            return self._fail("Event storage is disabled (set SHORTLINKS_STORE_EVENTS=1)")

        events = [EventView(**e) for e in await self.event_log.recent(limit)]

        if as_json:
            self._print({"success": True, "events": [e.model_dump() for e in events]})
        else:
            print(render_events(events), file=self.out)
        return 0

    async def run(self, args: argparse.Namespace) -> int:
        """Dispatch parsed arguments to a command."""
        if args.command == "shorten":
            return await self.shorten(args.urls, args.row)
        elif args.command == "visit":
            return await self.visit(args.short_code)
        elif args.command == "list":
            return await self.list_links(as_json=args.json)
        elif args.command == "stats":
            return await self.stats()
        elif args.command == "logs":
            return await self.logs(limit=args.limit, as_json=args.json)
        return self._fail(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``shortlinks`` command."""
    parser = argparse.ArgumentParser(
        prog="shortlinks",
        description="Short-link registry CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "--store",
        help="JSON file to keep links in (overrides SHORTLINKS_STORE_PATH)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten up to five URLs")
    shorten_parser.add_argument("urls", nargs="*", help="URLs to shorten with default settings")
    shorten_parser.add_argument(
        "-r", "--row",
        nargs="+",
        action="append",
        metavar="FIELD",
        help="URL [VALIDITY_MINUTES [CUSTOM_CODE]]; repeat for more rows",
    )

    visit_parser = subparsers.add_parser("visit", help="Resolve a short code and count the visit")
    visit_parser.add_argument("short_code", help="Short code to follow")

    list_parser = subparsers.add_parser("list", help="List live links")
    list_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    subparsers.add_parser("stats", help="Show statistics")

    logs_parser = subparsers.add_parser("logs", help="Show stored events")
    logs_parser.add_argument("--limit", type=int, default=50, help="Maximum number to return")
    logs_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    return parser
