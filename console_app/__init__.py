"""Command-line presentation for the short-link registry."""

from .commands import LinkShortenerCLI, build_parser, build_requests, UsageError

__all__ = ["LinkShortenerCLI", "build_parser", "build_requests", "UsageError"]
