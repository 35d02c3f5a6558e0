#!/usr/bin/env python3
"""
Main entry point for the short-link registry.

Usage:
    shortlinks shorten <url> [<url> ...] [--row URL [VALIDITY [CODE]]]
    shortlinks visit <short_code>
    shortlinks list [--json]
    shortlinks stats
    shortlinks logs [--limit N]

Environment variables:
    SHORTLINKS_STORE_BACKEND - memory, file or redis
    SHORTLINKS_STORE_PATH - JSON file for the file backend
    SHORTLINKS_REDIS_URL - Redis connection URL for the redis backend
    SHORTLINKS_BASE_URL - Base URL short links are displayed under
    SHORTLINKS_LOG_LEVEL - Logging level
"""

import asyncio
import logging
import sys
from typing import Optional, Sequence, Tuple

from config import Config, load_config
from console_app import LinkShortenerCLI, build_parser
from shortlinks.clock import SystemClock
from shortlinks.common.logging_config import setup_logging
from shortlinks.errors import StorageError
from shortlinks.events import CompositeEventSink, LoggingEventSink, StoredEventSink
from shortlinks.registry import LinkRegistry
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage import JsonFileBackend, KeyValueBackend, MemoryBackend, RedisBackend
from shortlinks.store import LinkStore


def build_backend(config: Config, logger: logging.Logger) -> KeyValueBackend:
    """Create the persistence backend selected by configuration."""
    if config.store_backend == "memory":
        return MemoryBackend()
    if config.store_backend == "redis":
        if not config.redis_url:
            raise ValueError("SHORTLINKS_REDIS_URL is required for the redis backend")
        logger.info(f"Using Redis at {config.redis_url}")
        return RedisBackend(redis_url=config.redis_url, logger=logger)

    logger.info(f"Using JSON store at {config.store_path}")
    return JsonFileBackend(config.store_path, logger=logger)


async def build_registry(
    config: Config,
    logger: logging.Logger,
    backend: Optional[KeyValueBackend] = None,
) -> Tuple[LinkRegistry, Optional[StoredEventSink]]:
    """Wire backend, store, generator and event sinks into a registry.

    Args:
        config: Configuration instance
        logger: Logger shared by all components
        backend: Backend to use instead of the configured one

    Returns:
        The registry and the stored event sink (None when events are not stored)
    """
    backend = backend or build_backend(config, logger)
    await backend.connect()

    event_log = None
    events = LoggingEventSink(logger.getChild("events"))
    if config.store_events:
        event_log = StoredEventSink(backend, key=config.events_key, logger=logger)
        events = CompositeEventSink(events, event_log)

    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        default_validity=config.default_validity_minutes,
    )
    registry = LinkRegistry(
        store=LinkStore(backend, key=config.links_key, logger=logger),
        short_code_generator=generator,
        clock=SystemClock(),
        events=events,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )
    return registry, event_log


async def run(argv: Optional[Sequence[str]] = None, config: Optional[Config] = None) -> int:
    """Parse arguments, run one command and release resources."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = config or load_config()
    if args.store:
        config = config.model_copy(update={"store_backend": "file", "store_path": args.store})

    logger = setup_logging(
        level="DEBUG" if args.verbose else config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    try:
        registry, event_log = await build_registry(config, logger)
    except (ValueError, StorageError) as e:
        logger.error(f"Startup failed: {e}")
        return 1

    cli = LinkShortenerCLI(
        registry=registry,
        base_url=config.base_url,
        max_batch_size=config.max_batch_size,
        event_log=event_log,
    )

    try:
        return await cli.run(args)
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        return 1
    finally:
        await registry.close()


def main() -> None:
    """Main entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
