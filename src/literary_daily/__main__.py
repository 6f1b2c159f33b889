# ABOUTME: CLI entry point for the Literary Daily content service.
# ABOUTME: Provides subcommands: generate, show, status, serve.

import argparse
import asyncio
import logging
import sys

import structlog

from literary_daily.config import get_settings


def configure_logging() -> None:
    """Configure structlog for console or JSON output."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )
    else:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )


async def _run_with_service(action):
    """Run an async action against a DailyContentService, then release the engine."""
    from literary_daily.db.repository import DailyContentRepository
    from literary_daily.db.session import close_db, get_session, init_db
    from literary_daily.services.daily_content_service import DailyContentService

    try:
        await init_db()
        async with get_session() as session:
            service = DailyContentService(DailyContentRepository(session))
            return await action(service)
    finally:
        await close_db()


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate today's content.

    With --dry-run the bundle is printed and nothing is stored.
    """
    from literary_daily.ai.orchestrator import generate_daily_content
    from literary_daily.config import require_ai_config

    log = structlog.get_logger()
    log.info("cmd_generate_start", dry_run=args.dry_run)

    try:
        if args.dry_run:
            settings = get_settings()
            pair = asyncio.run(generate_daily_content(require_ai_config(settings), settings))
            print(pair.today.model_dump_json(indent=2, exclude_none=True))
            log.info("cmd_generate_dry_run_complete", date=pair.today.date.isoformat())
            return 0

        result = asyncio.run(_run_with_service(lambda service: service.ensure_today()))
        log.info("cmd_generate_complete", date=result.date.isoformat(), created=result.created)
        return 0

    except Exception:
        log.exception("cmd_generate_failed")
        return 1


def cmd_show(_args: argparse.Namespace) -> int:
    """Print today's and yesterday's content as served by the API."""
    log = structlog.get_logger()

    try:
        pair = asyncio.run(_run_with_service(lambda service: service.get_daily_pair()))
    except Exception:
        log.exception("cmd_show_failed")
        return 1

    print(pair.model_dump_json(indent=2, exclude_none=True))
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """List the dates that have stored content."""
    log = structlog.get_logger()

    try:
        dates = asyncio.run(
            _run_with_service(lambda service: service.repository.list_dates(args.limit))
        )
    except Exception:
        log.exception("cmd_status_failed")
        return 1

    print("\n=== Literary Daily Status ===\n")
    print(f"Stored days: {len(dates)}")
    for day in dates:
        print(f"  - {day.isoformat()}")
    print()
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "literary_daily.web.app:app",
        host=args.host or settings.app_host,
        port=args.port or settings.app_port,
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="literary_daily",
        description="Literary Daily - daily literary review, concept and exam question",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate and store today's content if missing",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate and print without touching the database",
    )

    subparsers.add_parser(
        "show",
        help="Print today's and yesterday's content",
    )

    status_parser = subparsers.add_parser(
        "status",
        help="List dates with stored content",
    )
    status_parser.add_argument(
        "--limit",
        type=int,
        default=30,
        help="Number of most recent dates to list (default: 30)",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the web API",
    )
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    return parser


def main() -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "generate": cmd_generate,
        "show": cmd_show,
        "status": cmd_status,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
