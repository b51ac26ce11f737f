# src/main.py - v1
"""CLI entry point: workers, job submission, progress and cost reports.

Usage:
    manuscriptai worker {editorial,assets}
    manuscriptai submit <manuscriptKey> [--genre G] [--style-guide S]
    manuscriptai assets <reportId> [--genre G] [--author-json F] [--series-json F]
    manuscriptai status <reportId> [--assets]
    manuscriptai costs [--by agent|group] [--manuscript ID]
    manuscriptai serve [--host H] [--port P] [--with-workers]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any

from manuscriptai.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from manuscriptai.config.settings import ConfigurationError, load_settings
    from manuscriptai.logging.logger import setup_logging

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="manuscriptai",
        description=f"manuscriptai v{__version__} - Manuscript analysis pipeline",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- worker ---
    p_worker = subparsers.add_parser("worker", help="Consume a job queue")
    p_worker.add_argument(
        "queue", choices=["editorial", "assets"],
        help="Queue to consume",
    )
    p_worker.set_defaults(func=_cmd_worker)

    # --- submit ---
    p_submit = subparsers.add_parser("submit", help="Submit an editorial analysis")
    p_submit.add_argument("manuscript_key", help="Object key of the uploaded manuscript")
    p_submit.add_argument("--genre", default="general")
    p_submit.add_argument(
        "--style-guide", default="chicago",
        help="chicago, ap or custom (default: chicago)",
    )
    p_submit.set_defaults(func=_cmd_submit)

    # --- assets ---
    p_assets = subparsers.add_parser("assets", help="Submit asset generation")
    p_assets.add_argument("report_id")
    p_assets.add_argument("--genre", default="general")
    p_assets.add_argument(
        "--author-json", type=Path, default=None,
        help="JSON file with author details",
    )
    p_assets.add_argument(
        "--series-json", type=Path, default=None,
        help="JSON file with series details",
    )
    p_assets.set_defaults(func=_cmd_assets)

    # --- status ---
    p_status = subparsers.add_parser("status", help="Show a progress record")
    p_status.add_argument("report_id")
    p_status.add_argument(
        "--assets", action="store_true",
        help="Show asset progress instead of editorial progress",
    )
    p_status.set_defaults(func=_cmd_status)

    # --- costs ---
    p_costs = subparsers.add_parser("costs", help="Summarise recorded LLM costs")
    p_costs.add_argument(
        "--by", choices=["agent", "group"], default="agent",
        help="Group by agent or operation group (default: agent)",
    )
    p_costs.add_argument("--manuscript", default=None, help="Only this manuscript id")
    p_costs.set_defaults(func=_cmd_costs)

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument(
        "--with-workers", action="store_true",
        help="Also consume both queues in this process",
    )
    p_serve.set_defaults(func=_cmd_serve)

    return parser


async def _cmd_worker(args: argparse.Namespace, settings: Any) -> int:
    """Consume one queue until SIGINT/SIGTERM."""
    from manuscriptai.pipeline.services import build_services

    services = build_services(settings)
    consumer = (
        services.editorial_consumer()
        if args.queue == "editorial"
        else services.asset_consumer()
    )
    stop = _stop_event()
    await consumer.run(stop)
    return 0


async def _cmd_submit(args: argparse.Namespace, settings: Any) -> int:
    from manuscriptai.api.models import EditorialRequest
    from manuscriptai.pipeline.services import build_services

    services = build_services(settings)
    report_id = await services.submission.submit_editorial(
        EditorialRequest(
            manuscript_key=args.manuscript_key,
            genre=args.genre,
            style_guide=args.style_guide,
        )
    )
    print(report_id)
    return 0


async def _cmd_assets(args: argparse.Namespace, settings: Any) -> int:
    from manuscriptai.api.models import AssetRequest
    from manuscriptai.core.errors import MissingPrerequisite, UnknownReportId
    from manuscriptai.pipeline.services import build_services

    services = build_services(settings)
    request = AssetRequest(
        report_id=args.report_id,
        genre=args.genre,
        author_data=_read_json(args.author_json),
        series_data=_read_json(args.series_json),
    )
    try:
        await services.submission.submit_assets(request)
    except (UnknownReportId, MissingPrerequisite) as exc:
        logger.error("%s", exc)
        return 1
    print(f"Asset generation queued for {args.report_id}")
    return 0


async def _cmd_status(args: argparse.Namespace, settings: Any) -> int:
    from manuscriptai.pipeline.services import build_services

    services = build_services(settings)
    if args.assets:
        record = await services.progress.get_assets(args.report_id)
    else:
        record = await services.progress.get_editorial(args.report_id)
    if record is None:
        print(json.dumps({"status": "not_started"}))
        return 1
    print(json.dumps(record.to_json_dict(), indent=2))
    return 0


async def _cmd_costs(args: argparse.Namespace, settings: Any) -> int:
    from manuscriptai.tracking.aggregator import (
        aggregate_by_agent,
        aggregate_by_operation_group,
        filter_by_manuscript,
    )
    from manuscriptai.tracking.cost_recorder import create_cost_recorder

    records = await create_cost_recorder(settings).sink.read_all()
    if args.manuscript:
        records = filter_by_manuscript(records, args.manuscript)
    summaries = (
        aggregate_by_agent(records)
        if args.by == "agent"
        else aggregate_by_operation_group(records)
    )

    if not summaries:
        print("No cost records.")
        return 0

    print(f"\n{'Key':<28} {'Calls':>6} {'Input':>10} {'Output':>10} {'USD':>10}")
    for key, s in sorted(summaries.items()):
        print(
            f"{key:<28} {s.total_calls:>6} {s.total_input_tokens:>10} "
            f"{s.total_output_tokens:>10} {s.total_cost_usd:>10.4f}"
        )
    total = sum(s.total_cost_usd for s in summaries.values())
    print(f"\nTotal: ${total:.4f} over {len(records)} call(s)")
    return 0


async def _cmd_serve(args: argparse.Namespace, settings: Any) -> int:
    """Run uvicorn, optionally with both queue consumers alongside."""
    import uvicorn

    from manuscriptai.api.http import create_app
    from manuscriptai.pipeline.services import build_services

    services = build_services(settings)
    config = uvicorn.Config(
        create_app(services),
        host=args.host or settings.http_host,
        port=args.port or settings.http_port,
        log_config=None,
    )
    server = uvicorn.Server(config)

    if not args.with_workers:
        await server.serve()
        return 0

    stop = asyncio.Event()
    workers = [
        asyncio.create_task(services.editorial_consumer().run(stop)),
        asyncio.create_task(services.asset_consumer().run(stop)),
    ]
    try:
        await server.serve()
    finally:
        stop.set()
        await asyncio.gather(*workers)
    return 0


def _stop_event() -> asyncio.Event:
    """Event set on SIGINT or SIGTERM."""
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            logger.debug("Signal handlers unavailable on this platform")
    return stop


def _read_json(path: Path | None) -> dict[str, Any]:
    if path is None:
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


if __name__ == "__main__":
    sys.exit(main())
