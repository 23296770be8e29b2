"""CLI adapter refreshing prices, headlines and the shared snapshot.

Runs one refresh cycle, or with ``--watch`` keeps refreshing on the
configured interval until interrupted.
"""

import argparse
import asyncio

from asset_monitor.application.use_cases import PriceRefreshResult
from asset_monitor.domain.constants import REFRESH_INTERVAL_CHOICES
from asset_monitor.infrastructure.container import Services, build_services
from asset_monitor.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from asset_monitor.infrastructure.scheduler import AutoRefreshScheduler


async def refresh_cycle(
    services: Services,
    include_news: bool = True,
) -> PriceRefreshResult:
    """Refresh prices (and headlines), then sync plan timings.

    Nothing else runs when another cycle is still refreshing prices.

    Args:
        services: Wired use cases.
        include_news: Whether to refresh headlines too.

    Returns:
        PriceRefreshResult: Outcome of the price refresh.
    """
    result = await services.refresh_prices.execute()
    if result.skipped:
        return result
    news = []
    if include_news:
        news_result = await services.refresh_news.execute()
        news = news_result.items
    overview = services.overview.execute()
    symbols = []
    for plan in overview.active_plans:
        holding = overview.holding_for(plan.asset_id)
        if holding is not None and holding.asset.asset_type.is_quoted:
            symbols.append(holding.asset.symbol)
    timings = await services.timing.execute_many(symbols) if symbols else {}
    services.snapshot_sync.execute(news=news, timings=timings)
    return result


def _report(result: PriceRefreshResult) -> None:
    if result.skipped:
        print("A refresh is already running.")
        return
    if result.error_message:
        print(result.error_message)
    print(f"Refreshed {len(result.quotes)}/{len(result.requested)} prices.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Refresh portfolio prices and the widget snapshot",
    )
    parser.add_argument(
        "--no-news",
        action="store_true",
        help="Skip the headline refresh",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep refreshing on a fixed interval",
    )
    parser.add_argument(
        "--interval",
        type=int,
        choices=REFRESH_INTERVAL_CHOICES,
        help="Refresh interval in minutes (default from settings)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run one refresh cycle or keep refreshing on an interval."""
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    services = build_services()
    services.assets.housekeeping()
    include_news = not args.no_news

    def run_once() -> None:
        _report(asyncio.run(refresh_cycle(services, include_news)))

    get_usage_logger().info("Refresh requested from CLI")
    run_once()
    if not args.watch:
        return

    interval = (
        args.interval
        if args.interval is not None
        else services.settings.refresh_minutes
    )
    scheduler = AutoRefreshScheduler(run_once, interval, logger=logger)
    if interval == 0:
        print("Auto-refresh is disabled (interval 0).")
        return
    scheduler.start()
    print(f"Refreshing every {interval} minutes. Press Ctrl+C to stop.")
    try:
        scheduler.wait()
    except KeyboardInterrupt:
        logger.info("Refresh loop interrupted")
    finally:
        scheduler.stop()


if __name__ == "__main__":  # pragma: no cover
    main()
