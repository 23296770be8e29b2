"""CLI adapter printing the shared snapshot, like a desktop widget.

Reads only the snapshot file, never the database, so it can run from a
status-bar tool or a terminal multiplexer.
"""

import argparse
import json
from typing import Any

from asset_monitor.infrastructure.container import (
    build_settings,
    build_snapshot_store,
)


MASK = "••••••"
SECTIONS = ("portfolio", "plans", "news")


def _money(value: float, private: bool) -> str:
    return MASK if private else f"${value:,.2f}"


def _signed(value: float, private: bool, percent: bool = False) -> str:
    if private and not percent:
        return MASK
    sign = "+" if value >= 0 else "-"
    magnitude = abs(value)
    return f"{sign}{magnitude:,.2f}%" if percent else f"{sign}${magnitude:,.2f}"


def render_portfolio(snapshot: dict[str, Any]) -> list[str]:
    private = snapshot["privacy_mode"]
    lines = [
        f"Portfolio  {_money(snapshot['total_value'], private)}  "
        f"{_signed(snapshot['daily_change'], private)} "
        f"({_signed(snapshot['daily_change_percent'], private, percent=True)})",
    ]
    for holding in snapshot["top_holdings"]:
        lines.append(
            f"  {holding['symbol']:<8} {_money(holding['price'], False):>12} "
            f"{_signed(holding['change_percent'], private, percent=True):>9} "
            f"{_money(holding['value'], private):>14}"
        )
    if not snapshot["top_holdings"]:
        lines.append("  No holdings yet")
    return lines


def render_plans(snapshot: dict[str, Any]) -> list[str]:
    private = snapshot["privacy_mode"]
    lines = ["DCA plans"]
    for plan in snapshot["dca_plans"]:
        due = plan["next_purchase_date"] or "-"
        flag = " OVERDUE" if plan["is_overdue"] else ""
        lines.append(
            f"  {plan['symbol']:<8} {plan['completed_purchases']}/"
            f"{plan['total_purchases']}  next {due} "
            f"{_money(plan['next_purchase_amount'], private)}{flag}"
        )
        timing = plan.get("timing")
        if timing:
            lines.append(f"           {timing['recommendation']}: {timing['reason']}")
    if not snapshot["dca_plans"]:
        lines.append("  No active plans")
    return lines


def render_news(snapshot: dict[str, Any]) -> list[str]:
    lines = ["News"]
    for item in snapshot["stock_news"]:
        lines.append(f"  [{item['symbol']}] {item['title']} ({item['publisher']})")
    if not snapshot["stock_news"]:
        lines.append("  No headlines")
    return lines


RENDERERS = {
    "portfolio": render_portfolio,
    "plans": render_plans,
    "news": render_news,
}


def render(snapshot: dict[str, Any], sections=SECTIONS) -> str:
    lines = []
    for section in sections:
        lines.extend(RENDERERS[section](snapshot))
        lines.append("")
    updated = snapshot.get("last_updated") or "never"
    lines.append(f"Updated: {updated}")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the portfolio snapshot")
    parser.add_argument(
        "--section",
        choices=SECTIONS,
        action="append",
        help="Section to show (repeatable, default: all)",
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    parser.add_argument(
        "--privacy",
        choices=("on", "off"),
        help="Persist the privacy flag before printing",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Print the snapshot."""
    args = _build_parser().parse_args(argv)
    store = build_snapshot_store(build_settings())
    if args.privacy:
        store.set_privacy_mode(args.privacy == "on")
    snapshot = store.read()
    if args.json:
        print(json.dumps(snapshot, indent=2))
        return
    print(render(snapshot, tuple(args.section or SECTIONS)))


if __name__ == "__main__":  # pragma: no cover
    main()
