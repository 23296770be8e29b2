"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from asset_monitor.adapters.refresh_cli import refresh_cycle
from asset_monitor.application.use_cases import (
    PortfolioOverview,
    PriceHistoryResult,
    WatchlistRow,
)
from asset_monitor.domain.constants import (
    CHART_RANGES,
    DEFAULT_CHART_RANGE,
    REFRESH_INTERVAL_CHOICES,
)
from asset_monitor.domain.models import (
    AllocationItem,
    Asset,
    AssetType,
    HistoricalPrice,
    InvestmentPlan,
    NewsItem,
    PlanFrequency,
    PlanStatus,
    Transaction,
    TransactionType,
)
from asset_monitor.domain.services import plans as plan_rules
from asset_monitor.infrastructure.container import Services, build_services
from asset_monitor.infrastructure.logging.logger import get_usage_logger
from asset_monitor.infrastructure.scheduler import AutoRefreshScheduler
from asset_monitor.utils.decimal_utils import coerce_decimal


PAGES = [
    "Dashboard",
    "Assets",
    "Transactions",
    "Plans",
    "Monitor",
    "News",
    "AI Analysis",
    "Settings",
]
MASK = "••••••"
PALETTE = [
    "#1b9aaa",
    "#2e7d32",
    "#f4a261",
    "#e76f51",
    "#457b9d",
    "#f6c453",
    "#6c8ead",
    "#a0c4ff",
]


@st.cache_resource(show_spinner=False)
def _load_services() -> Services:
    """Wire the use cases once per server process and tidy the data."""
    services = build_services()
    services.assets.housekeeping()
    return services


@st.cache_resource(show_spinner=False)
def _load_scheduler(_services: Services) -> AutoRefreshScheduler:
    """Start the background refresh on the configured interval."""
    scheduler = AutoRefreshScheduler(
        lambda: asyncio.run(refresh_cycle(_services)),
        _services.settings.refresh_minutes,
    )
    scheduler.start()
    return scheduler


def _format_currency(value: Decimal, private: bool = False) -> str:
    """Format currency values for display."""
    if private:
        return MASK
    return f"${value:,.2f}"


def _format_delta(value: Decimal, private: bool = False) -> str:
    """Format delta values for display."""
    if private:
        return MASK
    sign = "+" if value >= 0 else "-"
    return f"{sign}${abs(value):,.2f}"


def _format_percent(value: Decimal) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def _format_delta_with_percent(
    delta: Decimal,
    percent: Decimal,
    private: bool = False,
) -> str:
    """Format delta value with percentage change."""
    if private:
        return _format_percent(percent)
    return f"{_format_delta(delta)} ({_format_percent(percent)})"


def _parse_decimal(value: float | int | str) -> Decimal:
    return coerce_decimal(value)


def _holding_rows(
    overview: PortfolioOverview,
    private: bool,
) -> list[dict[str, str]]:
    """Build table rows for the holdings list."""
    rows = []
    for holding in overview.holdings:
        asset = holding.asset
        rows.append(
            {
                "Symbol": asset.symbol,
                "Name": asset.name,
                "Type": asset.asset_type.display_name,
                "Shares": (
                    MASK if private else f"{holding.total_shares:,.4f}"
                ),
                "Avg Cost": _format_currency(holding.average_cost),
                "Price": _format_currency(holding.display_price),
                "Value": _format_currency(holding.total_value, private),
                "Gain/Loss": _format_delta_with_percent(
                    holding.gain_loss,
                    holding.gain_loss_percent,
                    private,
                ),
                "Today": _format_percent(holding.daily_change_percent),
            }
        )
    return rows


def _transaction_rows(
    transactions: Sequence[Transaction],
    assets: Sequence[Asset],
    private: bool,
) -> list[dict[str, str]]:
    symbols = {asset.id: asset.symbol for asset in assets}
    return [
        {
            "Date": tx.date.isoformat(),
            "Symbol": symbols.get(tx.asset_id, "?"),
            "Type": tx.transaction_type.display_name,
            "Shares": MASK if private else f"{tx.shares:,.4f}",
            "Price": _format_currency(tx.price_per_share),
            "Total": _format_currency(tx.total_amount, private),
            "Linked": "yes" if tx.linked_transaction_id else "",
            "Notes": tx.notes or "",
        }
        for tx in transactions
    ]


def _plan_rows(
    overview: PortfolioOverview,
    private: bool,
    today: date | None = None,
) -> list[dict[str, str]]:
    rows = []
    for plan in overview.plans:
        holding = overview.holding_for(plan.asset_id)
        symbol = holding.asset.symbol if holding else "?"
        due = plan_rules.next_purchase_date(plan)
        overdue = plan_rules.is_overdue(plan, today)
        rows.append(
            {
                "Symbol": symbol,
                "Status": plan.status.display_name,
                "Frequency": plan.frequency.display_name,
                "Progress": (
                    f"{plan.completed_purchases}/{plan.number_of_purchases} "
                    f"({plan_rules.progress_percent(plan):.0f}%)"
                ),
                "Per Purchase": _format_currency(
                    plan.amount_per_purchase,
                    private,
                ),
                "Remaining": _format_currency(
                    plan_rules.remaining_amount(plan),
                    private,
                ),
                "Next": (
                    "-" if due is None
                    else f"{due.isoformat()}{' (overdue)' if overdue else ''}"
                ),
            }
        )
    return rows


def _plan_label(plan: InvestmentPlan, overview: PortfolioOverview) -> str:
    holding = overview.holding_for(plan.asset_id)
    symbol = holding.asset.symbol if holding else "?"
    return (
        f"{symbol} · {plan.frequency.display_name} · "
        f"{plan.completed_purchases}/{plan.number_of_purchases} · "
        f"{plan.status.display_name}"
    )


def _prepare_donut_chart_data(
    items: Sequence[AllocationItem],
    max_categories: int = 6,
    private: bool = False,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Allocation items, in any order.
        max_categories: Maximum slices to keep before grouping into Other.
        private: Whether amount labels are masked.

    Returns:
        Tuple with Altair-ready chart data and the total value.
    """
    sorted_items = sorted(items, key=lambda item: item.value, reverse=True)
    top_items = [(item.name, item.value) for item in sorted_items[:max_categories]]
    other_amount = sum(
        (item.value for item in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items.append(("Other", other_amount))
    total_amount = sum(
        (item.value for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for name, amount in top_items:
        share = (
            (amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": name,
                "amount": float(amount),
                "amount_label": _format_currency(amount, private),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_allocation_chart(
    items: Sequence[AllocationItem],
    title: str,
    max_categories: int = 6,
    chart_size: int = 300,
    private: bool = False,
) -> None:
    """Render a donut chart of portfolio value by slice."""
    st.subheader(title)
    if not items:
        st.info("No holdings to chart yet.")
        return
    data, _ = _prepare_donut_chart_data(items, max_categories, private)

    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="mouseover",
        clear="mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(text="share_label:N")

    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _run_refresh(services: Services) -> None:
    get_usage_logger().info("Manual refresh from dashboard")
    with st.spinner("Refreshing prices..."):
        result = asyncio.run(refresh_cycle(services))
    if result.skipped:
        st.info("A refresh is already running.")
    elif result.error_message:
        st.error(result.error_message)
    else:
        st.success(f"Refreshed {len(result.quotes)} prices.")


def _render_dashboard(services: Services, private: bool) -> None:
    overview = services.overview.execute()
    totals = overview.totals

    if st.button("Refresh prices"):
        _run_refresh(services)
        overview = services.overview.execute()
        totals = overview.totals
    refreshed = services.refresh_prices.last_refreshed
    if refreshed is not None:
        st.caption(f"Last refreshed {refreshed:%H:%M:%S}")

    value_col, daily_col, gain_col, cash_col = st.columns(4)
    value_col.metric(
        "Total Value",
        _format_currency(totals.total_value, private),
    )
    daily_col.metric(
        "Today",
        _format_delta(totals.daily_change, private),
        _format_percent(totals.daily_change_percent),
    )
    gain_col.metric(
        "Total Gain/Loss",
        _format_delta(totals.gain_loss, private),
        _format_percent(totals.gain_loss_percent),
    )
    cash_col.metric(
        "Cash",
        _format_currency(totals.cash_balance, private),
    )

    for plan in overview.overdue_plans:
        st.warning(f"Overdue purchase: {_plan_label(plan, overview)}")

    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_allocation_chart(
            overview.allocation_by_type,
            "Allocation by Type",
            max_categories=5,
            private=private,
        )
    with chart_right:
        _render_allocation_chart(
            overview.allocation_by_asset,
            "Allocation by Asset",
            max_categories=8,
            private=private,
        )

    st.subheader("Holdings")
    if not overview.holdings:
        st.info("No assets yet. Add one on the Assets page.")
        return
    st.dataframe(
        _holding_rows(overview, private),
        width="stretch",
        hide_index=True,
    )


def _render_assets(services: Services, private: bool) -> None:
    overview = services.overview.execute()
    st.subheader("Add asset")
    with st.form("add_asset", clear_on_submit=True):
        symbol = st.text_input("Symbol")
        asset_type = st.selectbox(
            "Type",
            options=list(AssetType),
            format_func=lambda t: t.display_name,
        )
        name = st.text_input("Name (optional)")
        maturity = st.date_input("CD maturity date", value=None)
        rate = st.number_input("CD interest rate (%)", min_value=0.0, step=0.05)
        submitted = st.form_submit_button("Add")
    if submitted:
        if asset_type != AssetType.CASH and not symbol.strip():
            st.error("Symbol is required.")
        else:
            is_cd = asset_type == AssetType.CD
            asset = asyncio.run(
                services.assets.add_asset(
                    symbol,
                    asset_type,
                    name=name,
                    cd_maturity_date=maturity if is_cd else None,
                    cd_interest_rate=_parse_decimal(rate) if is_cd else None,
                )
            )
            st.success(f"Added {asset.symbol}")
            overview = services.overview.execute()

    st.subheader("Assets")
    if not overview.holdings:
        st.info("No assets yet.")
        return
    st.dataframe(
        _holding_rows(overview, private),
        width="stretch",
        hide_index=True,
    )

    by_label = {
        f"{h.asset.symbol} · {h.asset.name}": h for h in overview.holdings
    }
    label = st.selectbox("Asset", options=list(by_label))
    holding = by_label[label]
    with st.expander("Position details"):
        summary = holding.summary
        st.markdown(
            f"- Invested: {_format_currency(summary.total_invested, private)}\n"
            f"- Income: {_format_currency(summary.total_dividends, private)}\n"
            f"- Realized gains: "
            f"{_format_delta(summary.realized_gains, private)}"
        )
        accrued = holding.cd_current_value()
        if accrued is not None:
            st.markdown(
                f"- Accrued value: {_format_currency(accrued, private)}"
            )
    if st.button("Delete asset", type="primary"):
        services.assets.delete_asset(holding.asset.id)
        st.success(
            f"Deleted {holding.asset.symbol} with its transactions and plans"
        )
        st.rerun()


def _render_transactions(services: Services, private: bool) -> None:
    assets = services.repository.list_assets()
    if not assets:
        st.info("Add an asset before recording transactions.")
        return
    assets_by_label = {f"{a.symbol} · {a.name}": a for a in assets}

    st.subheader("Record transaction")
    label = st.selectbox("Asset", options=list(assets_by_label))
    asset = assets_by_label[label]
    kinds = (
        TransactionType.cash_types()
        if asset.is_cash
        else TransactionType.trading_types()
    )
    active_plans = [
        plan
        for plan in services.repository.list_plans()
        if plan.asset_id == asset.id and plan.status == PlanStatus.ACTIVE
    ]
    with st.form("add_transaction", clear_on_submit=True):
        kind = st.selectbox(
            "Type",
            options=list(kinds),
            format_func=lambda t: t.display_name,
        )
        tx_date = st.date_input("Date", value=date.today())
        if asset.is_cash:
            amount = st.number_input("Amount", min_value=0.0, step=100.0)
            shares, price = amount, 1.0
        else:
            shares = st.number_input("Shares", min_value=0.0, step=1.0)
            price = st.number_input("Price per share", min_value=0.0, step=0.01)
        notes = st.text_input("Notes")
        plan = st.selectbox(
            "Counts towards plan",
            options=[None, *active_plans],
            format_func=lambda p: "None" if p is None else (
                f"{p.completed_purchases}/{p.number_of_purchases} "
                f"{p.frequency.display_name}"
            ),
        )
        update_cash = st.checkbox("Update cash balance", value=True)
        submitted = st.form_submit_button("Record")
    if submitted:
        if shares <= 0:
            st.error("Quantity must be positive.")
        else:
            services.transactions.add(
                asset.id,
                kind,
                tx_date,
                _parse_decimal(shares),
                _parse_decimal(price),
                notes=notes.strip() or None,
                linked_plan_id=plan.id if plan else None,
                update_cash=update_cash,
            )
            st.success("Transaction recorded")

    st.subheader("History")
    transactions = services.repository.list_transactions()
    if not transactions:
        st.info("No transactions yet.")
        return
    st.dataframe(
        _transaction_rows(transactions, assets, private),
        width="stretch",
        hide_index=True,
    )

    symbols = {a.id: a.symbol for a in assets}
    by_label = {
        f"{tx.date} · {symbols.get(tx.asset_id, '?')} · "
        f"{tx.transaction_type.display_name} · {tx.total_amount:,.2f}": tx
        for tx in transactions
    }
    selected = by_label[st.selectbox("Transaction", options=list(by_label))]
    with st.expander("Edit transaction"):
        with st.form("edit_transaction"):
            new_date = st.date_input("Date", value=selected.date)
            new_shares = st.number_input(
                "Shares / amount",
                min_value=0.0,
                value=float(selected.shares),
            )
            new_price = st.number_input(
                "Price per share",
                min_value=0.0,
                value=float(selected.price_per_share),
            )
            new_notes = st.text_input("Notes", value=selected.notes or "")
            update_linked = st.checkbox("Update linked transaction", value=True)
            saved = st.form_submit_button("Save")
        if saved:
            services.transactions.update(
                Transaction(
                    id=selected.id,
                    asset_id=selected.asset_id,
                    transaction_type=selected.transaction_type,
                    date=new_date,
                    shares=_parse_decimal(new_shares),
                    price_per_share=_parse_decimal(new_price),
                    notes=new_notes.strip() or None,
                    linked_plan_id=selected.linked_plan_id,
                    linked_transaction_id=selected.linked_transaction_id,
                    created_at=selected.created_at,
                ),
                update_linked=update_linked,
            )
            st.success("Transaction updated")
    delete_linked = st.checkbox("Also delete linked transaction", value=True)
    if st.button("Delete transaction"):
        services.transactions.delete(selected.id, delete_linked=delete_linked)
        st.rerun()


def _render_plans(services: Services, private: bool) -> None:
    overview = services.overview.execute()
    tradable = [
        h.asset for h in overview.holdings if not h.asset.is_cash
    ]
    st.subheader("New plan")
    if not tradable:
        st.info("Add a non-cash asset to start a plan.")
    else:
        with st.form("add_plan", clear_on_submit=True):
            asset = st.selectbox(
                "Asset",
                options=tradable,
                format_func=lambda a: f"{a.symbol} · {a.name}",
            )
            total = st.number_input("Total amount", min_value=0.0, step=100.0)
            count = st.number_input("Purchases", min_value=1, step=1, value=4)
            frequency = st.selectbox(
                "Frequency",
                options=list(PlanFrequency),
                format_func=lambda f: f.display_name,
            )
            custom_days = st.number_input("Custom days", min_value=1, value=10)
            start = st.date_input("Start date", value=date.today())
            notes = st.text_input("Notes")
            submitted = st.form_submit_button("Create plan")
        if submitted:
            try:
                services.plans.add_plan(
                    asset.id,
                    _parse_decimal(total),
                    int(count),
                    frequency,
                    start,
                    custom_days_between=(
                        int(custom_days)
                        if frequency == PlanFrequency.CUSTOM
                        else None
                    ),
                    notes=notes.strip() or None,
                )
            except ValueError as exc:
                st.error(str(exc))
            else:
                st.success("Plan created")
                overview = services.overview.execute()

    st.subheader("Plans")
    if not overview.plans:
        st.info("No plans yet.")
        return
    st.dataframe(
        _plan_rows(overview, private),
        width="stretch",
        hide_index=True,
    )

    by_label = {_plan_label(plan, overview): plan for plan in overview.plans}
    plan = by_label[st.selectbox("Plan", options=list(by_label))]
    pause_col, resume_col, cancel_col, delete_col = st.columns(4)
    if pause_col.button("Pause", disabled=plan.status != PlanStatus.ACTIVE):
        services.plans.pause(plan.id)
        st.rerun()
    if resume_col.button("Resume", disabled=plan.status != PlanStatus.PAUSED):
        services.plans.resume(plan.id)
        st.rerun()
    if cancel_col.button("Cancel", disabled=plan.status.is_terminal):
        services.plans.cancel(plan.id)
        st.rerun()
    if delete_col.button("Delete"):
        services.plans.delete(plan.id)
        st.rerun()

    with st.expander("Schedule"):
        st.dataframe(
            [
                {
                    "#": item.purchase_number,
                    "Date": item.scheduled_date.isoformat(),
                    "Amount": _format_currency(item.amount, private),
                    "Done": "yes" if item.is_completed else "",
                    "Overdue": "yes" if item.is_overdue else "",
                }
                for item in services.plans.schedule(plan.id)
            ],
            width="stretch",
            hide_index=True,
        )

    holding = overview.holding_for(plan.asset_id)
    if holding is not None and holding.asset.asset_type.is_quoted:
        if st.button("Check purchase timing"):
            with st.spinner("Analyzing recent prices..."):
                timing = asyncio.run(
                    services.timing.execute(holding.asset.symbol)
                )
            st.markdown(
                f"**{timing.recommendation.display_text}**: {timing.reason}"
            )


def _watchlist_rows(rows: Sequence[WatchlistRow]) -> list[dict[str, str]]:
    """Build table rows for the watchlist."""
    return [
        {
            "Symbol": row.item.symbol,
            "Name": row.item.name,
            "Price": (
                _format_currency(row.quote.price) if row.quote else "N/A"
            ),
            "Today": _format_percent(row.daily_change_percent),
        }
        for row in rows
    ]


def _prepare_price_chart_data(
    points: Sequence[HistoricalPrice],
) -> list[dict[str, str | float]]:
    return [
        {"date": point.date.isoformat(), "close": float(point.close)}
        for point in points
    ]


def _render_price_chart(result: PriceHistoryResult) -> None:
    """Render the close-price line of one chart range with its move."""
    if result.error_message:
        st.error(result.error_message)
        return
    if result.change is None:
        st.info("No price history for this range.")
        return
    change = result.change
    st.metric(
        f"{result.symbol} · {result.range_label}",
        _format_currency(change.end_price),
        _format_delta_with_percent(change.change, change.change_percent),
    )
    color = PALETTE[1] if change.change >= 0 else PALETTE[3]
    chart = (
        alt.Chart(alt.Data(values=_prepare_price_chart_data(result.points)))
        .mark_line(color=color)
        .encode(
            x=alt.X("date:T", title=None),
            y=alt.Y("close:Q", title="Close", scale=alt.Scale(zero=False)),
            tooltip=[
                alt.Tooltip("date:T", title="Date"),
                alt.Tooltip("close:Q", title="Close", format="$,.2f"),
            ],
        )
        .properties(height=320)
    )
    st.altair_chart(chart, width="stretch")


def _render_monitor(services: Services, private: bool) -> None:
    _ = private
    mode = st.radio("List", options=["Holdings", "Watchlist"], horizontal=True)
    watched: dict[str, WatchlistRow] = {}
    if mode == "Watchlist":
        with st.form("add_watchlist", clear_on_submit=True):
            symbol = st.text_input("Symbol")
            name = st.text_input("Name (optional)")
            submitted = st.form_submit_button("Add to watchlist")
        if submitted:
            try:
                item = asyncio.run(services.watchlist.add(symbol, name))
            except ValueError as exc:
                st.error(str(exc))
            else:
                st.success(f"Added {item.symbol}")
        rows = asyncio.run(services.watchlist.rows())
        if not rows:
            st.info("No watchlist items.")
            return
        st.dataframe(_watchlist_rows(rows), width="stretch", hide_index=True)
        watched = {row.item.symbol: row for row in rows}
        symbols = list(watched)
    else:
        overview = services.overview.execute()
        symbols = [
            holding.asset.symbol
            for holding in overview.holdings
            if holding.asset.asset_type.is_quoted
        ]
        if not symbols:
            st.info("No tradable holdings.")
            return

    symbol = st.selectbox("Symbol", options=symbols)
    ranges = list(CHART_RANGES)
    range_label = st.radio(
        "Range",
        options=ranges,
        index=ranges.index(DEFAULT_CHART_RANGE),
        horizontal=True,
    )
    with st.spinner("Loading chart..."):
        result = asyncio.run(services.price_history.execute(symbol, range_label))
    _render_price_chart(result)

    if symbol in watched and st.button("Remove from watchlist"):
        services.watchlist.remove(watched[symbol].item.id)
        st.rerun()


def _render_news_items(items: Sequence[NewsItem]) -> None:
    for item in items:
        st.markdown(
            f"**[{item.title}]({item.link})**  \n"
            f"{item.symbol} · {item.publisher} · "
            f"{item.published_at:%Y-%m-%d %H:%M}"
        )


def _render_news(services: Services, private: bool) -> None:
    _ = private
    if st.button("Load headlines"):
        get_usage_logger().info("News refresh from dashboard")
        with st.spinner("Loading news..."):
            result = asyncio.run(services.refresh_news.execute())
        if result.error_message:
            st.error(result.error_message)
        elif not result.items:
            st.info("No headlines for your holdings.")
        _render_news_items(result.items)
        return
    cached = services.snapshot_store.read()["stock_news"]
    if not cached:
        st.info("Press 'Load headlines' to fetch news for your holdings.")
        return
    st.caption("Last synced headlines")
    for item in cached:
        st.markdown(
            f"**[{item['title']}]({item['link']})**  \n"
            f"{item['symbol']} · {item['publisher']}"
        )


def _render_analysis(services: Services, private: bool) -> None:
    _ = private
    if not services.analysis.is_configured:
        st.warning(
            "OpenAI API key not configured. Set OPENAI_API_KEY in .env."
        )
        return
    overview = services.overview.execute()
    if st.button("Analyze portfolio"):
        get_usage_logger().info("Portfolio analysis requested")
        with st.spinner("Analyzing portfolio..."):
            result = services.analysis.analyze_portfolio()
        _show_analysis(result)

    quoted = [h.asset for h in overview.holdings if not h.asset.is_cash]
    if not quoted:
        return
    asset = st.selectbox(
        "Asset",
        options=quoted,
        format_func=lambda a: f"{a.symbol} · {a.name}",
    )
    if st.button("Analyze asset"):
        get_usage_logger().info(f"Asset analysis requested for {asset.symbol}")
        with st.spinner(f"Analyzing {asset.symbol}..."):
            result = services.analysis.analyze_asset(asset.id)
        _show_analysis(result)
    amount = st.number_input("Amount to invest", min_value=0.0, value=1000.0)
    if st.button("Suggest DCA plan"):
        get_usage_logger().info(f"Plan suggestion requested for {asset.symbol}")
        with st.spinner("Preparing suggestion..."):
            result = services.analysis.suggest_plan(
                asset.id,
                _parse_decimal(amount),
            )
        _show_analysis(result)


def _show_analysis(result) -> None:
    if result.ok:
        st.markdown(result.text)
    else:
        st.error(result.error_message)


def _render_settings(services: Services, private: bool) -> None:
    enabled = st.toggle("Privacy mode", value=private)
    if enabled != private:
        services.snapshot_store.set_privacy_mode(enabled)
        st.rerun()

    scheduler = _load_scheduler(services)
    interval = st.selectbox(
        "Auto-refresh",
        options=list(REFRESH_INTERVAL_CHOICES),
        index=REFRESH_INTERVAL_CHOICES.index(scheduler.interval_minutes),
        format_func=lambda m: "Off" if m == 0 else f"Every {m} minutes",
    )
    if interval != scheduler.interval_minutes:
        scheduler.set_interval(interval)
        if interval and not scheduler.is_running:
            scheduler.start()

    st.subheader("Export")
    csv_col, tx_col, json_col = st.columns(3)
    stamp = date.today().strftime("%Y%m%d")
    csv_col.download_button(
        "Assets CSV",
        services.export.assets_csv(),
        file_name=f"assets_{stamp}.csv",
        mime="text/csv",
    )
    tx_col.download_button(
        "Transactions CSV",
        services.export.transactions_csv(),
        file_name=f"transactions_{stamp}.csv",
        mime="text/csv",
    )
    json_col.download_button(
        "Full backup (JSON)",
        services.export.backup_json(),
        file_name=f"asset_monitor_backup_{stamp}.json",
        mime="application/json",
    )

    st.subheader("Maintenance")
    if st.button("Run housekeeping"):
        result = services.assets.housekeeping()
        st.success(
            f"Removed {len(result.removed_symbols)} invalid assets, merged "
            f"{result.merged_cash_assets} cash assets, linked "
            f"{result.linked_pairs} transactions."
        )
    if st.button("Clear widget snapshot"):
        services.snapshot_store.clear()
        st.success("Widget snapshot cleared")
    st.caption(f"Database: {services.settings.db_path}")
    st.caption(f"Shared snapshot: {services.settings.shared_dir}")


RENDERERS = {
    "Dashboard": _render_dashboard,
    "Assets": _render_assets,
    "Transactions": _render_transactions,
    "Plans": _render_plans,
    "Monitor": _render_monitor,
    "News": _render_news,
    "AI Analysis": _render_analysis,
    "Settings": _render_settings,
}


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Asset Monitor", layout="wide")
    st.title("Asset Monitor")

    services = _load_services()
    _load_scheduler(services)
    page = st.sidebar.selectbox("Page", PAGES)
    private = services.snapshot_store.get_privacy_mode()
    if private:
        st.sidebar.caption("Privacy mode is on")
    RENDERERS[page](services, private)


if __name__ == "__main__":  # pragma: no cover
    main()
