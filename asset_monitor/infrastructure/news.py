"""Headline client for the Google News RSS search feed."""

import asyncio
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import xml.etree.ElementTree as ElementTree

import httpx

from asset_monitor.application.errors import NewsError
from asset_monitor.application.ports.market_data import NewsProviderPort
from asset_monitor.domain.models import NewsItem
from asset_monitor.infrastructure.logging.logger import get_app_logger


FEED_URL = "https://news.google.com/rss/search"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_PUBLISHER = "News"


class GoogleNewsProvider(NewsProviderPort):
    """Asynchronous RSS client querying one feed per symbol."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        feed_url: str = FEED_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger=None,
    ) -> None:
        self._client = client
        self._feed_url = feed_url
        self._timeout = timeout
        self._logger = logger or get_app_logger()

    async def fetch_news(self, symbols: list[str], limit: int) -> list[NewsItem]:
        """Return the newest headlines across symbols.

        Each symbol contributes at most ``limit // len(symbols)`` items
        (at least one). Per-symbol failures are logged and skipped.

        Raises:
            NewsError: If every symbol's feed failed.
        """
        if not symbols:
            return []
        per_symbol = max(limit // len(symbols), 1)
        self._logger.debug(f"Fetching news for: {', '.join(symbols)}")

        if self._client is not None:
            batches = await self._gather(self._client, symbols, per_symbol)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                batches = await self._gather(client, symbols, per_symbol)

        if all(batch is None for batch in batches):
            raise NewsError("Unable to load news. Please try again later.")
        items = [item for batch in batches if batch for item in batch]
        items.sort(key=lambda item: item.published_at, reverse=True)
        return items[:limit]

    async def _gather(
        self,
        client: httpx.AsyncClient,
        symbols: list[str],
        per_symbol: int,
    ) -> list[list[NewsItem] | None]:
        return await asyncio.gather(
            *(self._fetch_symbol(client, s, per_symbol) for s in symbols)
        )

    async def _fetch_symbol(
        self,
        client: httpx.AsyncClient,
        symbol: str,
        limit: int,
    ) -> list[NewsItem] | None:
        params = {
            "q": f"{symbol} stock",
            "hl": "en-US",
            "gl": "US",
            "ceid": "US:en",
        }
        try:
            response = await client.get(self._feed_url, params=params)
        except httpx.HTTPError as exc:
            self._logger.error(f"Failed to fetch news for {symbol}: {exc}")
            return None
        if response.status_code != 200:
            self._logger.error(f"HTTP {response.status_code} for {symbol}")
            return None
        try:
            items = parse_feed(response.content, symbol)
        except ElementTree.ParseError as exc:
            self._logger.error(f"Failed to parse news for {symbol}: {exc}")
            return None
        return items[:limit]


def parse_feed(content: bytes, symbol: str) -> list[NewsItem]:
    """Parse RSS ``<item>`` elements into headlines.

    Google News appends " - Publisher" to titles; the suffix is removed and
    used as the publisher when the item has no ``<source>``.
    """
    root = ElementTree.fromstring(content)
    items = []
    for element in root.iter("item"):
        title = (element.findtext("title") or "").strip()
        link = (element.findtext("link") or "").strip()
        source = (element.findtext("source") or "").strip()
        if " - " in title:
            title, suffix = title.rsplit(" - ", 1)
            source = source or suffix.strip()
        if not title or not link:
            continue
        items.append(
            NewsItem(
                symbol=symbol,
                title=title,
                publisher=source or DEFAULT_PUBLISHER,
                link=link,
                published_at=_parse_date(element.findtext("pubDate")),
            )
        )
    return items


def _parse_date(raw: str | None) -> datetime:
    if raw:
        try:
            parsed = parsedate_to_datetime(raw.strip())
        except (TypeError, ValueError):
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    return datetime.now(timezone.utc)


__all__ = ["GoogleNewsProvider", "parse_feed"]
