"""Use case for creating, editing and tidying assets."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from asset_monitor.application.errors import QuoteError
from asset_monitor.application.ports.market_data import QuoteProviderPort
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.constants import CASH_NAME, CASH_SYMBOL
from asset_monitor.domain.models import Asset, AssetType
from asset_monitor.domain.policies import is_valid_symbol
from asset_monitor.domain.services.ledger import link_legacy_pairs
from asset_monitor.infrastructure.logging.logger import get_app_logger
from asset_monitor.utils.time_utils import as_utc


@dataclass(frozen=True)
class HousekeepingResult:
    """Summary of a housekeeping pass.

    Attributes:
        removed_symbols: Symbols of deleted invalid assets.
        merged_cash_assets: Number of extra cash assets folded into one.
        linked_pairs: Number of legacy buy/withdrawal pairs linked.
    """

    removed_symbols: list[str] = field(default_factory=list)
    merged_cash_assets: int = 0
    linked_pairs: int = 0


class ManageAssetsUseCase:
    """Add, update and delete assets and keep the cash asset unique."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        quote_provider: QuoteProviderPort,
        snapshot_sync=None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            quote_provider: Port used to look up prices of new assets.
            snapshot_sync: Optional use case refreshing the shared snapshot
                after each change.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._quotes = quote_provider
        self._snapshot_sync = snapshot_sync
        self._logger = logger or get_app_logger()

    async def add_asset(
        self,
        symbol: str,
        asset_type: AssetType,
        name: str = "",
        cd_maturity_date: date | None = None,
        cd_interest_rate: Decimal | None = None,
    ) -> Asset:
        """Create an asset, looking up its quote when it trades.

        A missing quote does not block creation; the asset is stored without
        a price. Adding a second cash asset returns the existing one.

        Args:
            symbol: Ticker symbol.
            asset_type: Kind of asset.
            name: Display name; replaced by the quote's name when blank or
                equal to the symbol.
            cd_maturity_date: Maturity of a certificate of deposit.
            cd_interest_rate: Annual rate of a certificate of deposit.

        Returns:
            Asset: The stored asset.
        """
        if asset_type == AssetType.CASH:
            return self.ensure_cash_asset()

        asset = Asset(
            symbol=symbol,
            asset_type=asset_type,
            name=name.strip(),
            cd_maturity_date=cd_maturity_date,
            cd_interest_rate=cd_interest_rate,
        )
        if asset_type.is_quoted:
            try:
                quote = await self._quotes.fetch_quote(asset.symbol)
            except QuoteError as exc:
                self._logger.warning(
                    f"Could not fetch price for {asset.symbol}: {exc}"
                )
            else:
                self._repository.cache_price(quote)
                if (not asset.name or asset.name == asset.symbol) and quote.name:
                    asset = replace(asset, name=quote.name)
        if not asset.name:
            asset = replace(asset, name=asset.symbol)

        self._repository.add_asset(asset)
        self._logger.info(f"Added asset {asset.symbol} ({asset_type.value})")
        self._sync()
        return asset

    def update_asset(self, asset: Asset) -> Asset:
        self._repository.update_asset(asset)
        self._logger.info(f"Updated asset {asset.symbol}")
        self._sync()
        return asset

    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset with its transactions and plans."""
        self._repository.delete_asset(asset_id)
        self._logger.info(f"Deleted asset {asset_id}")
        self._sync()

    def ensure_cash_asset(self) -> Asset:
        """Return the cash asset, creating it when missing."""
        existing = next(
            (asset for asset in self._repository.list_assets() if asset.is_cash),
            None,
        )
        if existing is not None:
            return existing
        cash = Asset(symbol=CASH_SYMBOL, asset_type=AssetType.CASH, name=CASH_NAME)
        self._repository.add_asset(cash)
        self._logger.info("Created cash asset")
        return cash

    def housekeeping(self) -> HousekeepingResult:
        """Run the start-up clean-up pass.

        Removes assets with unusable symbols, folds every cash asset into a
        single one named "CASH", then links legacy buys to the withdrawals
        that funded them.

        Returns:
            HousekeepingResult: What was changed.
        """
        removed = self._remove_invalid_assets()
        merged = self._consolidate_cash_assets()
        linked = self._link_legacy_pairs()
        self._logger.info(
            f"Housekeeping done: removed={len(removed)}, "
            f"merged_cash={merged}, linked={linked}"
        )
        return HousekeepingResult(
            removed_symbols=removed,
            merged_cash_assets=merged,
            linked_pairs=linked,
        )

    def _remove_invalid_assets(self) -> list[str]:
        removed = []
        for asset in self._repository.list_assets():
            if is_valid_symbol(asset.symbol):
                continue
            self._repository.delete_asset(asset.id)
            removed.append(asset.symbol)
            self._logger.warning(f"Removed invalid asset '{asset.symbol}'")
        return removed

    def _consolidate_cash_assets(self) -> int:
        cash_assets = [a for a in self._repository.list_assets() if a.is_cash]
        if not cash_assets:
            return 0
        # Oldest cash asset is kept.
        cash_assets.sort(key=lambda asset: as_utc(asset.created_at))
        primary, others = cash_assets[0], cash_assets[1:]
        for other in others:
            moved = self._repository.move_transactions(other.id, primary.id)
            self._repository.delete_asset(other.id)
            self._logger.info(
                f"Merged cash asset '{other.symbol}' into primary "
                f"({moved} transactions moved)"
            )
        if primary.symbol != CASH_SYMBOL or primary.name != CASH_NAME:
            self._repository.update_asset(
                replace(primary, symbol=CASH_SYMBOL, name=CASH_NAME)
            )
        return len(others)

    def _link_legacy_pairs(self) -> int:
        pairs = link_legacy_pairs(
            self._repository.list_transactions(),
            self._repository.list_assets(),
        )
        for buy, withdrawal in pairs:
            self._repository.update_transactions([buy, withdrawal])
            self._logger.debug(
                f"Linked buy {buy.id} with withdrawal {withdrawal.id}"
            )
        return len(pairs)

    def _sync(self) -> None:
        if self._snapshot_sync is not None:
            self._snapshot_sync.execute()


__all__ = ["ManageAssetsUseCase", "HousekeepingResult"]
