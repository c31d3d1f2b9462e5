import logging
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from swaptax.db.models.price_cache import TokenPrice
from swaptax.domain.models.price import CachedPrice

logger = logging.getLogger(__name__)


def _to_epoch(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp())


class PriceCacheRepo:
    """Best-effort price cache backed by the ``token_prices`` table.

    Each call opens its own short session, so concurrent lookups within a
    price batch never share one. Database and connection errors are logged and treated as a
    miss (reads) or a dropped write; they never fail a price lookup.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_near(self, token: str, timestamp: datetime, window: timedelta) -> CachedPrice | None:
        """Closest cached price within ``timestamp ± window``, or None."""
        target = _to_epoch(timestamp)
        span = int(window.total_seconds())

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(TokenPrice)
                    .where(
                        TokenPrice.token_address == token,
                        TokenPrice.timestamp >= target - span,
                        TokenPrice.timestamp <= target + span,
                    )
                    .order_by(func.abs(TokenPrice.timestamp - target).asc(), TokenPrice.id.asc())
                    .limit(1)
                )
                row = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError):
            # Driver-level connection failures surface as OSError, not SQLAlchemyError
            logger.exception("Price cache read failed for %s", token)
            return None

        if row is None:
            return None
        return CachedPrice(
            token=row.token_address,
            timestamp=datetime.fromtimestamp(row.timestamp, tz=UTC),
            price_usd=row.price_usd,
            source=row.source,
        )

    async def insert_if_absent(self, token: str, timestamp: datetime, price_usd: Decimal, source: str) -> bool:
        """Store a price unless (token, timestamp) already exists. Returns True if written."""
        try:
            async with self._session_factory() as session:
                session.add(TokenPrice(
                    token_address=token,
                    timestamp=_to_epoch(timestamp),
                    price_usd=price_usd,
                    source=source,
                ))
                await session.commit()
        except IntegrityError:
            # Another lookup cached this key first
            logger.debug("Price cache entry for %s at %s already exists", token, timestamp.isoformat())
            return False
        except (SQLAlchemyError, OSError):
            logger.exception("Price cache write failed for %s", token)
            return False
        return True
