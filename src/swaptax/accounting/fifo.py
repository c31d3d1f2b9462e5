"""FIFO lot ledger — in-memory, no DB dependency.

One ledger per calculation run. Lots are appended at the tail of their token's
queue and consumed from the head, oldest first. Partial consumption shrinks
amount and cost basis by the same fraction, so cost per unit never drifts.
"""

import logging
from collections import defaultdict, deque
from datetime import datetime
from decimal import Decimal, localcontext

from swaptax.domain.models.tax import ConsumeResult, Lot, OpenLotSnapshot

logger = logging.getLogger(__name__)

# Enough significant digits for 9-decimal token amounts times IDR-scale values
DECIMAL_PRECISION = 50


class LotLedger:
    """Per-token queues of acquisition lots."""

    def __init__(self) -> None:
        self._queues: dict[str, deque[Lot]] = defaultdict(deque)

    def record_acquisition(
        self,
        token: str,
        amount: Decimal,
        cost_basis_usd: Decimal,
        cost_basis_local: Decimal,
        acquired_at: datetime,
    ) -> None:
        """Append a new lot at the tail of the token's queue. Zero amounts are a no-op."""
        if amount < 0:
            raise ValueError(f"Acquisition amount must be >= 0, got {amount} for {token}")
        if cost_basis_usd < 0 or cost_basis_local < 0:
            raise ValueError(f"Cost basis must be >= 0 for {token}")
        if amount == 0:
            logger.debug("Skipping zero-amount lot for %s at %s", token, acquired_at.isoformat())
            return

        queue = self._queues[token]
        if queue and acquired_at < queue[-1].acquired_at:
            raise ValueError(
                f"Lots for {token} must be appended in acquisition order "
                f"({acquired_at.isoformat()} < {queue[-1].acquired_at.isoformat()})"
            )

        queue.append(Lot(
            token=token,
            amount=amount,
            cost_basis_usd=cost_basis_usd,
            cost_basis_local=cost_basis_local,
            acquired_at=acquired_at,
        ))

    def consume(self, token: str, amount: Decimal) -> ConsumeResult:
        """Draw ``amount`` from the token's oldest lots.

        A shortfall is returned as ``amount_unmatched`` and carries zero cost
        basis: disposing more than was tracked realizes gain instead of failing.
        """
        if amount < 0:
            raise ValueError(f"Disposal amount must be >= 0, got {amount} for {token}")

        queue = self._queues.get(token)
        remaining = amount
        total_usd = Decimal(0)
        total_local = Decimal(0)

        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION

            while remaining > 0 and queue:
                head = queue[0]

                if head.amount <= remaining:
                    total_usd += head.cost_basis_usd
                    total_local += head.cost_basis_local
                    remaining -= head.amount
                    queue.popleft()
                else:
                    fraction = remaining / head.amount
                    part_usd = head.cost_basis_usd * fraction
                    part_local = head.cost_basis_local * fraction

                    total_usd += part_usd
                    total_local += part_local

                    head.amount -= remaining
                    head.cost_basis_usd -= part_usd
                    head.cost_basis_local -= part_local
                    remaining = Decimal(0)

        if queue is not None and not queue:
            del self._queues[token]

        if remaining > 0:
            logger.info("Disposal of %s exceeds tracked lots by %s; unmatched part has zero cost basis", token, remaining)

        return ConsumeResult(
            cost_basis_usd=total_usd,
            cost_basis_local=total_local,
            amount_matched=amount - remaining,
            amount_unmatched=remaining,
        )

    def remaining_amount(self, token: str) -> Decimal:
        queue = self._queues.get(token)
        if not queue:
            return Decimal(0)
        return sum((lot.amount for lot in queue), Decimal(0))

    def open_lots(self, token: str | None = None) -> list[OpenLotSnapshot]:
        """Snapshot of held lots, oldest first within each token."""
        tokens = [token] if token is not None else sorted(self._queues)
        return [
            OpenLotSnapshot(
                token=lot.token,
                amount=lot.amount,
                cost_basis_usd=lot.cost_basis_usd,
                cost_basis_local=lot.cost_basis_local,
                acquired_at=lot.acquired_at,
            )
            for t in tokens
            for lot in self._queues.get(t, ())
        ]
