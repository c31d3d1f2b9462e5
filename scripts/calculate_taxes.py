"""Calculate FIFO gains and Indonesian DEX tax for a JSON file of swap records.

Usage:
    PYTHONPATH=src python scripts/calculate_taxes.py records.json

The file holds a JSON list of swap records (or {"records": [...]}) with
signature, timestamp, from_token, from_amount, to_token, to_amount and
optional symbols / venue. Prices are cached in the configured database.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("calculate_taxes")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def load_records(path: Path) -> list:
    from swaptax.domain.models.swap import SwapRecord

    raw = json.loads(path.read_text())
    if isinstance(raw, dict):
        raw = raw.get("records", [])
    return [SwapRecord.model_validate(item) for item in raw]


def print_summary(summary) -> None:
    cur = summary.local_currency
    print()
    print(f"{'Date':<20} {'Type':<12} {'From':<14} {'To':<14} {'Value ' + cur:>18} {'Gain ' + cur:>18} {'Tax ' + cur:>14}")
    print("-" * 114)
    for tx in summary.transactions:
        from_leg = f"{tx.from_amount.normalize():f} {tx.from_symbol}"
        to_leg = f"{tx.to_amount.normalize():f} {tx.to_symbol}"
        print(
            f"{tx.timestamp:%Y-%m-%d %H:%M:%S} {tx.classification.value:<12} {from_leg[:14]:<14} {to_leg[:14]:<14} "
            f"{tx.transaction_value_local:>18,.2f} {tx.gain_loss_local:>18,.2f} {tx.total_tax:>14,.2f}"
        )
    print("-" * 114)
    print(f"USD/{cur} rate:           {summary.fx_rate:,.2f}")
    print(f"Transactions:           {summary.total_transactions} "
          f"({summary.total_acquisitions} acquisitions, {summary.total_disposals} disposals)")
    print(f"Acquisition value:      {summary.total_acquisition_value:,.2f} {cur}")
    print(f"Disposal value:         {summary.total_disposal_value:,.2f} {cur}")
    print(f"Total gain:             {summary.total_gain:,.2f} {cur}")
    print(f"Total loss:             {summary.total_loss:,.2f} {cur}")
    print(f"Net gain/loss:          {summary.net_gain_loss:,.2f} {cur}")
    for category, amount in summary.tax_by_category.items():
        print(f"{category.value + ' tax:':<24}{amount:,.2f} {cur}")
    print(f"Total tax:              {summary.total_tax:,.2f} {cur}")
    print(f"Open lots:              {len(summary.open_lots)}")


async def main(path: Path) -> int:
    from swaptax.container import Container
    from swaptax.exceptions import InvalidSwapRecordError

    records = load_records(path)
    logger.info("Loaded %d swap records from %s", len(records), path)

    container = Container()
    try:
        engine = container.tax_engine()
        try:
            summary = await engine.calculate(records)
        except InvalidSwapRecordError as e:
            logger.error("%s", e)
            return 1
    finally:
        await container.http_client().close()
        await container.engine().dispose()

    print_summary(summary)
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(Path(sys.argv[1]))))
