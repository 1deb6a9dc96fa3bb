# MIT License
# Copyright (c) 2025 Hashborn

import logging
from ...protocol.types.common import Table
from ...protocol.config.params import BALANCE_BITS
from .wide import checked_add

logger = logging.getLogger(__name__)

async def aggregate_unbonding(snapshot, bits: int = BALANCE_BITS) -> int:
    """
    Sum of every pending unlock chunk across all staking ledgers.

    The ledger table is read in a single scan; ledgers that are absent or
    have nothing unlocking contribute zero.
    """
    ledgers = await snapshot.read_all(Table.STAKING_LEDGER)

    unbonding = 0
    for entry in ledgers:
        if entry.ledger is None:
            continue
        for chunk in entry.ledger.unlocking:
            unbonding = checked_add(unbonding, chunk.value, bits)

    logger.info(f"Scanned {len(ledgers)} staking ledgers, unbonding: {unbonding}")
    return unbonding
