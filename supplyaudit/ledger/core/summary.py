# MIT License
# Copyright (c) 2025 Hashborn

import logging
from typing import Optional
from ...protocol.types.balances import SummaryResult
from ...protocol.config.params import BALANCE_BITS, DEFAULT_PAGE_SIZE, DEFAULT_PROGRESS_INTERVAL
from ..observability.metrics import ProgressObserver
from .accounts import aggregate_accounts
from .staking import aggregate_unbonding

logger = logging.getLogger(__name__)

async def compose(
    snapshot,
    page_size: int = DEFAULT_PAGE_SIZE,
    observer: Optional[ProgressObserver] = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    bits: int = BALANCE_BITS,
) -> SummaryResult:
    """
    Account scan, then staking ledger scan, against the same snapshot.

    Runs sequentially to bound peak memory. Any failure aborts the whole
    composition; there is no partial result.
    """
    accounts = await aggregate_accounts(
        snapshot,
        page_size=page_size,
        observer=observer,
        progress_interval=progress_interval,
        bits=bits,
    )
    unbonding = await aggregate_unbonding(snapshot, bits=bits)

    logger.debug(f"Composed summary over {accounts.accounts} accounts")
    return SummaryResult(
        total=accounts.total,
        locked_up=accounts.locked_up,
        reserved=accounts.reserved,
        unbonding=unbonding,
    )
