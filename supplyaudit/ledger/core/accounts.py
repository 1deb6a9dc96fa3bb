# MIT License
# Copyright (c) 2025 Hashborn

import time
from dataclasses import dataclass
from typing import Optional
from ...protocol.types.balances import AccountData, AccountTotals
from ...protocol.types.common import Table
from ...protocol.config.params import BALANCE_BITS, DEFAULT_PAGE_SIZE, DEFAULT_PROGRESS_INTERVAL
from ..observability.metrics import ProgressObserver
from .pager import iter_pages
from .wide import checked_add, max_balance

@dataclass
class RunningTotals:
    """Accumulator for one account scan. Not shared between runs."""
    total: int = 0
    locked_up: int = 0
    reserved: int = 0
    accounts: int = 0
    bits: int = BALANCE_BITS

    def fold(self, data: AccountData):
        self.total = checked_add(self.total, checked_add(data.free, data.reserved, self.bits), self.bits)
        # misc_frozen and fee_frozen are overlapping locks: count the larger, never the sum
        self.locked_up = checked_add(self.locked_up, max_balance(data.misc_frozen, data.fee_frozen), self.bits)
        self.reserved = checked_add(self.reserved, data.reserved, self.bits)
        self.accounts += 1

    def freeze(self) -> AccountTotals:
        return AccountTotals(
            total=self.total,
            locked_up=self.locked_up,
            reserved=self.reserved,
            accounts=self.accounts,
        )

async def aggregate_accounts(
    snapshot,
    page_size: int = DEFAULT_PAGE_SIZE,
    observer: Optional[ProgressObserver] = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    bits: int = BALANCE_BITS,
) -> AccountTotals:
    """
    Walks the whole account table once and folds every balance.

    Args:
        snapshot: Handle bound to one block (see ledger.snapshot)
        page_size: Entries requested per page
        observer: Receives progress every `progress_interval` accounts
        progress_interval: Accounts between progress reports
        bits: Width of the unsigned accumulators

    Returns:
        AccountTotals with the account count of the table at the snapshot

    Raises:
        SnapshotUnavailable, TransientIOError: From the page reads, unchanged
        MalformedPage: If a non-empty page carries no continuation key
        BalanceOverflowError: If an accumulator leaves the unsigned range
    """
    if progress_interval <= 0:
        raise ValueError(f"progress_interval must be positive, got {progress_interval}")

    observer = observer or ProgressObserver()
    totals = RunningTotals(bits=bits)
    start = time.perf_counter()
    next_report = progress_interval

    async for page in iter_pages(snapshot, Table.ACCOUNTS, page_size):
        for entry in page.entries:
            totals.fold(entry.data)
        observer.on_page(len(page))

        if totals.accounts >= next_report:
            elapsed = time.perf_counter() - start
            rate = totals.accounts / elapsed if elapsed > 0 else 0.0
            observer.on_progress(totals.accounts, rate)
            next_report = (totals.accounts // progress_interval + 1) * progress_interval

    observer.on_complete(totals.accounts, time.perf_counter() - start)
    return totals.freeze()
