"""
Shared fixtures: an in-memory snapshot standing in for a node bound to one block.
"""
import pytest

from supplyaudit.protocol.types.balances import AccountData, AccountEntry, LedgerEntry, Page, StakingLedger, UnlockChunk
from supplyaudit.protocol.types.common import Table, TransientIOError


def make_account(key, free=0, reserved=0, misc_frozen=0, fee_frozen=0) -> AccountEntry:
    return AccountEntry(
        key=key,
        data=AccountData(free=free, reserved=reserved, misc_frozen=misc_frozen, fee_frozen=fee_frozen),
    )


def make_ledger(key, *chunks) -> LedgerEntry:
    return LedgerEntry(key=key, ledger=StakingLedger(unlocking=[UnlockChunk(value=v) for v in chunks]))


class MemorySnapshot:
    """
    Serves account pages in key order, like a node's paged storage reads.

    Records every start key it is asked for, and can be told to fail
    after a number of page reads.
    """

    def __init__(self, accounts=None, ledgers=None, fail_after_pages=None):
        self.accounts = sorted(accounts or [], key=lambda e: e.key)
        self.ledgers = list(ledgers or [])
        self.fail_after_pages = fail_after_pages
        self.page_requests = []
        self.scans = 0
        self._position = {e.key: i for i, e in enumerate(self.accounts)}

    async def read_page(self, table, page_size, start_key=None):
        assert table is Table.ACCOUNTS
        if self.fail_after_pages is not None and len(self.page_requests) >= self.fail_after_pages:
            raise TransientIOError("connection reset")
        self.page_requests.append(start_key)

        start = 0 if start_key is None else self._position[start_key] + 1
        entries = self.accounts[start:start + page_size]
        return Page(entries=entries, next_key=entries[-1].key if entries else None)

    async def read_all(self, table):
        assert table is Table.STAKING_LEDGER
        self.scans += 1
        return list(self.ledgers)


def account_keys(count):
    return [i.to_bytes(32, "big") for i in range(count)]


@pytest.fixture
def populated_snapshot():
    accounts = [make_account(k, free=i, reserved=1, misc_frozen=i % 3, fee_frozen=i % 5)
                for i, k in enumerate(account_keys(25))]
    ledgers = [make_ledger(b"stash-1", 5, 3), make_ledger(b"stash-2"), LedgerEntry(key=b"stash-3", ledger=None)]
    return MemorySnapshot(accounts=accounts, ledgers=ledgers)
