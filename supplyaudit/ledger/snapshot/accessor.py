# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot Accessor

Binds a read-only handle to the state of one historical block on a
Substrate node and exposes the two storage reads the aggregators need:
a single page of a map, and a full scan of a (small) map.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

from async_substrate_interface import AsyncSubstrateInterface
from async_substrate_interface.errors import StateDiscardedError, SubstrateRequestException
from websockets.exceptions import WebSocketException

from ...protocol.config.params import DEFAULT_PAGE_SIZE
from ...protocol.types.balances import AccountData, AccountEntry, LedgerEntry, Page, StakingLedger
from ...protocol.types.common import (
    RemoteConnectionError,
    SnapshotUnavailable,
    Table,
    TransientIOError,
    UnknownBlock,
)

logger = logging.getLogger(__name__)

# Node error texts meaning the block's state has been pruned, for errors
# the client does not raise as StateDiscardedError
PRUNED_STATE_MARKERS = ("state already discarded", "state discarded", "unknownblock", "unknown block", "state not available")

NETWORK_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)
READ_ERRORS = (StateDiscardedError, SubstrateRequestException) + NETWORK_ERRORS


def _unwrap(obj: Any) -> Any:
    """Strip the ScaleObj wrapper some decoders put around query results."""
    return getattr(obj, "value", obj)


def decode_account(key: Any, value: Any) -> AccountEntry:
    info = _unwrap(value) or {}
    return AccountEntry(key=_unwrap(key), data=AccountData.model_validate(info.get("data", {})))


def decode_ledger(key: Any, value: Any) -> LedgerEntry:
    raw = _unwrap(value)
    ledger = StakingLedger.model_validate(raw) if raw else None
    return LedgerEntry(key=_unwrap(key), ledger=ledger)


class SnapshotHandle:
    """
    Read-only view of chain state frozen at `block_hash`.

    The handle holds no mutable state of its own and may be shared by
    independent aggregation runs.
    """

    def __init__(self, substrate: AsyncSubstrateInterface, block_hash: str, endpoint: Optional[str] = None):
        self.substrate = substrate
        self.block_hash = block_hash
        self.endpoint = endpoint

    def _translate(self, table: Table, error: Exception) -> Exception:
        message = str(error)
        if isinstance(error, StateDiscardedError):
            return SnapshotUnavailable(f"State for block {self.block_hash} is no longer available: {message}")
        if isinstance(error, SubstrateRequestException) and any(
            marker in message.lower() for marker in PRUNED_STATE_MARKERS
        ):
            return SnapshotUnavailable(f"State for block {self.block_hash} is no longer available: {message}")
        return TransientIOError(f"Reading {table.value} at {self.block_hash} failed: {message}")

    async def read_page(self, table: Table, page_size: int, start_key: Any = None) -> Page:
        """
        Fetch at most `page_size` entries of `table`, starting after `start_key`.

        Raises:
            SnapshotUnavailable: If the node pruned the bound block's state
            TransientIOError: On network or RPC failure
        """
        if table is not Table.ACCOUNTS:
            raise ValueError(f"Paged reads are not supported for {table.value}")

        try:
            result = await self.substrate.query_map(
                module=table.module,
                storage_function=table.storage_function,
                block_hash=self.block_hash,
                page_size=page_size,
                start_key=start_key,
            )
        except READ_ERRORS as e:
            raise self._translate(table, e) from e

        # Only the first page is loaded; iterating `result` would fetch more
        entries = [decode_account(k, v) for k, v in result.records]
        return Page(entries=entries, next_key=result.last_key if entries else None)

    async def read_all(self, table: Table) -> List[LedgerEntry]:
        """
        Read every entry of `table` in one logical scan.

        Raises:
            SnapshotUnavailable: If the node pruned the bound block's state
            TransientIOError: On network or RPC failure
        """
        if table is not Table.STAKING_LEDGER:
            raise ValueError(f"Full scans are not supported for {table.value}")

        entries: List[LedgerEntry] = []
        try:
            result = await self.substrate.query_map(
                module=table.module,
                storage_function=table.storage_function,
                block_hash=self.block_hash,
                page_size=DEFAULT_PAGE_SIZE,
            )
            async for key, value in result:
                entries.append(decode_ledger(key, value))
        except READ_ERRORS as e:
            raise self._translate(table, e) from e

        logger.debug(f"Read {len(entries)} entries from {table.value}")
        return entries

    async def close(self):
        await self.substrate.close()


async def bind_snapshot(endpoint: str, block_hash: str) -> SnapshotHandle:
    """
    Connect to `endpoint` and bind a handle to `block_hash`.

    Raises:
        RemoteConnectionError: If the endpoint cannot be reached
        UnknownBlock: If the node has no header for `block_hash`
    """
    logger.info(f"Connecting to {endpoint}...")
    substrate = AsyncSubstrateInterface(endpoint)
    try:
        await substrate.initialize()
    except NETWORK_ERRORS as e:
        raise RemoteConnectionError(f"Cannot reach {endpoint}: {e}") from e

    try:
        header = await substrate.get_block_header(block_hash)
    except SubstrateRequestException as e:
        await substrate.close()
        raise UnknownBlock(f"Block {block_hash} not recognized by {endpoint}: {e}") from e
    except NETWORK_ERRORS as e:
        await substrate.close()
        raise RemoteConnectionError(f"Lost connection to {endpoint}: {e}") from e

    if not header:
        await substrate.close()
        raise UnknownBlock(f"Block {block_hash} not recognized by {endpoint}")

    logger.info(f"Bound snapshot at block {block_hash}")
    return SnapshotHandle(substrate, block_hash, endpoint=endpoint)


@asynccontextmanager
async def open_snapshot(endpoint: str, block_hash: str) -> AsyncIterator[SnapshotHandle]:
    handle = await bind_snapshot(endpoint, block_hash)
    try:
        yield handle
    finally:
        await handle.close()
