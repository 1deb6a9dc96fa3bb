# MIT License
# Copyright (c) 2025 Hashborn

from enum import Enum


class Table(str, Enum):
    """Storage tables read by the aggregators (pallet, storage item)."""
    ACCOUNTS = "System.Account"
    STAKING_LEDGER = "Staking.Ledger"

    @property
    def module(self) -> str:
        return self.value.split(".")[0]

    @property
    def storage_function(self) -> str:
        return self.value.split(".")[1]


class SupplyAuditError(Exception):
    pass


class RemoteConnectionError(SupplyAuditError, ConnectionError):
    """Remote endpoint (node or reporting service) cannot be reached."""
    pass


class UnknownBlock(SupplyAuditError):
    """Block hash is not known to the node."""
    pass


class SnapshotUnavailable(SupplyAuditError):
    """Node no longer retains state for the bound block."""
    pass


class TransientIOError(SupplyAuditError):
    """A single read failed on network or timeout. Not retried here."""
    pass


class SchemaValidationError(SupplyAuditError):
    """Reporting payload does not match the expected shape."""
    pass


class BalanceOverflowError(SupplyAuditError, OverflowError):
    pass


class MalformedPage(SupplyAuditError):
    """Node returned a page that breaks the paging contract. Retrying will not help."""
    pass


class ConfigurationError(SupplyAuditError, ValueError):
    pass
