# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, List, Optional

class AccountData(BaseModel):
    """Balance components of one account (raw planck units)."""
    free: int = Field(default=0, ge=0)
    reserved: int = Field(default=0, ge=0)
    misc_frozen: int = Field(default=0, ge=0)
    fee_frozen: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _single_frozen_field(cls, data: Any) -> Any:
        # Newer balances pallets replace misc_frozen/fee_frozen with one `frozen`
        if isinstance(data, dict) and "frozen" in data and "misc_frozen" not in data:
            data = dict(data)
            frozen = data.pop("frozen")
            data["misc_frozen"] = frozen
            data["fee_frozen"] = frozen
        return data

class AccountEntry(BaseModel):
    key: Any                        # Decoded map key (account id), never interpreted
    data: AccountData

class Page(BaseModel):
    entries: List[AccountEntry] = Field(default_factory=list)
    next_key: Any = None            # Storage key of the last entry, None when the page is empty

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

class UnlockChunk(BaseModel):
    value: int = Field(ge=0)
    era: int = 0

class StakingLedger(BaseModel):
    stash: Any = None
    total: int = 0
    active: int = 0
    unlocking: List[UnlockChunk] = Field(default_factory=list)

class LedgerEntry(BaseModel):
    key: Any = None
    ledger: Optional[StakingLedger] = None   # None when the stored value is absent

class SummaryResult(BaseModel):
    """Supply totals for one snapshot. Immutable."""
    model_config = ConfigDict(frozen=True)

    total: int
    locked_up: int
    reserved: int
    unbonding: int

    @property
    def circulating(self) -> int:
        return self.total - self.locked_up

class AccountTotals(BaseModel):
    """Result of one full account scan."""
    model_config = ConfigDict(frozen=True)

    total: int
    locked_up: int
    reserved: int
    accounts: int
