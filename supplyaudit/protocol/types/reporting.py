# MIT License
# Copyright (c) 2025 Hashborn

"""
Reporting service payloads (Subscan scan API).

Parsing is strict: every field below must be present with the given type,
otherwise the run is aborted with SchemaValidationError.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

DECIMAL_STRING = r"^\d+$"

class TokenDetail(BaseModel):
    total_issuance: str = Field(..., pattern=DECIMAL_STRING)
    free_balance: str = Field(..., pattern=DECIMAL_STRING)
    available_balance: str = Field(..., pattern=DECIMAL_STRING)
    locked_balance: str = Field(..., pattern=DECIMAL_STRING)
    reserved_balance: str = Field(..., pattern=DECIMAL_STRING)
    unbonded_locked_balance: Optional[str] = Field(default=None, pattern=DECIMAL_STRING)

class TokenDetailMap(BaseModel):
    detail: Dict[str, TokenDetail]

class TokenInfoResponse(BaseModel):
    data: TokenDetailMap

class BlockSummary(BaseModel):
    block_num: int
    hash: str
    finalized: bool

class BlockList(BaseModel):
    blocks: List[BlockSummary]
    count: int

class BlockListResponse(BaseModel):
    code: int
    message: str
    generated_at: int
    data: BlockList
