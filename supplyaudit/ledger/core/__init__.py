# MIT License
# Copyright (c) 2025 Hashborn

"""
Aggregation engine: paged account scan, staking ledger scan, summary.
"""

from .pager import next_page, iter_pages
from .accounts import RunningTotals, aggregate_accounts
from .staking import aggregate_unbonding
from .summary import compose

__all__ = ["next_page", "iter_pages", "RunningTotals", "aggregate_accounts", "aggregate_unbonding", "compose"]
