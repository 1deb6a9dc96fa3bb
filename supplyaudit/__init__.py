# MIT License
# Copyright (c) 2025 Hashborn

"""
supplyaudit - token supply statistics for Substrate ledgers.

Walks every account and staking ledger at one historical block and
compares the totals with an independent block explorer.
"""

__version__ = "0.1.0"
