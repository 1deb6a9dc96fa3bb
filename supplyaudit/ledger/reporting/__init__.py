# MIT License
# Copyright (c) 2025 Hashborn

"""
Independent supply figures from a block explorer.
"""

from .subscan import get_token_info, get_latest_block

__all__ = ["get_token_info", "get_latest_block"]
