# MIT License
# Copyright (c) 2025 Hashborn

"""
Historical state access.

Binds read-only handles to one block's state on a Substrate node.
"""

from .accessor import SnapshotHandle, bind_snapshot, open_snapshot

__all__ = ["SnapshotHandle", "bind_snapshot", "open_snapshot"]
