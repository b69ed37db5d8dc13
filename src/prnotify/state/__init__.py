"""Persistence layer.

The notification history is the only shared mutable resource. It is read
in full at the start of a pass and replaced in full at the end.
"""

from prnotify.state.codec import HistoryRecord, deserialize_states, serialize_states
from prnotify.state.compare import diff_histories
from prnotify.state.storage import Storage, StorageBuilder

__all__ = [
    "HistoryRecord",
    "Storage",
    "StorageBuilder",
    "deserialize_states",
    "diff_histories",
    "serialize_states",
]
