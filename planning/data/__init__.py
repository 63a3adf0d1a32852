"""
Data loading, snapshot parsing and record store access.
"""

from .loader import ReferenceDataLoader
from .parser import SnapshotParser
from .record_store import RecordStoreClient, RecordStoreError, create_retry_session

__all__ = [
    "ReferenceDataLoader",
    "SnapshotParser",
    "RecordStoreClient",
    "RecordStoreError",
    "create_retry_session",
]
