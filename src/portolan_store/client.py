"""Abstract interface for the document store backing portolan buckets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class StoredObject:
    """An object as returned by :meth:`StoreClient.get_object`."""

    bucket: str
    key: str
    value: Mapping[str, Any]
    etag: Optional[str] = None


class StoreClient(ABC):
    """Store client injected by callers of the mapping helpers.

    Implementations provide atomic single-key operations and an atomic
    multi-record batch.  A ``put_object`` whose options carry an ``etag`` is
    conditional: it must fail with
    :class:`~portolan_store.exceptions.EtagConflictError` unless the stored
    etag matches, and an ``etag`` of ``None`` means the key must not exist yet.
    """

    @abstractmethod
    async def get_object(self, bucket: str, key: str) -> StoredObject:
        """Return the object stored under ``key`` in ``bucket``."""

    @abstractmethod
    async def put_object(
        self,
        bucket: str,
        key: str,
        value: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Store ``value`` under ``key`` in ``bucket``."""

    @abstractmethod
    async def del_object(self, bucket: str, key: str) -> None:
        """Delete the object stored under ``key`` in ``bucket``."""

    @abstractmethod
    async def batch(self, operations: Sequence[Mapping[str, Any]]) -> None:
        """Apply the batch descriptors in ``operations`` atomically."""
