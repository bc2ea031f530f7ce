"""In-memory store client used by the unit tests."""

from __future__ import annotations

import copy
import itertools
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from portolan_store.client import StoreClient, StoredObject
from portolan_store.exceptions import EtagConflictError, ObjectNotFoundError

_UNSET = object()


class FakeStore(StoreClient):
    """Dict backed store honouring etags and all-or-nothing batches."""

    def __init__(self) -> None:
        self.objects: Dict[Tuple[str, str], Tuple[Dict[str, Any], str]] = {}
        self.calls: List[tuple] = []
        self.batches: List[List[Dict[str, Any]]] = []
        self._etags = itertools.count(1)

    def seed(self, bucket: str, key: str, value: Mapping[str, Any]) -> str:
        etag = f"etag-{next(self._etags)}"
        self.objects[(bucket, key)] = (dict(value), etag)
        return etag

    def value(self, bucket: str, key: str) -> Dict[str, Any]:
        return self.objects[(bucket, key)][0]

    def _check_etag(self, bucket: str, key: str, options) -> None:
        expected = (options or {}).get("etag", _UNSET)
        if expected is _UNSET:
            return
        current = self.objects.get((bucket, key))
        actual = current[1] if current else None
        if expected != actual:
            raise EtagConflictError(bucket, key, expected, actual)

    def _put(self, bucket: str, key: str, value: Mapping[str, Any]) -> None:
        etag = f"etag-{next(self._etags)}"
        self.objects[(bucket, key)] = (copy.deepcopy(dict(value)), etag)

    async def get_object(self, bucket: str, key: str) -> StoredObject:
        self.calls.append(("get", bucket, key))
        try:
            value, etag = self.objects[(bucket, key)]
        except KeyError:
            raise ObjectNotFoundError(bucket, key)
        return StoredObject(bucket=bucket, key=key, value=copy.deepcopy(value), etag=etag)

    async def put_object(
        self,
        bucket: str,
        key: str,
        value: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.calls.append(("put", bucket, key, dict(value), options))
        self._check_etag(bucket, key, options)
        self._put(bucket, key, value)

    async def del_object(self, bucket: str, key: str) -> None:
        self.calls.append(("del", bucket, key))
        if (bucket, key) not in self.objects:
            raise ObjectNotFoundError(bucket, key)
        del self.objects[(bucket, key)]

    async def batch(self, operations: Sequence[Mapping[str, Any]]) -> None:
        ops = [dict(op) for op in operations]
        self.batches.append(ops)
        for op in ops:
            if op["operation"] == "put":
                self._check_etag(op["bucket"], op["key"], op.get("options"))
            elif (op["bucket"], op["key"]) not in self.objects:
                raise ObjectNotFoundError(op["bucket"], op["key"])
        for op in ops:
            if op["operation"] == "put":
                self._put(op["bucket"], op["key"], op["value"])
            else:
                del self.objects[(op["bucket"], op["key"])]
