"""Exceptions raised by store client implementations.

The mapping helpers never catch these; they reach the caller exactly as the
client raised them.
"""


class StoreError(Exception):
    """Base exception for store operations."""

    pass


class ObjectNotFoundError(StoreError):
    """No object stored under the requested key."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"{bucket}::{key} does not exist")


class EtagConflictError(StoreError):
    """Conditional write rejected because the stored etag changed."""

    def __init__(self, bucket: str, key: str, expected, actual):
        self.bucket = bucket
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{bucket}::{key} has etag {actual!r}, expected {expected!r}"
        )
