"""Read helpers and batch submission for the portolan buckets."""

from __future__ import annotations

import logging
from typing import Iterable

from .buckets import DEFAULT_BUCKETS, Buckets
from .client import StoreClient
from .keys import underlay_key, vnet_mac_ip_key
from .records import BatchOperation, OverlayMapping, UnderlayMapping
from .validation import require_int, require_str

LOG = logging.getLogger(__name__)


async def get_overlay_mapping(
    client: StoreClient,
    *,
    ip: str,
    vnet_id: int,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> OverlayMapping:
    key = vnet_mac_ip_key(require_str(ip, "ip"), require_int(vnet_id, "vnet_id"))
    stored = await client.get_object(buckets.mac_ip, key)
    return OverlayMapping.from_value(stored.value)


async def get_underlay_mapping(
    client: StoreClient,
    *,
    cn_uuid: str,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> UnderlayMapping:
    key = underlay_key(require_str(cn_uuid, "cn_uuid"))
    stored = await client.get_object(buckets.underlay, key)
    return UnderlayMapping.from_value(stored.value)


async def apply_batch(
    client: StoreClient, operations: Iterable[BatchOperation]
) -> int:
    """Submit ``operations`` as one atomic batch and return how many were sent.

    Nothing is sent to the store when ``operations`` is empty.
    """

    descriptors = [op.to_dict() for op in operations]
    if not descriptors:
        LOG.debug("apply_batch called with no operations")
        return 0

    LOG.info("Submitting batch of %d operation(s)", len(descriptors))
    await client.batch(descriptors)
    return len(descriptors)
