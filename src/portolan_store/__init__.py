"""Storage helpers for portolan overlay/underlay mappings.

The SVP protocol server answers lookups for a virtual network by reading
three buckets out of an external document store:

* overlay mappings, telling which compute node hosts a given VNIC IP/MAC;
* underlay mappings, telling which IP:port a compute node accepts
  encapsulated traffic on; and
* network events, a per-compute-node log used to push VL2 shootdowns and VL3
  ARP injections to peers when a mapping changes.

This package only builds those records and issues single-key store calls or
batch descriptors for them.  The store client is always supplied by the
caller, see :class:`portolan_store.client.StoreClient`.
"""

from .buckets import DEFAULT_BUCKETS, RECORD_VERSION, Buckets  # noqa: F401
from .client import StoreClient, StoredObject  # noqa: F401
from .consumer import (  # noqa: F401
    apply_batch,
    get_overlay_mapping,
    get_underlay_mapping,
)
from .producer import (  # noqa: F401
    add_overlay_mapping,
    add_underlay_mapping,
    overlay_mapping_batch,
    remove_overlay_mapping,
    remove_underlay_mapping,
    underlay_mapping_batch,
    underlay_mapping_del_batch,
    update_overlay_mapping,
    update_underlay_mapping,
    vl2_cn_event_batch,
    vl3_cn_event_batch,
)
from .records import BatchOperation, OverlayMapping, UnderlayMapping  # noqa: F401

__all__ = [
    "Buckets",
    "DEFAULT_BUCKETS",
    "RECORD_VERSION",
    "StoreClient",
    "StoredObject",
    "BatchOperation",
    "OverlayMapping",
    "UnderlayMapping",
    "add_overlay_mapping",
    "overlay_mapping_batch",
    "update_overlay_mapping",
    "remove_overlay_mapping",
    "add_underlay_mapping",
    "underlay_mapping_batch",
    "underlay_mapping_del_batch",
    "update_underlay_mapping",
    "remove_underlay_mapping",
    "vl2_cn_event_batch",
    "vl3_cn_event_batch",
    "get_overlay_mapping",
    "get_underlay_mapping",
    "apply_batch",
]
