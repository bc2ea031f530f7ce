"""Write helpers for the portolan buckets.

Every helper either issues a single store call through the caller's
:class:`~portolan_store.client.StoreClient` or returns a
:class:`~portolan_store.records.BatchOperation` meant to be submitted as part
of a larger atomic batch.  Store errors are never caught here.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, List, Optional, Union

from .buckets import DEFAULT_BUCKETS, RECORD_VERSION, Buckets
from .client import StoreClient
from .keys import underlay_key, vnet_mac_ip_key
from .records import (
    BatchOperation,
    BatchOperationType,
    NetEvent,
    OverlayMapping,
    UnderlayMapping,
    Vl2Log,
    Vl3Log,
)
from .validation import (
    optional_bool,
    optional_int,
    optional_str,
    require_int,
    require_str,
    require_str_list,
)

LOG = logging.getLogger(__name__)


def _overlay_record(
    *,
    mac: int,
    ip: str,
    cn_uuid: str,
    vnet_id: int,
    version: Optional[int] = None,
    deleted: Optional[bool] = None,
    default_version: int = RECORD_VERSION,
) -> OverlayMapping:
    return OverlayMapping(
        mac=require_int(mac, "mac"),
        ip=require_str(ip, "ip"),
        cn_uuid=require_str(cn_uuid, "cn_uuid"),
        vnet_id=require_int(vnet_id, "vnet_id"),
        version=optional_int(version, "version") or default_version,
        deleted=bool(optional_bool(deleted, "deleted")),
    )


def _underlay_record(*, cn_uuid: str, ip: str, port: int) -> UnderlayMapping:
    return UnderlayMapping(
        cn_uuid=require_str(cn_uuid, "cn_uuid"),
        ip=require_str(ip, "ip"),
        port=require_int(port, "port"),
    )


def _new_event_key() -> str:
    return str(uuid.uuid4())


# ----------------------------------------------------------------------
# Overlay mappings
# ----------------------------------------------------------------------
async def add_overlay_mapping(
    client: StoreClient,
    *,
    mac: int,
    ip: str,
    cn_uuid: str,
    vnet_id: int,
    version: Optional[int] = None,
    deleted: Optional[bool] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> None:
    """Store the overlay mapping for ``ip`` on ``vnet_id`` unconditionally."""

    record = _overlay_record(
        mac=mac,
        ip=ip,
        cn_uuid=cn_uuid,
        vnet_id=vnet_id,
        version=version,
        deleted=deleted,
        default_version=buckets.record_version,
    )
    LOG.debug("Adding overlay mapping %s -> %s", record.key, record.cn_uuid)
    await client.put_object(buckets.mac_ip, record.key, record.to_value())


def overlay_mapping_batch(
    *,
    mac: int,
    ip: str,
    cn_uuid: str,
    vnet_id: int,
    version: Optional[int] = None,
    deleted: Optional[bool] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> BatchOperation:
    """Return a batch ``put`` of the overlay record for ``ip`` on ``vnet_id``."""

    record = _overlay_record(
        mac=mac,
        ip=ip,
        cn_uuid=cn_uuid,
        vnet_id=vnet_id,
        version=version,
        deleted=deleted,
        default_version=buckets.record_version,
    )
    return BatchOperation(
        bucket=buckets.mac_ip,
        key=record.key,
        operation=BatchOperationType.PUT,
        value=record.to_value(),
    )


async def update_overlay_mapping(
    client: StoreClient,
    *,
    mac: int,
    ip: str,
    vnet_id: int,
    cn_uuid: Optional[str] = None,
    version: Optional[int] = None,
    deleted: Optional[bool] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> OverlayMapping:
    """Merge the supplied fields into the stored overlay record.

    ``mac`` and ``vnet_id`` are kept from the stored record; ``cn_uuid``,
    ``version`` and ``deleted`` are only replaced when given.  The write is
    conditional on the etag returned by the read, so a concurrent update
    surfaces as the client's etag conflict error rather than a lost write.
    """

    require_int(mac, "mac")
    require_int(vnet_id, "vnet_id")
    require_str(ip, "ip")
    optional_str(cn_uuid, "cn_uuid")
    optional_int(version, "version")
    optional_bool(deleted, "deleted")

    key = vnet_mac_ip_key(ip, vnet_id)
    stored = await client.get_object(buckets.mac_ip, key)
    current = stored.value

    record = OverlayMapping(
        mac=current["mac"],
        vnet_id=current["vnet_id"],
        ip=ip,
        cn_uuid=cn_uuid or current["cn_uuid"],
        version=version or current.get("version") or buckets.record_version,
        deleted=deleted if deleted is not None else bool(current.get("deleted", False)),
    )

    LOG.debug("Updating overlay mapping %s (etag=%s)", key, stored.etag)
    await client.put_object(
        buckets.mac_ip, key, record.to_value(), {"etag": stored.etag}
    )
    return record


async def remove_overlay_mapping(
    client: StoreClient,
    *,
    ip: str,
    vnet_id: int,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> None:
    require_str(ip, "ip")
    require_int(vnet_id, "vnet_id")

    key = vnet_mac_ip_key(ip, vnet_id)
    LOG.debug("Removing overlay mapping %s", key)
    await client.del_object(buckets.mac_ip, key)


# ----------------------------------------------------------------------
# Underlay mappings
# ----------------------------------------------------------------------
async def add_underlay_mapping(
    client: StoreClient,
    *,
    cn_uuid: str,
    ip: str,
    port: int,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> None:
    record = _underlay_record(cn_uuid=cn_uuid, ip=ip, port=port)
    LOG.debug("Adding underlay mapping %s -> %s:%d", record.cn_uuid, record.ip, record.port)
    await client.put_object(buckets.underlay, record.key, record.to_value())


def underlay_mapping_batch(
    *,
    cn_uuid: str,
    ip: str,
    port: int,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> BatchOperation:
    """Return a batch ``put`` of the underlay record for ``cn_uuid``."""

    record = _underlay_record(cn_uuid=cn_uuid, ip=ip, port=port)
    return BatchOperation(
        bucket=buckets.underlay,
        key=record.key,
        operation=BatchOperationType.PUT,
        value=record.to_value(),
    )


def underlay_mapping_del_batch(
    *,
    cn_uuid: str,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> BatchOperation:
    """Return a batch ``delete`` of the underlay record for ``cn_uuid``."""

    return BatchOperation(
        bucket=buckets.underlay,
        key=underlay_key(require_str(cn_uuid, "cn_uuid")),
        operation=BatchOperationType.DELETE,
    )


async def update_underlay_mapping(
    client: StoreClient,
    *,
    cn_uuid: str,
    ip: Optional[str] = None,
    port: Optional[int] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> UnderlayMapping:
    """Merge ``ip``/``port`` into the stored underlay record for ``cn_uuid``."""

    require_str(cn_uuid, "cn_uuid")
    optional_str(ip, "ip")
    optional_int(port, "port")

    key = underlay_key(cn_uuid)
    stored = await client.get_object(buckets.underlay, key)
    current = stored.value

    record = UnderlayMapping(
        cn_uuid=current["cn_uuid"],
        ip=ip or current["ip"],
        port=port or current["port"],
    )

    LOG.debug("Updating underlay mapping %s (etag=%s)", key, stored.etag)
    await client.put_object(
        buckets.underlay, key, record.to_value(), {"etag": stored.etag}
    )
    return record


async def remove_underlay_mapping(
    client: StoreClient,
    *,
    cn_uuid: str,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> None:
    key = underlay_key(require_str(cn_uuid, "cn_uuid"))
    LOG.debug("Removing underlay mapping %s", key)
    await client.del_object(buckets.underlay, key)


# ----------------------------------------------------------------------
# Network event logs
# ----------------------------------------------------------------------
def _event_batch(
    vnet_cns: Iterable[str],
    vnet_id: int,
    record: Union[Vl2Log, Vl3Log],
    version: Optional[int],
    buckets: Buckets,
) -> List[BatchOperation]:
    batch = []
    for cn_uuid in vnet_cns:
        event = NetEvent(
            cn_uuid=cn_uuid,
            vnet_id=vnet_id,
            record=record,
            version=version or buckets.record_version,
        )
        # etag None: the put fails if the (random) key is already taken.
        batch.append(
            BatchOperation(
                bucket=buckets.net_events,
                key=_new_event_key(),
                operation=BatchOperationType.PUT,
                value=event.to_value(),
                options={"etag": None},
            )
        )
    return batch


def vl2_cn_event_batch(
    *,
    vnet_cns: Iterable[str],
    vnet_id: int,
    mac: int,
    version: Optional[int] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> List[BatchOperation]:
    """Return VL2 shootdown log puts, one per compute node in ``vnet_cns``.

    These are needed whenever an IP:MAC mapping goes away, which includes the
    old side of an update.
    """

    cns = require_str_list(vnet_cns, "vnet_cns")
    require_int(vnet_id, "vnet_id")
    require_int(mac, "mac")
    optional_int(version, "version")

    record = Vl2Log(mac=mac, vnet_id=vnet_id)
    return _event_batch(cns, vnet_id, record, version, buckets)


def vl3_cn_event_batch(
    *,
    vnet_cns: Iterable[str],
    vnet_id: int,
    ip: str,
    mac: int,
    vlan_id: int,
    version: Optional[int] = None,
    buckets: Buckets = DEFAULT_BUCKETS,
) -> List[BatchOperation]:
    """Return VL3 ARP injection log puts, one per compute node in ``vnet_cns``.

    Produced when a new IP becomes reachable on NIC creation or update.
    """

    cns = require_str_list(vnet_cns, "vnet_cns")
    require_int(vnet_id, "vnet_id")
    require_str(ip, "ip")
    require_int(mac, "mac")
    require_int(vlan_id, "vlan_id")
    optional_int(version, "version")

    record = Vl3Log(ip=ip, mac=mac, vlan=vlan_id, vnet_id=vnet_id)
    return _event_batch(cns, vnet_id, record, version, buckets)
