"""Bucket names and record version shared by every portolan record."""

from __future__ import annotations

from dataclasses import dataclass

RECORD_VERSION = 1


@dataclass(frozen=True)
class Buckets:
    """Names of the store buckets holding portolan records and their version.

    Attributes
    ----------
    mac_ip:
        Overlay mappings, keyed by ``<ip>,<vnet_id>``.
    underlay:
        Underlay mappings, keyed by compute node UUID.
    net_events:
        Per compute node event log consumed by the SVP server.
    record_version:
        Version stamped on records written without an explicit one.
    """

    mac_ip: str = "portolan_vnet_mac_ip"
    underlay: str = "portolan_underlay_mappings"
    net_events: str = "portolan_net_events"
    record_version: int = RECORD_VERSION


DEFAULT_BUCKETS = Buckets()
