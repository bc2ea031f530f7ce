"""Key derivation for portolan buckets."""

from __future__ import annotations


def vnet_mac_ip_key(ip: str, vnet_id: int) -> str:
    """Return the overlay bucket key for ``ip`` on virtual network ``vnet_id``."""

    return f"{ip},{vnet_id}"


def underlay_key(cn_uuid: str) -> str:
    return cn_uuid
