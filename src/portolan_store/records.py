"""Record payloads stored in the portolan buckets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .buckets import RECORD_VERSION
from .keys import underlay_key, vnet_mac_ip_key


class BatchOperationType(str, Enum):
    PUT = "put"
    DELETE = "delete"


class LogRecordType(str, Enum):
    """Record types understood by the SVP log consumers."""

    VL2 = "SVP_LOG_VL2"
    VL3 = "SVP_LOG_VL3"


@dataclass(frozen=True)
class OverlayMapping:
    """A VNIC's MAC/IP pair and the compute node currently hosting it."""

    mac: int
    ip: str
    cn_uuid: str
    vnet_id: int
    version: int = RECORD_VERSION
    deleted: bool = False

    @property
    def key(self) -> str:
        return vnet_mac_ip_key(self.ip, self.vnet_id)

    def to_value(self) -> Dict[str, Any]:
        return {
            "mac": self.mac,
            "ip": self.ip,
            "cn_uuid": self.cn_uuid,
            "vnet_id": self.vnet_id,
            "version": self.version,
            "deleted": self.deleted,
        }

    @classmethod
    def from_value(cls, value: Mapping[str, Any]) -> "OverlayMapping":
        return cls(
            mac=value["mac"],
            ip=value["ip"],
            cn_uuid=value["cn_uuid"],
            vnet_id=value["vnet_id"],
            version=value.get("version") or RECORD_VERSION,
            deleted=bool(value.get("deleted", False)),
        )


@dataclass(frozen=True)
class UnderlayMapping:
    """The encapsulation endpoint a compute node listens on."""

    cn_uuid: str
    ip: str
    port: int

    @property
    def key(self) -> str:
        return underlay_key(self.cn_uuid)

    def to_value(self) -> Dict[str, Any]:
        return {"cn_uuid": self.cn_uuid, "ip": self.ip, "port": self.port}

    @classmethod
    def from_value(cls, value: Mapping[str, Any]) -> "UnderlayMapping":
        return cls(cn_uuid=value["cn_uuid"], ip=value["ip"], port=value["port"])


@dataclass(frozen=True)
class Vl2Log:
    """Shootdown notice: peers must drop whatever they cached for ``mac``."""

    mac: int
    vnet_id: int

    def to_value(self) -> Dict[str, Any]:
        return {
            "type": LogRecordType.VL2.value,
            "mac": self.mac,
            "vnet_id": self.vnet_id,
        }


@dataclass(frozen=True)
class Vl3Log:
    """ARP injection notice for a newly reachable IP."""

    ip: str
    mac: int
    vlan: int
    vnet_id: int

    def to_value(self) -> Dict[str, Any]:
        return {
            "type": LogRecordType.VL3.value,
            "ip": self.ip,
            "mac": self.mac,
            "vlan": self.vlan,
            "vnet_id": self.vnet_id,
        }


@dataclass(frozen=True)
class NetEvent:
    """One log entry addressed to a single compute node."""

    cn_uuid: str
    vnet_id: int
    record: Union[Vl2Log, Vl3Log]
    version: int = RECORD_VERSION

    def to_value(self) -> Dict[str, Any]:
        return {
            "cn_uuid": self.cn_uuid,
            "vnet_id": self.vnet_id,
            "version": self.version,
            "record": self.record.to_value(),
        }


@dataclass(frozen=True)
class BatchOperation:
    """A single element of a multi-record atomic batch.

    ``value`` and ``options`` are left out of :meth:`to_dict` when unset so
    that delete operations serialise as plain ``{bucket, key, operation}``.
    """

    bucket: str
    key: str
    operation: BatchOperationType
    value: Optional[Dict[str, Any]] = None
    options: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        descriptor: Dict[str, Any] = {
            "bucket": self.bucket,
            "key": self.key,
            "operation": self.operation.value,
        }
        if self.value is not None:
            descriptor["value"] = self.value
        if self.options is not None:
            descriptor["options"] = self.options
        return descriptor
