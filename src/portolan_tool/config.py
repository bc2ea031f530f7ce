"""YAML configuration loader for the portolan batch tool."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from portolan_store.buckets import DEFAULT_BUCKETS, RECORD_VERSION, Buckets

_BUCKET_FIELDS = ("mac_ip", "underlay", "net_events")


@dataclass
class ToolConfig:
    buckets: Buckets = field(default_factory=Buckets)

    @property
    def record_version(self) -> int:
        return self.buckets.record_version


def _parse_buckets(section: dict, record_version: int) -> Buckets:
    unknown = set(section) - set(_BUCKET_FIELDS)
    if unknown:
        raise ValueError(f"Unknown bucket(s) in configuration: {sorted(unknown)}")

    names = {}
    for name in _BUCKET_FIELDS:
        value = section.get(name, getattr(DEFAULT_BUCKETS, name))
        if not isinstance(value, str) or not value:
            raise ValueError(f"bucket '{name}' must be a non-empty string")
        names[name] = value
    return Buckets(**names, record_version=record_version)


def load_config(path: Path) -> ToolConfig:
    data = yaml.safe_load(Path(path).read_text())
    if data is None:
        return ToolConfig()
    if not isinstance(data, dict):
        raise ValueError("Tool configuration must be a mapping")

    buckets_section = data.get("buckets", {})
    if not isinstance(buckets_section, dict):
        raise ValueError("'buckets' section must be a mapping")

    record_version = data.get("record_version", RECORD_VERSION)
    if isinstance(record_version, bool) or not isinstance(record_version, int):
        raise ValueError("'record_version' must be an integer")
    if record_version < 1:
        raise ValueError("'record_version' must be a positive integer")

    return ToolConfig(
        buckets=_parse_buckets(buckets_section, record_version),
    )
