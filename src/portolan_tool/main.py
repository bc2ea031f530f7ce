"""Entry point for the portolan batch tool.

Prints the JSON batch descriptors for overlay/underlay mappings and network
event logs so they can be reviewed or fed to a store client by hand.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence, TextIO

import yaml

from portolan_store import producer
from portolan_store.records import BatchOperation

from .config import ToolConfig, load_config

LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def parse_mac(value: str) -> int:
    """Parse ``aa:bb:cc:dd:ee:ff`` or a plain integer into the numeric MAC."""

    if ":" in value or "-" in value:
        octets = value.replace("-", ":").split(":")
        if len(octets) != 6:
            raise argparse.ArgumentTypeError(f"invalid MAC address '{value}'")
        try:
            values = [int(o, 16) for o in octets]
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid MAC address '{value}'")
        if any(not 0 <= v <= 0xFF for v in values):
            raise argparse.ArgumentTypeError(f"invalid MAC address '{value}'")
        return int.from_bytes(bytes(values), "big")
    try:
        mac = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid MAC address '{value}'")
    if not 0 <= mac < 1 << 48:
        raise argparse.ArgumentTypeError(f"MAC address '{value}' out of range")
    return mac


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print portolan batch descriptors as JSON"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML file overriding bucket names / record version",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    overlay = sub.add_parser("overlay", help="put an overlay mapping")
    overlay.add_argument("--mac", type=parse_mac, required=True)
    overlay.add_argument("--ip", required=True)
    overlay.add_argument("--cn-uuid", required=True)
    overlay.add_argument("--vnet-id", type=int, required=True)
    overlay.add_argument("--deleted", action="store_true")

    underlay = sub.add_parser("underlay", help="put an underlay mapping")
    underlay.add_argument("--cn-uuid", required=True)
    underlay.add_argument("--ip", required=True)
    underlay.add_argument("--port", type=int, required=True)

    underlay_del = sub.add_parser("underlay-delete", help="delete an underlay mapping")
    underlay_del.add_argument("--cn-uuid", required=True)

    vl2 = sub.add_parser("vl2", help="VL2 shootdown logs for compute nodes")
    vl2.add_argument("--vnet-id", type=int, required=True)
    vl2.add_argument("--mac", type=parse_mac, required=True)
    vl2.add_argument("--cn", dest="cns", action="append", required=True,
                     help="Compute node UUID (repeatable)")

    vl3 = sub.add_parser("vl3", help="VL3 ARP injection logs for compute nodes")
    vl3.add_argument("--vnet-id", type=int, required=True)
    vl3.add_argument("--ip", required=True)
    vl3.add_argument("--mac", type=parse_mac, required=True)
    vl3.add_argument("--vlan-id", type=int, required=True)
    vl3.add_argument("--cn", dest="cns", action="append", required=True,
                     help="Compute node UUID (repeatable)")

    return parser


def build_operations(args: argparse.Namespace, config: ToolConfig) -> List[BatchOperation]:
    buckets = config.buckets

    if args.command == "overlay":
        return [
            producer.overlay_mapping_batch(
                mac=args.mac,
                ip=args.ip,
                cn_uuid=args.cn_uuid,
                vnet_id=args.vnet_id,
                deleted=args.deleted,
                buckets=buckets,
            )
        ]
    if args.command == "underlay":
        return [
            producer.underlay_mapping_batch(
                cn_uuid=args.cn_uuid, ip=args.ip, port=args.port, buckets=buckets
            )
        ]
    if args.command == "underlay-delete":
        return [producer.underlay_mapping_del_batch(cn_uuid=args.cn_uuid, buckets=buckets)]
    if args.command == "vl2":
        return producer.vl2_cn_event_batch(
            vnet_cns=args.cns,
            vnet_id=args.vnet_id,
            mac=args.mac,
            buckets=buckets,
        )
    if args.command == "vl3":
        return producer.vl3_cn_event_batch(
            vnet_cns=args.cns,
            vnet_id=args.vnet_id,
            ip=args.ip,
            mac=args.mac,
            vlan_id=args.vlan_id,
            buckets=buckets,
        )
    raise ValueError(f"unsupported command '{args.command}'")


def main(argv: Sequence[str] | None = None, stdout: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    out = stdout if stdout is not None else sys.stdout

    try:
        config = load_config(args.config) if args.config else ToolConfig()
        operations = build_operations(args, config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        LOG.error("%s", exc)
        return 2

    LOG.debug("Built %d batch operation(s) for '%s'", len(operations), args.command)
    json.dump([op.to_dict() for op in operations], out, indent=2, sort_keys=True)
    out.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
