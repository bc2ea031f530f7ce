import asyncio

import pytest

from fakes import FakeStore
from portolan_store import producer
from portolan_store.buckets import DEFAULT_BUCKETS
from portolan_store.consumer import apply_batch, get_overlay_mapping, get_underlay_mapping
from portolan_store.exceptions import EtagConflictError, ObjectNotFoundError
from portolan_store.records import OverlayMapping, UnderlayMapping

CN_A = "cn-a"
CN_B = "cn-b"


def test_get_overlay_mapping():
    store = FakeStore()
    asyncio.run(
        producer.add_overlay_mapping(store, mac=7, ip="10.0.0.5", cn_uuid=CN_A, vnet_id=9)
    )

    mapping = asyncio.run(get_overlay_mapping(store, ip="10.0.0.5", vnet_id=9))

    assert mapping == OverlayMapping(mac=7, ip="10.0.0.5", cn_uuid=CN_A, vnet_id=9)


def test_get_underlay_mapping_missing_propagates():
    with pytest.raises(ObjectNotFoundError) as excinfo:
        asyncio.run(get_underlay_mapping(FakeStore(), cn_uuid=CN_A))

    assert excinfo.value.bucket == DEFAULT_BUCKETS.underlay
    assert excinfo.value.key == CN_A


def test_apply_batch_submits_descriptors_once():
    store = FakeStore()
    ops = [
        producer.overlay_mapping_batch(mac=7, ip="10.0.0.5", cn_uuid=CN_B, vnet_id=9),
        producer.underlay_mapping_batch(cn_uuid=CN_B, ip="192.168.1.2", port=4789),
        *producer.vl2_cn_event_batch(vnet_cns=[CN_A, CN_B], vnet_id=9, mac=7),
    ]

    count = asyncio.run(apply_batch(store, ops))

    assert count == 4
    assert store.batches == [[op.to_dict() for op in ops]]
    assert asyncio.run(get_underlay_mapping(store, cn_uuid=CN_B)) == UnderlayMapping(
        cn_uuid=CN_B, ip="192.168.1.2", port=4789
    )
    events = [k for (bucket, k) in store.objects if bucket == DEFAULT_BUCKETS.net_events]
    assert len(events) == 2


def test_apply_batch_empty_is_noop():
    store = FakeStore()

    assert asyncio.run(apply_batch(store, [])) == 0
    assert store.batches == []


def test_apply_batch_error_leaves_store_untouched():
    store = FakeStore()
    events = producer.vl3_cn_event_batch(
        vnet_cns=[CN_A], vnet_id=9, ip="10.0.0.5", mac=7, vlan_id=0
    )
    # An event key that already exists must fail the whole batch.
    store.seed(DEFAULT_BUCKETS.net_events, events[0].key, {"cn_uuid": CN_A})
    ops = [producer.underlay_mapping_batch(cn_uuid=CN_A, ip="192.168.1.2", port=4789), *events]

    with pytest.raises(EtagConflictError):
        asyncio.run(apply_batch(store, ops))

    assert (DEFAULT_BUCKETS.underlay, CN_A) not in store.objects
