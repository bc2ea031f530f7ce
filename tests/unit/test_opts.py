from oslo_config import cfg

from portolan_store import opts, producer
from portolan_store.buckets import DEFAULT_BUCKETS, Buckets


def build_conf(args=None) -> cfg.ConfigOpts:
    conf = cfg.ConfigOpts()
    opts.register_opts(conf)
    conf(args or [], default_config_files=[])
    return conf


def test_defaults_match_default_buckets():
    conf = build_conf()

    assert opts.buckets_from_conf(conf) == DEFAULT_BUCKETS
    assert conf.portolan.record_version == 1


def test_overrides(tmp_path):
    config_file = tmp_path / "portolan.conf"
    config_file.write_text(
        "[portolan]\n"
        "mac_ip_bucket = lab_mac_ip\n"
        "net_events_bucket = lab_events\n"
        "record_version = 2\n"
    )

    conf = build_conf(["--config-file", str(config_file)])

    assert opts.buckets_from_conf(conf) == Buckets(
        mac_ip="lab_mac_ip",
        underlay=DEFAULT_BUCKETS.underlay,
        net_events="lab_events",
        record_version=2,
    )
    assert conf.portolan.record_version == 2


def test_list_opts():
    [(group, options)] = opts.list_opts()

    assert group == "portolan"
    assert {o.name for o in options} == {
        "mac_ip_bucket",
        "underlay_bucket",
        "net_events_bucket",
        "record_version",
    }


def test_configured_record_version_reaches_produced_records(tmp_path):
    config_file = tmp_path / "portolan.conf"
    config_file.write_text("[portolan]\nrecord_version = 5\n")
    buckets = opts.buckets_from_conf(build_conf(["--config-file", str(config_file)]))

    overlay = producer.overlay_mapping_batch(
        mac=7, ip="10.0.0.5", cn_uuid="cn-a", vnet_id=9, buckets=buckets
    )
    events = producer.vl2_cn_event_batch(
        vnet_cns=["cn-a"], vnet_id=9, mac=7, buckets=buckets
    )
    explicit = producer.overlay_mapping_batch(
        mac=7, ip="10.0.0.5", cn_uuid="cn-a", vnet_id=9, version=2, buckets=buckets
    )

    assert overlay.value["version"] == 5
    assert events[0].value["version"] == 5
    assert explicit.value["version"] == 2
