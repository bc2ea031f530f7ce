"""oslo.config options for services embedding the mapping helpers.

Services built on oslo.config register these options and turn them into a
:class:`~portolan_store.buckets.Buckets` with :func:`buckets_from_conf`.
"""

from oslo_config import cfg

from .buckets import DEFAULT_BUCKETS, RECORD_VERSION, Buckets

GROUP_NAME = 'portolan'

portolan_opts = [
    cfg.StrOpt('mac_ip_bucket',
               default=DEFAULT_BUCKETS.mac_ip,
               help='Bucket holding overlay (IP/MAC to compute node) mappings.'),
    cfg.StrOpt('underlay_bucket',
               default=DEFAULT_BUCKETS.underlay,
               help='Bucket holding compute node underlay IP:port mappings.'),
    cfg.StrOpt('net_events_bucket',
               default=DEFAULT_BUCKETS.net_events,
               help='Bucket holding per compute node VL2/VL3 event logs.'),
    cfg.IntOpt('record_version',
               default=RECORD_VERSION,
               min=1,
               help='Version stamped on records that do not carry one.'),
]


def register_opts(conf=None):
    """Register the portolan options on ``conf`` (global CONF by default)."""
    conf = conf if conf is not None else cfg.CONF
    conf.register_opts(portolan_opts, group=GROUP_NAME)
    return conf


def list_opts():
    return [(GROUP_NAME, portolan_opts)]


def buckets_from_conf(conf=None):
    """Build a Buckets instance (names and record version) from registered options."""
    conf = conf if conf is not None else cfg.CONF
    group = getattr(conf, GROUP_NAME)
    return Buckets(
        mac_ip=group.mac_ip_bucket,
        underlay=group.underlay_bucket,
        net_events=group.net_events_bucket,
        record_version=group.record_version,
    )
