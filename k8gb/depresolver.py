"""Operator configuration model and resolution of Gslb spec defaults."""

from __future__ import annotations

import enum
import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Protocol

from k8gb.api import Gslb, GslbSpec, Strategy
from k8gb.validator import field as check_field

DEFAULT_DNS_TTL_SECONDS = 30
DEFAULT_SPLIT_BRAIN_THRESHOLD_SECONDS = 300


class LogFormat(enum.Enum):
    """How the logger prints records."""

    JSON = 1
    SIMPLE = 2
    NO_FORMAT = 4

    def __str__(self) -> str:
        if self is LogFormat.JSON:
            return "json"
        if self is LogFormat.SIMPLE:
            return "simple"
        return "noformat"


class EdgeDNSType(enum.IntFlag):
    """Edge DNS providers k8gb connects to; several may be combined."""

    NO_EDGE_DNS = 1
    INFOBLOX = 2
    ROUTE53 = 4
    NS1 = 8


@dataclass
class LogSettings:
    """Logger configuration."""

    level: int = logging.INFO
    format: LogFormat = LogFormat.SIMPLE
    no_color: bool = False


@dataclass
class Infoblox:
    """Infoblox connection settings."""

    host: str = ""
    version: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    http_request_timeout: int = 20
    http_pool_connections: int = 10


@dataclass
class Override:
    """Switches that change behaviour in test environments."""

    fake_dns_enabled: bool = False
    fake_infoblox_enabled: bool = False


@dataclass
class Config:
    """Operator configuration."""

    reconcile_requeue_seconds: int = 30
    cluster_geo_tag: str = ""
    ext_clusters_geo_tags: list[str] = field(default_factory=list)
    edge_dns_type: EdgeDNSType = EdgeDNSType.NO_EDGE_DNS
    edge_dns_server: str = ""
    edge_dns_zone: str = ""
    dns_zone: str = ""
    k8gb_namespace: str = ""
    infoblox: Infoblox = field(default_factory=Infoblox)
    override: Override = field(default_factory=Override)
    route53_enabled: bool = False
    ns1_enabled: bool = False
    core_dns_exposed: bool = False
    log: LogSettings = field(default_factory=LogSettings)


class _GslbUpdater(Protocol):
    def update(self, gslb: Gslb) -> None: ...


def _validate_strategy(strategy: Strategy) -> None:
    check_field("DNSTtlSeconds", strategy.dns_ttl_seconds).is_higher_or_equal_to_zero()
    check_field(
        "SplitBrainThresholdSeconds", strategy.split_brain_threshold_seconds
    ).is_higher_or_equal_to_zero()


class DependencyResolver:
    """Fills in and validates Gslb specs, remembering the last one it saw."""

    def __init__(self) -> None:
        self._spec = GslbSpec()
        self._spec_error: Exception | None = None

    def resolve_gslb_spec(self, gslb: Gslb, client: _GslbUpdater | None) -> None:
        """Apply strategy defaults, validate and store the Gslb through ``client``.

        Work is only done when the spec differs from the previous call; otherwise
        the outcome of that call is repeated.
        """
        if client is None:
            raise ValueError("nil client")
        if gslb.spec != self._spec:
            strategy = gslb.spec.strategy
            if strategy.dns_ttl_seconds == 0:
                strategy.dns_ttl_seconds = DEFAULT_DNS_TTL_SECONDS
            if strategy.split_brain_threshold_seconds == 0:
                strategy.split_brain_threshold_seconds = DEFAULT_SPLIT_BRAIN_THRESHOLD_SECONDS
            try:
                _validate_strategy(strategy)
                client.update(gslb)
            except Exception as exc:  # the outcome is cached and re-raised
                self._spec_error = exc
            else:
                self._spec_error = None
            self._spec = deepcopy(gslb.spec)
        if self._spec_error is not None:
            raise self._spec_error