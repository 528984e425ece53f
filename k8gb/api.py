"""Gslb custom resource types of the k8gb.absa.oss/v1beta1 API group."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

GROUP = "k8gb.absa.oss"
VERSION = "v1beta1"
API_VERSION = f"{GROUP}/{VERSION}"
GSLB_KIND = "Gslb"
GSLB_LIST_KIND = "GslbList"


@dataclass
class ObjectMeta:
    """The subset of Kubernetes object metadata that k8gb works with."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    owner_references: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Strategy:
    """Load balancing behaviour of a Gslb."""

    type: str = ""
    primary_geo_tag: str = ""
    dns_ttl_seconds: int = 0
    split_brain_threshold_seconds: int = 0


@dataclass
class IngressRule:
    """A host rule; ``http`` holds the upstream HTTP rule value as a mapping."""

    host: str = ""
    http: dict[str, Any] | None = None


@dataclass
class IngressSpec:
    """Ingress specification embedded in a Gslb."""

    ingress_class_name: str | None = None
    backend: dict[str, Any] | None = None
    tls: list[dict[str, Any]] = field(default_factory=list)
    rules: list[IngressRule] = field(default_factory=list)


@dataclass
class GslbSpec:
    """Desired state of a Gslb."""

    ingress: IngressSpec = field(default_factory=IngressSpec)
    strategy: Strategy = field(default_factory=Strategy)


@dataclass
class GslbStatus:
    """Observed state of a Gslb."""

    service_health: dict[str, str] = field(default_factory=dict)
    healthy_records: dict[str, list[str]] = field(default_factory=dict)
    geo_tag: str = ""


@dataclass
class Gslb:
    """The Gslb custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: GslbSpec = field(default_factory=GslbSpec)
    status: GslbStatus = field(default_factory=GslbStatus)
    api_version: str = API_VERSION
    kind: str = GSLB_KIND

    def copy(self) -> Gslb:
        """Return a deep copy that shares no mutable state with this one."""
        return deepcopy(self)


@dataclass
class GslbList:
    """A list of Gslb resources."""

    items: list[Gslb] = field(default_factory=list)
    resource_version: str = ""
    api_version: str = API_VERSION
    kind: str = GSLB_LIST_KIND


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"'{what}' must be a mapping, got {type(value).__name__}")
    return dict(value)


def _optional_mapping(value: Any, what: str) -> dict[str, Any] | None:
    if value is None:
        return None
    return deepcopy(_mapping(value, what))


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
        raise ValueError(f"'{what}' must be a list, got {type(value).__name__}")
    return list(value)


def _str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{what}' must be a string, got {type(value).__name__}")
    return value


def _int(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{what}' must be an integer, got {type(value).__name__}")
    return value


def _str_map(value: Any, what: str) -> dict[str, str]:
    return {_str(k, what): _str(v, f"{what}.{k}") for k, v in _mapping(value, what).items()}


def _str_list(value: Any, what: str) -> list[str]:
    return [_str(item, what) for item in _list(value, what)]


def _meta_from_dict(data: Any) -> ObjectMeta:
    raw = _mapping(data, "metadata")
    return ObjectMeta(
        name=_str(raw.get("name"), "metadata.name"),
        namespace=_str(raw.get("namespace"), "metadata.namespace"),
        uid=_str(raw.get("uid"), "metadata.uid"),
        labels=_str_map(raw.get("labels"), "metadata.labels"),
        annotations=_str_map(raw.get("annotations"), "metadata.annotations"),
        finalizers=_str_list(raw.get("finalizers"), "metadata.finalizers"),
        owner_references=[
            deepcopy(_mapping(ref, "metadata.ownerReferences"))
            for ref in _list(raw.get("ownerReferences"), "metadata.ownerReferences")
        ],
    )


def _meta_to_dict(meta: ObjectMeta) -> dict[str, Any]:
    pairs = [
        ("name", meta.name),
        ("namespace", meta.namespace),
        ("uid", meta.uid),
        ("labels", dict(meta.labels)),
        ("annotations", dict(meta.annotations)),
        ("finalizers", list(meta.finalizers)),
        ("ownerReferences", deepcopy(meta.owner_references)),
    ]
    return {key: value for key, value in pairs if value}


def _strategy_from_dict(data: Any) -> Strategy:
    raw = _mapping(data, "spec.strategy")
    return Strategy(
        type=_str(raw.get("type"), "spec.strategy.type"),
        primary_geo_tag=_str(raw.get("primaryGeoTag"), "spec.strategy.primaryGeoTag"),
        dns_ttl_seconds=_int(raw.get("dnsTtlSeconds"), "spec.strategy.dnsTtlSeconds"),
        split_brain_threshold_seconds=_int(
            raw.get("splitBrainThresholdSeconds"), "spec.strategy.splitBrainThresholdSeconds"
        ),
    )


def _strategy_to_dict(strategy: Strategy) -> dict[str, Any]:
    out: dict[str, Any] = {"type": strategy.type}
    if strategy.primary_geo_tag:
        out["primaryGeoTag"] = strategy.primary_geo_tag
    if strategy.dns_ttl_seconds:
        out["dnsTtlSeconds"] = strategy.dns_ttl_seconds
    if strategy.split_brain_threshold_seconds:
        out["splitBrainThresholdSeconds"] = strategy.split_brain_threshold_seconds
    return out


def _ingress_spec_from_dict(data: Any, what: str) -> IngressSpec:
    raw = _mapping(data, what)
    class_name = raw.get("ingressClassName")
    rules = []
    for rule in _list(raw.get("rules"), f"{what}.rules"):
        rule_raw = _mapping(rule, f"{what}.rules")
        rules.append(
            IngressRule(
                host=_str(rule_raw.get("host"), f"{what}.rules.host"),
                http=_optional_mapping(rule_raw.get("http"), f"{what}.rules.http"),
            )
        )
    return IngressSpec(
        ingress_class_name=None if class_name is None else _str(class_name, f"{what}.ingressClassName"),
        backend=_optional_mapping(raw.get("backend"), f"{what}.backend"),
        tls=[deepcopy(_mapping(item, f"{what}.tls")) for item in _list(raw.get("tls"), f"{what}.tls")],
        rules=rules,
    )


def _ingress_spec_to_dict(spec: IngressSpec, *, omit_empty_http: bool) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if spec.ingress_class_name is not None:
        out["ingressClassName"] = spec.ingress_class_name
    if spec.backend is not None:
        out["backend"] = deepcopy(spec.backend)
    if spec.tls:
        out["tls"] = deepcopy(spec.tls)
    if spec.rules:
        rules = []
        for rule in spec.rules:
            item: dict[str, Any] = {}
            if rule.host:
                item["host"] = rule.host
            if rule.http is not None or not omit_empty_http:
                item["http"] = deepcopy(rule.http)
            rules.append(item)
        out["rules"] = rules
    return out


def from_v1beta1_ingress_spec(v1beta1_spec: Mapping[str, Any]) -> IngressSpec:
    """Build a Gslb ingress spec from an upstream networking/v1beta1 IngressSpec mapping."""
    return _ingress_spec_from_dict(v1beta1_spec, "ingress")


def to_v1beta1_ingress_spec(spec: IngressSpec) -> dict[str, Any]:
    """Render a Gslb ingress spec as an upstream networking/v1beta1 IngressSpec mapping."""
    return _ingress_spec_to_dict(spec, omit_empty_http=True)


def gslb_from_dict(data: Mapping[str, Any]) -> Gslb:
    """Build a Gslb from its decoded JSON or YAML document."""
    raw = _mapping(data, "gslb")
    spec_raw = _mapping(raw.get("spec"), "spec")
    status_raw = _mapping(raw.get("status"), "status")
    healthy_records = {
        _str(host, "status.healthyRecords"): _str_list(targets, f"status.healthyRecords.{host}")
        for host, targets in _mapping(status_raw.get("healthyRecords"), "status.healthyRecords").items()
    }
    api_version = raw.get("apiVersion")
    kind = raw.get("kind")
    return Gslb(
        metadata=_meta_from_dict(raw.get("metadata")),
        spec=GslbSpec(
            ingress=_ingress_spec_from_dict(spec_raw.get("ingress"), "spec.ingress"),
            strategy=_strategy_from_dict(spec_raw.get("strategy")),
        ),
        status=GslbStatus(
            service_health=_str_map(status_raw.get("serviceHealth"), "status.serviceHealth"),
            healthy_records=healthy_records,
            geo_tag=_str(status_raw.get("geoTag"), "status.geoTag"),
        ),
        api_version=API_VERSION if api_version is None else _str(api_version, "apiVersion"),
        kind=GSLB_KIND if kind is None else _str(kind, "kind"),
    )


def gslb_to_dict(gslb: Gslb) -> dict[str, Any]:
    """Render a Gslb as a JSON-compatible document."""
    return {
        "apiVersion": gslb.api_version,
        "kind": gslb.kind,
        "metadata": _meta_to_dict(gslb.metadata),
        "spec": {
            "ingress": _ingress_spec_to_dict(gslb.spec.ingress, omit_empty_http=False),
            "strategy": _strategy_to_dict(gslb.spec.strategy),
        },
        "status": {
            "serviceHealth": dict(gslb.status.service_health),
            "healthyRecords": {host: list(t) for host, t in gslb.status.healthy_records.items()},
            "geoTag": gslb.status.geo_tag,
        },
    }