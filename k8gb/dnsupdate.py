"""Construction of the DNSEndpoint resource that publishes a Gslb's records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from k8gb.api import Gslb, ObjectMeta
from k8gb.depresolver import Config

logger = logging.getLogger(__name__)

ROUND_ROBIN_STRATEGY = "roundRobin"
FAILOVER_STRATEGY = "failover"
HEALTHY = "Healthy"
DNS_TYPE_LABEL = "k8gb.absa.oss/dnstype"
DNS_ENDPOINT_API_VERSION = "externaldns.k8s.io/v1alpha1"
DNS_ENDPOINT_KIND = "DNSEndpoint"


class _DNSProvider(Protocol):
    def gslb_ingress_exposed_ips(self, gslb: Gslb) -> list[str]: ...

    def get_external_targets(self, host: str) -> list[str]: ...


@dataclass
class Endpoint:
    """A single DNS record set."""

    dns_name: str
    record_ttl: int = 0
    record_type: str = "A"
    targets: list[str] = field(default_factory=list)


@dataclass
class DNSEndpoint:
    """A set of DNS records owned by a Gslb."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    endpoints: list[Endpoint] = field(default_factory=list)
    api_version: str = DNS_ENDPOINT_API_VERSION
    kind: str = DNS_ENDPOINT_KIND


def sort_targets(targets: Iterable[str]) -> list[str]:
    """Return the targets in ascending order."""
    return sorted(targets)


def _controller_reference(gslb: Gslb) -> dict[str, object]:
    return {
        "apiVersion": gslb.api_version,
        "kind": gslb.kind,
        "name": gslb.metadata.name,
        "uid": gslb.metadata.uid,
        "controller": True,
        "blockOwnerDeletion": True,
    }


def gslb_dns_endpoint(
    gslb: Gslb,
    config: Config,
    provider: _DNSProvider,
    service_health: Mapping[str, str],
) -> DNSEndpoint:
    """Build the DNSEndpoint for ``gslb`` from service health and known targets.

    Raises ValueError when a host lies outside the delegated edge DNS zone.
    """
    ttl = gslb.spec.strategy.dns_ttl_seconds
    strategy = gslb.spec.strategy
    local_targets = list(provider.gslb_ingress_exposed_ips(gslb))
    endpoints: list[Endpoint] = []

    for host, health in service_health.items():
        if config.edge_dns_zone not in host:
            raise ValueError(
                f"ingress host {host} does not match delegated zone {config.edge_dns_zone}"
            )

        final_targets: list[str] = []
        if health == HEALTHY:
            final_targets.extend(local_targets)
            endpoints.append(
                Endpoint(
                    dns_name=f"localtargets-{host}",
                    record_ttl=ttl,
                    record_type="A",
                    targets=list(local_targets),
                )
            )

        external_targets = sort_targets(provider.get_external_targets(host))

        if external_targets:
            if strategy.type == ROUND_ROBIN_STRATEGY:
                final_targets.extend(external_targets)
            elif strategy.type == FAILOVER_STRATEGY:
                if strategy.primary_geo_tag == config.cluster_geo_tag:
                    if health != HEALTHY:
                        final_targets = list(external_targets)
                        logger.info(
                            "Executing failover strategy for %s Gslb on Primary. Workload on "
                            "primary %s cluster is unhealthy, targets are %s",
                            gslb.metadata.name, strategy.primary_geo_tag, final_targets,
                        )
                else:
                    final_targets = list(external_targets)
                    logger.info(
                        "Executing failover strategy for %s Gslb on Secondary. Workload on "
                        "primary %s cluster is healthy, targets are %s",
                        gslb.metadata.name, strategy.primary_geo_tag, final_targets,
                    )
        else:
            logger.info("No external targets have been found for host %s", host)

        logger.info("Final target list for %s Gslb: %s", gslb.metadata.name, final_targets)

        if final_targets:
            endpoints.append(
                Endpoint(dns_name=host, record_ttl=ttl, record_type="A", targets=final_targets)
            )

    metadata = ObjectMeta(
        name=gslb.metadata.name,
        namespace=gslb.metadata.namespace,
        annotations={DNS_TYPE_LABEL: "local"},
        labels={DNS_TYPE_LABEL: "local"},
        owner_references=[_controller_reference(gslb)],
    )
    return DNSEndpoint(metadata=metadata, endpoints=endpoints)