# k8gb

Building blocks for a DNS-based global server load balancer (GSLB): a model of
the `Gslb` resource, defaulting and validation of its strategy, computation of
the DNS records it publishes, and a small fake DNS server for tests.

## Modules

- `k8gb.api` – the `Gslb` resource model: `Gslb` (with `copy()`), `GslbSpec`,
  `GslbStatus`, `Strategy`, `IngressSpec`, `IngressRule`, `ObjectMeta` and
  `GslbList`. `gslb_from_dict` builds a `Gslb` from a decoded JSON/YAML
  document (camelCase keys such as `primaryGeoTag`, `dnsTtlSeconds`) and
  raises `ValueError` on wrongly typed fields; `gslb_to_dict` renders it back.
  `from_v1beta1_ingress_spec` and `to_v1beta1_ingress_spec` convert between
  `IngressSpec` and an upstream ingress spec mapping.
- `k8gb.validator` – chainable checks. `field(name, value)` wraps an int, a
  string or a list of strings in a `Validator`; its methods
  (`is_not_empty`, `match_regexp`, `match_regexps`, `is_higher_than_zero`,
  `is_higher_or_equal_to_zero`, `is_less_or_equal_to`, `is_not_equal_to`,
  `has_items`, `has_unique_items`) return the validator or raise
  `ValidationError`. The module also holds ready-made patterns
  (`GEO_TAG_REGEX`, `HOST_NAME_REGEX`, `IP_ADDRESS_REGEX`,
  `VERSION_NUMBER_REGEX`, `K8S_NAMESPACE_REGEX`) and `is_not_blank`.
- `k8gb.depresolver` – the operator configuration data types (`Config`,
  `Infoblox`, `Override`, `LogSettings`, `LogFormat`, `EdgeDNSType`) and
  `DependencyResolver`. `DependencyResolver.resolve_gslb_spec(gslb, client)`
  fills in a DNS TTL of 30 seconds and a split-brain threshold of 300 seconds
  where they are zero, rejects negative values, and calls `client.update(gslb)`.
  It only does this work when the spec differs from the one it saw last; for
  an unchanged spec it repeats the previous outcome. A `None` client raises
  `ValueError`.
- `k8gb.dnsupdate` – `gslb_dns_endpoint(gslb, config, provider, service_health)`
  builds a `DNSEndpoint` (a list of `Endpoint` records plus metadata labelled
  `k8gb.absa.oss/dnstype: local` and a controller owner reference to the Gslb).
  For every healthy host it publishes a `localtargets-<host>` record with the
  local ingress addresses; the record for the host itself combines local and
  external targets following the `roundRobin` or `failover` strategy. A host
  outside `config.edge_dns_zone` raises `ValueError`. `sort_targets` returns
  targets in ascending order.
- `k8gb.finalize` – `contains`, `remove`, `finalize_gslb(provider, gslb)` and
  `add_finalizer(client, gslb, finalizer)`.
- `k8gb.fakedns` – `FakeDNSServer`, a UDP DNS server running in a background
  thread that answers A and TXT queries under `example.com.` from a record
  table and refuses other names. `default_records()` returns the built-in
  table; `parse_query` and `handle_dns_request` expose the answering logic
  without a socket; `old_edge_timestamp("10m")` gives the UTC time that long
  ago.

The `provider` and `client` arguments are duck-typed: any object with the
methods used (`gslb_ingress_exposed_ips`, `get_external_targets`, `finalize`,
`update`) will do.

## Installation

```
pip install k8gb
```

To run the test suite:

```
pip install "k8gb[test]"
pytest
```

## Examples

Reading a Gslb and filling in strategy defaults:

```python
from k8gb.api import gslb_from_dict
from k8gb.depresolver import DependencyResolver

class Store:
    def update(self, gslb):
        print("stored", gslb.metadata.name)

gslb = gslb_from_dict({
    "metadata": {"name": "test-gslb", "namespace": "test"},
    "spec": {
        "ingress": {"rules": [{"host": "roundrobin.cloud.example.com"}]},
        "strategy": {"type": "roundRobin"},
    },
})
DependencyResolver().resolve_gslb_spec(gslb, Store())
print(gslb.spec.strategy.dns_ttl_seconds)  # 30
```

Computing the published records:

```python
from k8gb.depresolver import Config
from k8gb.dnsupdate import gslb_dns_endpoint

class Provider:
    def gslb_ingress_exposed_ips(self, gslb):
        return ["10.0.0.1"]

    def get_external_targets(self, host):
        return ["10.1.0.2", "10.1.0.1"]

endpoint = gslb_dns_endpoint(
    gslb,
    Config(edge_dns_zone="example.com", cluster_geo_tag="eu"),
    Provider(),
    {"roundrobin.cloud.example.com": "Healthy"},
)
for record in endpoint.endpoints:
    print(record.dns_name, record.targets)
```

Serving fake records for tests (port 0 picks a free port):

```python
from k8gb.fakedns import FakeDNSServer

with FakeDNSServer(host="127.0.0.1", port=0) as server:
    host, port = server.address
    ...  # query the server over UDP
```

## What it does not do

The package contains no controller: it does not watch or reconcile resources,
talk to a cluster API, or derive service health itself; the health map and the
targets are supplied by the caller. `Config` is a plain data type; the package
does not read it from environment variables or validate it. There are no
providers for real edge DNS services and no command-line program.