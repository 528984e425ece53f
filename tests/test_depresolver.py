import pytest

from k8gb.api import Gslb, gslb_from_dict
from k8gb.depresolver import (
    Config,
    DependencyResolver,
    EdgeDNSType,
    LogFormat,
)
from k8gb.validator import ValidationError


class FakeClient:
    def __init__(self, error=None):
        self.error = error
        self.updated = []

    def update(self, gslb):
        if self.error is not None:
            raise self.error
        self.updated.append(gslb.copy())


def make_gslb(**strategy):
    return gslb_from_dict(
        {
            "apiVersion": "k8gb.absa.oss/v1beta1",
            "kind": "Gslb",
            "metadata": {"name": "test-gslb", "namespace": "test-gslb"},
            "spec": {
                "ingress": {
                    "rules": [
                        {
                            "host": "roundrobin.cloud.example.com",
                            "http": {
                                "paths": [
                                    {
                                        "path": "/",
                                        "backend": {
                                            "serviceName": "frontend-podinfo",
                                            "servicePort": "http",
                                        },
                                    }
                                ]
                            },
                        }
                    ]
                },
                "strategy": {"type": "roundRobin", **strategy},
            },
        }
    )


def test_resolve_spec_with_filled_fields():
    client = FakeClient()
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=305)
    DependencyResolver().resolve_gslb_spec(gslb, client)
    assert gslb.spec.strategy.dns_ttl_seconds == 35
    assert gslb.spec.strategy.split_brain_threshold_seconds == 305
    assert len(client.updated) == 1
    assert client.updated[0].spec.strategy.dns_ttl_seconds == 35


def test_resolve_spec_without_fields():
    client = FakeClient()
    gslb = make_gslb()
    DependencyResolver().resolve_gslb_spec(gslb, client)
    assert gslb.spec.strategy.dns_ttl_seconds == 30
    assert gslb.spec.strategy.split_brain_threshold_seconds == 300
    assert client.updated[0].spec.strategy.split_brain_threshold_seconds == 300


def test_resolve_spec_with_zero_split_brain():
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=0)
    DependencyResolver().resolve_gslb_spec(gslb, FakeClient())
    assert gslb.spec.strategy.dns_ttl_seconds == 35
    assert gslb.spec.strategy.split_brain_threshold_seconds == 300


def test_resolve_spec_with_empty_fields():
    gslb = make_gslb(dnsTtlSeconds=None, splitBrainThresholdSeconds=None)
    DependencyResolver().resolve_gslb_spec(gslb, FakeClient())
    assert gslb.spec.strategy.dns_ttl_seconds == 30
    assert gslb.spec.strategy.split_brain_threshold_seconds == 300


def test_resolve_spec_with_negative_fields():
    client = FakeClient()
    gslb = make_gslb(dnsTtlSeconds=-35, splitBrainThresholdSeconds=-305)
    with pytest.raises(ValidationError, match="'DNSTtlSeconds' is less than zero"):
        DependencyResolver().resolve_gslb_spec(gslb, client)
    assert client.updated == []


def test_resolve_spec_with_negative_split_brain_only():
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=-305)
    with pytest.raises(ValidationError, match="'SplitBrainThresholdSeconds' is less than zero"):
        DependencyResolver().resolve_gslb_spec(gslb, FakeClient())


def test_spec_run_when_changed():
    client = FakeClient()
    resolver = DependencyResolver()
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=305)
    resolver.resolve_gslb_spec(gslb, client)
    gslb.spec.strategy.split_brain_threshold_seconds = 0
    resolver.resolve_gslb_spec(gslb, client)
    assert gslb.spec.strategy.split_brain_threshold_seconds == 300
    assert gslb.spec.strategy.dns_ttl_seconds == 35
    assert len(client.updated) == 2


def test_unchanged_spec_is_not_updated_again():
    client = FakeClient()
    resolver = DependencyResolver()
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=305)
    resolver.resolve_gslb_spec(gslb, client)
    resolver.resolve_gslb_spec(gslb, client)
    assert len(client.updated) == 1


def test_resolve_spec_with_nil_client():
    gslb = make_gslb(dnsTtlSeconds=35, splitBrainThresholdSeconds=305)
    with pytest.raises(ValueError, match="nil client"):
        DependencyResolver().resolve_gslb_spec(gslb, None)


def test_cached_error_is_repeated_for_same_spec():
    client = FakeClient()
    resolver = DependencyResolver()
    gslb = make_gslb(dnsTtlSeconds=-1)
    with pytest.raises(ValidationError):
        resolver.resolve_gslb_spec(gslb, client)
    with pytest.raises(ValidationError, match="DNSTtlSeconds"):
        resolver.resolve_gslb_spec(gslb, client)
    assert client.updated == []


def test_error_clears_after_spec_is_fixed():
    client = FakeClient()
    resolver = DependencyResolver()
    gslb = make_gslb(dnsTtlSeconds=-1)
    with pytest.raises(ValidationError):
        resolver.resolve_gslb_spec(gslb, client)
    gslb.spec.strategy.dns_ttl_seconds = 35
    resolver.resolve_gslb_spec(gslb, client)
    assert len(client.updated) == 1


def test_update_failure_is_raised():
    client = FakeClient(error=RuntimeError("conflict"))
    gslb = make_gslb(dnsTtlSeconds=35)
    with pytest.raises(RuntimeError, match="conflict"):
        DependencyResolver().resolve_gslb_spec(gslb, client)


def test_empty_spec_matches_initial_state_and_is_left_alone():
    client = FakeClient()
    gslb = Gslb()
    DependencyResolver().resolve_gslb_spec(gslb, client)
    assert gslb.spec.strategy.dns_ttl_seconds == 0
    assert client.updated == []


@pytest.mark.parametrize(
    "fmt, text",
    [(LogFormat.JSON, "json"), (LogFormat.SIMPLE, "simple"), (LogFormat.NO_FORMAT, "noformat")],
)
def test_log_format_text(fmt, text):
    assert str(fmt) == text


def test_config_defaults_match_resolver_defaults():
    config = Config()
    assert config.reconcile_requeue_seconds == 30
    assert config.infoblox.http_request_timeout == 20
    assert config.infoblox.http_pool_connections == 10
    assert config.edge_dns_type == EdgeDNSType.NO_EDGE_DNS
    assert config.ext_clusters_geo_tags == []
    assert config.log.format is LogFormat.SIMPLE
    assert config.log.no_color is False