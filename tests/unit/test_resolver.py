import pytest

from newrelic_eks_addon.core.credentials import DirectCredentials, NoCredentials, SingleExternalSecret
from newrelic_eks_addon.core.errors import ConflictingCredentialSources
from newrelic_eks_addon.core.planner import (
    Namespace,
    NativeSecret,
    PlaceholderWorkload,
    SecretProjection,
    ServiceIdentity,
)
from newrelic_eks_addon.core.resolver import resolve_and_plan

def test_direct_license_scenario():
    resolved = resolve_and_plan(
        {"newRelicLicenseKey": "abc", "installPrometheus": True},
        infrastructure_cluster_name="infra-cluster"
    )

    assert resolved.strategy == DirectCredentials(license_key="abc")
    assert resolved.plan.requests == []
    assert resolved.values["global"]["licenseKey"] == "abc"
    assert resolved.values["prometheus"]["enabled"] is True
    assert resolved.cluster_name == "infra-cluster"

def test_external_secret_with_plaintext_pixie_key_conflicts():
    with pytest.raises(ConflictingCredentialSources):
        resolve_and_plan(
            {"awsSecretName": "sec1", "installPixie": True, "pixieDeployKey": "xyz"},
            infrastructure_cluster_name="infra-cluster"
        )

def test_external_secret_with_pixie_scenario():
    resolved = resolve_and_plan(
        {"awsSecretName": "sec1", "installPixie": True},
        infrastructure_cluster_name="infra-cluster"
    )

    assert resolved.strategy == SingleExternalSecret("sec1")
    assert [type(request) for request in resolved.plan.requests] == [
        Namespace, ServiceIdentity, SecretProjection, PlaceholderWorkload
    ]
    assert resolved.values["pixie-chart"]["customDeployKeySecret"] == "newrelic-secrets"
    assert resolved.values["pixie-chart"]["clusterName"] == "infra-cluster"

def test_no_credentials_scenario():
    resolved = resolve_and_plan(
        {"new_relic_cluster_name": "demo", "install_logging": False},
        infrastructure_cluster_name="infra-cluster"
    )

    assert resolved.strategy == NoCredentials()
    assert resolved.plan.requests == []
    assert resolved.values == {
        "global": {"cluster": "demo", "lowDataMode": True},
        "infrastructure": {"enabled": True},
        "newrelic-infrastructure": {"privileged": True},
        "prometheus": {"enabled": True},
        "ksm": {"enabled": True},
        "kubeEvents": {"enabled": True},
    }

def test_native_materialization_option():
    resolved = resolve_and_plan(
        {"aws_secret_name": "sec1", "secret_materialization": "native"},
        infrastructure_cluster_name="infra-cluster"
    )

    assert [type(request) for request in resolved.plan.requests] == [Namespace, NativeSecret]
    assert resolved.values["global"]["customSecretName"] == "newrelic-secrets"

def test_resolution_uses_its_own_props_copy():
    options = {"aws_secret_name": "sec1", "values": {"global": {"licenseKey": "x"}}}
    resolved = resolve_and_plan(options, infrastructure_cluster_name="infra-cluster")

    assert options["values"] == {"global": {"licenseKey": "x"}}
    assert resolved.props.values == {"global": {"licenseKey": "x"}}
    assert "licenseKey" not in resolved.values["global"]
