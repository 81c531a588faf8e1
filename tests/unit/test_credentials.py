import pytest

from newrelic_eks_addon.config.addon_config import merge_defaults
from newrelic_eks_addon.core.credentials import (
    DirectCredentials,
    NoCredentials,
    SingleExternalSecret,
    SplitExternalSecret,
    resolve_credentials,
)
from newrelic_eks_addon.core.errors import (
    AddOnConfigurationError,
    ConflictingCredentialSources,
    IncompleteCredentialSource,
    MissingClusterIdentifier,
    MissingCredentialSource,
    SecretFetchFailure,
)

def resolve(options, infrastructure_cluster_name="infra-cluster", secret_store=None):
    return resolve_credentials(merge_defaults(options), infrastructure_cluster_name, secret_store)

@pytest.mark.parametrize("options, expected", [
    ({"new_relic_license_key": "abc"}, DirectCredentials(license_key="abc")),
    ({"pixie_deploy_key": "px"}, DirectCredentials(pixie_deploy_key="px")),
    ({"aws_secret_name": "sec1"}, SingleExternalSecret("sec1")),
    ({"aws_license_key_secret_name": "lic"}, SingleExternalSecret("lic")),
    (
        {"aws_license_key_secret_name": "lic", "aws_pixie_secret_name": "px"},
        SplitExternalSecret("lic", "px")
    ),
    ({}, NoCredentials()),
])
def test_single_source_selects_matching_strategy(options, expected):
    assert resolve(options).strategy == expected

@pytest.mark.parametrize("options", [
    {"new_relic_license_key": "abc", "aws_secret_name": "sec1"},
    {"aws_secret_name": "sec1", "pixie_deploy_key": "xyz"},
    {"aws_secret_name": "sec1", "aws_license_key_secret_name": "lic", "aws_pixie_secret_name": "px"},
    {"new_relic_license_key": "abc", "nr_license_key_secret_name": "lookup"},
    {"pixie_api_key": "api", "aws_pixie_secret_name": "px"},
])
def test_multiple_sources_conflict(options):
    with pytest.raises(ConflictingCredentialSources) as excinfo:
        resolve(options)

    assert len(excinfo.value.sources) >= 2
    assert isinstance(excinfo.value, AddOnConfigurationError)

def test_conflict_is_checked_before_secret_lookup(secret_store):
    with pytest.raises(ConflictingCredentialSources):
        resolve(
            {"nr_license_key_secret_name": "lookup", "aws_secret_name": "sec1"},
            secret_store=secret_store
        )

    secret_store.get_secret.assert_not_called()

def test_pixie_half_of_split_secret_is_incomplete():
    with pytest.raises(IncompleteCredentialSource):
        resolve({"aws_pixie_secret_name": "px"})

def test_direct_credentials_keep_every_plaintext_key():
    strategy = resolve({
        "new_relic_license_key": "abc",
        "pixie_deploy_key": "px-deploy",
        "pixie_api_key": "px-api"
    }).strategy

    assert strategy == DirectCredentials("abc", "px-deploy", "px-api")
    assert strategy.requires_external_pull is False

def test_external_strategies_require_pull():
    assert SingleExternalSecret("a").requires_external_pull is True
    assert SplitExternalSecret("a", "b").requires_external_pull is True
    assert NoCredentials().requires_external_pull is False

def test_cluster_name_from_options():
    resolved = resolve({"new_relic_cluster_name": "demo-cluster"})

    assert resolved.cluster_name == "demo-cluster"

def test_cluster_name_defaults_to_infrastructure_name():
    assert resolve({}).cluster_name == "infra-cluster"

def test_cluster_name_fail_policy():
    with pytest.raises(MissingClusterIdentifier):
        resolve({"on_missing_cluster_name": "fail"})

def test_cluster_name_fail_policy_with_explicit_name():
    resolved = resolve({"on_missing_cluster_name": "fail", "new_relic_cluster_name": "demo"})

    assert resolved.cluster_name == "demo"

def test_unknown_infrastructure_name():
    with pytest.raises(MissingClusterIdentifier):
        resolve({}, infrastructure_cluster_name=None)

def test_missing_credentials_fail_policy():
    with pytest.raises(MissingCredentialSource):
        resolve({"on_missing_credentials": "fail"})

def test_license_lookup_reads_secret_store(secret_store):
    resolved = resolve({"nr_license_key_secret_name": "lookup"}, secret_store=secret_store)

    assert resolved.strategy == DirectCredentials(license_key="license-from-secret")
    secret_store.get_secret.assert_called_once_with("lookup")

def test_license_lookup_without_store():
    with pytest.raises(IncompleteCredentialSource):
        resolve({"nr_license_key_secret_name": "lookup"})

def test_license_lookup_without_license_field(secret_store):
    secret_store.get_secret.return_value = {"pixie_deploy_key": "px"}

    with pytest.raises(SecretFetchFailure):
        resolve({"nr_license_key_secret_name": "lookup"}, secret_store=secret_store)

def test_pixie_integration_without_pixie_logs_warning(caplog):
    resolve({"new_relic_license_key": "abc", "install_pixie_integration": True})

    assert "install_pixie_integration is ignored" in caplog.text
