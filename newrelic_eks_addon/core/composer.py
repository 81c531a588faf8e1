"""
Composition of the nri-bundle Helm values
"""
import copy
import logging
from typing import Any, Dict, Optional

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.config.addon_config import NewRelicAddOnProps
from newrelic_eks_addon.core.credentials import CredentialStrategy, DirectCredentials, NoCredentials
from newrelic_eks_addon.core.paths import set_path, unset_path
from newrelic_eks_addon.core.planner import ResourcePlan

logger = logging.getLogger(__name__)

# Install toggles and the chart value each one enables
TOGGLE_PATHS = (
    ("install_infrastructure", "infrastructure.enabled"),
    ("install_logging", "logging.enabled"),
    ("install_prometheus", "prometheus.enabled"),
    ("install_ksm", "ksm.enabled"),
    ("install_kube_events", "kubeEvents.enabled"),
    ("install_metrics_adapter", "metrics-adapter.enabled"),
)

# Credential values owned by the composer once a credential source is configured
CREDENTIAL_PATHS = (
    "global.licenseKey",
    "global.customSecretName",
    "global.customSecretLicenseKey",
    "pixie-chart.deployKey",
    "pixie-chart.customDeployKeySecret",
    "newrelic-pixie.apiKey",
    "newrelic-pixie.customSecretApiKeyName",
    "newrelic-pixie.customSecretApiKeyKey",
)


def _strip_credential_overrides(values: Dict[str, Any]) -> None:
    stripped = [path for path in CREDENTIAL_PATHS if unset_path(values, path)]
    if stripped:
        logger.warning("Ignoring credential values set through overrides: %s", ", ".join(stripped))


def _place_license_key(values, strategy, refs) -> None:
    if isinstance(strategy, DirectCredentials):
        if strategy.license_key:
            set_path(values, "global.licenseKey", strategy.license_key)
        return

    ref = refs.get(constants.LICENSE_KEY_FIELD)
    if ref:
        set_path(values, "global.customSecretName", ref.secret_name)
        set_path(values, "global.customSecretLicenseKey", ref.key)


def _compose_pixie(values, props, strategy, cluster_name, refs) -> None:
    set_path(values, "pixie-chart.enabled", True)
    set_path(values, "pixie-chart.clusterName", cluster_name)

    if isinstance(strategy, DirectCredentials):
        if strategy.pixie_deploy_key:
            set_path(values, "pixie-chart.deployKey", strategy.pixie_deploy_key)
    elif constants.PIXIE_DEPLOY_KEY_FIELD in refs:
        # the Pixie chart reads the key named deploy-key from this secret
        set_path(values, "pixie-chart.customDeployKeySecret", refs[constants.PIXIE_DEPLOY_KEY_FIELD].secret_name)

    if not props.install_pixie_integration:
        return

    set_path(values, "newrelic-pixie.enabled", True)
    if isinstance(strategy, DirectCredentials):
        if strategy.pixie_api_key:
            set_path(values, "newrelic-pixie.apiKey", strategy.pixie_api_key)
    elif constants.PIXIE_API_KEY_FIELD in refs:
        ref = refs[constants.PIXIE_API_KEY_FIELD]
        set_path(values, "newrelic-pixie.customSecretApiKeyName", ref.secret_name)
        set_path(values, "newrelic-pixie.customSecretApiKeyKey", ref.key)


def compose_values(
    props: NewRelicAddOnProps,
    strategy: CredentialStrategy,
    cluster_name: str,
    plan: Optional[ResourcePlan] = None
) -> Dict[str, Any]:
    """
    Build the values passed to the chart.

    Caller overrides go in first, every value written here takes precedence
    over them. Only enabled toggles are written.
    """
    values = copy.deepcopy(props.values)
    refs = plan.secret_refs if plan is not None else {}

    if not isinstance(strategy, NoCredentials):
        _strip_credential_overrides(values)

    set_path(values, "global.cluster", cluster_name)
    _place_license_key(values, strategy, refs)

    if props.low_data_mode:
        set_path(values, "global.lowDataMode", props.low_data_mode)

    for option, path in TOGGLE_PATHS:
        if getattr(props, option):
            set_path(values, path, True)

    if props.install_infrastructure:
        set_path(values, "newrelic-infrastructure.privileged", props.install_infrastructure_privileged)

    if props.install_pixie:
        _compose_pixie(values, props, strategy, cluster_name, refs)

    return values
