"""
Configuration record for the New Relic add-on
"""
import copy
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

from newrelic_eks_addon.config import constants


def _check_choice(name: str, value: str, choices) -> None:
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")


def _to_field_name(key: str) -> str:
    """Accept both snake_case and the camelCase names used by blueprint add-ons"""
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).lower()


@dataclass(frozen=True)
class NewRelicAddOnProps:
    """Options for one deployment of the nri-bundle chart"""
    namespace: str = constants.NEWRELIC_NAMESPACE
    repository: str = constants.NEWRELIC_HELM_REPOSITORY
    chart: str = constants.NEWRELIC_CHART
    release: str = constants.NEWRELIC_RELEASE
    version: str = constants.NEWRELIC_CHART_VERSION

    # Kubernetes cluster name in New Relic
    new_relic_cluster_name: Optional[str] = None

    # Plaintext credentials
    new_relic_license_key: Optional[str] = None
    pixie_deploy_key: Optional[str] = None
    pixie_api_key: Optional[str] = None

    # Secret in AWS Secrets Manager holding license_key, pixie_deploy_key and pixie_api_key
    aws_secret_name: Optional[str] = None

    # Separate secrets for the license key and the Pixie keys
    aws_license_key_secret_name: Optional[str] = None
    aws_pixie_secret_name: Optional[str] = None

    # Secret looked up at synth time, its license_key lands in the chart values
    nr_license_key_secret_name: Optional[str] = None

    low_data_mode: bool = True
    install_infrastructure: bool = True
    install_infrastructure_privileged: bool = True
    install_kube_events: bool = True
    install_ksm: bool = True
    install_logging: bool = True
    install_metrics_adapter: bool = False
    install_prometheus: bool = True
    install_pixie: bool = False
    install_pixie_integration: bool = False

    on_missing_cluster_name: str = constants.CLUSTER_NAME_POLICY_DEFAULT
    on_missing_credentials: str = constants.CREDENTIALS_POLICY_ALLOW
    secret_materialization: str = constants.MATERIALIZATION_PROJECTION

    # Values to pass to the chart, lowest precedence
    values: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        _check_choice("on_missing_cluster_name", self.on_missing_cluster_name, (
            constants.CLUSTER_NAME_POLICY_DEFAULT,
            constants.CLUSTER_NAME_POLICY_FAIL,
        ))
        _check_choice("on_missing_credentials", self.on_missing_credentials, (
            constants.CREDENTIALS_POLICY_ALLOW,
            constants.CREDENTIALS_POLICY_FAIL,
        ))
        _check_choice("secret_materialization", self.secret_materialization, (
            constants.MATERIALIZATION_PROJECTION,
            constants.MATERIALIZATION_NATIVE,
        ))


DEFAULT_PROPS = NewRelicAddOnProps()

_FIELD_NAMES = frozenset(f.name for f in fields(NewRelicAddOnProps))


def merge_defaults(
    user_input: Union[Mapping[str, Any], NewRelicAddOnProps, None] = None,
    defaults: Optional[NewRelicAddOnProps] = None
) -> NewRelicAddOnProps:
    """
    Build the effective props from a partial caller record.

    Keys left out or set to None keep the default. The defaults record is
    never modified and the returned props own a private copy of ``values``.
    """
    if defaults is None:
        defaults = DEFAULT_PROPS

    if user_input is None:
        return replace(defaults, values=copy.deepcopy(defaults.values))

    if isinstance(user_input, NewRelicAddOnProps):
        return replace(user_input, values=copy.deepcopy(user_input.values))

    overrides = {}
    for key, value in user_input.items():
        name = _to_field_name(key)
        if name not in _FIELD_NAMES:
            raise TypeError(f"Unknown New Relic add-on option: {key}")
        if value is not None:
            overrides[name] = value

    overrides["values"] = copy.deepcopy(overrides.get("values", defaults.values))
    return replace(defaults, **overrides)
