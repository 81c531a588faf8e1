"""
Single entry point turning add-on options into a deployable plan
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.config.addon_config import NewRelicAddOnProps, merge_defaults
from newrelic_eks_addon.core.composer import compose_values
from newrelic_eks_addon.core.credentials import CredentialStrategy, resolve_credentials
from newrelic_eks_addon.core.planner import (
    NativeSecretMaterializer,
    ProjectionDrivenMaterializer,
    ResourcePlan,
    SecretMaterializer,
    plan_resources,
)


@dataclass(frozen=True)
class ResolvedDeployment:
    props: NewRelicAddOnProps
    strategy: CredentialStrategy
    cluster_name: str
    plan: ResourcePlan
    values: Dict[str, Any]


def materializer_for(props: NewRelicAddOnProps) -> SecretMaterializer:
    if props.secret_materialization == constants.MATERIALIZATION_NATIVE:
        return NativeSecretMaterializer()
    return ProjectionDrivenMaterializer()


def resolve_and_plan(
    options: Union[Mapping[str, Any], NewRelicAddOnProps, None],
    infrastructure_cluster_name: Optional[str] = None,
    materializer: Optional[SecretMaterializer] = None,
    secret_store=None
) -> ResolvedDeployment:
    """
    Validate ``options``, pick the credential strategy, plan the auxiliary
    resources and compose the chart values.

    Invalid option combinations raise before anything is planned. The secret
    store is only used for ``nr_license_key_secret_name``.
    """
    props = merge_defaults(options)
    credentials = resolve_credentials(props, infrastructure_cluster_name, secret_store)

    if materializer is None:
        materializer = materializer_for(props)

    plan = plan_resources(
        credentials.strategy,
        props.namespace,
        install_pixie=props.install_pixie,
        install_pixie_integration=props.install_pixie_integration,
        materializer=materializer
    )
    values = compose_values(props, credentials.strategy, credentials.cluster_name, plan)

    return ResolvedDeployment(
        props=props,
        strategy=credentials.strategy,
        cluster_name=credentials.cluster_name,
        plan=plan,
        values=values
    )
