"""
Selection of the credential-acquisition strategy for one deployment
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.config.addon_config import NewRelicAddOnProps
from newrelic_eks_addon.core.errors import (
    ConflictingCredentialSources,
    IncompleteCredentialSource,
    MissingClusterIdentifier,
    MissingCredentialSource,
    SecretFetchFailure,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectCredentials:
    """Keys passed in plaintext, written straight into the chart values"""
    license_key: Optional[str] = None
    pixie_deploy_key: Optional[str] = None
    pixie_api_key: Optional[str] = None

    requires_external_pull = False


@dataclass(frozen=True)
class SingleExternalSecret:
    """One Secrets Manager secret holding every key"""
    secret_name: str

    requires_external_pull = True


@dataclass(frozen=True)
class SplitExternalSecret:
    """License key and Pixie keys in two secrets with separate access policies"""
    license_secret_name: str
    aux_key_secret_name: str

    requires_external_pull = True


@dataclass(frozen=True)
class NoCredentials:
    requires_external_pull = False


CredentialStrategy = Union[DirectCredentials, SingleExternalSecret, SplitExternalSecret, NoCredentials]


@dataclass(frozen=True)
class ResolvedCredentials:
    strategy: CredentialStrategy
    cluster_name: str


def _configured_sources(props: NewRelicAddOnProps):
    sources = []
    if props.new_relic_license_key or props.pixie_deploy_key or props.pixie_api_key:
        sources.append("plaintext keys")
    if props.aws_secret_name:
        sources.append("aws_secret_name")
    if props.aws_license_key_secret_name or props.aws_pixie_secret_name:
        sources.append("aws_license_key_secret_name/aws_pixie_secret_name")
    if props.nr_license_key_secret_name:
        sources.append("nr_license_key_secret_name")
    return sources


def _resolve_cluster_name(props: NewRelicAddOnProps, infrastructure_cluster_name: Optional[str]) -> str:
    if props.new_relic_cluster_name:
        return props.new_relic_cluster_name
    if props.on_missing_cluster_name == constants.CLUSTER_NAME_POLICY_DEFAULT and infrastructure_cluster_name:
        logger.info("No New Relic cluster name given, using %s", infrastructure_cluster_name)
        return infrastructure_cluster_name
    raise MissingClusterIdentifier()


def _lookup_license_key(secret_name: str, secret_store) -> DirectCredentials:
    if secret_store is None:
        raise IncompleteCredentialSource(
            f"nr_license_key_secret_name={secret_name} needs a secret store to read the license key"
        )
    payload = secret_store.get_secret(secret_name)
    license_key = payload.get(constants.LICENSE_KEY_FIELD)
    if not license_key:
        raise SecretFetchFailure(secret_name, f"no {constants.LICENSE_KEY_FIELD} field")
    return DirectCredentials(license_key=license_key)


def resolve_credentials(
    props: NewRelicAddOnProps,
    infrastructure_cluster_name: Optional[str] = None,
    secret_store=None
) -> ResolvedCredentials:
    """
    Pick the single credential strategy that applies to ``props``.

    Raises an AddOnConfigurationError when sources conflict, when a split
    secret is only half configured, or when a policy turns a missing value
    into a failure. Nothing is requested from the cluster here.
    """
    sources = _configured_sources(props)
    if len(sources) > 1:
        raise ConflictingCredentialSources(sources)

    cluster_name = _resolve_cluster_name(props, infrastructure_cluster_name)

    if props.install_pixie_integration and not props.install_pixie:
        logger.warning("install_pixie_integration is ignored because install_pixie is disabled")

    if props.new_relic_license_key or props.pixie_deploy_key or props.pixie_api_key:
        strategy = DirectCredentials(
            license_key=props.new_relic_license_key,
            pixie_deploy_key=props.pixie_deploy_key,
            pixie_api_key=props.pixie_api_key
        )
    elif props.aws_secret_name:
        strategy = SingleExternalSecret(props.aws_secret_name)
    elif props.aws_license_key_secret_name and props.aws_pixie_secret_name:
        strategy = SplitExternalSecret(props.aws_license_key_secret_name, props.aws_pixie_secret_name)
    elif props.aws_license_key_secret_name:
        strategy = SingleExternalSecret(props.aws_license_key_secret_name)
    elif props.aws_pixie_secret_name:
        raise IncompleteCredentialSource(
            "aws_pixie_secret_name requires aws_license_key_secret_name"
        )
    elif props.nr_license_key_secret_name:
        strategy = _lookup_license_key(props.nr_license_key_secret_name, secret_store)
    elif props.on_missing_credentials == constants.CREDENTIALS_POLICY_FAIL:
        raise MissingCredentialSource()
    else:
        logger.warning("No New Relic credentials configured, the chart must get them from values")
        strategy = NoCredentials()

    logger.info("Using %s credentials for cluster %s", type(strategy).__name__, cluster_name)
    return ResolvedCredentials(strategy=strategy, cluster_name=cluster_name)
