"""
Planning of the cluster resources that bring Secrets Manager secrets into the cluster.

The Secrets Store CSI driver only creates a native Kubernetes secret from a
SecretProviderClass while some running pod mounts the projected volume, so the
projection-driven chain ends in a placeholder pod. Environments that can take
the secret values directly use the native materializer instead.
"""
import abc
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.core.credentials import (
    CredentialStrategy,
    SingleExternalSecret,
    SplitExternalSecret,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyMapping:
    """Field of the external secret and where it lands in the native secret"""
    source_field: str
    destination_alias: str
    destination_key: str


@dataclass(frozen=True)
class Namespace:
    name: str
    depends_on: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"Namespace/{self.name}"


@dataclass(frozen=True)
class ServiceIdentity:
    """Service account allowed to read ``secret_names``"""
    name: str
    namespace: str
    secret_names: Tuple[str, ...] = ()
    depends_on: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"ServiceIdentity/{self.namespace}/{self.name}"


@dataclass(frozen=True)
class SecretProjection:
    """SecretProviderClass pulling ``key_mappings`` out of one external secret"""
    name: str
    namespace: str
    source_secret_name: str
    key_mappings: Tuple[KeyMapping, ...]
    materialized_secret_name: str
    depends_on: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"SecretProjection/{self.namespace}/{self.name}"


@dataclass(frozen=True)
class PlaceholderWorkload:
    """Pod that mounts the projection so the driver syncs the native secret"""
    name: str
    namespace: str
    identity: str
    mounted_projection_name: str
    depends_on: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"PlaceholderWorkload/{self.namespace}/{self.name}"


@dataclass(frozen=True)
class NativeSecret:
    """Kubernetes secret filled at synth time from the external secret"""
    name: str
    namespace: str
    source_secret_name: str
    key_mappings: Tuple[KeyMapping, ...]
    depends_on: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"NativeSecret/{self.namespace}/{self.name}"


@dataclass(frozen=True)
class SecretRef:
    """Native secret name and key a credential can be read from"""
    secret_name: str
    key: str


@dataclass(frozen=True)
class SecretChain:
    """One external secret and the native secret it turns into"""
    prefix: str
    source_secret_name: str
    materialized_secret_name: str
    key_mappings: Tuple[KeyMapping, ...]


@dataclass
class ResourcePlan:
    requests: List[object] = field(default_factory=list)
    chart_prerequisites: List[str] = field(default_factory=list)
    # credential field -> where the chart reads it
    secret_refs: Dict[str, SecretRef] = field(default_factory=dict)

    def get(self, key: str):
        for request in self.requests:
            if request.key == key:
                return request
        raise KeyError(key)


class SecretMaterializer(abc.ABC):
    """Turns one secret chain into cluster resource requests"""

    @abc.abstractmethod
    def plan_chain(self, chain: SecretChain, namespace: Namespace) -> Tuple[List[object], str]:
        """Return the chain's requests and the key the chart must wait for"""


class ProjectionDrivenMaterializer(SecretMaterializer):
    """Service account, SecretProviderClass and a placeholder pod per chain"""

    def plan_chain(self, chain, namespace):
        identity = ServiceIdentity(
            name=f"{chain.prefix}-secret-sa",
            namespace=namespace.name,
            secret_names=(chain.source_secret_name,),
            depends_on=(namespace.key,)
        )
        projection = SecretProjection(
            name=f"{chain.prefix}-secret-provider-class",
            namespace=namespace.name,
            source_secret_name=chain.source_secret_name,
            key_mappings=chain.key_mappings,
            materialized_secret_name=chain.materialized_secret_name,
            depends_on=(namespace.key,)
        )
        workload = PlaceholderWorkload(
            name=f"{chain.prefix}-secret-pod",
            namespace=namespace.name,
            identity=identity.name,
            mounted_projection_name=projection.name,
            depends_on=(identity.key, projection.key)
        )
        return [identity, projection, workload], workload.key


class NativeSecretMaterializer(SecretMaterializer):
    """A Kubernetes secret written directly, no CSI driver involved"""

    def plan_chain(self, chain, namespace):
        secret = NativeSecret(
            name=chain.materialized_secret_name,
            namespace=namespace.name,
            source_secret_name=chain.source_secret_name,
            key_mappings=chain.key_mappings,
            depends_on=(namespace.key,)
        )
        return [secret], secret.key


def _license_mapping() -> KeyMapping:
    return KeyMapping(constants.LICENSE_KEY_FIELD, constants.LICENSE_KEY_FIELD, constants.LICENSE_SECRET_KEY)


def _pixie_deploy_mapping() -> KeyMapping:
    return KeyMapping(constants.PIXIE_DEPLOY_KEY_FIELD, constants.PIXIE_DEPLOY_KEY_FIELD, constants.PIXIE_DEPLOY_SECRET_KEY)


def _pixie_api_mapping() -> KeyMapping:
    return KeyMapping(constants.PIXIE_API_KEY_FIELD, constants.PIXIE_API_KEY_FIELD, constants.PIXIE_API_SECRET_KEY)


def _secret_chains(strategy, install_pixie: bool, install_pixie_integration: bool) -> List[SecretChain]:
    if isinstance(strategy, SingleExternalSecret):
        mappings = [_license_mapping()]
        if install_pixie:
            mappings.append(_pixie_deploy_mapping())
            if install_pixie_integration:
                mappings.append(_pixie_api_mapping())
        return [SecretChain(
            prefix=constants.COMBINED_CHAIN,
            source_secret_name=strategy.secret_name,
            materialized_secret_name=constants.COMBINED_SECRET_NAME,
            key_mappings=tuple(mappings)
        )]

    if isinstance(strategy, SplitExternalSecret):
        chains = [SecretChain(
            prefix=constants.LICENSE_CHAIN,
            source_secret_name=strategy.license_secret_name,
            materialized_secret_name=constants.LICENSE_SECRET_NAME,
            key_mappings=(_license_mapping(),)
        )]
        if install_pixie:
            mappings = [_pixie_deploy_mapping()]
            if install_pixie_integration:
                mappings.append(_pixie_api_mapping())
            chains.append(SecretChain(
                prefix=constants.PIXIE_CHAIN,
                source_secret_name=strategy.aux_key_secret_name,
                materialized_secret_name=constants.PIXIE_SECRET_NAME,
                key_mappings=tuple(mappings)
            ))
        return chains

    return []


def plan_resources(
    strategy: CredentialStrategy,
    namespace: str,
    install_pixie: bool = False,
    install_pixie_integration: bool = False,
    materializer: Optional[SecretMaterializer] = None
) -> ResourcePlan:
    """
    Compute the ordered resource requests for ``strategy``.

    Strategies that need no external pull get an empty plan. Otherwise every
    chain hangs off one shared namespace request.
    """
    plan = ResourcePlan()
    chains = _secret_chains(strategy, install_pixie, install_pixie_integration)
    if not chains:
        return plan

    if materializer is None:
        materializer = ProjectionDrivenMaterializer()

    namespace_request = Namespace(namespace)
    plan.requests.append(namespace_request)

    for chain in chains:
        requests, prerequisite = materializer.plan_chain(chain, namespace_request)
        plan.requests.extend(requests)
        plan.chart_prerequisites.append(prerequisite)
        for mapping in chain.key_mappings:
            plan.secret_refs[mapping.source_field] = SecretRef(
                chain.materialized_secret_name, mapping.destination_key
            )

    logger.info(
        "Planned %d resources across %d secret chain(s) with %s",
        len(plan.requests), len(chains), type(materializer).__name__
    )
    return plan
