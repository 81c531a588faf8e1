from typing import Any, Dict, Optional

from aws_cdk import aws_eks as eks
from constructs import Construct

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.core.paths import deep_merge


class SecretsStoreConstruct(Construct):
    """
    Construct for installing the Secrets Store CSI driver and its AWS provider.

    Secret syncing is enabled so SecretProviderClass secretObjects turn into
    native Kubernetes secrets.
    """
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        cluster: eks.ICluster,
        driver_version: str = constants.CSI_DRIVER_VERSION,
        provider_version: str = constants.CSI_AWS_PROVIDER_VERSION,
        driver_values: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.cluster = cluster

        self.driver_chart = cluster.add_helm_chart(
            "secrets-store-csi-driver",
            chart=constants.CSI_DRIVER_CHART,
            release="secrets-store-csi-driver",
            repository=constants.CSI_DRIVER_REPOSITORY,
            namespace=constants.KUBE_SYSTEM_NAMESPACE,
            version=driver_version,
            values=deep_merge(self._get_driver_values(), driver_values)
        )

        self.provider_chart = cluster.add_helm_chart(
            "secrets-store-csi-driver-provider-aws",
            chart=constants.CSI_AWS_PROVIDER_CHART,
            release="secrets-store-csi-driver-provider-aws",
            repository=constants.CSI_AWS_PROVIDER_REPOSITORY,
            namespace=constants.KUBE_SYSTEM_NAMESPACE,
            version=provider_version,
            values={
                "resources": {
                    "requests": {"cpu": "10m", "memory": "50Mi"},
                    "limits": {"memory": "50Mi"}
                }
            }
        )
        self.provider_chart.node.add_dependency(self.driver_chart)

    def _get_driver_values(self) -> dict:
        return {
            "syncSecret": {
                "enabled": True
            },
            "enableSecretRotation": True,
            "rotationPollInterval": "15s"
        }
