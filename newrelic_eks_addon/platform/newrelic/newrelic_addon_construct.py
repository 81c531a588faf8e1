import logging
from typing import Any, List, Mapping, Optional, Union

from aws_cdk import (
    aws_eks as eks,
    aws_iam as iam,
    Aws,
    CfnOutput,
    Stack,
    Token
)
from constructs import Construct, IDependable
from jsii.errors import JSIIError

from newrelic_eks_addon.config.addon_config import NewRelicAddOnProps
from newrelic_eks_addon.core.errors import ResourceCreationFailure
from newrelic_eks_addon.core.planner import (
    Namespace,
    NativeSecret,
    PlaceholderWorkload,
    SecretProjection,
    ServiceIdentity,
)
from newrelic_eks_addon.core.resolver import resolve_and_plan
from newrelic_eks_addon.platform.newrelic import manifests
from newrelic_eks_addon.secrets import SecretsManagerSecretStore

logger = logging.getLogger(__name__)


def _construct_id(name: str) -> str:
    return name.replace("-", "")


class NewRelicAddOn(Construct):
    """
    Construct for deploying the New Relic nri-bundle chart.

    Options are resolved before anything is added to the cluster. When the
    credentials live in Secrets Manager, the namespace, service account,
    SecretProviderClass and placeholder pod are created first and the chart
    waits for them.
    """
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        cluster: eks.ICluster,
        props: Union[NewRelicAddOnProps, Mapping[str, Any], None] = None,
        secret_store=None,
        prerequisites: Optional[List[IDependable]] = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.cluster = cluster
        self.prerequisites = list(prerequisites or [])
        self.secret_store = secret_store or SecretsManagerSecretStore(region=self._region())

        # Fails here on invalid options, before any manifest exists
        self.resolved = resolve_and_plan(
            props,
            infrastructure_cluster_name=cluster.cluster_name,
            secret_store=self.secret_store
        )

        self.resources = {}
        for request in self.resolved.plan.requests:
            resource = self._create(request)
            for dependency in request.depends_on:
                resource.node.add_dependency(self.resources[dependency])
            if isinstance(request, SecretProjection):
                for prerequisite in self.prerequisites:
                    resource.node.add_dependency(prerequisite)
            self.resources[request.key] = resource

        self.chart = self._install_chart()

        CfnOutput(self, "NewRelicRelease",
            value=f"{self.resolved.props.namespace}/{self.resolved.props.release}",
            description="Namespace and release name of the New Relic bundle"
        )

    def _region(self) -> Optional[str]:
        region = Stack.of(self).region
        return None if Token.is_unresolved(region) else region

    def _create(self, request):
        try:
            if isinstance(request, Namespace):
                return self._add_namespace(request)
            if isinstance(request, ServiceIdentity):
                return self._add_service_identity(request)
            if isinstance(request, SecretProjection):
                return self.cluster.add_manifest(
                    f"{_construct_id(request.name)}SecretProviderClass",
                    manifests.secret_provider_class_manifest(request)
                )
            if isinstance(request, PlaceholderWorkload):
                return self.cluster.add_manifest(
                    f"{_construct_id(request.name)}Pod",
                    manifests.placeholder_pod_manifest(request)
                )
            if isinstance(request, NativeSecret):
                secret = self.secret_store.get_secret(request.source_secret_name)
                return self.cluster.add_manifest(
                    f"{_construct_id(request.name)}Secret",
                    manifests.native_secret_manifest(request, secret)
                )
        except JSIIError as e:
            raise ResourceCreationFailure(request.key, str(e)) from e
        raise TypeError(f"Unsupported resource request: {request!r}")

    def _add_namespace(self, request: Namespace) -> eks.KubernetesManifest:
        return self.cluster.add_manifest(
            f"{_construct_id(request.name)}Namespace",
            manifests.namespace_manifest(request)
        )

    def _add_service_identity(self, request: ServiceIdentity) -> eks.ServiceAccount:
        """Service account allowed to read the referenced Secrets Manager secrets"""
        service_account = self.cluster.add_service_account(
            f"{_construct_id(request.name)}ServiceAccount",
            name=request.name,
            namespace=request.namespace
        )
        service_account.add_to_principal_policy(
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=[
                    "secretsmanager:GetSecretValue",
                    "secretsmanager:DescribeSecret"
                ],
                resources=[
                    f"arn:{Aws.PARTITION}:secretsmanager:{Aws.REGION}:{Aws.ACCOUNT_ID}:secret:{name}-??????"
                    for name in request.secret_names
                ]
            )
        )
        return service_account

    def _install_chart(self) -> eks.HelmChart:
        props = self.resolved.props
        try:
            chart = self.cluster.add_helm_chart(
                "newrelic-bundle",
                chart=props.chart,
                release=props.release,
                repository=props.repository,
                namespace=props.namespace,
                version=props.version,
                values=self.resolved.values
            )
        except JSIIError as e:
            raise ResourceCreationFailure(f"HelmChart/{props.namespace}/{props.release}", str(e)) from e

        for key in self.resolved.plan.chart_prerequisites:
            chart.node.add_dependency(self.resources[key])
        for prerequisite in self.prerequisites:
            chart.node.add_dependency(prerequisite)

        logger.info(
            "Added %s chart %s to namespace %s with %d prerequisite resource(s)",
            props.chart, props.version, props.namespace, len(self.resolved.plan.chart_prerequisites)
        )
        return chart
