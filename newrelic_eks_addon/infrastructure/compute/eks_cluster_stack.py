from aws_cdk import (
    Stack,
    aws_ec2 as ec2,
    aws_eks as eks,
    aws_iam as iam,
    CfnOutput,
)
from aws_cdk.lambda_layer_kubectl_v32 import KubectlV32Layer
from constructs import Construct
from newrelic_eks_addon.config import EksConfig, NodeGroupConfig, TeamConfig


class EksClusterStack(Stack):
    """
    Creates an EKS cluster with managed node groups and team access
    """
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        vpc: ec2.IVpc,
        eks_config: EksConfig,
        kubectl_layer=None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        if kubectl_layer is None:
            kubectl_layer = KubectlV32Layer(self, "KubectlLayer")

        self.cluster = eks.Cluster(self, "Cluster",
            version=eks.KubernetesVersion.of(eks_config.version),
            cluster_name=eks_config.cluster_name,
            vpc=vpc,
            kubectl_layer=kubectl_layer,
            default_capacity=0,
            endpoint_access=eks.EndpointAccess.PUBLIC_AND_PRIVATE,
            vpc_subnets=[ec2.SubnetSelection(
                subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS
            )],
            cluster_logging=[
                getattr(eks.ClusterLoggingTypes, log_type.upper())
                for log_type in eks_config.control_plane_log_types
            ],
            authentication_mode=eks.AuthenticationMode.API_AND_CONFIG_MAP
        )

        for node_group in eks_config.node_groups:
            self._add_node_group(node_group)

        self.team_namespaces = {}
        for team in eks_config.teams:
            if team.platform:
                self._add_platform_team(team)
            else:
                self._add_application_team(team)

        self._add_outputs(eks_config)

    def _add_node_group(self, node_group: NodeGroupConfig):
        """Add a managed node group in the private subnets"""
        options = {}
        if node_group.ami_type:
            options["ami_type"] = getattr(eks.NodegroupAmiType, node_group.ami_type)

        return self.cluster.add_nodegroup_capacity(
            node_group.id,
            instance_types=[ec2.InstanceType(t) for t in node_group.instance_types],
            capacity_type=getattr(eks.CapacityType, node_group.capacity_type),
            min_size=node_group.min_size,
            max_size=node_group.max_size,
            desired_size=node_group.desired_size,
            subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS),
            **options
        )

    def _add_platform_team(self, team: TeamConfig):
        """Map the platform team role to cluster admin"""
        if not team.role_arn:
            return
        role = iam.Role.from_role_arn(self, f"{team.name}-role", team.role_arn)
        self.cluster.aws_auth.add_role_mapping(
            role=role,
            groups=["system:masters"]
        )

    def _add_application_team(self, team: TeamConfig):
        """Give the team its own namespace and edit rights inside it"""
        namespace = self.cluster.add_manifest(f"{team.name.replace('-', '')}Namespace", {
            "apiVersion": "v1",
            "kind": "Namespace",
            "metadata": {
                "name": team.namespace,
                "labels": {"team": team.name}
            }
        })
        self.team_namespaces[team.name] = namespace

        for index, user_arn in enumerate(team.user_arns):
            user = iam.User.from_user_arn(self, f"{team.name}-user-{index}", user_arn)
            self.cluster.aws_auth.add_user_mapping(
                user=user,
                groups=[team.name]
            )

        role_binding = self.cluster.add_manifest(f"{team.name.replace('-', '')}RoleBinding", {
            "apiVersion": "rbac.authorization.k8s.io/v1",
            "kind": "RoleBinding",
            "metadata": {
                "name": f"{team.name}-edit",
                "namespace": team.namespace
            },
            "roleRef": {
                "apiGroup": "rbac.authorization.k8s.io",
                "kind": "ClusterRole",
                "name": "edit"
            },
            "subjects": [{
                "apiGroup": "rbac.authorization.k8s.io",
                "kind": "Group",
                "name": team.name
            }]
        })
        role_binding.node.add_dependency(namespace)

    def _add_outputs(self, eks_config):
        """Add CloudFormation outputs"""
        CfnOutput(self, "ClusterName",
            value=self.cluster.cluster_name,
            description="EKS cluster name"
        )

        CfnOutput(self, "KubectlConfigCommand",
            value=f"aws eks update-kubeconfig --name {self.cluster.cluster_name} --region {self.region}",
            description="Command to configure kubectl"
        )

    @property
    def cluster_name(self) -> str:
        """Get the cluster name"""
        return self.cluster.cluster_name
