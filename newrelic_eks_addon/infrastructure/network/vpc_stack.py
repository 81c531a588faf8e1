from aws_cdk import (
    Stack,
    aws_ec2 as ec2,
)
from constructs import Construct
from cdk_nag import NagSuppressions
from newrelic_eks_addon.config import NetworkConfig

class VpcStack(Stack):
    """
    Creates the VPC hosting the EKS cluster
    """
    def __init__(self, scope: Construct, construct_id: str, network_config: NetworkConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.vpc = ec2.Vpc(self, "EksVpc",
            ip_addresses=ec2.IpAddresses.cidr(network_config.vpc_cidr),
            max_azs=network_config.max_azs,
            nat_gateways=network_config.nat_gateways,
            vpc_name=f"{construct_id}-vpc",
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    map_public_ip_on_launch=False
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS
                )
            ],
            flow_logs=network_config.enable_flow_logs and {
                "flow-logs": {
                    "destination": ec2.FlowLogDestination.to_cloud_watch_logs(),
                    "traffic_type": ec2.FlowLogTrafficType.ALL
                }
            } or {}
        )

        self._add_vpc_endpoints()

        if not network_config.enable_flow_logs:
            NagSuppressions.add_resource_suppressions(
                self.vpc,
                [
                    {
                        "id": "AwsSolutions-VPC7",
                        "reason": "VPC Flow Logs not required for this environment"
                    }
                ]
            )

        self.vpc_id = self.vpc.vpc_id

    def _add_vpc_endpoints(self):
        """Endpoints used by the nodes, the CSI provider and IRSA"""
        private_subnets = ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS)

        self.vpc.add_gateway_endpoint(
            "S3GatewayEndpoint",
            service=ec2.GatewayVpcEndpointAwsService.S3,
            subnets=[private_subnets]
        )

        # The CSI provider reads the New Relic secrets from the nodes
        self.vpc.add_interface_endpoint(
            "SecretsManagerEndpoint",
            service=ec2.InterfaceVpcEndpointAwsService.SECRETS_MANAGER,
            subnets=private_subnets
        )

        self.vpc.add_interface_endpoint(
            "StsEndpoint",
            service=ec2.InterfaceVpcEndpointAwsService.STS,
            subnets=private_subnets
        )

        self.vpc.add_interface_endpoint(
            "EcrDockerEndpoint",
            service=ec2.InterfaceVpcEndpointAwsService.ECR_DOCKER,
            subnets=private_subnets
        )

        self.vpc.add_interface_endpoint(
            "EcrEndpoint",
            service=ec2.InterfaceVpcEndpointAwsService.ECR,
            subnets=private_subnets
        )
