from aws_cdk import App, Environment, assertions

from newrelic_eks_addon.config.environment_config import EnvironmentConfig
from newrelic_eks_addon.infrastructure.compute.eks_cluster_stack import EksClusterStack
from newrelic_eks_addon.infrastructure.network.vpc_stack import VpcStack
from newrelic_eks_addon.platform.newrelic.newrelic_addon_construct import NewRelicAddOn
from newrelic_eks_addon.platform.secrets.secrets_store_construct import SecretsStoreConstruct

ENV = Environment(account="123456789012", region="us-west-2")

def test_vpc_stack():
    app = App()
    config = EnvironmentConfig.development("123456789012", "us-west-2")
    stack = VpcStack(app, "test-vpc", network_config=config.network)
    template = assertions.Template.from_stack(stack)

    template.resource_count_is("AWS::EC2::VPC", 1)
    template.has_resource_properties("AWS::EC2::VPC", {
        "CidrBlock": "10.0.0.0/16",
        "EnableDnsHostnames": True,
        "EnableDnsSupport": True
    })
    template.resource_count_is("AWS::EC2::NatGateway", 1)
    # S3 gateway plus Secrets Manager, STS and both ECR interface endpoints
    template.resource_count_is("AWS::EC2::VPCEndpoint", 5)

def test_eks_cluster_stack_with_newrelic():
    app = App()
    config = EnvironmentConfig.development("123456789012", "us-west-2")
    vpc_stack = VpcStack(app, "test-vpc", network_config=config.network, env=ENV)
    stack = EksClusterStack(app, "eks-cluster", vpc=vpc_stack.vpc, eks_config=config.eks, env=ENV)

    secrets_store = SecretsStoreConstruct(stack, "SecretsStore", cluster=stack.cluster)
    NewRelicAddOn(
        stack,
        "NewRelic",
        cluster=stack.cluster,
        props=config.newrelic,
        prerequisites=[secrets_store]
    )
    template = assertions.Template.from_stack(stack)

    template.resource_count_is("AWS::EKS::Nodegroup", 2)
    template.has_resource_properties("AWS::EKS::Nodegroup", {
        "CapacityType": "SPOT"
    })
    template.has_resource_properties("Custom::AWSCDK-EKS-HelmChart", {
        "Chart": "nri-bundle",
        "Release": "newrelic-bundle",
        "Namespace": "newrelic",
        "Repository": "https://helm-charts.newrelic.com"
    })
    template.has_resource_properties("Custom::AWSCDK-EKS-HelmChart", {
        "Chart": "secrets-store-csi-driver",
        "Namespace": "kube-system"
    })
