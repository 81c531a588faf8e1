#!/usr/bin/env python3
import logging
import os

from aws_cdk import App, Environment, Aspects
from cdk_nag import AwsSolutionsChecks

from newrelic_eks_addon import (
    VpcStack,
    EksClusterStack,
    NewRelicAddOn,
    SecretsStoreConstruct,
    EnvironmentConfig,
)
from newrelic_eks_addon.nag_suppressions import add_nag_suppressions

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# Initialize the CDK app
app = App()

# "combined" reads every key from one secret, "split" from two
secrets_layout = app.node.try_get_context("secrets_layout") or "combined"

account = os.getenv('CDK_DEFAULT_ACCOUNT')
region = os.getenv('CDK_DEFAULT_REGION')
cdk_env = Environment(account=account, region=region)

if secrets_layout == "split":
    config = EnvironmentConfig.split_secrets(account, region)
else:
    config = EnvironmentConfig.development(account, region)

vpc_stack = VpcStack(
    app,
    "NetworkStack",
    network_config=config.network,
    env=cdk_env
)

eks_cluster_stack = EksClusterStack(
    app,
    "EksClusterStack",
    vpc=vpc_stack.vpc,
    eks_config=config.eks,
    env=cdk_env
)
eks_cluster_stack.add_dependency(vpc_stack)

# The CSI driver turns the Secrets Manager secrets into Kubernetes secrets
secrets_store = SecretsStoreConstruct(
    eks_cluster_stack,
    "SecretsStore",
    cluster=eks_cluster_stack.cluster
)

newrelic = NewRelicAddOn(
    eks_cluster_stack,
    "NewRelic",
    cluster=eks_cluster_stack.cluster,
    props=config.newrelic,
    prerequisites=[secrets_store]
)

if app.node.try_get_context("enable_nag"):
    Aspects.of(app).add(AwsSolutionsChecks(verbose=True))
    add_nag_suppressions([vpc_stack, eks_cluster_stack])

# Synthesize the CloudFormation templates
app.synth()
