"""
Constants used throughout the New Relic EKS add-on
"""

# EKS Configuration
EKS_VERSION = "1.32"

# New Relic Helm chart defaults
NEWRELIC_HELM_REPOSITORY = "https://helm-charts.newrelic.com"
NEWRELIC_CHART = "nri-bundle"
NEWRELIC_CHART_VERSION = "4.2.0-beta"
NEWRELIC_RELEASE = "newrelic-bundle"
NEWRELIC_NAMESPACE = "newrelic"

# Fields expected inside the AWS Secrets Manager secret(s)
LICENSE_KEY_FIELD = "license_key"
PIXIE_DEPLOY_KEY_FIELD = "pixie_deploy_key"
PIXIE_API_KEY_FIELD = "pixie_api_key"

# Keys of the native Kubernetes secret read by the charts
LICENSE_SECRET_KEY = "licenseKey"
PIXIE_DEPLOY_SECRET_KEY = "deploy-key"
PIXIE_API_SECRET_KEY = "pixieApiKey"

# Names of the resources that bridge Secrets Manager into the cluster
COMBINED_CHAIN = "newrelic"
LICENSE_CHAIN = "newrelic-license"
PIXIE_CHAIN = "newrelic-pixie"
COMBINED_SECRET_NAME = "newrelic-secrets"
LICENSE_SECRET_NAME = "newrelic-license-secret"
PIXIE_SECRET_NAME = "newrelic-pixie-secret"
PLACEHOLDER_IMAGE = "public.ecr.aws/docker/library/busybox:stable"
SECRETS_MOUNT_PATH = "/mnt/secrets-store"

# Secrets Store CSI driver
CSI_DRIVER_NAME = "secrets-store.csi.k8s.io"
CSI_DRIVER_REPOSITORY = "https://kubernetes-sigs.github.io/secrets-store-csi-driver/charts"
CSI_DRIVER_CHART = "secrets-store-csi-driver"
CSI_DRIVER_VERSION = "1.4.7"
CSI_AWS_PROVIDER_REPOSITORY = "https://aws.github.io/secrets-store-csi-driver-provider-aws"
CSI_AWS_PROVIDER_CHART = "secrets-store-csi-driver-provider-aws"
CSI_AWS_PROVIDER_VERSION = "0.3.11"
KUBE_SYSTEM_NAMESPACE = "kube-system"

# Policies
CLUSTER_NAME_POLICY_DEFAULT = "default"
CLUSTER_NAME_POLICY_FAIL = "fail"
CREDENTIALS_POLICY_ALLOW = "allow"
CREDENTIALS_POLICY_FAIL = "fail"
MATERIALIZATION_PROJECTION = "projection"
MATERIALIZATION_NATIVE = "native"
