"""
Environment-specific configuration for the New Relic blueprint
"""
from dataclasses import dataclass, field
from typing import List, Optional

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.config.addon_config import NewRelicAddOnProps


@dataclass
class NetworkConfig:
    """Network configuration for the environment"""
    vpc_cidr: str = "10.0.0.0/16"
    max_azs: int = 2
    nat_gateways: int = 1
    enable_flow_logs: bool = False


@dataclass
class NodeGroupConfig:
    """Managed node group definition"""
    id: str
    instance_types: List[str] = field(default_factory=lambda: ["m5.large"])
    capacity_type: str = "ON_DEMAND"  # "ON_DEMAND" or "SPOT"
    ami_type: Optional[str] = None
    min_size: int = 1
    max_size: int = 3
    desired_size: int = 2


@dataclass
class TeamConfig:
    """
    A team with access to the cluster.

    Platform teams get cluster admin through ``role_arn``. Application teams
    get their own namespace and edit rights inside it.
    """
    name: str
    platform: bool = False
    user_arns: List[str] = field(default_factory=list)
    role_arn: Optional[str] = None

    @property
    def namespace(self) -> str:
        return self.name


@dataclass
class EksConfig:
    cluster_name: str
    version: str = constants.EKS_VERSION
    node_groups: List[NodeGroupConfig] = field(default_factory=list)
    control_plane_log_types: List[str] = field(default_factory=lambda: ["api"])
    teams: List[TeamConfig] = field(default_factory=list)


@dataclass
class EnvironmentConfig:
    """Complete environment configuration"""
    environment_name: str
    account: str
    region: str
    network: NetworkConfig
    eks: EksConfig
    newrelic: NewRelicAddOnProps

    @classmethod
    def development(cls, account: str, region: str) -> 'EnvironmentConfig':
        """Development cluster with Pixie fed from one combined secret"""
        return cls(
            environment_name="dev",
            account=account,
            region=region,
            network=NetworkConfig(
                nat_gateways=1,
                enable_flow_logs=False
            ),
            eks=EksConfig(
                cluster_name="demo-cluster",
                node_groups=[
                    NodeGroupConfig(id="mng1", ami_type="AL2_X86_64"),
                    NodeGroupConfig(id="mng2-custom", capacity_type="SPOT"),
                ],
                teams=[
                    TeamConfig(
                        name="platform",
                        platform=True,
                        role_arn=f"arn:aws:iam::{account}:role/Admin"
                    ),
                    TeamConfig(
                        name="team-application",
                        user_arns=[
                            f"arn:aws:iam::{account}:user/application-user1",
                            f"arn:aws:iam::{account}:user/application-user2"
                        ]
                    ),
                ]
            ),
            newrelic=NewRelicAddOnProps(
                new_relic_cluster_name="demo-cluster",
                aws_secret_name="newrelic-pixie-combined",
                install_pixie=True,
                install_pixie_integration=True,
                values={
                    "nri-prometheus": {
                        "config": {
                            "transformations": [{
                                "description": "Prometheus metric exclusion example",
                                "ignore_metrics": [{"prefixes": ["kube_"]}]
                            }]
                        }
                    },
                    "newrelic-infrastructure": {
                        "common": {
                            "agentConfig": {
                                "enable_process_metrics": True
                            }
                        }
                    }
                }
            )
        )

    @classmethod
    def split_secrets(cls, account: str, region: str) -> 'EnvironmentConfig':
        """License key and Pixie keys kept in separate secrets"""
        config = cls.development(account, region)
        config.environment_name = "dev-split"
        config.newrelic = NewRelicAddOnProps(
            new_relic_cluster_name="demo-cluster",
            aws_license_key_secret_name="newrelic-license",
            aws_pixie_secret_name="newrelic-pixie",
            install_pixie=True,
            install_pixie_integration=True
        )
        return config
