from .environment_config import EnvironmentConfig, NetworkConfig, EksConfig, NodeGroupConfig, TeamConfig
from .addon_config import NewRelicAddOnProps, DEFAULT_PROPS, merge_defaults
