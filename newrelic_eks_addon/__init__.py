from .infrastructure import VpcStack, EksClusterStack
from .platform import NewRelicAddOn, SecretsStoreConstruct
from .config import EnvironmentConfig, NetworkConfig, EksConfig, NewRelicAddOnProps, merge_defaults
from .core import resolve_and_plan
