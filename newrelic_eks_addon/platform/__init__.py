from .newrelic import NewRelicAddOn
from .secrets import SecretsStoreConstruct
