"""
Errors raised while resolving and deploying the New Relic add-on
"""


class NewRelicAddOnError(Exception):
    """Base class for add-on errors"""


class AddOnConfigurationError(NewRelicAddOnError):
    """Invalid option combination, raised before any cluster resource is requested"""


class ConflictingCredentialSources(AddOnConfigurationError):
    def __init__(self, sources):
        self.sources = tuple(sources)
        super().__init__(
            "Only one credential source may be configured, got: " + ", ".join(self.sources)
        )


class MissingClusterIdentifier(AddOnConfigurationError):
    def __init__(self):
        super().__init__(
            "new_relic_cluster_name is required when on_missing_cluster_name is 'fail' "
            "or the infrastructure cluster name is unknown"
        )


class MissingCredentialSource(AddOnConfigurationError):
    def __init__(self):
        super().__init__(
            "No New Relic credentials configured and on_missing_credentials is 'fail'"
        )


class IncompleteCredentialSource(AddOnConfigurationError):
    """A credential source was named but cannot be used on its own"""


class AddOnDeploymentError(NewRelicAddOnError):
    """Failure reported by AWS or the CDK while deploying; the cause is chained"""


class SecretFetchFailure(AddOnDeploymentError):
    def __init__(self, secret_name: str, reason: str):
        self.secret_name = secret_name
        super().__init__(f"Unable to read secret {secret_name}: {reason}")


class ResourceCreationFailure(AddOnDeploymentError):
    def __init__(self, resource_key: str, reason: str):
        self.resource_key = resource_key
        super().__init__(f"Unable to create {resource_key}: {reason}")
