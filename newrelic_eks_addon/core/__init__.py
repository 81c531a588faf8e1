from .errors import (
    NewRelicAddOnError,
    AddOnConfigurationError,
    ConflictingCredentialSources,
    MissingClusterIdentifier,
    MissingCredentialSource,
    IncompleteCredentialSource,
    AddOnDeploymentError,
    SecretFetchFailure,
    ResourceCreationFailure,
)
from .paths import set_path, unset_path, deep_merge
from .credentials import (
    DirectCredentials,
    SingleExternalSecret,
    SplitExternalSecret,
    NoCredentials,
    resolve_credentials,
)
from .planner import (
    KeyMapping,
    Namespace,
    ServiceIdentity,
    SecretProjection,
    PlaceholderWorkload,
    NativeSecret,
    ResourcePlan,
    SecretMaterializer,
    ProjectionDrivenMaterializer,
    NativeSecretMaterializer,
    plan_resources,
)
from .composer import compose_values
from .resolver import ResolvedDeployment, resolve_and_plan
