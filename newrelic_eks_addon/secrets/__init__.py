from .secrets_manager import SecretsManagerSecretStore
