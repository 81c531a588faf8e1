from .secrets_store_construct import SecretsStoreConstruct
