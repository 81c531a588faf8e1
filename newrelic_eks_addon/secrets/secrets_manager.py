import json
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from newrelic_eks_addon.core.errors import SecretFetchFailure

logger = logging.getLogger(__name__)


class SecretsManagerSecretStore:
    """
    Reads JSON secrets from AWS Secrets Manager
    """
    def __init__(self, region: Optional[str] = None, client=None) -> None:
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region)
        return self._client

    def get_secret(self, secret_name: str) -> Dict[str, Any]:
        """Return the secret's fields as a dict"""
        try:
            response = self.client.get_secret_value(SecretId=secret_name)
        except ClientError as e:
            logger.error(f"Error reading secret {secret_name}: {str(e)}")
            raise SecretFetchFailure(secret_name, e.response["Error"]["Code"]) from e

        if response.get("SecretString"):
            payload = response["SecretString"]
        elif response.get("SecretBinary"):
            payload = response["SecretBinary"].decode("utf-8")
        else:
            raise SecretFetchFailure(secret_name, "secret has no value")

        try:
            secret = json.loads(payload)
        except ValueError as e:
            raise SecretFetchFailure(secret_name, "secret value is not JSON") from e

        if not isinstance(secret, dict):
            raise SecretFetchFailure(secret_name, "secret value is not a JSON object")
        return secret
