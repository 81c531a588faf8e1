import json
import pytest
from unittest.mock import MagicMock, patch
from botocore.exceptions import ClientError

from newrelic_eks_addon.core.errors import SecretFetchFailure
from newrelic_eks_addon.secrets import SecretsManagerSecretStore

def client_returning(response):
    client = MagicMock()
    client.get_secret_value.return_value = response
    return client

def test_secret_string():
    client = client_returning({"SecretString": json.dumps({"license_key": "abc"})})
    store = SecretsManagerSecretStore(client=client)

    assert store.get_secret("newrelic") == {"license_key": "abc"}
    client.get_secret_value.assert_called_once_with(SecretId="newrelic")

def test_secret_binary():
    client = client_returning({"SecretBinary": json.dumps({"license_key": "abc"}).encode("utf-8")})

    assert SecretsManagerSecretStore(client=client).get_secret("newrelic") == {"license_key": "abc"}

def test_client_error_is_chained():
    client = MagicMock()
    error = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}},
        "GetSecretValue"
    )
    client.get_secret_value.side_effect = error

    with pytest.raises(SecretFetchFailure) as excinfo:
        SecretsManagerSecretStore(client=client).get_secret("missing")

    assert excinfo.value.__cause__ is error
    assert excinfo.value.secret_name == "missing"
    assert "ResourceNotFoundException" in str(excinfo.value)

@pytest.mark.parametrize("response", [
    {},
    {"SecretString": "not json"},
    {"SecretString": json.dumps(["license_key"])},
])
def test_unusable_payload(response):
    with pytest.raises(SecretFetchFailure):
        SecretsManagerSecretStore(client=client_returning(response)).get_secret("newrelic")

def test_client_created_lazily_for_region():
    with patch("newrelic_eks_addon.secrets.secrets_manager.boto3") as mock_boto3:
        store = SecretsManagerSecretStore(region="eu-west-1")
        mock_boto3.client.assert_not_called()

        store.client
        mock_boto3.client.assert_called_once_with("secretsmanager", region_name="eu-west-1")
