import os
import pytest
from unittest.mock import MagicMock, patch

@pytest.fixture(scope="function", autouse=True)
def mock_environment():
    """Mock AWS environment variables for all tests"""
    with patch.dict(os.environ, {
        "CDK_DEFAULT_ACCOUNT": "123456789012",
        "CDK_DEFAULT_REGION": "us-west-2"
    }):
        yield

@pytest.fixture
def mock_cluster():
    """EKS cluster double returning a distinct mock per created resource"""
    cluster = MagicMock()
    cluster.cluster_name = "infra-cluster"
    cluster.add_manifest.side_effect = lambda construct_id, *manifests: MagicMock(name=construct_id)
    cluster.add_service_account.side_effect = lambda construct_id, **kwargs: MagicMock(name=construct_id)
    cluster.add_helm_chart.side_effect = lambda construct_id, **kwargs: MagicMock(name=construct_id)
    return cluster

@pytest.fixture
def secret_store():
    """Secret store double holding one combined New Relic secret"""
    store = MagicMock()
    store.get_secret.return_value = {
        "license_key": "license-from-secret",
        "pixie_deploy_key": "px-deploy",
        "pixie_api_key": "px-api"
    }
    return store
