from aws_cdk import App

from newrelic_eks_addon.platform.secrets import SecretsStoreConstruct

def test_secrets_store_construct(mock_cluster):
    app = App()

    secrets_store = SecretsStoreConstruct(
        app,
        "secrets-store",
        cluster=mock_cluster,
        driver_values={"linux": {"tolerations": []}}
    )

    assert mock_cluster.add_helm_chart.call_count == 2

    driver_call, provider_call = mock_cluster.add_helm_chart.call_args_list
    assert driver_call.kwargs["chart"] == "secrets-store-csi-driver"
    assert driver_call.kwargs["namespace"] == "kube-system"
    assert driver_call.kwargs["values"]["syncSecret"] == {"enabled": True}
    assert driver_call.kwargs["values"]["linux"] == {"tolerations": []}
    assert provider_call.kwargs["chart"] == "secrets-store-csi-driver-provider-aws"

    secrets_store.provider_chart.node.add_dependency.assert_called_once_with(secrets_store.driver_chart)
