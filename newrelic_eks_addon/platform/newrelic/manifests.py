"""
Kubernetes manifests for the planned New Relic resources
"""
import json
from typing import Any, Dict, Mapping

from newrelic_eks_addon.config import constants
from newrelic_eks_addon.core.errors import SecretFetchFailure
from newrelic_eks_addon.core.planner import (
    Namespace,
    NativeSecret,
    PlaceholderWorkload,
    SecretProjection,
)


def namespace_manifest(request: Namespace) -> Dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Namespace",
        "metadata": {
            "name": request.name,
            "labels": {"name": request.name}
        }
    }


def secret_provider_class_manifest(request: SecretProjection) -> Dict[str, Any]:
    """SecretProviderClass for the AWS provider, synced into a native secret"""
    objects = [{
        "objectName": request.source_secret_name,
        "objectType": "secretsmanager",
        "jmesPath": [
            {"path": mapping.source_field, "objectAlias": mapping.destination_alias}
            for mapping in request.key_mappings
        ]
    }]
    return {
        "apiVersion": "secrets-store.csi.x-k8s.io/v1",
        "kind": "SecretProviderClass",
        "metadata": {
            "name": request.name,
            "namespace": request.namespace
        },
        "spec": {
            "provider": "aws",
            "parameters": {
                "objects": json.dumps(objects)
            },
            "secretObjects": [{
                "secretName": request.materialized_secret_name,
                "type": "Opaque",
                "data": [
                    {"objectName": mapping.destination_alias, "key": mapping.destination_key}
                    for mapping in request.key_mappings
                ]
            }]
        }
    }


def placeholder_pod_manifest(request: PlaceholderWorkload) -> Dict[str, Any]:
    """Pod keeping the CSI volume mounted so the synced secret exists"""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": request.name,
            "namespace": request.namespace,
            "labels": {"app": request.name}
        },
        "spec": {
            "serviceAccountName": request.identity,
            "containers": [{
                "name": "secrets-sync",
                "image": constants.PLACEHOLDER_IMAGE,
                "command": ["/bin/sh", "-c", "sleep infinity"],
                "resources": {
                    "requests": {"cpu": "10m", "memory": "16Mi"},
                    "limits": {"memory": "32Mi"}
                },
                "volumeMounts": [{
                    "name": "secrets-store",
                    "mountPath": constants.SECRETS_MOUNT_PATH,
                    "readOnly": True
                }]
            }],
            "volumes": [{
                "name": "secrets-store",
                "csi": {
                    "driver": constants.CSI_DRIVER_NAME,
                    "readOnly": True,
                    "volumeAttributes": {
                        "secretProviderClass": request.mounted_projection_name
                    }
                }
            }]
        }
    }


def native_secret_manifest(request: NativeSecret, secret: Mapping[str, Any]) -> Dict[str, Any]:
    """Opaque secret built from the fields of the external secret"""
    data = {}
    for mapping in request.key_mappings:
        if mapping.source_field not in secret:
            raise SecretFetchFailure(request.source_secret_name, f"no {mapping.source_field} field")
        data[mapping.destination_key] = str(secret[mapping.source_field])

    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {
            "name": request.name,
            "namespace": request.namespace
        },
        "type": "Opaque",
        "stringData": data
    }
