"""
Conversion of Kubernetes API client objects into podsecurity pods.

Accepts model objects from the official ``kubernetes`` client (V1Pod,
V1Deployment, ...) as returned by a cluster listing, and reduces them to
the Pod model the checks evaluate.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from kubernetes.client import ApiClient

from podsecurity.collectors.manifest import pod_from_manifest
from podsecurity.models.workload import Pod

logger = logging.getLogger(__name__)

_api_client: Optional[ApiClient] = None


def _serializer() -> ApiClient:
    global _api_client
    if _api_client is None:
        _api_client = ApiClient()
    return _api_client


def object_to_manifest(obj: Any) -> dict[str, Any]:
    """
    Serialize a kubernetes client model into a manifest dictionary.

    Plain dictionaries are returned unchanged.
    """
    if isinstance(obj, dict):
        return obj
    data = _serializer().sanitize_for_serialization(obj)
    return data if isinstance(data, dict) else {}


def pod_from_object(obj: Any, kind: str | None = None) -> Optional[Pod]:
    """
    Convert a kubernetes client object into a Pod.

    Args:
        obj: V1Pod, V1Deployment or another workload model
        kind: Kind to assume when the object does not carry one (client
            list calls leave ``kind`` unset on items)

    Returns:
        Pod, or None if the object does not describe pods
    """
    manifest = dict(object_to_manifest(obj))
    if not manifest.get("kind"):
        manifest["kind"] = kind or _kind_from_type(obj)
    return pod_from_manifest(manifest)


def _kind_from_type(obj: Any) -> str:
    # V1Pod -> Pod, V1Deployment -> Deployment
    name = type(obj).__name__
    for prefix in ("V1beta1", "V1beta2", "V1"):
        if name.startswith(prefix):
            return name[len(prefix):]
    return name
