"""
Workload collectors for podsecurity.

Turn manifests on disk and Kubernetes API client objects into the Pod
model evaluated by checks.
"""

from podsecurity.collectors.k8s_objects import object_to_manifest, pod_from_object
from podsecurity.collectors.manifest import (
    TEMPLATE_KINDS,
    ManifestLoadError,
    load_pods,
    parse_pods,
    pod_from_manifest,
)

__all__ = [
    "ManifestLoadError",
    "TEMPLATE_KINDS",
    "load_pods",
    "object_to_manifest",
    "parse_pods",
    "pod_from_manifest",
    "pod_from_object",
]
