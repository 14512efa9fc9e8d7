"""
Kubernetes manifest loader for podsecurity.

Reads YAML or JSON manifests (multi-document YAML included) and extracts
the pod each workload would run. Workload kinds with a pod template
(Deployment, StatefulSet, DaemonSet, ...) are reduced to their template,
named after the owning workload.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import yaml

from podsecurity.models.workload import ObjectMeta, Pod, PodSpec

logger = logging.getLogger(__name__)

# Kinds whose pod template lives at spec.template
TEMPLATE_KINDS = frozenset({
    "Deployment",
    "StatefulSet",
    "DaemonSet",
    "ReplicaSet",
    "ReplicationController",
    "Job",
})


class ManifestLoadError(Exception):
    """Exception raised when a manifest cannot be loaded."""

    def __init__(self, message: str, source_path: str | None = None):
        self.source_path = source_path
        prefix = f"{source_path}: " if source_path else ""
        super().__init__(f"{prefix}{message}")


def _pod_template(document: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Locate the pod template of a workload document."""
    kind = document.get("kind")
    spec = document.get("spec")
    if not isinstance(spec, dict):
        return None

    if kind == "Pod":
        return document
    if kind in TEMPLATE_KINDS:
        template = spec.get("template")
        return template if isinstance(template, dict) else None
    if kind == "CronJob":
        job_template = spec.get("jobTemplate")
        if isinstance(job_template, dict) and isinstance(job_template.get("spec"), dict):
            template = job_template["spec"].get("template")
            return template if isinstance(template, dict) else None
    return None


def pod_from_manifest(document: dict[str, Any]) -> Optional[Pod]:
    """
    Extract the pod of a single manifest document.

    Args:
        document: Parsed manifest

    Returns:
        Pod, or None when the document does not describe pods
    """
    template = _pod_template(document)
    if template is None:
        logger.debug(f"Skipping document of kind {document.get('kind')!r}")
        return None

    metadata = ObjectMeta.from_dict(document.get("metadata"))
    if document.get("kind") != "Pod":
        # pod templates rarely carry names; report the owning workload
        template_metadata = ObjectMeta.from_dict(template.get("metadata"))
        template_metadata.name = metadata.name
        template_metadata.namespace = metadata.namespace
        metadata = template_metadata

    return Pod(metadata=metadata, spec=PodSpec.from_dict(template.get("spec")))


def parse_pods(content: str, source_path: str | None = None) -> list[Pod]:
    """
    Parse every pod out of YAML or JSON manifest content.

    Raises:
        ManifestLoadError: If the content is not valid YAML
    """
    try:
        documents = list(yaml.safe_load_all(content))
    except yaml.YAMLError as e:
        raise ManifestLoadError(f"Invalid YAML: {e}", source_path)

    pods: list[Pod] = []
    for document in documents:
        if not isinstance(document, dict):
            continue
        if document.get("kind") == "List":
            items = document.get("items")
            candidates = items if isinstance(items, list) else []
        else:
            candidates = [document]

        for candidate in candidates:
            if isinstance(candidate, dict):
                pod = pod_from_manifest(candidate)
                if pod is not None:
                    pods.append(pod)

    return pods


def load_pods(path: str) -> list[Pod]:
    """
    Load every pod from a manifest file.

    Args:
        path: Path to a YAML or JSON manifest

    Returns:
        Pods described by the manifest

    Raises:
        ManifestLoadError: If the file cannot be read or parsed
    """
    path = os.path.expanduser(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise ManifestLoadError("File not found", path)
    except OSError as e:
        raise ManifestLoadError(str(e), path)

    pods = parse_pods(content, path)
    logger.info(f"Loaded {len(pods)} pods from {path}")
    return pods
