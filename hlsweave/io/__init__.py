"""Input/output adapters for manifests and generated artifacts."""

from .manifest_loader import load_manifest, manifest_from_payload
from .storage import ArtifactStore, script_payload

__all__ = ["ArtifactStore", "load_manifest", "manifest_from_payload", "script_payload"]
