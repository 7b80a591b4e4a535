"""Canonical domain models for ownership decisions.

The guard only ever needs two things from its callers:
- an inventory that can report its identifier
- a resource whose annotations can be read

Callers hand us resources in several shapes (our own `LiveObject`, unstructured manifests from
YAML/JSON, kubernetes client models). `annotations_of` normalizes all of them so the matcher
doesn't care where the object came from.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from invguard.core.errors import UnreadableAnnotations


class BaseModelAllowExtra(BaseModel):
    model_config = ConfigDict(extra="allow")


class BaseModelStrict(BaseModel):
    model_config = ConfigDict(extra="forbid")


@runtime_checkable
class InventoryLike(Protocol):
    def identifier(self) -> str: ...


@runtime_checkable
class AnnotatedObject(Protocol):
    def get_annotations(self) -> Optional[Mapping[str, str]]: ...


class InventoryInfo(BaseModelStrict):
    """Reference to the inventory object that tracks a set of applied resources."""

    name: str = ""
    namespace: Optional[str] = None
    id: str

    def identifier(self) -> str:
        return self.id


class LiveObject(BaseModelAllowExtra):
    api_version: Optional[str] = None
    kind: Optional[str] = None
    name: Optional[str] = None
    namespace: Optional[str] = None
    annotations: Dict[str, str] = Field(default_factory=dict)

    @field_validator("annotations", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        # Unannotated objects come back from the API server with `annotations: null`.
        return {} if v is None else v

    def get_annotations(self) -> Dict[str, str]:
        return self.annotations

    def display_name(self) -> str:
        kind = self.kind or "object"
        if self.namespace:
            return f"{kind} {self.namespace}/{self.name or '?'}"
        return f"{kind} {self.name or '?'}"

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, Any]) -> "LiveObject":
        """
        Build a LiveObject from an unstructured manifest (the dict form of a YAML/JSON object).

        Missing `metadata` or `metadata.annotations` are treated as empty.
        """
        metadata = manifest.get("metadata")
        if not isinstance(metadata, Mapping):
            metadata = {}
        return cls(
            api_version=manifest.get("apiVersion"),
            kind=manifest.get("kind"),
            name=metadata.get("name"),
            namespace=metadata.get("namespace"),
            annotations=metadata.get("annotations"),
        )


def _field(container: Any, name: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(name)
    return getattr(container, name, None)


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return raw

    # Dynamic-client ResourceField and other mapping-like wrappers.
    to_dict = getattr(raw, "to_dict", None)
    if callable(to_dict):
        converted = to_dict()
        if isinstance(converted, Mapping):
            return converted
    try:
        return dict(iter(raw))
    except (TypeError, ValueError) as e:
        raise UnreadableAnnotations(f"annotations of type {type(raw).__name__} cannot be read") from e


def annotations_of(obj: Any) -> Mapping[str, Any]:
    """
    Return the annotation mapping of a resource, never None.

    Accepted shapes, in precedence order:
    - objects exposing `get_annotations()` (LiveObject or any AnnotatedObject)
    - unstructured manifests: `{"metadata": {"annotations": {...}}}`
    - kubernetes client models, typed or dynamic: `obj.metadata.annotations`

    Mapping-like annotation values (`to_dict()`, or an iterable of key/value pairs such as the
    dynamic client's ResourceField) are converted to a dict. Annotations that are present but
    can't be read raise UnreadableAnnotations; they are never reported as empty.
    """
    if obj is None:
        return {}

    if isinstance(obj, AnnotatedObject) and callable(obj.get_annotations):
        return _as_mapping(obj.get_annotations())

    metadata = _field(obj, "metadata")
    if metadata is None:
        return {}
    return _as_mapping(_field(metadata, "annotations"))


def describe_object(obj: Any) -> str:
    """Short `Kind namespace/name` label for log lines and decision reasons (best-effort)."""
    if isinstance(obj, LiveObject):
        return obj.display_name()
    metadata = _field(obj, "metadata")
    name = _field(metadata, "name") if metadata is not None else None
    namespace = _field(metadata, "namespace") if metadata is not None else None
    kind = _field(obj, "kind") or ("object" if isinstance(obj, Mapping) else type(obj).__name__)
    if namespace:
        return f"{kind} {namespace}/{name or '?'}"
    return f"{kind} {name or '?'}"
