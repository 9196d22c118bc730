"""Helpers for treating rows with JSON columns as documents.

Request payloads are camelCase JSON. Keys are canonicalized first so that
``is_active`` and ``isActive`` address the same field during a merge.
"""

from copy import deepcopy
from enum import Enum
from typing import Any, Iterable, List, Mapping

from pydantic import BaseModel

_MISSING = object()


def snake_to_camel(key: str) -> str:
    if "_" not in key.strip("_"):
        return key
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camelize_keys(value: Any) -> Any:
    """Recursively rewrite snake_case dict keys to camelCase."""
    if isinstance(value, Mapping):
        return {snake_to_camel(str(k)): camelize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [camelize_keys(v) for v in value]
    return value


def merge_present(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict:
    """
    Merge ``patch`` into a copy of ``base`` by present key.

    Keys absent from ``patch`` keep their value. Nested objects are merged
    recursively; any other value present in ``patch`` (lists and explicit
    nulls included) replaces the stored one.
    """
    merged = deepcopy(dict(base))
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_present(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def get_path(document: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Look up a dotted path such as ``contact.email``."""
    node: Any = document
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return node


def is_blank(value: Any) -> bool:
    if value is None or value is _MISSING:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(document: Mapping[str, Any], paths: Iterable[str]) -> List[str]:
    return [path for path in paths if is_blank(get_path(document, path, _MISSING))]


def to_document(model: BaseModel) -> dict:
    """Serialize a schema the way it is stored: camelCase, JSON-safe."""
    return model.model_dump(by_alias=True, mode="json")


def apply_document(entity: Any, document: BaseModel) -> None:
    """
    Copy every field of a validated document onto an ORM entity.

    Field names of the document schemas match the column attribute names;
    nested models land in JSON columns.
    """
    for field in type(document).model_fields:
        value = getattr(document, field)
        if isinstance(value, BaseModel):
            value = to_document(value)
        elif isinstance(value, Enum):
            value = value.value
        setattr(entity, field, value)
