"""Named, reusable schemas collected during one generation run."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

REF_PREFIX = "#/components/schemas/"


def schema_ref(name: str) -> dict:
    return {"$ref": f"{REF_PREFIX}{name}"}


def ref_name(schema: dict) -> str | None:
    ref = schema.get("$ref")
    if isinstance(ref, str) and ref.startswith(REF_PREFIX):
        return ref[len(REF_PREFIX):]
    return None


def describe_shape(schema: dict) -> str:
    """Short human-readable summary of a schema for log messages."""
    name = ref_name(schema)
    if name is not None:
        return f"Reference({name})"
    kind = schema.get("type")
    if kind == "object":
        return f"Object{{{list(schema.get('properties', {}))}}}"
    if kind == "array":
        items = schema.get("items")
        return f"Array<{describe_shape(items) if items else ''}>"
    fmt = schema.get("format")
    return f"{kind}({fmt})" if fmt else str(kind)


class ComponentRegistry:
    """Ordered name -> schema map where the first schema under a name wins."""

    def __init__(self) -> None:
        self._schemas: dict[str, dict] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __getitem__(self, name: str) -> dict:
        return self._schemas[name]

    def __len__(self) -> int:
        return len(self._schemas)

    def get(self, name: str) -> dict | None:
        return self._schemas.get(name)

    def names(self) -> list[str]:
        return list(self._schemas)

    def as_dict(self) -> dict[str, dict]:
        return dict(self._schemas)

    def insert_if_absent(self, name: str, schema: dict, url: str = "") -> bool:
        """Register ``schema`` under ``name`` unless the name is taken.

        Returns True when the name was already taken by a different shape.
        The stored schema is never overwritten.
        """
        existing = self._schemas.get(name)
        if existing is None:
            self._schemas[name] = schema
            logger.info("Added schema %s (%s)", name, url)
            return False
        if existing == schema:
            return False
        logger.warning(
            "Schema %s already exists, keeping %s over %s (%s)",
            name,
            describe_shape(existing),
            describe_shape(schema),
            url,
        )
        return True

    def replace(self, name: str, schema: dict) -> None:
        self._schemas[name] = schema

    @contextmanager
    def rollback_on_error(self) -> Iterator[ComponentRegistry]:
        """Undo every change made inside the block if it raises."""
        snapshot = dict(self._schemas)
        try:
            yield self
        except Exception:
            self._schemas = snapshot
            raise
