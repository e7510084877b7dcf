"""Whole-document operations: merging generated documents and sorting keys."""

import copy
import logging

logger = logging.getLogger(__name__)


def _merge_named(target: dict, update: dict, section: str) -> None:
    for name, value in update.items():
        if name not in target:
            target[name] = value
        elif target[name] != value:
            logger.warning("Keeping existing %s %s, ignoring the conflicting one", section, name)


def merge_documents(base: dict, update: dict) -> dict:
    """Merge ``update`` into a copy of ``base``.

    Paths are merged per method, component schemas and security schemes per
    name. On conflicts the entry from ``base`` is kept.
    """
    merged = copy.deepcopy(base)

    paths = merged.setdefault("paths", {})
    for path, item in (update.get("paths") or {}).items():
        _merge_named(paths.setdefault(path, {}), item or {}, f"operation under {path}:")

    components = merged.setdefault("components", {})
    update_components = update.get("components") or {}
    for section in ("schemas", "securitySchemes"):
        if update_components.get(section):
            _merge_named(components.setdefault(section, {}), update_components[section], section)

    for requirement in update.get("security") or []:
        security = merged.setdefault("security", [])
        if requirement not in security:
            security.append(requirement)
    return merged


def sort_document(doc: dict) -> dict:
    """Sort ``paths`` and ``components.schemas`` by key."""
    result = copy.deepcopy(doc)
    if isinstance(result.get("paths"), dict):
        result["paths"] = dict(sorted(result["paths"].items()))
    components = result.get("components")
    if isinstance(components, dict) and isinstance(components.get("schemas"), dict):
        components["schemas"] = dict(sorted(components["schemas"].items()))
    return result
