"""Reading and writing OpenAPI documents as YAML or JSON."""

import json
from pathlib import Path

import yaml

from har_openapi.errors import DocumentFormatError


class _NoAliasDumper(yaml.SafeDumper):
    # Shared schema dicts must be written out in full, not as &anchors
    def ignore_aliases(self, data):
        return True


def to_yaml(doc: dict) -> str:
    return yaml.dump(doc, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True)


def to_json(doc: dict) -> str:
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"


def render(doc: dict, fmt: str = "yaml") -> str:
    if fmt == "json":
        return to_json(doc)
    return to_yaml(doc)


def load_document(file_path: Path) -> dict:
    """Load an OpenAPI document (YAML or JSON, JSON being valid YAML)."""
    doc = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        raise DocumentFormatError(f"{file_path}: not an OpenAPI document")
    return doc


def format_for(file_path: Path) -> str:
    return "json" if file_path.suffix.lower() == ".json" else "yaml"
