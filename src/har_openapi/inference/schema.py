"""Schema inference from sampled JSON payloads.

Walks one parsed JSON value and produces an OpenAPI schema for it. Objects
with properties that appear as fields or array items are moved into the
component registry and replaced by a ``$ref``; everything else is inlined.

Known limitations:
- arrays are typed from their first element only;
- every key seen in the sample is marked required, since absence in other
  samples is not observed;
- two different payloads that infer the same component name share the
  first shape registered.
"""

import logging
from typing import Any

from har_openapi.config import AnnotationRules
from har_openapi.errors import SchemaExtractionError
from har_openapi.inference.identity import Exchange
from har_openapi.inference.numeric import is_float
from har_openapi.inference.registry import ComponentRegistry, schema_ref
from har_openapi.naming import singularize_key, to_pascal_case

logger = logging.getLogger(__name__)

LIST_KEY = "list"


def is_primitive(schema: dict) -> bool:
    """Schemas that are always inlined: scalars, empty objects, untyped arrays."""
    kind = schema.get("type")
    if kind == "object":
        return not schema.get("properties")
    if kind == "array":
        return "items" not in schema
    return True


def uses_reference(schema: dict) -> bool:
    return schema.get("type") == "object" and bool(schema.get("properties"))


class SchemaInferrer:
    """Infers schemas for one generation run, registering named components."""

    def __init__(self, registry: ComponentRegistry, rules: AnnotationRules | None = None):
        self.registry = registry
        self.rules = rules or AnnotationRules()

    def infer(self, value: Any, context_name: str | None, exchange: Exchange) -> dict:
        """Return the schema for ``value``.

        ``context_name`` is the (singular) field name the value was found
        under; top-level bodies have none.
        """
        if value is None:
            return self._infer_null(context_name)
        if isinstance(value, bool):
            return {"type": "boolean"}
        if isinstance(value, (int, float)):
            return self._infer_number(value, context_name)
        if isinstance(value, str):
            return self._infer_string(value, context_name)
        if isinstance(value, list):
            return self._infer_array(value, context_name, exchange)
        if isinstance(value, dict):
            return self._infer_object(value, exchange)
        raise TypeError(f"Unsupported JSON value of type {type(value).__name__}")

    def _infer_null(self, context_name: str | None) -> dict:
        # Unknown shape rather than a nullable type
        schema: dict = {"type": "object"}
        if context_name and self.rules.is_null_as_zero(context_name):
            schema["x-null-as-zero"] = True
        return schema

    def _infer_number(self, value: int | float, context_name: str | None) -> dict:
        schema: dict = {"type": "number" if isinstance(value, float) else "integer"}
        if context_name:
            if self.rules.is_date_field(context_name):
                schema["x-format"] = "date"
            if self.rules.is_null_as_zero(context_name):
                schema["x-null-as-zero"] = True
        return schema

    def _infer_string(self, value: str, context_name: str | None) -> dict:
        schema: dict = {"type": "string"}
        if not context_name:
            return schema
        if context_name == "phone":
            schema["format"] = "phone"
        elif context_name == "email":
            schema["format"] = "email"
        elif self.rules.keeps_plain_string(context_name):
            pass
        elif is_float(value):
            # Money is often sent as a string
            schema["format"] = "decimal"
        return schema

    def _infer_array(self, value: list, context_name: str | None, exchange: Exchange) -> dict:
        if value:
            items = self.infer(value[0], context_name, exchange)
        else:
            items = {"type": "object"}
        if is_primitive(items):
            return {"type": "array", "items": items}

        name = self._component_name(context_name, exchange)
        self.registry.insert_if_absent(name, items, exchange.url)
        return {"type": "array", "items": schema_ref(name)}

    def _infer_object(self, value: dict, exchange: Exchange) -> dict:
        properties: dict[str, dict] = {}
        for key, field in value.items():
            if isinstance(field, list) and key.lower() == LIST_KEY:
                # {"list": [...]} wraps the resource itself
                field_context = exchange.object_name
            else:
                field_context = singularize_key(key)

            schema = self.infer(field, field_context, exchange)
            if uses_reference(schema):
                name = self._component_name(field_context, exchange)
                self.registry.insert_if_absent(name, schema, exchange.url)
                schema = schema_ref(name)
            properties[key] = schema

        result: dict = {"type": "object"}
        if properties:
            result["properties"] = properties
            result["required"] = list(properties)
        return result

    def _component_name(self, context_name: str | None, exchange: Exchange) -> str:
        return to_pascal_case(context_name or "") or exchange.object_name

    def add_response_schema(self, exchange: Exchange) -> None:
        """Infer the response body and install it under the response object name."""
        try:
            with self.registry.rollback_on_error():
                schema = self.infer(exchange.sample.response.data, None, exchange)
                self.registry.replace(exchange.response_object_name, schema)
        except (RecursionError, TypeError, ValueError) as e:
            raise SchemaExtractionError(exchange.url, e) from e


def create_schemas_for_responses(
    exchanges: list[Exchange],
    registry: ComponentRegistry,
    rules: AnnotationRules | None = None,
) -> list[Exchange]:
    """Attach the response schemas of every exchange to ``registry``.

    Returns the exchanges whose schemas were inferred; the others are logged
    and left out.
    """
    inferrer = SchemaInferrer(registry, rules)
    inferred = []
    for exchange in exchanges:
        logger.info("Analyzing %s %s", exchange.info.method, exchange.url)
        try:
            inferrer.add_response_schema(exchange)
        except SchemaExtractionError as e:
            logger.warning("Error adding schemas for %s: %s", e.url, e.reason)
            continue
        inferred.append(exchange)
    return inferred
