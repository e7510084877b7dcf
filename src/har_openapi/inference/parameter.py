"""Query and path parameter inference.

Query parameters arrive as strings, so their type is guessed from the
captured value.
"""

from har_openapi.capture.base import Query
from har_openapi.inference.identity import PathParameter
from har_openapi.inference.numeric import is_float, is_int32

ARRAY_SUFFIX = "[]"


def infer_parameter_schema(key: str, value: str) -> dict:
    """Examine the key (e.g. ``id[]``) and the value to infer a schema."""
    if key.endswith(ARRAY_SUFFIX):
        inner = infer_parameter_schema(key[: -len(ARRAY_SUFFIX)], value)
        return {"type": "array", "items": inner}
    if is_int32(value):
        return {"type": "integer"}
    if is_float(value):
        return {"type": "number"}
    if value in ("true", "false"):
        return {"type": "boolean"}
    return {"type": "string"}


def sanitize_parameter_key(key: str) -> str:
    return key.replace(ARRAY_SUFFIX, "")


def create_query_parameter(key: str, value: str) -> dict:
    return {
        "name": sanitize_parameter_key(key),
        "in": "query",
        "required": False,
        "schema": infer_parameter_schema(key, value),
    }


def create_query_parameters(query: list[Query]) -> list[dict]:
    """One parameter per sanitized key, typed from its first value."""
    parameters: dict[str, dict] = {}
    for key, value in query:
        name = sanitize_parameter_key(key)
        if name not in parameters:
            parameters[name] = create_query_parameter(key, value)
    return list(parameters.values())


def create_path_parameter(param: PathParameter) -> dict:
    return {
        "name": param.name,
        "in": "path",
        "required": True,
        "schema": {"type": param.param_type},
    }
