"""Assembles inferred exchanges into an OpenAPI document."""

import logging
from typing import Any

from pydantic import BaseModel

from har_openapi.capture.base import RequestBody
from har_openapi.inference.identity import Exchange
from har_openapi.inference.parameter import create_path_parameter, create_query_parameters
from har_openapi.inference.registry import schema_ref

logger = logging.getLogger(__name__)

JSON_MIME = "application/json"


class Document(BaseModel):
    """An assembled API description, ready for serialization."""

    server_url: str
    paths: dict[str, dict[str, dict]] = {}
    schemas: dict[str, dict] = {}
    security_cookie: str | None = None
    security_scheme_name: str = "Session"
    openapi_version: str = "3.0.3"
    title: str = "Generated API"
    api_version: str = "0.1.0"

    def to_openapi(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "openapi": self.openapi_version,
            "info": {"title": self.title, "version": self.api_version},
            "servers": [{"url": self.server_url}],
            "paths": self.paths,
            "components": {"schemas": self.schemas},
        }
        if self.security_cookie:
            doc["components"]["securitySchemes"] = {
                self.security_scheme_name: {
                    "type": "apiKey",
                    "in": "cookie",
                    "name": self.security_cookie,
                },
            }
            doc["security"] = [{self.security_scheme_name: []}]
        return doc


def make_request_body(body: RequestBody | None) -> dict | None:
    """Schema for a JSON object body, typed from its scalar fields only."""
    if body is None or not body.mime.startswith(JSON_MIME):
        return None
    if not isinstance(body.content, dict):
        return None

    properties: dict[str, dict] = {}
    for key, value in body.content.items():
        # Nested objects and arrays are not described
        if isinstance(value, bool):
            properties[key] = {"type": "boolean"}
        elif isinstance(value, (int, float)):
            properties[key] = {"type": "number"}
        elif isinstance(value, str):
            properties[key] = {"type": "string"}

    schema: dict = {"type": "object"}
    if properties:
        schema["properties"] = properties
    return {
        "required": True,
        "content": {JSON_MIME: {"schema": schema}},
    }


def create_operation(exchange: Exchange) -> dict:
    info = exchange.info
    request = exchange.sample.request

    parameters = create_query_parameters(request.query)
    parameters.extend(create_path_parameter(p) for p in info.path_parameters)

    operation: dict[str, Any] = {"operationId": info.operation_id}
    if parameters:
        operation["parameters"] = parameters
    body = make_request_body(request.body)
    if body:
        operation["requestBody"] = body
    operation["responses"] = {
        "200": {
            "description": "OK",
            "content": {JSON_MIME: {"schema": schema_ref(info.response_object_name)}},
        },
    }
    return operation


def create_paths(exchanges: list[Exchange]) -> dict[str, dict[str, dict]]:
    """One operation per exchange; a later (path, method) replaces an earlier one."""
    paths: dict[str, dict[str, dict]] = {}
    for exchange in exchanges:
        method = exchange.info.method.lower()
        item = paths.setdefault(exchange.info.path, {})
        if method in item:
            logger.debug("Replacing %s %s with %s", method.upper(), exchange.info.path, exchange.url)
        item[method] = create_operation(exchange)
    return paths


def longest_common_prefix(strings: list[str]) -> str:
    if not strings:
        return ""
    prefix = strings[0]
    for s in strings[1:]:
        i = 0
        while i < len(prefix) and i < len(s) and prefix[i] == s[i]:
            i += 1
        prefix = prefix[:i]
    return prefix


def server_url(exchanges: list[Exchange]) -> str:
    """Longest common prefix of all sample URLs, without a trailing slash."""
    server = longest_common_prefix([e.url for e in exchanges])
    if server.endswith("/"):
        server = server[:-1]
    return server
