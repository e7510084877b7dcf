"""Path classification and operation naming.

Turns a request URL and method into a path template (``/clients/{id}``),
its path parameters, an operation id (``getClient``) and the names of the
resource and response schemas (``Client``, ``GetClientResponse``).
"""

import logging
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from har_openapi.capture.base import Sample
from har_openapi.errors import (
    MalformedURLError,
    MissingObjectNameError,
    SampleError,
    UnsupportedMethodError,
)
from har_openapi.naming import (
    is_plural,
    pluralize,
    strip_suffixes_and_singularize,
    to_pascal_case,
    to_snake_case,
)

logger = logging.getLogger(__name__)

ID_PLACEHOLDER = "{id}"
MANY_SEGMENTS = ("list", "all")
LIST_SUFFIX = "list"
PATH_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class PathParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "id"
    param_type: str = "integer"


class RequestInfo(BaseModel):
    """Everything derived from the URL and method of one sample."""

    model_config = ConfigDict(frozen=True)

    path: str  # /clients/{id}
    method: str
    operation_id: str  # getClient
    object_name: str  # Client
    response_object_name: str  # GetClientResponse
    path_parameters: list[PathParameter] = []


class Exchange(BaseModel):
    """A sample together with the identity inferred for it."""

    model_config = ConfigDict(frozen=True)

    sample: Sample
    info: RequestInfo

    @property
    def url(self) -> str:
        return self.sample.url

    @property
    def object_name(self) -> str:
        return self.info.object_name

    @property
    def response_object_name(self) -> str:
        return self.info.response_object_name


def path_segments(url: str, root_segments: int = 2) -> list[str]:
    """Split a URL path, dropping the API root and empty segments."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise MalformedURLError(url) from e
    if not parts.scheme or not parts.netloc:
        raise MalformedURLError(url)
    return [s for s in parts.path.split("/")[root_segments:] if s]


def classify_request(url: str, method: str, root_segments: int = 2) -> RequestInfo:
    """Derive the path template and operation naming for one request."""
    if method.lower() not in PATH_METHODS:
        raise UnsupportedMethodError(url, method)
    segments = [
        ID_PLACEHOLDER if s.isdigit() else s
        for s in path_segments(url, root_segments)
    ]
    path_parameters = [PathParameter() for s in segments if s == ID_PLACEHOLDER]

    # As in, fetch one or fetch many
    gets_many = False
    operation_id = to_snake_case(method)
    object_name = None

    for i, segment in enumerate(segments):
        followed_by_id = i + 1 < len(segments) and segments[i + 1] == ID_PLACEHOLDER
        if segment == ID_PLACEHOLDER:
            continue
        if segment in MANY_SEGMENTS:
            gets_many = True
        elif segment.endswith(LIST_SUFFIX) and not is_plural(segment[: -len(LIST_SUFFIX)]):
            gets_many = True
            object_name = segment[: -len(LIST_SUFFIX)]
            operation_id += to_pascal_case(object_name)
        elif followed_by_id:
            # /clients/42 addresses a single client
            operation_id += to_pascal_case(strip_suffixes_and_singularize(segment))
            object_name = segment
        else:
            operation_id += to_pascal_case(segment)
            object_name = segment

    if gets_many:
        operation_id = pluralize(operation_id)
    if not object_name:
        raise MissingObjectNameError(url)

    return RequestInfo(
        path="".join(f"/{s}" for s in segments),
        method=method,
        operation_id=operation_id,
        object_name=to_pascal_case(strip_suffixes_and_singularize(object_name)),
        response_object_name=to_pascal_case(operation_id) + "Response",
        path_parameters=path_parameters,
    )


def analyze_samples(samples: list[Sample], root_segments: int = 2) -> list[Exchange]:
    """Classify every sample, skipping the ones that cannot be named."""
    exchanges = []
    for sample in samples:
        try:
            info = classify_request(sample.url, sample.method, root_segments)
        except SampleError as e:
            logger.warning("Skipping sample %s: %s", e.url, e.reason)
            continue
        exchanges.append(Exchange(sample=sample, info=info))
    return exchanges
