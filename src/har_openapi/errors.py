"""Exceptions raised while turning captured traffic into a document."""


class HarOpenApiError(Exception):
    """Base class for all har-openapi errors."""


class CaptureFormatError(HarOpenApiError):
    """The capture file is not a HAR archive we can read."""


class DocumentFormatError(HarOpenApiError):
    """An OpenAPI document file does not hold a mapping."""


class SampleError(HarOpenApiError):
    """A single sample cannot be used; the batch carries on without it."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class MalformedURLError(SampleError):
    def __init__(self, url: str):
        super().__init__(url, "Cannot parse URL")


class MissingObjectNameError(SampleError):
    def __init__(self, url: str):
        super().__init__(url, "No object name found in path")


class UnsupportedMethodError(SampleError):
    def __init__(self, url: str, method: str):
        super().__init__(url, f"Unsupported HTTP method {method!r}")
        self.method = method


class SchemaExtractionError(SampleError):
    def __init__(self, url: str, cause: Exception):
        super().__init__(url, f"Cannot infer schema ({cause!r})")
        self.cause = cause
