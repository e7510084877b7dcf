"""Document generator: runs the inference pipeline over captured samples."""

import logging
from urllib.parse import urlsplit

from har_openapi.capture.base import Sample
from har_openapi.config import AnnotationRules, Settings
from har_openapi.document.assembler import Document, create_paths, server_url
from har_openapi.inference.identity import analyze_samples
from har_openapi.inference.registry import ComponentRegistry
from har_openapi.inference.schema import create_schemas_for_responses

logger = logging.getLogger(__name__)


def _sort_key(sample: Sample) -> str:
    try:
        return urlsplit(sample.url).path
    except ValueError:
        return sample.url


class DocumentGenerator:
    """Generates an OpenAPI document from HAR samples."""

    def __init__(
        self,
        settings: Settings | None = None,
        rules: AnnotationRules | None = None,
        root_segments: int | None = None,
    ):
        self.settings = settings or Settings()
        self.rules = rules or AnnotationRules()
        self.root_segments = self.settings.root_segments if root_segments is None else root_segments

    def generate(self, samples: list[Sample], cookie: str | None = None) -> Document:
        """Infer one operation per sample and collect their schemas.

        Samples are processed in URL path order, so when two of them share a
        path template and method the one with the greater path wins.
        """
        samples = sorted(samples, key=_sort_key)
        exchanges = analyze_samples(samples, self.root_segments)

        # One registry per run
        registry = ComponentRegistry()
        exchanges = create_schemas_for_responses(exchanges, registry, self.rules)
        logger.debug("Inferred %d of %d samples", len(exchanges), len(samples))

        return Document(
            server_url=server_url(exchanges),
            paths=create_paths(exchanges),
            schemas=registry.as_dict(),
            security_cookie=cookie,
            security_scheme_name=self.settings.security_scheme_name,
            openapi_version=self.settings.openapi_version,
            title=self.settings.title,
            api_version=self.settings.api_version,
        )
