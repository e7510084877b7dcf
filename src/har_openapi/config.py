"""Configuration for har-openapi."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnnotationRules(BaseModel):
    """Field-name lookup tables used to annotate inferred scalar schemas.

    The defaults describe the accounting API the tool was first written
    against; pass a YAML file with the same keys to replace any of them.
    """

    # Numbers: x-format: date
    date_pattern: str = r"(?:\b|_)date(?:\b|_)"
    date_field_names: set[str] = {"delivered", "lastmodifieddate", "approved", "createddate"}

    # Numbers (and nulls): x-null-as-zero
    null_as_zero_names: set[str] = {"client", "order_c", "invoice"}

    # Strings that stay plain even when their value looks like a number
    plain_string_substrings: list[str] = ["item", "name", "id", "zip", "postal"]
    plain_string_names: set[str] = {"order_vendor_order"}

    @field_validator("date_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid date_pattern: {e}") from e
        return value

    def is_date_field(self, name: str) -> bool:
        return re.search(self.date_pattern, name) is not None or name in self.date_field_names

    def is_null_as_zero(self, name: str) -> bool:
        return name in self.null_as_zero_names

    def keeps_plain_string(self, name: str) -> bool:
        return any(s in name for s in self.plain_string_substrings) or name in self.plain_string_names

    @classmethod
    def from_yaml(cls, path: Path) -> AnnotationRules:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: annotation rules must be a mapping")
        return cls(**data)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HAR_OPENAPI_", case_sensitive=False)

    log_level: str = Field(default="INFO")

    # Leading path segments shared by every endpoint, e.g. "" and "api" in /api/...
    root_segments: int = Field(default=2, ge=0)

    openapi_version: str = Field(default="3.0.3")
    title: str = Field(default="Generated API")
    api_version: str = Field(default="0.1.0")
    security_scheme_name: str = Field(default="Session")

    default_output: Path = Field(default=Path("openapi.yaml"))
    rules_file: Optional[Path] = Field(default=None)

    def annotation_rules(self) -> AnnotationRules:
        if self.rules_file is None:
            return AnnotationRules()
        return AnnotationRules.from_yaml(self.rules_file)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
