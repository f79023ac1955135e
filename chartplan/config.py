"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import re

from chartplan.errors import ConfigError
from chartplan.models.config import (
    DEFAULT_DEPENDS_ON_ANNOTATION,
    DEFAULT_REPORT_TITLE,
    DEFAULT_VENDOR_GROUP,
    ChartplanConfig,
    DetectionConfig,
    LogConfig,
    ReportConfig,
)

# RFC 1123 subdomain, as used for API groups.
_RE_API_GROUP = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")
# Optional DNS prefix, then a qualified name.
_RE_ANNOTATION_KEY = re.compile(r"^([a-z0-9.-]+/)?[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHARTPLAN_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_api_group(value: str) -> str:
    if not _RE_API_GROUP.match(value):
        raise ConfigError(f"Invalid API group: {value}")
    return value


def _validate_annotation_key(value: str) -> str:
    if not _RE_ANNOTATION_KEY.match(value):
        raise ConfigError(f"Invalid annotation key: {value}")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ConfigError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> ChartplanConfig:
    """Load configuration from CHARTPLAN_* environment variables."""
    return ChartplanConfig(
        detection=DetectionConfig(
            vendor_group=_validate_api_group(_env("VENDOR_GROUP", DEFAULT_VENDOR_GROUP)),
            depends_on_annotation=_validate_annotation_key(
                _env("DEPENDS_ON_ANNOTATION", DEFAULT_DEPENDS_ON_ANNOTATION)
            ),
        ),
        report=ReportConfig(
            color=_env_bool("REPORT_COLOR", False),
            title=_env("REPORT_TITLE", DEFAULT_REPORT_TITLE) or DEFAULT_REPORT_TITLE,
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
