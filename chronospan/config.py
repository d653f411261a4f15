"""Configuration management for chronospan."""

import json
import logging
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Dict, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

NAIVE_POLICIES = ["reject", "assume"]
NEGATIVE_DURATION_POLICIES = ["reject", "normalize"]


@dataclass
class ChronospanConfig:
    """Span construction settings."""

    spans: Dict[str, Any]

    @property
    def tz_name(self) -> str:
        """Get the zone name applied to naive datetimes."""
        name = self.spans["tz"]
        assert isinstance(name, str)
        return name

    @property
    def tzinfo(self) -> tzinfo:
        """Get the zone applied to naive datetimes."""
        return resolve_timezone(self.tz_name)

    @property
    def naive_policy(self) -> str:
        """Get how naive datetimes are handled: 'reject' or 'assume'."""
        policy = self.spans["naive"]
        assert isinstance(policy, str)
        return policy

    @property
    def negative_duration_policy(self) -> str:
        """Get how reversed bounds are handled: 'reject' or 'normalize'."""
        policy = self.spans["negative_duration"]
        assert isinstance(policy, str)
        return policy


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name, with 'UTC' mapped to timezone.utc."""
    if name == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}': {e}") from e


def load_config(config_path: Path) -> ChronospanConfig:
    """Load and validate configuration from JSON file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        data = json.load(f)

    logger.info(f"Loaded chronospan configuration from {config_path}")
    return validate_config(data)


def validate_config(data: Dict[str, Any]) -> ChronospanConfig:
    """Validate configuration data and return ChronospanConfig instance."""
    if "spans" not in data:
        raise ValueError("Missing required configuration section: spans")

    if not isinstance(data["spans"], dict):
        raise ValueError("Configuration section 'spans' must be an object")

    _validate_spans_section(data["spans"])

    return ChronospanConfig(spans=data["spans"])


def _validate_spans_section(spans: Dict[str, Any]) -> None:
    """Validate spans configuration section and set defaults."""
    if "tz" not in spans:
        logger.debug("spans.tz not set, defaulting to UTC")
        spans["tz"] = "UTC"
    if "naive" not in spans:
        spans["naive"] = "reject"
    if "negative_duration" not in spans:
        spans["negative_duration"] = "reject"

    if not isinstance(spans["tz"], str):
        raise ValueError("spans.tz must be a string")
    resolve_timezone(spans["tz"])

    if spans["naive"] not in NAIVE_POLICIES:
        raise ValueError(
            f"Invalid spans.naive: {spans['naive']}. Must be one of: {NAIVE_POLICIES}"
        )

    if spans["negative_duration"] not in NEGATIVE_DURATION_POLICIES:
        raise ValueError(
            f"Invalid spans.negative_duration: {spans['negative_duration']}. "
            f"Must be one of: {NEGATIVE_DURATION_POLICIES}"
        )


def create_default_config() -> Dict[str, Any]:
    """Create a default configuration template."""
    return {
        "spans": {
            "tz": "UTC",
            "naive": "reject",
            "negative_duration": "reject",
        },
    }
