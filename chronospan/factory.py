"""Configurable span construction for chronospan."""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from .config import ChronospanConfig, create_default_config, validate_config
from .instant import attach_tz, is_aware, shift, to_utc
from .timespan import InvalidSpanError, Span, new_span

logger = logging.getLogger(__name__)


class SpanFactory:
    """
    Builds spans from loosely specified inputs according to configuration.

    Naive datetimes are either rejected or read as wall clock time in the
    configured zone. Reversed bounds and negative durations are either
    rejected or normalized by swapping the bounds.
    """

    def __init__(self, config: Optional[ChronospanConfig] = None):
        """
        Initialize with a validated configuration.

        Args:
            config: Span settings; defaults to create_default_config()
        """
        self.config = config or validate_config(create_default_config())

    def new(self, start: datetime, duration: timedelta) -> Span:
        """Create a span from a start instant and a duration."""
        start = self._coerce(start, "start")

        if duration < timedelta(0):
            if self.config.negative_duration_policy != "normalize":
                raise InvalidSpanError(
                    f"Span duration must not be negative, got {duration}"
                )
            logger.debug(f"Normalizing negative duration {duration} from {start}")
            return new_span(shift(start, duration), -duration)

        return new_span(start, duration)

    def between(self, start: datetime, end: datetime) -> Span:
        """Create a span from two instants."""
        start = self._coerce(start, "start")
        end = self._coerce(end, "end")

        if to_utc(end) < to_utc(start):
            if self.config.negative_duration_policy != "normalize":
                raise InvalidSpanError(
                    f"Span end {end.isoformat()} precedes start {start.isoformat()}"
                )
            logger.debug(f"Swapping reversed bounds {start} and {end}")
            start, end = end, start

        return Span(start=start, end=end)

    def _coerce(self, value: Any, label: str) -> datetime:
        """Apply the naive datetime policy to one bound."""
        if not isinstance(value, datetime):
            raise InvalidSpanError(
                f"{label} must be a datetime, got {type(value).__name__}"
            )

        if is_aware(value):
            return value

        if self.config.naive_policy != "assume":
            raise InvalidSpanError(
                f"{label} must be timezone-aware, got naive {value.isoformat()}"
            )

        logger.debug(f"Assuming {self.config.tz_name} for naive {label} {value}")
        return attach_tz(value, self.config.tzinfo)


def create_span_factory(config: Dict[str, Any]) -> SpanFactory:
    """
    Create a span factory from raw configuration.

    Args:
        config: Configuration dict with a 'spans' section

    Returns:
        Configured SpanFactory
    """
    return SpanFactory(validate_config(config))
