"""Time span data model for chronospan."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional, Union

from .instant import is_aware, shift, shift_calendar, to_utc


class InvalidSpanError(ValueError):
    """Raised when a span cannot be built from the given bounds."""


def _require_aware(value: Any, label: str) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidSpanError(f"{label} must be a datetime, got {type(value).__name__}")
    if not is_aware(value):
        raise InvalidSpanError(
            f"{label} must be timezone-aware, got naive {value.isoformat()}"
        )
    return value


@dataclass(frozen=True, eq=False)
class Span:
    """
    An immutable interval of time between two aware instants.

    Conceptually ``[start, end)``: spans that share only a boundary instant
    border each other rather than overlap. Point containment is the one
    exception and treats ``end`` as inside the span.

    Bounds are compared as absolute instants, so spans built in different
    zones relate correctly and keep the zone they were built with.
    """

    start: datetime
    end: datetime
    _utc_start: datetime = field(init=False, repr=False)
    _utc_end: datetime = field(init=False, repr=False)

    def __post_init__(self) -> None:
        utc_start = to_utc(_require_aware(self.start, "start"))
        utc_end = to_utc(_require_aware(self.end, "end"))
        if utc_end < utc_start:
            raise InvalidSpanError(
                f"Span end {self.end.isoformat()} precedes start {self.start.isoformat()}"
            )
        object.__setattr__(self, "_utc_start", utc_start)
        object.__setattr__(self, "_utc_end", utc_end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self.equal(other)

    def __hash__(self) -> int:
        return hash((self._utc_start, self._utc_end))

    def __contains__(self, item: Union[datetime, "Span"]) -> bool:
        if isinstance(item, Span):
            return self.contains(item)
        return self.contains_time(item)

    @property
    def duration(self) -> timedelta:
        """Absolute time between start and end; never negative."""
        return self._utc_end - self._utc_start

    @property
    def is_zero(self) -> bool:
        """True if the span has no length."""
        return self._utc_start == self._utc_end

    def after(self, t: datetime) -> bool:
        """True if the span starts strictly after ``t``."""
        return self._utc_start > to_utc(_require_aware(t, "t"))

    def before(self, t: datetime) -> bool:
        """True if the span ends strictly before ``t``."""
        return self._utc_end < to_utc(_require_aware(t, "t"))

    def contains_time(self, t: datetime) -> bool:
        """True if ``t`` lies within the span, end instant included."""
        point = to_utc(_require_aware(t, "t"))
        return self._utc_start <= point <= self._utc_end

    def follows(self, other: "Span") -> bool:
        """True if this span starts at or after the other's end."""
        return self._utc_start >= other._utc_end and not self._nested(other)

    def precedes(self, other: "Span") -> bool:
        """True if this span ends at or before the other's start."""
        return self._utc_end <= other._utc_start and not self._nested(other)

    def equal(self, other: "Span") -> bool:
        """True if both bounds are the same instants."""
        return self._utc_start == other._utc_start and self._utc_end == other._utc_end

    def contains(self, other: "Span") -> bool:
        """True if the other span lies entirely within this one."""
        return self._utc_start <= other._utc_start and other._utc_end <= self._utc_end

    def borders(self, other: "Span") -> bool:
        """True if the spans touch at exactly one boundary instant."""
        if self._nested(other):
            return False
        return self._utc_end == other._utc_start or other._utc_end == self._utc_start

    def overlaps(self, other: "Span") -> bool:
        """True if the spans share time beyond a single boundary instant."""
        return self._utc_start < other._utc_end and other._utc_start < self._utc_end

    def encompass(self, other: "Span") -> "Span":
        """Return the smallest span containing both spans."""
        return Span(
            start=self._earlier_start(other).start,
            end=self._later_end(other).end,
        )

    def gap(self, other: "Span") -> "Span":
        """
        Return the span of time between this span and another.

        For disjoint spans this runs from the earlier span's end to the later
        span's start, whichever of the two is ``self``. Bordering spans yield
        the zero-length span at their shared instant, and spans that overlap
        or contain one another yield a zero-length span where the overlap
        begins.
        """
        first = self._earlier_end(other)
        last = self._later_start(other)
        if first._utc_end <= last._utc_start:
            return Span(start=first.end, end=last.start)
        return Span(start=last.start, end=last.start)

    def intersection(self, other: "Span") -> Optional["Span"]:
        """
        Return the time shared by both spans.

        Returns None when the spans are disjoint or only border each other.
        A zero-length span contained in the other span intersects as itself.
        """
        if not (self.overlaps(other) or self._nested(other)):
            return None
        return Span(
            start=self._later_start(other).start,
            end=self._earlier_end(other).end,
        )

    def offset(self, delta: timedelta) -> "Span":
        """Return the span moved by an absolute duration, which may be negative."""
        return Span(start=shift(self.start, delta), end=shift(self.end, delta))

    def offset_date(self, years: int = 0, months: int = 0, days: int = 0) -> "Span":
        """
        Return the span moved by calendar units.

        Both bounds move by the same nominal calendar delta in their own zone,
        so the literal duration may change across month lengths or daylight
        saving transitions. Bounds on either side of a repeated local hour can
        land out of order; the end is then clamped to the start, giving a
        zero-length span.
        """
        if not (years or months or days):
            return self

        start = shift_calendar(self.start, years, months, days)
        end = shift_calendar(self.end, years, months, days)
        if to_utc(end) < to_utc(start):
            end = start
        return Span(start=start, end=end)

    def _nested(self, other: "Span") -> bool:
        # Only zero-length spans can touch a span they are nested in.
        return self.contains(other) or other.contains(self)

    def _earlier_start(self, other: "Span") -> "Span":
        return self if self._utc_start <= other._utc_start else other

    def _later_start(self, other: "Span") -> "Span":
        return self if self._utc_start >= other._utc_start else other

    def _earlier_end(self, other: "Span") -> "Span":
        return self if self._utc_end <= other._utc_end else other

    def _later_end(self, other: "Span") -> "Span":
        return self if self._utc_end >= other._utc_end else other


def new_span(start: datetime, duration: timedelta) -> Span:
    """
    Create a span from a start instant and a non-negative duration.

    Args:
        start: Timezone-aware start instant
        duration: Length of the span; zero gives a zero-length span

    Returns:
        Span ending ``duration`` after ``start``

    Raises:
        InvalidSpanError: If start is naive or duration is negative
    """
    _require_aware(start, "start")
    if duration < timedelta(0):
        raise InvalidSpanError(f"Span duration must not be negative, got {duration}")
    return Span(start=start, end=shift(start, duration))
