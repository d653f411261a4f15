"""Helpers for collections of spans."""

import logging
from functools import reduce
from typing import Iterable, Sequence

from .timespan import Span

logger = logging.getLogger(__name__)


def validate_spans(spans: Sequence[Span]) -> None:
    """
    Validate a sequence of spans.

    Args:
        spans: Sequence of Span objects to validate

    Raises:
        ValueError: If the sequence is empty or holds a non-Span
    """
    if not spans:
        raise ValueError("spans cannot be empty")

    for i, span in enumerate(spans):
        if not isinstance(span, Span):
            logger.debug(f"Rejecting spans[{i}] of type {type(span).__name__}")
            raise ValueError(f"spans[{i}] is not a Span instance")


def encompass_all(spans: Iterable[Span]) -> Span:
    """Get the smallest span covering every span given."""
    items = list(spans)
    validate_spans(items)
    return reduce(lambda acc, span: acc.encompass(span), items)
