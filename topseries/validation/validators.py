"""Sanity checks for an enriched show list.

Validates the integrity of a fetch cycle's output before it is shown.
Catches issues like:
- More than TOP_N shows (indicates truncation broke)
- Duplicate ids (indicates a bad catalog page)
- Empty names (indicates a decoding problem)
- Empty provider lists (must be normalized to "no providers")
- Ratings outside 0-10

Warnings flag data that is valid but worth noticing: shows without
a trailer or providers, or with a malformed first air date. Validation
never blocks output; callers log the results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from topseries.config import TOP_N
from topseries.models import Show

logger = logging.getLogger(__name__)

MIN_RATING = 0.0
MAX_RATING = 10.0


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a single show or a whole list.

    Attributes:
        valid: True if no errors (warnings are OK).
        errors: Issues that indicate broken data.
        warnings: Unusual data that's still acceptable.
    """

    valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]


def validate_show(show: Show) -> ValidationResult:
    """Validate a single enriched show.

    Checks:
    - Name is non-empty
    - Provider list, when present, is non-empty
    - Rating, when present, is within 0-10
    - First air date, when present, is yyyy-MM-dd (warns otherwise)
    - Trailer and providers were resolved (warns otherwise)

    Args:
        show: An enriched Show.

    Returns:
        ValidationResult with valid=True if no errors found.
    """
    errors: list[str] = []
    warnings: list[str] = []
    context = f"show={show.id}"

    if not show.name or not show.name.strip():
        errors.append(f"{context}: empty name")

    if show.watch_providers is not None and not show.watch_providers:
        errors.append(f"{context}: empty provider list")

    if show.vote_average is not None and not (
        MIN_RATING <= show.vote_average <= MAX_RATING
    ):
        errors.append(
            f"{context}: rating {show.vote_average} out of range "
            f"[{MIN_RATING:g}-{MAX_RATING:g}]"
        )

    if show.first_air_date:
        try:
            datetime.strptime(show.first_air_date, "%Y-%m-%d")
        except ValueError:
            warnings.append(
                f"{context}: malformed first_air_date '{show.first_air_date}'"
            )

    if not show.trailer_key:
        warnings.append(f"{context}: no trailer")

    if not show.watch_providers:
        warnings.append(f"{context}: no providers")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )


def validate_shows(shows: tuple[Show, ...]) -> ValidationResult:
    """Validate a whole cycle's list and log summary statistics.

    Args:
        shows: Enriched shows in display order.

    Returns:
        One ValidationResult merging the list-level checks with the
        per-show results, in list order.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if len(shows) > TOP_N:
        errors.append(f"expected at most {TOP_N} shows, got {len(shows)}")

    seen_ids: set[int] = set()
    for show in shows:
        if show.id in seen_ids:
            errors.append(f"show={show.id}: duplicate id")
        seen_ids.add(show.id)

        result = validate_show(show)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    if errors:
        logger.warning("Validation found %d errors", len(errors))
    if warnings:
        logger.info("Validation found %d warnings", len(warnings))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
