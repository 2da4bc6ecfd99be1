"""
Service catalog editing: an ordered list of draft services validated per
category class when committed.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .exceptions import InvalidFieldValueError
from .service_models import Category, RecordOutcome, ServiceRecord


@dataclass(frozen=True)
class CatalogCommit:
    """
    Outcome of committing a catalog draft.

    ``records`` is the value handed to persistence: the valid drafts in their
    original order. ``outcomes`` has one entry per draft, so rejected ones can
    be reported instead of vanishing.
    """
    outcomes: List[RecordOutcome]

    @property
    def records(self) -> List[ServiceRecord]:
        return [outcome.record for outcome in self.outcomes if outcome.accepted]

    @property
    def rejected(self) -> List[RecordOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.accepted]

    @property
    def is_complete(self) -> bool:
        """True when no draft was rejected."""
        return not self.rejected


class ServiceCatalogEngine:
    """
    Working copy of a professional's services.

    Records are copied in, so edits never leak into the committed catalog
    before ``commit``. Validity is not tracked while editing; each commit
    re-evaluates every record from scratch.
    """

    def __init__(self, records: Iterable[ServiceRecord] = ()):
        self._records: List[ServiceRecord] = [record.copy() for record in records]
        if not self._records:
            self._records.append(ServiceRecord.blank())

    @property
    def records(self) -> List[ServiceRecord]:
        """Copies of the current drafts, in edit order. Edit through the setters."""
        return [record.copy() for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def record(self, index: int) -> ServiceRecord:
        return self._records[index].copy()

    # Records

    def add_record(self) -> ServiceRecord:
        record = ServiceRecord.blank()
        self._records.append(record)
        return record.copy()

    def remove_record(self, index: int) -> ServiceRecord:
        return self._records.pop(index)

    # Fields

    def set_name(self, index: int, value: str) -> None:
        self._records[index].name = _as_text(value, "name")

    def set_description(self, index: int, value: str) -> None:
        self._records[index].description = _as_text(value, "description")

    def set_price(self, index: int, value: Any) -> None:
        """Set the fixed fee; blank input means 0."""
        amount = _as_amount(value, "price")
        self._records[index].price = 0 if amount is None else amount

    def set_hourly_rate(self, index: int, value: Any) -> None:
        """Set the hourly rate; blank input or None clears it."""
        self._records[index].hourly_rate = _as_amount(value, "hourly_rate")

    def set_category(self, index: int, value: Optional[Category | str]) -> None:
        """Set the category; empty input clears it."""
        self._records[index].category = _as_category(value)

    def set_availability(self, index: int, value: Optional[str]) -> None:
        self._records[index].availability = None if value is None else _as_text(value, "availability")

    # Features

    def add_feature(self, index: int) -> None:
        self._records[index].features.append("")

    def update_feature(self, index: int, feature_index: int, value: str) -> None:
        self._records[index].features[feature_index] = _as_text(value, "feature")

    def remove_feature(self, index: int, feature_index: int) -> str:
        return self._records[index].features.pop(feature_index)

    # Commit

    def validate(self) -> List[RecordOutcome]:
        """Validation outcome of every draft, in order."""
        return [
            RecordOutcome(index=index, record=record.copy(), reasons=record.validation_reasons())
            for index, record in enumerate(self._records)
        ]

    def commit(self) -> CatalogCommit:
        return CatalogCommit(outcomes=self.validate())


def _as_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidFieldValueError(f"{field_name} must be text, got {type(value).__name__}")
    return value


def _as_amount(value: Any, field_name: str) -> Optional[float]:
    """
    Read a finite, non-negative amount. Numeric strings are accepted, blank means unset.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFieldValueError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value.strip().replace(",", "."))
        except ValueError as exc:
            raise InvalidFieldValueError(f"{field_name} must be a number, got {value!r}") from exc
    if not isinstance(value, (int, float)):
        raise InvalidFieldValueError(f"{field_name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise InvalidFieldValueError(f"{field_name} must be zero or positive, got {value!r}")
    return value


def _as_category(value: Optional[Category | str]) -> Optional[Category]:
    if value is None or isinstance(value, Category):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return Category(value.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(c.value for c in Category)
            raise InvalidFieldValueError(f"Unknown category {value!r}. Use one of: {allowed}") from exc
    raise InvalidFieldValueError(f"category must be text, got {type(value).__name__}")
