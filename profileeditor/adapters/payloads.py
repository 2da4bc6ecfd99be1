"""
Wire shapes exchanged with the profile store.

Stored services use camelCase keys (``hourlyRate``) and carry legacy values
written by older clients: ``category: ""`` for "no category", a missing
``features`` list, ``hourlyRate: 0``. These models accept all of them.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.service_models import Category, ServiceRecord


class ServiceRecordPayload(BaseModel):
    """Service record as stored in a profile's ``services`` list."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    name: str = ""
    description: str = ""
    price: Union[int, float] = 0
    hourly_rate: Optional[Union[int, float]] = Field(default=None, alias="hourlyRate")
    features: List[str] = Field(default_factory=list)
    category: Optional[Category] = None
    availability: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_unset(cls, value: Any) -> Any:
        """Older clients store an empty string when no category was chosen."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price", mode="before")
    @classmethod
    def missing_price_is_zero(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def blank_rate_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price", "hourly_rate")
    @classmethod
    def validate_non_negative(cls, value: Optional[float]) -> Optional[float]:
        """Amounts are zero or positive."""
        if value is not None and value < 0:
            raise ValueError(f"Amount must be zero or positive, got {value}")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def missing_description_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_record(cls, record: ServiceRecord) -> "ServiceRecordPayload":
        return cls(
            name=record.name,
            description=record.description,
            price=record.price,
            hourly_rate=record.hourly_rate,
            features=list(record.features),
            category=record.category,
            availability=record.availability,
        )

    def to_record(self) -> ServiceRecord:
        return ServiceRecord(
            name=self.name,
            description=self.description,
            price=self.price,
            hourly_rate=self.hourly_rate,
            features=list(self.features),
            category=self.category,
            availability=self.availability,
        )

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict; optional fields that are unset are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def records_from_wire(items: Optional[List[Dict[str, Any]]]) -> List[ServiceRecord]:
    """Parse a stored ``services`` list into domain records."""
    return [ServiceRecordPayload.model_validate(item).to_record() for item in items or []]


def records_to_wire(records: List[ServiceRecord]) -> List[Dict[str, Any]]:
    return [ServiceRecordPayload.from_record(record).to_wire() for record in records]
