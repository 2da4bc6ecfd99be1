"""
Domain models for a professional's service catalog.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple


class CategoryClass(str, Enum):
    """
    How a service is offered, derived from its category.

    Application services are postings artists apply to: they carry a free-text
    availability instead of a price. Everything else is priced.
    """
    STANDARD = "standard"
    APPLICATION = "application"

    @property
    def shows_pricing(self) -> bool:
        return self is CategoryClass.STANDARD

    @property
    def shows_availability(self) -> bool:
        return self is CategoryClass.APPLICATION


class Category(str, Enum):
    """Closed set of professional service categories."""
    PRODUCTION = "production"
    STUDIO = "studio"
    MANAGEMENT = "management"
    MARKETING = "marketing"
    EVENEMENTIEL = "evenementiel"
    MEDIA = "media"
    DESIGN = "design"
    VIDEO = "video"
    AUTRE = "autre"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @property
    def category_class(self) -> CategoryClass:
        if self in APPLICATION_CATEGORIES:
            return CategoryClass.APPLICATION
        return CategoryClass.STANDARD


CATEGORY_LABELS = {
    Category.PRODUCTION: "Production",
    Category.STUDIO: "Studio",
    Category.MANAGEMENT: "Management",
    Category.MARKETING: "Marketing",
    Category.EVENEMENTIEL: "Événementiel",
    Category.MEDIA: "Média",
    Category.DESIGN: "Design",
    Category.VIDEO: "Vidéo",
    Category.AUTRE: "Autre",
}

APPLICATION_CATEGORIES = frozenset({Category.EVENEMENTIEL, Category.MEDIA})


class ValidationReason(str, Enum):
    """Why a draft service cannot be published."""
    MISSING_NAME = "missing-name"
    MISSING_PRICE_OR_RATE = "missing-price-or-rate"
    MISSING_AVAILABILITY = "missing-availability"

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES[self]


VALIDATION_MESSAGES = {
    ValidationReason.MISSING_NAME: "Le nom du service est obligatoire.",
    ValidationReason.MISSING_PRICE_OR_RATE: (
        "Veuillez définir soit un prix forfaitaire, soit un tarif horaire (ou les deux)."
    ),
    ValidationReason.MISSING_AVAILABILITY: "La disponibilité est obligatoire pour cette catégorie.",
}


@dataclass
class ServiceRecord:
    """
    One service offered by a professional.

    ``price`` is a fixed fee; ``hourly_rate`` is optional. ``features`` is an
    ordered list where duplicates are allowed.
    """
    name: str = ""
    description: str = ""
    price: float = 0
    hourly_rate: Optional[float] = None
    features: List[str] = field(default_factory=lambda: [""])
    category: Optional[Category] = None
    availability: Optional[str] = None

    @classmethod
    def blank(cls) -> "ServiceRecord":
        """Template used for a newly added service."""
        return cls()

    @property
    def category_class(self) -> CategoryClass:
        if self.category is None:
            return CategoryClass.STANDARD
        return self.category.category_class

    @property
    def needs_pricing_hint(self) -> bool:
        """A priced service with neither a fee nor an hourly rate yet."""
        return self.category_class.shows_pricing and not self._has_pricing()

    def validation_reasons(self) -> Tuple[ValidationReason, ...]:
        """
        Every reason this record would be rejected, empty when it is valid.

        Application services need a name and an availability text; priced
        services need a name and a positive fee or hourly rate.
        """
        reasons: List[ValidationReason] = []

        if not self.name.strip():
            reasons.append(ValidationReason.MISSING_NAME)

        if self.category_class is CategoryClass.APPLICATION:
            if not (self.availability or "").strip():
                reasons.append(ValidationReason.MISSING_AVAILABILITY)
        elif not self._has_pricing():
            reasons.append(ValidationReason.MISSING_PRICE_OR_RATE)

        return tuple(reasons)

    def is_valid(self) -> bool:
        return not self.validation_reasons()

    def copy(self) -> "ServiceRecord":
        return replace(self, features=list(self.features))

    def _has_pricing(self) -> bool:
        return self.price > 0 or (self.hourly_rate or 0) > 0


@dataclass(frozen=True)
class RecordOutcome:
    """Commit result for one draft, at its position in the catalog."""
    index: int
    record: ServiceRecord
    reasons: Tuple[ValidationReason, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.reasons
