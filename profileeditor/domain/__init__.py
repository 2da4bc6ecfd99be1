"""
Domain layer - Pure editing logic without external I/O.
"""

from .date_set import BulkMode, DateSetEngine
from .service_catalog import CatalogCommit, ServiceCatalogEngine
from .service_models import Category, CategoryClass, RecordOutcome, ServiceRecord, ValidationReason

__all__ = [
    "BulkMode",
    "DateSetEngine",
    "CatalogCommit",
    "ServiceCatalogEngine",
    "Category",
    "CategoryClass",
    "RecordOutcome",
    "ServiceRecord",
    "ValidationReason",
]
