"""
Application service for editing one profile's availability and services.

The session holds the committed profile, hands out draft editors, and on save
replaces the edited field wholesale through a profile store. Storage is
reached through a small protocol so the JSON adapter, a remote API client or
a test stub can be plugged in.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from pendulum import Date
from pydantic import ValidationError

from ..adapters.payloads import records_from_wire, records_to_wire
from ..config import AppConfig
from ..domain.calendar_dates import DEFAULT_TIMEZONE, OutputFormat
from ..domain.date_set import DateSetEngine
from ..domain.exceptions import IncompleteServicesError, ProfileStoreError
from ..domain.service_catalog import CatalogCommit, ServiceCatalogEngine
from ..domain.service_models import ServiceRecord

logger = logging.getLogger(__name__)


class ProfileStoreProtocol(Protocol):
    """Protocol describing the profile persistence behaviour needed by the session."""

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        """Return the stored profile document."""

    def update_profile(self, user_id: str, profile: Dict[str, Any]) -> None:
        """Replace the stored profile document."""


class ProfileEditSession:
    """
    Draft, commit, replace.

    Editors are independent drafts: discarding one is the cancel path and
    leaves the committed profile untouched. A save that fails in the store
    also leaves it untouched. Saves are last-writer-wins per field.
    """

    def __init__(
        self,
        store: ProfileStoreProtocol,
        user_id: str,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        output_format: OutputFormat = "date",
        drop_incomplete_services: bool = False,
        today: Optional[Date] = None,
    ) -> None:
        self._store = store
        self.user_id = user_id
        self.timezone = timezone
        self.output_format = output_format
        self.drop_incomplete_services = drop_incomplete_services
        self._today = today
        self._profile: Optional[Dict[str, Any]] = None

    @classmethod
    def from_config(
        cls,
        store: ProfileStoreProtocol,
        user_id: str,
        config: AppConfig,
        today: Optional[Date] = None,
    ) -> "ProfileEditSession":
        return cls(
            store,
            user_id,
            timezone=config.timezone,
            output_format=config.availability.output_format,
            drop_incomplete_services=config.services.drop_incomplete,
            today=today,
        )

    # Committed state

    def load(self) -> Dict[str, Any]:
        """Fetch the committed profile from the store."""
        self._profile = dict(self._store.get_profile(self.user_id))
        logger.info("Loaded profile %s", self.user_id)
        return dict(self._profile)

    @property
    def profile(self) -> Dict[str, Any]:
        if self._profile is None:
            self.load()
        return dict(self._profile)

    @property
    def availability(self) -> List[str]:
        return list(self.profile.get("availability") or [])

    @property
    def services(self) -> List[ServiceRecord]:
        try:
            return records_from_wire(self.profile.get("services"))
        except ValidationError as exc:
            raise ProfileStoreError(f"Stored services for user '{self.user_id}' are invalid: {exc}") from exc

    # Availability

    def open_availability_editor(self) -> DateSetEngine:
        return DateSetEngine(
            self.availability,
            timezone=self.timezone,
            output_format=self.output_format,
            today=self._today,
        )

    def save_availability(self, editor: DateSetEngine) -> List[str]:
        """Commit the editor and replace the profile's availability with the result."""
        dates = editor.commit()
        self._replace_field("availability", dates)
        logger.info("Saved %d available date(s) for %s", len(dates), self.user_id)
        return dates

    # Services

    def open_service_editor(self) -> ServiceCatalogEngine:
        return ServiceCatalogEngine(self.services)

    def save_services(
        self,
        editor: ServiceCatalogEngine,
        *,
        drop_incomplete: Optional[bool] = None,
    ) -> CatalogCommit:
        """
        Commit the editor and replace the profile's services with the valid drafts.

        Args:
            editor: Service catalog draft
            drop_incomplete: Save even if some drafts are rejected; defaults
                to the session setting

        Returns:
            The commit, including the outcome of every draft

        Raises:
            IncompleteServicesError: If drafts were rejected and dropping them
                was not allowed; nothing is saved in that case
        """
        result = editor.commit()
        if drop_incomplete is None:
            drop_incomplete = self.drop_incomplete_services

        if result.rejected:
            if not drop_incomplete:
                raise IncompleteServicesError(result)
            for outcome in result.rejected:
                logger.warning(
                    "Dropping incomplete service #%d for %s: %s",
                    outcome.index + 1,
                    self.user_id,
                    ", ".join(reason.value for reason in outcome.reasons),
                )

        self._replace_field("services", records_to_wire(result.records))
        logger.info("Saved %d service(s) for %s", len(result.records), self.user_id)
        return result

    def _replace_field(self, field_name: str, value: Any) -> None:
        updated = {**self.profile, field_name: value}
        self._store.update_profile(self.user_id, updated)
        self._profile = updated
