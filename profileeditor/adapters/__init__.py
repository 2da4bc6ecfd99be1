"""
Adapters layer - Profile storage and wire formats.
"""

from .json_profile_store import JsonProfileStore
from .payloads import ServiceRecordPayload, records_from_wire, records_to_wire

__all__ = ["JsonProfileStore", "ServiceRecordPayload", "records_from_wire", "records_to_wire"]
