"""
Service layer helpers that orchestrate storage and the editing engines.
"""

from .profile_edit_session import ProfileEditSession, ProfileStoreProtocol

__all__ = ["ProfileEditSession", "ProfileStoreProtocol"]
