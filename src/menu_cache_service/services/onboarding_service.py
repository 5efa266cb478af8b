"""Onboarding: validate the user's details and persist their profile."""

import logging
import re

from menu_cache_service.exceptions import OnboardingValidationError
from menu_cache_service.models.profile_models import UserProfile
from menu_cache_service.repositories.profile_repository import UserProfileStore

logger = logging.getLogger(__name__)

FIRST_NAME_PATTERN = re.compile(r"[A-Za-z]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_first_name(first_name: str) -> bool:
    """First names may only contain ASCII letters."""
    return bool(FIRST_NAME_PATTERN.fullmatch(first_name))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


class OnboardingService:
    """Service for completing onboarding.

    On success the profile is stored with ``isOnboardingCompleted`` set, which
    is what the home and profile screens check before skipping onboarding.
    """

    def __init__(self, profile_store: UserProfileStore) -> None:
        """Initialize the OnboardingService.

        Args:
            profile_store: Store the profile is written to
        """
        self.profile_store = profile_store
        self._schema_ready = False

    async def complete_onboarding(self, first_name: str, email: str) -> UserProfile:
        """Validate the inputs, persist the profile and mark onboarding complete.

        Args:
            first_name: User's first name
            email: User's email address

        Returns:
            The stored profile

        Raises:
            OnboardingValidationError: If either field is invalid (nothing is stored)
            StorageError: If the profile could not be written
        """
        if not is_valid_first_name(first_name):
            raise OnboardingValidationError("first_name", "First name must contain only letters.")
        if not is_valid_email(email):
            raise OnboardingValidationError("email", "Enter a valid email address.")

        profile = UserProfile(first_name=first_name, email=email, is_onboarding_completed=True)

        await self._ensure_schema()
        await self.profile_store.save_profile(profile)

        logger.info("Onboarding completed")
        return profile

    async def get_profile(self) -> UserProfile | None:
        """Return the stored profile, or None if onboarding never ran."""
        await self._ensure_schema()
        return await self.profile_store.get_profile()

    async def is_onboarding_completed(self) -> bool:
        profile = await self.get_profile()
        return profile is not None and profile.is_onboarding_completed

    async def _ensure_schema(self) -> None:
        if not self._schema_ready:
            await self.profile_store.ensure_schema()
            self._schema_ready = True
