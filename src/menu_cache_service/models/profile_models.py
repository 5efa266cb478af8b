"""User profile model written by the onboarding flow."""

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Persisted user profile.

    Stored as key-value pairs using the aliases as keys so the layout matches
    what the profile and home screens read.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName", description="User first name")
    email: str = Field(..., description="User email address")
    is_onboarding_completed: bool = Field(
        default=False,
        alias="isOnboardingCompleted",
        description="Whether onboarding has finished",
    )
