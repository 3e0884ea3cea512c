from typing import List

from ..internal.async_client import AsyncClient
from .types import (
    AddAddressToProfileRequest,
    AuthContext,
    GetProfileRequest,
    Profile,
    ProfileSummary,
)


class Client:
    """Client for auth context and profile endpoints."""

    def __init__(self, async_client: AsyncClient):
        """
        Initialize the profiles client.

        Args:
            async_client: The async client for common functionality
        """
        self.async_client = async_client

    async def get_auth_context(self) -> AuthContext:
        """Get the context of the authenticated user."""
        data = await self.async_client.get("/auth/context")
        return AuthContext.model_validate(data)

    async def get_profiles(self) -> List[ProfileSummary]:
        """
        Get summaries of every profile: its kind and the permissions
        the authenticated user has on it.
        """
        data = await self.async_client.get("/profiles")
        return [ProfileSummary.model_validate(p) for p in data or []]

    async def get_profile(self, params: GetProfileRequest) -> Profile:
        """
        Get the details of a single profile.

        Args:
            params: Profile query parameters

        Returns:
            Profile: The profile with its KYC details and accounts

        Raises:
            RequestValidationError: If the profile ID is empty
        """
        params.validate()
        data = await self.async_client.get(f"/profiles/{params.profile_id}")
        return Profile.model_validate(data)

    async def add_address_to_profile(self, params: AddAddressToProfileRequest) -> Profile:
        """
        Link a blockchain address (wallet) to a profile and create accounts for it.

        Args:
            params: The address, the signed message and the accounts to create

        Returns:
            Profile: The updated profile

        Raises:
            RequestValidationError: If the profile ID is empty
        """
        params.validate()
        data = await self.async_client.post(
            f"/profiles/{params.profile_id}/addresses",
            params.to_payload()
        )
        return Profile.model_validate(data)
