from dataclasses import dataclass
from typing import List

from pydantic import Field

from ..common import ApiModel
from ..errors import RequestValidationError
from ..internal.async_client import AsyncClient


class Balance(ApiModel):
    amount: str = ""
    currency: str = ""


class ProfileBalance(ApiModel):
    """Balances of one account (a token on a chain and network) of a profile."""
    profile_id: str = Field(default="", alias="id")
    address: str = ""
    chain: str = ""
    network: str = ""
    balances: List[Balance] = Field(default_factory=list)


class EMoneyToken(ApiModel):
    """An e-money token: ticker, symbol, contract address, chain and network."""
    currency: str = ""
    ticker: str = ""
    symbol: str = ""
    chain: str = ""
    network: str = ""
    address: str = ""
    decimals: int = 0


@dataclass
class GetBalancesForProfileRequest:
    """Parameters for getting balances of a profile."""
    profile_id: str = ""

    def validate(self) -> None:
        if not self.profile_id:
            raise RequestValidationError("empty profileID")


class Client:
    """Client for balance and token endpoints."""

    def __init__(self, async_client: AsyncClient):
        """
        Initialize the balances client.

        Args:
            async_client: The async client for common functionality
        """
        self.async_client = async_client

    async def get_balances(self) -> List[ProfileBalance]:
        """Get balances for every account of the default profile."""
        data = await self.async_client.get("/balances")
        return [ProfileBalance.model_validate(b) for b in data or []]

    async def get_balances_for_profile(self, params: GetBalancesForProfileRequest) -> List[ProfileBalance]:
        """
        Get balances for every account of a profile.

        Args:
            params: Balance query parameters

        Returns:
            List[ProfileBalance]: One entry per account

        Raises:
            RequestValidationError: If the profile ID is empty
        """
        params.validate()
        data = await self.async_client.get(f"/profiles/{params.profile_id}/balances")
        return [ProfileBalance.model_validate(b) for b in data or []]

    async def get_tokens(self) -> List[EMoneyToken]:
        """Get the supported e-money tokens."""
        data = await self.async_client.get("/tokens")
        return [EMoneyToken.model_validate(t) for t in data or []]
