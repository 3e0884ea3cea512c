from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from pydantic import Field

from ..common import ApiModel, enum_value
from ..errors import RequestValidationError


class KYCState(str, Enum):
    """State of the customer onboarding."""
    ABSENT = "absent"  # no KYC version available
    SUBMITTED = "submitted"  # submitted but not processed
    PENDING = "pending"  # an admin has started processing the application
    CONFIRMED = "confirmed"  # an admin has decided on the outcome


class KYCOutcome(str, Enum):
    """Verdict of the KYC."""
    APPROVED = "approved"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class Auth(ApiModel):
    method: str = ""
    subject: str = ""
    verified: bool = False


class AuthProfile(ApiModel):
    id: str = ""
    type: str = ""
    name: str = ""
    perms: List[str] = Field(default_factory=list)


class AuthContext(ApiModel):
    """Context of the authenticated user."""
    user_id: str = ""
    email: str = ""
    name: str = ""
    roles: List[str] = Field(default_factory=list)
    auth: Auth = Field(default_factory=Auth)
    default_profile_id: str = Field(default="", alias="defaultProfile")
    profiles: List[AuthProfile] = Field(default_factory=list)


class ProfileSummary(ApiModel):
    """Profile kind and the permissions the authenticated user has on it."""
    id: str = ""
    name: str = ""
    type: str = ""
    permissions: List[str] = Field(default_factory=list, alias="perms")


class KYCDetails(ApiModel):
    state: str = ""
    outcome: str = ""


class Account(ApiModel):
    """An account (one token on one chain and network) linked to a profile."""
    address: str = ""
    chain: str = ""
    network: str = ""
    currency: str = ""
    standard: str = ""
    iban: str = ""
    state: str = ""
    sort_code: str = ""
    account_number: str = ""


class Profile(ApiModel):
    """General information about a profile: KYC details and linked accounts."""
    id: str = ""
    name: str = ""
    kyc: KYCDetails = Field(default_factory=KYCDetails)
    accounts: List[Account] = Field(default_factory=list)


@dataclass
class GetProfileRequest:
    """Parameters for getting a single profile."""
    profile_id: str = ""

    def validate(self) -> None:
        if not self.profile_id:
            raise RequestValidationError("empty profileID")


@dataclass
class AccountParams:
    """An account to be created for an address."""
    chain: Any = ""
    network: Any = ""
    currency: Any = ""

    def to_payload(self) -> Dict[str, str]:
        return {
            "chain": enum_value(self.chain),
            "network": enum_value(self.network),
            "currency": enum_value(self.currency),
        }


@dataclass
class AddAddressToProfileRequest:
    """Parameters for linking a blockchain address to a profile."""
    profile_id: str = ""
    address: str = ""
    message: str = ""
    signature: str = ""
    accounts: List[AccountParams] = field(default_factory=list)

    def validate(self) -> None:
        if not self.profile_id:
            raise RequestValidationError("empty profileID")

    def to_payload(self) -> Dict[str, Any]:
        # profile_id goes into the path, not the body
        return {
            "address": self.address,
            "message": self.message,
            "signature": self.signature,
            "accounts": [a.to_payload() for a in self.accounts],
        }
