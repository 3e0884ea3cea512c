from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from ..common import ApiModel, enum_value
from ..errors import RequestValidationError


class OrderKind(str, Enum):
    """Order kind. Only redeem orders can be placed through the API,
    issue orders are created by a SEPA transfer to the IBAN provided by Monerium."""
    REDEEM = "redeem"
    ISSUE = "issue"


class OrderState(str, Enum):
    """Order lifecycle: placed -> (pending) -> processed, or placed -> rejected."""
    PLACED = "placed"
    PENDING = "pending"
    PROCESSED = "processed"
    REJECTED = "rejected"


class Identifier(ApiModel):
    standard: str = ""
    iban: str = ""


class CounterpartDetails(ApiModel):
    country: str = ""
    first_name: str = ""
    last_name: str = ""


class Counterpart(ApiModel):
    """Beneficiary (redeem) or payer (issue) of an order."""
    identifier: Identifier = Field(default_factory=Identifier)
    details: CounterpartDetails = Field(default_factory=CounterpartDetails)


class OrderMeta(ApiModel):
    approved_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    state: str = ""
    placed_by: str = ""
    placed_at: Optional[datetime] = None
    received_amount: str = ""
    sent_amount: str = ""


class Order(ApiModel):
    """A payment order. If rejected, the reason is in rejected_reason."""
    id: str = ""
    profile: str = ""
    account_id: str = ""
    address: str = ""
    kind: str = ""
    amount: str = ""
    currency: str = ""
    counterpart: Counterpart = Field(default_factory=Counterpart)
    memo: str = ""
    rejected_reason: str = ""
    supporting_document_id: str = ""
    meta: OrderMeta = Field(default_factory=OrderMeta)

    @property
    def state(self) -> str:
        return self.meta.state


@dataclass
class PlaceOrderRequest:
    """
    Parameters for placing a redeem order.

    The order is placed either for an address, currency and chain or for an
    account ID. Memo is the reference of the SEPA transfer and
    supporting_document_id is the ID of a file uploaded with upload_file,
    needed for redeem orders above a certain limit. Both are optional.
    """
    kind: Any = OrderKind.REDEEM
    amount: str = ""
    signature: str = ""
    message: str = ""
    counterpart: Optional[Counterpart] = None

    address: str = ""
    currency: Any = ""
    chain: Any = ""
    account_id: str = ""

    memo: str = ""
    supporting_document_id: str = ""

    def validate(self) -> None:
        if enum_value(self.kind) != OrderKind.REDEEM.value:
            raise RequestValidationError("only redeem order is possible to be placed")
        if self.counterpart is None:
            raise RequestValidationError("order counterpart is missing")
        if not self.message or not self.signature:
            raise RequestValidationError("message or signature missing")

        if self.account_id:
            return
        if not self.chain or not self.currency or not self.address:
            raise RequestValidationError("either AccountID or Chain, Address and Currency are required")

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "kind": enum_value(self.kind),
            "amount": self.amount,
            "signature": self.signature,
            "message": self.message,
            "counterpart": self.counterpart.model_dump(by_alias=True) if self.counterpart else None,
        }
        optional = {
            "address": self.address,
            "currency": enum_value(self.currency),
            "chain": enum_value(self.chain),
            "accountId": self.account_id,
            "memo": self.memo,
            "supportingDocumentId": self.supporting_document_id,
        }
        payload.update({k: v for k, v in optional.items() if v})
        return payload


@dataclass
class GetOrdersRequest:
    """Optional filters for listing orders."""
    address: str = ""
    tx_hash: str = ""
    memo: str = ""
    state: Any = ""
    account_id: str = ""
    profile_id: str = ""

    def to_query(self) -> Dict[str, str]:
        query = {
            "address": self.address,
            "txHash": self.tx_hash,
            "memo": self.memo,
            "state": enum_value(self.state),
            "accountId": self.account_id,
            "profile": self.profile_id,
        }
        return {k: v for k, v in query.items() if v}


@dataclass
class GetOrderRequest:
    order_id: str = ""

    def validate(self) -> None:
        if not self.order_id:
            raise RequestValidationError("empty orderID")


@dataclass
class OrdersNotificationsRequest:
    """Scope of an order notification stream; empty profile_id means all profiles."""
    profile_id: str = ""
