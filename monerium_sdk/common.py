from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response records: camelCase on the wire, unknown fields ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Chain(str, Enum):
    """Supported blockchains."""
    ETHEREUM = "ethereum"
    POLYGON = "polygon"
    GNOSIS = "gnosis"


class Network(str, Enum):
    """Supported blockchain networks."""
    MAINNET = "mainnet"
    GOERLI = "goerli"
    MUMBAI = "mumbai"
    CHIADO = "chiado"


class Currency(str, Enum):
    EUR = "eur"
    USD = "usd"
    GBP = "gbp"
    ISK = "isk"


class Ticker(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    ISK = "ISK"


class Symbol(str, Enum):
    EURE = "EURe"
    USDE = "USDe"
    GBPE = "GBPe"
    ISKE = "ISKe"


def enum_value(value) -> str:
    """Return the wire value of an enum member or plain string."""
    return value.value if isinstance(value, Enum) else (value or "")
