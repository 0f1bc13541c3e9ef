from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Subsidy(BaseModel):
    name: str
    description: str
    eligibility: str
    link: str = Field(description="Official government link for the scheme")


class LocalMarket(BaseModel):
    name: str
    location: str
    commodities: str = Field(description="Main commodities traded at the market")


class SubsidiesAndMarkets(BaseModel):
    """Subsidy schemes and nearby markets for the farmer's region.

    List sizes are guidance given to the model; any length is accepted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    central_subsidies: List[Subsidy] = Field(
        description="Currently active Central Government agricultural subsidies"
    )
    state_subsidies: List[Subsidy] = Field(
        description="Currently active State Government agricultural subsidies"
    )
    local_markets: List[LocalMarket] = Field(
        description="Major nearby agricultural markets (mandis)"
    )
