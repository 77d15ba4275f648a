"""
Pydantic schemas for promotion activation.
"""
from pydantic import BaseModel

from venue_menu.models.promotion import PromotionCategory


class PromotionResponse(BaseModel):
    key: str
    title: str
    description: str
    category: PromotionCategory
    active: bool

    model_config = {"from_attributes": True}


class PromotionGroup(BaseModel):
    category: PromotionCategory
    promotions: list[PromotionResponse]


class PromotionListResponse(BaseModel):
    # where the active flags came from: remote, local or default
    source: str
    groups: list[PromotionGroup]


class PromotionActivation(BaseModel):
    active: bool


class PromotionActivationResponse(BaseModel):
    message: str
    persisted: str
    promotion: PromotionResponse
