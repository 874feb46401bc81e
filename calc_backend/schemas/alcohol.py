"""Data contracts for the blood alcohol (BAC) calculator."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DrinkType = Literal["beer", "wine", "liquor", "cocktail", "cider", "malt", "custom"]


class Drink(BaseModel):
    """A drink line. Preset types fill in strength and serving size unless given."""

    model_config = ConfigDict(extra="forbid")

    type: DrinkType = "beer"
    alcohol_content: Optional[float] = Field(default=None, ge=0, le=100, description="ABV percent.")
    serving_size_ml: Optional[float] = Field(default=None, ge=0, le=5000)
    quantity: float = Field(1.0, ge=0, le=100)
    hours_passed: float = Field(0.0, ge=0, le=72)

    @model_validator(mode="after")
    def ensure_custom_is_described(self) -> "Drink":
        if self.type == "custom" and (self.alcohol_content is None or self.serving_size_ml is None):
            raise ValueError("custom drinks need alcohol_content and serving_size_ml")
        return self


class AlcoholRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sex: Literal["male", "female"] = "male"
    weight: float = Field(..., gt=0, le=1000)
    weight_unit: Literal["kg", "lbs"] = "kg"
    food_intake: Literal["empty", "light", "full"] = "light"
    drinks: List[Drink] = Field(..., min_length=1)


class BacPoint(BaseModel):
    hour: float = Field(..., ge=0)
    bac: float = Field(..., ge=0)


class AlcoholResponse(BaseModel):
    bac: float = Field(..., ge=0)
    total_alcohol_grams: float = Field(..., ge=0)
    impairment_level: str
    hours_until_sober: float = Field(..., ge=0)
    sober_at: datetime
    curve: List[BacPoint]
