"""Blood alcohol concentration (Widmark) and time until sober."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional

from calc_backend.core.drawdown import eliminate
from calc_backend.core.limits import SOBER_THRESHOLD
from calc_backend.schemas.alcohol import AlcoholRequest, AlcoholResponse, BacPoint, Drink

ETHANOL_DENSITY_G_PER_ML = 0.789
LBS_TO_KG = 0.453592


@dataclass(frozen=True)
class DrinkPreset:
    alcohol_content: float
    serving_size_ml: float


@dataclass(frozen=True)
class BodyProfile:
    body_water: float
    elimination_per_hour: float


DRINK_PRESETS: Dict[str, DrinkPreset] = {
    "beer": DrinkPreset(5.0, 355.0),
    "wine": DrinkPreset(12.0, 148.0),
    "liquor": DrinkPreset(40.0, 44.0),
    "cocktail": DrinkPreset(15.0, 207.0),
    "cider": DrinkPreset(6.0, 355.0),
    "malt": DrinkPreset(7.0, 355.0),
}

BODY_PROFILES: Dict[str, BodyProfile] = {
    "male": BodyProfile(body_water=0.58, elimination_per_hour=0.015),
    "female": BodyProfile(body_water=0.49, elimination_per_hour=0.017),
}

# Food slows absorption, spreading the same alcohol over more effective volume.
FOOD_FACTORS = {"empty": 0.85, "light": 1.0, "full": 1.2}

IMPAIRMENT_LEVELS = (
    (0.02, "No impairment"),
    (0.04, "Subtle effects"),
    (0.08, "Mild impairment"),
    (0.15, "Significant impairment"),
    (0.30, "Severe impairment"),
)


def impairment_level(bac: float) -> str:
    for upper, label in IMPAIRMENT_LEVELS:
        if bac < upper:
            return label
    return "Life-threatening"


def weight_in_kg(weight: float, unit: str) -> float:
    return weight * LBS_TO_KG if unit == "lbs" else weight


def alcohol_grams(drink: Drink) -> float:
    """Grams of ethanol in a drink line (all servings)."""
    preset = DRINK_PRESETS.get(drink.type)
    content = drink.alcohol_content if drink.alcohol_content is not None else preset.alcohol_content
    serving = drink.serving_size_ml if drink.serving_size_ml is not None else preset.serving_size_ml
    return serving * (content / 100.0) * drink.quantity * ETHANOL_DENSITY_G_PER_ML


def remaining_grams(drinks: Iterable[Drink], profile: BodyProfile, body_water_kg: float) -> float:
    """Alcohol still in the body, each drink reduced by what was eliminated since it was had."""
    total = 0.0
    for drink in drinks:
        eliminated = profile.elimination_per_hour * drink.hours_passed * body_water_kg
        total += max(0.0, alcohol_grams(drink) - eliminated)
    return total


def calculate_bac(request: AlcoholRequest, now: Optional[datetime] = None) -> AlcoholResponse:
    """BAC from the drinks so far and the time until it falls below the sober threshold.

    ``now`` anchors the sober-at timestamp; it defaults to the current UTC time.
    """
    profile = BODY_PROFILES[request.sex]
    body_water_kg = weight_in_kg(request.weight, request.weight_unit) * profile.body_water

    grams = remaining_grams(request.drinks, profile, body_water_kg)
    bac = round(grams / (body_water_kg * FOOD_FACTORS[request.food_intake]) / 10.0, 3)

    elimination = eliminate(bac, profile.elimination_per_hour, SOBER_THRESHOLD)
    now = now or datetime.now(timezone.utc)

    return AlcoholResponse(
        bac=bac,
        total_alcohol_grams=round(grams, 2),
        impairment_level=impairment_level(bac),
        hours_until_sober=round(elimination.hours, 2),
        sober_at=now + timedelta(hours=elimination.hours),
        curve=[BacPoint(hour=hour, bac=level) for hour, level in elimination.curve],
    )
