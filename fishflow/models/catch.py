"""Catch log and fish catalog models"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator
from uuid import uuid4


class WaterType(str, Enum):
    """Kind of water body a catch was made in"""
    RIVER = "river"
    LAKE = "lake"
    RESERVOIR = "reservoir"
    POND = "pond"
    STREAM = "stream"
    OCEAN = "ocean"
    ESTUARY = "estuary"


class FishRarity(str, Enum):
    """Rarity of a fish species"""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    UNKNOWN = "unknown"


class Fish(BaseModel):
    """Fish species (only the fields achievements look at)"""
    id: str
    name: str
    scientific_name: Optional[str] = None
    family: Optional[str] = None
    rarity: FishRarity = FishRarity.UNKNOWN


class Measurements(BaseModel):
    """Optional catch measurements"""
    length_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    girth_cm: Optional[float] = None


class CatchLocation(BaseModel):
    """Where a catch was made"""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    accuracy: Optional[float] = None
    address: Optional[str] = None
    water_body_name: Optional[str] = None
    water_type: Optional[WaterType] = None
    privacy: str = "exact"  # exact, fuzzy, hidden


class Equipment(BaseModel):
    """Gear used for a catch, as free-text names or equipment ids"""
    rod: Optional[str] = None
    reel: Optional[str] = None
    line: Optional[str] = None
    hook: Optional[str] = None
    bait: Optional[str] = None


class Conditions(BaseModel):
    """Weather at the time of a catch"""
    weather: Optional[str] = None  # sunny, cloudy, rain, storm, ...
    temperature: Optional[float] = None
    wind_speed: Optional[float] = None
    pressure: Optional[float] = None


class CatchRecord(BaseModel):
    """One entry of the catch log; a skunk is a session with no fish caught"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    fish_id: Optional[str] = None
    timestamp: datetime
    photos: list[str] = Field(default_factory=list)
    measurements: Measurements = Field(default_factory=Measurements)
    location: Optional[CatchLocation] = None
    equipment: Equipment = Field(default_factory=Equipment)
    conditions: Conditions = Field(default_factory=Conditions)
    notes: Optional[str] = None
    is_released: bool = False
    is_skunked: Optional[bool] = None  # None: derived from fish_id
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def derive_skunked(self) -> "CatchRecord":
        if self.is_skunked is None:
            self.is_skunked = self.fish_id is None
        return self
