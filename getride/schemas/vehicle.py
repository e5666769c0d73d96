from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_SEATS = 4
DEFAULT_TRANSMISSION = "Automatic"
DEFAULT_RATING = 4.8


class VehicleStatus(str, Enum):
    available = "available"
    unavailable = "unavailable"


class Vehicle(BaseModel):
    id: str
    type: str
    plate: str = ""
    pricePerHour: float
    status: VehicleStatus = VehicleStatus.available
    seats: Optional[int] = None
    transmission: Optional[str] = None
    rating: Optional[float] = None
    driver: str = ""
    image: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v) if v is not None else v

    # Listing cards fall back to these when the record omits the field
    @property
    def display_seats(self) -> int:
        return self.seats or DEFAULT_SEATS

    @property
    def display_transmission(self) -> str:
        return self.transmission or DEFAULT_TRANSMISSION

    @property
    def display_rating(self) -> float:
        return self.rating or DEFAULT_RATING
