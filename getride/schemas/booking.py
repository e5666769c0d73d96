from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from getride.schemas.vehicle import Vehicle


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


TERMINAL_STATUSES = frozenset({BookingStatus.confirmed, BookingStatus.cancelled})


class BookingDraft(BaseModel):
    # Raw form input; duration stays a string until parse_duration runs
    pickupLocation: str = ""
    dropLocation: str = ""
    pickupDate: str = ""  # YYYY-MM-DD
    pickupTime: str = ""  # HH:MM
    duration: str = "1"

    @field_validator("duration", mode="before")
    @classmethod
    def duration_as_str(cls, v):
        return "" if v is None else str(v)


class BookingCreate(BaseModel):
    userId: str
    vehicleId: str
    status: BookingStatus = BookingStatus.pending
    pickupLocation: str
    dropLocation: str
    pickupDate: str
    pickupTime: str
    duration: int
    totalPrice: float

    @field_validator("userId", "vehicleId", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v) if v is not None else v


class Booking(BaseModel):
    id: str
    userId: str
    vehicleId: str
    status: BookingStatus
    pickupLocation: str = ""
    dropLocation: str = ""
    pickupDate: str = ""
    pickupTime: str = ""
    duration: int = 1
    totalPrice: float = 0
    # Read-side join filled by the bookings listing; never sent to the server
    vehicle: Optional[Vehicle] = None

    @field_validator("id", "userId", "vehicleId", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return str(v) if v is not None else v

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.pending

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def pickup_at(self) -> datetime | None:
        try:
            return datetime.strptime(f"{self.pickupDate} {self.pickupTime}", "%Y-%m-%d %H:%M")
        except ValueError:
            return None
