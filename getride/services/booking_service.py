import logging
import re
from datetime import datetime

from getride.core.errors import BookingStateError, ValidationError
from getride.schemas.booking import Booking, BookingCreate, BookingDraft, BookingStatus
from getride.schemas.user import User
from getride.schemas.vehicle import Vehicle
from getride.services.api_client import RentalApiClient

logger = logging.getLogger(__name__)

MIN_DURATION_HOURS = 1
ADJUST_OPERATIONS = ("add", "subtract")
BOOKING_TABS = ("all", "upcoming", "past", "cancelled")

# Only pending bookings move; pending -> pending is a duration change
ALLOWED_TRANSITIONS = {
    BookingStatus.pending: {BookingStatus.pending, BookingStatus.confirmed, BookingStatus.cancelled},
    BookingStatus.confirmed: set(),
    BookingStatus.cancelled: set(),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(raw) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw or ""))
    return int(m.group(1)) if m else None


def total_price(duration: int, rate: float) -> float:
    return duration * rate


def parse_duration(raw) -> int:
    """Hours from form input. Unparsable or zero input means the 1 hour default."""
    duration = _leading_int(raw)
    if not duration:
        return MIN_DURATION_HOURS
    if duration < MIN_DURATION_HOURS:
        raise ValidationError("Duration must be at least 1 hour")
    return duration


def ensure_transition(booking: Booking, target: BookingStatus | str) -> None:
    target = BookingStatus(target)
    if target not in ALLOWED_TRANSITIONS[booking.status]:
        raise BookingStateError(f"Booking is already {booking.status.value}")


def validate_draft(draft: BookingDraft, user: User | None, vehicle: Vehicle | None) -> int:
    """Check a booking form in display order; returns the parsed duration."""
    if not draft.pickupLocation.strip() or not draft.dropLocation.strip():
        raise ValidationError("Please enter pickup and drop-off locations")
    if not draft.pickupDate.strip() or not draft.pickupTime.strip():
        raise ValidationError("Please select date and time")
    pickup_date = draft.pickupDate.strip()
    try:
        if not re.fullmatch(r"[0-9]{4}-[0-9]{2}-[0-9]{2}", pickup_date):
            raise ValueError(pickup_date)
        datetime.strptime(pickup_date, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("Pickup date must be in YYYY-MM-DD format")
    if not re.fullmatch(r"([01][0-9]|2[0-3]):[0-5][0-9]", draft.pickupTime.strip()):
        raise ValidationError("Pickup time must be in HH:MM format")
    duration = parse_duration(draft.duration)
    if user is None:
        raise ValidationError("User not authenticated")
    if vehicle is None:
        raise ValidationError("Vehicle information not available")
    return duration


def create_booking(client: RentalApiClient, user: User | None, vehicle: Vehicle | None, draft: BookingDraft) -> Booking:
    duration = validate_draft(draft, user, vehicle)
    body = BookingCreate(
        userId=user.id,
        vehicleId=vehicle.id,
        status=BookingStatus.pending,
        pickupLocation=draft.pickupLocation.strip(),
        dropLocation=draft.dropLocation.strip(),
        pickupDate=draft.pickupDate.strip(),
        pickupTime=draft.pickupTime.strip(),
        duration=duration,
        totalPrice=total_price(duration, vehicle.pricePerHour),
    )
    booking = client.create_booking(body)
    booking.vehicle = vehicle
    logger.info("Created booking %s for user %s (%sh, %s)", booking.id, user.id, duration, booking.totalPrice)
    return booking


def adjusted_duration(current: int, delta: int, operation: str) -> int:
    if operation == "add":
        return current + delta
    if operation == "subtract":
        return max(MIN_DURATION_HOURS, current - delta)
    raise ValidationError(f"Unknown operation: {operation}")


def adjust_duration(client: RentalApiClient, booking: Booking, delta, operation: str) -> Booking:
    """Add or subtract whole hours on a pending booking and reprice it."""
    ensure_transition(booking, BookingStatus.pending)
    if operation not in ADJUST_OPERATIONS:
        raise ValidationError(f"Unknown operation: {operation}")
    if isinstance(delta, str):
        delta = delta.strip()
        if not re.fullmatch(r"[+-]?\d+", delta):
            raise ValidationError("Please enter a valid number of hours")
        delta = int(delta)
    elif isinstance(delta, bool) or not isinstance(delta, int):
        raise ValidationError("Please enter a valid number of hours")
    if delta <= 0:
        raise ValidationError("Please enter a positive number")
    if booking.vehicle is None:
        raise ValidationError("Vehicle information not available")

    new_duration = adjusted_duration(booking.duration, delta, operation)
    updated = client.update_booking(booking.id, {
        "duration": new_duration,
        "totalPrice": total_price(new_duration, booking.vehicle.pricePerHour),
    })
    updated.vehicle = booking.vehicle
    logger.info("Booking %s duration %s -> %s", booking.id, booking.duration, new_duration)
    return updated


def cancel_booking(client: RentalApiClient, booking: Booking, confirmed: bool) -> Booking | None:
    """Cancel after the user said yes; returns None when they declined."""
    ensure_transition(booking, BookingStatus.cancelled)
    if not confirmed:
        return None
    updated = client.update_booking_status(booking.id, BookingStatus.cancelled)
    updated.vehicle = booking.vehicle
    logger.info("Cancelled booking %s", booking.id)
    return updated


def filter_bookings(bookings: list[Booking], tab: str = "all", now: datetime | None = None) -> list[Booking]:
    if tab not in BOOKING_TABS:
        raise ValidationError(f"Unknown bookings tab: {tab}")
    if tab == "all":
        return list(bookings)
    if tab == "cancelled":
        return [b for b in bookings if b.status == BookingStatus.cancelled]

    now = now or datetime.now()
    out = []
    for b in bookings:
        if b.status == BookingStatus.cancelled or b.pickup_at is None:
            continue
        upcoming = b.pickup_at > now
        if (tab == "upcoming") == upcoming:
            out.append(b)
    return out
