import logging
import re

from getride.core.errors import ValidationError
from getride.schemas.booking import Booking, BookingStatus
from getride.schemas.payments import CardIn
from getride.services.api_client import RentalApiClient
from getride.services.booking_service import ensure_transition

logger = logging.getLogger(__name__)

_CVV = re.compile(r"[0-9]{3,4}")
_CARD_NUMBER = re.compile(r"[0-9]{16}")
_EXPIRY = re.compile(r"(0[1-9]|1[0-2])/[0-9]{2}")


def normalize_card_number(number: str) -> str:
    return re.sub(r"\s", "", number or "")


def format_card_number(number: str) -> str:
    """Group digits by four for display: 1234 5678 9012 3456."""
    digits = normalize_card_number(number)
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def validate_card(booking_id: str | None, card: CardIn) -> None:
    # Order matters: the first failing check is the one the user sees
    if not booking_id:
        raise ValidationError("Invalid booking ID. Please try booking again.")
    if not card.cardNumber or not card.expiry or not card.cvv:
        raise ValidationError("Please fill in all fields")
    if not _CVV.fullmatch(card.cvv):
        raise ValidationError("CVV must be 3 or 4 digits")
    if not _CARD_NUMBER.fullmatch(normalize_card_number(card.cardNumber)):
        raise ValidationError("Card number must be 16 digits")
    if not _EXPIRY.fullmatch(card.expiry):
        raise ValidationError("Expiry must be in MM/YY format")


def pay_for_booking(client: RentalApiClient, booking_id: str | None, card: CardIn,
                    booking: Booking | None = None) -> Booking:
    """Validate card details, then mark the booking confirmed.

    Nothing is charged: the resource server has no gateway, so payment is
    only the status flip.
    """
    validate_card(booking_id, card)
    if booking is not None:
        ensure_transition(booking, BookingStatus.confirmed)
    updated = client.update_booking_status(booking_id, BookingStatus.confirmed)
    if booking is not None:
        updated.vehicle = booking.vehicle
    logger.info("Payment accepted for booking %s", booking_id)
    return updated
