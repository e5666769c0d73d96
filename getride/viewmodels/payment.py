from getride.schemas.booking import Booking
from getride.schemas.payments import CardIn
from getride.services.payment_service import pay_for_booking
from getride.viewmodels.base import ViewModel


class PaymentViewModel(ViewModel):
    def __init__(self, session, booking_id: str | None, booking: Booking | None = None):
        super().__init__(session)
        self.booking_id = booking_id
        self.booking = booking

    def pay(self, card_number: str, expiry: str, cvv: str) -> Booking | None:
        card = CardIn(cardNumber=card_number or "", expiry=(expiry or "").strip(), cvv=(cvv or "").strip())

        def _pay():
            self.booking = pay_for_booking(self.client, self.booking_id, card, booking=self.booking)
            return self.booking

        return self._run("pay", _pay)
