from datetime import datetime

from getride.core.errors import ValidationError
from getride.schemas.booking import Booking, BookingDraft
from getride.schemas.vehicle import Vehicle
from getride.services import booking_service
from getride.viewmodels.base import ViewModel


class BookingFormViewModel(ViewModel):
    def __init__(self, session, vehicle_id: str | None):
        super().__init__(session)
        self.vehicle_id = vehicle_id
        self.vehicle: Vehicle | None = None
        self.booking: Booking | None = None

    def load(self) -> Vehicle | None:
        if not self.vehicle_id:
            return None

        def _fetch():
            self.vehicle = self.client.get_vehicle(self.vehicle_id)
            return self.vehicle

        return self._run("load", _fetch)

    def quote(self, duration) -> float | None:
        """Price shown beside the duration field while the user types."""
        if self.vehicle is None:
            return None
        try:
            hours = booking_service.parse_duration(duration)
        except ValidationError:
            return None
        return booking_service.total_price(hours, self.vehicle.pricePerHour)

    def submit(self, draft: BookingDraft) -> Booking | None:
        def _create():
            self.booking = booking_service.create_booking(
                self.client, self.session.current_user, self.vehicle, draft)
            return self.booking

        return self._run("submit", _create)


class MyBookingsViewModel(ViewModel):
    def __init__(self, session):
        super().__init__(session)
        self.bookings: list[Booking] = []
        self.tab = "all"

    def refresh(self) -> list[Booking]:
        """Replace the list wholesale; a failed fetch keeps what was shown."""
        user = self.session.current_user
        if user is None:
            return self.bookings

        def _fetch():
            self.bookings = self.client.list_bookings(user.id)
            return self.bookings

        self._run("refresh", _fetch)
        return self.bookings

    def select_tab(self, tab: str) -> None:
        if tab not in booking_service.BOOKING_TABS:
            raise ValueError(f"unknown tab {tab!r}")
        self.tab = tab

    def visible(self, now: datetime | None = None) -> list[Booking]:
        return booking_service.filter_bookings(self.bookings, self.tab, now=now)

    def cancel(self, booking: Booking, confirmed: bool) -> Booking | None:
        result = self._run(f"cancel:{booking.id}", booking_service.cancel_booking,
                           self.client, booking, confirmed)
        if result is not None:
            self.refresh()
        return result

    def adjust_hours(self, booking: Booking, delta, operation: str) -> Booking | None:
        result = self._run(f"adjust:{booking.id}", booking_service.adjust_duration,
                           self.client, booking, delta, operation)
        if result is not None:
            self.refresh()
        return result
