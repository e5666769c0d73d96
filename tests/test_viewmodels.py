from datetime import datetime

import requests

from getride.schemas.booking import BookingDraft, BookingStatus
from getride.viewmodels.auth import LoginViewModel, RegisterViewModel
from getride.viewmodels.bookings import BookingFormViewModel, MyBookingsViewModel
from getride.viewmodels.payment import PaymentViewModel
from getride.viewmodels.profile import ProfileViewModel
from getride.viewmodels.vehicles import VehicleListViewModel

from conftest import JANE, SEDAN, SUV, FakeResponse, booking_record


def test_login_error_is_exposed(session, http):
    http.add("GET", "/users", body=[])
    vm = LoginViewModel(session)
    assert vm.login("jane@example.com", "nope") is None
    assert vm.error == "Invalid email or password"
    assert not vm.is_busy()


def test_login_success(session, http):
    http.add("GET", "/users", body=[JANE])
    vm = LoginViewModel(session)
    assert vm.login(" jane@example.com ", "123456").id == "1"
    assert vm.error is None
    assert http.calls[0].params["email"] == "jane@example.com"


def test_register_validates_before_any_request(session, http):
    vm = RegisterViewModel(session)
    assert vm.register("Sam", "sam@example.com", "secret1", "secret2") is None
    assert vm.field_errors == {"confirmPassword": "Passwords do not match"}
    assert http.calls == []
    vm.clear_error("confirmPassword")
    assert vm.field_errors == {}


def test_same_action_is_ignored_while_in_flight(session, http):
    vm = LoginViewModel(session)
    nested = []

    def handler(params, body):
        assert vm.is_busy("login")
        nested.append(vm.login("jane@example.com", "123456"))
        return FakeResponse(200, [JANE])

    http.add("GET", "/users", handler=handler)
    assert vm.login("jane@example.com", "123456").id == "1"
    assert nested == [None]
    assert len(http.calls) == 1
    assert not vm.is_busy("login")


def test_vehicle_list_requires_login(session, http):
    vm = VehicleListViewModel(session)
    assert vm.refresh() == []
    assert http.calls == []


def test_vehicle_list_keeps_previous_on_failure(logged_in, http):
    vm = VehicleListViewModel(logged_in)
    http.add("GET", "/vehicles", body=[SEDAN, SUV])
    assert len(vm.refresh()) == 2
    http.add("GET", "/vehicles", exc=requests.Timeout())
    assert len(vm.refresh()) == 2
    assert vm.error == "Failed to fetch vehicles"


def test_booking_form_flow(logged_in, http):
    http.add("GET", "/vehicles/7", body=SEDAN)
    http.add("POST", "/bookings", handler=lambda params, body: FakeResponse(201, {"id": 100, **body}))
    vm = BookingFormViewModel(logged_in, "7")
    assert vm.load().type == "Sedan"
    assert vm.quote("3") == 150
    assert vm.quote("0") == 50
    assert vm.quote("-1") is None
    booking = vm.submit(BookingDraft(pickupLocation="Airport", dropLocation="Downtown",
                                     pickupDate="2025-05-25", pickupTime="09:00", duration="2"))
    assert booking.id == "100"
    assert booking.totalPrice == 100


def test_booking_form_without_vehicle(logged_in, http):
    vm = BookingFormViewModel(logged_in, None)
    assert vm.load() is None
    result = vm.submit(BookingDraft(pickupLocation="A", dropLocation="B",
                                    pickupDate="2025-05-25", pickupTime="09:00"))
    assert result is None
    assert vm.error == "Vehicle information not available"
    assert http.calls == []


def test_my_bookings_refresh_cancel_and_adjust(logged_in, http):
    stored = [booking_record(id=1), booking_record(id=2, vehicleId=8, pickupDate="2030-01-01")]

    def patch(booking_id):
        def handler(params, body):
            record = next(b for b in stored if b["id"] == booking_id)
            record.update(body)
            return FakeResponse(200, record)
        return handler

    http.add("GET", "/bookings", handler=lambda params, body: FakeResponse(200, stored))
    http.add("GET", "/vehicles/7", body=SEDAN)
    http.add("GET", "/vehicles/8", body=SUV)
    http.add("PATCH", "/bookings/1", handler=patch(1))
    http.add("PATCH", "/bookings/2", handler=patch(2))

    vm = MyBookingsViewModel(logged_in)
    assert len(vm.refresh()) == 2

    updated = vm.adjust_hours(vm.bookings[1], "1", "add")
    assert (updated.duration, updated.totalPrice) == (3, 240)
    assert vm.bookings[1].duration == 3

    assert vm.cancel(vm.bookings[0], confirmed=False) is None
    assert vm.cancel(vm.bookings[0], confirmed=True).status == BookingStatus.cancelled
    assert vm.bookings[0].status == BookingStatus.cancelled

    vm.select_tab("cancelled")
    assert [b.id for b in vm.visible()] == ["1"]
    vm.select_tab("upcoming")
    assert [b.id for b in vm.visible(now=datetime(2025, 1, 1))] == ["2"]


def test_my_bookings_failed_join_keeps_list(logged_in, http):
    http.add("GET", "/bookings", body=[booking_record(id=1)])
    http.add("GET", "/vehicles/7", body=SEDAN)
    vm = MyBookingsViewModel(logged_in)
    vm.refresh()
    http.add("GET", "/bookings", body=[booking_record(id=1), booking_record(id=2, vehicleId=99)])
    vm.refresh()
    assert [b.id for b in vm.bookings] == ["1"]
    assert vm.error == "Failed to fetch vehicle details"


def test_my_bookings_rejects_changes_to_confirmed(logged_in, http):
    http.add("GET", "/bookings", body=[booking_record(id=1, status="confirmed")])
    http.add("GET", "/vehicles/7", body=SEDAN)
    vm = MyBookingsViewModel(logged_in)
    vm.refresh()
    http.calls.clear()
    assert vm.cancel(vm.bookings[0], confirmed=True) is None
    assert vm.error == "Booking is already confirmed"
    assert http.calls == []


def test_payment_view_model(session, http):
    http.add("PATCH", "/bookings/100", body=booking_record(status="confirmed"))
    vm = PaymentViewModel(session, "100")
    assert vm.pay("1234 5678 9012 3456", "13/26", "123") is None
    assert vm.error == "Expiry must be in MM/YY format"
    assert http.calls == []
    booking = vm.pay("1234 5678 9012 3456", "12/26", "123")
    assert booking.status == BookingStatus.confirmed
    assert vm.error is None
    assert len(http.calls) == 1


def test_profile_load_save_logout(logged_in, http, storage):
    http.add("GET", "/users/1", body=JANE)
    http.add("PATCH", "/users/1", handler=lambda params, body: FakeResponse(200, {**JANE, **body}))
    vm = ProfileViewModel(logged_in)
    vm.load()
    assert (vm.name, vm.email) == ("Jane", "jane@example.com")

    assert vm.save("Jane Doe", "jane@example.com", "abc", "abc") is None
    assert vm.field_errors == {"password": "Password must be at least 6 characters"}

    assert vm.save("Jane Doe", "jane@example.com").name == "Jane Doe"
    assert vm.name == "Jane Doe"

    assert vm.logout(confirmed=False) is False
    assert logged_in.is_authenticated
    assert vm.logout(confirmed=True) is True
    assert not logged_in.is_authenticated
    assert storage.get("userId") is None
