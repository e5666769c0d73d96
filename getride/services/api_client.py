import logging
from dataclasses import dataclass
from typing import Any

import requests
from pydantic import ValidationError as SchemaError

from getride.core.config import settings
from getride.core.errors import NetworkError, NotFoundError, ServerError, ValidationError
from getride.schemas.booking import Booking, BookingCreate, BookingStatus
from getride.schemas.user import User, UserCreate
from getride.schemas.vehicle import Vehicle, VehicleStatus

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str           # resource server root, no trailing slash
    timeout: float = 5.0    # seconds, per request
    best_effort_bookings: bool = False

    @classmethod
    def from_settings(cls) -> "ApiConfig":
        return cls(base_url=settings.API_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS,
                   best_effort_bookings=settings.BOOKINGS_BEST_EFFORT)


def _server_message(data: Any) -> str | None:
    if isinstance(data, dict):
        msg = data.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg
    return None


def _require_id(value, what: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{what} is required")
    return str(value).strip()


def _safe_fields(fields: dict | None) -> dict | None:
    if not fields or "password" not in fields:
        return fields
    return {**fields, "password": "***"}


class RentalApiClient:
    """One method per resource-server call.

    Every failure comes out as a RentalError subclass whose message is the
    server's `message` field when it sent one, else the operation's default.
    No retries.
    """

    def __init__(self, cfg: ApiConfig | None = None, session: requests.Session | None = None):
        self.cfg = cfg or ApiConfig.from_settings()
        self.http = session or requests.Session()
        self.http.headers.update({"Accept": "application/json"})

    def close(self) -> None:
        self.http.close()

    def request(self, method: str, path: str, *, default_message: str,
                params: dict | None = None, payload: dict | None = None) -> Any:
        url = f"{self.cfg.base_url}{path}"
        logger.debug("%s %s params=%s body=%s", method.upper(), path, _safe_fields(params), _safe_fields(payload))
        try:
            r = self.http.request(method=method.upper(), url=url, params=params, json=payload, timeout=self.cfg.timeout)
        except requests.Timeout as exc:
            logger.warning("%s %s timed out after %ss", method.upper(), path, self.cfg.timeout)
            raise NetworkError(default_message) from exc
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method.upper(), path, exc)
            raise NetworkError(default_message) from exc

        try:
            data = r.json() if r.text else None
        except ValueError:
            data = {"raw": r.text}

        if r.status_code >= 400:
            msg = _server_message(data) or default_message
            logger.warning("%s %s -> %s: %s", method.upper(), path, r.status_code, msg)
            if r.status_code == 404:
                raise NotFoundError(msg)
            raise ServerError(msg, status_code=r.status_code)
        return data

    def _parse(self, model, data: Any, default_message: str):
        try:
            return model.model_validate(data)
        except SchemaError as exc:
            logger.warning("Unexpected %s payload: %s", model.__name__, exc)
            raise ServerError(default_message) from exc

    def _parse_list(self, model, data: Any, default_message: str) -> list:
        if not isinstance(data, list):
            raise ServerError(default_message)
        return [self._parse(model, item, default_message) for item in data]

    # Users

    def find_users(self, email: str, password: str | None = None, *,
                   default_message: str = "Failed to fetch users") -> list[User]:
        """Equality query on the users collection; an empty list means no match."""
        if not (email or "").strip():
            raise ValidationError("Email is required")
        msg = default_message
        params = {"email": email}
        if password is not None:
            params["password"] = password
        data = self.request("GET", "/users", params=params, default_message=msg)
        return self._parse_list(User, data, msg)

    def create_user(self, name: str, email: str, password: str) -> User:
        msg = "Registration failed"
        body = UserCreate(name=name, email=email, password=password).model_dump()
        data = self.request("POST", "/users", payload=body, default_message=msg)
        return self._parse(User, data, msg)

    def get_user(self, user_id: str) -> User:
        user_id = _require_id(user_id, "User id")
        msg = "Failed to fetch user details"
        data = self.request("GET", f"/users/{user_id}", default_message=msg)
        if not data:
            raise NotFoundError(msg)
        return self._parse(User, data, msg)

    def update_user(self, user_id: str, fields: dict) -> User:
        user_id = _require_id(user_id, "User id")
        msg = "Failed to update user"
        data = self.request("PATCH", f"/users/{user_id}", payload=fields, default_message=msg)
        return self._parse(User, data, msg)

    # Vehicles

    def list_vehicles(self, status: VehicleStatus | str = VehicleStatus.available) -> list[Vehicle]:
        msg = "Failed to fetch vehicles"
        status = status.value if isinstance(status, VehicleStatus) else status
        data = self.request("GET", "/vehicles", params={"status": status}, default_message=msg)
        return self._parse_list(Vehicle, data, msg)

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle_id = _require_id(vehicle_id, "Vehicle id")
        msg = "Failed to fetch vehicle details"
        data = self.request("GET", f"/vehicles/{vehicle_id}", default_message=msg)
        if not data:
            raise NotFoundError(msg)
        return self._parse(Vehicle, data, msg)

    # Bookings

    def list_bookings(self, user_id: str, best_effort: bool | None = None) -> list[Booking]:
        """Bookings of one user, each joined with its vehicle.

        Fail-fast by default: one vehicle that cannot be fetched fails the
        whole call. With best_effort those bookings keep vehicle=None.
        Each distinct vehicle is fetched once.
        """
        user_id = _require_id(user_id, "User id")
        msg = "Failed to fetch bookings"
        if best_effort is None:
            best_effort = self.cfg.best_effort_bookings
        data = self.request("GET", "/bookings", params={"userId": user_id}, default_message=msg)
        bookings = self._parse_list(Booking, data, msg)

        vehicles: dict[str, Vehicle | None] = {}
        for booking in bookings:
            if booking.vehicleId not in vehicles:
                try:
                    vehicles[booking.vehicleId] = self.get_vehicle(booking.vehicleId)
                except (NotFoundError, NetworkError, ServerError, ValidationError):
                    if not best_effort:
                        raise
                    logger.warning("Vehicle %s unavailable for booking %s", booking.vehicleId, booking.id)
                    vehicles[booking.vehicleId] = None
            booking.vehicle = vehicles[booking.vehicleId]
        return bookings

    def create_booking(self, fields: BookingCreate | dict) -> Booking:
        msg = "Failed to create booking"
        if isinstance(fields, dict):
            try:
                fields = BookingCreate.model_validate(fields)
            except SchemaError as exc:
                raise ValidationError("Booking details are incomplete") from exc
        data = self.request("POST", "/bookings", payload=fields.model_dump(mode="json"), default_message=msg)
        if not isinstance(data, dict) or data.get("id") in (None, ""):
            raise ServerError("Booking ID not returned")
        return self._parse(Booking, data, msg)

    def update_booking(self, booking_id: str, fields: dict) -> Booking:
        booking_id = _require_id(booking_id, "Booking id")
        msg = "Failed to update booking"
        data = self.request("PATCH", f"/bookings/{booking_id}", payload=fields, default_message=msg)
        return self._parse(Booking, data, msg)

    def update_booking_status(self, booking_id: str, status: BookingStatus | str) -> Booking:
        booking_id = _require_id(booking_id, "Booking id")
        msg = "Failed to update booking status"
        try:
            status = BookingStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid booking status: {status}")
        data = self.request("PATCH", f"/bookings/{booking_id}", payload={"status": status.value}, default_message=msg)
        return self._parse(Booking, data, msg)
