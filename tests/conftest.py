import json
from dataclasses import dataclass

import pytest

from getride.core.storage import LocalStorage
from getride.services.api_client import ApiConfig, RentalApiClient
from getride.services.session_service import SessionStore

BASE_URL = "http://rental.test"


@dataclass
class Call:
    method: str
    path: str
    params: dict | None
    json: dict | None
    timeout: float | None


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, text: str | None = None):
        self.status_code = status_code
        if text is not None:
            self.text = text
        else:
            self.text = "" if body is None else json.dumps(body)

    def json(self):
        return json.loads(self.text)


class FakeHttp:
    """Stands in for requests.Session: routes by (method, path), records every call."""

    def __init__(self):
        self.headers = {}
        self.calls: list[Call] = []
        self.routes = {}
        self.closed = False

    def add(self, method: str, path: str, body=None, status: int = 200, exc: Exception | None = None, handler=None, text: str | None = None):
        self.routes[(method.upper(), path)] = (body, status, exc, handler, text)

    def request(self, method, url, params=None, json=None, timeout=None):
        assert url.startswith(BASE_URL)
        path = url[len(BASE_URL):]
        self.calls.append(Call(method, path, params, json, timeout))
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {})
        body, status, exc, handler, text = route
        if exc is not None:
            raise exc
        if handler is not None:
            return handler(params, json)
        return FakeResponse(status, body, text=text)

    def calls_to(self, method: str, path: str | None = None) -> list[Call]:
        return [c for c in self.calls if c.method == method and (path is None or c.path == path)]

    def close(self):
        self.closed = True


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(http):
    return RentalApiClient(ApiConfig(base_url=BASE_URL, timeout=5.0), session=http)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def session(client, storage):
    return SessionStore(client, storage, storage_key="userId")


JANE = {"id": 1, "name": "Jane", "email": "jane@example.com", "password": "123456"}

SEDAN = {
    "id": 7,
    "type": "Sedan",
    "plate": "KA-01-1234",
    "pricePerHour": 50,
    "status": "available",
    "driver": "Ravi",
    "image": "https://img.test/sedan.png",
}

SUV = {
    "id": 8,
    "type": "SUV",
    "plate": "KA-02-9999",
    "pricePerHour": 80,
    "status": "available",
    "seats": 7,
    "transmission": "Manual",
    "rating": 4.5,
    "driver": "Anil",
    "image": "",
}


def booking_record(**overrides) -> dict:
    data = {
        "id": 100,
        "userId": 1,
        "vehicleId": 7,
        "status": "pending",
        "pickupLocation": "Airport",
        "dropLocation": "Downtown",
        "pickupDate": "2025-05-25",
        "pickupTime": "09:00",
        "duration": 2,
        "totalPrice": 100,
    }
    data.update(overrides)
    return data


@pytest.fixture
def logged_in(session, http):
    http.add("GET", "/users", body=[JANE])
    session.login("jane@example.com", "123456")
    http.calls.clear()
    return session
