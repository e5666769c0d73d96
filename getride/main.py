from dataclasses import dataclass

from getride.core.config import Settings, settings as default_settings
from getride.core.log import configure_logging
from getride.core.storage import LocalStorage
from getride.services.api_client import ApiConfig, RentalApiClient
from getride.services.session_service import SessionStore


@dataclass
class App:
    settings: Settings
    client: RentalApiClient
    storage: LocalStorage
    session: SessionStore

    def close(self) -> None:
        self.session.close()
        self.client.close()


def create_app(settings: Settings | None = None, client: RentalApiClient | None = None,
               restore: bool = True) -> App:
    """Wire config, storage, API client and session; restores the last login."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    client = client or RentalApiClient(ApiConfig(
        base_url=settings.API_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        best_effort_bookings=settings.BOOKINGS_BEST_EFFORT,
    ))
    storage = LocalStorage(settings.STORAGE_PATH)
    session = SessionStore(client, storage, storage_key=settings.SESSION_STORAGE_KEY)
    if restore:
        session.restore()
    return App(settings=settings, client=client, storage=storage, session=session)
