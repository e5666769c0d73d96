import logging

from getride.core.config import settings
from getride.core.errors import AuthError, RentalError, ServerError, ValidationError
from getride.core.storage import LocalStorage
from getride.schemas.user import User
from getride.services.api_client import RentalApiClient

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed. Please check your credentials or network."
REGISTRATION_FAILED = "Registration failed"
EMAIL_EXISTS = "Email already exists"


class SessionStore:
    """Holds at most one authenticated user and persists its id.

    Owned by the app and handed to every view-model; call restore() on
    start and close() on teardown.
    """

    def __init__(self, client: RentalApiClient, storage: LocalStorage, storage_key: str | None = None):
        self.client = client
        self.storage = storage
        self.storage_key = storage_key or settings.SESSION_STORAGE_KEY
        self._user: User | None = None

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> User:
        if self._user is None:
            raise AuthError("User not authenticated")
        return self._user

    def _sign_in(self, user: User) -> User:
        self.storage.set(self.storage_key, user.id)
        self._user = user
        logger.info("Signed in user %s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        if not (email or "").strip() or not password:
            raise ValidationError("Please enter email and password")
        try:
            matches = self.client.find_users(email, password, default_message=LOGIN_FAILED)
        except RentalError as exc:
            raise AuthError(exc.message) from exc
        if not matches:
            raise AuthError("Invalid email or password")
        return self._sign_in(matches[0])

    def register(self, name: str, email: str, password: str) -> User:
        # Pre-check is only a hint; the server's unique constraint (409) is authoritative
        try:
            existing = self.client.find_users(email, default_message=REGISTRATION_FAILED)
        except RentalError as exc:
            raise AuthError(exc.message) from exc
        if existing:
            raise AuthError(EMAIL_EXISTS)

        try:
            user = self.client.create_user(name, email, password)
        except RentalError as exc:
            msg = exc.message
            if isinstance(exc, ServerError) and exc.status_code == 409 and msg == REGISTRATION_FAILED:
                msg = EMAIL_EXISTS
            raise AuthError(msg) from exc
        return self._sign_in(user)

    def logout(self) -> None:
        self.storage.delete(self.storage_key)
        if self._user is not None:
            logger.info("Signed out user %s", self._user.id)
        self._user = None

    def restore(self) -> User | None:
        """Reload the persisted user, if any. Never raises; failure means logged out."""
        user_id = self.storage.get(self.storage_key)
        if not user_id:
            return None
        try:
            self._user = self.client.get_user(user_id)
        except RentalError as exc:
            logger.warning("Could not restore session for user %s: %s", user_id, exc.message)
            self._user = None
        return self._user

    def replace_user(self, user: User) -> None:
        self._user = user

    def close(self) -> None:
        self._user = None
