import logging
import re

from getride.core.errors import ValidationError
from getride.schemas.user import User, UserUpdate
from getride.services.session_service import SessionStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _raise_if_any(errors: dict[str, str]) -> None:
    if errors:
        # first field error doubles as the summary message
        raise ValidationError(next(iter(errors.values())), errors=errors)


def _check_name_email(name: str, email: str, errors: dict[str, str]) -> None:
    if not (name or "").strip():
        errors["name"] = "Name is required"
    if not (email or "").strip():
        errors["email"] = "Email is required"
    elif not _EMAIL.fullmatch(email):
        errors["email"] = "Invalid email format"


def validate_registration(name: str, email: str, password: str, confirm_password: str) -> None:
    errors: dict[str, str] = {}
    _check_name_email(name, email, errors)
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = "Password must be at least 6 characters"
    if password != confirm_password:
        errors["confirmPassword"] = "Passwords do not match"
    _raise_if_any(errors)


def validate_profile(name: str, email: str, password: str = "", confirm_password: str = "") -> None:
    """Like registration, except an empty password means "keep the current one"."""
    errors: dict[str, str] = {}
    _check_name_email(name, email, errors)
    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = "Password must be at least 6 characters"
    if (password or "") != (confirm_password or ""):
        errors["confirmPassword"] = "Passwords do not match"
    _raise_if_any(errors)


def update_profile(session: SessionStore, name: str, email: str,
                   password: str = "", confirm_password: str = "") -> User:
    user = session.require_user()
    validate_profile(name, email, password, confirm_password)
    fields = UserUpdate(name=name.strip(), email=email.strip(), password=password or None)
    updated = session.client.update_user(user.id, fields.model_dump(exclude_none=True))
    session.replace_user(updated)
    logger.info("Updated profile of user %s", user.id)
    return updated
