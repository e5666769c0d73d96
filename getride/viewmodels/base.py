import logging

from getride.core.errors import RentalError, ValidationError
from getride.services.session_service import SessionStore

logger = logging.getLogger(__name__)


class ViewModel:
    """State a screen binds to: last error, field errors, busy flags.

    Every user action goes through _run, which ignores a repeat of an
    action that is still in flight and turns RentalError into `error`
    while leaving the rest of the state as it was.
    """

    def __init__(self, session: SessionStore):
        self.session = session
        self.client = session.client
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self._in_flight: set[str] = set()

    def is_busy(self, action: str | None = None) -> bool:
        if action is None:
            return bool(self._in_flight)
        return action in self._in_flight

    def clear_error(self, field: str | None = None) -> None:
        if field is None:
            self.error = None
            self.field_errors = {}
        else:
            self.field_errors.pop(field, None)

    def _run(self, action: str, fn, *args, **kwargs):
        if action in self._in_flight:
            logger.debug("%s: %s already in flight, ignored", type(self).__name__, action)
            return None
        self._in_flight.add(action)
        self.clear_error()
        try:
            return fn(*args, **kwargs)
        except ValidationError as exc:
            self.error = exc.message
            self.field_errors = dict(exc.errors)
            return None
        except RentalError as exc:
            self.error = exc.message
            return None
        finally:
            self._in_flight.discard(action)
