from getride.schemas.user import User
from getride.services.account_service import validate_registration
from getride.viewmodels.base import ViewModel


class LoginViewModel(ViewModel):
    def login(self, email: str, password: str) -> User | None:
        return self._run("login", self.session.login, email.strip(), password)


class RegisterViewModel(ViewModel):
    def register(self, name: str, email: str, password: str, confirm_password: str) -> User | None:
        def _register():
            validate_registration(name, email, password, confirm_password)
            return self.session.register(name.strip(), email.strip(), password)

        return self._run("register", _register)
