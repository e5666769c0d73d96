from getride.schemas.user import User
from getride.services.account_service import update_profile
from getride.viewmodels.base import ViewModel


class ProfileViewModel(ViewModel):
    def __init__(self, session):
        super().__init__(session)
        self.name = ""
        self.email = ""

    def load(self) -> User | None:
        user = self.session.current_user
        if user is None:
            return None

        def _fetch():
            fresh = self.client.get_user(user.id)
            self.name, self.email = fresh.name, fresh.email
            return fresh

        return self._run("load", _fetch)

    def save(self, name: str, email: str, password: str = "", confirm_password: str = "") -> User | None:
        def _save():
            updated = update_profile(self.session, name, email, password, confirm_password)
            self.name, self.email = updated.name, updated.email
            return updated

        return self._run("save", _save)

    def logout(self, confirmed: bool) -> bool:
        if not confirmed:
            return False
        self.session.logout()
        return True
