from getride.schemas.vehicle import Vehicle, VehicleStatus
from getride.viewmodels.base import ViewModel


class VehicleListViewModel(ViewModel):
    def __init__(self, session, status: VehicleStatus | str = VehicleStatus.available):
        super().__init__(session)
        self.status = status
        self.vehicles: list[Vehicle] = []

    def refresh(self) -> list[Vehicle]:
        """Reload the list; on failure the previous list stays."""
        if not self.session.is_authenticated:
            return self.vehicles

        def _fetch():
            self.vehicles = self.client.list_vehicles(self.status)
            return self.vehicles

        self._run("refresh", _fetch)
        return self.vehicles
