# Rev 0.2.0
# clientdesk/viewmodels/clients_viewmodel.py
from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from clientdesk.models.entities import ClientFields
from clientdesk.services.project_query import projects_for_client


class ClientsViewModel(QObject):
    clientsReloaded = Signal(list)

    def __init__(self, service):
        """
        service must expose:
          store.clients, store.projects, add_client(ClientFields), mutated
        """
        super().__init__()
        self._service = service
        service.mutated.connect(self._on_mutated)

    def list_clients(self) -> list[dict]:
        store = self._service.store
        return [
            {**c.to_dict(), "project_count": len(projects_for_client(store.projects, c.id))}
            for c in store.clients
        ]

    def reload(self) -> None:
        self.clientsReloaded.emit(self.list_clients())

    def create_client(self, name: str, email: str, phone: str, company: str) -> str:
        result = self._service.add_client(ClientFields(name=name, email=email, phone=phone, company=company))
        return result.value.id

    def _on_mutated(self, kind: str, entity_id: str) -> None:
        if kind in ("client", "project"):
            self.reload()
