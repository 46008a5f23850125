from __future__ import annotations

from typing import Optional, Protocol

from traumadesk.app.domain.modelos import Paciente


class PacientesStorePort(Protocol):
    """Persistencia de pacientes: un registro por clave, sin caché."""

    def create(self, paciente: Paciente) -> Paciente:
        """Asigna id nuevo, persiste y devuelve el paciente guardado."""

    def get(self, paciente_id: str) -> Optional[Paciente]:
        """Devuelve el paciente o None si no existe."""

    def list_all(self) -> list[Paciente]:
        """Lista todos los pacientes legibles."""

    def update(self, paciente: Paciente) -> None:
        """Sobrescribe el paciente (upsert)."""

    def delete(self, paciente_id: str) -> None:
        """Elimina el paciente si existe."""
