from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from traumadesk.app.application.ports.pacientes_store_port import PacientesStorePort
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.domain.lesiones import LesionCodeRegistry
from traumadesk.app.domain.modelos import Paciente

LOGGER = get_logger(__name__)


def codigo_no_registrado(paciente: Paciente, registry: LesionCodeRegistry) -> bool:
    """True si la lesión trae un código que no está en el registro oficial."""
    lesion = paciente.lesion
    if lesion is None or not lesion.codigo_oficial.strip():
        return False
    return not registry.contiene(lesion.codigo_oficial)


def _avisar_codigo_no_registrado(paciente: Paciente, registry: LesionCodeRegistry) -> None:
    if codigo_no_registrado(paciente, registry):
        LOGGER.warning("codigo_lesion_no_registrado", extra={"paciente_id": paciente.id or "-"})


@dataclass(frozen=True)
class CrearPacienteUseCase:
    store: PacientesStorePort
    registry: LesionCodeRegistry

    def execute(self, paciente: Paciente) -> Paciente:
        _avisar_codigo_no_registrado(paciente, self.registry)
        return self.store.create(paciente)


@dataclass(frozen=True)
class EditarPacienteUseCase:
    store: PacientesStorePort
    registry: LesionCodeRegistry

    def execute(self, paciente: Paciente) -> None:
        _avisar_codigo_no_registrado(paciente, self.registry)
        self.store.update(paciente)


@dataclass(frozen=True)
class EliminarPacienteUseCase:
    store: PacientesStorePort

    def execute(self, paciente_id: str) -> None:
        self.store.delete(paciente_id)


@dataclass(frozen=True)
class CambiarEstadoRecuperacionUseCase:
    store: PacientesStorePort

    def execute(self, paciente_id: str) -> Optional[bool]:
        """Alterna recuperado/activo. Devuelve el nuevo estado, o None si el paciente ya no existe."""
        paciente = self.store.get(paciente_id)
        if paciente is None:
            LOGGER.warning("paciente_estado_sin_registro", extra={"paciente_id": paciente_id})
            return None
        paciente.recovered = not paciente.recovered
        self.store.update(paciente)
        return paciente.recovered
