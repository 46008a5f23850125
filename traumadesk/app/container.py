from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from traumadesk.app.application.services.busqueda_pacientes import BusquedaPacientesService
from traumadesk.app.application.usecases.export_excel import ExportPacientesExcel
from traumadesk.app.application.usecases.pacientes_crud import (
    CambiarEstadoRecuperacionUseCase,
    CrearPacienteUseCase,
    EditarPacienteUseCase,
    EliminarPacienteUseCase,
)
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.domain.lesiones import LesionCodeRegistry, build_lesion_registry
from traumadesk.app.infrastructure.json_store.local_json_pacientes_store import LocalJsonPacientesStore

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class AppContainer:
    data_dir: Path
    lesiones: LesionCodeRegistry
    pacientes_store: LocalJsonPacientesStore
    busqueda: BusquedaPacientesService

    crear_paciente: CrearPacienteUseCase
    editar_paciente: EditarPacienteUseCase
    eliminar_paciente: EliminarPacienteUseCase
    cambiar_estado: CambiarEstadoRecuperacionUseCase
    exportar_excel: ExportPacientesExcel


def build_container(data_dir: Path, lesiones: LesionCodeRegistry | None = None) -> AppContainer:
    registry = lesiones if lesiones is not None else build_lesion_registry()
    if len(registry) == 0:
        LOGGER.warning("registro_lesiones_vacio")
    else:
        LOGGER.info("registro_lesiones_cargado", extra={"total": len(registry)})

    store = LocalJsonPacientesStore(data_dir)

    return AppContainer(
        data_dir=data_dir,
        lesiones=registry,
        pacientes_store=store,
        busqueda=BusquedaPacientesService(store),
        crear_paciente=CrearPacienteUseCase(store, registry),
        editar_paciente=EditarPacienteUseCase(store, registry),
        eliminar_paciente=EliminarPacienteUseCase(store),
        cambiar_estado=CambiarEstadoRecuperacionUseCase(store),
        exportar_excel=ExportPacientesExcel(),
    )
