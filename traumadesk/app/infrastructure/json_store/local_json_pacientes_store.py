# infrastructure/json_store/local_json_pacientes_store.py
"""
Almacén de pacientes en archivos JSON locales.

Responsabilidades:
- Un archivo por paciente: <base_path>/<id>.json
- CRUD con E/S síncrona, sin caché (cada lectura va a disco)
- Conversión archivo <-> modelo de dominio (vía paciente_codec)

No contiene:
- Bloqueos ni control de concurrencia (un único escritor por sesión)
- Búsquedas (ver application/services/busqueda_pacientes.py)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from traumadesk.app.application.ports.pacientes_store_port import PacientesStorePort
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.domain.exceptions import StorageError, ValidationError
from traumadesk.app.domain.modelos import Paciente, nuevo_paciente_id
from traumadesk.app.infrastructure.json_store.paciente_codec import paciente_from_dict, paciente_to_dict

LOGGER = get_logger(__name__)

FILE_SUFFIX = ".json"


class LocalJsonPacientesStore(PacientesStorePort):
    def __init__(self, base_path: str | Path) -> None:
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, paciente: Paciente) -> Paciente:
        """
        Valida, asigna un id nuevo y guarda el paciente (siempre como no recuperado).
        """
        paciente.validar()
        nuevo = paciente.copia_con_id(nuevo_paciente_id())
        nuevo.recovered = False
        self._ensure_base_dir()
        self._write_json(self._paciente_file(nuevo.id), paciente_to_dict(nuevo))
        LOGGER.info("paciente_creado", extra={"paciente_id": nuevo.id})
        return nuevo

    def get(self, paciente_id: str) -> Optional[Paciente]:
        path = self._paciente_file(paciente_id)
        if not path.exists():
            return None
        try:
            return paciente_from_dict(self._read_json(path))
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"No se pudo leer el paciente '{paciente_id}': {exc}") from exc

    def list_all(self) -> list[Paciente]:
        """
        Lista todos los pacientes del directorio.

        Un archivo ilegible o corrupto se omite con un warning; no aborta el listado.
        """
        if not self._base_path.exists():
            return []
        pacientes: list[Paciente] = []
        for path in sorted(self._base_path.glob(f"*{FILE_SUFFIX}")):
            if not path.is_file():
                continue
            try:
                pacientes.append(paciente_from_dict(self._read_json(path)))
            except FileNotFoundError:
                LOGGER.warning("paciente_archivo_desaparecido", extra={"archivo": path.name})
            except (OSError, ValueError, KeyError, TypeError) as exc:
                LOGGER.warning(
                    "paciente_archivo_corrupto",
                    extra={"archivo": path.name, "motivo": f"{type(exc).__name__}: {exc}"},
                )
        return pacientes

    def update(self, paciente: Paciente) -> None:
        """
        Sobrescribe el archivo del paciente sin comprobar versiones.

        Si el archivo no existe se crea igualmente y se registra un warning.
        """
        if not paciente.id:
            raise ValidationError("No se puede actualizar un paciente sin id.")
        paciente.validar()
        path = self._paciente_file(paciente.id)
        if not path.exists():
            LOGGER.warning("paciente_update_sin_archivo_previo", extra={"paciente_id": paciente.id})
        self._ensure_base_dir()
        self._write_json(path, paciente_to_dict(paciente))
        LOGGER.info("paciente_actualizado", extra={"paciente_id": paciente.id})

    def delete(self, paciente_id: str) -> None:
        path = self._paciente_file(paciente_id)
        try:
            path.unlink()
        except FileNotFoundError:
            LOGGER.info("paciente_delete_inexistente", extra={"paciente_id": paciente_id})
            return
        except OSError as exc:
            raise StorageError(f"No se pudo eliminar el paciente '{paciente_id}': {exc}") from exc
        LOGGER.info("paciente_eliminado", extra={"paciente_id": paciente_id})

    # --------------------------------------------------------------
    # Archivos
    # --------------------------------------------------------------

    def _paciente_file(self, paciente_id: str) -> Path:
        if not paciente_id or any(sep in paciente_id for sep in ("/", "\\")) or paciente_id.startswith("."):
            raise ValidationError(f"Id de paciente inválido: {paciente_id!r}.")
        return self._base_path / f"{paciente_id}{FILE_SUFFIX}"

    def _ensure_base_dir(self) -> None:
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"No se pudo crear el directorio de datos '{self._base_path}': {exc}") from exc

    def _write_json(self, path: Path, payload: dict[str, Any]) -> None:
        try:
            with path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, sort_keys=True, indent=2)
        except OSError as exc:
            raise StorageError(f"No se pudo guardar '{path.name}': {exc}") from exc

    def _read_json(self, path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            loaded = json.load(handle)
        if not isinstance(loaded, dict):
            raise ValueError(f"Contenido inválido en '{path.name}': se esperaba objeto JSON.")
        return loaded
