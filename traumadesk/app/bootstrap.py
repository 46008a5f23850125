# bootstrap.py
"""
Bootstrap de la aplicación TraumaDesk.

Responsabilidades:
- Resolver el directorio de datos de pacientes (arg / entorno / por defecto)
- Resolver el directorio de logs

Este archivo es infraestructura pura.
No contiene lógica de dominio ni de aplicación.
"""

from __future__ import annotations

from os import getenv
from pathlib import Path

from traumadesk.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)

DATA_DIR_ENV = "TRAUMADESK_DATA_DIR"
LOG_DIR_ENV = "TRAUMADESK_LOG_DIR"
DEFAULT_DATA_DIR_NAME = "TraumaPatientData"


def default_data_dir() -> Path:
    """Directorio por defecto: ~/TraumaPatientData."""
    return Path.home() / DEFAULT_DATA_DIR_NAME


def resolve_data_dir(data_dir_arg: str | None = None, *, emit_log: bool = True) -> Path:
    """Resuelve el directorio de pacientes desde arg/env/default con trazabilidad en logs."""
    if data_dir_arg:
        resolved = Path(data_dir_arg).expanduser().resolve()
        source = "arg"
    else:
        configured = getenv(DATA_DIR_ENV)
        if configured:
            resolved = Path(configured).expanduser().resolve()
            source = "env"
        else:
            resolved = default_data_dir().expanduser().resolve()
            source = "default"
    if emit_log:
        LOGGER.info("data_dir_resolved path=%s source=%s", resolved, source)
    return resolved


def resolve_log_dir(data_dir: Path) -> Path:
    """Directorio de logs: TRAUMADESK_LOG_DIR o <data_dir>/logs."""
    configured = getenv(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser().resolve()
    return data_dir / "logs"
