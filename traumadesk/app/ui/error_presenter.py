from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QMessageBox, QWidget

from traumadesk.app.bootstrap_logging import get_logger, log_soft_exception
from traumadesk.app.domain.exceptions import StorageError, ValidationError

LOGGER = get_logger("traumadesk.ui")


def _normalize_context(context: Optional[str]) -> Optional[str]:
    if not context:
        return None
    return context.strip() or None


def present_error(parent: QWidget, exc: Exception, context: str | None = None) -> None:
    context_text = _normalize_context(context)

    if isinstance(exc, ValidationError):
        QMessageBox.warning(parent, "Error de Validación", str(exc))
        return

    if isinstance(exc, StorageError):
        log_soft_exception(LOGGER, exc, {"context": context_text or "-"})
        message = str(exc)
        if context_text:
            message = f"{context_text}\n{message}"
        QMessageBox.critical(parent, "Error", message)
        return

    log_soft_exception(LOGGER, exc, {"context": context_text or "-"})
    QMessageBox.critical(
        parent,
        "Error",
        "Ha ocurrido un error inesperado. Revisa los datos o consulta el log.",
    )
