"""Utilidades internas de dominio."""

from __future__ import annotations

from typing import Optional

from traumadesk.app.domain.exceptions import ValidationError


def _strip_or_empty(value: Optional[str]) -> str:
    """Normaliza strings opcionales: devuelve "" si es None o queda vacío tras strip()."""
    if value is None:
        return ""
    return value.strip()


def _require_non_empty(value: Optional[str], field_name: str) -> str:
    """Exige string no vacío; lanza ValidationError si no cumple."""
    v = _strip_or_empty(value)
    if not v:
        raise ValidationError(f"Campo obligatorio: {field_name}.")
    return v


def _ensure_in_range(value: int, field_name: str, minimo: int, maximo: int) -> None:
    """Exige entero dentro de [minimo, maximo]; lanza ValidationError si no cumple."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} debe ser un número entero.")
    if value < minimo or value > maximo:
        raise ValidationError(f"{field_name} debe estar entre {minimo} y {maximo}.")
