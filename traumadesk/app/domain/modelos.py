"""Entidades de dominio: paciente de trauma y su lesión."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.domain.exceptions import ValidationError
from traumadesk.app.domain.lesiones import es_codigo_oficial
from traumadesk.app.domain.rut import clean_rut, validate_rut
from traumadesk.app.domain.value_objects import (
    _ensure_in_range,
    _require_non_empty,
    _strip_or_empty,
)

EDAD_MAXIMA = 120
DELAY_QX_MAXIMO = 365


@dataclass(slots=True)
class Lesion:
    """Lesión embebida en el paciente (sin identidad propia)."""

    nombre_lesion: str = ""
    codigo_oficial: str = ""
    diagnostico: str = ""

    def validar(self) -> None:
        self.nombre_lesion = _strip_or_empty(self.nombre_lesion)
        self.codigo_oficial = _strip_or_empty(self.codigo_oficial)
        self.diagnostico = _strip_or_empty(self.diagnostico)

        if self.codigo_oficial and not es_codigo_oficial(self.codigo_oficial):
            raise ValidationError(
                "Código de lesión con formato incorrecto: se espera 'DD DD DDD' (ej. '21 04 090')."
            )
        if self.esta_vacia():
            raise ValidationError(
                "Debe ingresar al menos el nombre, código oficial o diagnóstico de la lesión."
            )

    def esta_vacia(self) -> bool:
        return not (self.nombre_lesion or self.codigo_oficial or self.diagnostico)


@dataclass(slots=True)
class Paciente:
    """Paciente de trauma (archivo JSON: <id>.json)."""

    id: Optional[str] = None
    nombre: str = ""
    edad: int = 0
    rut: str = ""
    dominancia: Dominancia = Dominancia.DIESTRO
    lesion: Optional[Lesion] = None
    delay_qx: int = 0
    fecha_cirugia: Optional[date] = None
    tipo_cx: str = ""
    recovered: bool = False

    def validar(self) -> None:
        """Invariantes del registro; deja el RUT en forma canónica."""
        self.nombre = _require_non_empty(self.nombre, "nombre")

        rut = clean_rut(self.rut)
        if not validate_rut(rut):
            raise ValidationError(
                "RUT inválido. Asegúrese de que sea un RUT válido y correcto (ej. 12.345.678-5)."
            )
        self.rut = rut

        _ensure_in_range(self.edad, "Edad", 0, EDAD_MAXIMA)
        _ensure_in_range(self.delay_qx, "Delay QX (días)", 0, DELAY_QX_MAXIMO)

        if not isinstance(self.dominancia, Dominancia):
            try:
                self.dominancia = Dominancia(self.dominancia)
            except ValueError as exc:
                raise ValidationError(f"Dominancia desconocida: {self.dominancia!r}.") from exc

        self.tipo_cx = _strip_or_empty(self.tipo_cx)
        if self.lesion is not None:
            self.lesion.validar()

    def copia_con_id(self, paciente_id: str) -> "Paciente":
        lesion = replace(self.lesion) if self.lesion is not None else None
        return replace(self, id=paciente_id, lesion=lesion)


def nuevo_paciente_id() -> str:
    return str(uuid.uuid4())
