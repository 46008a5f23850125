from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from traumadesk.app.domain.modelos import Paciente
from traumadesk.app.domain.rut import format_rut

PLACEHOLDER = "N/A"
ESTADO_RECUPERADO = "Recuperado"
ESTADO_ACTIVO = "Activo"


@dataclass(frozen=True, slots=True)
class FilaPaciente:
    id: str
    nombre: str
    edad: int
    rut: str
    dominancia: str
    nombre_lesion: str
    codigo_lesion: str
    diagnostico: str
    delay_qx: int
    fecha_cirugia: str
    tipo_cx: str
    estado: str


def fila_listado(paciente: Paciente) -> FilaPaciente:
    """Valores de presentación de un paciente para tablas y reportes."""
    lesion = paciente.lesion
    return FilaPaciente(
        id=paciente.id or "",
        nombre=paciente.nombre,
        edad=paciente.edad,
        rut=format_rut(paciente.rut),
        dominancia=paciente.dominancia.value,
        nombre_lesion=lesion.nombre_lesion if lesion is not None else PLACEHOLDER,
        codigo_lesion=lesion.codigo_oficial if lesion is not None else PLACEHOLDER,
        diagnostico=lesion.diagnostico if lesion is not None else PLACEHOLDER,
        delay_qx=paciente.delay_qx,
        fecha_cirugia=formatear_fecha(paciente.fecha_cirugia),
        tipo_cx=paciente.tipo_cx,
        estado=estado_recuperacion(paciente),
    )


def formatear_fecha(value: Optional[date]) -> str:
    return value.strftime("%d-%m-%Y") if value else PLACEHOLDER


def estado_recuperacion(paciente: Paciente) -> str:
    return ESTADO_RECUPERADO if paciente.recovered else ESTADO_ACTIVO
