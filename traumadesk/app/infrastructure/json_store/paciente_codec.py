"""
Conversión Paciente <-> dict JSON.

Las claves son las que ya usan los archivos existentes del directorio de datos
(camelCase: delayQx, fechaCirugia, tipoDeCx, lesion.nombreLesion...).
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.domain.modelos import Lesion, Paciente


def paciente_to_dict(paciente: Paciente) -> dict[str, Any]:
    return {
        "id": paciente.id,
        "nombre": paciente.nombre,
        "edad": paciente.edad,
        "rut": paciente.rut,
        "dominancia": paciente.dominancia.value,
        "lesion": _lesion_to_dict(paciente.lesion),
        "delayQx": paciente.delay_qx,
        "fechaCirugia": format_iso_date(paciente.fecha_cirugia),
        "tipoDeCx": paciente.tipo_cx,
        "recovered": paciente.recovered,
    }


def paciente_from_dict(data: dict[str, Any]) -> Paciente:
    """
    Reconstruye un Paciente desde el JSON almacenado.

    Lanza ValueError/KeyError/TypeError si el contenido no tiene la forma esperada.
    """
    if not isinstance(data, dict):
        raise ValueError("Se esperaba un objeto JSON.")
    paciente_id = data["id"]
    if not isinstance(paciente_id, str) or not paciente_id:
        raise ValueError("Paciente sin id.")
    return Paciente(
        id=paciente_id,
        nombre=str(data.get("nombre") or ""),
        edad=_as_int(data.get("edad"), "edad"),
        rut=str(data.get("rut") or ""),
        dominancia=Dominancia(data.get("dominancia") or Dominancia.DIESTRO.value),
        lesion=_lesion_from_dict(data.get("lesion")),
        delay_qx=_as_int(data.get("delayQx"), "delayQx"),
        fecha_cirugia=parse_iso_date(data.get("fechaCirugia")),
        tipo_cx=str(data.get("tipoDeCx") or ""),
        recovered=bool(data.get("recovered", False)),
    )


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


def format_iso_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _lesion_to_dict(lesion: Optional[Lesion]) -> Optional[dict[str, str]]:
    if lesion is None:
        return None
    return {
        "nombreLesion": lesion.nombre_lesion,
        "codigoOficial": lesion.codigo_oficial,
        "diagnostico": lesion.diagnostico,
    }


def _lesion_from_dict(data: Any) -> Optional[Lesion]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError("Campo 'lesion' inválido: se esperaba objeto JSON.")
    return Lesion(
        nombre_lesion=str(data.get("nombreLesion") or ""),
        codigo_oficial=str(data.get("codigoOficial") or ""),
        diagnostico=str(data.get("diagnostico") or ""),
    )


def _as_int(value: Any, field_name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"Campo '{field_name}' inválido.")
    return int(value)
