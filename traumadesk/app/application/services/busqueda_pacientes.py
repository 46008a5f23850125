"""
Búsqueda de pacientes por recorrido lineal del almacén.

No hay índice materializado: cada búsqueda relee todos los pacientes, de modo
que los resultados reflejan siempre el estado actual en disco.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Callable, Optional

from traumadesk.app.application.ports.pacientes_store_port import PacientesStorePort
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.common.search_utils import compact_token, contains_casefold, normalize_search_text
from traumadesk.app.domain.enums import CriterioBusqueda
from traumadesk.app.domain.exceptions import ValidationError
from traumadesk.app.domain.modelos import Paciente
from traumadesk.app.domain.rut import clean_rut

LOGGER = get_logger(__name__)

# Solo dígitos, K y separadores: "Kutler" o "Ana 2" no se comparan contra el RUT.
_TERMINO_RUT_RE = re.compile(r"[0-9kK.\-\s]+")


class BusquedaPacientesService:
    def __init__(self, store: PacientesStorePort) -> None:
        self._store = store

    def listar(self, *, incluir_recuperados: bool = True) -> list[Paciente]:
        pacientes = self._store.list_all()
        if incluir_recuperados:
            return pacientes
        return [p for p in pacientes if not p.recovered]

    def search_all(self, termino: Optional[str]) -> list[Paciente]:
        """
        Busca el término en nombre, RUT, nombre de lesión y código de lesión.

        Sin distinguir mayúsculas. El RUT se compara en forma limpia en ambos lados.
        Término vacío devuelve todos los pacientes.
        """
        pacientes = self._store.list_all()
        texto = normalize_search_text(termino)
        if texto is None:
            return pacientes
        resultados = [p for p in pacientes if _coincide_texto_libre(p, texto)]
        LOGGER.info("busqueda_pacientes", extra={"criterio": "texto_libre", "resultados": len(resultados)})
        return resultados

    def search_by_field(self, criterio: CriterioBusqueda | str, valor: str | date | None) -> list[Paciente]:
        """
        Filtra por un único criterio.

        - NOMBRE / DIAGNOSTICO: subcadena sin distinguir mayúsculas.
        - RUT / CODIGO_LESION: subcadena ignorando espacios y puntuación.
        - FECHA_CIRUGIA: igualdad exacta de fecha (date o "AAAA-MM-DD").
        """
        criterio = _parse_criterio(criterio)
        pacientes = self._store.list_all()

        if criterio is CriterioBusqueda.FECHA_CIRUGIA:
            fecha = _parse_fecha(valor)
            if fecha is None:
                return []
            resultados = [p for p in pacientes if p.fecha_cirugia == fecha]
        else:
            texto = normalize_search_text(valor if isinstance(valor, str) else None)
            if texto is None:
                return pacientes
            predicado = _PREDICADOS[criterio]
            resultados = [p for p in pacientes if predicado(p, texto)]

        LOGGER.info("busqueda_pacientes", extra={"criterio": criterio.value, "resultados": len(resultados)})
        return resultados


def _coincide_texto_libre(paciente: Paciente, texto: str) -> bool:
    if contains_casefold(paciente.nombre, texto) or _por_rut(paciente, texto):
        return True
    lesion = paciente.lesion
    if lesion is None:
        return False
    return contains_casefold(lesion.nombre_lesion, texto) or contains_casefold(lesion.codigo_oficial, texto)


def _por_nombre(paciente: Paciente, texto: str) -> bool:
    return contains_casefold(paciente.nombre, texto)


def _parece_rut(texto: str) -> bool:
    return bool(_TERMINO_RUT_RE.fullmatch(texto)) and any(c.isdigit() for c in texto)


def _por_rut(paciente: Paciente, texto: str) -> bool:
    # "12.345.678-5" y "12345678-5" deben coincidir; también cuerpos parciales como "1234".
    if not _parece_rut(texto):
        return False
    rut = clean_rut(paciente.rut)
    rut_buscado = clean_rut(texto)
    if rut_buscado and contains_casefold(rut, rut_buscado):
        return True
    needle = compact_token(texto)
    return bool(needle) and needle in compact_token(rut)


def _por_codigo_lesion(paciente: Paciente, texto: str) -> bool:
    if paciente.lesion is None or not paciente.lesion.codigo_oficial:
        return False
    needle = compact_token(texto)
    return bool(needle) and needle in compact_token(paciente.lesion.codigo_oficial)


def _por_diagnostico(paciente: Paciente, texto: str) -> bool:
    return paciente.lesion is not None and contains_casefold(paciente.lesion.diagnostico, texto)


_PREDICADOS: dict[CriterioBusqueda, Callable[[Paciente, str], bool]] = {
    CriterioBusqueda.NOMBRE: _por_nombre,
    CriterioBusqueda.RUT: _por_rut,
    CriterioBusqueda.CODIGO_LESION: _por_codigo_lesion,
    CriterioBusqueda.DIAGNOSTICO: _por_diagnostico,
}


def _parse_criterio(criterio: CriterioBusqueda | str) -> CriterioBusqueda:
    if isinstance(criterio, CriterioBusqueda):
        return criterio
    try:
        return CriterioBusqueda(str(criterio).strip().upper())
    except ValueError as exc:
        raise ValidationError(f"Criterio de búsqueda desconocido: {criterio!r}.") from exc


def _parse_fecha(valor: str | date | None) -> Optional[date]:
    if valor is None:
        return None
    if isinstance(valor, date):
        return valor
    texto = valor.strip()
    if not texto:
        return None
    try:
        return date.fromisoformat(texto)
    except ValueError as exc:
        raise ValidationError(f"Fecha de cirugía inválida: {valor!r} (use AAAA-MM-DD).") from exc
