# domain/rut.py
"""
Limpieza, formato y validación de RUT chilenos.

Formas admitidas en la entrada: "12.345.678-5", "12345678-5", "123456785",
con o sin espacios alrededor y con "k" o "K" como dígito verificador.

- clean_rut: forma canónica de almacenamiento ("12345678-5").
- format_rut: forma de presentación ("12.345.678-5"). No valida.
- validate_rut: formato + dígito verificador (módulo 11).
"""

from __future__ import annotations

import re
from typing import Optional

_SEPARADOR_MILES = "."
_SEPARADOR_DV = "-"

_RUT_RE = re.compile(r"^[0-9]{1,2}\.?[0-9]{3}\.?[0-9]{3}-[0-9K]$")
_RUT_LIMPIO_RE = re.compile(r"^[0-9K]+-[0-9K]$")
_NO_RUT_CHARS_RE = re.compile(r"[^0-9K]")


def clean_rut(value: Optional[str]) -> str:
    """Normaliza un RUT a "CUERPO-DV" en mayúsculas y sin puntos. Idempotente."""
    if value is None:
        return ""
    cleaned = value.strip().upper().replace(_SEPARADOR_MILES, "")
    if len(cleaned) <= 1:
        return cleaned.replace(_SEPARADOR_DV, "")
    if _RUT_LIMPIO_RE.match(cleaned):
        return cleaned
    alfanumerico = _NO_RUT_CHARS_RE.sub("", cleaned)
    if len(alfanumerico) > 1:
        return f"{alfanumerico[:-1]}{_SEPARADOR_DV}{alfanumerico[-1]}"
    return alfanumerico


def format_rut(value: Optional[str]) -> str:
    """
    Devuelve el RUT como "D.DDD.DDD-C".

    Si la entrada no se puede separar en cuerpo + dígito verificador se devuelve sin cambios.
    """
    if value is None or not value.strip():
        return ""
    cleaned = value.strip().upper().replace(_SEPARADOR_MILES, "")
    idx = cleaned.rfind(_SEPARADOR_DV)
    if idx != -1:
        cuerpo, dv = cleaned[:idx], cleaned[idx + 1 :]
    else:
        if len(cleaned) < 2:
            return value
        cuerpo, dv = cleaned[:-1], cleaned[-1]
    if not cuerpo or not dv:
        return value
    return f"{_agrupar_miles(cuerpo)}{_SEPARADOR_DV}{dv}"


def validate_rut(value: Optional[str]) -> bool:
    """True si el RUT tiene formato válido y su dígito verificador es correcto."""
    if value is None or not value.strip():
        return False

    rut = value.strip().upper().replace(_SEPARADOR_MILES, "")
    if _SEPARADOR_DV not in rut:
        if len(rut) <= 1:
            return False
        rut = f"{rut[:-1]}{_SEPARADOR_DV}{rut[-1]}"

    if not _RUT_RE.match(rut):
        return False

    cuerpo, dv = rut.rsplit(_SEPARADOR_DV, 1)
    try:
        numero = int(cuerpo)
    except ValueError:
        return False
    return calcular_dv(numero) == dv


def calcular_dv(numero: int) -> str:
    """
    Dígito verificador módulo 11 de un cuerpo de RUT.

    Pesos 9..4 cíclicos de derecha a izquierda sobre una suma que parte en 1;
    equivale a la tabla estándar 11 - (suma mod 11) con 11 -> "0" y 10 -> "K".
    """
    if numero < 0:
        raise ValueError("El cuerpo del RUT no puede ser negativo.")
    suma = 1
    posicion = 0
    while numero:
        numero, digito = divmod(numero, 10)
        suma = (suma + digito * (9 - posicion % 6)) % 11
        posicion += 1
    return str(suma - 1) if suma else "K"


def _agrupar_miles(cuerpo: str) -> str:
    grupos: list[str] = []
    while len(cuerpo) > 3:
        grupos.insert(0, cuerpo[-3:])
        cuerpo = cuerpo[:-3]
    grupos.insert(0, cuerpo)
    return _SEPARADOR_MILES.join(grupos)
