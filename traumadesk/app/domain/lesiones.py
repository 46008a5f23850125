# domain/lesiones.py
"""
Registro de códigos oficiales de lesión (arancel MLE, sección 21 04).

El registro se construye una sola vez al arrancar (build_lesion_registry) y se
inyecta a los consumidores a través del contenedor. Es de solo lectura.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

_CODIGO_OFICIAL_RE = re.compile(r"^[0-9]{2} [0-9]{2} [0-9]{3}$")

_CODIGOS_SECCION_21_04: dict[str, str] = {
    "21 04 090": "AMPUTACIÓN PULPEJOS (PLASTÍA KUTLER O SIMILARES)",
    "21 04 091": "CONTRACTURA DUPUYTREN, TRAT. QUIR., CADA TIEMPO",
    "21 04 092": (
        "CONTUSIÓN-COMPRESIÓN GRAVE MANO, TRAT. QUIR. INCLUYE INCISIONES LIBERADORAS Y/O FASCIOTOMÍA "
        "Y/O ESCARECTOMÍA Y/O INJERTOS PIEL INMEDIATOS Y SÍNTESIS PERCUTÁNEA"
    ),
    "21 04 093": "DEDOS EN GATILLO, TRAT. QUIR., CUALQUIER NÚMERO",
    "21 04 094": "FLEGMÓN MANO, TRAT. QUIR.",
    "21 04 095": "LUXOFRACTURA METACARPOFALÁNGICA O INTERFALÁNGICA, TRAT. QUIR.",
    "21 04 096": (
        "MANO REUMÁTICA EN RÁFAGA: TRASLOCACIONES TENDINOSAS, PLASTÍAS CAPSULARES, TENOTOMÍAS, "
        "INMOVILIZACIÓN POSTOPERATORIA"
    ),
    "21 04 097": "MANO REUMÁTICA: IMPLANT. SILASTIC, CUALQ. NÚMERO (PROC. AUT.)",
    "21 04 098": "MUTILACIÓN GRAVE MANO, ASEO. QUIR. COMPLETO C/S OSTEOSÍNTESIS, C/S INJERTOS",
    "21 04 099": "OSTEOSÍNTESIS METACARPIANAS O DE FALANGES, CUALQUIER TÉCNICA",
    "21 04 100": "PANADIZO, TRAT. QUIR.",
    "21 04 101": "PULGARIZACIÓN DEDO (ÍNDICE O ANULAR)",
    "21 04 102": "REIMPLANTE MANO O DEDO(S)",
    "21 04 103": "REPARACIÓN FLEXORES: PRIMER TIEMPO ESPACIADOR SILASTIC",
    "21 04 104": "REPARACIÓN NERVIO DIGITAL CON INJERTO INTERFASCICULAR: CUALQUIER NÚMERO",
    "21 04 105": "RUPTURAS CERRADAS CÁPSULO-LIGAMENT. O TENDINOSAS, TRAT. QUIR. MANO",
    "21 04 106": "SUTURA NERVIO(S) DIGITAL(ES); MICROCIRUGÍA",
    "21 04 107": "TENORRAFIA EXTENSORES MANO",
    "21 04 108": "TENORRAFIA O INJERTOS FLEXORES MANO",
    "21 04 109": "TENOSINOVITIS SÉPTICA, TRAT. QUIR. MANO",
    "21 04 110": "TRASPLANTE MICROQUIRÚRGICO PARA PULGAR",
    "21 04 111": "TRANSPOSICIONES TENDINOSAS FLEXORAS O EXTENSORAS MANO",
    "21 04 203": (
        "TRATAMIENTO QUIR., DEDOS EN GATILLO, CUALQUIER NÚMERO TÉC. WALANT "
        "(ANESTESIA LOCAL SIN TORNIQUETE)"
    ),
}


def es_codigo_oficial(codigo: Optional[str]) -> bool:
    """True si el código tiene el formato "DD DD DDD"."""
    return bool(codigo) and bool(_CODIGO_OFICIAL_RE.match(codigo))


def componer_codigo(parte1: str, parte2: str, parte3: str) -> str:
    """
    Une las tres partes del código tal como se capturan en el formulario.

    Devuelve "" si las tres están vacías. No valida el formato.
    """
    partes = [(parte1 or "").strip(), (parte2 or "").strip(), (parte3 or "").strip()]
    if not any(partes):
        return ""
    return " ".join(partes)


@dataclass(frozen=True)
class LesionCodeRegistry:
    _codigos: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, codigos: Mapping[str, str]) -> "LesionCodeRegistry":
        return cls(MappingProxyType(dict(codigos)))

    def get(self, codigo: Optional[str]) -> Optional[str]:
        """Nombre de la lesión para un código exacto, o None."""
        if not codigo:
            return None
        return self._codigos.get(codigo.strip())

    def contiene(self, codigo: Optional[str]) -> bool:
        return self.get(codigo) is not None

    def search(self, termino: Optional[str]) -> dict[str, str]:
        """
        Códigos cuyo código o nombre contienen el término (sin distinguir mayúsculas).

        Con término vacío devuelve una copia del registro completo.
        """
        if termino is None or not termino.strip():
            return dict(self._codigos)
        needle = termino.strip().casefold()
        return {
            codigo: nombre
            for codigo, nombre in self._codigos.items()
            if needle in codigo.casefold() or needle in nombre.casefold()
        }

    def __len__(self) -> int:
        return len(self._codigos)

    def __iter__(self) -> Iterator[str]:
        return iter(self._codigos)


def build_lesion_registry() -> LesionCodeRegistry:
    return LesionCodeRegistry.from_mapping(_CODIGOS_SECCION_21_04)
