from __future__ import annotations
from enum import Enum


class Dominancia(str, Enum):
    DIESTRO = "Diestro"
    ZURDO = "Zurdo"
    AMBIDIESTRO = "Ambidiestro"


class CriterioBusqueda(str, Enum):
    NOMBRE = "NOMBRE"
    RUT = "RUT"
    CODIGO_LESION = "CODIGO_LESION"
    DIAGNOSTICO = "DIAGNOSTICO"
    FECHA_CIRUGIA = "FECHA_CIRUGIA"
