from __future__ import annotations

import pytest

from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.infrastructure.json_store.paciente_codec import paciente_from_dict, paciente_to_dict


def test_from_dict_tolerates_missing_optional_fields() -> None:
    paciente = paciente_from_dict({"id": "abc", "nombre": "Ana", "rut": "12345678-5", "lesion": None})

    assert paciente.id == "abc"
    assert paciente.edad == 0
    assert paciente.delay_qx == 0
    assert paciente.dominancia is Dominancia.DIESTRO
    assert paciente.fecha_cirugia is None
    assert paciente.lesion is None
    assert paciente.recovered is False


def test_to_dict_writes_null_for_missing_lesion_and_date(paciente_factory) -> None:
    data = paciente_to_dict(paciente_factory(id="abc", lesion=None, fecha_cirugia=None))

    assert data["lesion"] is None
    assert data["fechaCirugia"] is None


@pytest.mark.parametrize(
    "data",
    [
        {"nombre": "Sin id"},
        {"id": ""},
        {"id": "x", "edad": "muchos"},
        {"id": "x", "edad": True},
        {"id": "x", "dominancia": "Otro"},
        {"id": "x", "fechaCirugia": "17/05/2024"},
        {"id": "x", "lesion": "texto"},
    ],
)
def test_from_dict_rejects_malformed_content(data) -> None:
    with pytest.raises((ValueError, KeyError, TypeError)):
        paciente_from_dict(data)
