from __future__ import annotations

import pytest

from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.domain.exceptions import ValidationError
from traumadesk.app.domain.modelos import Lesion, Paciente


def test_validar_normalizes_rut_and_text_fields(paciente_factory) -> None:
    paciente = paciente_factory(nombre="  Ana Rojas ", rut="12.345.678-5", tipo_cx="  Osteosíntesis ")

    paciente.validar()

    assert paciente.nombre == "Ana Rojas"
    assert paciente.rut == "12345678-5"
    assert paciente.tipo_cx == "Osteosíntesis"


@pytest.mark.parametrize(
    ("overrides", "fragmento"),
    [
        ({"nombre": "   "}, "nombre"),
        ({"rut": "12345678-4"}, "RUT"),
        ({"rut": ""}, "RUT"),
        ({"edad": -1}, "Edad"),
        ({"edad": 121}, "Edad"),
        ({"delay_qx": 366}, "Delay"),
        ({"delay_qx": -2}, "Delay"),
        ({"dominancia": "Otro"}, "Dominancia"),
    ],
)
def test_validar_rejects_invalid_fields(paciente_factory, overrides, fragmento) -> None:
    paciente = paciente_factory(**overrides)

    with pytest.raises(ValidationError, match=fragmento):
        paciente.validar()


def test_validar_accepts_range_limits(paciente_factory) -> None:
    paciente_factory(edad=0, delay_qx=0).validar()
    paciente_factory(edad=120, delay_qx=365).validar()


def test_validar_coerces_dominancia_text(paciente_factory) -> None:
    paciente = paciente_factory(dominancia="Zurdo")

    paciente.validar()

    assert paciente.dominancia is Dominancia.ZURDO


def test_lesion_code_must_follow_official_format(paciente_factory) -> None:
    paciente = paciente_factory(lesion=Lesion(codigo_oficial="21 4 90"))

    with pytest.raises(ValidationError, match="Código de lesión"):
        paciente.validar()


def test_lesion_needs_at_least_one_field(paciente_factory) -> None:
    paciente = paciente_factory(lesion=Lesion(nombre_lesion=" ", codigo_oficial="", diagnostico=""))

    with pytest.raises(ValidationError, match="al menos"):
        paciente.validar()


def test_paciente_without_lesion_is_valid(paciente_factory) -> None:
    paciente = paciente_factory(lesion=None)

    paciente.validar()

    assert paciente.lesion is None


def test_lesion_structural_equality() -> None:
    assert Lesion("A", "21 04 090", "d") == Lesion("A", "21 04 090", "d")
    assert Lesion("A", "21 04 090", "d") != Lesion("A", "21 04 091", "d")


def test_new_paciente_defaults() -> None:
    paciente = Paciente()

    assert paciente.id is None
    assert paciente.recovered is False
    assert paciente.lesion is None
    assert paciente.dominancia is Dominancia.DIESTRO
