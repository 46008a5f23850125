from __future__ import annotations

import difflib
import pprint
from datetime import date
from pathlib import Path
from typing import Any, Callable

import pytest

from traumadesk.app.container import AppContainer, build_container
from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.domain.modelos import Lesion, Paciente
from traumadesk.app.infrastructure.json_store.local_json_pacientes_store import LocalJsonPacientesStore


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "TraumaPatientData"


@pytest.fixture()
def store(data_dir: Path) -> LocalJsonPacientesStore:
    return LocalJsonPacientesStore(data_dir)


@pytest.fixture()
def container(data_dir: Path) -> AppContainer:
    return build_container(data_dir)


@pytest.fixture()
def paciente_factory() -> Callable[..., Paciente]:
    def _build(**overrides: Any) -> Paciente:
        values: dict[str, Any] = {
            "nombre": "Ana Rojas",
            "edad": 34,
            "rut": "12.345.678-5",
            "dominancia": Dominancia.DIESTRO,
            "lesion": Lesion(
                nombre_lesion="FLEGMÓN MANO, TRAT. QUIR.",
                codigo_oficial="21 04 094",
                diagnostico="Flegmón palmar derecho",
            ),
            "delay_qx": 3,
            "fecha_cirugia": date(2024, 5, 17),
            "tipo_cx": "Aseo quirúrgico",
        }
        values.update(overrides)
        return Paciente(**values)

    return _build


@pytest.fixture()
def seed_pacientes(store: LocalJsonPacientesStore, paciente_factory) -> dict[str, Paciente]:
    ana = store.create(paciente_factory())
    luis = store.create(
        paciente_factory(
            nombre="Luis Soto",
            edad=58,
            rut="7.654.321-6",
            dominancia=Dominancia.ZURDO,
            lesion=Lesion(
                nombre_lesion="TENORRAFIA EXTENSORES MANO",
                codigo_oficial="21 04 107",
                diagnostico="Sección tendón extensor índice",
            ),
            fecha_cirugia=date(2024, 6, 2),
        )
    )
    marta = store.create(
        paciente_factory(
            nombre="Marta Kühn",
            edad=71,
            rut="6000000-k",
            dominancia=Dominancia.AMBIDIESTRO,
            lesion=None,
            fecha_cirugia=None,
            tipo_cx="",
        )
    )
    return {"ana": ana, "luis": luis, "marta": marta}


@pytest.fixture()
def assert_expected_actual():
    def _assert(expected: Any, actual: Any, *, message: str) -> None:
        expected_str = pprint.pformat(expected, width=120)
        actual_str = pprint.pformat(actual, width=120)
        diff = "\n".join(
            difflib.unified_diff(
                expected_str.splitlines(),
                actual_str.splitlines(),
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )
        assert expected == actual, (
            f"{message}\nExpected:\n{expected_str}\nActual:\n{actual_str}\nDiff:\n{diff}"
        )

    return _assert
