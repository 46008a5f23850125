from __future__ import annotations

from datetime import date

import pytest

from traumadesk.app.application.services.busqueda_pacientes import BusquedaPacientesService
from traumadesk.app.domain.enums import CriterioBusqueda
from traumadesk.app.domain.exceptions import ValidationError


@pytest.fixture()
def busqueda(store) -> BusquedaPacientesService:
    return BusquedaPacientesService(store)


def _nombres(pacientes) -> set[str]:
    return {p.nombre for p in pacientes}


def test_search_all_blank_returns_everything(busqueda, store, seed_pacientes) -> None:
    todos = {p.id for p in store.list_all()}

    assert {p.id for p in busqueda.search_all("")} == todos
    assert {p.id for p in busqueda.search_all("   ")} == todos
    assert {p.id for p in busqueda.search_all(None)} == todos


def test_search_all_by_name_is_case_insensitive(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_all("ana")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_all("SOTO")) == {"Luis Soto"}


def test_search_all_rut_with_or_without_dots(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_all("12.345.678-5")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_all("12345678-5")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_all("12345678")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_all("6000000-k")) == {"Marta Kühn"}


def test_search_all_by_lesion_name_or_code(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_all("tenorrafia")) == {"Luis Soto"}
    assert _nombres(busqueda.search_all("21 04 094")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_all("mano")) == {"Ana Rojas", "Luis Soto"}


def test_search_all_without_match_is_empty(busqueda, seed_pacientes) -> None:
    assert busqueda.search_all("zzz") == []


def test_listar_can_hide_recovered(busqueda, store, seed_pacientes) -> None:
    luis = store.get(seed_pacientes["luis"].id)
    luis.recovered = True
    store.update(luis)

    assert _nombres(busqueda.listar()) == {"Ana Rojas", "Luis Soto", "Marta Kühn"}
    assert _nombres(busqueda.listar(incluir_recuperados=False)) == {"Ana Rojas", "Marta Kühn"}


def test_search_by_nombre_blank_returns_everything(busqueda, seed_pacientes) -> None:
    assert len(busqueda.search_by_field(CriterioBusqueda.NOMBRE, "  ")) == 3
    assert _nombres(busqueda.search_by_field("nombre", "marta")) == {"Marta Kühn"}


def test_search_by_rut_ignores_formatting(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.RUT, "7.654.321-6")) == {"Luis Soto"}
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.RUT, "7654321")) == {"Luis Soto"}


def test_search_by_codigo_lesion_ignores_spacing(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.CODIGO_LESION, "2104094")) == {"Ana Rojas"}
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.CODIGO_LESION, "21 04")) == {"Ana Rojas", "Luis Soto"}


def test_search_by_diagnostico_skips_pacientes_without_lesion(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.DIAGNOSTICO, "TENDÓN")) == {"Luis Soto"}
    assert "Marta Kühn" not in _nombres(busqueda.search_by_field(CriterioBusqueda.DIAGNOSTICO, "a"))


def test_search_by_fecha_cirugia_exact_match(busqueda, seed_pacientes) -> None:
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.FECHA_CIRUGIA, "2024-06-02")) == {"Luis Soto"}
    assert _nombres(busqueda.search_by_field(CriterioBusqueda.FECHA_CIRUGIA, date(2024, 5, 17))) == {"Ana Rojas"}
    assert busqueda.search_by_field(CriterioBusqueda.FECHA_CIRUGIA, date(2023, 1, 1)) == []
    assert busqueda.search_by_field(CriterioBusqueda.FECHA_CIRUGIA, "") == []


def test_search_by_fecha_cirugia_rejects_bad_date(busqueda, seed_pacientes) -> None:
    with pytest.raises(ValidationError):
        busqueda.search_by_field(CriterioBusqueda.FECHA_CIRUGIA, "2024-13-01")


def test_search_by_unknown_criterio(busqueda, seed_pacientes) -> None:
    with pytest.raises(ValidationError):
        busqueda.search_by_field("EDAD", "34")


def test_search_reflects_latest_disk_state(busqueda, store, seed_pacientes) -> None:
    store.delete(seed_pacientes["ana"].id)

    assert busqueda.search_all("ana") == []


def test_search_all_words_are_not_matched_against_rut_check_digit(busqueda, seed_pacientes) -> None:
    assert busqueda.search_all("Kutler") == []
    assert busqueda.search_all("Ana 2") == []
    assert busqueda.search_by_field(CriterioBusqueda.RUT, "K") == []
