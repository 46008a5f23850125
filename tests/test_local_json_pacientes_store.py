from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from traumadesk.app.domain.exceptions import StorageError, ValidationError
from traumadesk.app.domain.modelos import Lesion
from traumadesk.app.infrastructure.json_store.local_json_pacientes_store import LocalJsonPacientesStore


def test_create_assigns_id_and_round_trips(store: LocalJsonPacientesStore, paciente_factory, data_dir: Path) -> None:
    original = paciente_factory(recovered=True)

    creado = store.create(original)

    assert creado.id
    assert original.id is None
    assert creado.recovered is False
    assert (data_dir / f"{creado.id}.json").is_file()

    leido = store.get(creado.id)
    assert leido == creado
    assert leido.rut == "12345678-5"
    assert leido.fecha_cirugia == date(2024, 5, 17)
    assert leido.lesion == Lesion("FLEGMÓN MANO, TRAT. QUIR.", "21 04 094", "Flegmón palmar derecho")


def test_create_generates_distinct_ids(store: LocalJsonPacientesStore, paciente_factory) -> None:
    primero = store.create(paciente_factory())
    segundo = store.create(paciente_factory())

    assert primero.id != segundo.id
    assert len(store.list_all()) == 2


def test_create_rejects_invalid_paciente_without_writing(
    store: LocalJsonPacientesStore, paciente_factory, data_dir: Path
) -> None:
    with pytest.raises(ValidationError):
        store.create(paciente_factory(rut="12345678-4"))

    assert store.list_all() == []
    assert not data_dir.exists() or not any(data_dir.iterdir())


def test_file_uses_camel_case_keys(store: LocalJsonPacientesStore, paciente_factory, data_dir: Path) -> None:
    creado = store.create(paciente_factory())

    data = json.loads((data_dir / f"{creado.id}.json").read_text(encoding="utf-8"))

    assert set(data) == {
        "id",
        "nombre",
        "edad",
        "rut",
        "dominancia",
        "lesion",
        "delayQx",
        "fechaCirugia",
        "tipoDeCx",
        "recovered",
    }
    assert data["fechaCirugia"] == "2024-05-17"
    assert data["dominancia"] == "Diestro"
    assert data["lesion"]["codigoOficial"] == "21 04 094"


def test_get_missing_returns_none(store: LocalJsonPacientesStore) -> None:
    assert store.get("no-existe") is None


def test_get_corrupt_file_raises_storage_error(store: LocalJsonPacientesStore, data_dir: Path) -> None:
    data_dir.mkdir(parents=True)
    (data_dir / "roto.json").write_text("{no es json", encoding="utf-8")

    with pytest.raises(StorageError):
        store.get("roto")


def test_list_all_missing_directory_is_empty(tmp_path: Path) -> None:
    assert LocalJsonPacientesStore(tmp_path / "no-existe").list_all() == []


def test_list_all_skips_corrupt_and_foreign_files(
    store: LocalJsonPacientesStore, seed_pacientes, data_dir: Path, caplog
) -> None:
    (data_dir / "roto.json").write_text("[1, 2", encoding="utf-8")
    (data_dir / "lista.json").write_text("[]", encoding="utf-8")
    (data_dir / "notas.txt").write_text("no es un paciente", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        pacientes = store.list_all()

    assert {p.id for p in pacientes} == {p.id for p in seed_pacientes.values()}
    corruptos = [r for r in caplog.records if r.getMessage() == "paciente_archivo_corrupto"]
    assert len(corruptos) == 2


def test_update_overwrites_existing_file(store: LocalJsonPacientesStore, seed_pacientes) -> None:
    luis = store.get(seed_pacientes["luis"].id)
    luis.edad = 59
    luis.recovered = True
    luis.lesion.diagnostico = "Control a las 6 semanas"

    store.update(luis)

    leido = store.get(luis.id)
    assert leido.edad == 59
    assert leido.recovered is True
    assert leido.lesion.diagnostico == "Control a las 6 semanas"
    assert len(store.list_all()) == 3


def test_update_without_previous_file_creates_it_with_warning(
    store: LocalJsonPacientesStore, paciente_factory, caplog
) -> None:
    paciente = paciente_factory(id="fantasma")

    with caplog.at_level(logging.WARNING):
        store.update(paciente)

    assert store.get("fantasma") is not None
    assert any(r.getMessage() == "paciente_update_sin_archivo_previo" for r in caplog.records)


def test_update_requires_id(store: LocalJsonPacientesStore, paciente_factory) -> None:
    with pytest.raises(ValidationError):
        store.update(paciente_factory())


def test_delete_then_get_returns_none(store: LocalJsonPacientesStore, seed_pacientes) -> None:
    ana_id = seed_pacientes["ana"].id

    store.delete(ana_id)

    assert store.get(ana_id) is None
    assert len(store.list_all()) == 2


def test_delete_missing_is_noop(store: LocalJsonPacientesStore, seed_pacientes) -> None:
    store.delete("no-existe")

    assert len(store.list_all()) == 3


@pytest.mark.parametrize("paciente_id", ["", "../fuera", "a/b", "a\\b", ".oculto"])
def test_invalid_ids_are_rejected(store: LocalJsonPacientesStore, paciente_id: str) -> None:
    with pytest.raises(ValidationError):
        store.get(paciente_id)
    with pytest.raises(ValidationError):
        store.delete(paciente_id)


def test_create_in_unwritable_location_raises_storage_error(tmp_path: Path, paciente_factory) -> None:
    bloqueo = tmp_path / "datos"
    bloqueo.write_text("no es un directorio", encoding="utf-8")
    store = LocalJsonPacientesStore(bloqueo)

    with pytest.raises(StorageError):
        store.create(paciente_factory())

    assert bloqueo.read_text(encoding="utf-8") == "no es un directorio"
    assert list(tmp_path.iterdir()) == [bloqueo]


def test_update_in_unwritable_location_raises_storage_error(tmp_path: Path, paciente_factory) -> None:
    bloqueo = tmp_path / "datos"
    bloqueo.write_text("no es un directorio", encoding="utf-8")
    store = LocalJsonPacientesStore(bloqueo)

    with pytest.raises(StorageError):
        store.update(paciente_factory(id="p1"))

    assert bloqueo.read_text(encoding="utf-8") == "no es un directorio"
    assert list(tmp_path.iterdir()) == [bloqueo]
