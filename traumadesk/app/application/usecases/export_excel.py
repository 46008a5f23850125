from __future__ import annotations

from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from traumadesk.app.application.services.presentacion_pacientes import FilaPaciente, fila_listado
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.domain.exceptions import StorageError
from traumadesk.app.domain.modelos import Paciente

LOGGER = get_logger(__name__)

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(fill_type="solid", start_color="808080", end_color="808080")
_HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center")
_DATA_ALIGNMENT = Alignment(wrap_text=True, vertical="top")
_MAX_COLUMN_WIDTH = 60


class ExportPacientesExcel:
    FILE_NAME = "ReportePacientes.xlsx"
    SHEET_TITLE = "Pacientes Trauma"
    COLUMNS = (
        "RUT",
        "Nombre",
        "Código Lesión",
        "Nombre Lesión",
        "Diagnóstico",
        "Fecha Cirugía",
        "Delay QX (días)",
        "Tipo de CX",
        "Estado Recuperación",
    )

    def execute(self, pacientes: Iterable[Paciente], output_path: str | Path) -> Path:
        """
        Escribe el reporte .xlsx y devuelve la ruta final.

        output_path puede ser un directorio existente (se usa FILE_NAME) o una ruta
        de archivo; la extensión .xlsx se añade si falta.
        """
        output_file = _resolve_output_file(output_path, self.FILE_NAME)
        rows = [self._to_row(fila_listado(p)) for p in pacientes]

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.SHEET_TITLE
        sheet.append(list(self.COLUMNS))
        for cell in sheet[1]:
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL
            cell.alignment = _HEADER_ALIGNMENT
        for row in rows:
            sheet.append(list(row))
        for data_row in sheet.iter_rows(min_row=2):
            for cell in data_row:
                cell.alignment = _DATA_ALIGNMENT
        _autosize_columns(sheet, self.COLUMNS, rows)

        try:
            workbook.save(output_file)
        except OSError as exc:
            raise StorageError(f"Error al exportar el reporte a Excel: {exc}") from exc
        LOGGER.info("export_excel_ok", extra={"archivo": output_file.name, "total": len(rows)})
        return output_file

    def _to_row(self, fila: FilaPaciente) -> tuple[object, ...]:
        return (
            fila.rut,
            fila.nombre,
            fila.codigo_lesion,
            fila.nombre_lesion,
            fila.diagnostico,
            fila.fecha_cirugia,
            fila.delay_qx,
            fila.tipo_cx,
            fila.estado,
        )


def _resolve_output_file(output_path: str | Path, file_name: str) -> Path:
    path = Path(output_path)
    if path.is_dir():
        return path / file_name
    if path.suffix.lower() != ".xlsx":
        path = path.with_name(f"{path.name}.xlsx")
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _autosize_columns(sheet, columns: tuple[str, ...], rows: list[tuple[object, ...]]) -> None:
    for idx, header in enumerate(columns):
        width = max([len(header)] + [len(str(row[idx])) for row in rows])
        sheet.column_dimensions[get_column_letter(idx + 1)].width = min(width + 2, _MAX_COLUMN_WIDTH)
