from __future__ import annotations

from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem

from traumadesk.app.application.services.presentacion_pacientes import FilaPaciente

RECOVERED_FOREGROUND = QBrush(QColor("#7a7a7a"))
RECOVERED_BACKGROUND = QBrush(QColor("#eef6ee"))

COLUMNAS_LISTADO = (
    "ID",
    "Nombre",
    "Edad",
    "RUT",
    "Dominancia",
    "Lesión (Nombre)",
    "Código Lesión",
    "Diagnóstico",
    "Delay QX",
    "Fecha Cirugía",
    "Tipo de CX",
    "Estado",
)


def set_item(table: QTableWidget, row: int, col: int, value: object) -> QTableWidgetItem:
    item = QTableWidgetItem(str(value))
    table.setItem(row, col, item)
    return item


def render_pacientes(table: QTableWidget, filas: list[FilaPaciente], *, recovered_ids: set[str]) -> None:
    table.setRowCount(0)
    for fila in filas:
        row = table.rowCount()
        table.insertRow(row)
        valores = (
            fila.id,
            fila.nombre,
            fila.edad,
            fila.rut,
            fila.dominancia,
            fila.nombre_lesion,
            fila.codigo_lesion,
            fila.diagnostico,
            fila.delay_qx,
            fila.fecha_cirugia,
            fila.tipo_cx,
            fila.estado,
        )
        for col, valor in enumerate(valores):
            item = set_item(table, row, col, valor)
            if fila.id in recovered_ids:
                item.setForeground(RECOVERED_FOREGROUND)
                item.setBackground(RECOVERED_BACKGROUND)


def selected_id(table: QTableWidget) -> str | None:
    row = table.currentRow()
    if row < 0:
        return None
    item = table.item(row, 0)
    return item.text() if item else None
