from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from traumadesk.app.application.services.busqueda_pacientes import BusquedaPacientesService
from traumadesk.app.application.services.presentacion_pacientes import fila_listado
from traumadesk.app.domain.enums import CriterioBusqueda
from traumadesk.app.ui.error_presenter import present_error
from traumadesk.app.ui.table_utils import COLUMNAS_LISTADO, render_pacientes

ETIQUETAS_CRITERIO = {
    CriterioBusqueda.NOMBRE: "Nombre del Paciente",
    CriterioBusqueda.RUT: "RUT",
    CriterioBusqueda.CODIGO_LESION: "Código de Lesión",
    CriterioBusqueda.FECHA_CIRUGIA: "Fecha de Cirugía",
    CriterioBusqueda.DIAGNOSTICO: "Diagnóstico",
}


class BusquedaAvanzadaDialog(QDialog):
    def __init__(self, busqueda: BusquedaPacientesService, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Búsqueda Avanzada de Pacientes")
        self.resize(1000, 520)
        self._busqueda = busqueda

        self.cbo_criterio = QComboBox()
        for criterio, etiqueta in ETIQUETAS_CRITERIO.items():
            self.cbo_criterio.addItem(etiqueta, criterio.value)

        self.txt_valor = QLineEdit()
        self.date_valor = QDateEdit()
        self.date_valor.setDisplayFormat("dd-MM-yyyy")
        self.date_valor.setCalendarPopup(True)
        self.date_valor.setDate(QDate.currentDate())
        self.stack_valor = QStackedWidget()
        self.stack_valor.addWidget(self.txt_valor)
        self.stack_valor.addWidget(self.date_valor)

        self.btn_buscar = QPushButton("Buscar")
        self.lbl_resultado = QLabel("")

        criterios = QHBoxLayout()
        criterios.addWidget(QLabel("Buscar por:"))
        criterios.addWidget(self.cbo_criterio)
        criterios.addWidget(self.stack_valor, 1)
        criterios.addWidget(self.btn_buscar)

        self.table = QTableWidget(0, len(COLUMNAS_LISTADO))
        self.table.setHorizontalHeaderLabels(list(COLUMNAS_LISTADO))
        self.table.setColumnHidden(0, True)
        self.table.horizontalHeader().setStretchLastSection(True)

        root = QVBoxLayout(self)
        root.addLayout(criterios)
        root.addWidget(self.table)
        root.addWidget(self.lbl_resultado)

        self.cbo_criterio.currentIndexChanged.connect(self._on_criterio_cambiado)
        self.btn_buscar.clicked.connect(self._buscar)
        self.txt_valor.returnPressed.connect(self._buscar)

    def criterio_actual(self) -> CriterioBusqueda:
        return CriterioBusqueda(self.cbo_criterio.currentData())

    def _on_criterio_cambiado(self) -> None:
        es_fecha = self.criterio_actual() is CriterioBusqueda.FECHA_CIRUGIA
        self.stack_valor.setCurrentWidget(self.date_valor if es_fecha else self.txt_valor)
        if self.criterio_actual() is CriterioBusqueda.CODIGO_LESION:
            self.txt_valor.setPlaceholderText("21 04 090")
        else:
            self.txt_valor.setPlaceholderText("")

    def _buscar(self) -> None:
        criterio = self.criterio_actual()
        if criterio is CriterioBusqueda.FECHA_CIRUGIA:
            valor = self.date_valor.date().toPython()
        else:
            valor = self.txt_valor.text()
        try:
            pacientes = self._busqueda.search_by_field(criterio, valor)
        except Exception as exc:
            present_error(self, exc, context="Búsqueda avanzada")
            return
        render_pacientes(
            self.table,
            [fila_listado(p) for p in pacientes],
            recovered_ids={p.id for p in pacientes if p.recovered and p.id},
        )
        if pacientes:
            self.lbl_resultado.setText(f"{len(pacientes)} resultado(s)")
        else:
            self.lbl_resultado.setText("No se encontraron resultados para su búsqueda.")
