from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from traumadesk.app.application.services.presentacion_pacientes import fila_listado
from traumadesk.app.bootstrap_logging import get_logger
from traumadesk.app.common.search_utils import normalize_search_text
from traumadesk.app.container import AppContainer
from traumadesk.app.domain.modelos import Paciente
from traumadesk.app.ui.busqueda_avanzada_dialog import BusquedaAvanzadaDialog
from traumadesk.app.ui.error_presenter import present_error
from traumadesk.app.ui.paciente_form import PacienteFormDialog
from traumadesk.app.ui.table_utils import COLUMNAS_LISTADO, render_pacientes, selected_id

LOGGER = get_logger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._container = container
        self.setWindowTitle("TraumaDesk - Registro de Pacientes de Trauma")
        self.resize(1280, 720)

        self._build_ui()
        self._connect_signals()
        self._refresh()

    def _build_ui(self) -> None:
        central = QWidget(self)
        root = QVBoxLayout(central)

        filtros = QHBoxLayout()
        self.txt_buscar = QLineEdit()
        self.txt_buscar.setPlaceholderText("Nombre, RUT, lesión o código")
        self.btn_buscar = QPushButton("Buscar")
        self.btn_limpiar = QPushButton("Limpiar Búsqueda")
        self.chk_recuperados = QCheckBox("Mostrar Recuperados")
        self.btn_avanzada = QPushButton("Búsqueda Avanzada")
        filtros.addWidget(QLabel("Buscar:"))
        filtros.addWidget(self.txt_buscar, 1)
        filtros.addWidget(self.btn_buscar)
        filtros.addWidget(self.btn_limpiar)
        filtros.addWidget(self.chk_recuperados)
        filtros.addWidget(self.btn_avanzada)

        self.table = QTableWidget(0, len(COLUMNAS_LISTADO))
        self.table.setHorizontalHeaderLabels(list(COLUMNAS_LISTADO))
        self.table.setColumnHidden(0, True)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setSelectionMode(QTableWidget.SingleSelection)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)

        acciones = QHBoxLayout()
        self.btn_nuevo = QPushButton("Agregar Paciente")
        self.btn_editar = QPushButton("Editar Paciente")
        self.btn_eliminar = QPushButton("Eliminar Paciente")
        self.btn_estado = QPushButton("Cambiar Estado Recuperado")
        self.btn_exportar = QPushButton("Exportar a Excel")
        for boton in (self.btn_nuevo, self.btn_editar, self.btn_eliminar, self.btn_estado, self.btn_exportar):
            acciones.addWidget(boton)
        acciones.addStretch(1)

        self.lbl_contador = QLabel("")

        root.addLayout(filtros)
        root.addWidget(self.table)
        root.addLayout(acciones)
        root.addWidget(self.lbl_contador)
        self.setCentralWidget(central)
        self._update_buttons()

    def _connect_signals(self) -> None:
        self.btn_buscar.clicked.connect(self._refresh)
        self.txt_buscar.returnPressed.connect(self._refresh)
        self.btn_limpiar.clicked.connect(self._on_limpiar)
        self.chk_recuperados.toggled.connect(self._refresh)
        self.btn_avanzada.clicked.connect(self._on_busqueda_avanzada)
        self.table.itemSelectionChanged.connect(self._update_buttons)
        self.table.itemDoubleClicked.connect(lambda _: self._on_editar())
        self.btn_nuevo.clicked.connect(self._on_nuevo)
        self.btn_editar.clicked.connect(self._on_editar)
        self.btn_eliminar.clicked.connect(self._on_eliminar)
        self.btn_estado.clicked.connect(self._on_cambiar_estado)
        self.btn_exportar.clicked.connect(self._on_exportar)

    def _refresh(self) -> None:
        try:
            pacientes = self._pacientes_visibles()
        except Exception as exc:
            present_error(self, exc, context="Error al cargar los pacientes")
            return
        render_pacientes(
            self.table,
            [fila_listado(p) for p in pacientes],
            recovered_ids={p.id for p in pacientes if p.recovered and p.id},
        )
        self.lbl_contador.setText(f"{len(pacientes)} paciente(s)")
        self._update_buttons()

    def _pacientes_visibles(self) -> list[Paciente]:
        busqueda = self._container.busqueda
        texto = normalize_search_text(self.txt_buscar.text())
        pacientes = busqueda.search_all(texto) if texto else busqueda.listar()
        if self.chk_recuperados.isChecked():
            return pacientes
        return [p for p in pacientes if not p.recovered]

    def _update_buttons(self) -> None:
        has_selection = selected_id(self.table) is not None
        for boton in (self.btn_editar, self.btn_eliminar, self.btn_estado):
            boton.setEnabled(has_selection)

    def _on_limpiar(self) -> None:
        self.txt_buscar.clear()
        self._refresh()

    def _on_nuevo(self) -> None:
        dialog = PacienteFormDialog(self._container.lesiones, self)
        while dialog.exec() == QDialog.Accepted:
            paciente = dialog.get_data()
            if paciente is None:
                continue
            try:
                self._container.crear_paciente.execute(paciente)
            except Exception as exc:
                present_error(self, exc, context="Error al guardar paciente")
                continue
            QMessageBox.information(self, "Éxito", "Paciente agregado correctamente.")
            break
        self._refresh()

    def _on_editar(self) -> None:
        paciente = self._paciente_seleccionado()
        if paciente is None:
            return
        dialog = PacienteFormDialog(self._container.lesiones, self)
        dialog.set_paciente(paciente)
        while dialog.exec() == QDialog.Accepted:
            actualizado = dialog.get_data()
            if actualizado is None:
                continue
            try:
                self._container.editar_paciente.execute(actualizado)
            except Exception as exc:
                present_error(self, exc, context="Error al guardar paciente")
                continue
            QMessageBox.information(self, "Éxito", "Paciente actualizado correctamente.")
            break
        self._refresh()

    def _on_eliminar(self) -> None:
        paciente_id = selected_id(self.table)
        if paciente_id is None:
            return
        confirm = QMessageBox.question(
            self,
            "Eliminar Paciente",
            "¿Está seguro de que desea eliminar este paciente?\nEsta acción no se puede deshacer.",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if confirm != QMessageBox.Yes:
            return
        try:
            self._container.eliminar_paciente.execute(paciente_id)
        except Exception as exc:
            present_error(self, exc, context="Error al eliminar paciente")
        self._refresh()

    def _on_cambiar_estado(self) -> None:
        paciente_id = selected_id(self.table)
        if paciente_id is None:
            return
        try:
            recovered = self._container.cambiar_estado.execute(paciente_id)
        except Exception as exc:
            present_error(self, exc, context="Error al actualizar el estado")
            return
        if recovered is None:
            QMessageBox.warning(self, "Estado", "El paciente ya no existe.")
        elif recovered:
            QMessageBox.information(self, "Estado Actualizado", "Paciente marcado como RECUPERADO.")
        else:
            QMessageBox.information(self, "Estado Actualizado", "Paciente marcado como ACTIVO.")
        self._refresh()

    def _on_exportar(self) -> None:
        try:
            pacientes = self._container.pacientes_store.list_all()
        except Exception as exc:
            present_error(self, exc, context="Error al cargar los pacientes")
            return
        if not pacientes:
            QMessageBox.warning(self, "Advertencia", "No hay pacientes para exportar.")
            return
        ruta, _ = QFileDialog.getSaveFileName(
            self,
            "Guardar Reporte de Pacientes",
            self._container.exportar_excel.FILE_NAME,
            "Excel (*.xlsx)",
        )
        if not ruta:
            return
        try:
            destino = self._container.exportar_excel.execute(pacientes, ruta)
        except Exception as exc:
            present_error(self, exc, context="Error al exportar el reporte a Excel")
            return
        QMessageBox.information(
            self,
            "Exportación Exitosa",
            f"Reporte de pacientes exportado exitosamente a:\n{destino}",
        )

    def _on_busqueda_avanzada(self) -> None:
        BusquedaAvanzadaDialog(self._container.busqueda, self).exec()

    def _paciente_seleccionado(self) -> Optional[Paciente]:
        paciente_id = selected_id(self.table)
        if paciente_id is None:
            return None
        try:
            paciente = self._container.pacientes_store.get(paciente_id)
        except Exception as exc:
            present_error(self, exc, context="Error al leer el paciente")
            return None
        if paciente is None:
            QMessageBox.warning(self, "Paciente", "El paciente seleccionado ya no existe.")
            self._refresh()
        return paciente
