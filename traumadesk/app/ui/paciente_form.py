from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QDate, QStringListModel, Qt, QTimer
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QCompleter,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QSpinBox,
    QTextEdit,
    QWidget,
)

from traumadesk.app.application.usecases.pacientes_crud import codigo_no_registrado
from traumadesk.app.domain.enums import Dominancia
from traumadesk.app.domain.exceptions import ValidationError
from traumadesk.app.domain.lesiones import LesionCodeRegistry, componer_codigo, es_codigo_oficial
from traumadesk.app.domain.modelos import DELAY_QX_MAXIMO, EDAD_MAXIMA, Lesion, Paciente
from traumadesk.app.domain.rut import clean_rut, format_rut, validate_rut
from traumadesk.app.ui.error_presenter import present_error

_INVALID_STYLE = "border: 1px solid #d9534f;"


class PacienteFormDialog(QDialog):
    def __init__(self, lesiones: LesionCodeRegistry, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Paciente")
        self._lesiones = lesiones
        self._paciente_id: Optional[str] = None
        self._recovered = False

        self.txt_nombre = QLineEdit()
        self.spin_edad = QSpinBox()
        self.spin_edad.setRange(0, EDAD_MAXIMA)
        self.txt_rut = QLineEdit()
        self.txt_rut.setPlaceholderText("12.345.678-5")
        self.txt_rut.editingFinished.connect(self._on_rut_editado)
        self.cbo_dominancia = QComboBox()
        self.cbo_dominancia.addItems([d.value for d in Dominancia])

        self.txt_codigo_1 = self._codigo_field(2)
        self.txt_codigo_2 = self._codigo_field(2)
        self.txt_codigo_3 = self._codigo_field(3)
        codigo_layout = QHBoxLayout()
        for campo in (self.txt_codigo_1, self.txt_codigo_2, self.txt_codigo_3):
            codigo_layout.addWidget(campo)
        codigo_layout.addStretch(1)
        codigo_widget = QWidget()
        codigo_widget.setLayout(codigo_layout)

        self.txt_buscar_lesion = QLineEdit()
        self.txt_buscar_lesion.setPlaceholderText("Buscar por código o nombre de lesión")
        self._sugerencias = QStringListModel(self)
        completer = QCompleter(self._sugerencias, self)
        completer.setCaseSensitivity(Qt.CaseInsensitive)
        completer.setFilterMode(Qt.MatchContains)
        completer.activated[str].connect(self._aplicar_sugerencia)
        self.txt_buscar_lesion.setCompleter(completer)
        self.txt_buscar_lesion.textEdited.connect(self._actualizar_sugerencias)

        self.txt_nombre_lesion = QTextEdit()
        self.txt_nombre_lesion.setReadOnly(True)
        self.txt_nombre_lesion.setFixedHeight(64)
        self.txt_diagnostico = QTextEdit()
        self.spin_delay_qx = QSpinBox()
        self.spin_delay_qx.setRange(0, DELAY_QX_MAXIMO)

        self.date_fecha_cirugia = QDateEdit()
        self.date_fecha_cirugia.setDisplayFormat("dd-MM-yyyy")
        self.date_fecha_cirugia.setCalendarPopup(True)
        self.date_fecha_cirugia.setDate(QDate.currentDate())
        self.chk_sin_fecha = QCheckBox("Sin fecha")
        self.chk_sin_fecha.toggled.connect(self._toggle_fecha_cirugia)
        self.chk_sin_fecha.setChecked(True)
        self._toggle_fecha_cirugia(True)
        fecha_layout = QHBoxLayout()
        fecha_layout.addWidget(self.date_fecha_cirugia)
        fecha_layout.addWidget(self.chk_sin_fecha)
        fecha_widget = QWidget()
        fecha_widget.setLayout(fecha_layout)

        self.txt_tipo_cx = QLineEdit()

        form = QFormLayout()
        form.addRow("Nombre *", self.txt_nombre)
        form.addRow("Edad *", self.spin_edad)
        form.addRow("RUT *", self.txt_rut)
        form.addRow("Dominancia", self.cbo_dominancia)
        form.addRow("Buscar Lesión", self.txt_buscar_lesion)
        form.addRow("Código Oficial Lesión", codigo_widget)
        form.addRow("Nombre Lesión", self.txt_nombre_lesion)
        form.addRow("Diagnóstico", self.txt_diagnostico)
        form.addRow("Delay QX (días)", self.spin_delay_qx)
        form.addRow("Fecha Cirugía", fecha_widget)
        form.addRow("Tipo de CX", self.txt_tipo_cx)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Save).setText("Guardar")
        buttons.button(QDialogButtonBox.Cancel).setText("Cancelar")
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QFormLayout(self)
        layout.addRow(form)
        layout.addRow(buttons)

    def _codigo_field(self, longitud: int) -> QLineEdit:
        campo = QLineEdit()
        campo.setMaxLength(longitud)
        campo.setFixedWidth(14 * longitud + 16)
        campo.textChanged.connect(self._actualizar_nombre_lesion)
        return campo

    def _actualizar_sugerencias(self, texto: str) -> None:
        coincidencias = self._lesiones.search(texto)
        self._sugerencias.setStringList([f"{codigo} - {nombre}" for codigo, nombre in coincidencias.items()])

    def _aplicar_sugerencia(self, sugerencia: str) -> None:
        codigo = sugerencia.split(" - ", 1)[0].strip()
        if not es_codigo_oficial(codigo):
            return
        parte1, parte2, parte3 = codigo.split(" ")
        self.txt_codigo_1.setText(parte1)
        self.txt_codigo_2.setText(parte2)
        self.txt_codigo_3.setText(parte3)

    def set_paciente(self, paciente: Paciente) -> None:
        self._paciente_id = paciente.id
        self._recovered = paciente.recovered
        self.txt_nombre.setText(paciente.nombre)
        self.spin_edad.setValue(paciente.edad)
        self.txt_rut.setText(format_rut(paciente.rut))
        self.cbo_dominancia.setCurrentText(paciente.dominancia.value)
        lesion = paciente.lesion
        if lesion is not None:
            if es_codigo_oficial(lesion.codigo_oficial):
                parte1, parte2, parte3 = lesion.codigo_oficial.split(" ")
                self.txt_codigo_1.setText(parte1)
                self.txt_codigo_2.setText(parte2)
                self.txt_codigo_3.setText(parte3)
            self.txt_nombre_lesion.setPlainText(lesion.nombre_lesion)
            self.txt_diagnostico.setPlainText(lesion.diagnostico)
        self.spin_delay_qx.setValue(paciente.delay_qx)
        if paciente.fecha_cirugia:
            fecha = paciente.fecha_cirugia
            self.date_fecha_cirugia.setDate(QDate(fecha.year, fecha.month, fecha.day))
            self.chk_sin_fecha.setChecked(False)
        else:
            self.chk_sin_fecha.setChecked(True)
        self.txt_tipo_cx.setText(paciente.tipo_cx)

    def get_data(self) -> Optional[Paciente]:
        """Paciente validado con los datos del formulario, o None si el usuario debe corregir algo."""
        try:
            fecha = None
            if not self.chk_sin_fecha.isChecked():
                fecha = self.date_fecha_cirugia.date().toPython()
            lesion = Lesion(
                nombre_lesion=self.txt_nombre_lesion.toPlainText().strip(),
                codigo_oficial=componer_codigo(
                    self.txt_codigo_1.text(), self.txt_codigo_2.text(), self.txt_codigo_3.text()
                ),
                diagnostico=self.txt_diagnostico.toPlainText().strip(),
            )
            paciente = Paciente(
                id=self._paciente_id,
                nombre=self.txt_nombre.text().strip(),
                edad=self.spin_edad.value(),
                rut=clean_rut(self.txt_rut.text()),
                dominancia=Dominancia(self.cbo_dominancia.currentText()),
                lesion=None if lesion.esta_vacia() else lesion,
                delay_qx=self.spin_delay_qx.value(),
                fecha_cirugia=fecha,
                tipo_cx=self.txt_tipo_cx.text().strip(),
                recovered=self._recovered,
            )
            paciente.validar()
        except ValidationError as exc:
            self._highlight_for_error(exc)
            present_error(self, exc)
            return None

        if codigo_no_registrado(paciente, self._lesiones) and not self._confirmar_codigo_no_registrado(paciente):
            return None
        return paciente

    def _confirmar_codigo_no_registrado(self, paciente: Paciente) -> bool:
        codigo = paciente.lesion.codigo_oficial if paciente.lesion else ""
        respuesta = QMessageBox.question(
            self,
            "Código de Lesión No Registrado",
            f"El código de lesión ingresado '{codigo}' no se encuentra en el registro oficial.\n"
            "¿Desea continuar de todas formas? (Se guardará con el código ingresado)",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        return respuesta == QMessageBox.Yes

    def _actualizar_nombre_lesion(self) -> None:
        codigo = componer_codigo(self.txt_codigo_1.text(), self.txt_codigo_2.text(), self.txt_codigo_3.text())
        nombre = self._lesiones.get(codigo) if es_codigo_oficial(codigo) else None
        self.txt_nombre_lesion.setPlainText(nombre or "")

    def _on_rut_editado(self) -> None:
        texto = self.txt_rut.text().strip()
        if not texto:
            self.txt_rut.setStyleSheet("")
            return
        limpio = clean_rut(texto)
        self.txt_rut.setText(format_rut(limpio))
        self.txt_rut.setStyleSheet("" if validate_rut(limpio) else _INVALID_STYLE)

    def _toggle_fecha_cirugia(self, checked: bool) -> None:
        self.date_fecha_cirugia.setEnabled(not checked)

    def _mark_invalid(self, widget: QWidget) -> None:
        widget.setStyleSheet(_INVALID_STYLE)
        QTimer.singleShot(2500, lambda: widget.setStyleSheet(""))

    def _highlight_for_error(self, exc: Exception) -> None:
        message = str(exc).lower()
        if "rut" in message:
            self._mark_invalid(self.txt_rut)
        elif "nombre" in message and "lesión" not in message:
            self._mark_invalid(self.txt_nombre)
        elif "código" in message:
            self._mark_invalid(self.txt_codigo_1)
        elif "lesión" in message:
            self._mark_invalid(self.txt_diagnostico)
