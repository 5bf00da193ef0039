from __future__ import annotations

import asyncio
from datetime import date

from PySide6.QtCore import Qt, QDate, QDateTime, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QLineEdit, QDateEdit, QDateTimeEdit,
    QDialog, QPushButton, QCalendarWidget, QDoubleSpinBox, QLabel
)

from ..core.editor import RecordEditor
from ..core.records import FIELD_LABELS


class BlankableDateEdit(QDateEdit):
    """Truly blank until set. Popup calendar defaults to today when blank.
       Clear with Delete, Backspace, Esc, or double-click."""
    class _PopupCalendar(QCalendarWidget):
        def __init__(self, owner):
            super().__init__()
            self._owner = owner

        def showEvent(self, ev):
            super().showEvent(ev)
            if getattr(self._owner, "_blank", True):
                self.setSelectedDate(QDate.currentDate())
                self.setFocus()

    def __init__(self, display_fmt: str = "yyyy-MM-dd", *a, **kw):
        self._blank = True
        super().__init__(*a, **kw)

        self.setCalendarPopup(True)
        self.setCalendarWidget(BlankableDateEdit._PopupCalendar(self))
        self.setMinimumDate(QDate(1900, 1, 1))
        self.setSpecialValueText(" ")           # minimum date renders blank
        super().setDate(self.minimumDate())
        self.setDisplayFormat(display_fmt)
        self.setToolTip("Delete/Backspace/Esc to clear. Double-click to clear.")
        self.dateChanged.connect(self._unblank_on_change)

    def textFromDateTime(self, dt: QDateTime):  # type: ignore[override]
        if self._blank:
            return ""
        return QDateTimeEdit.textFromDateTime(self, dt)

    def _unblank_on_change(self, _):
        self._blank = (self.date() == self.minimumDate())
        self.update()

    def clear(self):
        self._blank = True
        super().setDate(self.minimumDate())
        self.update()

    def set_value(self, value: date | None):
        if value:
            self._blank = False
            super().setDate(QDate(value.year, value.month, value.day))
        else:
            self.clear()
        self.update()

    def value(self) -> date | None:
        return None if self._blank else self.date().toPython()

    def keyPressEvent(self, ev):  # type: ignore[override]
        if ev.key() in (Qt.Key_Delete, Qt.Key_Backspace, Qt.Key_Escape):
            self.clear()
            ev.accept()
            return
        super().keyPressEvent(ev)

    def mouseDoubleClickEvent(self, ev):  # type: ignore[override]
        self.clear()
        ev.accept()


class EmployeeFormDialog(QDialog):
    """Create/edit form bound to a RecordEditor.

    Emits ``completed`` with the successful MutationResult and closes; on
    failure it stays open with the entered values.
    """

    completed = Signal(object)

    def __init__(self, editor: RecordEditor, parent: QWidget | None = None):
        super().__init__(parent)
        self.editor = editor
        self.setWindowTitle(editor.title)
        self.setMinimumWidth(520)

        root = QVBoxLayout(self)
        heading = QLabel(editor.title)
        heading.setStyleSheet("font-size: 16px; font-weight: 600;")
        root.addWidget(heading)

        form = QFormLayout()
        self.ed_name = QLineEdit()
        self.ed_email = QLineEdit()
        self.ed_designation = QLineEdit()
        self.ed_department = QLineEdit()
        self.sp_salary = QDoubleSpinBox()
        self.sp_salary.setRange(0, 1_000_000_000)
        self.sp_salary.setDecimals(2)
        self.sp_salary.setGroupSeparatorShown(True)
        self.de_joining = BlankableDateEdit()
        self.de_last_day = BlankableDateEdit()

        self._widgets = {
            "name": self.ed_name,
            "email": self.ed_email,
            "designation": self.ed_designation,
            "department": self.ed_department,
            "salary": self.sp_salary,
            "date_of_joining": self.de_joining,
            "last_day_of_working": self.de_last_day,
        }
        for key, w in self._widgets.items():
            label = FIELD_LABELS[key]
            if key == "last_day_of_working":
                label += " (Optional)"
            form.addRow(label, w)
        root.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #c0392b;")
        self.error_label.setWordWrap(True)
        root.addWidget(self.error_label)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.btn_cancel = QPushButton("Cancel"); self.btn_cancel.clicked.connect(self.reject)
        self.btn_submit = QPushButton(editor.submit_label); self.btn_submit.setDefault(True)
        self.btn_submit.clicked.connect(self._on_submit_clicked)
        buttons.addWidget(self.btn_cancel)
        buttons.addWidget(self.btn_submit)
        root.addLayout(buttons)

        self._load_from_editor()

    def _load_from_editor(self) -> None:
        f = self.editor.form
        self.ed_name.setText(f.name)
        self.ed_email.setText(f.email)
        self.ed_designation.setText(f.designation)
        self.ed_department.setText(f.department)
        self.sp_salary.setValue(float(f.salary or 0))
        self.de_joining.set_value(f.date_of_joining or None)
        self.de_last_day.set_value(f.last_day_of_working or None)

    def _store_to_editor(self) -> None:
        f = self.editor.form
        f.name = self.ed_name.text()
        f.email = self.ed_email.text()
        f.designation = self.ed_designation.text()
        f.department = self.ed_department.text()
        f.salary = self.sp_salary.value()
        f.date_of_joining = self.de_joining.value() or ""
        f.last_day_of_working = self.de_last_day.value() or ""

    def _set_in_flight(self, busy: bool) -> None:
        self.btn_submit.setEnabled(not busy)
        self.btn_cancel.setEnabled(not busy)
        self.btn_submit.setText("Saving..." if busy else self.editor.submit_label)

    def _on_submit_clicked(self) -> None:
        if self.editor.submitting:
            return
        self._store_to_editor()
        self._set_in_flight(True)
        asyncio.ensure_future(self._submit())

    async def _submit(self) -> None:
        try:
            result = await self.editor.submit()
        finally:
            self._set_in_flight(False)

        self.error_label.setText("\n".join(self.editor.form.errors.values()))
        if result.ok:
            self.completed.emit(result)
            self.accept()
