from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTableWidget,
    QTableWidgetItem, QAbstractItemView, QHeaderView, QStackedWidget, QGroupBox
)

from ..core.list_loader import RecordListLoader
from ..core.presentation import COLUMNS, INACTIVE, build_rows, employees_title, view_state
from ..core.records import EmployeeRecord

STATUS_COL = COLUMNS.index("Status")


class EmployeesPage(QWidget):
    """List view: header, Add/Edit/Delete actions and the records table."""

    add_requested = Signal()
    edit_requested = Signal(object)  # EmployeeRecord
    delete_requested = Signal(int)

    def __init__(self, loader: RecordListLoader, parent: QWidget | None = None):
        super().__init__(parent)
        self._loader = loader
        self._records: list[EmployeeRecord] = []

        v = QVBoxLayout(self)

        # header row
        header = QHBoxLayout()
        titles = QVBoxLayout()
        h1 = QLabel("Employee Management")
        h1.setStyleSheet("font-size: 22px; font-weight: 700;")
        sub = QLabel("Manage your company's employee records")
        sub.setStyleSheet("color: gray;")
        titles.addWidget(h1)
        titles.addWidget(sub)
        header.addLayout(titles)
        header.addStretch(1)
        btn_add = QPushButton("Add Employee"); btn_add.clicked.connect(self.add_requested.emit)
        self.btn_edit = QPushButton("Edit"); self.btn_edit.clicked.connect(self._edit_selected)
        self.btn_del = QPushButton("Delete"); self.btn_del.clicked.connect(self._delete_selected)
        for w in (btn_add, self.btn_edit, self.btn_del):
            header.addWidget(w)
        v.addLayout(header)

        self.box = QGroupBox(employees_title([]))
        bv = QVBoxLayout(self.box)
        self.states = QStackedWidget()

        # loading
        self.loading_label = QLabel("Loading employees...")
        self.loading_label.setAlignment(Qt.AlignCenter)

        # empty
        empty = QWidget()
        ev = QVBoxLayout(empty)
        ev.addStretch(1)
        lbl = QLabel("No employees found"); lbl.setAlignment(Qt.AlignCenter)
        ev.addWidget(lbl)
        btn_first = QPushButton("Add Your First Employee")
        btn_first.clicked.connect(self.add_requested.emit)
        ev.addWidget(btn_first, alignment=Qt.AlignHCenter)
        ev.addStretch(1)

        # table
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(list(COLUMNS))
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.itemSelectionChanged.connect(self._sync_buttons)
        self.table.cellDoubleClicked.connect(lambda *_: self._edit_selected())

        self._state_index = {"loading": 0, "empty": 1, "list": 2}
        for w in (self.loading_label, empty, self.table):
            self.states.addWidget(w)
        bv.addWidget(self.states)
        v.addWidget(self.box)

        self._loader.on_change(lambda _loader: self.render())
        self.render()

    def render(self) -> None:
        self._records = self._loader.records
        self.box.setTitle(employees_title(self._records))
        self.states.setCurrentIndex(self._state_index[view_state(self._loader.loading, self._records)])

        self.table.setRowCount(len(self._records))
        for r, values in enumerate(build_rows(self._records)):
            for c, val in enumerate(values):
                item = QTableWidgetItem(val)
                if c == STATUS_COL:
                    item.setForeground(Qt.red if val == INACTIVE else Qt.darkGreen)
                self.table.setItem(r, c, item)
        self._sync_buttons()

    def _selected(self) -> EmployeeRecord | None:
        r = self.table.currentRow()
        if r < 0 or r >= len(self._records) or not self.table.selectedItems():
            return None
        return self._records[r]

    def _sync_buttons(self) -> None:
        has = self._selected() is not None
        self.btn_edit.setEnabled(has)
        self.btn_del.setEnabled(has)

    def _edit_selected(self) -> None:
        rec = self._selected()
        if rec is not None:
            self.edit_requested.emit(rec)

    def _delete_selected(self) -> None:
        rec = self._selected()
        if rec is not None:
            self.delete_requested.emit(rec.id)
