"""Gitgud UI: dialogs."""

from __future__ import annotations

from typing import List, Dict, Any, Tuple

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTableView,
    QAbstractItemView, QHeaderView, QTextEdit, QSpinBox, QFormLayout
)

from .models import KeyValueTableModel


class HunkCountDialog(QDialog):
    HEADER = ["Hunk", "Header", "Declared (-/+)", "Found (-/+)", "Status"]

    def __init__(self, parent, path: str, per_hunk: List[Dict[str, Any]], tolerance: int):
        super().__init__(parent)
        self.setWindowTitle("Diagnostics")
        self.resize(820, 360)

        layout = QVBoxLayout(self)
        bad = sum(1 for h in per_hunk if not h["ok"])
        layout.addWidget(QLabel(f"<b>{path or 'Diff'}</b>"))
        layout.addWidget(QLabel(
            f"{bad} of {len(per_hunk)} hunk(s) hold a different number of lines than their header declares "
            f"(allowed drift: {tolerance}).<br>Line numbers shown for those hunks may be off."
        ))

        rows = []
        for h in per_hunk:
            rows.append({
                "Hunk": h["hunk_index"] + 1,
                "Header": h["header"],
                "Declared (-/+)": f"{h['expected_old']}/{h['expected_new']}",
                "Found (-/+)": f"{h['actual_old']}/{h['actual_new']}",
                "Status": "OK" if h["ok"] else "Mismatch",
            })

        self.table = QTableView()
        self.model = KeyValueTableModel(rows, self.HEADER)
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.table.setAlternatingRowColors(True)
        self.table.setWordWrap(False)
        layout.addWidget(self.table)

        btns = QHBoxLayout()
        btns.addStretch(1)
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btns.addWidget(close_btn)
        layout.addLayout(btns)


class PasteDiffDialog(QDialog):
    """Paste a diff and enter the total line count of the new file."""

    def __init__(self, parent):
        super().__init__(parent)
        self.setWindowTitle("Paste Diff")
        self.resize(820, 520)

        lay = QVBoxLayout(self)
        lay.addWidget(QLabel("Paste unified diff text:"))
        self.edit = QTextEdit()
        self.edit.setAcceptRichText(False)
        lay.addWidget(self.edit)

        form = QFormLayout()
        self.spn_lines = QSpinBox()
        self.spn_lines.setRange(0, 10_000_000)
        form.addRow("Total lines in new file", self.spn_lines)
        lay.addLayout(form)

        btns = QHBoxLayout()
        btns.addStretch(1)
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        btns.addWidget(ok_btn)
        btns.addWidget(cancel_btn)
        lay.addLayout(btns)

        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)

    def values(self) -> Tuple[str, int]:
        return self.edit.toPlainText(), int(self.spn_lines.value())
