"""Gitgud UI: Qt models for the diff view and log table."""

from __future__ import annotations

import json
import time
from typing import List, Dict, Any

from PyQt6.QtCore import Qt, QAbstractTableModel, QModelIndex
from PyQt6.QtGui import QBrush, QColor

from ..core.models import ParsedPatch
from ..core.rows import build_rows, KIND_CONTEXT, KIND_ADD, KIND_DEL, KIND_ELISION


class DiffLineTableModel(QAbstractTableModel):
    """
    One row per diff line, 4 columns:
      0 old line number (or blank)
      1 new line number (or blank)
      2 change marker (+, -, blank)
      3 text
    Elision rows show "..." in both number columns.
    """

    COL_OLD_NO = 0
    COL_NEW_NO = 1
    COL_MARKER = 2
    COL_TEXT = 3

    def __init__(self):
        super().__init__()
        self._rows: List[Dict[str, Any]] = []
        self._header = ["Old", "New", "", "Text"]

        self._bg_context = QBrush(QColor(255, 255, 255))
        self._bg_line_no = QBrush(QColor(242, 242, 242))
        self._bg_add = QBrush(QColor(228, 246, 228))
        self._bg_del = QBrush(QColor(246, 228, 228))
        self._bg_elision = QBrush(QColor(248, 248, 248))

        self._fg_default = QBrush(QColor(20, 20, 20))
        self._fg_elision = QBrush(QColor(140, 140, 140))

    def rowCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else 4

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            return self._header[section] if 0 <= section < len(self._header) else ""
        return None

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        c = index.column()
        row = self._rows[index.row()]
        kind = row.get("kind", KIND_CONTEXT)

        if role == Qt.ItemDataRole.DisplayRole:
            if c == self.COL_OLD_NO:
                return row.get("old_no", "")
            if c == self.COL_NEW_NO:
                return row.get("new_no", "")
            if c == self.COL_MARKER:
                return row.get("marker", "").strip()
            if c == self.COL_TEXT:
                return row.get("text", "")
            return ""

        if role == Qt.ItemDataRole.TextAlignmentRole:
            if c in (self.COL_OLD_NO, self.COL_NEW_NO):
                return int(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            if c == self.COL_MARKER:
                return int(Qt.AlignmentFlag.AlignCenter)
            return int(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)

        if role == Qt.ItemDataRole.BackgroundRole:
            if kind == KIND_ELISION:
                return self._bg_elision
            if c in (self.COL_OLD_NO, self.COL_NEW_NO):
                return self._bg_line_no
            if kind == KIND_ADD:
                return self._bg_add
            if kind == KIND_DEL:
                return self._bg_del
            return self._bg_context

        if role == Qt.ItemDataRole.ForegroundRole:
            return self._fg_elision if kind == KIND_ELISION else self._fg_default

        if role == Qt.ItemDataRole.UserRole:
            return row

        return None

    def set_rows(self, rows: List[Dict[str, Any]]) -> None:
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()

    def build_from_patch(self, parsed: ParsedPatch, line_count: int, show_elision: bool = True) -> None:
        self.set_rows(build_rows(parsed, line_count, show_elision=show_elision))


class LogTableModel(QAbstractTableModel):
    def __init__(self):
        super().__init__()
        self._rows: List[Dict[str, Any]] = []
        self._header = ["Time", "Level", "Message"]

    def rowCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else 3

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            return self._header[section]
        return str(section + 1)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        c = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            if c == 0:
                return time.strftime("%H:%M:%S", time.localtime(row.get("ts", 0.0)))
            if c == 1:
                return row.get("level", "")
            if c == 2:
                return row.get("message", "")
        if role == Qt.ItemDataRole.ToolTipRole:
            det = {k: v for k, v in row.items() if k not in ("ts", "level", "message")}
            if det:
                return json.dumps(det, indent=2, default=str)
        return None

    def append(self, entry: Dict[str, Any]) -> None:
        self.beginInsertRows(QModelIndex(), len(self._rows), len(self._rows))
        self._rows.append(entry)
        self.endInsertRows()

    def clear(self) -> None:
        self.beginResetModel()
        self._rows = []
        self.endResetModel()


class KeyValueTableModel(QAbstractTableModel):
    def __init__(self, rows: List[Dict[str, str]], header: List[str]):
        super().__init__()
        self._rows = rows
        self._header = header

    def rowCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._header)

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            return self._header[section]
        return str(section + 1)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        if role == Qt.ItemDataRole.DisplayRole:
            return str(self._rows[index.row()].get(self._header[index.column()], ""))
        return None
