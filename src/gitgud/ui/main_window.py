"""Gitgud UI: main window."""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional, Dict, Any

from PyQt6.QtCore import Qt, QModelIndex
from PyQt6.QtGui import QAction, QStandardItemModel, QStandardItem, QFont
from PyQt6.QtWidgets import (
    QMainWindow, QToolBar, QStatusBar, QSplitter,
    QListView, QTableView, QDockWidget,
    QWidget, QVBoxLayout, QLabel,
    QFileDialog, QMessageBox, QCheckBox, QSpinBox, QFormLayout,
    QHeaderView, QAbstractItemView, QDialog, QInputDialog
)

from ..core.host import RepositoryHost
from ..core.models import ParsedPatch
from ..core.normalizer import PatchTextNormalizer
from ..core.parser import PatchParser, check_hunk_counts
from ..core.selftests import GitgudSelfTests
from ..core.state import RepoState
from ..core.status import FileStatus, StatusFlag, split_by_stage

from .models import DiffLineTableModel, LogTableModel
from .dialogs import HunkCountDialog, PasteDiffDialog


class MainWindow(QMainWindow):
    def __init__(self, host: Optional[RepositoryHost] = None):
        super().__init__()
        self.resize(1200, 720)

        self.host = host
        self.normalizer = PatchTextNormalizer()
        self.parser = PatchParser()

        # Session state
        self.state = RepoState()
        self.parsed: ParsedPatch = ParsedPatch()

        app_font = QFont("Consolas", 10)
        self.setFont(app_font)

        self._build_toolbar()
        self._build_central()
        self._build_docks()
        self._build_status()

        self._apply_state(self.state)
        self._log_info("Ready.", component="ui", host=type(host).__name__ if host else None)
        if self.host is not None:
            self._load_repo()

    # ---------------- UI Construction ----------------

    def _build_toolbar(self):
        tb = QToolBar("Main")
        tb.setMovable(False)
        self.addToolBar(tb)

        self.act_refresh = QAction("Refresh", self)
        self.act_refresh.triggered.connect(self._refresh_status)

        self.act_toggle_stage = QAction("Stage", self)
        self.act_toggle_stage.triggered.connect(self._toggle_stage_selected)

        self.act_load_diff = QAction("Load Diff", self)
        self.act_load_diff.triggered.connect(self._load_diff)

        self.act_check_counts = QAction("Check Hunks", self)
        self.act_check_counts.triggered.connect(self._show_count_check)

        self.act_advanced = QAction("Advanced", self)
        self.act_advanced.triggered.connect(self._toggle_advanced)

        for a in [self.act_refresh, self.act_toggle_stage, self.act_load_diff, self.act_check_counts, self.act_advanced]:
            tb.addAction(a)

    def _make_file_pane(self, title: str, staged: bool):
        pane = QWidget()
        lay = QVBoxLayout(pane)
        lay.setContentsMargins(4, 4, 4, 4)
        lay.addWidget(QLabel(f"<b>{title}</b>"))

        view = QListView()
        view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        model = QStandardItemModel()
        view.setModel(model)
        view.selectionModel().currentChanged.connect(lambda current, _previous: self._on_file_selected(staged, current))
        view.doubleClicked.connect(lambda *_: self._toggle_stage_selected())
        lay.addWidget(view)
        return pane, view, model

    def _build_central(self):
        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)

        panes = QSplitter()
        panes.setOrientation(Qt.Orientation.Vertical)
        unstaged_pane, self.unstaged_list, self.unstaged_model = self._make_file_pane("Unstaged changes", staged=False)
        staged_pane, self.staged_list, self.staged_model = self._make_file_pane("Staged changes", staged=True)
        panes.addWidget(unstaged_pane)
        panes.addWidget(staged_pane)
        panes.setMinimumWidth(260)

        self.diff_table = QTableView()
        self.diff_model = DiffLineTableModel()
        self.diff_table.setModel(self.diff_model)
        self.diff_table.setWordWrap(False)
        self.diff_table.setHorizontalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.diff_table.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.diff_table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.diff_table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.diff_table.setShowGrid(False)
        self.diff_table.setSortingEnabled(False)
        self.diff_table.verticalHeader().setVisible(False)

        hdr = self.diff_table.horizontalHeader()
        hdr.setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.diff_table.setColumnWidth(DiffLineTableModel.COL_OLD_NO, 60)
        self.diff_table.setColumnWidth(DiffLineTableModel.COL_NEW_NO, 60)
        self.diff_table.setColumnWidth(DiffLineTableModel.COL_MARKER, 24)
        hdr.setSectionResizeMode(DiffLineTableModel.COL_TEXT, QHeaderView.ResizeMode.Stretch)

        splitter.addWidget(panes)
        splitter.addWidget(self.diff_table)
        splitter.setSizes([300, 900])

        self.setCentralWidget(splitter)

    def _build_docks(self):
        # Bottom dock: Log / Diagnostics (hidden by default)
        self.log_dock = QDockWidget("Log / Diagnostics", self)
        self.log_dock.setAllowedAreas(Qt.DockWidgetArea.BottomDockWidgetArea)
        self.log_dock.setVisible(False)

        log_widget = QWidget()
        log_layout = QVBoxLayout(log_widget)
        log_layout.setContentsMargins(4, 4, 4, 4)

        self.log_table = QTableView()
        self.log_model = LogTableModel()
        self.log_table.setModel(self.log_model)
        self.log_table.horizontalHeader().setStretchLastSection(True)
        self.log_table.setWordWrap(False)
        self.log_table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.log_table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)

        log_layout.addWidget(self.log_table)
        self.log_dock.setWidget(log_widget)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.log_dock)

        # Right dock: Advanced panel (hidden by default)
        self.adv_dock = QDockWidget("Advanced", self)
        self.adv_dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self.adv_dock.setVisible(False)

        adv_widget = QWidget()
        form = QFormLayout(adv_widget)
        form.setContentsMargins(8, 8, 8, 8)

        self.chk_elision = QCheckBox("Show elided line markers")
        self.chk_elision.setChecked(True)
        self.chk_elision.toggled.connect(lambda *_: self._render_diff())
        self.chk_validate = QCheckBox("Validate hunk line counts")
        self.spn_tolerance = QSpinBox()
        self.spn_tolerance.setRange(0, 1000)
        self.spn_tolerance.setValue(0)

        form.addRow(self.chk_elision)
        form.addRow(self.chk_validate)
        form.addRow("Allowed count drift (lines)", self.spn_tolerance)

        self.adv_dock.setWidget(adv_widget)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.adv_dock)

        self.menu = self.menuBar().addMenu("Help")
        act_selftests = QAction("Run Self Tests", self)
        act_selftests.triggered.connect(self._run_selftests_ui)
        self.menu.addAction(act_selftests)

    def _build_status(self):
        sb = QStatusBar()
        self.setStatusBar(sb)
        self._set_status("No diff loaded.")

    # ---------------- Utilities ----------------

    def _options(self) -> Dict[str, Any]:
        return {
            "show_elision_markers": self.chk_elision.isChecked(),
            "validate_hunk_counts": self.chk_validate.isChecked(),
            "count_tolerance": int(self.spn_tolerance.value()),
        }

    def _set_status(self, summary: str) -> None:
        self.statusBar().showMessage(summary)

    def _log(self, level: str, message: str, **fields: Any) -> None:
        entry = {"ts": time.time(), "level": level, "message": message}
        entry.update(fields)
        self.log_model.append(entry)
        if level in ("ERROR", "WARN"):
            self.log_dock.setVisible(True)

    def _log_info(self, message: str, **fields: Any) -> None:
        self._log("INFO", message, **fields)

    def _log_warn(self, message: str, **fields: Any) -> None:
        self._log("WARN", message, **fields)

    def _log_error(self, message: str, **fields: Any) -> None:
        self._log("ERROR", message, **fields)

    def _refresh_actions(self):
        has_host = self.host is not None
        has_selection = self.state.selected_path is not None
        self.act_refresh.setEnabled(has_host)
        self.act_toggle_stage.setEnabled(has_host and has_selection)
        self.act_toggle_stage.setText("Unstage" if self.state.selected_staged else "Stage")
        self.act_check_counts.setEnabled(not self.parsed.is_empty())

    def _apply_state(self, state: RepoState) -> None:
        changed_files = state.files != self.state.files
        self.state = state
        self.setWindowTitle(state.title())
        if changed_files or not state.files:
            self._rebuild_file_lists()
        self.parsed = self.parser.parse(state.diff)
        self._render_diff()
        self._refresh_actions()

    def _fill_list(self, model: QStandardItemModel, files: List[FileStatus]) -> None:
        model.clear()
        for f in files:
            it = QStandardItem(f.path)
            it.setEditable(False)
            it.setData(f.path, Qt.ItemDataRole.UserRole)
            it.setToolTip(", ".join(flag.name for flag in StatusFlag if flag and flag & f.status))
            model.appendRow(it)

    def _rebuild_file_lists(self) -> None:
        unstaged, staged = split_by_stage(self.state.files)
        self._fill_list(self.unstaged_model, unstaged)
        self._fill_list(self.staged_model, staged)

        # Restore the highlighted row without triggering another diff fetch.
        if self.state.selected_path is None:
            return
        view = self.staged_list if self.state.selected_staged else self.unstaged_list
        model = self.staged_model if self.state.selected_staged else self.unstaged_model
        for row in range(model.rowCount()):
            idx = model.index(row, 0)
            if idx.data(Qt.ItemDataRole.UserRole) == self.state.selected_path:
                view.selectionModel().blockSignals(True)
                view.setCurrentIndex(idx)
                view.selectionModel().blockSignals(False)
                break

    def _render_diff(self) -> None:
        opts = self._options()
        self.diff_model.build_from_patch(self.parsed, self.state.line_count, show_elision=opts["show_elision_markers"])

    # ---------------- Host interaction ----------------

    def _load_repo(self) -> None:
        try:
            path, branch = self.host.describe()
        except Exception as e:
            QMessageBox.critical(self, "Repository", f"Failed to read repository:\n{e}")
            self._log_error("Failed to read repository.", error=str(e))
            return
        self._apply_state(self.state.update_repo(path, branch))
        self._log_info("Opened repository.", path=path, branch=branch)
        self._refresh_status()

    def _refresh_status(self) -> None:
        if self.host is None:
            return
        try:
            files = self.host.status()
        except Exception as e:
            QMessageBox.critical(self, "Status", f"Failed to read status:\n{e}")
            self._log_error("Failed to read status.", error=str(e))
            return
        had_selection = self.state.selected_path
        self._apply_state(self.state.update_status(files))
        self._log_info("Status refreshed.", files=len(files))
        if had_selection and self.state.selected_path == had_selection:
            self._fetch_diff(self.state.selected_path, self.state.selected_staged)
        self._set_status(f"{len(files)} changed file(s).")

    def _fetch_diff(self, path: str, staged: bool) -> None:
        try:
            payload = self.host.diff(path, staged)
        except Exception as e:
            QMessageBox.critical(self, "Diff", f"Failed to read diff for {path}:\n{e}")
            self._log_error("Failed to read diff.", path=path, staged=staged, error=str(e))
            return
        self._show_diff(payload.text, payload.line_count, source=path)

    def _toggle_stage_selected(self) -> None:
        path = self.state.selected_path
        if self.host is None or path is None:
            return
        staged = self.state.selected_staged
        try:
            if staged:
                self.host.unstage(path)
            else:
                self.host.stage(path)
        except Exception as e:
            QMessageBox.critical(self, "Stage", f"Failed to {'unstage' if staged else 'stage'} {path}:\n{e}")
            self._log_error("Stage toggle failed.", path=path, staged=staged, error=str(e))
            return
        self._log_info("Unstaged file." if staged else "Staged file.", path=path)
        self._refresh_status()

    # ---------------- Diff display ----------------

    def _show_diff(self, text: str, line_count: int, source: str) -> None:
        self._apply_state(self.state.update_selected_file(text, line_count))
        self._log_info("Parsed diff.", source=source, hunks=self.parsed.total_hunks(),
                       lines=self.parsed.total_lines(), line_count=line_count)
        if self.parsed.is_empty():
            self._set_status(f"Viewing: {source} (no hunks)")
        else:
            self._set_status(f"Viewing: {source} ({self.parsed.total_hunks()} hunk(s))")

        opts = self._options()
        if opts["validate_hunk_counts"] and not self.parsed.is_empty():
            check = check_hunk_counts(self.parsed, opts["count_tolerance"])
            for entry in check.logs:
                self._log(entry.get("level", "INFO"), entry.get("message", ""),
                          **{k: v for k, v in entry.items() if k not in ("ts", "level", "message")})
            if not check.ok:
                HunkCountDialog(self, source, check.per_hunk, check.tolerance).exec()

    def _load_diff(self):
        choice = QMessageBox.question(
            self,
            "Load Diff",
            "Load diff from file?\n\nYes = From file\nNo = Paste",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No | QMessageBox.StandardButton.Cancel
        )
        if choice == QMessageBox.StandardButton.Cancel:
            return

        if choice == QMessageBox.StandardButton.Yes:
            fn, _ = QFileDialog.getOpenFileName(self, "Load Diff File", "", "Diff/Patch (*.diff *.patch *.txt);;All Files (*.*)")
            if not fn:
                return
            try:
                raw = Path(fn).read_text(encoding="utf-8", errors="replace")
            except Exception as e:
                QMessageBox.critical(self, "Load Diff", f"Failed to read diff:\n{e}")
                self._log_error("Failed to read diff file.", file=fn, error=str(e))
                return
            line_count, ok = QInputDialog.getInt(self, "Load Diff", "Total lines in new file:", 0, 0, 10_000_000)
            if not ok:
                return
            source = Path(fn).name
        else:
            dlg = PasteDiffDialog(self)
            if dlg.exec() != QDialog.DialogCode.Accepted:
                return
            raw, line_count = dlg.values()
            source = "(pasted)"

        text = self.normalizer.normalize(raw)
        info = self.normalizer.describe(text)
        if not info["has_hunk"]:
            self._log_warn("Diff contains no hunk headers.", source=source)
        if info["has_binary_indicator"]:
            self._log_warn("Diff contains binary changes; they are not shown.", source=source)
        self._clear_selection()
        self._show_diff(text, line_count, source=source)

    def _show_count_check(self) -> None:
        opts = self._options()
        check = check_hunk_counts(self.parsed, opts["count_tolerance"])
        HunkCountDialog(self, self.state.selected_path or "", check.per_hunk, check.tolerance).exec()

    # ---------------- Actions ----------------

    def _toggle_advanced(self):
        self.adv_dock.setVisible(not self.adv_dock.isVisible())

    def _run_selftests_ui(self):
        ok, report = GitgudSelfTests.run()
        if ok:
            QMessageBox.information(self, "Self Tests", "All self tests passed.\n\n" + report)
        else:
            QMessageBox.critical(self, "Self Tests", "One or more self tests failed.\n\n" + report)

    # ---------------- Selection Handling ----------------

    def _clear_selection(self) -> None:
        for view in (self.unstaged_list, self.staged_list):
            view.selectionModel().blockSignals(True)
            view.selectionModel().clearCurrentIndex()
            view.clearSelection()
            view.selectionModel().blockSignals(False)
        self.state = self.state.select(None, False)

    def _on_file_selected(self, staged: bool, idx: QModelIndex):
        model = self.staged_model if staged else self.unstaged_model
        if not idx.isValid():
            return
        it = model.itemFromIndex(idx)
        if it is None:
            return

        # Only one pane holds the selection at a time; dropping its current
        # index lets the same row emit currentChanged when clicked again.
        other = self.unstaged_list if staged else self.staged_list
        other.selectionModel().blockSignals(True)
        other.selectionModel().clearCurrentIndex()
        other.clearSelection()
        other.selectionModel().blockSignals(False)

        path = it.data(Qt.ItemDataRole.UserRole)
        self.state = self.state.select(path, staged)
        self._refresh_actions()
        if self.host is not None:
            self._fetch_diff(path, staged)

    def closeEvent(self, event):
        event.accept()
