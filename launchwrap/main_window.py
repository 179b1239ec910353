#===============================================================================
#  Launcher_Rewriter | launchwrap/main_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  Small Metro-style window around the rewriter:
#    - pick an installed application (.app bundle or folder)
#    - edit the ordered profile list and the launcher strategy
#    - wrap / restore, with results and log locations in message boxes
#    - settings persist in launchwrap_config.json
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QProgressDialog,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .command_runner import tools_log_path
from .config import config_to_rewrite_config, save_config
from .constants import APP_TITLE, LOG_FILE_NAME, METRO_BG
from .errors import CorruptedInstallation, RewriteError
from .models import RewriteOutcome, Strategy
from .rewriter import is_wrapped, restore, rewrite

log = logging.getLogger(__name__)

PROGRESS_STYLE = (
    "QProgressDialog{background:#1a1a1a;color:white;}"
    " QLabel{color:white;}"
    " QPushButton{color:white;background:#222;border:1px solid #2a2a2a;padding:6px;}"
)

STRATEGY_LABELS = [
    ("Shell script", Strategy.SCRIPT),
    ("Native stub (compiled)", Strategy.COMPILED),
]


class MainWindow(QMainWindow):
    def __init__(self, config_path: Path, config: dict):
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        self.config_path = config_path
        self.config = config

        self.setStyleSheet(f"""
        QMainWindow {{ background: {METRO_BG}; }}
        QLabel, QCheckBox {{ color: white; font-family: "Segoe UI"; }}
        QLineEdit, QPlainTextEdit, QComboBox {{
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 4px;
        }}
        QPushButton {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px 10px;
        }}
        QPushButton:hover {{ background: #222; }}
        QPushButton:pressed {{ background: #2a2a2a; }}
        """)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        layout.addWidget(QLabel(
            f"<b>{APP_TITLE}</b> — launch an app inside your login-shell environment"
        ))

        # Application picker
        row = QHBoxLayout()
        self.app_edit = QLineEdit(self.config.get("last_app_path", ""))
        self.app_edit.setPlaceholderText("/Applications/Some.app")
        self.app_edit.textChanged.connect(self.update_status)
        row.addWidget(self.app_edit, 1)
        btn_browse = QPushButton("Browse…")
        btn_browse.clicked.connect(self.browse_app)
        row.addWidget(btn_browse)
        layout.addLayout(row)

        # Profiles
        layout.addWidget(QLabel("Profiles to source (relative to your home folder, one per line, in order):"))
        self.profiles_edit = QPlainTextEdit("\n".join(self.config.get("profiles") or []))
        self.profiles_edit.setFixedHeight(110)
        layout.addWidget(self.profiles_edit)

        # Strategy + signing
        opts = QHBoxLayout()
        opts.addWidget(QLabel("Launcher:"))
        self.strategy_combo = QComboBox()
        for label, strategy in STRATEGY_LABELS:
            self.strategy_combo.addItem(label, strategy.value)
        idx = self.strategy_combo.findData(str(self.config.get("strategy", Strategy.SCRIPT.value)))
        self.strategy_combo.setCurrentIndex(max(idx, 0))
        opts.addWidget(self.strategy_combo)
        opts.addStretch(1)
        self.chk_codesign = QCheckBox("Re-sign launcher")
        self.chk_codesign.setChecked(bool(self.config.get("codesign")))
        opts.addWidget(self.chk_codesign)
        self.chk_required = QCheckBox("Signing required")
        self.chk_required.setChecked(bool(self.config.get("signing_required")))
        opts.addWidget(self.chk_required)
        layout.addLayout(opts)

        # Actions
        actions = QHBoxLayout()
        self.status_label = QLabel("")
        actions.addWidget(self.status_label, 1)
        self.btn_restore = QPushButton("Restore original")
        self.btn_restore.clicked.connect(self.restore_app)
        actions.addWidget(self.btn_restore)
        self.btn_wrap = QPushButton("Wrap")
        self.btn_wrap.clicked.connect(self.wrap_app)
        actions.addWidget(self.btn_wrap)
        layout.addLayout(actions)
        layout.addStretch(1)

        self.update_status()

    # ----------------------------
    # Helpers
    # ----------------------------
    def browse_app(self):
        start = self.app_edit.text().strip() or "/Applications"
        folder = QFileDialog.getExistingDirectory(self, "Choose application", start)
        if folder:
            self.app_edit.setText(folder)

    def _collect_config(self) -> dict:
        self.config["last_app_path"] = self.app_edit.text().strip()
        self.config["profiles"] = [
            ln.strip() for ln in self.profiles_edit.toPlainText().splitlines() if ln.strip()
        ]
        self.config["strategy"] = self.strategy_combo.currentData()
        self.config["codesign"] = self.chk_codesign.isChecked()
        self.config["signing_required"] = self.chk_required.isChecked()
        save_config(self.config_path, self.config)
        return self.config

    def update_status(self):
        app = self.app_edit.text().strip()
        if not app or not Path(app).expanduser().exists():
            self.status_label.setText("")
            self.btn_restore.setEnabled(False)
            return
        try:
            wrapped = is_wrapped(app)
        except RewriteError:
            self.status_label.setText("No executable found")
            self.btn_restore.setEnabled(False)
            return
        self.status_label.setText("Already wrapped" if wrapped else "Not wrapped")
        self.btn_restore.setEnabled(wrapped)

    def _log_hint(self) -> str:
        log_dir = Path(str(self.config.get("log_dir", ""))).expanduser()
        return f"Logs:\n{log_dir / LOG_FILE_NAME}\n{tools_log_path(log_dir)}"

    # ----------------------------
    # Actions
    # ----------------------------
    def wrap_app(self):
        app = self.app_edit.text().strip()
        if not app:
            QMessageBox.warning(self, "No application", "Choose an application first.")
            return

        try:
            cfg = config_to_rewrite_config(self._collect_config())
        except ValueError as e:
            QMessageBox.critical(self, "Invalid settings", str(e))
            return

        prog = QProgressDialog("Rewriting launcher…", "Close", 0, 0, self)
        prog.setStyleSheet(PROGRESS_STYLE)
        prog.setWindowTitle("Wrap")
        prog.setWindowModality(Qt.WindowModal)
        prog.setMinimumDuration(0)
        prog.setValue(0)
        QApplication.processEvents()

        try:
            outcome = rewrite(app, config=cfg)
            if outcome is RewriteOutcome.ALREADY_WRAPPED:
                QMessageBox.information(self, "Nothing to do", f"{app} is already wrapped.")
            else:
                QMessageBox.information(self, "Wrapped", f"{app} now launches through your shell profiles.")
        except CorruptedInstallation as e:
            log.critical("%s", e)
            QMessageBox.critical(
                self,
                "Installation damaged",
                f"{e}\n\nMove {e.backup_path} back to {e.entry_point} by hand.\n\n{self._log_hint()}",
            )
        except RewriteError as e:
            log.error("Wrap failed: %s", e)
            QMessageBox.critical(self, "Wrap failed", f"{e}\n\n{self._log_hint()}")
        finally:
            prog.close()
            self.update_status()

    def restore_app(self):
        app = self.app_edit.text().strip()
        res = QMessageBox.question(
            self,
            "Restore original",
            f"Remove the launcher and put the original executable of\n{app}\nback in place?",
            QMessageBox.Yes | QMessageBox.No,
        )
        if res != QMessageBox.Yes:
            return
        try:
            if restore(app):
                QMessageBox.information(self, "Restored", "Original executable restored.")
        except RewriteError as e:
            QMessageBox.critical(self, "Restore failed", f"{e}\n\n{self._log_hint()}")
        finally:
            self.update_status()
