#===============================================================================
#  Launcher_Rewriter  |  Environment-injecting launcher for macOS apps
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-17
#  Last Update : 2026-10-17
#
#  Summary
#  -------
#  GUI apps started from Finder/Dock do not see the PATH and variables set up
#  in shell profiles. This tool rewrites an installed application so that its
#  entry point first sources the user's login profiles, then execs the real
#  executable with the original arguments.
#
#    Foo.app/Contents/MacOS/
#      - Foo             -> generated launcher (script or native stub)
#      - Foo.original    -> the untouched original executable
#
#  Re-running on an already wrapped app changes nothing.
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Third-Party Components
#  ----------------------
#  This project uses PySide6, which is licensed separately by its authors.
#  Ensure compliance with its license terms when distributing this software.
#===============================================================================

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from launchwrap.config import load_config
from launchwrap.constants import CONFIG_FILE_NAME, WINDOW_SIZE
from launchwrap.log_setup import setup_logging
from launchwrap.main_window import MainWindow


if __name__ == "__main__":
    config_path = Path(__file__).resolve().parent / CONFIG_FILE_NAME
    config = load_config(config_path)
    setup_logging(Path(str(config["log_dir"])).expanduser(), debug="--debug" in sys.argv)
    app = QApplication(sys.argv)
    w = MainWindow(config_path, config)
    w.resize(*WINDOW_SIZE)
    w.show()
    sys.exit(app.exec())
