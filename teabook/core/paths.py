#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the teabook project.

The project structure:
    ROOT/
    ├── teabook/       # Library and CLI code
    ├── data/          # Trial datasets and the search-state database
    └── logs/          # Application logs

Every path can be overridden from the command line; these are the defaults.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/teabook/core/paths.py and navigates up
    the directory tree to find ROOT.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> teabook/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "teabook"
DATA_DIR = ROOT / "data"

# --- Datasets ---
DATASET_PATH = DATA_DIR / "dataset.yaml"

# --- Search state (history, saved searches) ---
DB_PATH = DATA_DIR / "teabook.db"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
