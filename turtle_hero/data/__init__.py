"""
Bundled game data: item and enemy catalogs, schemas, dialog scenarios.
"""

from pathlib import Path

BUNDLED_DATA_PATH = Path(__file__).resolve().parent

SCHEMA_PATH = BUNDLED_DATA_PATH / "schemas"
DIALOG_PATH = BUNDLED_DATA_PATH / "dialog"
