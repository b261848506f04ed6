from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml

from romancache.numerals.types import NumeralTables

TABLES_PATH = Path(__file__).with_name("numerals.yaml")


@lru_cache()
def load_tables() -> NumeralTables:
    with TABLES_PATH.open("r", encoding="utf-8") as fh:
        raw: Dict[str, Any] = yaml.safe_load(fh)
    return NumeralTables.from_raw(raw)
