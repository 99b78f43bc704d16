"""Payment config file loading."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml


def load_config(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(fh)
        else:
            data = json.load(fh)
    return data or {}


def load_payment_tables(path: str | Path) -> Dict[str, Any]:
    """Read ``pay_rates``, ``travel_tiers`` and ``bonuses`` from a file.

    Missing sections come back empty so a file may update only one table.
    """

    data = load_config(path)
    return {
        "pay_rates": dict(data.get("pay_rates") or {}),
        "travel_tiers": list(data.get("travel_tiers") or []),
        "bonuses": dict(data.get("bonuses") or {}),
    }
