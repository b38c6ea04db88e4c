from __future__ import annotations

import logging
from typing import Union

from rdkit import RDLogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Send chiral_db logs to the console."""
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_chiral_db", False) for h in root.handlers):
        return

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch._chiral_db = True
    root.addHandler(ch)


def disable_rdkit_logging() -> None:
    """Silence RDKit's SMILES parser warnings; invalid input is reported by chiral_db."""
    RDLogger.DisableLog("rdApp.*")
