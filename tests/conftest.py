from typing import Dict, List, Sequence

import numpy as np
import pytest

from chiral_db.errors import GenerationError
from chiral_db.fingerprint import ecfp


class DictGenerator:
    """Looks fingerprints up in a fixed table instead of computing them."""

    def __init__(self, table: Dict[str, Sequence[int]]):
        self.table = dict(table)
        self.calls: List[str] = []

    def generate(self, kind, smiles):
        self.calls.append(smiles)
        if smiles not in self.table:
            raise GenerationError(f"Invalid SMILES: {smiles!r}")
        return np.asarray(self.table[smiles], dtype=np.uint32)


@pytest.fixture
def kind32():
    return ecfp(4, 32)


@pytest.fixture
def word_generator():
    return DictGenerator(
        {
            "A": [0b1100],
            "B": [0b1010],
            "C": [0b0001],
            "EMPTY": [0],
            "WIDE": [1, 2],
        }
    )


@pytest.fixture
def chembl_file(tmp_path):
    path = tmp_path / "chembl_chemreps.txt"
    path.write_text(
        "chembl_id\tcanonical_smiles\tstandard_inchi\tstandard_inchi_key\n"
        "CHEMBL1\tc1ccccc1\tInChI=1S/x\tKEY1\n"
        "CHEMBL2\tCc1ccccc1\tInChI=1S/y\tKEY2\n"
        "CHEMBL3\tCCO\tInChI=1S/z\tKEY3\n",
        encoding="utf-8",
    )
    return path
