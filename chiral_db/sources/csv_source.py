from __future__ import annotations

from .base import TabularSource


class CsvSource(TabularSource):
    """Comma-separated file with an identifier column and a SMILES column."""

    name = "Csv"
    sep = ","

    def __init__(self, filepath: str, *, id_column: str = "id", smiles_column: str = "smiles"):
        super().__init__(filepath, id_column=id_column, smiles_column=smiles_column)
