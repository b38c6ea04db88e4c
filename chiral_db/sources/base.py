"""Corpus source interface.

A source turns an on-disk dump into ``(identifier, smiles)`` pairs. Order is
defined by the source and preserved by document construction.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from ..errors import ConfigurationError

Record = Tuple[str, str]


class SourceKind(str, Enum):
    CHEMBL = "Chembl"
    CSV = "Csv"
    ZINC = "Zinc"


class CorpusSource:
    """Base interface for all corpus loaders."""

    name: str = "source"

    def iter_records(self) -> Iterable[Record]:
        raise NotImplementedError


class TabularSource(CorpusSource):
    """Reads an id column and a SMILES column from a delimited text file."""

    sep: str = ","
    chunksize: int = 100_000

    def __init__(self, filepath: str, *, id_column: str, smiles_column: str):
        self.filepath = str(filepath)
        self.id_column = str(id_column)
        self.smiles_column = str(smiles_column)

    def _read_chunks(self) -> Iterator[pd.DataFrame]:
        if not os.path.isfile(self.filepath):
            raise ConfigurationError(f"{self.name} source file not found: {self.filepath}")

        header = pd.read_csv(self.filepath, sep=self.sep, nrows=0).columns
        missing = [c for c in (self.id_column, self.smiles_column) if c not in header]
        if missing:
            raise ConfigurationError(f"Missing column(s) {missing} in {self.filepath}")

        yield from pd.read_csv(
            self.filepath,
            sep=self.sep,
            usecols=[self.id_column, self.smiles_column],
            dtype=str,
            keep_default_na=False,
            chunksize=self.chunksize,
        )

    def iter_records(self) -> Iterator[Record]:
        for chunk in self._read_chunks():
            ids: List[str] = chunk[self.id_column].tolist()
            smiles: List[str] = chunk[self.smiles_column].tolist()
            yield from zip(ids, smiles)
