"""Corpus loaders yielding ``(identifier, smiles)`` pairs."""

from .base import CorpusSource, SourceKind, TabularSource
from .chembl import ChemblSource
from .csv_source import CsvSource
