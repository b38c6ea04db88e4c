"""Source registry: maps a document's ``source`` tag to a corpus loader.

Adding a source kind:
1) implement a CorpusSource subclass in ``chiral_db.sources.*``
2) register its factory in ``_REGISTRY`` under its SourceKind
"""

from __future__ import annotations

from typing import Callable, Dict

from ..config import DocumentSpec
from ..errors import UnsupportedSourceError
from .base import CorpusSource, SourceKind
from .chembl import ChemblSource
from .csv_source import CsvSource


def _column_overrides(spec: DocumentSpec) -> Dict[str, str]:
    overrides = {}
    if spec.id_column:
        overrides["id_column"] = str(spec.id_column)
    if spec.smiles_column:
        overrides["smiles_column"] = str(spec.smiles_column)
    return overrides


_REGISTRY: Dict[SourceKind, Callable[[DocumentSpec], CorpusSource]] = {
    SourceKind.CHEMBL: lambda spec: ChemblSource(spec.filepath, **_column_overrides(spec)),
    SourceKind.CSV: lambda spec: CsvSource(spec.filepath, **_column_overrides(spec)),
}


def supported_sources():
    return sorted(k.value for k in _REGISTRY)


def make_source(spec: DocumentSpec) -> CorpusSource:
    factory = _REGISTRY.get(SourceKind(spec.source))
    if factory is None:
        raise UnsupportedSourceError(
            f"Source kind {SourceKind(spec.source).value!r} (document {spec.name!r}) is not implemented; "
            f"supported: {supported_sources()}"
        )
    return factory(spec)
