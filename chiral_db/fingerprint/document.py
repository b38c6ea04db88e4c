"""Fingerprint documents.

A document is an immutable collection of ``(identifier, fingerprint)`` rows
sharing one :class:`FingerprintKind`. Fingerprints are stored row-major in a
single flat uint32 buffer: row ``i`` occupies ``data[i*span:(i+1)*span]``.

Create a document from a list of SMILES, using the SMILES as identifiers::

    kind = ecfp(4, 2048)
    smiles = ["c1ccccc1", "CCCCCCN"]
    doc = FingerprintDocument.from_smiles(smiles, smiles, kind, RDKitFingerprintGenerator())
"""

from __future__ import annotations

import logging
import operator
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from ..errors import ConfigurationError, GenerationError, IndexOutOfRangeError, LengthMismatchError
from .generator import FingerprintGenerator
from .kind import FingerprintKind
from .words import WORD_DTYPE, as_words

logger = logging.getLogger(__name__)

ON_ERROR_POLICIES = ("abort", "skip")


class FingerprintDocument:
    def __init__(self, kind: FingerprintKind, ids: Sequence[str], data: np.ndarray):
        span = kind.span
        data = np.array(data, dtype=WORD_DTYPE, copy=True).reshape(-1)
        ids = tuple(str(i) for i in ids)
        if len(ids) * span != data.size:
            raise LengthMismatchError(
                f"{len(ids)} identifiers with span {span} need {len(ids) * span} words, got {data.size}"
            )
        data.setflags(write=False)

        self._kind = kind
        self._ids = ids
        self._data = data
        self._span = span

    # Construction

    @classmethod
    def from_words(cls, ids: Sequence[str], rows: Iterable, kind: FingerprintKind) -> "FingerprintDocument":
        """Build from precomputed fingerprints, one word row per identifier."""
        ids = list(ids)
        rows = [as_words(r) for r in rows]
        if len(ids) != len(rows):
            raise LengthMismatchError(f"{len(rows)} fingerprints but {len(ids)} identifiers")
        for i, row in enumerate(rows):
            if row.size != kind.span:
                raise GenerationError(
                    f"Fingerprint for {ids[i]!r} has {row.size} words, {kind.describe()} needs {kind.span}"
                )
        data = np.concatenate(rows) if rows else np.empty(0, dtype=WORD_DTYPE)
        return cls(kind, ids, data)

    @classmethod
    def from_smiles(
        cls,
        smiles: Sequence[str],
        ids: Sequence[str],
        kind: FingerprintKind,
        generator: FingerprintGenerator,
        *,
        on_error: str = "abort",
        progress: bool = False,
    ) -> "FingerprintDocument":
        if len(smiles) != len(ids):
            raise LengthMismatchError(f"{len(smiles)} structures but {len(ids)} identifiers")
        return cls._build(zip(ids, smiles), kind, generator, on_error=on_error, progress=progress, total=len(ids))

    @classmethod
    def from_source(
        cls,
        source,
        kind: FingerprintKind,
        generator: FingerprintGenerator,
        *,
        on_error: str = "abort",
        progress: bool = False,
    ) -> "FingerprintDocument":
        """Build from a corpus source yielding ``(identifier, smiles)`` pairs."""
        return cls._build(source.iter_records(), kind, generator, on_error=on_error, progress=progress)

    @classmethod
    def _build(
        cls,
        records: Iterable[Tuple[str, str]],
        kind: FingerprintKind,
        generator: FingerprintGenerator,
        *,
        on_error: str,
        progress: bool,
        total: Optional[int] = None,
    ) -> "FingerprintDocument":
        if on_error not in ON_ERROR_POLICIES:
            raise ConfigurationError(f"on_error must be one of {ON_ERROR_POLICIES}, got {on_error!r}")

        span = kind.span
        ids: List[str] = []
        rows: List[np.ndarray] = []
        skipped = 0

        it = records
        if progress:
            it = tqdm(records, total=total, desc=f"Building fingerprints ({kind.tag})")

        for rec_id, smiles in it:
            try:
                row = as_words(generator.generate(kind, smiles))
                if row.size != span:
                    raise GenerationError(
                        f"Generator returned {row.size} words for {rec_id!r}, {kind.describe()} needs {span}"
                    )
            except GenerationError as e:
                if on_error == "abort":
                    raise
                skipped += 1
                logger.warning("Skipping %s: %s", rec_id, e)
                continue
            ids.append(str(rec_id))
            rows.append(row)

        if skipped:
            logger.warning("Skipped %d structure(s) while building %s document", skipped, kind.tag)
        data = np.concatenate(rows) if rows else np.empty(0, dtype=WORD_DTYPE)
        return cls(kind, ids, data)

    # Access

    @property
    def kind(self) -> FingerprintKind:
        return self._kind

    @property
    def span(self) -> int:
        return self._span

    @property
    def ids(self) -> Tuple[str, ...]:
        return self._ids

    @property
    def data(self) -> np.ndarray:
        return self._data

    def __len__(self) -> int:
        return len(self._ids)

    def entry_count(self) -> int:
        return len(self._ids)

    def bits_count(self) -> int:
        return self._kind.nbits

    def _check_index(self, index: int) -> int:
        if isinstance(index, (bool, np.bool_)):
            raise TypeError(f"Row index must be an integer, got {index!r}")
        index = operator.index(index)
        if index < 0 or index >= len(self._ids):
            raise IndexOutOfRangeError(f"Row {index} out of range for document with {len(self._ids)} entries")
        return index

    def fingerprint_at(self, index: int) -> np.ndarray:
        index = self._check_index(index)
        return self._data[index * self._span:(index + 1) * self._span]

    def identifier_at(self, index: int) -> str:
        return self._ids[self._check_index(index)]

    def matrix(self) -> np.ndarray:
        """Read-only (entry_count, span) view of the fingerprint buffer."""
        return self._data.reshape(len(self._ids), self._span)

    def describe(self) -> str:
        return f"{len(self._ids)}\t{self._kind.describe()}"

    def __repr__(self) -> str:
        return f"FingerprintDocument(kind={self._kind.tag}, nbits={self._kind.nbits}, entries={len(self._ids)})"
