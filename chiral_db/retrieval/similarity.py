from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from ..fingerprint.document import FingerprintDocument
from ..fingerprint.generator import FingerprintGenerator, RDKitFingerprintGenerator
from ..fingerprint.words import as_words, bulk_tanimoto

logger = logging.getLogger(__name__)

# Rows scanned per numpy pass; bounds the temporary AND/OR buffers.
SCAN_BLOCK_ROWS = 65536

_default_generator: Optional[FingerprintGenerator] = None


def _get_default_generator() -> FingerprintGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = RDKitFingerprintGenerator()
    return _default_generator


@dataclass(frozen=True)
class SimilarityHit:
    index: int
    identifier: str
    score: float


def _check_cutoff(cut_off: float) -> float:
    cut_off = float(cut_off)
    if not 0.0 <= cut_off <= 1.0:
        raise ValueError(f"cut_off must be within [0, 1], got {cut_off}")
    return cut_off


def similarity_scores(query_fp, fp_doc: FingerprintDocument) -> np.ndarray:
    """Tanimoto of ``query_fp`` against every row of ``fp_doc``, in row order."""
    query = as_words(query_fp, span=fp_doc.span)
    matrix = fp_doc.matrix()
    n = matrix.shape[0]
    if n == 0:
        return np.zeros(0, dtype=np.float64)

    sims = np.empty(n, dtype=np.float64)
    for start in range(0, n, SCAN_BLOCK_ROWS):
        stop = min(start + SCAN_BLOCK_ROWS, n)
        sims[start:stop] = bulk_tanimoto(query, matrix[start:stop])
    return sims


def query_similarity(query_fp, fp_doc: FingerprintDocument, cut_off: float) -> Dict[str, float]:
    """Exhaustive scan: every identifier whose Tanimoto with ``query_fp`` is >= ``cut_off``.

    If an identifier occurs in several rows, the last matching row wins.
    """
    cut_off = _check_cutoff(cut_off)
    sims = similarity_scores(query_fp, fp_doc)
    ids = fp_doc.ids
    return {ids[i]: float(sims[i]) for i in np.flatnonzero(sims >= cut_off)}


def query_similarity_for_smiles(
    smiles: str,
    fp_doc: FingerprintDocument,
    cut_off: float,
    generator: Optional[FingerprintGenerator] = None,
) -> Dict[str, float]:
    """Fingerprint ``smiles`` with the document's own kind, then scan."""
    generator = generator or _get_default_generator()
    query_fp = generator.generate(fp_doc.kind, smiles)
    return query_similarity(query_fp, fp_doc, cut_off)


def query_named(
    registry,
    doc_name: str,
    smiles: str,
    cut_off: float,
    generator: Optional[FingerprintGenerator] = None,
) -> Dict[str, float]:
    """Like :func:`query_similarity_for_smiles`, looking the document up by name.

    An unknown document yields an empty result rather than an error.
    """
    fp_doc = registry.get(doc_name)
    if fp_doc is None:
        logger.debug("Query against unknown document %r; returning no hits", doc_name)
        return {}
    return query_similarity_for_smiles(smiles, fp_doc, cut_off, generator)


def top_k_similar(query_fp, fp_doc: FingerprintDocument, k: int) -> List[SimilarityHit]:
    """The ``k`` most similar rows, best first.

    Hits with equal scores are ordered by row index.
    """
    k = int(k)
    if k <= 0:
        return []
    sims = similarity_scores(query_fp, fp_doc)
    if sims.size == 0:
        return []

    if k >= sims.size:
        top_pos = np.arange(sims.size)
    else:
        # every row scoring at least the k-th best, ties included
        kth = -np.partition(-sims, k - 1)[k - 1]
        top_pos = np.flatnonzero(sims >= kth)
    top_pos = top_pos[np.lexsort((top_pos, -sims[top_pos]))][:k]

    ids = fp_doc.ids
    return [SimilarityHit(index=int(p), identifier=ids[p], score=float(sims[p])) for p in top_pos]
