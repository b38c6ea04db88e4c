"""Retrieval utilities (similarity scan, ranking, batch annotation).

This package is used by ChiralDB to:
- answer threshold queries against a single fingerprint document
- rank the nearest rows of a document for a query structure
- annotate tabular datasets with their nearest neighbours
"""

from .similarity import (
    SimilarityHit,
    query_named,
    query_similarity,
    query_similarity_for_smiles,
    similarity_scores,
    top_k_similar,
)
from .batch import annotate_dataframe
