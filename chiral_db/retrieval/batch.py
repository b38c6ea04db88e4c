from __future__ import annotations

import logging
from typing import List

import pandas as pd
from tqdm import tqdm

from ..errors import GenerationError
from .similarity import top_k_similar

logger = logging.getLogger(__name__)


def annotate_dataframe(
    df: pd.DataFrame,
    db,
    doc_name: str,
    *,
    smiles_col: str = "smiles",
    max_size: int = 10,
    progress: bool = False,
) -> pd.DataFrame:
    """Attach the ``max_size`` nearest rows of ``doc_name`` to every input row.

    Adds ``retrieval_ids`` and ``retrieval_similarity`` (comma-joined, best
    first). Rows with an invalid SMILES get empty strings.
    """
    if smiles_col not in df.columns:
        raise ValueError(f"Missing column '{smiles_col}' in input dataframe.")

    fp_doc = db.get_document(doc_name)
    smiles_list = df[smiles_col].astype(str).tolist()

    id_list: List[str] = [""] * len(smiles_list)
    sim_list: List[str] = [""] * len(smiles_list)

    it = enumerate(smiles_list)
    if progress:
        it = tqdm(it, total=len(smiles_list), desc=f"Retrieving ({fp_doc.kind.tag})")

    n_invalid = 0
    for i, smi in it:
        try:
            qfp = db.generator.generate(fp_doc.kind, smi)
        except GenerationError as e:
            n_invalid += 1
            logger.warning("Row %d: %s", i, e)
            continue

        hits = top_k_similar(qfp, fp_doc, max_size)
        id_list[i] = ",".join(h.identifier for h in hits)
        sim_list[i] = ",".join(f"{h.score:.6f}" for h in hits)

    if n_invalid:
        logger.warning("%d of %d row(s) had no valid structure", n_invalid, len(smiles_list))

    out_df = df.copy()
    out_df["retrieval_ids"] = id_list
    out_df["retrieval_similarity"] = sim_list
    return out_df
