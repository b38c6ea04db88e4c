from __future__ import annotations

from .base import TabularSource


class ChemblSource(TabularSource):
    """ChEMBL ``chemreps`` dump (tab-separated, one compound per line).

    Expected header: ``chembl_id  canonical_smiles  standard_inchi  standard_inchi_key``.
    """

    name = "Chembl"
    sep = "\t"

    def __init__(self, filepath: str, *, id_column: str = "chembl_id", smiles_column: str = "canonical_smiles"):
        super().__init__(filepath, id_column=id_column, smiles_column=smiles_column)
