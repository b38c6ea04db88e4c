import numpy as np
import pytest

from chiral_db.errors import GenerationError
from chiral_db.fingerprint import FingerprintDocument, RDKitFingerprintGenerator, ecfp, fcfp, tanimoto
from chiral_db.utils import disable_rdkit_logging

disable_rdkit_logging()


class TestRDKitFingerprintGenerator:
    def setup_method(self):
        self.gen = RDKitFingerprintGenerator()

    @pytest.mark.parametrize("kind", [ecfp(0, 1024), ecfp(4, 2048), ecfp(10, 4096), fcfp(4, 512)])
    def test_width(self, kind):
        fp = self.gen.generate(kind, "O=C(C)Oc1ccccc1C(=O)O")
        assert fp.dtype == np.uint32
        assert fp.size == kind.span
        assert fp.any()

    def test_deterministic(self):
        kind = ecfp(4, 2048)
        a = self.gen.generate(kind, "c1ccccc1")
        b = self.gen.generate(kind, "c1ccccc1")
        assert np.array_equal(a, b)
        assert tanimoto(a, b) == 1.0

    def test_different_molecules(self):
        kind = ecfp(4, 4096)
        benzene = self.gen.generate(kind, "c1ccccc1")
        aspirin = self.gen.generate(kind, "O=C(C)Oc1ccccc1C(=O)O")
        assert 0.0 < tanimoto(benzene, aspirin) < 0.5

    @pytest.mark.parametrize("smiles", ["C1CC", "", None])
    def test_invalid_smiles(self, smiles):
        with pytest.raises(GenerationError):
            self.gen.generate(ecfp(4, 2048), smiles)

    def test_document_from_smiles(self):
        kind = ecfp(4, 2048)
        smiles = ["c1ccccc1", "CCCCCCN"]
        doc = FingerprintDocument.from_smiles(smiles, smiles, kind, self.gen)
        assert doc.ids == tuple(smiles)
        assert doc.data.size == doc.bits_count() // 32 * 2
