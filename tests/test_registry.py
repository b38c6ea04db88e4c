import logging

import pytest

from chiral_db.config import parse_config
from chiral_db.errors import ConfigurationError, GenerationError, UnsupportedSourceError
from chiral_db.fingerprint import FingerprintDocument
from chiral_db.registry import DocumentRegistry
from chiral_db.sources import ChemblSource, CsvSource
from chiral_db.sources.registry import make_source

from .conftest import DictGenerator

SMILES_WORDS = {
    "c1ccccc1": [0b1100],
    "Cc1ccccc1": [0b1110],
    "CCO": [0b0001],
}


@pytest.fixture
def generator():
    return DictGenerator(SMILES_WORDS)


def _spec(name, path, source="Chembl", nbits=32, **extra):
    entry = {"name": name, "kind": "ECFP4", "nbits": nbits, "filepath": str(path), "source": source}
    entry.update(extra)
    return parse_config({"fp_doc": [entry]}).fp_doc[0]


class TestSources:
    def test_chembl_records(self, chembl_file):
        records = list(ChemblSource(str(chembl_file)).iter_records())
        assert records == [("CHEMBL1", "c1ccccc1"), ("CHEMBL2", "Cc1ccccc1"), ("CHEMBL3", "CCO")]

    def test_csv_records_with_custom_columns(self, tmp_path):
        path = tmp_path / "cpds.csv"
        path.write_text("smi,cid,mw\nCCO,E1,46.07\nc1ccccc1,B1,78.11\n", encoding="utf-8")
        records = list(CsvSource(str(path), id_column="cid", smiles_column="smi").iter_records())
        assert records == [("E1", "CCO"), ("B1", "c1ccccc1")]

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "cpds.csv"
        path.write_text("name,structure\nE1,CCO\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            list(CsvSource(str(path)).iter_records())

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            list(ChemblSource(str(tmp_path / "missing.txt")).iter_records())

    def test_zinc_is_unsupported(self, tmp_path):
        with pytest.raises(UnsupportedSourceError):
            make_source(_spec("zinc", tmp_path / "zinc.txt", source="Zinc"))


class TestDocumentRegistry:
    def test_load_chembl(self, chembl_file, generator):
        registry = DocumentRegistry.load([_spec("ChEMBL", chembl_file)], generator)
        doc = registry.get("ChEMBL")
        assert isinstance(doc, FingerprintDocument)
        assert doc.ids == ("CHEMBL1", "CHEMBL2", "CHEMBL3")
        assert doc.entry_count() * doc.span == doc.data.size
        assert "ChEMBL" in registry
        assert registry.names() == ["ChEMBL"]
        assert len(registry) == 1

    def test_get_missing_returns_none(self, generator):
        registry = DocumentRegistry.load([], generator)
        assert registry.get("nope") is None
        assert len(registry) == 0

    def test_unsupported_source_fails_loading(self, chembl_file, tmp_path, generator):
        specs = [_spec("ChEMBL", chembl_file), _spec("ZINC15", tmp_path / "zinc.txt", source="Zinc")]
        with pytest.raises(UnsupportedSourceError):
            DocumentRegistry.load(specs, generator)

    def test_lenient_loading_skips_failed_documents(self, chembl_file, tmp_path, generator, caplog):
        bad_csv = tmp_path / "bad.csv"
        bad_csv.write_text("id,smiles\nX1,C1CC\n", encoding="utf-8")
        specs = [
            _spec("ZINC15", tmp_path / "zinc.txt", source="Zinc"),
            _spec("broken", bad_csv, source="Csv"),
            _spec("ChEMBL", chembl_file),
        ]
        with caplog.at_level(logging.ERROR, logger="chiral_db.registry"):
            registry = DocumentRegistry.load(specs, generator, strict=False)
        assert registry.names() == ["ChEMBL"]
        assert "ZINC15" in caplog.text
        assert "broken" in caplog.text

    def test_generation_error_aborts_strict_loading(self, tmp_path, generator):
        bad_csv = tmp_path / "bad.csv"
        bad_csv.write_text("id,smiles\nX1,CCO\nX2,C1CC\n", encoding="utf-8")
        with pytest.raises(GenerationError):
            DocumentRegistry.load([_spec("broken", bad_csv, source="Csv")], generator)

    def test_skip_policy_from_spec(self, tmp_path, generator):
        csv = tmp_path / "mixed.csv"
        csv.write_text("id,smiles\nX1,CCO\nX2,C1CC\nX3,c1ccccc1\n", encoding="utf-8")
        registry = DocumentRegistry.load([_spec("mixed", csv, source="Csv", on_error="skip")], generator)
        assert registry["mixed"].ids == ("X1", "X3")

    def test_configuration_error_always_propagates(self, tmp_path, generator):
        spec = _spec("gone", tmp_path / "missing.txt")
        with pytest.raises(ConfigurationError):
            DocumentRegistry.load([spec], generator, strict=False)

    def test_duplicate_names_last_wins(self, chembl_file, tmp_path, generator, caplog):
        csv = tmp_path / "ethanol.csv"
        csv.write_text("id,smiles\nE1,CCO\n", encoding="utf-8")
        specs = [_spec("dup", chembl_file), _spec("dup", csv, source="Csv")]
        with caplog.at_level(logging.WARNING, logger="chiral_db.registry"):
            registry = DocumentRegistry.load(specs, generator)
        assert registry["dup"].ids == ("E1",)
        assert "more than once" in caplog.text

    def test_registry_is_read_only(self, chembl_file, generator):
        registry = DocumentRegistry.load([_spec("ChEMBL", chembl_file)], generator)
        with pytest.raises(TypeError):
            registry["other"] = registry["ChEMBL"]
        with pytest.raises(TypeError):
            registry._docs["other"] = registry["ChEMBL"]

    def test_documents_are_shared_not_copied(self, chembl_file, generator):
        registry = DocumentRegistry.load([_spec("ChEMBL", chembl_file)], generator)
        assert registry.get("ChEMBL") is registry["ChEMBL"]
