from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import Config, load_config
from .errors import DocumentNotFoundError
from .fingerprint.document import FingerprintDocument
from .fingerprint.generator import FingerprintGenerator, RDKitFingerprintGenerator
from .registry import DocumentRegistry
from .retrieval import similarity
from .retrieval.similarity import SimilarityHit

logger = logging.getLogger(__name__)


class ChiralDB:
    """Named fingerprint documents plus the generator used to query them."""

    def __init__(self, registry: DocumentRegistry, generator: Optional[FingerprintGenerator] = None):
        self.registry = registry
        self.generator = generator or RDKitFingerprintGenerator()

    @classmethod
    def from_config(
        cls,
        config: Config,
        generator: Optional[FingerprintGenerator] = None,
        *,
        strict: bool = True,
        progress: bool = False,
    ) -> "ChiralDB":
        generator = generator or RDKitFingerprintGenerator()
        registry = DocumentRegistry.load(config.fp_doc, generator, strict=strict, progress=progress)
        logger.info("Loaded %d fingerprint document(s)", len(registry))
        return cls(registry, generator)

    @classmethod
    def from_config_file(cls, path: Optional[str] = None, **kwargs) -> "ChiralDB":
        return cls.from_config(load_config(path), **kwargs)

    def get_document(self, doc_name: str) -> FingerprintDocument:
        fp_doc = self.registry.get(doc_name)
        if fp_doc is None:
            raise DocumentNotFoundError(doc_name)
        return fp_doc

    def desc_fingerprint_db(self) -> str:
        lines = ["\t\t".join(["Doc", "Entries", "FP Type"]), "=" * 50]
        lines.extend(f"{name}\t\t{doc.describe()}" for name, doc in self.registry.items())
        return "\n".join(lines)

    def describe(self) -> str:
        return self.desc_fingerprint_db()

    def query_similarity_for_smiles(self, doc_name: str, smiles: str, cut_off: float) -> Dict[str, float]:
        """Hits with Tanimoto >= ``cut_off``; empty if ``doc_name`` is unknown."""
        return similarity.query_named(self.registry, doc_name, smiles, cut_off, self.generator)

    def query_similarity(self, doc_name: str, query_fp, cut_off: float) -> Dict[str, float]:
        fp_doc = self.registry.get(doc_name)
        if fp_doc is None:
            logger.debug("Query against unknown document %r; returning no hits", doc_name)
            return {}
        return similarity.query_similarity(query_fp, fp_doc, cut_off)

    def top_k_for_smiles(self, doc_name: str, smiles: str, k: int) -> List[SimilarityHit]:
        fp_doc = self.get_document(doc_name)
        query_fp = self.generator.generate(fp_doc.kind, smiles)
        return similarity.top_k_similar(query_fp, fp_doc, k)
