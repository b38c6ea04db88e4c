"""Document registry.

Maps document names to shared, read-only :class:`FingerprintDocument` objects.
The registry is built once (``DocumentRegistry.load``) and never mutated
afterwards, so it can be read from any number of threads without locking.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional

from .config import DocumentSpec
from .errors import GenerationError, UnsupportedSourceError
from .fingerprint.document import FingerprintDocument
from .fingerprint.generator import FingerprintGenerator
from .sources.registry import make_source

logger = logging.getLogger(__name__)


def build_document(
    spec: DocumentSpec,
    generator: FingerprintGenerator,
    *,
    progress: bool = False,
) -> FingerprintDocument:
    source = make_source(spec)
    t0 = time.perf_counter()
    doc = FingerprintDocument.from_source(
        source,
        spec.kind,
        generator,
        on_error=spec.on_error,
        progress=progress,
    )
    logger.info(
        "Built document %s: %d entries, %s, %.2fs",
        spec.name,
        doc.entry_count(),
        spec.kind.describe(),
        time.perf_counter() - t0,
    )
    return doc


class DocumentRegistry(Mapping):
    def __init__(self, documents: Optional[Mapping[str, FingerprintDocument]] = None):
        self._docs = MappingProxyType(dict(documents or {}))

    @classmethod
    def from_documents(cls, documents: Mapping[str, FingerprintDocument]) -> "DocumentRegistry":
        return cls(documents)

    @classmethod
    def load(
        cls,
        specs: Iterable[DocumentSpec],
        generator: FingerprintGenerator,
        *,
        strict: bool = True,
        progress: bool = False,
    ) -> "DocumentRegistry":
        """Build every document in ``specs``.

        With ``strict=False`` a document whose source is unsupported or whose
        structures fail to generate is logged and left out instead of aborting
        the whole load. Configuration errors always propagate. A later spec
        with the same name replaces an earlier one.
        """
        docs: Dict[str, FingerprintDocument] = {}
        for spec in specs:
            try:
                doc = build_document(spec, generator, progress=progress)
            except (UnsupportedSourceError, GenerationError) as e:
                if strict:
                    raise
                logger.error("Failed to build document %s: %s", spec.name, e)
                continue
            if spec.name in docs:
                logger.warning("Document %s defined more than once; keeping the later definition", spec.name)
            docs[spec.name] = doc
        return cls(docs)

    def get(self, name: str, default=None) -> Optional[FingerprintDocument]:
        return self._docs.get(name, default)

    def names(self) -> List[str]:
        return list(self._docs.keys())

    def __getitem__(self, name: str) -> FingerprintDocument:
        return self._docs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def __repr__(self) -> str:
        return f"DocumentRegistry({self.names()!r})"
