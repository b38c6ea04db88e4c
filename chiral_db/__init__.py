"""ChiralDB: in-memory molecular fingerprint documents with exact Tanimoto search.

Documents are declared in a YAML config, built once at startup and queried
many times::

    db = ChiralDB.from_config_file("chiral_db.yaml")
    hits = db.query_similarity_for_smiles("ChEMBL", "c1ccccc1", 0.7)
"""

from .config import Config, DocumentSpec, load_config, parse_config
from .db import ChiralDB
from .errors import (
    ChiralDBError,
    ConfigurationError,
    DocumentNotFoundError,
    GenerationError,
    IndexOutOfRangeError,
    InvalidFingerprintError,
    LengthMismatchError,
    UnsupportedSourceError,
)
from .fingerprint import FingerprintDocument, FingerprintFamily, FingerprintKind, RDKitFingerprintGenerator, tanimoto
from .registry import DocumentRegistry

__version__ = "0.1.0"
