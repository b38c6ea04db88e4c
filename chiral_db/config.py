"""Database configuration.

Documents are declared in a YAML file (``./chiral_db.yaml`` by default, or the
path in ``$CHIRAL_DB_CONFIG``)::

    fp_doc:
      - name: ChEMBL
        kind: ECFP4
        nbits: 2048
        filepath: ./chembl_33_chemreps.txt
        source: Chembl
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigurationError
from .fingerprint.document import ON_ERROR_POLICIES
from .fingerprint.kind import FingerprintKind
from .sources.base import SourceKind

DEFAULT_CONFIG_PATH = "./chiral_db.yaml"
CONFIG_ENV_VAR = "CHIRAL_DB_CONFIG"

_REQUIRED_FIELDS = ("name", "kind", "nbits", "filepath", "source")


@dataclass(frozen=True)
class DocumentSpec:
    name: str
    kind: FingerprintKind
    filepath: str
    source: SourceKind
    id_column: Optional[str] = None
    smiles_column: Optional[str] = None
    on_error: str = "abort"

    @property
    def nbits(self) -> int:
        return self.kind.nbits


@dataclass(frozen=True)
class Config:
    fp_doc: Tuple[DocumentSpec, ...] = field(default_factory=tuple)


def _parse_nbits(raw: Any, doc_name: str) -> int:
    if isinstance(raw, bool):
        raise ConfigurationError(f"fp_doc {doc_name!r}: nbits must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"fp_doc {doc_name!r}: nbits must be an integer, got {raw!r}") from None


def parse_document_spec(entry: Dict[str, Any]) -> DocumentSpec:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"fp_doc entries must be mappings, got {type(entry).__name__}")

    missing = [k for k in _REQUIRED_FIELDS if entry.get(k) in (None, "")]
    if missing:
        raise ConfigurationError(f"fp_doc {entry.get('name', '?')!r} is missing field(s): {missing}")

    name = str(entry["name"])
    kind = FingerprintKind.from_tag(str(entry["kind"]), _parse_nbits(entry["nbits"], name))

    try:
        source = SourceKind(str(entry["source"]))
    except ValueError:
        known = [s.value for s in SourceKind]
        raise ConfigurationError(f"fp_doc {name!r}: unknown source {entry['source']!r}, expected one of {known}") from None

    on_error = str(entry.get("on_error", "abort"))
    if on_error not in ON_ERROR_POLICIES:
        raise ConfigurationError(f"fp_doc {name!r}: on_error must be one of {ON_ERROR_POLICIES}, got {on_error!r}")

    return DocumentSpec(
        name=name,
        kind=kind,
        filepath=str(entry["filepath"]),
        source=source,
        id_column=entry.get("id_column"),
        smiles_column=entry.get("smiles_column"),
        on_error=on_error,
    )


def parse_config(raw: Optional[Dict[str, Any]]) -> Config:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    entries = raw.get("fp_doc") or []
    if not isinstance(entries, list):
        raise ConfigurationError("`fp_doc` must be a list of document specifications")

    specs: List[DocumentSpec] = [parse_document_spec(e) for e in entries]
    return Config(fp_doc=tuple(specs))


def resolve_config_path(path: Optional[str] = None) -> str:
    if path:
        return str(path)
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_config(path: Optional[str] = None) -> Config:
    config_path = resolve_config_path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Error reading configuration file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    return parse_config(raw)
