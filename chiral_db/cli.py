"""CLI entrypoint.

Commands:
- `chiral-db describe [--config chiral_db.yaml]`
- `chiral-db query --doc ChEMBL --smiles 'c1ccccc1' [--cutoff 0.7] [--top_k 10]`
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .db import ChiralDB
from .errors import ChiralDBError
from .utils import disable_rdkit_logging, setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chiral-db")
    p.add_argument("--config", type=str, default=None, help="YAML config (default: $CHIRAL_DB_CONFIG or ./chiral_db.yaml)")
    p.add_argument("--log_level", type=str, default="WARNING")
    p.add_argument("--progress", action="store_true", default=False, help="Show progress bars while building documents")
    p.add_argument("--lenient", action="store_true", default=False, help="Skip documents that fail to build")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("describe")

    pq = sub.add_parser("query")
    pq.add_argument("--doc", type=str, required=True)
    pq.add_argument("--smiles", type=str, required=True)
    pq.add_argument("--cutoff", type=float, default=0.7)
    pq.add_argument("--top_k", type=int, default=None, help="Rank the k best hits instead of applying --cutoff")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not isinstance(logging.getLevelName(args.log_level.upper()), int):
        parser.error(f"unknown --log_level: {args.log_level}")
    if args.cmd == "query" and not 0.0 <= args.cutoff <= 1.0:
        parser.error(f"--cutoff must be within [0, 1], got {args.cutoff}")
    if args.cmd == "query" and args.top_k is not None and args.top_k <= 0:
        parser.error(f"--top_k must be positive, got {args.top_k}")

    setup_logging(args.log_level)
    disable_rdkit_logging()

    try:
        db = ChiralDB.from_config_file(args.config, strict=not args.lenient, progress=args.progress)

        if args.cmd == "describe":
            print(db.describe())
            return 0

        if args.cmd == "query":
            if args.top_k is not None:
                hits = [(h.identifier, h.score) for h in db.top_k_for_smiles(args.doc, args.smiles, args.top_k)]
            else:
                if args.doc not in db.registry:
                    logger.warning("Unknown document %r", args.doc)
                res = db.query_similarity_for_smiles(args.doc, args.smiles, args.cutoff)
                hits = sorted(res.items(), key=lambda x: (-x[1], x[0]))
            for identifier, score in hits:
                print(f"{identifier}\t{score:.6f}")
            return 0

        raise ValueError(f"Unknown command: {args.cmd}")
    except ChiralDBError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
