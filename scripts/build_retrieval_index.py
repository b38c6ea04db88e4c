import argparse
import os

import pandas as pd

from chiral_db import ChiralDB
from chiral_db.retrieval import annotate_dataframe
from chiral_db.utils import disable_rdkit_logging, setup_logging


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--doc", type=str, required=True)
    parser.add_argument("--input_file", type=str, required=True)
    parser.add_argument("--output_file", type=str, default=None)
    parser.add_argument("--smiles_column", type=str, default="smiles")
    parser.add_argument("--max_size", type=int, default=10)
    parser.add_argument("--log_level", type=str, default="INFO")
    args = parser.parse_args()

    setup_logging(args.log_level)
    disable_rdkit_logging()

    if args.output_file is None:
        base, ext = os.path.splitext(args.input_file)
        args.output_file = f"{base}_{args.doc}{ext or '.csv'}"

    db = ChiralDB.from_config_file(args.config, progress=True)
    input_df = pd.read_csv(args.input_file, index_col=False)

    out_df = annotate_dataframe(
        input_df,
        db,
        args.doc,
        smiles_col=args.smiles_column,
        max_size=args.max_size,
        progress=True,
    )
    out_df.to_csv(args.output_file, index=False)
    print(f"Saved: {args.output_file}")


if __name__ == "__main__":
    main()
