# scripts/csv_to_documents.py
# Here, we are converting a CSV export (one text per row, e.g. a snippets table)
# into the JSON list of documents read by `docid generate`.

import argparse
import json
import os

import pandas as pd

TEXT_COLUMNS = ("content", "text", "document")


def main():
    parser = argparse.ArgumentParser(description="Convert a CSV column into a JSON list of documents")
    parser.add_argument("csv_file")
    parser.add_argument("out_file", nargs="?", default=None)
    parser.add_argument("--column", default=None, help="Text column (default: first of content/text/document)")
    args = parser.parse_args()

    out_file = args.out_file or os.path.splitext(args.csv_file)[0] + ".json"

    print(f"=== Loading {args.csv_file} ===")
    df = pd.read_csv(args.csv_file, encoding="utf8", low_memory=False)

    # here, we are checking which columns exist
    column = args.column or next((c for c in TEXT_COLUMNS if c in df.columns), None)
    if column is None or column not in df.columns:
        raise SystemExit(f"No text column found; pass --column (columns: {', '.join(map(str, df.columns))})")

    texts = df[column].dropna().astype(str).str.strip()
    documents = texts[texts != ""].tolist()

    out_dir = os.path.dirname(out_file)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_file, "w", encoding="utf8") as f:
        json.dump(documents, f, indent=2, ensure_ascii=False)

    print(f" Wrote {len(documents)} documents to {out_file}")
    print(f"You can now run 'docid generate {out_file}' to create their IDs.")


if __name__ == "__main__":
    main()
