# docid/extras.py
# Small helpers around the generator: JSON input/output, cache reports and
# comparing two runs.

import json
import re
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from .corpus import read_counts

_JSON_SUFFIX_RE = re.compile(r"\.json$", flags=re.I)


def derive_path(json_path, suffix: str) -> Path:
    """
    documents.json -> documents<suffix>, next to the input file.
    """
    json_path = Path(json_path)
    name = _JSON_SUFFIX_RE.sub("", json_path.name)
    return json_path.with_name(name + suffix)


def load_documents(path) -> List[str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File {path} does not exist")
    with open(path, "r", encoding="utf8") as f:
        documents = json.load(f)
    if not isinstance(documents, list):
        raise ValueError("JSON file must contain an array of strings")
    if not all(isinstance(doc, str) for doc in documents):
        raise ValueError("All elements in the array must be strings")
    return documents


def write_results(path, documents: List[str], ids: List[str]) -> Path:
    path = Path(path)
    results = [{"id": doc_id, "document": doc} for doc_id, doc in zip(ids, documents)]
    with open(path, "w", encoding="utf8") as f:
        json.dump(results, f, indent=2, ensure_ascii=False)
    return path


def corpus_summary(csv_path) -> Tuple[float, int, int]:
    """
    (average count, number of words, total count) of a word-frequency CSV.
    All zeros when no row parses.
    """
    counts = read_counts(csv_path)
    if not counts:
        return 0.0, 0, 0
    values = np.fromiter(counts.values(), dtype=np.int64, count=len(counts))
    return float(values.mean()), int(values.size), int(values.sum())


def _ids_by_document(items) -> Dict[str, str]:
    out = {}
    for item in items:
        if isinstance(item, dict) and item.get("document") and item.get("id"):
            out[item["document"]] = item["id"]
    return out


def diff_id_files(file1, file2) -> Tuple[Path, List[Dict[str, str]]]:
    """
    Compare two ID outputs by document text and write the differences to
    ``<file1 dir>/<stem1>_<stem2>_diff.json``.

    Documents with the same ID in both files are left out. Documents found
    in only one file carry only that file's ID.
    """
    file1, file2 = Path(file1), Path(file2)
    for p in (file1, file2):
        if not p.exists():
            raise FileNotFoundError(f"File {p} does not exist")

    with open(file1, "r", encoding="utf8") as f:
        data1 = json.load(f)
    with open(file2, "r", encoding="utf8") as f:
        data2 = json.load(f)
    if not isinstance(data1, list) or not isinstance(data2, list):
        raise ValueError("Both JSON files must contain arrays")

    ids1, ids2 = _ids_by_document(data1), _ids_by_document(data2)
    key1, key2 = f"id_{file1.stem}", f"id_{file2.stem}"

    differences: List[Dict[str, str]] = []
    for document, id1 in ids1.items():
        if document not in ids2:
            differences.append({key1: id1, "document": document})
        elif ids2[document] != id1:
            differences.append({key1: id1, key2: ids2[document], "document": document})
    for document, id2 in ids2.items():
        if document not in ids1:
            differences.append({key2: id2, "document": document})

    out_path = file1.parent / f"{file1.stem}_{file2.stem}_diff.json"
    with open(out_path, "w", encoding="utf8") as f:
        json.dump(differences, f, indent=2, ensure_ascii=False)
    return out_path, differences
