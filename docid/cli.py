# docid/cli.py
"""Command line entry point: ``docid generate|average|diff``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings
from .constants import DOC_NUMBER_RE
from .errors import CacheLoadError, CacheWriteError, DocIdError
from .extras import corpus_summary, derive_path, diff_id_files, load_documents, write_results
from .generator import DocumentIDGenerator


def parse_doc_numbers(value: str) -> frozenset[int]:
    """'0, 2,5' -> {0, 2, 5}. An empty string means every document."""
    if value == "":
        return frozenset()
    if not DOC_NUMBER_RE.match(value):
        raise argparse.ArgumentTypeError(f"expected comma-separated document numbers, got {value!r}")
    return frozenset(int(n) for n in value.split(",") if n.strip())


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate IDs for a JSON list of documents and write <input>_IDs.json.

    Returns:
        Exit code (0 on success, 1 on failure)
    """
    settings = Settings()
    json_path: Path = args.json_file

    try:
        documents = load_documents(json_path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    min_id_length = args.min_id_length if args.min_id_length is not None else settings.MIN_ID_LENGTH
    max_mean = args.max_mean_frequency if args.max_mean_frequency is not None else settings.MAX_MEAN_FREQUENCY

    verbose = args.verbose is not None
    configure_logging(verbose)

    if args.no_cache:
        cache_path = None
    else:
        cache_path = args.cache or derive_path(json_path, settings.CACHE_SUFFIX)

    try:
        generator = DocumentIDGenerator(min_id_length, max_mean, verbose, args.verbose or ())
        ids = generator.generate_ids(documents, str(cache_path) if cache_path else None)
    except DocIdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        output_path = write_results(derive_path(json_path, settings.OUTPUT_SUFFIX), documents, ids)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Generated IDs written to: {output_path}")

    if cache_path is not None:
        if len(generator.frequencies) == 0:
            print("No word counts to cache; every document was filtered out.", file=sys.stderr)
        else:
            try:
                generator.cache_frequencies(cache_path)
            except CacheWriteError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
            print(f"Document word counts cached to: {cache_path}")

    return 0


def cmd_average(args: argparse.Namespace) -> int:
    """Print the average count of a word frequency CSV."""
    try:
        average, words, total = corpus_summary(args.csv_file)
    except CacheLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if words == 0:
        print("No data found in CSV file")
        return 0

    print(f"Average word count: {average:.2f}")
    print(f"Total words: {words}")
    print(f"Total count: {total}")
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    """Write the documents whose IDs differ between two ID files."""
    try:
        out_path, differences = diff_id_files(args.file1, args.file2)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Diff file created: {out_path}")
    print(f"Total documents with differences: {len(differences)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docid",
        description="Readable, unique document IDs built from each document's distinctive words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate IDs for a JSON list of documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    gen_parser.add_argument("json_file", type=Path, help="JSON file holding a list of document strings")
    gen_parser.add_argument("min_id_length", type=int, nargs="?", default=None, help="Target ID length (default: 30)")
    gen_parser.add_argument(
        "max_mean_frequency",
        type=float,
        nargs="?",
        default=None,
        help="Highest mean word frequency per ID (default: corpus mean)",
    )
    gen_parser.add_argument(
        "-v",
        "--verbose",
        nargs="?",
        const=frozenset(),
        default=None,
        type=parse_doc_numbers,
        metavar="DOC_NUMBERS",
        help="Enable verbose trace output, optionally only for comma-separated 0-based document indices",
    )
    gen_parser.add_argument("--cache", type=Path, default=None, help="Word frequency cache path")
    gen_parser.add_argument("--no-cache", action="store_true", help="Neither load nor write the cache")
    gen_parser.epilog = (
        "Examples:\n"
        "  docid generate documents.json\n"
        "  docid generate documents.json 30 5 --verbose\n"
        "  docid generate documents.json 30 5 -v 0,2,5\n"
    )

    avg_parser = subparsers.add_parser("average", help="Average count of a word frequency CSV")
    avg_parser.add_argument("csv_file", type=Path, help="word,count CSV written by 'generate'")

    diff_parser = subparsers.add_parser("diff", help="Compare the IDs of two runs")
    diff_parser.add_argument("file1", type=Path)
    diff_parser.add_argument("file2", type=Path)
    diff_parser.epilog = "Example:\n  docid diff documents1_IDs.json documents2_IDs.json\n"

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        return cmd_generate(args)
    if args.command == "average":
        return cmd_average(args)
    if args.command == "diff":
        return cmd_diff(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
