"""
Command line tools for inspecting table ranking and alignment scores

Usage:
    table-ilp rank "How many legs does a cat have?" --tables data/tables
    table-ilp align "cat" "feline" --type WordOverlap
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import SolverConfig
from .services.alignment_service import AlignmentFunction, AlignmentType
from .services.table_service import TableInterface
from .services.tokenizer_service import KeywordTokenizer
from .services.vector_service import WordVectorModel


def rank_tables(args: argparse.Namespace) -> int:
    """Print the tables picked for a question"""
    config = SolverConfig.from_env(args.env_file)
    params = config.tables
    if args.tables:
        params.local_folder = args.tables
        params.use_tablestore_format = False
    if args.max_tables is not None:
        params.max_tables_per_question = args.max_tables
    if args.threshold is not None:
        params.use_rank_threshold = True
        params.rank_threshold = args.threshold

    tokenizer = KeywordTokenizer()
    table_interface = TableInterface.from_params(params, tokenizer)

    print(f"\nQUESTION: {args.question}")
    print(f"Tokens: {tokenizer.stemmed_keyword_tokenize(args.question.lower())}")
    print(f"{'-' * 80}")
    candidates = table_interface.get_tables_for_question(args.question)
    if not candidates:
        print("No tables selected")
        return 0
    for candidate in candidates:
        title = " | ".join(candidate.table.title_row)
        print(f"  {candidate.table_id:4d}  {candidate.score:8.4f}  {candidate.table.name:30s} {title}")
    return 0


def align_strings(args: argparse.Namespace) -> int:
    """Print all alignment scores between two strings"""
    tokenizer = KeywordTokenizer()
    word_vector_model = None
    if args.type == AlignmentType.WORD2VEC.value:
        if not args.vectors:
            print("--vectors is required for Word2Vec", file=sys.stderr)
            return 2
        word_vector_model = WordVectorModel.load(args.vectors, args.vectors_limit)

    aligner = AlignmentFunction(args.type, tokenizer, word_vector_model=word_vector_model)
    text1, text2 = args.text1, args.text2
    scores = [
        ("title <-> title", aligner.score_title_title(text1, text2)),
        ("cell <-> cell", aligner.score_cell_cell(text1, text2)),
        ("cell -> q-cons", aligner.score_cell_q_cons(text1, text2)),
        ("title -> q-cons", aligner.score_title_q_cons(text1, text2)),
        ("cell -> q-choice", aligner.score_cell_q_choice(text1, text2)),
        ("title -> q-choice", aligner.score_title_q_choice(text1, text2)),
        ("str -> wh-terms", aligner.score_str_to_wh_terms(text1, [text2])),
    ]
    print(f"\n{args.type}: {text1!r} vs {text2!r}")
    for label, score in scores:
        print(f"  {label:20s} {score:8.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect TableIlp table ranking and alignment")
    parser.add_argument("--env-file", default=None, help=".env file with TABLEILP_* settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank = subparsers.add_parser("rank", help="Rank tables for a question")
    rank.add_argument("question")
    rank.add_argument("--tables", default=None, help="Folder of CSV tables")
    rank.add_argument("--max-tables", type=int, default=None)
    rank.add_argument("--threshold", type=float, default=None,
                      help="Keep tables scoring above this instead of the top-K")
    rank.set_defaults(func=rank_tables)

    align = subparsers.add_parser("align", help="Alignment scores between two strings")
    align.add_argument("text1")
    align.add_argument("text2")
    align.add_argument("--type", default=AlignmentType.WORD_OVERLAP.value,
                       choices=[AlignmentType.WORD_OVERLAP.value, AlignmentType.WORD2VEC.value])
    align.add_argument("--vectors", default=None, help="word2vec .bin or text file")
    align.add_argument("--vectors-limit", type=int, default=None)
    align.set_defaults(func=align_strings)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
