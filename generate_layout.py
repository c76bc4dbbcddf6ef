#!/usr/bin/env python3
"""
Split Keyboard Layout Generator.

Derives a two-handed, 15-key-per-hand layout for a text corpus:

  1. Build a letter-pair adjacency weight graph and a letter frequency rank.
  2. Split the 26 letters 13/13 between hands, scoring every possible split,
     to minimize the adjacency weight of letters sharing a hand.
  3. For each hand, try every ordering of key slots within each cost group,
     binding letters to slots by frequency, to minimize the adjacency weight
     of letters sharing a finger.

Usage:
    # Corpus from a file (read up to an END token)
    python generate_layout.py --text-file corpus.txt

    # Corpus on standard input
    echo "the quick brown fox jumps over the lazy dog END" | python generate_layout.py

    # Save the layout for evaluate_layout.py, and the adjacency tables as CSV
    python generate_layout.py --text-file corpus.txt --save-layout layout.txt --save-tables output/

    # Search with 4 worker processes
    python generate_layout.py --text-file corpus.txt --workers 4
"""

import logging
import sys

from layoutgen.cli_utils import (
    create_standard_parser, get_corpus_from_args, handle_common_errors, setup_logging,
)
from layoutgen.config_loader import get_search_options, load_tool_config
from layoutgen.data_utils import save_model_tables
from layoutgen.generator import generate_layout
from layoutgen.output_utils import format_split, print_layout, save_layout_file

logger = logging.getLogger(__name__)


@handle_common_errors
def main(argv=None) -> int:
    """Main entry point for the generator."""

    cli_parser = create_standard_parser('generator')
    args = cli_parser.parse_args(argv)

    config = load_tool_config('generator', args.config)
    setup_logging(config, quiet=args.quiet, verbose=args.verbose)

    search = get_search_options(config)
    if args.workers is not None:
        search['workers'] = args.workers

    corpus = get_corpus_from_args(args)
    result = generate_layout(corpus, workers=search['workers'], batch_size=search['batch_size'])

    print(format_split(result.split))
    print()
    print_layout(result.layout, costs=result.finger_costs)
    print(f"Total finger cost: {result.total_finger_cost}")

    if args.save_layout:
        save_layout_file(result.layout, args.save_layout)
        logger.info("Layout saved to %s", args.save_layout)

    if args.save_tables:
        save_model_tables(result.model, args.save_tables)

    return 0


if __name__ == "__main__":
    sys.exit(main())
