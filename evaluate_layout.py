#!/usr/bin/env python3
"""
Split Keyboard Layout Evaluator.

Scores a fixed two-hand layout against a corpus with the same cost
definitions the generator optimizes, plus raw counts from walking the corpus:

  - same-hand and same-finger adjacency cost (weight graph)
  - same-hand and same-finger consecutive-letter counts
  - press difficulty (sum of key cost groups over all typed letters)

The layout is given as 30 grid tokens, 15 per hand in printed row order
(hand 1 mirrored, as printed by generate_layout.py); '_' marks an empty key.
Any token that is not a single lowercase letter leaves its key empty.

Usage:
    # Corpus and layout from files
    python evaluate_layout.py --text-file corpus.txt --layout-file layout.txt

    # Corpus, END, then the layout on standard input
    cat corpus.txt layout.txt | python evaluate_layout.py

    # CSV output
    python evaluate_layout.py --text-file corpus.txt --layout-file layout.txt --csv
"""

import sys

from layoutgen.cli_utils import (
    create_standard_parser, get_corpus_from_args, handle_common_errors, setup_logging,
    stdin_tokens,
)
from layoutgen.config_loader import load_tool_config
from layoutgen.data_utils import load_layout_file
from layoutgen.evaluator import LayoutEvaluator
from layoutgen.layout import parse_layout_tokens
from layoutgen.output_utils import print_results


@handle_common_errors
def main(argv=None) -> int:
    """Main entry point for the evaluator."""

    cli_parser = create_standard_parser('evaluator')
    args = cli_parser.parse_args(argv)

    config = load_tool_config('evaluator', args.config)
    setup_logging(config, quiet=args.quiet, verbose=args.verbose)

    # Corpus and layout may share standard input: corpus tokens, END, layout tokens
    tokens = stdin_tokens()
    corpus = get_corpus_from_args(args, tokens)

    if args.layout_file:
        layout = load_layout_file(args.layout_file)
    else:
        layout = parse_layout_tokens(tokens)

    evaluator = LayoutEvaluator(layout, corpus, config)
    result = evaluator.score_layout()

    output_config = config.get('output_formats', {}).get(args.output_format, {})
    print_results(result, args.output_format, output_config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
