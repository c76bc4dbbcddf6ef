#!/usr/bin/env python3
"""
CLI utilities for the layout generator and evaluator.

Common functions for command-line argument parsing, logging setup, corpus
input, and error handling shared by both command scripts.
"""

import argparse
import io
import logging
import sys
from typing import Any, Dict, Iterator, List, Optional

import yaml

from layoutgen.config_loader import DEFAULT_CONFIG_PATH, get_config_loader
from layoutgen.text_utils import iter_tokens, load_corpus, read_corpus_file

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class StandardCLIParser:
    """
    Standardized command-line argument parser for the generator and evaluator.

    Provides consistent corpus input, configuration, and logging options.
    """

    def __init__(self, tool_name: str, config_path: str = str(DEFAULT_CONFIG_PATH)):
        """
        Initialize the CLI parser for a tool.

        Args:
            tool_name: Name of the tool ('generator' or 'evaluator')
            config_path: Path to configuration file
        """
        self.tool_name = tool_name

        try:
            self.tool_config = get_config_loader(config_path).get_tool_config(tool_name)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            logger.warning("Could not load configuration: %s", e)
            self.tool_config = {}

        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        description = self.tool_config.get('description', f'Split keyboard layout {self.tool_name}')
        method = self.tool_config.get('method', '')

        parser = argparse.ArgumentParser(
            description=f"{description}\n\nMethod: {method}" if method else description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._generate_epilog(),
        )

        self._add_input_arguments(parser)
        self._add_output_arguments(parser)
        self._add_tool_specific_arguments(parser)

        return parser

    def _add_input_arguments(self, parser: argparse.ArgumentParser) -> None:
        input_group = parser.add_argument_group('Input Options')

        input_group.add_argument(
            '--text',
            dest='text',
            help="Corpus text (alternative to --text-file; END not required)"
        )
        input_group.add_argument(
            '--text-file',
            dest='text_file',
            help="Path to corpus file, read up to an END token"
        )
        input_group.add_argument(
            '--config',
            dest='config',
            default=str(DEFAULT_CONFIG_PATH),
            help="Path to configuration file (default: packaged config.yaml)"
        )

    def _add_output_arguments(self, parser: argparse.ArgumentParser) -> None:
        output_group = parser.add_argument_group('Output Options')

        output_group.add_argument(
            '--quiet',
            dest='quiet',
            action='store_true',
            help="Only log warnings and errors"
        )
        output_group.add_argument(
            '--verbose',
            dest='verbose',
            action='store_true',
            help="Log debug detail"
        )

    def _add_tool_specific_arguments(self, parser: argparse.ArgumentParser) -> None:
        tool_group = parser.add_argument_group(f'{self.tool_name.title()} Options')

        if self.tool_name == 'generator':
            tool_group.add_argument(
                '--workers',
                dest='workers',
                type=int,
                help="Worker processes for the search (overrides config)"
            )
            tool_group.add_argument(
                '--save-layout',
                dest='save_layout',
                help="Write the layout grid to this file"
            )
            tool_group.add_argument(
                '--save-tables',
                dest='save_tables',
                help="Directory for letter frequency and letter-pair weight CSV files"
            )

        if self.tool_name == 'evaluator':
            tool_group.add_argument(
                '--layout-file',
                dest='layout_file',
                help="Layout grid file (without it, layout tokens are read after END on stdin)"
            )
            tool_group.add_argument(
                '--output-format',
                dest='output_format',
                choices=['detailed', 'csv', 'score_only'],
                default='detailed',
                help="Output format (default: detailed)"
            )
            tool_group.add_argument(
                '--csv',
                dest='csv',
                action='store_true',
                help="Output in CSV format (same as --output-format csv)"
            )
            tool_group.add_argument(
                '--score-only',
                dest='score_only',
                action='store_true',
                help="Output only scores (same as --output-format score_only)"
            )

    def _generate_epilog(self) -> str:
        lines = ["Examples:"]
        if self.tool_name == 'generator':
            lines.append("  # Generate from a corpus file")
            lines.append("  generate-layout --text-file corpus.txt --save-layout layout.txt")
            lines.append("")
            lines.append("  # Corpus on stdin, terminated by END")
            lines.append("  echo 'the quick brown fox END' | generate-layout --workers 4")
        else:
            lines.append("  # Evaluate a saved layout")
            lines.append("  evaluate-layout --text-file corpus.txt --layout-file layout.txt")
            lines.append("")
            lines.append("  # Corpus, END, then 30 layout tokens on stdin")
            lines.append("  cat corpus.txt layout.txt | evaluate-layout --csv")
        return '\n'.join(lines)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments with validation.

        Args:
            args: List of arguments (uses sys.argv if None)
        """
        parsed_args = self.parser.parse_args(args)

        if parsed_args.text and parsed_args.text_file:
            self.parser.error("Cannot specify both --text and --text-file")

        if self.tool_name == 'evaluator':
            if parsed_args.csv:
                parsed_args.output_format = 'csv'
            elif parsed_args.score_only:
                parsed_args.output_format = 'score_only'

        if getattr(parsed_args, 'workers', None) is not None and parsed_args.workers < 1:
            self.parser.error("--workers must be at least 1")

        return parsed_args


def create_standard_parser(tool_name: str,
                           config_path: str = str(DEFAULT_CONFIG_PATH)) -> StandardCLIParser:
    """Create a standardized CLI parser for a tool."""
    return StandardCLIParser(tool_name, config_path)


def setup_logging(config: Dict[str, Any], quiet: bool = False, verbose: bool = False) -> None:
    """
    Configure root logging from the 'logging' config section.

    --verbose wins over --quiet; both override the configured level.
    """
    logging_config = config.get('logging', {}) or {}
    level_name = str(logging_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    if quiet:
        level = logging.WARNING
    if verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=logging_config.get('format', DEFAULT_LOG_FORMAT),
        stream=sys.stderr,
        force=True,
    )


def stdin_tokens() -> Iterator[str]:
    """
    Tokens from standard input, decoded as UTF-8 with undecodable bytes dropped.

    Only ASCII letters survive corpus filtering, so nothing usable is lost.
    """
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        # already a text stream without a byte layer (e.g. io.StringIO)
        yield from iter_tokens(sys.stdin)
        return
    yield from iter_tokens(io.TextIOWrapper(buffer, encoding='utf-8', errors='ignore'))


def get_corpus_from_args(args: argparse.Namespace, tokens: Optional[Iterator[str]] = None) -> str:
    """
    Load the corpus named by the arguments.

    Args:
        args: Parsed command-line arguments
        tokens: Token stream to read from when neither --text nor --text-file
                is given (defaults to stdin); left positioned after END

    Returns:
        Filtered corpus string (may be empty; validation is up to the caller)
    """
    if args.text_file:
        return read_corpus_file(args.text_file)
    if args.text:
        return load_corpus(args.text.split())
    if tokens is None:
        tokens = stdin_tokens()
    logger.info("Reading corpus from standard input (end with 'END')")
    return load_corpus(tokens)


def handle_common_errors(func):
    """
    Decorator to handle common CLI errors gracefully.

    Args:
        func: Function to wrap (typically main())

    Returns:
        Wrapped function with error handling
    """
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.", file=sys.stderr)
            return 130
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PermissionError as e:
            print(f"Permission error: {e}", file=sys.stderr)
            return 1
        except yaml.YAMLError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1

    return wrapper
