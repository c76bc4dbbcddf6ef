#!/usr/bin/env python3
"""
Text utilities for the split layout generator.

Loads a corpus from a stream of whitespace-delimited tokens terminated by the
sentinel token END, keeping only Latin letters, lower-cased.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, TextIO

from layoutgen.geometry import NUM_LETTERS

logger = logging.getLogger(__name__)

END_TOKEN = 'END'
MIN_CORPUS_LENGTH = 2

_ASCII_LETTERS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ')


class CorpusError(ValueError):
    """Raised when the corpus is empty or too short to build adjacency data."""


def filter_token(token: str) -> str:
    """
    Keep only ASCII letters of a token, lower-cased.

    Characters between 'Z' and 'a' in ASCII ('[', '\\', ']', '^', '_', '`')
    are discarded along with everything else that is not a letter.
    """
    return ''.join(char.lower() for char in token if char in _ASCII_LETTERS)


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    """Split an iterable of lines into whitespace-delimited tokens."""
    for line in lines:
        yield from line.split()


def load_corpus(tokens: Iterable[str], end_token: str = END_TOKEN) -> str:
    """
    Build a corpus string from tokens.

    Consumes tokens up to and including the END sentinel, so the caller may
    keep reading the same iterator afterwards (e.g. for a layout).

    Args:
        tokens: Iterable of whitespace-delimited tokens
        end_token: Sentinel that terminates the corpus

    Returns:
        Concatenated lowercase letters
    """
    pieces: List[str] = []
    found_end = False
    for token in tokens:
        if token == end_token:
            found_end = True
            break
        pieces.append(filter_token(token))

    if not found_end:
        logger.debug("No '%s' sentinel found; corpus ends at end of input", end_token)

    return ''.join(pieces)


def read_corpus(stream: TextIO, end_token: str = END_TOKEN) -> str:
    """Read a corpus from an open text stream."""
    return load_corpus(iter_tokens(stream), end_token)


def read_corpus_file(filepath: str, end_token: str = END_TOKEN) -> str:
    """
    Read a corpus from a text file.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {filepath}")

    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        corpus = read_corpus(f, end_token)

    logger.info("Loaded %d letters from %s", len(corpus), filepath)
    return corpus


def validate_corpus(corpus: str, min_length: int = MIN_CORPUS_LENGTH) -> None:
    """
    Check that a corpus can be used to build a weight graph.

    Raises:
        CorpusError: If the corpus is empty or shorter than min_length
    """
    if not corpus:
        raise CorpusError("Document is empty")
    if len(corpus) < min_length:
        raise CorpusError(f"Document too short: {len(corpus)} letters (minimum {min_length})")


def corpus_to_indices(corpus: str) -> List[int]:
    """
    Convert a corpus string to letter indices.

    Raises:
        CorpusError: If the corpus holds anything but lowercase a-z
    """
    indices = [ord(char) - ord('a') for char in corpus]
    invalid = sorted({char for char, idx in zip(corpus, indices) if not 0 <= idx < NUM_LETTERS})
    if invalid:
        raise CorpusError(f"Corpus contains characters outside a-z: {invalid}")
    return indices
