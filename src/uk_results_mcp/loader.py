"""Read results files from disk into parsed records."""

import logging
from pathlib import Path
from typing import Union

from .config import DEFAULT_ENCODING
from .errors import FileAccessError
from .models import CandidateRecord, MatchRecord, ParseResult
from .parser import parse_candidate_line, parse_dump_line, parse_lines, parse_match_line

logger = logging.getLogger(__name__)


def read_lines(path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Read a whole text file as lines. The published data is ISO-8859-1.

    Lines break on CR/LF only; other control characters stay in the field.
    """
    try:
        with open(path, encoding=encoding) as handle:
            return [line.rstrip("\n") for line in handle]
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to load data from file {path}: {exc}") from exc


def load_matches(
    path: Union[str, Path], encoding: str = DEFAULT_ENCODING
) -> ParseResult[MatchRecord]:
    """Load football match results."""
    result = parse_lines(read_lines(path, encoding), parse_match_line, source=str(path))
    logger.info(
        "Read %d matches from %s (%d rejected)",
        len(result.records),
        path,
        len(result.rejections),
    )
    return result


def load_candidates(
    path: Union[str, Path], encoding: str = DEFAULT_ENCODING
) -> ParseResult[CandidateRecord]:
    """Load general-election candidate results."""
    result = parse_lines(read_lines(path, encoding), parse_candidate_line, source=str(path))
    logger.info(
        "Read %d candidate results from %s (%d rejected)",
        len(result.records),
        path,
        len(result.rejections),
    )
    return result


def load_dump(
    path: Union[str, Path], encoding: str = DEFAULT_ENCODING
) -> ParseResult[CandidateRecord]:
    """Load candidate records back from an extended CSV dump."""
    return parse_lines(read_lines(path, encoding), parse_dump_line, source=str(path))
