"""Line parsers for football results and election candidate files.

Input files are plain comma-separated text with no field-level escaping,
apart from election files where a single field may be wrapped in double
quotes to protect commas inside it, e.g.::

    E14000530,7,Aldershot,WALLACE,Donna Maria,Green Party,Green Party,1090
    W07000041,1,"Ynys Môn, Anglesey",HUGHES,Tom,Labour,Labour,10237

Only one quoted span per line is handled. Lines with more are rejected
rather than guessed at.
"""

import logging
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from .config import CANDIDATE_HEADER_PREFIXES, DUMP_HEADER, MATCH_HEADER_PREFIXES
from .errors import MalformedLineError
from .models import CandidateRecord, LineRejection, MatchRecord, ParseResult, ResultKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUOTE = '"'
SENTINEL = "\x1f"

# Div,Date,HomeTeam,AwayTeam,FTHG,FTAG,FTR,HTHG,HTAG,HTR,Referee,...
MATCH_COLUMNS: Mapping[str, int] = {
    "league": 0,
    "date": 1,
    "home_team": 2,
    "away_team": 3,
    "home_score": 4,
    "away_score": 5,
    "result": 6,
}
MATCH_MIN_FIELDS = 10

# ONS Code,PANO,Constituency,Surname,First name,Party,Party Identifer,Valid votes
CANDIDATE_COLUMNS: Mapping[str, int] = {
    "ons_code": 0,
    "pano": 1,
    "constituency": 2,
    "surname": 3,
    "first_name": 4,
    "party": 5,
    "party_identifier": 6,
    "votes": 7,
}
CANDIDATE_WIDTH = 8
DUMP_WIDTH = len(DUMP_HEADER)


def is_skippable(line: str, header_prefixes: Iterable[str] = ()) -> bool:
    """Blank lines and header lines carry no record."""
    if not line.strip():
        return True
    return any(line.startswith(prefix) for prefix in header_prefixes)


def split_fields(
    line: str,
    min_fields: int,
    exact_fields: Optional[int] = None,
    delimiter: str = ",",
    sentinel: str = SENTINEL,
) -> list[str]:
    """Split a line into stripped fields.

    Args:
        line: Raw text line without its line terminator
        min_fields: Fewer fields than this is a malformed line
        exact_fields: When given, a line with more fields than this that
            contains a double quote is treated as having one protected field
        delimiter: Field separator
        sentinel: Stand-in for protected delimiters while re-splitting

    Raises:
        MalformedLineError: too few fields or unresolvable quoting
    """
    fields = line.split(delimiter)
    if len(fields) < min_fields:
        raise MalformedLineError(
            f"insufficient fields ({len(fields)} < {min_fields})", line
        )

    if exact_fields is None or len(fields) <= exact_fields or QUOTE not in line:
        return [f.strip() for f in fields]

    if line.count(QUOTE) != 2:
        raise MalformedLineError("more than one quoted field or unpaired quotes", line)
    if sentinel in line:
        raise MalformedLineError("line already contains the quote sentinel", line)

    start = line.index(QUOTE)
    end = line.rindex(QUOTE) + 1
    masked = line[:start] + line[start:end].replace(delimiter, sentinel) + line[end:]
    fields = masked.split(delimiter)
    if len(fields) != exact_fields:
        raise MalformedLineError(
            f"protected line has {len(fields)} fields, expected {exact_fields}", line
        )

    return [_unquote(f.replace(sentinel, delimiter).strip()) for f in fields]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == QUOTE and value[-1] == QUOTE:
        return value[1:-1].strip()
    return value


def parse_count(value: str, name: str, line: str = "") -> int:
    """Parse a non-negative integer field."""
    try:
        number = int(value.strip())
    except ValueError:
        raise MalformedLineError(f"invalid {name} {value!r}", line) from None
    if number < 0:
        raise MalformedLineError(f"negative {name} {number}", line)
    return number


def parse_match_line(
    line: str,
    columns: Mapping[str, int] = MATCH_COLUMNS,
    min_fields: int = MATCH_MIN_FIELDS,
    header_prefixes: Iterable[str] = MATCH_HEADER_PREFIXES,
) -> Optional[MatchRecord]:
    """Parse one football results line, or return None for headers and blanks."""
    if is_skippable(line, header_prefixes):
        return None

    fields = split_fields(line, min_fields)
    match = MatchRecord(
        league=fields[columns["league"]],
        date=fields[columns["date"]],
        home_team=fields[columns["home_team"]],
        away_team=fields[columns["away_team"]],
        home_score=parse_count(fields[columns["home_score"]], "home score", line),
        away_score=parse_count(fields[columns["away_score"]], "away score", line),
    )

    letter = fields[columns["result"]]
    try:
        declared = ResultKind(letter)
    except ValueError:
        raise MalformedLineError(f"invalid result {letter!r}", line) from None
    if declared is not match.result:
        raise MalformedLineError(
            f"result {letter!r} does not agree with score {match.score}", line
        )

    return match


def parse_candidate_line(
    line: str,
    columns: Mapping[str, int] = CANDIDATE_COLUMNS,
    width: int = CANDIDATE_WIDTH,
    header_prefixes: Iterable[str] = CANDIDATE_HEADER_PREFIXES,
) -> Optional[CandidateRecord]:
    """Parse one election candidate line, or return None for headers and blanks."""
    if is_skippable(line, header_prefixes):
        return None

    fields = split_fields(line, len(columns), exact_fields=width)
    return CandidateRecord(
        ons_code=fields[columns["ons_code"]],
        pano=fields[columns["pano"]],
        constituency=fields[columns["constituency"]],
        surname=fields[columns["surname"]],
        first_name=fields[columns["first_name"]],
        party=fields[columns["party"]],
        party_identifier=fields[columns["party_identifier"]],
        votes=parse_count(fields[columns["votes"]], "vote count", line),
    )


def parse_dump_line(line: str) -> Optional[CandidateRecord]:
    """Parse a line of the extended CSV dump back into its candidate record."""
    return parse_candidate_line(line, width=DUMP_WIDTH)


def parse_lines(
    lines: Iterable[str],
    parse_line: Callable[[str], Optional[T]],
    source: Optional[str] = None,
) -> ParseResult[T]:
    """Parse every line, collecting records and rejections separately."""
    result: ParseResult[T] = ParseResult(source=source)

    for number, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        try:
            record = parse_line(line)
        except MalformedLineError as exc:
            logger.warning("%s:%d rejected, %s: %s", source or "<input>", number, exc.reason, line)
            result.rejections.append(LineRejection(number, line, exc.reason))
            continue

        if record is None:
            result.skipped += 1
        else:
            result.records.append(record)

    return result
