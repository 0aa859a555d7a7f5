"""Render ranked summaries as fixed-width tables and CSV output."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .config import DEFAULT_ENCODING, DUMP_HEADER, KEEP_PARTIES
from .errors import WriteError
from .models import AugmentedCandidateResult, ConstituencySummary, RankedEntry, TeamSeason

logger = logging.getLogger(__name__)

QUOTE = '"'


# ============================================================================
# League tables
# ============================================================================


def table_heading() -> str:
    return f"{'Pos':>3.3} {'Team':<20.20} {'Played':>10.10} {'Goal diff':>10.10} {'Points':>10.10}"


def table_row(entry: RankedEntry[TeamSeason]) -> str:
    ts = entry.item
    return (
        f"{entry.position:3d} {ts.team:<20.20} {ts.played:10d} "
        f"{ts.goal_difference:10d} {ts.points:10d}"
    )


def render_table(entries: Iterable[RankedEntry[TeamSeason]]) -> str:
    """Heading plus one fixed-width row per entry."""
    return "\n".join([table_heading(), *(table_row(e) for e in entries)])


# ============================================================================
# Constituencies
# ============================================================================


def constituency_line(c: ConstituencySummary, show_last_place: bool = False) -> str:
    line = str(c)
    if show_last_place:
        line += f" [ {round(c.losing_share)}% {c.last_place} ]"
    return line


def render_constituencies(
    entries: Iterable[RankedEntry[ConstituencySummary]], show_last_place: bool = False
) -> str:
    return "\n".join(
        f"{e.position:3d}. {constituency_line(e.item, show_last_place)}" for e in entries
    )


# ============================================================================
# CSV dump
# ============================================================================


def protect(
    value: str, delimiter: str = ",", diagnostics: Optional[list[str]] = None
) -> str:
    """Quote a field only when it contains the delimiter.

    A field already wrapped in one pair of quotes is passed through. Any
    other quote character is reported and the field is left as it is.
    """
    out = value.strip()
    if QUOTE in out:
        wrapped = len(out) >= 2 and out[0] == QUOTE and out[-1] == QUOTE
        if not (wrapped and out.count(QUOTE) == 2):
            message = f"Internal double quote in field: {value}"
            logger.warning("%s", message)
            if diagnostics is not None:
                diagnostics.append(message)
    elif delimiter in out:
        out = f"{QUOTE}{out}{QUOTE}"
    return out


def simplify_party(
    party_identifier: str, position: int, keep_parties: Sequence[str] = KEEP_PARTIES
) -> str:
    """Collapse minor parties to 'Other', except for winners."""
    label = party_identifier
    if position != 1:
        wanted = party_identifier.casefold()
        if not any(p.casefold() == wanted for p in keep_parties):
            label = "Other"

    label = label.strip()
    if label.endswith(" Party"):
        label = label[: -len(" Party")].rstrip()
    return label


def augment_constituency(
    c: ConstituencySummary, keep_parties: Sequence[str] = KEEP_PARTIES
) -> list[AugmentedCandidateResult]:
    """One output row per candidate, with position and derived fields."""
    return [
        AugmentedCandidateResult(
            candidate=candidate,
            position=position,
            outcome="Winner" if position == 1 else "Loser",
            vote_share=candidate.votes / c.total_votes if c.total_votes else 0.0,
            majority=c.majority if position == 1 else 0,
            candidate_count=len(c.candidates),
            simplified_party=simplify_party(candidate.party_identifier, position, keep_parties),
            country=c.country,
        )
        for position, candidate in enumerate(c.candidates, 1)
    ]


def csv_header(delimiter: str = ",") -> str:
    return delimiter.join(DUMP_HEADER)


def _single_field(label: str, delimiter: str) -> str:
    """Join a derived label on the delimiter so a row holds at most one quoted field."""
    return " ".join(part.strip() for part in label.split(delimiter))


def to_csv_row(
    row: AugmentedCandidateResult,
    delimiter: str = ",",
    diagnostics: Optional[list[str]] = None,
) -> str:
    c = row.candidate

    def p(value: str) -> str:
        return protect(value, delimiter, diagnostics)

    fields = [
        p(c.ons_code),
        p(c.pano),
        p(c.constituency),
        p(c.surname),
        p(c.first_name),
        p(c.party),
        p(c.party_identifier),
        str(c.votes),
        str(row.position),
        row.outcome,
        f"{row.vote_share:.3f}",
        str(row.majority),
        str(row.candidate_count),
        p(_single_field(row.simplified_party, delimiter)),
        str(row.country),
    ]
    return delimiter.join(fields)


def render_csv(
    rows: Iterable[AugmentedCandidateResult], diagnostics: Optional[list[str]] = None
) -> str:
    lines = [csv_header()]
    lines.extend(to_csv_row(row, diagnostics=diagnostics) for row in rows)
    return "\n".join(lines) + "\n"


def write_report(
    path: Union[str, Path], text: str, encoding: str = DEFAULT_ENCODING
) -> Path:
    """Write report text to a file in an existing output folder."""
    path = Path(path)
    if not path.parent.is_dir():
        raise WriteError(f"No output written to {path}: no {path.parent} folder present")
    try:
        with open(path, "w", encoding=encoding, newline="") as handle:
            handle.write(text)
    except (OSError, UnicodeEncodeError) as exc:
        raise WriteError(f"Failed to write to {path}: {exc}") from exc
    return path
