"""Constituency results, party tallies and an extended CSV dump for a UK general election.

Input lines look like::

    RESULTS,,,,,,,
    ONS Code,PANO,Constituency,Surname,First name,Party,Party Identifer,Valid votes
    E14000530,7,Aldershot,WALLACE,Donna Maria,Green Party,Green Party,1090
    E14000530,7,Aldershot,SWALES,John Roy,UK Independence Party (UKIP),UKIP,1796
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from .aggregation import (
    build_constituencies,
    consistency_errors,
    notable_parties,
    ranked_parties,
    tally_parties,
)
from .config import COUNTRY_BY_PARTY, DEFAULT_ENCODING, KEEP_PARTIES, Settings, configure_logging
from .errors import DataConsistencyError, FileAccessError, WriteError
from .loader import load_candidates
from .models import (
    AugmentedCandidateResult,
    CandidateRecord,
    ConstituencySummary,
    Country,
    LineRejection,
    PartyResult,
)
from .ranking import CONSTITUENCY_ORDERINGS, rank, top
from .reporting import augment_constituency, render_constituencies, render_csv, write_report
from .statistics import election_overview, seats_by_country, seats_by_party

logger = logging.getLogger(__name__)


@dataclass
class Election:
    candidates: list[CandidateRecord] = field(default_factory=list)
    rejections: list[LineRejection] = field(default_factory=list)
    constituencies: list[ConstituencySummary] = field(default_factory=list)
    parties: list[PartyResult] = field(default_factory=list)
    issues: list[DataConsistencyError] = field(default_factory=list)

    def constituency(self, name: str) -> Optional[ConstituencySummary]:
        wanted = name.casefold()
        return next((c for c in self.constituencies if c.name.casefold() == wanted), None)


def build_election(
    candidates: Sequence[CandidateRecord],
    country_table: Mapping[str, Country] = COUNTRY_BY_PARTY,
) -> Election:
    constituencies = build_constituencies(candidates, country_table)
    logger.info("Generated %d constituencies", len(constituencies))
    return Election(
        candidates=list(candidates),
        constituencies=constituencies,
        parties=ranked_parties(tally_parties(constituencies)),
        issues=consistency_errors(constituencies),
    )


def load_election(
    path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    country_table: Mapping[str, Country] = COUNTRY_BY_PARTY,
) -> Election:
    """Parse a candidate results file and summarise every constituency."""
    parsed = load_candidates(path, encoding)
    election = build_election(parsed.records, country_table)
    election.rejections = parsed.rejections
    return election


def overview_report(election: Election) -> str:
    o = election_overview(election.candidates)
    lines = [
        f"Read in {o['candidates']} candidate results",
        "",
        f"Constituencies:        {o['constituencies']}",
        f"Parties:               {o['parties']}",
        f"Distinct surnames:     {o['distinct_surnames']}",
        f"Distinct first names:  {o['distinct_first_names']}",
        f"Distinct names:        {o['distinct_names']}",
        "",
        f"Total votes : {o['total_votes']}",
    ]
    return "\n".join(lines)


def seats_report(election: Election) -> str:
    seats = seats_by_party(election.constituencies)
    lines = [f"  {party} : {n} seats" for party, n in seats.items()]
    for country, summary in seats_by_country(election.constituencies).items():
        lines.append("")
        lines.append(f"{country} : {summary['constituencies']} constituencies")
        lines += [f"  {party} : {n} seats" for party, n in summary["seats"].items()]
    return "\n".join(lines)


def extremes_report(election: Election, length: int = 10) -> str:
    sections = []
    for name, ordering in CONSTITUENCY_ORDERINGS.items():
        entries = top(rank(election.constituencies, ordering), length)
        body = render_constituencies(entries, show_last_place=(name == "largest_losing_share"))
        sections.append(f"{ordering.label}:\n{body}")
    return "\n\n".join(sections)


def parties_report(election: Election, min_votes: int = 100000) -> str:
    lines = [
        f"Produced party result for {len(election.parties)} parties",
        "",
        f"Parties with a win or {min_votes} votes:",
    ]
    lines += [str(p) for p in notable_parties(election.parties, min_votes)]
    return "\n".join(lines)


def election_report(election: Election) -> str:
    return "\n\n".join([
        overview_report(election),
        seats_report(election),
        extremes_report(election),
        parties_report(election),
    ])


def dump_rows(
    election: Election, keep_parties: Sequence[str] = KEEP_PARTIES
) -> list[AugmentedCandidateResult]:
    return [
        row
        for constituency in election.constituencies
        for row in augment_constituency(constituency, keep_parties)
    ]


def dump_election(
    election: Election, path: Union[str, Path], encoding: str = DEFAULT_ENCODING
) -> Path:
    """Write the extended CSV file. Raises WriteError if it cannot be written."""
    rows = dump_rows(election)
    logger.info("Produced %d augmented results", len(rows))
    return write_report(path, render_csv(rows), encoding)


def main() -> None:
    """Print election statistics and write the extended CSV dump."""
    settings = Settings()
    configure_logging(settings.log_level)

    try:
        election = load_election(settings.election_path, settings.encoding)
    except FileAccessError as exc:
        logger.error("%s", exc)
        return

    print(election_report(election))

    try:
        written = dump_election(election, settings.dump_path, settings.encoding)
    except WriteError as exc:
        logger.error("%s", exc)
        return
    print(f"\nAugmented CSV file produced in file: {written}")


if __name__ == "__main__":
    main()
