"""Pytest configuration and fixtures for UK results tests."""

import pytest

from uk_results_mcp.football_season import load_season
from uk_results_mcp.general_election import load_election

# Hull 7pts, Leicester 4pts (+1), Swansea 4pts (-1), Burnley 1pt
SAMPLE_MATCH_LINES = [
    "Div,Date,HomeTeam,AwayTeam,FTHG,FTAG,FTR,HTHG,HTAG,HTR,Referee",
    "E0,13/08/16,Burnley,Swansea,0,1,A,0,0,D,J Moss",
    "E0,13/08/16,Leicester,Hull,1,2,A,0,1,A,M Atkinson",
    "E0,20/08/16,Swansea,Hull,0,2,A,0,1,A,M Oliver",
    "E0,20/08/16,Leicester,Burnley,3,1,H,1,0,H,A Taylor",
    "E0,27/08/16,Hull,Burnley,1,1,D,0,0,D,L Mason",
    "E0,27/08/16,Swansea,Leicester,2,2,D,1,1,D,K Friend",
]

SAMPLE_CANDIDATE_LINES = [
    "RESULTS,,,,,,,",
    "ONS Code,PANO,Constituency,Surname,First name,Party,Party Identifer,Valid votes",
    "E14000530,7,Aldershot,WALLACE,Donna Maria,Green Party,Green Party,1090",
    "E14000530,7,Aldershot,SWALES,John Roy,UK Independence Party (UKIP),UKIP,1796",
    "S14000001,14,Aberdeen North,BLACKMAN,Kirsty,Scottish National Party,SNP,15031",
    "S14000001,14,Aberdeen North,MALIK,Orr,Labour Party,Labour,10634",
    "S14000001,14,Aberdeen North,ROSS,Grace,Conservative and Unionist Party,Conservative,5398",
    'W07000041,1,"Ynys Mon, Anglesey",HUGHES,Albert,Labour Party,Labour,10237',
    'W07000041,1,"Ynys Mon, Anglesey",REES,Ieuan,Plaid Cymru,Plaid Cymru,9694',
    'W07000041,1,"Ynys Mon, Anglesey",DAVIES,Tomos,Conservative and Unionist Party,Conservative,7140',
]


def write_lines(path, lines, encoding="iso-8859-1"):
    path.write_text("\n".join(lines) + "\n", encoding=encoding)
    return path


@pytest.fixture
def match_lines():
    return list(SAMPLE_MATCH_LINES)


@pytest.fixture
def candidate_lines():
    return list(SAMPLE_CANDIDATE_LINES)


@pytest.fixture
def matches_file(tmp_path):
    """Sample season written as a results file."""
    return write_lines(tmp_path / "EnglishPremierLeagueResults2016-17.csv", SAMPLE_MATCH_LINES)


@pytest.fixture
def election_file(tmp_path):
    """Sample election written as a candidate results file."""
    return write_lines(tmp_path / "UKGeneralElection2017.csv", SAMPLE_CANDIDATE_LINES)


@pytest.fixture
def season(matches_file):
    return load_season(matches_file)


@pytest.fixture
def election(election_file):
    return load_election(election_file)


@pytest.fixture
def data_env(tmp_path, monkeypatch, matches_file, election_file):
    """Point Settings at the sample files and an existing output folder."""
    output = tmp_path / "output"
    output.mkdir()
    monkeypatch.setenv("UK_RESULTS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("UK_RESULTS_OUTPUT_DIR", str(output))
    monkeypatch.delenv("UK_RESULTS_MATCHES_FILE", raising=False)
    monkeypatch.delenv("UK_RESULTS_ELECTION_FILE", raising=False)
    monkeypatch.delenv("UK_RESULTS_ENCODING", raising=False)
    monkeypatch.delenv("UK_RESULTS_FOCUS_TEAM", raising=False)
    return tmp_path
