"""Tests for line splitting and record parsing."""

import pytest

from uk_results_mcp.errors import FileAccessError, MalformedLineError
from uk_results_mcp.loader import load_candidates, load_matches, read_lines
from uk_results_mcp.parser import (
    parse_candidate_line,
    parse_count,
    parse_lines,
    parse_match_line,
    split_fields,
)

from conftest import write_lines


class TestSplitFields:
    """Field splitting with optional quoted-field recovery."""

    def test_plain_line_is_stripped(self):
        assert split_fields(" a , b ,c", 3) == ["a", "b", "c"]

    def test_too_few_fields(self):
        with pytest.raises(MalformedLineError) as exc:
            split_fields("a,b", 3)
        assert "insufficient fields" in exc.value.reason
        assert exc.value.line == "a,b"

    def test_extra_fields_allowed_without_exact_width(self):
        assert len(split_fields("a,b,c,d,e", 3)) == 5

    def test_quoted_field_recovered(self):
        fields = split_fields('W1,1,"Ynys Mon, Anglesey",X,Y,P,P,5', 8, exact_fields=8)
        assert fields[2] == "Ynys Mon, Anglesey"
        assert len(fields) == 8

    def test_quotes_without_extra_fields_left_alone(self):
        fields = split_fields('a,"b",c', 3, exact_fields=3)
        assert fields == ["a", '"b"', "c"]

    def test_two_quoted_fields_rejected(self):
        with pytest.raises(MalformedLineError):
            split_fields('"a,b","c,d",e', 3, exact_fields=3)

    def test_unpaired_quote_rejected(self):
        with pytest.raises(MalformedLineError):
            split_fields('a,"b,c,d', 3, exact_fields=3)

    def test_sentinel_in_input_rejected(self):
        with pytest.raises(MalformedLineError):
            split_fields('a,"b,c"|,d', 3, exact_fields=3, sentinel="|")

    def test_quoted_span_must_give_exact_width(self):
        with pytest.raises(MalformedLineError):
            split_fields('a,"b,c",d,e', 3, exact_fields=3)


class TestParseCount:

    def test_valid(self):
        assert parse_count(" 12 ", "votes") == 12

    @pytest.mark.parametrize("value", ["", "x", "1.5", "-3"])
    def test_invalid(self, value):
        with pytest.raises(MalformedLineError):
            parse_count(value, "votes")


class TestParseMatchLine:

    def test_valid_line(self):
        match = parse_match_line("E0,13/08/16,Burnley,Swansea,0,1,A,0,0,D,J Moss")
        assert match.league == "E0"
        assert match.date == "13/08/16"
        assert match.home_team == "Burnley"
        assert match.away_team == "Swansea"
        assert (match.home_score, match.away_score) == (0, 1)
        assert match.score == "0-1"

    @pytest.mark.parametrize("line", ["", "   ", "Div,Date,HomeTeam,AwayTeam,FTHG,FTAG,FTR"])
    def test_blank_and_header_lines_skipped(self, line):
        assert parse_match_line(line) is None

    def test_short_line_rejected(self):
        with pytest.raises(MalformedLineError):
            parse_match_line("E0,13/08/16,Burnley,Swansea,0,1,A")

    def test_unknown_result_letter_rejected(self):
        with pytest.raises(MalformedLineError) as exc:
            parse_match_line("E0,13/08/16,Burnley,Swansea,0,1,X,0,0,D")
        assert "invalid result" in exc.value.reason

    def test_result_must_agree_with_score(self):
        with pytest.raises(MalformedLineError) as exc:
            parse_match_line("E0,13/08/16,Burnley,Swansea,0,1,H,0,0,D")
        assert "does not agree" in exc.value.reason


class TestParseCandidateLine:

    def test_valid_line(self):
        c = parse_candidate_line(
            "E14000530,7,Aldershot,WALLACE,Donna Maria,Green Party,Green Party,1090"
        )
        assert c.ons_code == "E14000530"
        assert c.pano == "7"
        assert c.constituency == "Aldershot"
        assert c.full_name == "Donna Maria WALLACE"
        assert c.party_identifier == "Green Party"
        assert c.votes == 1090

    @pytest.mark.parametrize("line", [
        "RESULTS,,,,,,,",
        "ONS Code,PANO,Constituency,Surname,First name,Party,Party Identifer,Valid votes",
        "",
    ])
    def test_header_lines_skipped(self, line):
        assert parse_candidate_line(line) is None

    def test_bad_votes_rejected(self):
        with pytest.raises(MalformedLineError):
            parse_candidate_line("E1,7,Aldershot,A,B,Green Party,Green Party,many")

    def test_quoted_constituency(self):
        c = parse_candidate_line('W07000041,1,"Ynys Mon, Anglesey",HUGHES,Albert,Labour Party,Labour,10237')
        assert c.constituency == "Ynys Mon, Anglesey"
        assert c.votes == 10237


class TestParseLines:

    def test_records_rejections_and_skips(self, match_lines):
        lines = match_lines + ["E0,27/08/16,Hull,Burnley,one,1,D,0,0,D", "\r\n"]
        result = parse_lines(lines, parse_match_line, source="sample")
        assert len(result.records) == 6
        assert result.skipped == 2
        assert len(result.rejections) == 1
        assert result.rejections[0].line_number == len(match_lines) + 1
        assert result.source == "sample"

    def test_rejection_logged(self, caplog):
        parse_lines(["E0,x"], parse_match_line, source="bad.csv")
        assert "bad.csv:1 rejected" in caplog.text


class TestLoader:

    def test_load_matches(self, matches_file):
        result = load_matches(matches_file)
        assert len(result.records) == 6
        assert result.skipped == 1

    def test_load_candidates(self, election_file):
        result = load_candidates(election_file)
        assert len(result.records) == 8
        assert result.skipped == 2
        assert not result.rejections

    def test_accented_names_read_as_latin1(self, tmp_path):
        path = write_lines(
            tmp_path / "ni.csv",
            ["N06000001,1,Belfast West,MASKEY,Paul,Sinn Féin,Sinn Féin,27107"],
        )
        result = load_candidates(path)
        assert result.records[0].party == "Sinn Féin"

    def test_control_characters_stay_inside_fields(self, tmp_path):
        path = tmp_path / "controls.csv"
        path.write_bytes(
            b"E14000543,31,Barrow and Furness,O\x85HARA,Robert,Green Party,Green Party,375\n"
            b"E14000543,31,Barrow and Furness,SMITH,An\x0cn,Labour Party,Labour,500\r\n"
            b"E1,bad\n"
        )
        result = load_candidates(path)
        assert [c.surname for c in result.records] == ["O\x85HARA", "SMITH"]
        assert result.records[1].first_name == "An\x0cn"
        assert [r.line_number for r in result.rejections] == [3]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_lines(tmp_path / "missing.csv")

    def test_undecodable_file(self, tmp_path):
        path = write_lines(tmp_path / "utf8.csv", ["Sinn Féin"], encoding="utf-8")
        with pytest.raises(FileAccessError):
            read_lines(path, encoding="ascii")
