import pytest

from icpc_scoreboard import iter_commands, parse_line


def test_parse_bare_commands_and_blank_lines():
    assert parse_line("FLUSH") == {"type": "FLUSH"}
    assert parse_line("  END  ") == {"type": "END"}
    assert parse_line("   ") is None


def test_parse_start_long_and_short_forms():
    assert parse_line("START DURATION 300 PROBLEM 5") == {
        "type": "START",
        "duration": "300",
        "problem_count": "5",
    }
    assert parse_line("START 300 5") == {
        "type": "START",
        "duration": "300",
        "problem_count": "5",
    }


def test_parse_submit():
    assert parse_line("SUBMIT C BY team_1 WITH Wrong_Answer AT 42") == {
        "type": "SUBMIT",
        "problem": "C",
        "team": "team_1",
        "status": "Wrong_Answer",
        "time": "42",
    }


def test_parse_query_submission_filters():
    assert parse_line("QUERY_SUBMISSION t1 WHERE PROBLEM=ALL AND STATUS=Accepted") == {
        "type": "QUERY_SUBMISSION",
        "team": "t1",
        "problem": "ALL",
        "status": "Accepted",
    }


@pytest.mark.parametrize(
    "line",
    [
        "HELLO world",
        "ADDTEAM",
        "START DURATION 300",
        "SUBMIT A TO t1 WITH Accepted AT 3",
        "QUERY_SUBMISSION t1 WHERE STATUS=ALL AND PROBLEM=ALL",
    ],
)
def test_parse_rejects_malformed_lines(line):
    with pytest.raises(ValueError):
        parse_line(line)


def test_iter_commands_skips_bad_lines():
    lines = ["ADDTEAM a\n", "\n", "BOGUS\n", "QUERY_RANKING a\n"]
    assert [cmd["type"] for cmd in iter_commands(lines)] == ["ADDTEAM", "QUERY_RANKING"]
