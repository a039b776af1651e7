import pytest

from bugtracer.args import Args, ArgsError, parse_args, parse_session_args


def test_parse_args_start():
    assert parse_args(["rust_app", "tracer", "start"]) == Args("tracer", "start")


def test_parse_args_too_few():
    with pytest.raises(ArgsError, match="You need to enter more arguments"):
        parse_args(["rust_app", "tracer"])


def test_parse_args_too_many():
    with pytest.raises(ArgsError, match="You entered too many arguments"):
        parse_args(["rust_app", "tracer", "start", "now"])


def test_parse_args_wrong_program_word():
    with pytest.raises(ArgsError, match="bogus is not a recognized command"):
        parse_args(["rust_app", "bogus", "start"])


def test_parse_args_is_case_sensitive():
    with pytest.raises(ArgsError, match="Tracer is not a recognized command"):
        parse_args(["rust_app", "Tracer", "start"])


def test_parse_args_unknown_query():
    with pytest.raises(ArgsError, match="stop is not a recognized command"):
        parse_args(["rust_app", "tracer", "stop"])


@pytest.mark.parametrize("query", ["log", "view", "update", "delete"])
def test_parse_session_args_accepts_commands(query):
    assert parse_session_args(["tracer", query]) == Args("tracer", query)


def test_parse_session_args_lowercases():
    assert parse_session_args(["Tracer", "LOG"]) == Args("tracer", "log")


def test_parse_session_args_unknown_query_lists_allowed():
    with pytest.raises(ArgsError, match="start is not a recognized command") as info:
        parse_session_args(["tracer", "start"])
    assert info.value.allowed == ("log", "view", "update", "delete")


def test_parse_session_args_wrong_program_word():
    with pytest.raises(ArgsError, match="git is not a recognized command"):
        parse_session_args(["git", "log"])


def test_parse_session_args_counts():
    with pytest.raises(ArgsError, match="You need to enter more arguments"):
        parse_session_args(["tracer"])
    with pytest.raises(ArgsError, match="You entered too many arguments"):
        parse_session_args(["tracer", "log", "extra"])