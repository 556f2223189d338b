"""Tests for command dispatch."""

import pytest

from tasktxt.formatting import USAGE
from tasktxt.lib import COMMANDS, Invocation, UnknownCommand, dispatch, parse_int
from tasktxt.store import IndexOutOfRange, TaskStore, ValidationError


@pytest.fixture
def store(tmp_path):
    return TaskStore(tmp_path)


def run(store, command=None, *args):
    return dispatch(Invocation(command=command, args=tuple(args)), store)


class TestParseInt:
    """Test parse_int."""

    @pytest.mark.parametrize(
        "value,expected",
        [("3", 3), ("0", 0), ("-2", -2), ("+4", 4), ("007", 7)],
    )
    def test_valid(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "x", "2abc", "1.5", "--1"])
    def test_invalid(self, value):
        assert parse_int(value) is None


class TestDispatch:
    """Test dispatch over the six commands."""

    def test_recognized_commands(self):
        assert set(COMMANDS) == {"add", "ls", "del", "done", "help", "report"}

    def test_no_command_is_help(self, store):
        assert run(store) == USAGE
        assert run(store, "help") == USAGE

    def test_unknown_command(self, store):
        with pytest.raises(UnknownCommand) as exc_info:
            run(store, "frobnicate")
        assert exc_info.value.command == "frobnicate"
        assert "frobnicate" in exc_info.value.message

    def test_add_then_ls(self, store):
        assert run(store, "add", "2", "hello", "world") == (
            'Added task: "hello world" with priority 2\n'
        )
        run(store, "add", "1", "second", "task")
        assert run(store, "ls") == "1. second task [1]\n2. hello world [2]\n"

    def test_ls_empty(self, store):
        assert run(store, "ls") == "There are no pending tasks!\n"

    @pytest.mark.parametrize(
        "args",
        [(), ("2",), ("x", "text"), ("-1", "text"), ("2", "  ")],
    )
    def test_add_validation(self, store, args):
        with pytest.raises(ValidationError):
            run(store, "add", *args)
        assert store.load_pending() == []

    def test_add_missing_text_message(self, store):
        with pytest.raises(ValidationError) as exc_info:
            run(store, "add", "2")
        assert exc_info.value.message == "Error: Missing tasks string. Nothing added!"

    def test_del(self, store):
        run(store, "add", "2", "b")
        run(store, "add", "1", "a")
        assert run(store, "del", "1") == "Deleted task #1\n"
        assert run(store, "ls") == "1. b [2]\n"

    def test_del_out_of_range(self, store):
        run(store, "add", "2", "hello")
        run(store, "add", "1", "world")
        with pytest.raises(IndexOutOfRange) as exc_info:
            run(store, "del", "5")
        assert (
            exc_info.value.message
            == "Error: task with index #5 does not exist. Nothing deleted."
        )
        assert run(store, "ls") == "1. world [1]\n2. hello [2]\n"

    @pytest.mark.parametrize("args", [(), ("two",)])
    def test_del_missing_index(self, store, args):
        with pytest.raises(ValidationError) as exc_info:
            run(store, "del", *args)
        assert exc_info.value.message == "Error: Missing NUMBER for deleting tasks."

    def test_done(self, store):
        run(store, "add", "2", "b")
        run(store, "add", "1", "a")
        assert run(store, "done", "1") == "Marked item as done.\n"
        assert run(store, "ls") == "1. b [2]\n"
        assert run(store, "report") == (
            "Pending : 1\n1. b [2]\n\nCompleted : 1\n1. a\n"
        )

    def test_done_missing_index(self, store):
        with pytest.raises(ValidationError) as exc_info:
            run(store, "done")
        assert (
            exc_info.value.message
            == "Error: Missing NUMBER for marking tasks as done."
        )

    def test_done_out_of_range(self, store):
        with pytest.raises(IndexOutOfRange):
            run(store, "done", "1")

    def test_report_empty(self, store):
        assert run(store, "report") == (
            "Pending : 0\nThere are no pending tasks!\n\nCompleted : 0\n"
        )
