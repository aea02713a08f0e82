#!/usr/bin/env python3
"""
Test session state and scrollback.
"""

from datetime import datetime

from shelllab.session import SessionState, HistoryEntry, LineKind


def test_defaults():
    state = SessionState()
    assert state.current_directory == "/home/user"
    assert state.history == []


def test_record_appends_in_order():
    state = SessionState()
    first = state.record(LineKind.COMMAND, "/home/user $ ls")
    state.record(LineKind.OUTPUT, "example.txt")
    assert isinstance(first, HistoryEntry)
    assert isinstance(first.timestamp, datetime)
    assert state.lines() == ["/home/user $ ls", "example.txt"]
    assert [e.kind for e in state.history] == [LineKind.COMMAND, LineKind.OUTPUT]


def test_clear():
    state = SessionState()
    state.record(LineKind.ERROR, "oops")
    state.clear()
    assert state.history == []


def test_change_directory():
    state = SessionState()
    state.change_directory("/etc")
    assert state.current_directory == "/etc"


def test_states_do_not_share_history():
    one, two = SessionState(), SessionState()
    one.record(LineKind.OUTPUT, "x")
    assert two.history == []
