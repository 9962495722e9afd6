"""Tests for the status notice board."""

from __future__ import annotations

import pytest

from studio.status import ERROR, INFO, SUCCESS


class TestStatusBoard:
    def test_empty_by_default(self, status_board):
        assert status_board.current() is None
        assert status_board.text() == ""

    @pytest.mark.parametrize("kind", [INFO, SUCCESS])
    def test_info_and_success_expire(self, status_board, clock, kind):
        status_board.show(kind, "hello")
        clock.advance(4.9)
        assert status_board.current().message == "hello"
        clock.advance(0.2)
        assert status_board.current() is None

    def test_errors_do_not_expire(self, status_board, clock):
        status_board.show(ERROR, "Please enter a description for your image.")
        clock.advance(3600)
        assert status_board.current().kind == ERROR
        assert status_board.text() == "❌ Please enter a description for your image."

    def test_new_notice_replaces_error(self, status_board):
        status_board.show(ERROR, "bad")
        status_board.show(INFO, "working")
        assert status_board.current().kind == INFO

    def test_unknown_kind_rejected(self, status_board):
        with pytest.raises(ValueError):
            status_board.show("warning", "nope")

    def test_clear(self, status_board):
        status_board.show(ERROR, "bad")
        status_board.clear()
        assert status_board.current() is None
