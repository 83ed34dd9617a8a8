"""Tests for funcroute.http.cookies — Cookie header helpers."""

from funcroute.http.cookies import parse_cookies, split_cookie_header


class TestSplitCookieHeader:
    def test_splits_pairs(self) -> None:
        assert split_cookie_header("a=1; b=2") == ("a=1", "b=2")

    def test_empty(self) -> None:
        assert split_cookie_header("") == ()

    def test_ignores_empty_segments(self) -> None:
        assert split_cookie_header("a=1;; ") == ("a=1",)


class TestParseCookies:
    def test_name_value(self) -> None:
        assert parse_cookies(["session=abc", "theme=dark"]) == {
            "session": "abc",
            "theme": "dark",
        }

    def test_value_with_equals(self) -> None:
        assert parse_cookies(["token=a=b"]) == {"token": "a=b"}

    def test_skips_invalid(self) -> None:
        assert parse_cookies(["novalue"]) == {}

    def test_later_duplicate_wins(self) -> None:
        assert parse_cookies(["a=1", "a=2"]) == {"a": "2"}
