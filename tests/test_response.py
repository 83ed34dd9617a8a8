"""Tests for funcroute.http.response — Response building and serialization."""

from funcroute.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status_code == 200
        assert response.headers == {}
        assert response.body == ""

    def test_json_factory(self) -> None:
        response = Response.json({"ok": True}, status_code=201, headers={"X-Id": "7"})
        assert response.status_code == 201
        assert response.headers == {"Content-Type": "application/json", "X-Id": "7"}
        assert response.body == {"ok": True}

    def test_with_status_returns_copy(self) -> None:
        original = Response(body="hi")
        changed = original.with_status(202)
        assert changed.status_code == 202
        assert original.status_code == 200

    def test_with_header_returns_copy(self) -> None:
        original = Response()
        changed = original.with_header("X-A", "1")
        assert changed.headers == {"X-A": "1"}
        assert original.headers == {}

    def test_with_headers(self) -> None:
        response = Response(headers={"X-A": "1"}).with_headers({"X-B": "2"})
        assert response.headers == {"X-A": "1", "X-B": "2"}

    def test_header_lookup_case_insensitive(self) -> None:
        response = Response(headers={"Content-Type": "text/plain"})
        assert response.header("content-type") == "text/plain"
        assert response.header("x-missing") is None

    def test_mutable_in_place(self) -> None:
        response = Response()
        response.headers["X-Added"] = "yes"
        response.status_code = 418
        assert response.to_dict()["statusCode"] == 418


class TestSerialization:
    def test_to_dict_has_exactly_three_keys(self) -> None:
        wire = Response.json({"a": 1}).to_dict()
        assert set(wire) == {"statusCode", "headers", "body"}
        assert wire["body"] == {"a": 1}

    def test_to_dict_copies_headers(self) -> None:
        response = Response(headers={"X-A": "1"})
        response.to_dict()["headers"]["X-B"] = "2"
        assert "X-B" not in response.headers

    def test_is_structured(self) -> None:
        assert Response(body={"a": 1}).is_structured
        assert Response(body=[1]).is_structured
        assert not Response(body="text").is_structured
        assert not Response(body=b"raw").is_structured

    def test_encode_body(self) -> None:
        assert Response(body={"a": 1, "b": [1, 2]}).encode_body() == b'{"a":1,"b":[1,2]}'
        assert Response(body="héllo").encode_body() == "héllo".encode()
        assert Response(body=b"\x00").encode_body() == b"\x00"
