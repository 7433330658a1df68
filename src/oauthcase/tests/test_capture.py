"""Tests for protocol-parameter interception from query and form data."""

from __future__ import annotations

from oauthcase.oauth1 import CapturedParameters, is_protocol_key, normalize_pairs, steal_protocol_pairs


def test_is_protocol_key() -> None:
    assert is_protocol_key("oauth_nonce")
    assert is_protocol_key("oauth_")
    assert is_protocol_key("realm")
    assert not is_protocol_key("Realm")
    assert not is_protocol_key("auth_token")
    assert not is_protocol_key("status")


def test_normalize_mapping() -> None:
    assert normalize_pairs({"a": 1, "b": True, "c": None, "d": ["x", "y"]}) == [
        ("a", "1"), ("b", "true"), ("d", "x"), ("d", "y"),
    ]


def test_normalize_sequence_keeps_order_and_duplicates() -> None:
    assert normalize_pairs([("z", "1"), ("a", "2"), ("z", "3")]) == [("z", "1"), ("a", "2"), ("z", "3")]


def test_normalize_none() -> None:
    assert normalize_pairs(None) == []


def test_steal_protocol_pairs() -> None:
    captured: dict[str, str] = {}
    remainder = steal_protocol_pairs(
        [("file", "vacation.jpg"), ("oauth_nonce", "a"), ("realm", "Photos"), ("oauth_nonce", "b")],
        captured,
    )
    assert remainder == [("file", "vacation.jpg")]
    assert captured == {"oauth_nonce": "b", "realm": "Photos"}


# ═════════════════════════════════════════════════════════════════════════════
# CapturedParameters
# ═════════════════════════════════════════════════════════════════════════════


class TestCapturedParameters:
    def test_query_string_capture(self) -> None:
        captured = CapturedParameters()
        remainder = captured.capture_query_string("file=vacation.jpg&size=original&oauth_should_be_ignored=true")

        assert remainder == "file=vacation.jpg&size=original"
        assert captured.query == {"oauth_should_be_ignored": "true"}

    def test_query_string_keeps_blank_values(self) -> None:
        captured = CapturedParameters()
        assert captured.capture_query_string("flag=&oauth_nonce=") == "flag="
        assert captured.query == {"oauth_nonce": ""}

    def test_query_captures_accumulate(self) -> None:
        captured = CapturedParameters()
        captured.capture_query({"oauth_nonce": "n"})
        captured.capture_query({"oauth_timestamp": "1"})
        assert captured.query == {"oauth_nonce": "n", "oauth_timestamp": "1"}

    def test_form_capture_replaces_previous(self) -> None:
        captured = CapturedParameters()
        captured.capture_form({"oauth_nonce": "first", "a": "1"})
        remainder = captured.capture_form({"oauth_verifier": "v", "b": "2"})

        assert remainder == [("b", "2")]
        assert captured.form == {"oauth_verifier": "v"}

    def test_form_capture_does_not_touch_query(self) -> None:
        captured = CapturedParameters()
        captured.capture_query({"oauth_nonce": "q"})
        captured.capture_form({"oauth_callback": "oob"})
        assert captured.query == {"oauth_nonce": "q"}
        assert captured.form == {"oauth_callback": "oob"}

    def test_merged_query_wins(self) -> None:
        captured = CapturedParameters()
        captured.capture_form({"oauth_nonce": "form", "oauth_callback": "oob"})
        captured.capture_query({"oauth_nonce": "query"})

        merged = captured.merged()
        assert merged == {"oauth_nonce": "query", "oauth_callback": "oob"}
        assert list(merged) == ["oauth_nonce", "oauth_callback"]

    def test_copy_is_independent(self) -> None:
        captured = CapturedParameters()
        captured.capture_query({"oauth_nonce": "n"})
        clone = captured.copy()
        clone.capture_query({"oauth_nonce": "other"})

        assert captured.query == {"oauth_nonce": "n"}
        assert clone.query == {"oauth_nonce": "other"}

    def test_truthiness(self) -> None:
        captured = CapturedParameters()
        assert not captured
        captured.capture_form({"realm": "r"})
        assert captured
