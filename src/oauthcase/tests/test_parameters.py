"""Tests for OAuthParameters builders, Secrets, and the captured-parameter merge."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from oauthcase.foundation.errors import ErrorCode, SignError
from oauthcase.oauth1 import (
    HmacSha1,
    OAuthParameters,
    Secrets,
    SecretsProvider,
    SignatureMethod,
    Signer,
    TokenResponse,
    apply_captured,
)


class PlaintextMethod(SignatureMethod):
    @property
    def name(self) -> str:
        return "PLAINTEXT"

    def sign(self, base_string: str, key: str) -> bytes:
        return key.encode()


# ═════════════════════════════════════════════════════════════════════════════
# Builders
# ═════════════════════════════════════════════════════════════════════════════


class TestBuilders:
    def test_defaults(self) -> None:
        params = OAuthParameters()
        assert params.callback is None
        assert params.nonce is None
        assert params.realm is None
        assert params.timestamp is None
        assert params.verifier is None
        assert params.version is False
        assert isinstance(params.signature_method, HmacSha1)

    def test_builders_return_new_instances(self) -> None:
        base = OAuthParameters()
        derived = base.with_nonce("n").with_timestamp(10).with_callback("oob").with_verifier("v").with_realm("r")

        assert base == OAuthParameters()
        assert (derived.nonce, derived.timestamp, derived.callback, derived.verifier, derived.realm) == (
            "n", 10, "oob", "v", "r",
        )

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            OAuthParameters().nonce = "x"  # type: ignore[misc]

    def test_later_setter_wins(self) -> None:
        assert OAuthParameters().with_nonce("a").with_nonce("b").nonce == "b"

    def test_with_signature_method_keeps_other_fields(self) -> None:
        params = OAuthParameters().with_nonce("n").with_timestamp(5).with_realm("r").with_version(True)
        swapped = params.with_signature_method(PlaintextMethod())

        assert swapped.signature_method.name == "PLAINTEXT"
        assert (swapped.nonce, swapped.timestamp, swapped.realm, swapped.version) == ("n", 5, "r", True)

    @pytest.mark.parametrize("bad", [-1, 2**64])
    def test_timestamp_out_of_range(self, bad: int) -> None:
        with pytest.raises(ValidationError):
            OAuthParameters().with_timestamp(bad)

    def test_timestamp_upper_bound_accepted(self) -> None:
        assert OAuthParameters().with_timestamp(2**64 - 1).timestamp == 2**64 - 1

    def test_signature_method_serialized_by_name(self) -> None:
        assert OAuthParameters().model_dump()["signature_method"] == "HMAC-SHA1"


class TestProtocolPairs:
    def test_sorted_block(self) -> None:
        params = (
            OAuthParameters()
            .with_version(True)
            .with_verifier("v")
            .with_timestamp(1)
            .with_nonce("n")
            .with_callback("oob")
        )
        keys = [k for k, _ in params.protocol_pairs("ck", "tok")]
        assert keys == sorted(keys)
        assert keys == [
            "oauth_callback", "oauth_consumer_key", "oauth_nonce", "oauth_signature_method",
            "oauth_timestamp", "oauth_token", "oauth_verifier", "oauth_version",
        ]

    def test_minimal_block(self) -> None:
        assert OAuthParameters().protocol_pairs("ck", None) == [
            ("oauth_consumer_key", "ck"),
            ("oauth_signature_method", "HMAC-SHA1"),
        ]

    def test_version_emits_only_1_0(self) -> None:
        assert ("oauth_version", "1.0") in OAuthParameters().with_version(True).protocol_pairs("ck", None)


# ═════════════════════════════════════════════════════════════════════════════
# Secrets
# ═════════════════════════════════════════════════════════════════════════════


class TestSecrets:
    def test_consumer_only(self) -> None:
        secrets = Secrets.new("key", "secret")
        assert secrets.consumer_pair() == ("key", "secret")
        assert secrets.token_pair() is None

    def test_token_returns_new_secrets(self) -> None:
        consumer = Secrets.new("key", "secret")
        user = consumer.token("tok", "tok-secret")

        assert user.token_pair() == ("tok", "tok-secret")
        assert consumer.token_pair() is None

    def test_with_token_response(self) -> None:
        resp = TokenResponse(oauth_token="t", oauth_token_secret="s")
        assert Secrets.new("k", "c").with_token_response(resp).token_pair() == ("t", "s")

    def test_incomplete_token_pair_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Secrets(consumer_key="k", consumer_secret="c", token="t")

    def test_secrets_hidden(self) -> None:
        secrets = Secrets.new("key", "very-long-consumer-secret").token("tok", "short")
        assert "very-long-consumer-secret" not in repr(secrets)
        dumped = secrets.model_dump_json()
        assert "very-long-consumer-secret" not in dumped
        assert '"token_secret":"***"' in dumped

    def test_is_secrets_provider(self) -> None:
        assert isinstance(Secrets.new("k", "c"), SecretsProvider)

    def test_custom_provider_signs(self) -> None:
        class Vault:
            def consumer_pair(self) -> tuple[str, str]:
                return "dpf43f3p2l4k3l03", "kd94hf93k423kf44"

            def token_pair(self) -> tuple[str, str] | None:
                return None

        params = OAuthParameters().with_nonce("n").with_timestamp(1)
        from_vault = Signer(Vault(), params).generate_signature("GET", "https://e.com/", "", is_url_query=False)
        from_secrets = Signer(Secrets.new("dpf43f3p2l4k3l03", "kd94hf93k423kf44"), params).generate_signature(
            "GET", "https://e.com/", "", is_url_query=False
        )
        assert from_vault == from_secrets


# ═════════════════════════════════════════════════════════════════════════════
# Captured Parameter Merge
# ═════════════════════════════════════════════════════════════════════════════


class TestApplyCaptured:
    def test_settable_keys(self) -> None:
        merged = apply_captured(
            OAuthParameters(),
            {
                "oauth_callback": "oob",
                "oauth_nonce": "n",
                "oauth_verifier": "v",
                "realm": "Photos",
                "oauth_timestamp": "137131202",
                "oauth_version": "1.0",
            },
        ).unwrap()

        assert merged.callback == "oob"
        assert merged.nonce == "n"
        assert merged.verifier == "v"
        assert merged.realm == "Photos"
        assert merged.timestamp == 137131202
        assert merged.version is True

    def test_captured_overrides_configured(self) -> None:
        base = OAuthParameters().with_nonce("configured")
        assert apply_captured(base, {"oauth_nonce": "captured"}).unwrap().nonce == "captured"

    def test_empty_version_clears(self) -> None:
        base = OAuthParameters().with_version(True)
        assert apply_captured(base, {"oauth_version": ""}).unwrap().version is False

    def test_empty_capture_is_identity(self) -> None:
        base = OAuthParameters().with_nonce("n")
        assert apply_captured(base, {}).unwrap() == base

    def test_accepts_pair_sequence(self) -> None:
        merged = apply_captured(OAuthParameters(), [("oauth_nonce", "a"), ("oauth_nonce", "b")]).unwrap()
        assert merged.nonce == "b"

    @pytest.mark.parametrize("key", ["oauth_signature_method", "oauth_consumer_key", "oauth_token"])
    def test_unconfigurable(self, key: str) -> None:
        err = apply_captured(OAuthParameters(), {key: "x"}).unwrap_err()
        assert err.code is ErrorCode.UNCONFIGURABLE_PARAMETER
        assert err.value == key
        assert err.message == f"specified parameter {key} could not be configured via the request parameters."

    @pytest.mark.parametrize("key", ["oauth_bogus", "oauth_signature", "oauth_token_secret"])
    def test_unknown(self, key: str) -> None:
        err = apply_captured(OAuthParameters(), {key: "1"}).unwrap_err()
        assert err.code is ErrorCode.UNKNOWN_PARAMETER
        assert err.message == f"unknown oauth parameter : {key}"

    @pytest.mark.parametrize("raw", ["abc", "-1", "1.5", "", "18446744073709551616", "１２"])
    def test_invalid_timestamp(self, raw: str) -> None:
        err = apply_captured(OAuthParameters(), {"oauth_timestamp": raw}).unwrap_err()
        assert err.code is ErrorCode.INVALID_TIMESTAMP
        assert err.value == raw
        assert err.message == f"invalid oauth_timestamp, must be u64, but {raw} is not compatible."

    def test_timestamp_u64_max(self) -> None:
        merged = apply_captured(OAuthParameters(), {"oauth_timestamp": "18446744073709551615"}).unwrap()
        assert merged.timestamp == 2**64 - 1

    @pytest.mark.parametrize("raw", ["1.0a", "2.0", "1"])
    def test_invalid_version(self, raw: str) -> None:
        err = apply_captured(OAuthParameters(), {"oauth_version": raw}).unwrap_err()
        assert err.code is ErrorCode.INVALID_VERSION
        assert err.message == f"invalid oauth_version, must be 1.0 or just empty, but specified {raw}."

    def test_first_error_latches(self) -> None:
        """Later entries, valid or not, are ignored after the first failure."""
        result = apply_captured(
            OAuthParameters(),
            [("oauth_nonce", "ok"), ("oauth_bogus", "1"), ("oauth_token", "x"), ("oauth_verifier", "v")],
        )
        err = result.unwrap_err()
        assert err.code is ErrorCode.UNKNOWN_PARAMETER
        assert err.value == "oauth_bogus"

    def test_signer_with_captured_raises(self) -> None:
        signer = Signer(Secrets.new("k", "c"))
        with pytest.raises(SignError) as exc_info:
            signer.with_captured({"oauth_timestamp": "soon"})
        assert exc_info.value.code is ErrorCode.INVALID_TIMESTAMP
        assert exc_info.value.error.is_sign_error

    def test_signer_with_captured_leaves_original(self) -> None:
        signer = Signer(Secrets.new("k", "c"))
        merged = signer.with_captured({"oauth_nonce": "n"})
        assert merged.parameters.nonce == "n"
        assert signer.parameters.nonce is None
