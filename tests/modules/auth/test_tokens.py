"""
Tests for token signing, claim building and concurrent issuance.
"""

import asyncio
import time
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import jwt
import pytest
from pydantic import ValidationError as PydanticValidationError

from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    SigningError,
)
from modules.auth.models import PrincipalKind, TokenBundle, TokenType
from modules.auth.tokens import (
    TokenIssuer,
    TokenSigner,
    build_access_claim,
    build_base_claim,
    build_identity_claim,
    build_refresh_claim,
)
from shared.config import Settings

ISSUER = "http://mygram-account"
AUDIENCE = "http://mygram"


def unverified(token: str) -> dict:
    """Read claims without checking signature or expiry."""
    return jwt.decode(token, options={"verify_signature": False})


class TestClaimBuilders:
    """Tests for the base claim and its three variants."""

    def test_base_claim_defaults(self, now):
        """Base claim has iat == nbf == now and a 24h expiry."""
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        ts = int(now.timestamp())

        assert base.iat == ts
        assert base.nbf == ts
        assert base.exp == ts + 24 * 3600
        assert base.iss == ISSUER
        assert base.aud == AUDIENCE
        assert base.jti == "jti-1"
        assert base.type == TokenType.ID

    def test_base_claim_is_frozen(self, now):
        """Variants can only be derived, never written in place."""
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        with pytest.raises(PydanticValidationError):
            base.exp = 0

    def test_identity_claim_keeps_base_fields(self, now):
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        claim = build_identity_claim(base, "bob", "normal")

        assert claim.exp == base.exp
        assert claim.type == TokenType.ID
        assert claim.username == "bob"
        assert claim.role == "normal"

    def test_access_claim_overrides_exp_and_type(self, now):
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        claim = build_access_claim(base, "7", "normal")

        assert claim.exp == base.iat + 20 * 60
        assert claim.type == TokenType.ACCESS
        assert claim.user_id == "7"
        assert claim.jti == base.jti
        assert claim.kind == PrincipalKind.USER

    def test_access_claim_names_account_kind(self, now):
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        claim = build_access_claim(base, "3f1c2b9e", "admin", kind=PrincipalKind.ACCOUNT)

        assert claim.model_dump(mode="json")["kind"] == "account"

    def test_refresh_claim_overrides_exp_and_type(self, now):
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        claim = build_refresh_claim(base)

        assert claim.exp == base.iat + 3600
        assert claim.type == TokenType.REFRESH
        assert not hasattr(claim, "username")

    def test_variants_leave_base_untouched(self, now):
        """Deriving access/refresh claims never changes the base claim."""
        base = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        before = base.model_dump()

        build_access_claim(base, "7", "normal")
        build_refresh_claim(base)

        assert base.model_dump() == before


class TestTokenSigner:
    """Tests for TokenSigner.sign and TokenSigner.decode."""

    def test_sign_produces_hs256_jwt(self, signer, now):
        claim = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)
        token = signer.sign(claim)

        assert jwt.get_unverified_header(token)["alg"] == "HS256"
        assert unverified(token)["type"] == "ID_TOKEN"

    def test_sign_without_key_fails(self, now):
        signer = TokenSigner("", ISSUER, AUDIENCE)
        claim = build_base_claim(now, "jti-1", ISSUER, AUDIENCE)

        with pytest.raises(SigningError):
            signer.sign(claim)

    def test_decode_valid_access_token(self, signer):
        base = build_base_claim(datetime.now(timezone.utc), "jti-1", ISSUER, AUDIENCE)
        token = signer.sign(build_access_claim(base, "7", "normal"))

        payload = signer.decode(token, expected_type=TokenType.ACCESS)

        assert payload["user_id"] == "7"
        assert payload["jti"] == "jti-1"

    def test_decode_missing_token(self, signer):
        with pytest.raises(MissingTokenError):
            signer.decode("")

    def test_decode_expired_token(self, signer):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        base = build_base_claim(past, "jti-1", ISSUER, AUDIENCE)
        token = signer.sign(build_access_claim(base, "7", "normal"))

        with pytest.raises(ExpiredTokenError):
            signer.decode(token)

    def test_decode_garbage(self, signer):
        with pytest.raises(InvalidTokenError):
            signer.decode("not-a-jwt")

    def test_decode_wrong_secret(self, signer):
        base = build_base_claim(datetime.now(timezone.utc), "jti-1", ISSUER, AUDIENCE)
        other = TokenSigner("another-secret-key-for-testing-32b", ISSUER, AUDIENCE)
        token = other.sign(build_access_claim(base, "7", "normal"))

        with pytest.raises(InvalidTokenError):
            signer.decode(token)

    def test_decode_wrong_audience(self, signer):
        base = build_base_claim(datetime.now(timezone.utc), "jti-1", ISSUER, "http://elsewhere")
        token = signer.sign(build_access_claim(base, "7", "normal"))

        with pytest.raises(InvalidTokenError):
            signer.decode(token)

    def test_decode_rejects_identity_token_as_access(self, signer):
        """An identity token has a valid signature but the wrong type tag."""
        base = build_base_claim(datetime.now(timezone.utc), "jti-1", ISSUER, AUDIENCE)
        token = signer.sign(build_identity_claim(base, "bob", "normal"))

        with pytest.raises(InvalidTokenError, match="Expected ACCESS_TOKEN"):
            signer.decode(token, expected_type=TokenType.ACCESS)


class TestTokenIssuer:
    """Tests for concurrent issuance of the three-token bundle."""

    @pytest.mark.asyncio
    async def test_issues_three_distinct_tokens(self, issuer, now):
        bundle = await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

        assert isinstance(bundle, TokenBundle)
        tokens = {bundle.id_token, bundle.access_token, bundle.refresh_token}
        assert len(tokens) == 3

    @pytest.mark.asyncio
    async def test_tokens_share_jti_and_base(self, issuer, now):
        bundle = await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

        claims = [
            unverified(bundle.id_token),
            unverified(bundle.access_token),
            unverified(bundle.refresh_token),
        ]
        assert {c["jti"] for c in claims} == {"jti-1"}
        assert {c["iat"] for c in claims} == {int(now.timestamp())}
        assert {c["nbf"] for c in claims} == {int(now.timestamp())}
        assert {c["iss"] for c in claims} == {ISSUER}
        assert {c["aud"] for c in claims} == {AUDIENCE}

    @pytest.mark.asyncio
    async def test_tokens_differ_in_exp_and_type(self, issuer, now):
        bundle = await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)
        ts = int(now.timestamp())

        identity = unverified(bundle.id_token)
        access = unverified(bundle.access_token)
        refresh = unverified(bundle.refresh_token)

        assert (identity["type"], identity["exp"]) == ("ID_TOKEN", ts + 24 * 3600)
        assert (access["type"], access["exp"]) == ("ACCESS_TOKEN", ts + 20 * 60)
        assert (refresh["type"], refresh["exp"]) == ("REFRESH_TOKEN", ts + 3600)

    @pytest.mark.asyncio
    async def test_variant_specific_fields(self, issuer, now):
        bundle = await issuer.issue_all("7", "bob", "admin", "jti-1", now=now)

        identity = unverified(bundle.id_token)
        access = unverified(bundle.access_token)
        refresh = unverified(bundle.refresh_token)

        assert identity["username"] == "bob"
        assert identity["role"] == "admin"
        assert access["user_id"] == "7"
        assert access["role"] == "admin"
        assert access["kind"] == "user"
        assert "username" not in refresh
        assert "user_id" not in refresh
        assert "kind" not in identity
        assert "kind" not in refresh

    @pytest.mark.asyncio
    async def test_account_bundle_access_kind(self, issuer, now):
        bundle = await issuer.issue_all(
            "3f1c2b9e", "admin", "admin", "jti-1", now=now, kind=PrincipalKind.ACCOUNT
        )

        assert unverified(bundle.access_token)["kind"] == "account"

    @pytest.mark.asyncio
    async def test_access_token_verifies(self, issuer, signer):
        bundle = await issuer.issue_all("7", "bob", "normal", "jti-1")

        payload = signer.decode(bundle.access_token, expected_type=TokenType.ACCESS)

        assert payload["user_id"] == "7"

    @pytest.mark.asyncio
    async def test_many_concurrent_logins_never_mix_jtis(self, signer, now):
        """Concurrent issuance keeps every bundle's three tokens on its own jti."""
        issuer = TokenIssuer(signer, timeout=60)
        jtis = [str(uuid.uuid4()) for _ in range(1000)]

        bundles = await asyncio.gather(
            *(issuer.issue_all(str(i), f"user{i}", "normal", jti, now=now) for i, jti in enumerate(jtis))
        )

        for i, (jti, bundle) in enumerate(zip(jtis, bundles)):
            identity = unverified(bundle.id_token)
            access = unverified(bundle.access_token)
            refresh = unverified(bundle.refresh_token)
            assert identity["jti"] == access["jti"] == refresh["jti"] == jti
            assert identity["username"] == f"user{i}"
            assert access["user_id"] == str(i)

    @pytest.mark.asyncio
    async def test_failure_returns_no_bundle(self, now):
        """A failing variant raises SigningError instead of a partial bundle."""
        issuer = TokenIssuer(TokenSigner("", ISSUER, AUDIENCE))

        with pytest.raises(SigningError):
            await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

    @pytest.mark.asyncio
    async def test_first_failure_in_variant_order_is_reported(self, issuer, now):
        """With access and refresh both failing, the access error wins."""

        def fail_access(*args):
            raise SigningError("access failed", token_type="ACCESS_TOKEN")

        def fail_refresh(*args):
            raise SigningError("refresh failed", token_type="REFRESH_TOKEN")

        with patch.object(issuer, "_sign_access", side_effect=fail_access), \
                patch.object(issuer, "_sign_refresh", side_effect=fail_refresh):
            with pytest.raises(SigningError, match="access failed"):
                await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self, issuer, now):
        with patch.object(issuer, "_sign_refresh", side_effect=RuntimeError("boom")):
            with pytest.raises(SigningError) as exc_info:
                await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

        assert exc_info.value.details["token_type"] == "REFRESH_TOKEN"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_join_deadline(self, signer, now):
        """A unit that outlives the deadline fails the whole issuance."""
        issuer = TokenIssuer(signer, timeout=0.05)

        def slow(*args):
            time.sleep(0.5)
            return "late"

        with patch.object(issuer, "_sign_identity", side_effect=slow):
            with pytest.raises(SigningError, match="timed out"):
                await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

    @pytest.mark.asyncio
    async def test_each_unit_gets_its_own_base_copy(self, issuer, now):
        seen = []

        def record(base, *args):
            seen.append(id(base))
            return "token"

        with patch.object(issuer, "_sign_identity", side_effect=record), \
                patch.object(issuer, "_sign_access", side_effect=record), \
                patch.object(issuer, "_sign_refresh", side_effect=record):
            await issuer.issue_all("7", "bob", "normal", "jti-1", now=now)

        assert len(set(seen)) == 3

    def test_from_settings(self, signer):
        settings = Settings(
            identity_token_ttl_minutes=60,
            access_token_ttl_minutes=5,
            refresh_token_ttl_minutes=30,
            token_issue_timeout_seconds=1.5,
        )
        issuer = TokenIssuer.from_settings(signer, settings)

        assert issuer._identity_ttl == timedelta(minutes=60)
        assert issuer._access_ttl == timedelta(minutes=5)
        assert issuer._refresh_ttl == timedelta(minutes=30)
        assert issuer._timeout == 1.5
