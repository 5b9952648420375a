"""
Token signing and issuance.

A login produces three JWTs (identity, access, refresh) that share one
base claim and one JTI, the id of the login's session activity. The
three are built and signed concurrently; each worker receives its own
copy of the base claim before it is dispatched.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from pydantic import BaseModel

from shared.config import Settings

from .exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    SigningError,
)
from .models import (
    AccessClaim,
    BaseClaim,
    IdentityClaim,
    PrincipalKind,
    RefreshClaim,
    TokenBundle,
    TokenType,
)

logger = logging.getLogger(__name__)

IDENTITY_TOKEN_TTL = timedelta(hours=24)
ACCESS_TOKEN_TTL = timedelta(minutes=20)
REFRESH_TOKEN_TTL = timedelta(hours=1)
DEFAULT_ISSUE_TIMEOUT = 5.0


class TokenSigner:
    """
    Signs claim models into JWTs and verifies them.

    Holds only read-only key material, so one instance is shared by all
    concurrent signing workers.
    """

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
    ):
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._algorithm = algorithm

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def audience(self) -> str:
        return self._audience

    def sign(self, claim: BaseModel) -> str:
        """
        Serialize a claim model and sign it.

        Raises:
            SigningError: If no key is configured or the claim can't be encoded.
        """
        if not self._secret:
            raise SigningError("Signing key is not configured")

        try:
            payload = claim.model_dump(mode="json")
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(f"Failed to sign {type(claim).__name__}") from e

    def decode(
        self,
        token: Optional[str],
        expected_type: Optional[TokenType] = TokenType.ACCESS,
    ) -> dict[str, Any]:
        """
        Verify a token and return its claims.

        Checks signature, exp/nbf, issuer, audience and (unless
        expected_type is None) the token type tag.

        Raises:
            MissingTokenError: If token is empty.
            ExpiredTokenError: If token has expired.
            InvalidTokenError: For any other verification failure.
        """
        if not token:
            raise MissingTokenError()

        if not self._secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "nbf", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        if expected_type is not None and payload.get("type") != expected_type.value:
            raise InvalidTokenError(
                f"Expected {expected_type.value}, got {payload.get('type')}"
            )

        return payload


# -----------------------------------------------------------------------------
# Claim builders
# -----------------------------------------------------------------------------


def build_base_claim(
    now: datetime,
    jti: str,
    issuer: str,
    audience: str,
    ttl: timedelta = IDENTITY_TOKEN_TTL,
) -> BaseClaim:
    """Build the claim shared by all tokens of one login."""
    issued_at = int(now.timestamp())
    return BaseClaim(
        exp=int((now + ttl).timestamp()),
        nbf=issued_at,
        iat=issued_at,
        iss=issuer,
        aud=audience,
        jti=jti,
        type=TokenType.ID,
    )


def build_identity_claim(base: BaseClaim, username: str, role: str) -> IdentityClaim:
    """Identity variant: the base claim as-is, plus who the principal is."""
    return IdentityClaim(**base.model_dump(), username=username, role=role)


def build_access_claim(
    base: BaseClaim,
    user_id: str,
    role: str,
    ttl: timedelta = ACCESS_TOKEN_TTL,
    kind: PrincipalKind = PrincipalKind.USER,
) -> AccessClaim:
    """
    Access variant: a copy of the base claim with short expiry.

    Account and user ids live in different tables, so the claim names
    which one user_id refers to.
    """
    specialised = base.model_copy(
        update={"exp": base.iat + int(ttl.total_seconds()), "type": TokenType.ACCESS}
    )
    return AccessClaim(**specialised.model_dump(), role=role, user_id=user_id, kind=kind)


def build_refresh_claim(
    base: BaseClaim,
    ttl: timedelta = REFRESH_TOKEN_TTL,
) -> RefreshClaim:
    """Refresh variant: a copy of the base claim with medium expiry, no identity."""
    specialised = base.model_copy(
        update={"exp": base.iat + int(ttl.total_seconds()), "type": TokenType.REFRESH}
    )
    return RefreshClaim(**specialised.model_dump())


# -----------------------------------------------------------------------------
# Concurrent issuance
# -----------------------------------------------------------------------------


class TokenIssuer:
    """
    Issues the identity/access/refresh bundle for a login.

    The three variants are signed in worker threads and joined with a
    single barrier that has a deadline. A bundle is returned only when
    all three succeed.
    """

    def __init__(
        self,
        signer: TokenSigner,
        identity_ttl: timedelta = IDENTITY_TOKEN_TTL,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
        timeout: float = DEFAULT_ISSUE_TIMEOUT,
    ):
        self._signer = signer
        self._identity_ttl = identity_ttl
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._timeout = timeout

    @classmethod
    def from_settings(cls, signer: TokenSigner, settings: Settings) -> "TokenIssuer":
        return cls(
            signer,
            identity_ttl=timedelta(minutes=settings.identity_token_ttl_minutes),
            access_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
            refresh_ttl=timedelta(minutes=settings.refresh_token_ttl_minutes),
            timeout=settings.token_issue_timeout_seconds,
        )

    async def issue_all(
        self,
        principal_id: str,
        username: str,
        role: str,
        jti: str,
        now: Optional[datetime] = None,
        kind: PrincipalKind = PrincipalKind.USER,
    ) -> TokenBundle:
        """
        Build and sign all three tokens concurrently.

        Args:
            principal_id: Id carried by the access token
            username: Username carried by the identity token
            role: Role carried by the identity and access tokens
            jti: Session activity id shared by all three tokens
            now: Issue instant (defaults to the current UTC time)
            kind: Principal kind carried by the access token

        Returns:
            TokenBundle with identity, access and refresh tokens

        Raises:
            SigningError: If any variant fails (the first failing variant in
                ID, ACCESS, REFRESH order is reported) or the deadline passes.
        """
        base = build_base_claim(
            now or datetime.now(timezone.utc),
            jti,
            self._signer.issuer,
            self._signer.audience,
            self._identity_ttl,
        )

        units = (
            (TokenType.ID, self._sign_identity, (base.model_copy(), username, role)),
            (TokenType.ACCESS, self._sign_access, (base.model_copy(), principal_id, role, kind)),
            (TokenType.REFRESH, self._sign_refresh, (base.model_copy(),)),
        )

        try:
            results = await asyncio.wait_for(
                asyncio.gather(
                    *(asyncio.to_thread(fn, *args) for _, fn, args in units),
                    return_exceptions=True,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Token issuance exceeded %.1fs deadline (jti=%s)", self._timeout, jti)
            raise SigningError("Token issuance timed out") from e

        for (token_type, _, _), result in zip(units, results):
            if isinstance(result, BaseException):
                logger.error("Failed to sign %s (jti=%s): %s", token_type.value, jti, result)
                if isinstance(result, SigningError):
                    raise result
                raise SigningError(
                    f"Failed to sign {token_type.value}", token_type=token_type.value
                ) from result

        id_token, access_token, refresh_token = results
        return TokenBundle(
            id_token=id_token,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    def _sign_identity(self, base: BaseClaim, username: str, role: str) -> str:
        return self._signer.sign(build_identity_claim(base, username, role))

    def _sign_access(
        self, base: BaseClaim, principal_id: str, role: str, kind: PrincipalKind
    ) -> str:
        return self._signer.sign(
            build_access_claim(base, principal_id, role, self._access_ttl, kind)
        )

    def _sign_refresh(self, base: BaseClaim) -> str:
        return self._signer.sign(build_refresh_claim(base, self._refresh_ttl))
