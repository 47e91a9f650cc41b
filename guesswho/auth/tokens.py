"""Development token minting.

Production tokens come from the identity provider. For local setups that
verify with a shared secret, this module signs compatible tokens.
"""

from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone

import jwt

from guesswho.config.settings import ServerConfig, get_server_config


def create_access_token(
    subject: str,
    config: ServerConfig,
    extra_claims: dict | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a signed JWT access token.

    Args:
        subject: Value for the ``sub`` claim.
        config: Server configuration providing the secret, algorithm,
            issuer and audience.
        extra_claims: Additional claims to include.
        expires_minutes: Lifetime override; defaults to
            ``config.jwt_expire_minutes``.

    Returns:
        Encoded JWT string.
    """
    if not config.jwt_secret:
        raise ValueError("AUTH_JWT_SECRET is required to mint tokens")

    if expires_minutes is None:
        expires_minutes = config.jwt_expire_minutes

    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if config.jwt_issuer:
        payload["iss"] = config.jwt_issuer
    if config.jwt_audience:
        payload["aud"] = config.jwt_audience
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mint a development bearer token")
    parser.add_argument("--subject", type=str, help="Subject (user id)", required=True)
    parser.add_argument("--minutes", type=int, help="Token lifetime in minutes", default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = get_parser().parse_args(argv)
    config = get_server_config()
    print(create_access_token(args.subject, config, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()
