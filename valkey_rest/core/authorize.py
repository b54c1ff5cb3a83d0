"""Authorization Gate - pure decision function for the shared bearer secret.

Invariants:
    - Empty configured secret admits everything (auth disabled)
    - Missing or empty header -> CREDENTIAL_MISSING; mismatch -> CREDENTIAL_INVALID
    - "Bearer <token>" and bare "<token>" are both accepted
    - Neither the presented token nor the secret ever leaves this function

Design Decisions:
    - Decision enum instead of raising: the API layer owns the HTTP mapping
    - hmac.compare_digest: constant-time comparison of secrets
"""

import hmac

from valkey_rest.core.domain_types import AuthDecision

BEARER_PREFIX = "Bearer "


def extract_token(header_value: str) -> str:
    """Strip the optional "Bearer " prefix from an Authorization header value."""
    if len(header_value) > len(BEARER_PREFIX) and header_value.startswith(BEARER_PREFIX):
        return header_value[len(BEARER_PREFIX):]
    return header_value


def authorize(secret: str, header_value: str | None) -> AuthDecision:
    """Decide whether a request carrying `header_value` may pass the gate."""
    if not secret:
        return AuthDecision.ADMIT
    if not header_value:
        return AuthDecision.CREDENTIAL_MISSING
    token = extract_token(header_value)
    if not hmac.compare_digest(token.encode(), secret.encode()):
        return AuthDecision.CREDENTIAL_INVALID
    return AuthDecision.ADMIT
