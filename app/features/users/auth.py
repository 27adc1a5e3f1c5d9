"""
Bearer credential handling.

Tokens are issued and verified by the identity collaborator upstream of this
service, so the subject is read from the token without re-verifying its
signature. Plain user IDs are accepted as tokens for local development.
"""
import jwt

from app.features.authorization.exceptions import Unauthenticated
from app.utils import get_logger


log = get_logger(__name__)

SUBJECT_CLAIMS = ("userId", "sub")


def resolve_token_subject(token: str) -> str:
    """
    Return the user ID a bearer token refers to.

    Args:
        token: Credential from the Authorization header

    Returns:
        The user ID from the ``userId`` (or ``sub``) claim of a JWT, or the
        token itself when it is not a JWT

    Raises:
        Unauthenticated: If the token is empty, expired, or a JWT without a subject
    """
    token = token.strip()
    if not token:
        raise Unauthenticated()

    try:
        payload = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": True}
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired")
    except jwt.DecodeError:
        # Not a JWT: development tokens carry the user ID directly
        return token
    except jwt.InvalidTokenError as e:
        raise Unauthenticated(f"Invalid token: {str(e)}")

    for claim in SUBJECT_CLAIMS:
        subject = payload.get(claim)
        if subject:
            return str(subject)

    log.info("Token payload carries no subject claim")
    raise Unauthenticated("Invalid token payload")
