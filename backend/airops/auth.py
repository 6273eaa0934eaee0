"""
Edit Authorization

Mutations require the caller to present the edit secret in the
X-Edit-Secret header. The verifier is injected as a dependency so tests and
alternative deployments can swap it out.
"""
import hmac
from typing import Optional

from fastapi import Depends, Header
import structlog

from airops.config import settings
from airops.errors import ServiceError

logger = structlog.get_logger()


class EditSecretVerifier:
    """Checks a presented credential against the configured edit secret."""

    def __init__(self, secret: str):
        self._secret = secret or ""

    def verify(self, candidate: Optional[str]) -> bool:
        # An unset secret locks all edits
        if not self._secret or not candidate:
            return False
        return hmac.compare_digest(self._secret.encode(), candidate.encode())


def get_credential_verifier() -> EditSecretVerifier:
    return EditSecretVerifier(settings.edit_secret)


async def require_editor(
    x_edit_secret: Optional[str] = Header(None, alias="X-Edit-Secret"),
    verifier: EditSecretVerifier = Depends(get_credential_verifier),
) -> None:
    """Dependency guarding every mutating route."""
    if not verifier.verify(x_edit_secret):
        logger.warning("Rejected unauthorized edit")
        raise ServiceError("Unauthorized", status_code=401, code="unauthorized")
