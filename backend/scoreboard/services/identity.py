from dataclasses import dataclass
from typing import Optional

from flask import current_app
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from scoreboard.errors import ConfigurationError, Unauthorized


@dataclass(frozen=True)
class IdentityClaims:
    subject: str
    name: Optional[str] = None
    picture: Optional[str] = None


class GoogleTokenVerifier:
    """Verifies Google ID tokens against the configured client id.

    Signature, expiry, audience and issuer checks are done by google-auth;
    every failure is reported as the same generic ``Unauthorized``.
    """

    def __init__(self, client_id: Optional[str], request=None):
        self.client_id = client_id
        self._request = request

    def _transport(self):
        if self._request is None:
            self._request = google_requests.Request()
        return self._request

    def verify(self, token) -> IdentityClaims:
        if not self.client_id:
            raise ConfigurationError('GOOGLE_CLIENT_ID is missing')
        if not token or not isinstance(token, str):
            raise Unauthorized()
        try:
            payload = id_token.verify_oauth2_token(token, self._transport(), self.client_id)
        except (ValueError, google_exceptions.GoogleAuthError) as exc:
            raise Unauthorized() from exc
        subject = payload.get('sub')
        if not subject:
            raise Unauthorized()
        return IdentityClaims(
            subject=str(subject),
            name=payload.get('name'),
            picture=payload.get('picture'),
        )


def get_verifier():
    return current_app.extensions['identity_verifier']
