"""
Authoritative admin check: identity-token verification plus email allow-list
"""
import logging
from typing import Callable, Dict, Iterable, Optional

import firebase_admin
from firebase_admin import auth, credentials, exceptions

from storefront.config import Settings
from storefront.errors import UpstreamError
from storefront.schemas.admin import AdminVerification

logger = logging.getLogger(__name__)

TokenDecoder = Callable[[str], Dict]


class FirebaseTokenDecoder:
    """Verifies Firebase ID tokens with the Admin SDK, initializing it on first use"""

    def __init__(self, credentials_path: str = ""):
        self.credentials_path = credentials_path
        self._app = None

    def _get_app(self):
        if self._app is not None:
            return self._app

        try:
            self._app = firebase_admin.get_app()
            return self._app
        except ValueError:
            pass

        try:
            if self.credentials_path:
                cred = credentials.Certificate(self.credentials_path)
            else:
                cred = credentials.ApplicationDefault()
            self._app = firebase_admin.initialize_app(cred)
        except Exception as e:
            logger.exception(f"Failed to initialize Firebase Admin: {e}")
            raise UpstreamError("Identity provider is not configured")

        logger.info("Firebase Admin SDK initialized")
        return self._app

    def __call__(self, token: str) -> Dict:
        return auth.verify_id_token(token, app=self._get_app(), check_revoked=False)


class AdminVerifier:
    """Decodes an identity token and matches its email against the allow-list"""

    def __init__(self, allowed_emails: Iterable[str], decoder: TokenDecoder):
        self.allowed_emails = frozenset(allowed_emails)
        self.decoder = decoder

    @classmethod
    def from_settings(cls, config: Settings) -> "AdminVerifier":
        return cls(config.ADMIN_EMAILS, FirebaseTokenDecoder(config.FIREBASE_CREDENTIALS_PATH))

    def verify(self, token: Optional[str]) -> AdminVerification:
        """
        Verify an admin identity token

        Invalid, expired or non-allow-listed tokens fail closed.

        Raises:
            UpstreamError: If the identity provider cannot be initialized
        """
        if not token:
            return AdminVerification(is_valid=False)

        try:
            decoded = self.decoder(token)
        except (ValueError, exceptions.FirebaseError) as e:
            logger.warning(f"Admin token verification failed: {e}")
            return AdminVerification(is_valid=False)

        email = decoded.get("email")
        uid = decoded.get("uid")
        if not email or email not in self.allowed_emails:
            logger.warning(f"Admin access denied for {email or 'unknown email'} (uid {uid})")
            return AdminVerification(is_valid=False)

        return AdminVerification(is_valid=True, email=email, uid=uid)
