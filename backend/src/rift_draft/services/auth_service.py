"""Bearer tokens and one-time access codes.

Tokens are opaque ``secrets.token_urlsafe`` strings kept in memory with an
expiry. Callers only see ``issue``/``validate``/``revoke``.
"""

import hmac
import logging
import secrets
import string
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from rift_draft.errors import AuthenticationError

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"
_CODE_ALPHABET = string.ascii_uppercase + string.digits


@dataclass
class AccessCode:
    """One-time code an admin hands to a player."""

    id: str
    code: str
    label: Optional[str] = None
    created_at: float = field(default_factory=time.time)
    used_at: Optional[float] = None

    @property
    def is_used(self) -> bool:
        return self.used_at is not None


@dataclass
class _IssuedToken:
    subject_id: str
    expires_at: float


class AuthService:
    """In-memory token issuance and access-code redemption."""

    def __init__(self, admin_password: str, token_ttl_seconds: int = 12 * 60 * 60, code_length: int = 8):
        self._admin_password = admin_password
        self.token_ttl_seconds = token_ttl_seconds
        self.code_length = code_length
        self._tokens: dict[str, _IssuedToken] = {}
        self._codes: dict[str, AccessCode] = {}
        self._lock = threading.Lock()

    def issue(self, subject_id: str) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens[token] = _IssuedToken(subject_id, time.time() + self.token_ttl_seconds)
        return token

    def validate(self, token: Optional[str]) -> Optional[str]:
        """Return the token's subject, or None when unknown or expired."""
        if not token:
            return None
        with self._lock:
            issued = self._tokens.get(token)
            if issued is None:
                return None
            if issued.expires_at <= time.time():
                del self._tokens[token]
                return None
            return issued.subject_id

    def revoke(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def login_admin(self, password: str) -> str:
        if not hmac.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8")):
            logger.warning("Rejected admin login")
            raise AuthenticationError("Invalid admin password")
        return self.issue(ADMIN_SUBJECT)

    def is_admin(self, token: Optional[str]) -> bool:
        return self.validate(token) == ADMIN_SUBJECT

    def create_access_code(self, label: Optional[str] = None) -> AccessCode:
        with self._lock:
            while True:
                code = "".join(secrets.choice(_CODE_ALPHABET) for _ in range(self.code_length))
                if code not in self._codes:
                    break
            access_code = AccessCode(id=str(uuid.uuid4()), code=code, label=label)
            self._codes[code] = access_code
        logger.info(f"Issued access code {access_code.id} ({label or 'unlabelled'})")
        return access_code

    def list_access_codes(self) -> list[AccessCode]:
        with self._lock:
            return sorted(self._codes.values(), key=lambda c: c.created_at)

    def redeem_access_code(self, code: str) -> str:
        """Exchange an unused code for a player token; each code works once."""
        normalized = code.strip().upper()
        with self._lock:
            access_code = self._codes.get(normalized)
            if access_code is None or access_code.is_used:
                raise AuthenticationError("Invalid or already used access code")
            access_code.used_at = time.time()
        return self.issue(f"player:{access_code.id}")
