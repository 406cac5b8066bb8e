"""Demo login, client sessions and the route guard.

The API itself reads no credentials; this module only gates the client.
Sessions persist between CLI runs as a signed token (python-jose, HS256)
so a hand-edited session file is detected and discarded.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Protocol

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from ems.common.constants import UserRole

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
LOGIN_PATH = "/login"
HOME_PATH = "/"


class InvalidCredentials(Exception):
    def __init__(self, message: str = "Invalid email or password") -> None:
        self.message = message
        super().__init__(message)


# ── Identities and sessions ─────────────────────────────────────────

class UserIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    name: str
    role: UserRole


class Session(BaseModel):
    """The logged-in user as seen by the client."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def is_manager(self) -> bool:
        return self.role in (UserRole.manager, UserRole.admin)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


# ═════════════════════════════════════════════════════════════════════
# Credential verification
# ═════════════════════════════════════════════════════════════════════


class CredentialVerifier(Protocol):
    def verify(self, email: str, password: str) -> Optional[UserIdentity]:
        ...


# (email, password, display name, role)
DEMO_USERS: tuple[tuple[str, str, str, UserRole], ...] = (
    ("admin@company.com", "admin123", "Admin User", UserRole.admin),
    ("john.doe@company.com", "password123", "John Doe", UserRole.manager),
    ("jane.smith@company.com", "password123", "Jane Smith", UserRole.employee),
)


class DemoCredentialVerifier:
    """Fixed demo accounts; only salted password hashes are kept in memory."""

    def __init__(self, users=DEMO_USERS) -> None:
        self._users: dict[str, tuple[str, UserIdentity]] = {
            email: (
                generate_password_hash(password),
                UserIdentity(email=email, name=name, role=role),
            )
            for email, password, name, role in users
        }

    def verify(self, email: str, password: str) -> Optional[UserIdentity]:
        entry = self._users.get(email or "")
        if entry is None:
            return None
        password_hash, identity = entry
        if not check_password_hash(password_hash, password or ""):
            return None
        return identity


# ═════════════════════════════════════════════════════════════════════
# Session stores
# ═════════════════════════════════════════════════════════════════════


class SessionStore(Protocol):
    def load(self) -> Optional[Session]:
        ...

    def save(self, session: Session) -> None:
        ...

    def clear(self) -> None:
        ...


class MemorySessionStore:
    """Process-local store, used by tests and embedding callers."""

    def __init__(self) -> None:
        self._session: Optional[Session] = None

    def load(self) -> Optional[Session]:
        return self._session

    def save(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileSessionStore:
    """Durable store: a JSON file holding one signed session token."""

    def __init__(self, path: Path, secret: str) -> None:
        self.path = Path(path)
        self._secret = secret

    def load(self) -> Optional[Session]:
        if not self.path.exists():
            return None
        try:
            token = json.loads(self.path.read_text(encoding="utf-8"))["token"]
            claims = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM])
            return Session(
                name=claims["name"],
                email=claims["sub"],
                role=claims["role"],
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (OSError, ValueError, KeyError, TypeError, JWTError, ValidationError) as exc:
            # Corrupt, tampered or expired: treat as logged out.
            logger.warning("Discarding stored session %s: %s", self.path, exc)
            self.clear()
            return None

    def save(self, session: Session) -> None:
        claims = {
            "sub": session.email,
            "name": session.name,
            "role": session.role.value,
            "iat": int(session.issued_at.timestamp()),
            "exp": int(session.expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


# ═════════════════════════════════════════════════════════════════════
# Auth context
# ═════════════════════════════════════════════════════════════════════


class AuthContext:
    """Login / logout state machine over a verifier and a session store."""

    def __init__(
        self,
        verifier: CredentialVerifier,
        store: SessionStore,
        *,
        ttl: timedelta = timedelta(hours=24),
    ) -> None:
        self.verifier = verifier
        self.store = store
        self.ttl = ttl

    def login(self, email: str, password: str) -> Session:
        """Verify credentials and store a fresh session.

        Raises :class:`InvalidCredentials` and leaves the store empty when
        the email/password pair is unknown.
        """
        identity = self.verifier.verify(email, password)
        if identity is None:
            self.store.clear()
            logger.info("Failed login for %s", email)
            raise InvalidCredentials()

        now = datetime.now(timezone.utc).replace(microsecond=0)
        session = Session(
            name=identity.name,
            email=identity.email,
            role=identity.role,
            issued_at=now,
            expires_at=now + self.ttl,
        )
        self.store.save(session)
        logger.info("Logged in %s (%s)", session.email, session.role.value)
        return session

    def logout(self) -> None:
        self.store.clear()

    def current(self) -> Optional[Session]:
        """The live session, or ``None``; an expired session is cleared."""
        session = self.store.load()
        if session is not None and session.is_expired():
            logger.info("Session for %s expired", session.email)
            self.store.clear()
            return None
        return session


def guard(session: Optional[Session], *, require_admin: bool = False) -> Optional[str]:
    """Where to send the user instead, or ``None`` when access is allowed."""
    if session is None:
        return LOGIN_PATH
    if require_admin and not session.is_admin:
        return HOME_PATH
    return None
