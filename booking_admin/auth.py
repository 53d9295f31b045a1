import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ADMIN_ROLE
from .errors import AuthError
from .identity import AuthSession, IdentityProvider
from .models import USERS, UserProfile
from .shared.messages import ACCESS_DENIED
from .store import DocumentStore, get_store

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class GuardState(str, Enum):
    CHECKING = "checking"
    AUTHORIZED = "authorized"
    DENIED = "denied"


@dataclass
class AdminContext:
    """The verified admin a protected route acts on behalf of"""

    uid: str
    email: str
    id_token: str = ""


class SessionGuard:
    """
    Admits a session only when users/{uid} carries the admin role.

    The identity provider proves who the caller is; the role lives on the
    profile document and is checked here before anything protected runs.
    Every fault during the check denies (fail closed).
    """

    def __init__(self, store: DocumentStore, on_redirect: Optional[Callable[[], None]] = None):
        self.store = store
        self.on_redirect = on_redirect
        self.state = GuardState.CHECKING
        self.admin: Optional[AdminContext] = None
        self._alive = True
        self._generation = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def loading(self) -> bool:
        return self.state == GuardState.CHECKING

    @property
    def authorized(self) -> bool:
        return self.state == GuardState.AUTHORIZED

    async def check(self, session: Optional[AuthSession]) -> bool:
        if not self._alive:
            return False
        self._generation += 1
        generation = self._generation
        self.state = GuardState.CHECKING
        self.admin = None

        if session is None:
            return self._deny(generation, "no session")

        try:
            doc = await self.store.get_document(USERS, session.uid)
            if doc is None:
                return self._deny(generation, f"no profile document for {session.uid}")
            profile = UserProfile.from_document(doc)
        except Exception as e:
            logger.error(f"❌ Error checking authorization for {session.uid}: {e}")
            return self._deny(generation, "profile lookup failed")

        if profile.role != ADMIN_ROLE:
            return self._deny(generation, f"{session.uid} has role '{profile.role}'")

        if not self._is_current(generation):
            return False
        self.admin = AdminContext(
            uid=session.uid,
            email=session.email or profile.email,
            id_token=session.id_token,
        )
        self.state = GuardState.AUTHORIZED
        logger.debug(f"✅ Admin authorized: {self.admin.email}")
        return True

    def _is_current(self, generation: int) -> bool:
        # A newer session notification or teardown supersedes this result
        return self._alive and generation == self._generation

    def _deny(self, generation: int, reason: str) -> bool:
        if not self._is_current(generation):
            return False
        logger.info(f"🔒 Access denied: {reason}")
        self.state = GuardState.DENIED
        if self.on_redirect:
            self.on_redirect()
        return False

    async def watch(self, identity: IdentityProvider) -> None:
        """Re-run the check on every session change of the identity provider"""
        self._unsubscribe = await identity.on_session_changed(self.check)

    def close(self) -> None:
        self._alive = False
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None


def get_identity() -> IdentityProvider:
    """A fresh identity provider per request; sessions are never shared"""
    return IdentityProvider()


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity),
) -> AdminContext:
    """Protected-route dependency: verified Firebase session plus admin role"""
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    try:
        session = await identity.verify_session(credentials.credentials)
    except AuthError as e:
        logger.warning(f"⚠️ Token rejected ({e.code})")
        raise HTTPException(status_code=401, detail=e.message or "Invalid token") from e

    guard = SessionGuard(store)
    if not await guard.check(session):
        raise HTTPException(status_code=403, detail=ACCESS_DENIED)
    return guard.admin
