"""
Identity provider client (Firebase Authentication).

Email/password sign-in goes through the Identity Toolkit REST API, since
the Admin SDK cannot check passwords. Token verification and sign-out
(refresh token revocation) use firebase_admin.

An IdentityProvider instance carries at most one session. Listeners
registered with on_session_changed() are called once immediately with the
current session and again after every sign-in, restore and sign-out.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx
from fastapi.concurrency import run_in_threadpool
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from .config import FIREBASE_WEB_API_KEY, IDENTITY_TIMEOUT_SECONDS, IDENTITY_TOOLKIT_URL
from .errors import AuthError
from .firebase import init_firebase

logger = logging.getLogger(__name__)

# Identity Toolkit error messages -> Firebase client error codes
REST_ERROR_CODES = {
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "INVALID_EMAIL": "auth/invalid-email",
    "USER_DISABLED": "auth/user-disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
    "MISSING_PASSWORD": "auth/missing-password",
    "MISSING_EMAIL": "auth/invalid-email",
}


@dataclass
class AuthSession:
    uid: str
    email: str = ""
    id_token: str = ""
    refresh_token: str = ""
    expires_in: int = 0


SessionListener = Callable[[Optional[AuthSession]], Awaitable[None]]


def rest_error_code(message: str) -> str:
    # e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been ..."
    key = (message or "").split(":")[0].strip()
    return REST_ERROR_CODES.get(key, "auth/internal-error")


class IdentityProvider:
    """Sign-in, sign-out and session observation against Firebase Auth"""

    def __init__(
        self,
        api_key: Optional[str] = FIREBASE_WEB_API_KEY,
        base_url: str = IDENTITY_TOOLKIT_URL,
        timeout: float = IDENTITY_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.current_session: Optional[AuthSession] = None
        self._listeners: list[SessionListener] = []

    async def on_session_changed(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns the unsubscribe callable"""
        self._listeners.append(listener)
        await listener(self.current_session)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            await listener(self.current_session)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        if not self.api_key:
            logger.error("❌ FIREBASE_WEB_API_KEY not configured")
            raise AuthError("auth/invalid-api-key", "Firebase sign-in is not configured")

        url = f"{self.base_url}/accounts:signInWithPassword"
        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"❌ Identity Toolkit request failed: {e}")
            raise AuthError("auth/network-request-failed", "Network error. Please try again.") from e

        if response.status_code != 200:
            try:
                message = response.json().get("error", {}).get("message", "")
            except ValueError:
                message = ""
            code = rest_error_code(message)
            logger.warning(f"⚠️ Sign-in rejected for {email}: {message or response.status_code}")
            raise AuthError(code, message)

        data = response.json()
        session = AuthSession(
            uid=data.get("localId", ""),
            email=data.get("email", email),
            id_token=data.get("idToken", ""),
            refresh_token=data.get("refreshToken", ""),
            expires_in=int(data.get("expiresIn", 0) or 0),
        )
        logger.info(f"✅ Signed in {session.email} ({session.uid})")
        self.current_session = session
        await self._notify()
        return session

    async def verify_session(self, id_token: str) -> AuthSession:
        """Verify a Firebase ID token and return the session it proves"""
        init_firebase()
        try:
            claims = await run_in_threadpool(
                firebase_auth.verify_id_token, id_token, check_revoked=True
            )
        except firebase_auth.ExpiredIdTokenError as e:
            raise AuthError("auth/id-token-expired", "Token has expired. Please sign in again.") from e
        except firebase_auth.RevokedIdTokenError as e:
            raise AuthError("auth/id-token-revoked", "Session was signed out. Please sign in again.") from e
        except firebase_auth.UserDisabledError as e:
            raise AuthError("auth/user-disabled", str(e)) from e
        except (firebase_auth.InvalidIdTokenError, ValueError) as e:
            raise AuthError("auth/invalid-id-token", "Invalid token") from e
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"❌ Token verification failed: {e}")
            raise AuthError("auth/network-request-failed", str(e)) from e

        uid = claims.get("uid") or claims.get("sub") or claims.get("user_id")
        if not uid:
            raise AuthError("auth/invalid-id-token", "Invalid token claims")
        return AuthSession(uid=uid, email=claims.get("email", ""), id_token=id_token)

    async def restore(self, id_token: str) -> AuthSession:
        """Adopt an existing session from a previously issued ID token"""
        session = await self.verify_session(id_token)
        self.current_session = session
        await self._notify()
        return session

    async def sign_out(self) -> None:
        session = self.current_session
        if session is None:
            return
        try:
            init_firebase()
            await run_in_threadpool(firebase_auth.revoke_refresh_tokens, session.uid)
            logger.info(f"🔒 Revoked refresh tokens for {session.uid}")
        except firebase_exceptions.FirebaseError as e:
            # The ID token still expires on its own within the hour
            logger.warning(f"⚠️ Failed to revoke refresh tokens for {session.uid}: {e}")
        self.current_session = None
        await self._notify()
