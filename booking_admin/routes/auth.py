import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..auth import AdminContext, SessionGuard, get_identity, require_admin
from ..config import LOGIN_RATE_LIMIT, LOGIN_RATE_WINDOW_SECONDS
from ..errors import AuthError
from ..identity import IdentityProvider
from ..rate_limiter import create_rate_limiter
from ..shared.messages import ACCESS_DENIED, MISSING_CREDENTIALS, sign_in_message
from ..store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

rate_limit_login = create_rate_limiter(
    limit=LOGIN_RATE_LIMIT, window_seconds=LOGIN_RATE_WINDOW_SECONDS, key_prefix="login"
)


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    uid: str
    email: str
    idToken: str
    refreshToken: str
    expiresIn: int


class SessionResponse(BaseModel):
    uid: str
    email: str


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity),
    _: None = Depends(rate_limit_login),
):
    """Sign in with email and password; only admins get a session back"""
    if not data.email or not data.password:
        raise HTTPException(status_code=400, detail=MISSING_CREDENTIALS)

    try:
        session = await identity.sign_in(data.email, data.password)
    except AuthError as e:
        status_code = 429 if e.code == "auth/too-many-requests" else 401
        raise HTTPException(status_code=status_code, detail=sign_in_message(e.code, e.message)) from e

    guard = SessionGuard(store)
    if not await guard.check(session):
        # Identity proven but not an admin: end the session right away
        await identity.sign_out()
        logger.warning(f"⚠️ Non-admin sign-in refused for {data.email}")
        raise HTTPException(status_code=403, detail=ACCESS_DENIED)

    logger.info(f"✅ Admin signed in: {session.email}")
    return LoginResponse(
        uid=session.uid,
        email=session.email,
        idToken=session.id_token,
        refreshToken=session.refresh_token,
        expiresIn=session.expires_in,
    )


@router.post("/logout")
async def logout(
    admin: AdminContext = Depends(require_admin),
    identity: IdentityProvider = Depends(get_identity),
):
    """Revoke the admin's refresh tokens"""
    await identity.restore(admin.id_token)
    await identity.sign_out()
    return {"message": "Signed out"}


@router.get("/session", response_model=SessionResponse)
async def get_session(admin: AdminContext = Depends(require_admin)):
    """The verified admin behind the bearer token"""
    return SessionResponse(uid=admin.uid, email=admin.email)
