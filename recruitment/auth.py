"""
Shared-secret authentication with expiring session tokens.

A reviewer proves knowledge of an area's password once and receives a signed
token scoped to that area ("dashboard" or "evaluation:<team>"). Protected
routes check the token from the Authorization header or the session cookie.
"""
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt

from recruitment.config import Settings, get_settings
from recruitment.errors import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_COOKIE = "session_token"
DASHBOARD_SCOPE = "dashboard"


class Session:
    def __init__(self, scope: str, expires_at: datetime):
        self.scope = scope
        self.expires_at = expires_at

    def allows(self, scope: str) -> bool:
        return self.scope == scope and self.expires_at > datetime.now(timezone.utc)


def team_key(team: str) -> Optional[str]:
    """Resolve a free-form team name ("Technical Team", "tech") to its password key"""
    target = (team or "").lower().replace(" ", "")
    for keyword, key in (("tech", "technical"), ("social", "social"), ("content", "content"),
                         ("outreach", "outreach"), ("core", "core")):
        if keyword in target:
            return key
    return None


def evaluation_scope(team: str) -> str:
    return f"evaluation:{team_key(team) or ''}"


def check_password(supplied: str, expected: str, area: str) -> None:
    if not expected:
        raise ConfigurationError(f"{area} password not configured on server.")
    if not hmac.compare_digest((supplied or "").encode(), expected.encode()):
        logger.warning("🔒 Rejected %s password", area)
        raise AuthenticationError("Incorrect password")


def create_session_token(scope: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    return jwt.encode({"scope": scope, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> Session:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError("Session expired or invalid")
    return Session(
        scope=payload.get("scope", ""),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def login_dashboard(password: str, settings: Settings) -> str:
    check_password(password, settings.dashboard_password, "Dashboard")
    return create_session_token(DASHBOARD_SCOPE, settings)


def login_evaluation(team: str, password: str, settings: Settings) -> str:
    key = team_key(team)
    expected = settings.evaluation_passwords.get(key, "") if key else ""
    check_password(password, expected, "Evaluation")
    return create_session_token(evaluation_scope(team), settings)


def _token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return request.cookies.get(SESSION_COOKIE)


def current_session(request: Request, settings: Settings = Depends(get_settings)) -> Session:
    token = _token_from_request(request)
    if not token:
        raise AuthenticationError("Login required")
    return decode_session_token(token, settings)


def require_dashboard_session(session: Session = Depends(current_session)) -> Session:
    if not session.allows(DASHBOARD_SCOPE):
        raise AuthenticationError("Dashboard access required")
    return session
