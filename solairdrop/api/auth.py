from datetime import UTC, datetime, timedelta
from typing import Optional

import jwt
from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from solairdrop.errors import ConfigurationError

security = HTTPBearer(auto_error=False)


class Auth:
    """Issues and checks HS256 bearer tokens."""

    def __init__(self, secret: Optional[str], exp_hours: float = 1.0):
        self.secret = secret
        self.exp_hours = exp_hours

    def _require_secret(self) -> str:
        if not self.secret:
            raise ConfigurationError("JWT secret not configured")
        return self.secret

    def encode_token(self, user_id: str, is_admin: bool = False) -> str:
        now = datetime.now(UTC)
        payload = {
            "id": user_id,
            "admin": is_admin,
            "iat": now,
            "exp": now + timedelta(hours=self.exp_hours),
        }
        return jwt.encode(payload, self._require_secret(), algorithm="HS256")

    def decode_token(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._require_secret(), algorithms=["HS256"])
        except jwt.InvalidTokenError as err:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token"
            ) from err

    def auth_wrapper(
        self, auth: Optional[HTTPAuthorizationCredentials] = Security(security)
    ) -> dict:
        if not auth or auth.scheme.lower() != "bearer":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return self.decode_token(auth.credentials)
