# core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt

from app.core.config import settings

logger = logging.getLogger(__name__)


class JWTManager:
    """Verification of access tokens issued by the identity provider"""

    def __init__(self):
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.audience = settings.jwt_audience
        self.issuer = settings.jwt_issuer
        self.dev_token_expire = timedelta(
            minutes=settings.jwt_dev_token_expiration_minutes
        )

    def create_access_token(
        self,
        user_id: str,
        email: Optional[str] = None,
        custom_expiration: Optional[timedelta] = None,
    ) -> str:
        """
        Mint an access token shaped like the provider's ones.

        Only used by the ``token`` CLI command and by tests; production tokens
        come from the identity provider.
        """
        now = datetime.now(timezone.utc)
        expire = now + (custom_expiration or self.dev_token_expire)

        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": int(expire.timestamp()),
            "iat": int(now.timestamp()),
            "role": "authenticated",
        }
        if self.audience:
            payload["aud"] = self.audience
        if self.issuer:
            payload["iss"] = self.issuer

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.info(f"Access token created for user: {user_id}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT access token.

        Raises 401 when the signature, expiry, audience or issuer do not match.
        """
        options = {"verify_exp": True, "verify_aud": bool(self.audience)}
        kwargs = {}
        if self.audience:
            kwargs["audience"] = self.audience
        if self.issuer:
            kwargs["issuer"] = self.issuer

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options=options,
                **kwargs,
            )
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not payload.get("sub"):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: missing subject",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return payload


jwt_manager = JWTManager()
