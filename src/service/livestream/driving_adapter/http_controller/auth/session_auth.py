"""
Session cookie authentication

The session token is a signed JWT issued by the user service; this service
only verifies it and turns the claims into a CallerIdentity.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity


class SessionAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.session_expire_days = settings.SESSION_EXPIRE_DAYS

    def create_session_token(self, *, user_id: int, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'exp': now + timedelta(days=self.session_expire_days),
            'iat': now,
            'user_id': user_id,
            'username': username,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_session_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('session has expired')
        except jwt.PyJWTError:
            raise AuthenticationError('failed to get session')

    def get_caller_identity(self, token: str | None) -> CallerIdentity:
        if not token:
            raise AuthenticationError('failed to get session')

        payload = self.decode_session_token(token)
        return CallerIdentity.from_claims(
            user_id=payload.get('user_id'),
            username=payload.get('username', ''),
        )
