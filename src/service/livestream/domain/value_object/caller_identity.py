import attrs

from src.platform.exception.exceptions import AuthenticationError


@attrs.define(frozen=True)
class CallerIdentity:
    """Authenticated caller, produced once at the HTTP boundary from the session token."""

    user_id: int
    username: str = ''

    @classmethod
    def from_claims(cls, *, user_id: object, username: object = '') -> 'CallerIdentity':
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            raise AuthenticationError('failed to get USERID value from session')
        return cls(user_id=user_id, username=str(username or ''))
