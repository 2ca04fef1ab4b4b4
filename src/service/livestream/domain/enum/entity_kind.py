from enum import StrEnum


class EntityKind(StrEnum):
    """Cache families mirrored in process memory."""

    TAG = 'tag'
    USER_BY_ID = 'user_by_id'
    USER_BY_NAME = 'user_by_name'
    LIVESTREAM_BY_ID = 'livestream_by_id'
    LIVESTREAMS_BY_OWNER = 'livestreams_by_owner'
