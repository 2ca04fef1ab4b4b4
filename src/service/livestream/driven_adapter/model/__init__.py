"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.livestream.driven_adapter.model.livestream_model import (
    LivestreamModel,
    LivestreamTagModel,
)
from src.service.livestream.driven_adapter.model.reservation_slot_model import (
    ReservationSlotModel,
)
from src.service.livestream.driven_adapter.model.tag_model import TagModel
from src.service.livestream.driven_adapter.model.user_model import UserModel
from src.service.livestream.driven_adapter.model.viewer_activity_model import (
    LivecommentModel,
    LivestreamViewerModel,
    ReactionModel,
)

__all__ = [
    'LivecommentModel',
    'LivestreamModel',
    'LivestreamTagModel',
    'LivestreamViewerModel',
    'ReactionModel',
    'ReservationSlotModel',
    'TagModel',
    'UserModel',
]
