"""Application layer interfaces (Ports)"""

from src.service.livestream.app.interface.i_livecomment_repo import ILivecommentRepo
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_livestream_command_repo import ILivestreamCommandRepo
from src.service.livestream.app.interface.i_livestream_query_repo import ILivestreamQueryRepo
from src.service.livestream.app.interface.i_livestream_viewer_repo import ILivestreamViewerRepo
from src.service.livestream.app.interface.i_reaction_repo import IReactionRepo
from src.service.livestream.app.interface.i_reservation_slot_repo import IReservationSlotRepo
from src.service.livestream.app.interface.i_tag_query_repo import ITagQueryRepo
from src.service.livestream.app.interface.i_user_query_repo import IUserQueryRepo
