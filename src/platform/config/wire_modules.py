"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.livestream.app.command import (
    initialize_use_case,
    livestream_viewer_use_case,
    post_livecomment_use_case,
    post_reaction_use_case,
    reserve_livestream_use_case,
)
from src.service.livestream.app.query import (
    get_livestream_use_case,
    get_slot_availability_use_case,
    list_livestream_activity_use_case,
    list_livestreams_use_case,
    list_tags_use_case,
    livestream_response_assembler,
)
from src.service.livestream.driving_adapter.http_controller.auth import caller_auth


WIRE_MODULES: list[ModuleType] = [
    reserve_livestream_use_case,
    initialize_use_case,
    get_livestream_use_case,
    list_livestreams_use_case,
    list_tags_use_case,
    get_slot_availability_use_case,
    livestream_response_assembler,
    livestream_viewer_use_case,
    post_livecomment_use_case,
    post_reaction_use_case,
    list_livestream_activity_use_case,
    caller_auth,
]
