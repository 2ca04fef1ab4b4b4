from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.command.livestream_viewer_use_case import LivestreamViewerUseCase
from src.service.livestream.app.command.post_livecomment_use_case import PostLivecommentUseCase
from src.service.livestream.app.command.post_reaction_use_case import PostReactionUseCase
from src.service.livestream.app.command.reserve_livestream_use_case import (
    ReserveLivestreamUseCase,
)
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.app.query.get_slot_availability_use_case import (
    GetSlotAvailabilityUseCase,
)
from src.service.livestream.app.query.list_livestream_activity_use_case import (
    ListLivestreamActivityUseCase,
)
from src.service.livestream.app.query.list_livestreams_use_case import ListLivestreamsUseCase
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.driving_adapter.http_controller.auth.caller_auth import (
    get_caller_identity,
)
from src.service.livestream.driving_adapter.http_controller.schema.livestream_schema import (
    LivecommentResponse,
    LivestreamResponse,
    PostLivecommentRequest,
    PostReactionRequest,
    ReactionResponse,
    ReservationSlotResponse,
    ReserveLivestreamRequest,
)


router = APIRouter()
user_router = APIRouter()


@router.post(
    '/reservation', response_model=LivestreamResponse, status_code=status.HTTP_201_CREATED
)
@Logger.io
async def reserve_livestream(
    request: ReserveLivestreamRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: ReserveLivestreamUseCase = Depends(ReserveLivestreamUseCase.depends),
    assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
) -> dict[str, Any]:
    livestream = await use_case.reserve(
        caller=caller,
        start_at=request.start_at,
        end_at=request.end_at,
        tag_ids=request.tags,
        title=request.title,
        description=request.description,
        playlist_url=request.playlist_url,
        thumbnail_url=request.thumbnail_url,
    )
    return await assembler.assemble(livestream)


@router.get('/reservation/slots', response_model=List[ReservationSlotResponse])
@Logger.io
async def get_reservation_slots(
    start_at: int,
    end_at: int,
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> List[ReservationSlotResponse]:
    slots = await use_case.get_slots(start_at=start_at, end_at=end_at)
    return [
        ReservationSlotResponse(start_at=slot.start_at, end_at=slot.end_at, slot=slot.slot)
        for slot in slots
    ]


@router.get('/search', response_model=List[LivestreamResponse])
@Logger.io
async def search_livestreams(
    tag: str = '',
    limit: Optional[int] = None,
    use_case: ListLivestreamsUseCase = Depends(ListLivestreamsUseCase.depends),
) -> List[dict[str, Any]]:
    return await use_case.search(tag=tag or None, limit=limit)


@router.get('', response_model=List[LivestreamResponse])
@Logger.io
async def list_my_livestreams(
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: ListLivestreamsUseCase = Depends(ListLivestreamsUseCase.depends),
) -> List[dict[str, Any]]:
    return await use_case.list_mine(caller=caller)


@router.get('/{livestream_id}', response_model=LivestreamResponse)
@Logger.io
async def get_livestream(
    livestream_id: int,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: GetLivestreamUseCase = Depends(GetLivestreamUseCase.depends),
) -> dict[str, Any]:
    return await use_case.get_livestream(livestream_id=livestream_id)



# ========== Viewer activity ==========


@router.post('/{livestream_id}/enter')
@Logger.io
async def enter_livestream(
    livestream_id: int,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: LivestreamViewerUseCase = Depends(LivestreamViewerUseCase.depends),
) -> Response:
    await use_case.enter(caller=caller, livestream_id=livestream_id)
    return Response(status_code=status.HTTP_200_OK)


@router.delete('/{livestream_id}/exit')
@Logger.io
async def exit_livestream(
    livestream_id: int,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: LivestreamViewerUseCase = Depends(LivestreamViewerUseCase.depends),
) -> Response:
    await use_case.exit(caller=caller, livestream_id=livestream_id)
    return Response(status_code=status.HTTP_200_OK)


@router.get('/{livestream_id}/livecomment', response_model=List[LivecommentResponse])
@Logger.io
async def list_livecomments(
    livestream_id: int,
    limit: Optional[int] = None,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: ListLivestreamActivityUseCase = Depends(ListLivestreamActivityUseCase.depends),
) -> List[dict[str, Any]]:
    return await use_case.list_livecomments(livestream_id=livestream_id, limit=limit)


@router.post(
    '/{livestream_id}/livecomment',
    response_model=LivecommentResponse,
    status_code=status.HTTP_201_CREATED,
)
@Logger.io
async def post_livecomment(
    livestream_id: int,
    request: PostLivecommentRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: PostLivecommentUseCase = Depends(PostLivecommentUseCase.depends),
) -> dict[str, Any]:
    return await use_case.post(
        caller=caller, livestream_id=livestream_id, comment=request.comment, tip=request.tip
    )


@router.get('/{livestream_id}/reaction', response_model=List[ReactionResponse])
@Logger.io
async def list_reactions(
    livestream_id: int,
    limit: Optional[int] = None,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: ListLivestreamActivityUseCase = Depends(ListLivestreamActivityUseCase.depends),
) -> List[dict[str, Any]]:
    return await use_case.list_reactions(livestream_id=livestream_id, limit=limit)


@router.post(
    '/{livestream_id}/reaction',
    response_model=ReactionResponse,
    status_code=status.HTTP_201_CREATED,
)
@Logger.io
async def post_reaction(
    livestream_id: int,
    request: PostReactionRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: PostReactionUseCase = Depends(PostReactionUseCase.depends),
) -> dict[str, Any]:
    return await use_case.post(
        caller=caller, livestream_id=livestream_id, emoji_name=request.emoji_name
    )

@user_router.get('/{username}/livestream', response_model=List[LivestreamResponse])
@Logger.io
async def list_user_livestreams(
    username: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    use_case: ListLivestreamsUseCase = Depends(ListLivestreamsUseCase.depends),
) -> List[dict[str, Any]]:
    return await use_case.list_by_username(username=username)
