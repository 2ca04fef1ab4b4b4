from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.command.initialize_use_case import InitializeUseCase
from src.service.livestream.driving_adapter.http_controller.schema.livestream_schema import (
    InitializeResponse,
)


router = APIRouter()


@router.post('', response_model=InitializeResponse)
@Logger.io
async def initialize(
    use_case: InitializeUseCase = Depends(InitializeUseCase.depends),
) -> InitializeResponse:
    await use_case.initialize()
    return InitializeResponse(language='python')
