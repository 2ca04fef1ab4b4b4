import time
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    DomainError,
    ReservationOutOfRangeError,
    ReservationOverbookedError,
    StorageFailureError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_tag_query_repo import ITagQueryRepo
from src.service.livestream.app.interface.i_unit_of_work import AbstractUnitOfWork
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.enum.entity_kind import EntityKind
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm


class ReserveLivestreamUseCase:
    """
    Reserve livestream use case - slot allocation + persistence in one transaction

    Flow:
    1. Validate the requested range against the reservation term (no I/O)
    2. Validate tag ids (tag cache, storage on a miss)
    3. Lock every slot inside the range (SELECT ... FOR UPDATE, ascending start_at)
    4. Admission check on the locked slots
    5. Decrement slots, insert livestream + livestream_tags, commit
    6. After commit: livestream-by-id set + owner list append

    Overlapping requests serialize on the slot row locks in step 3; disjoint
    ranges never touch the same rows and proceed in parallel. Any failure
    before commit rolls back and leaves both slots and caches untouched.

    Dependencies:
    - uow: fresh unit of work per request
    - cache_registry: in-process entity caches
    - term: reservation horizon and admission policy
    - tag_query_repo: tag lookup on a tag cache miss
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        cache_registry: ILivestreamCacheRegistry,
        term: ReservationTerm,
        tag_query_repo: ITagQueryRepo,
    ) -> None:
        self.uow = uow
        self.cache_registry = cache_registry
        self.term = term
        self.tag_query_repo = tag_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
        term: ReservationTerm = Depends(Provide[Container.reservation_term]),
        tag_query_repo: ITagQueryRepo = Depends(Provide[Container.tag_query_repo]),
    ) -> Self:
        return cls(
            uow=uow, cache_registry=cache_registry, term=term, tag_query_repo=tag_query_repo
        )

    @Logger.io
    async def reserve(
        self,
        *,
        caller: CallerIdentity,
        start_at: int,
        end_at: int,
        tag_ids: List[int],
        title: str,
        description: str,
        playlist_url: str,
        thumbnail_url: str,
    ) -> Livestream:
        """
        Reserve slots and create the livestream.

        Args:
            caller: Authenticated owner of the new livestream
            start_at: Range start, epoch seconds (inclusive)
            end_at: Range end, epoch seconds (exclusive)
            tag_ids: Tags to attach; every id must exist

        Returns:
            The persisted livestream with its generated id

        Raises:
            ReservationOutOfRangeError: Range is empty or outside the term
            ReservationOverbookedError: Locked slots cannot take another broadcast
            DomainError: Unknown tag id
            StorageFailureError: Connection loss, lock wait timeout, constraint violation
        """
        started = time.perf_counter()
        result = 'error'
        slot_count = 0

        with self.tracer.start_as_current_span(
            'use_case.reserve_livestream',
            attributes={
                'user.id': caller.user_id,
                'reservation.start_at': start_at,
                'reservation.end_at': end_at,
                'reservation.policy': self.term.admission_policy.value,
            },
        ) as span:
            try:
                self.term.validate_range(start_at=start_at, end_at=end_at)
                await self._validate_tag_ids(tag_ids)

                livestream = Livestream.create(
                    user_id=caller.user_id,
                    title=title,
                    description=description,
                    playlist_url=playlist_url,
                    thumbnail_url=thumbnail_url,
                    start_at=start_at,
                    end_at=end_at,
                    tag_ids=tag_ids,
                )

                async with self.uow:
                    slots = await self.uow.slot_repo.lock_range(start_at=start_at, end_at=end_at)
                    available = await self.uow.slot_repo.count_available(slots=slots)
                    span.set_attribute('reservation.locked_slots', len(slots))
                    span.set_attribute('reservation.available_slots', available)

                    self.term.validate_admission(
                        start_at=start_at,
                        end_at=end_at,
                        slots=slots,
                        available_count=available,
                    )

                    slot_count = await self.uow.slot_repo.decrement_range(
                        start_at=start_at, end_at=end_at
                    )
                    livestream = await self.uow.livestream_command_repo.create(
                        livestream=livestream
                    )
                    await self.uow.commit()

                result = 'accepted'
            except ReservationOutOfRangeError:
                result = 'out_of_range'
                raise
            except ReservationOverbookedError:
                result = 'overbooked'
                raise
            except DomainError:
                result = 'invalid'
                raise
            except StorageFailureError:
                result = 'storage_failure'
                raise
            finally:
                span.set_attribute('reservation.result', result)
                metrics.record_reservation(
                    result=result,
                    duration=time.perf_counter() - started,
                    slot_count=slot_count if result == 'accepted' else 0,
                )

            # Committed: the cache now mirrors storage
            self.cache_registry.remember_livestream(livestream)

            Logger.base.info(
                f'🎬 [RESERVE] livestream={livestream.id} user={caller.user_id} '
                f'range={start_at}~{end_at} slots={slot_count}'
            )
            return livestream

    async def _validate_tag_ids(self, tag_ids: List[int]) -> None:
        unknown = []
        for tag_id in tag_ids:
            if self.cache_registry.get_tag(tag_id) is not None:
                continue
            # Miss: read through, then remember
            tag = await self.tag_query_repo.get_by_id(tag_id=tag_id)
            if tag is None:
                unknown.append(tag_id)
            else:
                self.cache_registry.set(EntityKind.TAG, tag.id, tag)
        if unknown:
            raise DomainError(f'unknown tag ids: {unknown}')
