"""
Livestream Response Assembler

Joins a livestream with its owner and tags into the external representation,
and livecomments and reactions with their author and livestream.
Users and tags come from the entity caches; a miss reads storage once and
writes the result back.
"""

from typing import Any, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_tag_query_repo import ITagQueryRepo
from src.service.livestream.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.livestream.domain.entity.livecomment_entity import Livecomment
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.entity.reaction_entity import Reaction
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.entity.user_entity import User
from src.service.livestream.domain.enum.entity_kind import EntityKind


def _user_view(user: User) -> dict[str, Any]:
    return {
        'id': user.id,
        'name': user.name,
        'display_name': user.display_name,
        'description': user.description,
    }


class LivestreamResponseAssembler:
    def __init__(
        self,
        *,
        cache_registry: ILivestreamCacheRegistry,
        user_query_repo: IUserQueryRepo,
        tag_query_repo: ITagQueryRepo,
    ) -> None:
        self.cache_registry = cache_registry
        self.user_query_repo = user_query_repo
        self.tag_query_repo = tag_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        tag_query_repo: ITagQueryRepo = Depends(Provide[Container.tag_query_repo]),
    ) -> Self:
        return cls(
            cache_registry=cache_registry,
            user_query_repo=user_query_repo,
            tag_query_repo=tag_query_repo,
        )

    async def assemble(self, livestream: Livestream) -> dict[str, Any]:
        owner = await self._get_user(livestream.user_id)
        tags = [await self._get_tag(tag_id) for tag_id in livestream.tag_ids]

        return {
            'id': livestream.id,
            'owner': _user_view(owner),
            'title': livestream.title,
            'description': livestream.description,
            'playlist_url': livestream.playlist_url,
            'thumbnail_url': livestream.thumbnail_url,
            'tags': [{'id': tag.id, 'name': tag.name} for tag in tags],
            'start_at': livestream.start_at,
            'end_at': livestream.end_at,
        }

    async def assemble_many(self, livestreams: List[Livestream]) -> List[dict[str, Any]]:
        return [await self.assemble(livestream) for livestream in livestreams]

    async def assemble_livecomment(
        self, livecomment: Livecomment, *, livestream: dict[str, Any]
    ) -> dict[str, Any]:
        user = await self._get_user(livecomment.user_id)
        return {
            'id': livecomment.id,
            'user': _user_view(user),
            'livestream': livestream,
            'comment': livecomment.comment,
            'tip': livecomment.tip,
            'created_at': livecomment.created_at,
        }

    async def assemble_reaction(
        self, reaction: Reaction, *, livestream: dict[str, Any]
    ) -> dict[str, Any]:
        user = await self._get_user(reaction.user_id)
        return {
            'id': reaction.id,
            'emoji_name': reaction.emoji_name,
            'user': _user_view(user),
            'livestream': livestream,
            'created_at': reaction.created_at,
        }

    async def _get_user(self, user_id: int) -> User:
        user = self.cache_registry.get_user_by_id(user_id)
        if user is not None:
            return user

        user = await self.user_query_repo.get_by_id(user_id=user_id)
        if user is None:
            raise NotFoundError(f'failed to get user model by id: {user_id}')
        self.cache_registry.remember_user(user)
        return user

    async def _get_tag(self, tag_id: int) -> Tag:
        tag = self.cache_registry.get_tag(tag_id)
        if tag is not None:
            return tag

        tag = await self.tag_query_repo.get_by_id(tag_id=tag_id)
        if tag is None:
            raise NotFoundError(f'failed to get tag: {tag_id}')
        self.cache_registry.set(EntityKind.TAG, tag.id, tag)
        return tag
