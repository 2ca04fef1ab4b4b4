"""Shared sample rows: a one-day term with hourly slots, two users and three tags."""

from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.entity.user_entity import User


HOUR = 3600
TERM_START = 1700874000  # 2023-11-25T01:00:00Z
TERM_END = TERM_START + 24 * HOUR
CAPACITY = 2

ALICE = User(id=1, name='alice', display_name='Alice', description='first broadcaster')
BOB = User(id=2, name='bob', display_name='Bob', description='second broadcaster')
TAG_GAME = Tag(id=1, name='ゲーム実況')
TAG_MUSIC = Tag(id=2, name='音楽')
TAG_CHAT = Tag(id=3, name='雑談')
ALL_TAGS = (TAG_GAME, TAG_MUSIC, TAG_CHAT)


def hours(offset: int) -> int:
    return TERM_START + offset * HOUR


def make_livestream(
    *, livestream_id: int, user_id: int, start_offset_hours: int = 0, tag_ids=()
) -> Livestream:
    start_at = hours(start_offset_hours)
    return Livestream(
        id=livestream_id,
        user_id=user_id,
        title=f'stream {livestream_id}',
        description='',
        playlist_url=f'https://media.example.com/{livestream_id}/playlist.m3u8',
        thumbnail_url=f'https://media.example.com/{livestream_id}/thumbnail.jpg',
        start_at=start_at,
        end_at=start_at + HOUR,
        tag_ids=tag_ids,
    )
