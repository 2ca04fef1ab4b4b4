from typing import List

from pydantic import BaseModel, Field


class ReserveLivestreamRequest(BaseModel):
    tags: List[int] = []
    title: str
    description: str
    playlist_url: str
    thumbnail_url: str
    start_at: int = Field(description='Epoch seconds, inclusive')
    end_at: int = Field(description='Epoch seconds, exclusive')

    model_config = {
        'json_schema_extra': {
            'example': {
                'tags': [1, 2],
                'title': 'Morning stream',
                'description': 'Coffee and code',
                'playlist_url': 'https://media.example.com/playlist.m3u8',
                'thumbnail_url': 'https://media.example.com/thumbnail.jpg',
                'start_at': 1700874000,  # 2023-11-25T01:00:00Z
                'end_at': 1700877600,
            }
        },
    }


class UserResponse(BaseModel):
    id: int
    name: str
    display_name: str = ''
    description: str = ''


class TagResponse(BaseModel):
    id: int
    name: str


class TagsResponse(BaseModel):
    tags: List[TagResponse]


class LivestreamResponse(BaseModel):
    id: int
    owner: UserResponse
    title: str
    description: str
    playlist_url: str
    thumbnail_url: str
    tags: List[TagResponse]
    start_at: int
    end_at: int


class PostLivecommentRequest(BaseModel):
    comment: str
    tip: int = Field(default=0, ge=0)


class LivecommentResponse(BaseModel):
    id: int
    user: UserResponse
    livestream: LivestreamResponse
    comment: str
    tip: int
    created_at: int


class PostReactionRequest(BaseModel):
    emoji_name: str = Field(min_length=1)


class ReactionResponse(BaseModel):
    id: int
    emoji_name: str
    user: UserResponse
    livestream: LivestreamResponse
    created_at: int


class ReservationSlotResponse(BaseModel):
    start_at: int
    end_at: int
    slot: int


class InitializeResponse(BaseModel):
    language: str
