"""FastAPI request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class MediaClipModel(BaseModel):
    id: str
    start: int
    duration: int
    row: int
    source: str


class TextOverlayModel(BaseModel):
    id: str
    start: int
    duration: int
    row: int
    text: str


class TimelineStateResponse(BaseModel):
    current_frame: int
    total_duration: int
    is_playing: bool
    playhead_ratio: float
    clips: list[MediaClipModel]
    text_overlays: list[TextOverlayModel]


class AppendClipRequest(BaseModel):
    source: str | None = Field(default=None, min_length=1)


class AppendTextRequest(BaseModel):
    text: str | None = Field(default=None, min_length=1)


class AppendItemRequest(BaseModel):
    kind: str
    source: str | None = Field(default=None, min_length=1)
    text: str | None = Field(default=None, min_length=1)
    duration: int | None = None


class AppendItemResponse(BaseModel):
    item_id: str
    kind: Literal["media", "text"]
    start: int
    duration: int
    state: TimelineStateResponse


class RenderBlockModel(BaseModel):
    id: str
    kind: Literal["media", "text"]
    from_frame: int
    duration_in_frames: int
    source: str | None = None
    text: str | None = None


class CompositionResponse(BaseModel):
    fps: int
    width: int
    height: int
    duration_in_frames: int
    blocks: list[RenderBlockModel]


class FrameLayerModel(BaseModel):
    block: RenderBlockModel
    local_frame: int
    opacity: float | None = None
    scale: float | None = None


class FrameResponse(BaseModel):
    frame: int
    timecode: str
    layers: list[FrameLayerModel]


class SeekRequest(BaseModel):
    frame: int = Field(ge=0)
