"""HTTP surface over the timeline engine's observable state and mutations."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from video_create.api.schemas import (
    AppendClipRequest,
    AppendItemRequest,
    AppendItemResponse,
    AppendTextRequest,
    CompositionResponse,
    FrameLayerModel,
    FrameResponse,
    MediaClipModel,
    RenderBlockModel,
    SeekRequest,
    TextOverlayModel,
    TimelineStateResponse,
)
from video_create.config import EditorSettings, configure_logging
from video_create.playback.backend import ClockPlayer
from video_create.timeline.composition import MediaPayload, RenderBlock
from video_create.timeline.engine import EngineState, TimelineEngine
from video_create.timeline.models import AnyItem
from video_create.ui.timeline import format_timecode


def create_app(
    engine: TimelineEngine | None = None,
    settings: EditorSettings | None = None,
) -> FastAPI:
    """Build the API around ``engine``, or around an engine the app owns.

    The lifespan starts frame sampling on startup. An engine passed in by
    the caller is only stopped on shutdown; the app's own engine is
    disposed, and a fresh one is built on the next startup.
    """
    config = settings or (engine.settings if engine is not None else EditorSettings.from_env())
    owns_engine = engine is None

    @asynccontextmanager
    async def lifespan(api: FastAPI) -> AsyncIterator[None]:
        configure_logging(config.log_level)
        if owns_engine and api.state.engine.disposed:
            api.state.engine = _default_engine(config)
        timeline: TimelineEngine = api.state.engine
        timeline.start()
        try:
            yield
        finally:
            if owns_engine:
                timeline.dispose()
            else:
                timeline.stop()

    app = FastAPI(title="video-create API", version="0.1.0", lifespan=lifespan)
    app.state.engine = engine or _default_engine(config)

    def current() -> TimelineEngine:
        return app.state.engine

    @app.get("/")
    def root() -> dict[str, str]:
        return {
            "service": "video-create API",
            "status": "ok",
            "docs": "/docs",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    @app.get("/v1/timeline", response_model=TimelineStateResponse)
    def get_timeline() -> TimelineStateResponse:
        return _state_response(current().state())

    @app.post("/v1/timeline/clips", response_model=AppendItemResponse)
    def append_clip(payload: AppendClipRequest) -> AppendItemResponse:
        try:
            item = current().append_media_clip(source=payload.source)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _append_response(item, current().state())

    @app.post("/v1/timeline/texts", response_model=AppendItemResponse)
    def append_text(payload: AppendTextRequest) -> AppendItemResponse:
        try:
            item = current().append_text_overlay(text=payload.text)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _append_response(item, current().state())

    @app.post("/v1/timeline/items", response_model=AppendItemResponse)
    def append_item(payload: AppendItemRequest) -> AppendItemResponse:
        fields = payload.model_dump(exclude={"kind"}, exclude_none=True)
        try:
            item = current().append_item(payload.kind, fields)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _append_response(item, current().state())

    @app.get("/v1/composition", response_model=CompositionResponse)
    def get_composition() -> CompositionResponse:
        return CompositionResponse(
            fps=config.fps,
            width=config.width,
            height=config.height,
            duration_in_frames=current().total_duration,
            blocks=[_block_model(block) for block in current().composition],
        )

    @app.get("/v1/composition/frames/{frame}", response_model=FrameResponse)
    def get_frame(frame: int) -> FrameResponse:
        if frame < 0:
            raise HTTPException(status_code=400, detail="frame must be >= 0")
        layers = []
        for layer in current().frame_layers(frame):
            animation = layer.animation
            layers.append(
                FrameLayerModel(
                    block=_block_model(layer.block),
                    local_frame=layer.local_frame,
                    opacity=animation.opacity if animation else None,
                    scale=animation.scale if animation else None,
                )
            )
        return FrameResponse(
            frame=frame,
            timecode=format_timecode(frame, config.fps, with_frames=True),
            layers=layers,
        )

    @app.post("/v1/playback/play", response_model=TimelineStateResponse)
    def play() -> TimelineStateResponse:
        current().play()
        return _state_response(current().state())

    @app.post("/v1/playback/pause", response_model=TimelineStateResponse)
    def pause() -> TimelineStateResponse:
        current().pause()
        return _state_response(current().state())

    @app.post("/v1/playback/toggle", response_model=TimelineStateResponse)
    def toggle() -> TimelineStateResponse:
        current().toggle_playback()
        return _state_response(current().state())

    @app.post("/v1/playback/seek", response_model=TimelineStateResponse)
    def seek(payload: SeekRequest) -> TimelineStateResponse:
        current().seek(payload.frame)
        current().sync_now()
        return _state_response(current().state())

    return app


def _default_engine(config: EditorSettings) -> TimelineEngine:
    return TimelineEngine.create(settings=config, backend=ClockPlayer(fps=config.fps))


def _state_response(state: EngineState) -> TimelineStateResponse:
    return TimelineStateResponse(
        current_frame=state.current_frame,
        total_duration=state.total_duration,
        is_playing=state.is_playing,
        playhead_ratio=state.playhead_ratio,
        clips=[
            MediaClipModel(id=clip.id, start=clip.start, duration=clip.duration, row=clip.row, source=clip.source)
            for clip in state.clips
        ],
        text_overlays=[
            TextOverlayModel(id=item.id, start=item.start, duration=item.duration, row=item.row, text=item.text)
            for item in state.text_overlays
        ],
    )


def _append_response(item: AnyItem, state: EngineState) -> AppendItemResponse:
    return AppendItemResponse(
        item_id=item.id,
        kind=item.kind.value,
        start=item.start,
        duration=item.duration,
        state=_state_response(state),
    )


def _block_model(block: RenderBlock) -> RenderBlockModel:
    payload = block.payload
    if isinstance(payload, MediaPayload):
        return RenderBlockModel(
            id=block.id,
            kind="media",
            from_frame=block.from_frame,
            duration_in_frames=block.duration_in_frames,
            source=payload.source,
        )
    return RenderBlockModel(
        id=block.id,
        kind="text",
        from_frame=block.from_frame,
        duration_in_frames=block.duration_in_frames,
        text=payload.text,
    )


app = create_app()
