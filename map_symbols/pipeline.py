"""
Batch generation: N icons for every selected category, zipped and delivered.

The run is a coroutine on a single event loop. It only suspends at the explicit
yield points (every PROGRESS_EVERY icons and at each category boundary). The
cancellation flag is polled at the head of both loops, so an icon that has
started rendering always finishes before cancellation is seen.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .archive import (
    Downloader,
    ZipArchiveBuilder,
    archive_filename,
    folder_name,
    icon_filename,
)
from .categories import CategoryRegistry, SymbolCategory
from .engine import IMAGE_EXTENSION, EngineHandle, IconEngine
from .errors import BusyError, EngineError, InputError
from .request import GenerationRequest

log = logging.getLogger(__name__)

PROGRESS_EVERY = 200
PREVIEW_SIZE = 96
PREVIEW_YIELD_EVERY = 5


class PipelineState(enum.Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    RUNNING = "running"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Outcome(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProgressEvent:
    category_label: str
    produced: int
    total: int
    ordinal: int
    category_count: int


@dataclass(frozen=True)
class GenerationResult:
    outcome: Outcome
    produced: int
    filename: Optional[str] = None
    archive_size: int = 0


@dataclass
class GenerationJob:
    categories: list[SymbolCategory]
    produced: int = 0
    cancel_requested: bool = False
    archive: Optional[ZipArchiveBuilder] = field(default=None, repr=False)


ProgressCallback = Callable[[ProgressEvent], None]


class BatchGenerationPipeline:
    def __init__(
        self,
        handle: EngineHandle,
        downloader: Downloader,
        archive_factory: Callable[[], ZipArchiveBuilder] = ZipArchiveBuilder,
        on_progress: Optional[ProgressCallback] = None,
        progress_every: int = PROGRESS_EVERY,
        registry: Optional[CategoryRegistry] = None,
    ) -> None:
        self.handle = handle
        self.downloader = downloader
        self.archive_factory = archive_factory
        self.on_progress = on_progress
        self.progress_every = max(1, int(progress_every))
        self.registry = registry
        self._state = PipelineState.IDLE
        self._job: Optional[GenerationJob] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def job(self) -> Optional[GenerationJob]:
        return self._job

    @property
    def busy(self) -> bool:
        return self._job is not None

    def _set_state(self, state: PipelineState) -> None:
        if state is not self._state:
            log.debug("pipeline state %s -> %s", self._state.value, state.value)
        self._state = state

    async def initialize(self) -> IconEngine:
        if self._state is PipelineState.IDLE:
            self._set_state(PipelineState.INITIALIZING)
        try:
            engine = await self.handle.acquire()
        except EngineError:
            if self._state is PipelineState.INITIALIZING:
                self._set_state(PipelineState.IDLE)
            raise
        if self._state is PipelineState.INITIALIZING:
            self._set_state(PipelineState.READY)
        return engine

    @staticmethod
    def _check_known(registry: CategoryRegistry, request: GenerationRequest) -> None:
        unknown = sorted((i for i in request.category_ids if i not in registry), key=repr)
        if unknown:
            raise InputError(f"unknown categories: {unknown}")

    def cancel(self) -> bool:
        job = self._job
        if job is None or job.cancel_requested:
            return False
        job.cancel_requested = True
        if self._state is PipelineState.RUNNING:
            self._set_state(PipelineState.CANCELLING)
        log.info("cancellation requested; stopping after the current icon")
        return True

    async def run(self, request: GenerationRequest) -> GenerationResult:
        if self._job is not None:
            raise BusyError("a generation run is already in progress")
        # with a registry at hand, bad ids are rejected before the engine is touched
        if self.registry is not None:
            self._check_known(self.registry, request)

        job = GenerationJob(categories=[])
        self._job = job
        try:
            engine = await self.initialize()
            self._check_known(engine.registry, request)
            job.categories = engine.registry.select(request.category_ids)
            job.archive = self.archive_factory()
            self._set_state(PipelineState.RUNNING if not job.cancel_requested else PipelineState.CANCELLING)
            log.info(
                "generation started: %d categories x %d icons (%dpx)",
                len(job.categories), request.count_per_category, request.pixel_size,
            )
            return await self._run_job(engine, job, request)
        except EngineError:
            log.exception("generation aborted by a rendering engine failure")
            raise
        finally:
            archive = job.archive
            if archive is not None and not (archive.finalized or archive.discarded):
                archive.discard()
            self._job = None
            if self._state is not PipelineState.IDLE:
                self._set_state(PipelineState.READY)

    async def _run_job(
        self,
        engine: IconEngine,
        job: GenerationJob,
        request: GenerationRequest,
    ) -> GenerationResult:
        archive = job.archive
        per_category = request.count_per_category
        count = len(job.categories)

        for index, category in enumerate(job.categories):
            if job.cancel_requested:
                break

            ordinal = index + 1
            log.info("generating %s (%d/%d)", category.label, ordinal, count)
            folder = archive.folder(folder_name(ordinal, category.key))

            for icon_index in range(per_category):
                if job.cancel_requested:
                    break

                data = engine.generate_icon(category.id, request.pixel_size)
                folder.file(icon_filename(icon_index + 1, IMAGE_EXTENSION), data)
                job.produced += 1

                done = icon_index + 1
                if done % self.progress_every == 0 or done == per_category:
                    self._emit(ProgressEvent(category.label, done, per_category, ordinal, count))
                    await asyncio.sleep(0)

        if job.cancel_requested:
            archive.discard()
            self._set_state(PipelineState.CANCELLED)
            log.info("generation cancelled; %d icons produced before the stop were discarded", job.produced)
            return GenerationResult(Outcome.CANCELLED, job.produced)

        log.info("compressing archive")
        data = await archive.finalize()
        filename = archive_filename()
        self.downloader.trigger(data, filename)
        self._set_state(PipelineState.COMPLETED)
        log.info("generation completed: %d icons written to %s", job.produced, filename)
        return GenerationResult(Outcome.COMPLETED, job.produced, filename, len(data))

    def _emit(self, event: ProgressEvent) -> None:
        log.info("%s: %d/%d", event.category_label, event.produced, event.total)
        if self.on_progress is not None:
            self.on_progress(event)


async def render_previews(engine: IconEngine, size: int = PREVIEW_SIZE) -> dict[int, bytes]:
    """One icon per catalog entry, for browsing the symbol set."""
    previews: dict[int, bytes] = {}
    for counter, category in enumerate(engine.registry, start=1):
        previews[category.id] = engine.generate_icon(category.id, size)
        if counter % PREVIEW_YIELD_EVERY == 0:
            await asyncio.sleep(0)
    return previews
