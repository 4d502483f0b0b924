"""Resolution pipeline: catalog search queries in, queued tracks and outcomes out.

Both resolvers share one per-query routine. It searches the audio backend,
applies the duration policy, and enqueues accepted tracks. Whatever happens
in that routine ends as a ``LoadOutcome``; it never raises.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.catalog.entities import SearchQuery
from ...domain.music.entities import Requester, Track
from ...domain.music.services import DurationPolicy
from ...domain.shared.exceptions import BusinessRuleViolationError
from ...domain.shared.messages import DiscordUIMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt
from ..interfaces.audio_search import FailureSeverity, SearchStatus

if TYPE_CHECKING:
    from ..interfaces.audio_search import AudioSearchBackend
    from ..interfaces.playback_queue import PlaybackQueue
    from ..interfaces.progress_sink import ProgressSink

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    ADDED = "added"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    LOAD_ERROR = "load_error"


class RejectReason(Enum):
    DURATION_EXCEEDED = "duration_exceeded"


class LoadOutcome(BaseModel):
    """Terminal result of resolving one query."""

    model_config = ConfigDict(frozen=True)

    status: LoadStatus
    query: str
    track: Track | None = None
    queue_position: int | None = None
    reason: RejectReason | None = None
    message: str | None = None
    severity: FailureSeverity | None = None

    @property
    def is_success(self) -> bool:
        return self.status is LoadStatus.ADDED

    @property
    def display_position(self) -> int | None:
        """1-based position shown to users; 0 means the track plays right away."""
        if self.queue_position is None:
            return None
        return self.queue_position + 1

    @classmethod
    def added(cls, query: str, track: Track, queue_position: int) -> LoadOutcome:
        return cls(
            status=LoadStatus.ADDED, query=query, track=track, queue_position=queue_position
        )

    @classmethod
    def rejected(cls, query: str, track: Track, reason: RejectReason) -> LoadOutcome:
        return cls(status=LoadStatus.REJECTED, query=query, track=track, reason=reason)

    @classmethod
    def not_found(cls, query: str) -> LoadOutcome:
        return cls(status=LoadStatus.NOT_FOUND, query=query)

    @classmethod
    def load_error(
        cls, query: str, message: str, severity: FailureSeverity, track: Track | None = None
    ) -> LoadOutcome:
        return cls(
            status=LoadStatus.LOAD_ERROR,
            query=query,
            track=track,
            message=message,
            severity=severity,
        )


class BatchSummary(BaseModel):
    """Aggregate counts for a batch; ``success_count + fail_count`` is the batch size."""

    model_config = ConfigDict(frozen=True, strict=True)

    success_count: NonNegativeInt = 0
    fail_count: NonNegativeInt = 0

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[LoadOutcome]) -> BatchSummary:
        success = fail = 0
        for outcome in outcomes:
            if outcome.is_success:
                success += 1
            else:
                fail += 1
        return cls(success_count=success, fail_count=fail)


def render_outcome(outcome: LoadOutcome, policy: DurationPolicy) -> str:
    """User-facing text for a single resolved query."""
    track = outcome.track

    if outcome.status is LoadStatus.ADDED and track is not None:
        if outcome.display_position == 0:
            return DiscordUIMessages.TRACK_ADDED.format(
                title=track.title, duration=track.duration_formatted
            )
        return DiscordUIMessages.TRACK_ADDED_AT.format(
            title=track.title,
            duration=track.duration_formatted,
            position=outcome.display_position,
        )

    if outcome.status is LoadStatus.REJECTED and track is not None:
        return DiscordUIMessages.TRACK_TOO_LONG.format(
            title=track.title,
            duration=track.duration_formatted,
            max_duration=policy.max_formatted,
        )

    if outcome.status is LoadStatus.NOT_FOUND:
        return DiscordUIMessages.TRACK_NO_MATCHES

    if outcome.severity is FailureSeverity.COMMON and outcome.message:
        return DiscordUIMessages.TRACK_LOAD_ERROR_DETAIL.format(detail=outcome.message)
    return DiscordUIMessages.TRACK_LOAD_ERROR


class _TrackLoader:
    """Shared per-query routine for both resolvers."""

    def __init__(
        self,
        *,
        search_backend: AudioSearchBackend,
        playback_queue: PlaybackQueue,
        duration_policy: DurationPolicy,
        search_prefix: str = "ytsearch",
    ) -> None:
        self._search = search_backend
        self._queue = playback_queue
        self._policy = duration_policy
        self._search_prefix = search_prefix

    @property
    def duration_policy(self) -> DurationPolicy:
        return self._policy

    async def _load(
        self, guild_id: DiscordSnowflake, query: SearchQuery, requester: Requester
    ) -> LoadOutcome:
        try:
            return await self._load_unguarded(guild_id, query, requester)
        except Exception as e:
            logger.exception(LogTemplates.RESOLVE_UNEXPECTED_ERROR, query.text)
            return LoadOutcome.load_error(query.text, str(e), FailureSeverity.FAULT)

    async def _load_unguarded(
        self, guild_id: DiscordSnowflake, query: SearchQuery, requester: Requester
    ) -> LoadOutcome:
        result = await self._search.search(f"{self._search_prefix}:{query.text}")

        if result.status is SearchStatus.EMPTY:
            logger.info(LogTemplates.RESOLVE_NO_MATCHES, query.text)
            return LoadOutcome.not_found(query.text)

        if result.status is SearchStatus.FAILED or result.track is None:
            severity = result.severity or FailureSeverity.FAULT
            logger.warning(LogTemplates.RESOLVE_LOAD_FAILED, query.text, severity.value, result.error)
            return LoadOutcome.load_error(query.text, result.error or "", severity)

        track = result.track
        if self._policy.is_too_long(track):
            logger.info(
                LogTemplates.RESOLVE_REJECTED_DURATION,
                track.title,
                track.duration_seconds,
                self._policy.max_seconds,
            )
            return LoadOutcome.rejected(query.text, track, RejectReason.DURATION_EXCEEDED)

        try:
            position = await self._queue.add_track(
                guild_id, track, requester.request_for(query.text, track)
            )
        except BusinessRuleViolationError as e:
            logger.warning(LogTemplates.RESOLVE_QUEUE_REFUSED, track.title, e.message)
            return LoadOutcome.load_error(query.text, e.message, FailureSeverity.COMMON, track)

        return LoadOutcome.added(query.text, track, position)


class BatchResolver(_TrackLoader):
    """Resolves many queries concurrently and reports only aggregate counts.

    Tracks are enqueued in the order their searches complete, which is not
    necessarily the order of ``queries``.
    """

    async def resolve_batch(
        self,
        guild_id: DiscordSnowflake,
        queries: Sequence[SearchQuery],
        requester: Requester,
    ) -> BatchSummary:
        if not queries:
            return BatchSummary()

        logger.info(LogTemplates.RESOLVE_BATCH_STARTED, len(queries), guild_id)

        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._load(guild_id, query, requester)) for query in queries]

        summary = BatchSummary.from_outcomes(task.result() for task in tasks)
        logger.info(
            LogTemplates.RESOLVE_BATCH_FINISHED, guild_id, summary.success_count, summary.fail_count
        )
        return summary


class SingleResolver(_TrackLoader):
    """Resolves one query and reports progress and the result through a sink."""

    async def resolve_one(
        self,
        guild_id: DiscordSnowflake,
        query: SearchQuery,
        requester: Requester,
        sink: ProgressSink,
    ) -> LoadOutcome:
        logger.info(LogTemplates.RESOLVE_SINGLE, query.text, guild_id)
        await sink.send(DiscordUIMessages.LOADING_QUERY.format(query=query.text))

        outcome = await self._load(guild_id, query, requester)
        await sink.send(self.describe(outcome))
        return outcome

    def describe(self, outcome: LoadOutcome) -> str:
        return render_outcome(outcome, self._policy)
