"""
Controller behind the sleep tracker screen.

User actions (start, stop, clear) are launched as tasks on the running event
loop. Each action holds `_lock` for its whole read/write sequence, so a later
action always sees the writes of the earlier ones. Database calls go through
the `DatabaseExecutor`; observable state is only touched back on the loop.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from sleeptracker.core.tasks import DatabaseExecutor
from sleeptracker.db.crud.sleep_night import SleepDatabaseDao
from sleeptracker.db.models.sleep_night import SleepNight, now_millis
from sleeptracker.db.schemas.sleep_night import SleepNightRead
from sleeptracker.tracker.events import NavigateToSleepQuality, ShowSnackbar, TrackerEvent
from sleeptracker.tracker.observable import Observable
from sleeptracker.utils.formatting import format_nights

logger = logging.getLogger(__name__)

Formatter = Callable[[Sequence[SleepNightRead]], str]


class SleepTrackerController:
    """
    Must be created inside a running event loop: the constructor schedules
    the initial load of tonight and the history. Await `initialized` to wait
    for that load and see its failure, if any.
    """

    def __init__(
        self,
        dao: SleepDatabaseDao,
        executor: DatabaseExecutor,
        formatter: Formatter = format_nights,
        clock: Callable[[], int] = now_millis,
    ):
        self.dao = dao
        self.executor = executor
        self.clock = clock

        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._events: asyncio.Queue[TrackerEvent] = asyncio.Queue()
        self._closed = False

        self.tonight: Observable[Optional[SleepNightRead]] = Observable(None)
        self.nights: Observable[List[SleepNightRead]] = Observable([])

        self.nights_string = self.nights.map(formatter)
        self.start_button_visible = self.tonight.map(lambda night: night is None)
        self.stop_button_visible = self.tonight.map(lambda night: night is not None)
        self.clear_button_visible = self.nights.map(lambda nights: len(nights) > 0)

        self.initialized: asyncio.Task = self._launch(self._initialize_tonight, "initialize")

    # --- actions ---
    def on_start_tracking(self) -> asyncio.Task:
        return self._launch(self._start_tracking, "start")

    def on_stop_tracking(self) -> asyncio.Task:
        return self._launch(self._stop_tracking, "stop")

    def on_clear(self) -> asyncio.Task:
        return self._launch(self._clear, "clear")

    # --- events ---
    def drain_events(self) -> List[TrackerEvent]:
        """Take every pending event; each one is handed out exactly once."""
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except asyncio.QueueEmpty:
                return events

    async def next_event(self) -> TrackerEvent:
        return await self._events.get()

    # --- lifecycle ---
    async def wait_idle(self) -> None:
        """Wait until every launched action has finished, failed or been cancelled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel outstanding actions. Work already handed to the executor is abandoned, not rolled back."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    # --- internals ---
    def _launch(self, action: Callable[[], Awaitable[None]], name: str) -> asyncio.Task:
        if self._closed:
            raise RuntimeError("SleepTrackerController is closed")
        task = asyncio.get_running_loop().create_task(self._run(action, name), name=f"sleep-tracker-{name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, action: Callable[[], Awaitable[None]], name: str) -> None:
        try:
            async with self._lock:
                await action()
        except asyncio.CancelledError:
            logger.debug("Action %s cancelled", name)
            raise
        except Exception:
            logger.exception("Action %s failed", name)
            raise

    async def _get_tonight_from_database(self) -> Optional[SleepNightRead]:
        night = await self.executor.run(self.dao.get_tonight)
        # the latest row only counts as tonight while it is still open
        if night is None or night.end_time_milli != night.start_time_milli:
            return None
        return SleepNightRead.model_validate(night)

    async def _reload_nights(self) -> None:
        nights = await self.executor.run(self.dao.get_all_nights)
        self.nights.set([SleepNightRead.model_validate(night) for night in nights])

    async def _initialize_tonight(self) -> None:
        self.tonight.set(await self._get_tonight_from_database())
        await self._reload_nights()

    async def _start_tracking(self) -> None:
        if self.tonight.value is not None:
            logger.info("Night %s is already being tracked", self.tonight.value.night_id)
            return

        new_night = SleepNight(start_time_milli=self.clock())
        inserted = await self.executor.run(self.dao.insert, new_night)
        logger.info("Started tracking night %s", inserted.night_id)
        self.tonight.set(await self._get_tonight_from_database())
        await self._reload_nights()

    async def _stop_tracking(self) -> None:
        old_night = self.tonight.value
        if old_night is None:
            return

        # end must land strictly after start, otherwise the night still reads as in progress
        end_time = max(self.clock(), old_night.start_time_milli + 1)
        stopped = SleepNight(
            night_id=old_night.night_id,
            start_time_milli=old_night.start_time_milli,
            end_time_milli=end_time,
            sleep_quality=old_night.sleep_quality,
        )
        updated = await self.executor.run(self.dao.update, stopped)

        self.tonight.set(None)
        await self._reload_nights()
        if updated is None:
            # cleared elsewhere while it was being tracked; nothing left to rate
            logger.info("Night %s was deleted before it could be stopped", old_night.night_id)
            return
        logger.info("Stopped tracking night %s", updated.night_id)
        self._events.put_nowait(NavigateToSleepQuality(SleepNightRead.model_validate(updated)))

    async def _clear(self) -> None:
        deleted = await self.executor.run(self.dao.delete_all_rows)
        self.tonight.set(None)
        await self._reload_nights()
        logger.info("Cleared %s nights", deleted)
        self._events.put_nowait(ShowSnackbar())
