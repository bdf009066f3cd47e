"""Observable browser state with fetch cycle invalidation.

The presentation layer reads shows, selection, loading flag and error
from a ShowBrowserState. Every refresh starts a new cycle identified by
a generation number; only the newest cycle may commit its results, so a
slow cycle started before a time window change can never overwrite the
list of the cycle that replaced it.

Starting a cycle clears the previous list immediately. Listeners get a
BrowserSnapshot after each transition and never see a partial list.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

import requests

from topseries.errors import CatalogError
from topseries.models import Show, TimeWindow

logger = logging.getLogger(__name__)

FetchShows = Callable[[TimeWindow], tuple[Show, ...]]


@dataclass(frozen=True)
class BrowserSnapshot:
    """Point-in-time view of the browser state.

    Attributes:
        shows: Current enriched shows (empty while a cycle is loading).
        selected_show: The highlighted show, first of the list by default.
        is_loading: True between the start and end of the newest cycle.
        error: Failure of the newest cycle, if it failed.
        time_window: Window of the newest cycle.
        generation: Number of the newest cycle.
    """

    shows: tuple[Show, ...]
    selected_show: Show | None
    is_loading: bool
    error: Exception | None
    time_window: TimeWindow
    generation: int


Listener = Callable[[BrowserSnapshot], None]


class ShowBrowserState:
    """Holds the single "current results" slot shared with observers."""

    def __init__(
        self,
        fetch: FetchShows,
        time_window: TimeWindow = TimeWindow.WEEK,
    ) -> None:
        self._fetch = fetch
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._shows: tuple[Show, ...] = ()
        self._selected: Show | None = None
        self._is_loading = False
        self._error: Exception | None = None
        self._time_window = time_window
        self._generation = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> BrowserSnapshot:
        with self._lock:
            return self._snapshot_locked()

    @property
    def shows(self) -> tuple[Show, ...]:
        return self.snapshot().shows

    @property
    def selected_show(self) -> Show | None:
        return self.snapshot().selected_show

    @property
    def error(self) -> Exception | None:
        return self.snapshot().error

    @property
    def time_window(self) -> TimeWindow:
        return self.snapshot().time_window

    def begin_cycle(
        self, time_window: TimeWindow | None = None
    ) -> tuple[int, TimeWindow]:
        """Start a new cycle, clearing the current list and error.

        Returns:
            The new generation number and the window it fetches.
        """
        with self._lock:
            self._generation += 1
            if time_window is not None:
                self._time_window = time_window
            self._shows = ()
            self._selected = None
            self._error = None
            self._is_loading = True
            snapshot = self._snapshot_locked()
        self._notify(snapshot)
        return snapshot.generation, snapshot.time_window

    def commit(self, generation: int, shows: tuple[Show, ...]) -> bool:
        """Publish a cycle's shows if it is still the newest cycle."""
        with self._lock:
            if generation != self._generation:
                logger.info(
                    "Discarding results of superseded cycle %d (current %d)",
                    generation,
                    self._generation,
                )
                return False
            self._shows = tuple(shows)
            self._selected = self._shows[0] if self._shows else None
            self._error = None
            self._is_loading = False
            snapshot = self._snapshot_locked()
        self._notify(snapshot)
        return True

    def fail(self, generation: int, error: Exception) -> bool:
        """Publish a cycle's failure if it is still the newest cycle."""
        with self._lock:
            if generation != self._generation:
                logger.info(
                    "Discarding error of superseded cycle %d: %s",
                    generation,
                    error,
                )
                return False
            self._error = error
            self._is_loading = False
            snapshot = self._snapshot_locked()
        self._notify(snapshot)
        return True

    def refresh(self, time_window: TimeWindow | None = None) -> bool:
        """Run a full fetch cycle.

        Returns:
            True if this cycle's outcome (shows or error) was published,
            False if a newer cycle superseded it.

        Errors other than catalog and transport failures are published as
        the cycle's error and then re-raised.
        """
        generation, window = self.begin_cycle(time_window)
        try:
            shows = self._fetch(window)
        except (CatalogError, requests.RequestException) as exc:
            logger.error("Fetch cycle %d failed: %s", generation, exc)
            return self.fail(generation, exc)
        except Exception as exc:
            logger.exception("Fetch cycle %d crashed", generation)
            self.fail(generation, exc)
            raise
        return self.commit(generation, shows)

    def select_time_window(self, time_window: TimeWindow) -> bool:
        """Switch the time window and refetch the list."""
        return self.refresh(time_window)

    def select(self, show_id: int) -> Show:
        """Highlight a show of the current list.

        Raises:
            KeyError: If no current show has this id.
        """
        with self._lock:
            for show in self._shows:
                if show.id == show_id:
                    self._selected = show
                    snapshot = self._snapshot_locked()
                    break
            else:
                raise KeyError(show_id)
        self._notify(snapshot)
        return show

    def _snapshot_locked(self) -> BrowserSnapshot:
        return BrowserSnapshot(
            shows=self._shows,
            selected_show=self._selected,
            is_loading=self._is_loading,
            error=self._error,
            time_window=self._time_window,
            generation=self._generation,
        )

    def _notify(self, snapshot: BrowserSnapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)
