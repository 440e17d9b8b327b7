"""Per-document rendering session for hosts that decorate references.

Each open document owns one DocumentSession. Text changes are debounced and
every recomputation replaces the previous decorations wholesale; nothing is
kept at module level.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from .lib.references import Span
from .lib.references import SpanRole
from .lib.references import calculate_spans
from .lib.references import scan_text

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.5


class ScheduledTask:
    """A single cancellable delayed callback on an asyncio loop.

    Scheduling again replaces any pending callback.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._run, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _run(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()


@dataclass
class DecorationSet:
    """All spans for one document, keyed by 0-based line number."""

    emphasized: list[tuple[int, Span]] = field(default_factory=list)
    deemphasized: list[tuple[int, Span]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.emphasized) + len(self.deemphasized)


def compute_decorations(text: str) -> DecorationSet:
    """Scan a buffer and compute spans for every reference in it."""
    decorations = DecorationSet()
    for located in scan_text(text):
        for span in calculate_spans(located.reference, located.start):
            if span.role == SpanRole.DEEMPHASIZE:
                decorations.deemphasized.append((located.line, span))
            else:
                decorations.emphasized.append((located.line, span))
    return decorations


class DocumentSession:
    """Debounced decoration state for one document.

    Usage:
        session = DocumentSession(on_render=editor.apply)
        session.update(buffer_text)   # on every change
        ...
        session.dispose()             # when the document closes
    """

    def __init__(
        self,
        on_render: Callable[[DecorationSet], None],
        debounce: float = DEFAULT_DEBOUNCE,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize session.

        Args:
            on_render: Called with the complete new DecorationSet after each
                recomputation; it replaces whatever was rendered before
            debounce: Seconds of quiescence before recomputing
            loop: Event loop for the debounce timer (default: the running loop)
        """
        self.on_render = on_render
        self.debounce = debounce
        self.decorations = DecorationSet()
        self._timer = ScheduledTask(loop)
        self._text = ""
        self._disposed = False

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def update(self, text: str) -> None:
        """Record new buffer text and restart the debounce timer."""
        self._check_alive()
        self._text = text
        self._timer.schedule(self.debounce, self._recompute)

    def flush(self) -> DecorationSet:
        """Recompute immediately, superseding any pending recomputation."""
        self._check_alive()
        self._timer.cancel()
        self._recompute()
        return self.decorations

    def dispose(self) -> None:
        """Cancel pending work and drop decoration state."""
        self._timer.cancel()
        self.decorations = DecorationSet()
        self._disposed = True

    def _recompute(self) -> None:
        self.decorations = compute_decorations(self._text)
        logger.debug(f"Recomputed {len(self.decorations)} spans")
        self.on_render(self.decorations)

    def _check_alive(self) -> None:
        if self._disposed:
            raise RuntimeError("DocumentSession has been disposed")


class NoticeState(str, Enum):
    IDLE = "idle"
    APPEARING = "appearing"
    HOLDING = "holding"
    FADING_OUT = "fading_out"


_NEXT_STATE = {
    NoticeState.APPEARING: NoticeState.HOLDING,
    NoticeState.HOLDING: NoticeState.FADING_OUT,
    NoticeState.FADING_OUT: NoticeState.IDLE,
}


class NoticeAnimator:
    """Transient notice (e.g. "Reference copied") driven by one timer.

    Idle -> Appearing -> Holding -> FadingOut -> Idle. Calling show() while a
    notice is visible restarts it from Appearing.
    """

    def __init__(
        self,
        on_state: Callable[[NoticeState], None],
        appear: float = 0.15,
        hold: float = 1.2,
        fade: float = 0.3,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.on_state = on_state
        self.durations = {
            NoticeState.APPEARING: appear,
            NoticeState.HOLDING: hold,
            NoticeState.FADING_OUT: fade,
        }
        self.state = NoticeState.IDLE
        self._timer = ScheduledTask(loop)

    def show(self) -> None:
        self._enter(NoticeState.APPEARING)

    def cancel(self) -> None:
        self._timer.cancel()
        if self.state != NoticeState.IDLE:
            self._enter(NoticeState.IDLE)

    def _enter(self, state: NoticeState) -> None:
        self._timer.cancel()
        self.state = state
        self.on_state(state)
        if state in _NEXT_STATE:
            self._timer.schedule(self.durations[state], self._advance)

    def _advance(self) -> None:
        self._enter(_NEXT_STATE[self.state])
