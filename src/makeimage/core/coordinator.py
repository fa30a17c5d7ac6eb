"""
Dual-request coordination.

DualRequestCoordinator runs two image requests (left and right) concurrently
and keeps one CoordinatorState for the presentation layer. A round is over
when both requests have reached a terminal state, successful or not; only
then is ``busy`` cleared.

Completion handling for both requests runs under one lock, so state updates
are serialized. The end of a round is detected by a CompletionBarrier that
counts down from 2 and fires its action exactly once.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Literal

from makeimage.core.models import GenerateImageResponse
from makeimage.core.request_service import ImageRequestService, decode_first_image
from makeimage.logging_config import get_logger, log_prompts

logger = get_logger(__name__)

Side = Literal["left", "right"]
SIDES: tuple[Side, Side] = ("left", "right")

StateListener = Callable[["CoordinatorState"], None]


@dataclass(frozen=True)
class CoordinatorState:
    """Snapshot of what the presentation layer shows."""

    left_image: bytes = b""
    right_image: bytes = b""
    busy: bool = False
    last_error_message: str = ""
    # failures recorded so far; a round failed if this grew while it ran
    error_count: int = 0


class CompletionBarrier:
    """Countdown that runs ``action`` once, when the count reaches zero.

    Extra arrivals after zero are ignored. Thread-safe.
    """

    def __init__(self, parties: int, action: Callable[[], None]) -> None:
        if parties <= 0:
            raise ValueError(f"parties must be positive, got {parties}")
        self._remaining = parties
        self._action = action
        self._lock = threading.Lock()

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    def arrive(self) -> bool:
        """Count one arrival. Returns True for the arrival that triggered the action."""
        with self._lock:
            if self._remaining == 0:
                return False
            self._remaining -= 1
            fire = self._remaining == 0
        if fire:
            self._action()
        return fire


class DualRequestCoordinator:
    """Issues a left and a right request concurrently and joins their completion.

    There is no guard against calling generate() while a round is running;
    callers gate on ``state.busy`` (the CLI waits, the UI disables its button).
    Each round owns its own barrier. When rounds overlap, ``busy`` is cleared
    only once every started round has finished.
    """

    def __init__(
        self,
        service: ImageRequestService,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.service = service
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="makeimage"
        )
        # Serializes all state mutation and listener notification
        self._lock = threading.RLock()
        self._state = CoordinatorState()
        self._listeners: list[StateListener] = []
        self._idle = threading.Event()
        self._idle.set()
        self._round = 0
        self._rounds_in_flight = 0

    @property
    def state(self) -> CoordinatorState:
        with self._lock:
            return self._state

    def subscribe(self, listener: StateListener) -> None:
        """Call listener with the new state after every change."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _update(self, **changes: object) -> None:
        """Apply changes and notify listeners. Caller must hold the lock."""
        self._state = replace(self._state, **changes)  # type: ignore[arg-type]
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def generate(self, prompt_left: str, prompt_right: str) -> None:
        """
        Start one round: request both prompts concurrently and return immediately.

        Results land in ``state`` as each request completes; ``busy`` stays True
        until both have finished.

        If a request cannot be submitted (the executor is shut down), that side
        is recorded as failed, the round is finished for it and the error is
        re-raised.
        """
        with self._lock:
            self._round += 1
            self._rounds_in_flight += 1
            round_id = self._round
            self._idle.clear()
            self._update(busy=True)

        logger.info("Round %d started", round_id)
        if log_prompts():
            logger.info("Prompts: left=%r right=%r", prompt_left, prompt_right)

        barrier = CompletionBarrier(2, lambda: self._finish_round(round_id))
        submitted = 0
        try:
            for side, prompt in zip(SIDES, (prompt_left, prompt_right)):
                future = self.service.submit(prompt, self._executor)
                submitted += 1
                future.add_done_callback(
                    lambda f, side=side: self._on_complete(side, f, barrier)
                )
        except Exception as e:
            # Sides that never started count as failed so the round still ends
            with self._lock:
                for side in SIDES[submitted:]:
                    self._record_failure(side, e)
            for _ in SIDES[submitted:]:
                barrier.arrive()
            raise

    def _on_complete(
        self,
        side: Side,
        future: "Future[GenerateImageResponse]",
        barrier: CompletionBarrier,
    ) -> None:
        with self._lock:
            try:
                exc = future.exception()
                if exc is None:
                    self._store_image(side, future.result())
                else:
                    self._record_failure(side, exc)
            finally:
                barrier.arrive()

    def _record_failure(self, side: Side, exc: BaseException) -> None:
        logger.warning("%s request failed: %s", side.capitalize(), exc)
        self._update(last_error_message=str(exc), error_count=self._state.error_count + 1)

    def _store_image(self, side: Side, response: GenerateImageResponse) -> None:
        data = decode_first_image(response)
        if data is None:
            # Slot keeps its previous value; no error is surfaced for this case
            logger.warning("%s response had no decodable image payload", side.capitalize())
            return
        logger.debug("%s image decoded bytes=%d", side.capitalize(), len(data))
        if side == "left":
            self._update(left_image=data)
        else:
            self._update(right_image=data)

    def _finish_round(self, round_id: int) -> None:
        with self._lock:
            self._rounds_in_flight -= 1
            if self._rounds_in_flight == 0:
                self._update(busy=False)
                self._idle.set()
        logger.info("Round %d finished", round_id)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no round is running. Returns False on timeout."""
        return self._idle.wait(timeout)

    def close(self) -> None:
        """Shut down the thread pool if this coordinator created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "DualRequestCoordinator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "CompletionBarrier",
    "CoordinatorState",
    "DualRequestCoordinator",
    "SIDES",
]
