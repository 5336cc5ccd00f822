"""ActionSession — runs the dispatcher state machine for one user session."""

from __future__ import annotations

import asyncio
from collections import deque

from loguru import logger

from plotgate.backends.base import BaseActionForwarder, BaseCredentialGate
from plotgate.dispatcher import (
    AwaitingCredentials,
    CheckCredentials,
    ClearCredentialRequest,
    CredentialsChecked,
    DispatcherState,
    DropEvent,
    Effect,
    Event,
    Forward,
    ForwardDispatched,
    Idle,
    ReportSaveFailure,
    RequestCredentials,
    SaveCredentials,
    SaveFailed,
    SaveSucceeded,
    transition,
)
from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.models.action import TrendlineAction
from plotgate.models.session import SessionContext
from plotgate.observer import SessionObserver


def _as_error(exc: Exception, code: PlotGateErrorCode) -> PlotGateError:
    """Pass PlotGateError through; wrap anything else as non-retryable."""
    if isinstance(exc, PlotGateError):
        return exc
    error = PlotGateError(f"{type(exc).__name__}: {exc}", code=code)
    error.__cause__ = exc
    return error


class ActionSession:
    """Executes dispatcher effects against a gate and a forwarder.

    Events are processed strictly one at a time: ``dispatch`` resolves an
    event and every follow-up it causes (credential check, save) before
    returning. Use ``post`` + ``run`` to feed events through the session's
    own queue; concurrent direct ``dispatch`` calls are not serialized.

    Forwarding is fire-and-forget. The forward runs as a background task;
    its outcome goes to the observer and never changes the state.

    Usage::

        session = ActionSession(context, gate, forwarder)
        await session.dispatch(UserEvent(action))
        if session.awaiting_credentials:
            await session.dispatch(CredentialSubmit(creds))
    """

    def __init__(
        self,
        context: SessionContext,
        gate: BaseCredentialGate,
        forwarder: BaseActionForwarder,
        observer: SessionObserver | None = None,
        forward_retries: int = 0,
        forward_retry_delay: float = 1.0,
    ) -> None:
        self.context = context
        self.gate = gate
        self.forwarder = forwarder
        self.observer = observer or SessionObserver()
        self.forward_retries = max(0, forward_retries)
        self.forward_retry_delay = forward_retry_delay

        self._state: DispatcherState = Idle()
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._forwards: set[asyncio.Task[None]] = set()

    # --------------------------------------------------------------- state

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def awaiting_credentials(self) -> bool:
        return isinstance(self._state, AwaitingCredentials)

    @property
    def pending_action(self) -> TrendlineAction | None:
        if isinstance(self._state, AwaitingCredentials):
            return self._state.pending
        return None

    # -------------------------------------------------------------- events

    async def dispatch(self, event: Event) -> DispatcherState:
        """Apply ``event`` and run effects until the state settles."""
        queue: deque[Event] = deque([event])
        while queue:
            current = queue.popleft()
            previous = self._state
            self._state, effects = transition(previous, current)
            logger.debug(
                f"[{self.context.user_id}] {type(current).__name__}: "
                f"{type(previous).__name__} -> {type(self._state).__name__}"
            )
            for effect in effects:
                follow_up = await self._execute(effect)
                if follow_up is not None:
                    queue.append(follow_up)
        return self._state

    def post(self, event: Event) -> None:
        """Queue an event for ``run``."""
        self._queue.put_nowait(event)

    async def run(self) -> None:
        """Consume queued events forever, one fully resolved at a time."""
        while True:
            event = await self._queue.get()
            try:
                await self.dispatch(event)
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every posted event has been processed."""
        await self._queue.join()

    async def drain(self) -> None:
        """Wait for outstanding background forwards."""
        while self._forwards:
            await asyncio.gather(*list(self._forwards))

    # ------------------------------------------------------------- effects

    async def _execute(self, effect: Effect) -> Event | None:
        if isinstance(effect, CheckCredentials):
            return CredentialsChecked(effect.action, await self._check_credentials())

        if isinstance(effect, SaveCredentials):
            try:
                await self.gate.save_credentials(self.context, effect.credentials)
            except Exception as exc:
                error = _as_error(exc, PlotGateErrorCode.CREDENTIAL_SAVE_FAILED)
                logger.warning(f"[{self.context.user_id}] Credential save failed: {error}")
                return SaveFailed(error)
            return SaveSucceeded()

        if isinstance(effect, Forward):
            task = asyncio.create_task(self._forward(effect.action))
            self._forwards.add(task)
            task.add_done_callback(self._forwards.discard)
            return ForwardDispatched()

        if isinstance(effect, RequestCredentials):
            self.observer.on_credentials_requested(effect.action)
        elif isinstance(effect, ClearCredentialRequest):
            self.observer.on_credentials_request_cleared()
        elif isinstance(effect, ReportSaveFailure):
            self.observer.on_save_failed(effect.error)
        elif isinstance(effect, DropEvent):
            logger.info(f"[{self.context.user_id}] Dropped chart event: {effect.reason}")
        return None

    async def _check_credentials(self) -> bool:
        try:
            return await self.gate.has_credentials(self.context)
        except Exception as exc:
            # Fail closed: an unanswered check counts as "no credentials".
            error = _as_error(exc, PlotGateErrorCode.CREDENTIAL_CHECK_FAILED)
            logger.warning(
                f"[{self.context.user_id}] Credential check failed, "
                f"treating as absent: {error}"
            )
            return False

    async def _forward(self, action: TrendlineAction) -> None:
        attempts = 1 + self.forward_retries
        for attempt in range(1, attempts + 1):
            try:
                await self.forwarder.forward(self.context, action)
            except Exception as raw:
                exc = _as_error(raw, PlotGateErrorCode.FORWARD_FAILED)
                if not exc.retryable or attempt == attempts:
                    logger.error(
                        f"[{self.context.user_id}] Trendline forward failed "
                        f"for {action.symbol} after {attempt} attempt(s): {exc}"
                    )
                    self.observer.on_forward_failed(action, exc)
                    return
                logger.warning(
                    f"[{self.context.user_id}] Trendline forward attempt "
                    f"{attempt}/{attempts} failed, retrying: {exc}"
                )
                await asyncio.sleep(self.forward_retry_delay)
            else:
                logger.info(
                    f"[{self.context.user_id}] Forwarded trendline for "
                    f"{action.symbol} {action.timeframe} @ {action.price}"
                )
                self.observer.on_forward_succeeded(action)
                return
