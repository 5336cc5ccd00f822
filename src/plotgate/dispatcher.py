"""Credential-gated action dispatcher — pure state machine.

``transition(state, event)`` returns the next state and the effects the
caller must carry out. It performs no I/O; ``ActionSession`` executes the
effects and feeds their outcomes back in as events.

    Idle --UserEvent--> [CheckCredentials]
    Idle --CredentialsChecked(present)--> Dispatching [Forward]
    Idle --CredentialsChecked(absent)--> AwaitingCredentials [RequestCredentials]
    Dispatching --ForwardDispatched--> Idle
    AwaitingCredentials --CredentialSubmit--> [SaveCredentials]
    AwaitingCredentials --SaveSucceeded--> Dispatching [ClearCredentialRequest, Forward]
    AwaitingCredentials --SaveFailed--> [ReportSaveFailure]
    AwaitingCredentials --Cancel--> Idle [ClearCredentialRequest]
    AwaitingCredentials --UserEvent--> AwaitingCredentials (pending replaced)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from plotgate.errors import PlotGateError
from plotgate.models.action import TrendlineAction
from plotgate.models.session import ServiceCredentials
from plotgate.validation import validate_action

# ---- States ----


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class AwaitingCredentials:
    """Credentials are missing; ``pending`` is replayed once they are saved."""

    pending: TrendlineAction


@dataclass(frozen=True)
class Dispatching:
    action: TrendlineAction


DispatcherState = Union[Idle, AwaitingCredentials, Dispatching]

# ---- Events ----


@dataclass(frozen=True)
class UserEvent:
    action: TrendlineAction


@dataclass(frozen=True)
class CredentialsChecked:
    action: TrendlineAction
    present: bool


@dataclass(frozen=True)
class CredentialSubmit:
    credentials: ServiceCredentials


@dataclass(frozen=True)
class SaveSucceeded:
    pass


@dataclass(frozen=True)
class SaveFailed:
    error: PlotGateError


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class ForwardDispatched:
    pass


Event = Union[
    UserEvent, CredentialsChecked, CredentialSubmit,
    SaveSucceeded, SaveFailed, Cancel, ForwardDispatched,
]

# ---- Effects ----


@dataclass(frozen=True)
class CheckCredentials:
    action: TrendlineAction


@dataclass(frozen=True)
class RequestCredentials:
    action: TrendlineAction


@dataclass(frozen=True)
class ClearCredentialRequest:
    pass


@dataclass(frozen=True)
class SaveCredentials:
    credentials: ServiceCredentials


@dataclass(frozen=True)
class Forward:
    action: TrendlineAction


@dataclass(frozen=True)
class ReportSaveFailure:
    error: PlotGateError


@dataclass(frozen=True)
class DropEvent:
    """A user event failed validation; log it, never surface it."""

    action: TrendlineAction
    reason: str


Effect = Union[
    CheckCredentials, RequestCredentials, ClearCredentialRequest,
    SaveCredentials, Forward, ReportSaveFailure, DropEvent,
]

Transition = tuple[DispatcherState, tuple[Effect, ...]]


def transition(state: DispatcherState, event: Event) -> Transition:
    """Compute the next state and effects. Unhandled pairs are no-ops."""
    if isinstance(event, UserEvent):
        check = validate_action(event.action)
        if not check.passed:
            return state, (DropEvent(event.action, check.summary),)

    if isinstance(state, Idle):
        return _from_idle(state, event)
    if isinstance(state, AwaitingCredentials):
        return _from_awaiting(state, event)
    if isinstance(state, Dispatching):
        if isinstance(event, ForwardDispatched):
            return Idle(), ()
    return state, ()


def _from_idle(state: Idle, event: Event) -> Transition:
    if isinstance(event, UserEvent):
        return state, (CheckCredentials(event.action),)
    if isinstance(event, CredentialsChecked):
        if event.present:
            return Dispatching(event.action), (Forward(event.action),)
        return AwaitingCredentials(event.action), (RequestCredentials(event.action),)
    return state, ()


def _from_awaiting(state: AwaitingCredentials, event: Event) -> Transition:
    if isinstance(event, UserEvent):
        # Last write wins: the earlier pending action is discarded.
        return AwaitingCredentials(event.action), ()
    if isinstance(event, CredentialSubmit):
        return state, (SaveCredentials(event.credentials),)
    if isinstance(event, SaveSucceeded):
        return Dispatching(state.pending), (ClearCredentialRequest(), Forward(state.pending))
    if isinstance(event, SaveFailed):
        return state, (ReportSaveFailure(event.error),)
    if isinstance(event, Cancel):
        return Idle(), (ClearCredentialRequest(),)
    return state, ()
