"""Classified outcomes of a mutating (or probing) call against the provider."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T


@dataclass(frozen=True, slots=True)
class AlreadyExists:
    """The resource key is taken; ``existing_id`` is set when the provider revealed it."""

    status: int
    body: str
    existing_id: str | None = None


@dataclass(frozen=True, slots=True)
class NotFound:
    body: str = ""


@dataclass(frozen=True, slots=True)
class OtherFailure:
    status: int
    body: str


type ConflictSignal[T] = Success[T] | AlreadyExists | NotFound | OtherFailure
