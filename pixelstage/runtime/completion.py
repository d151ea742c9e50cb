"""Completion handles resolved by the per-frame scheduler update step."""

from __future__ import annotations

import logging
from collections.abc import Callable

Continuation = Callable[[], None]

_LOG = logging.getLogger("pixelstage.completion")


class Completion:
    """Opaque handle that becomes resolved exactly once.

    Schedulers resolve handles during their update step; continuations attached
    with :meth:`then` run synchronously at that point. A continuation attached to
    an already resolved handle runs immediately.
    """

    __slots__ = ("_resolved", "_continuations")

    def __init__(self) -> None:
        self._resolved = False
        self._continuations: list[Continuation] = []

    @property
    def resolved(self) -> bool:
        return self._resolved

    def then(self, continuation: Continuation) -> Completion:
        """Run continuation once this handle resolves."""
        if self._resolved:
            continuation()
        else:
            self._continuations.append(continuation)
        return self

    def resolve(self) -> bool:
        """Mark resolved and run continuations; returns False if already resolved."""
        if self._resolved:
            return False
        self._resolved = True
        continuations = self._continuations
        self._continuations = []
        first_error: Exception | None = None
        for continuation in continuations:
            try:
                continuation()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
                else:
                    _LOG.exception("continuation_failed")
        if first_error is not None:
            raise first_error
        return True

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"<Completion {state}>"


def resolve_all(completions: list[Completion]) -> int:
    """Resolve every handle in order and return how many changed state.

    A continuation that raises does not stop the remaining handles from
    resolving; the first error is re-raised once all of them are done.
    """
    resolved = 0
    first_error: Exception | None = None
    for completion in completions:
        try:
            changed = completion.resolve()
        except Exception as exc:
            # resolve() marks the handle before running continuations.
            changed = True
            if first_error is None:
                first_error = exc
            else:
                _LOG.exception("continuation_failed")
        if changed:
            resolved += 1
    if resolved and _LOG.isEnabledFor(logging.DEBUG):
        _LOG.debug("completions_resolved count=%d", resolved)
    if first_error is not None:
        raise first_error
    return resolved
