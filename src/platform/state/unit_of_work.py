"""
Unit of Work Pattern - one contract invocation, all or nothing

Architecture:
- Participants (state store, value ledger, notification log) expose snapshot/restore
- UoW snapshots every participant on enter
- UoW restores every participant on exit unless commit() was called
- The ledger host opens one UoW per invocation
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Snapshotable(Protocol):
    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work

    Usage:
        with uow:
            ...mutate participants...
            uow.commit()
    """

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.rollback()

    def commit(self) -> None:
        """Commit the invocation"""
        self._commit()

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class SnapshotUnitOfWork(AbstractUnitOfWork):
    """
    In-memory Unit of Work built on participant snapshots.

    Not reentrant: entering while a previous unit is still open raises RuntimeError.
    """

    def __init__(self, *, participants: Sequence[Snapshotable]) -> None:
        self.participants = tuple(participants)
        self._snapshots: Optional[list[Any]] = None
        self._committed = False

    def __enter__(self) -> SnapshotUnitOfWork:
        if self._snapshots is not None:
            raise RuntimeError('Unit of work already in progress')
        self._snapshots = [participant.snapshot() for participant in self.participants]
        self._committed = False
        return self

    def _commit(self) -> None:
        if self._snapshots is None:
            raise RuntimeError('Unit of work not started')
        self._committed = True

    def rollback(self) -> None:
        snapshots, self._snapshots = self._snapshots, None
        if snapshots is None or self._committed:
            return
        for participant, snapshot in zip(self.participants, snapshots, strict=True):
            participant.restore(snapshot)
