"""Declarative filtering over a Log."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from datetime import datetime

from .models import Entry, Level, Log, Pid


@dataclass(frozen=True, slots=True)
class Predicates:
    """Optional conditions on entry fields; unset (None) fields match everything."""

    level: Level | None = None
    pid: Pid | None = None
    component: str | None = None
    hostname: str | None = None
    from_datetime: datetime | None = None  # inclusive
    to_datetime: datetime | None = None  # inclusive

    def matches(self, entry: Entry) -> bool:
        """Return True when the entry satisfies every set condition."""
        if self.level is not None and entry.level != self.level:
            return False
        if self.pid is not None and entry.pid != self.pid:
            return False
        if self.component is not None and entry.component != self.component:
            return False
        if self.hostname is not None and entry.hostname != self.hostname:
            return False
        if self.from_datetime is not None and entry.datetime < self.from_datetime:
            return False
        if self.to_datetime is not None and entry.datetime > self.to_datetime:
            return False
        return True


class Query:
    """Filter builder bound to a single Log.

    Each ``with_*`` call sets one condition (the last call for a field wins)
    and returns the query, so calls can be chained::

        errors = log.query().with_level(Level.ERROR).with_component("libstorage").to_log()

    Nothing is evaluated until :meth:`to_log` (or iteration). The source log
    is never modified.
    """

    def __init__(self, log: Log) -> None:
        self._log = log
        self._predicates = Predicates()

    @property
    def predicates(self) -> Predicates:
        return self._predicates

    def _set(self, **changes: object) -> Query:
        self._predicates = replace(self._predicates, **changes)
        return self

    def with_level(self, level: Level) -> Query:
        return self._set(level=level)

    def with_pid(self, pid: Pid) -> Query:
        return self._set(pid=pid)

    def with_component(self, component: str) -> Query:
        return self._set(component=component)

    def with_hostname(self, hostname: str) -> Query:
        return self._set(hostname=hostname)

    def from_datetime(self, dt: datetime) -> Query:
        return self._set(from_datetime=dt)

    def to_datetime(self, dt: datetime) -> Query:
        return self._set(to_datetime=dt)

    def __iter__(self) -> Iterator[Entry]:
        predicates = self._predicates
        return (e for e in self._log if predicates.matches(e))

    def to_log(self) -> Log:
        """Evaluate the query and return the matching entries as a new Log."""
        return Log(iter(self))
