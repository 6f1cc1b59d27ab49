# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Iterable, Optional

import pendulum

from timbers.model.entry import Entry


class Predicate(ABC):
    @abstractmethod
    def include(self, entry: Entry) -> bool: ...

    def filter(self, entries: list[Entry]) -> list[Entry]:
        return [entry for entry in entries if self.include(entry)]


class And(Predicate):
    def __init__(self, predicates: Optional[list[Predicate]] = None) -> None:
        self.predicates: list[Predicate] = list(predicates or [])

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def include(self, entry: Entry) -> bool:
        return all(predicate.include(entry) for predicate in self.predicates)


class Or(Predicate):
    def __init__(self, predicates: Optional[list[Predicate]] = None) -> None:
        self.predicates: list[Predicate] = list(predicates or [])

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def include(self, entry: Entry) -> bool:
        return any(predicate.include(entry) for predicate in self.predicates)


class Not(Predicate):
    def __init__(self, predicate: Predicate) -> None:
        self.predicate = predicate

    def include(self, entry: Entry) -> bool:
        return not self.predicate.include(entry)


class CreatedSince(Predicate):
    """created_at at or after the cutoff."""

    def __init__(self, cutoff: pendulum.DateTime) -> None:
        self.cutoff = cutoff

    def include(self, entry: Entry) -> bool:
        return entry["created_at"] >= self.cutoff


class CreatedUntil(Predicate):
    """created_at at or before the cutoff."""

    def __init__(self, cutoff: pendulum.DateTime) -> None:
        self.cutoff = cutoff

    def include(self, entry: Entry) -> bool:
        return entry["created_at"] <= self.cutoff


class HasAnyTag(Predicate):
    def __init__(self, tags: Iterable[str]) -> None:
        self.tags = set(tags)

    def include(self, entry: Entry) -> bool:
        return any(tag in self.tags for tag in entry["tags"])


class TouchesCommits(Predicate):
    """At least one of the entry's commits is in the given set."""

    def __init__(self, shas: Iterable[str]) -> None:
        self.shas = set(shas)

    def include(self, entry: Entry) -> bool:
        return any(sha in self.shas for sha in entry["commits"])


class HasWorkItem(Predicate):
    def __init__(self, system: str, id: Optional[str] = None) -> None:
        self.system = system
        self.id = id

    def include(self, entry: Entry) -> bool:
        for work_item in entry["work_items"]:
            if work_item["system"] != self.system:
                continue
            if self.id is None or work_item["id"] == self.id:
                return True
        return False
