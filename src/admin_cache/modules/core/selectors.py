"""Derived views over cached page content.

Every view is a pure function of ``Page.content`` and some parameters.
``create_selector`` wraps such a function so that the same content
object together with equal parameters yields the very same result
object: the UI can compare by identity to decide whether to re-render.

Parameters must be hashable (frozen pydantic filter models, tuples,
strings, numbers).
"""

from __future__ import annotations

import unicodedata
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from admin_cache.config import settings

T = TypeVar("T")
R = TypeVar("R")

SORT_ORDERS = ("asc", "desc")


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------


class Selector(Generic[R]):
    """Memoized view keyed by source identity plus parameter equality.

    Holds up to ``maxsize`` results (least recently used evicted first);
    each entry keeps a reference to its source so an id can never be
    reused by a different object while the entry is alive.
    """

    def __init__(self, compute: Callable[..., R], maxsize: Optional[int] = None) -> None:
        self._compute = compute
        self._maxsize = maxsize or settings.SELECTOR_CACHE_SIZE
        self._entries: "OrderedDict[Tuple[int, Tuple[Any, ...]], Tuple[Any, R]]" = OrderedDict()
        self.recomputations = 0

    def __call__(self, source: Any, *params: Any) -> R:
        key = (id(source), params)
        entry = self._entries.get(key)
        if entry is not None and entry[0] is source:
            self._entries.move_to_end(key)
            return entry[1]

        result = self._compute(source, *params)
        self.recomputations += 1
        self._entries[key] = (source, result)
        self._entries.move_to_end(key)
        while len(self._entries) > self._maxsize:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()


def create_selector(compute: Callable[..., R], maxsize: Optional[int] = None) -> Selector[R]:
    return Selector(compute, maxsize)


# ---------------------------------------------------------------------------
# Field access and value normalisation
# ---------------------------------------------------------------------------


def get_field(entity: Any, path: str) -> Any:
    """Read ``path`` (dotted for nested models) from a model or mapping."""
    value = entity
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def to_millis(value: Any) -> Optional[int]:
    """Epoch milliseconds for a date, datetime or ISO string; naive = UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, date):
        return to_millis(datetime(value.year, value.month, value.day))
    raise TypeError(f"Cannot interpret {value!r} as a date.")


def collation_key(text: str) -> Tuple[str, str]:
    """Locale-aware ordering key: accent- and case-insensitive first."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _sort_key(value: Any) -> Tuple[int, Any]:
    # bool before numbers: bool is an int subclass
    if isinstance(value, bool):
        return 0, int(value)
    if isinstance(value, (int, float, Decimal)):
        return 1, value
    if isinstance(value, (date, datetime)):
        return 2, to_millis(value)
    return 3, collation_key(str(value))


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldEquals:
    """Equality on one field; a ``None`` value matches everything."""

    field: str
    value: Any = None

    def matches(self, entity: Any) -> bool:
        if self.value is None:
            return True
        return get_field(entity, self.field) == self.value


@dataclass(frozen=True)
class TextSearch:
    """Case-insensitive substring match against any of ``fields``."""

    term: Optional[str]
    fields: Tuple[str, ...]

    def matches(self, entity: Any) -> bool:
        if not self.term or not self.term.strip():
            return True
        needle = self.term.strip().casefold()
        for field in self.fields:
            value = get_field(entity, field)
            if value is not None and needle in str(value).casefold():
                return True
        return False


@dataclass(frozen=True)
class DateRange:
    """Inclusive date containment; open at either end when a bound is ``None``.

    Entities without a value for ``field`` are not excluded.
    """

    field: str
    start: Optional[date] = None
    end: Optional[date] = None

    def matches(self, entity: Any) -> bool:
        if self.start is None and self.end is None:
            return True
        value = to_millis(get_field(entity, self.field))
        if value is None:
            return True
        if self.start is not None and value < to_millis(self.start):
            return False
        if self.end is not None and value > to_millis(self.end):
            return False
        return True


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric containment; open at either end when a bound is ``None``."""

    field: str
    minimum: Optional[Decimal] = None
    maximum: Optional[Decimal] = None

    def matches(self, entity: Any) -> bool:
        if self.minimum is None and self.maximum is None:
            return True
        value = get_field(entity, self.field)
        if value is None:
            return False
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True


@dataclass(frozen=True)
class FilterSpec:
    """Conjunction of independent predicates."""

    predicates: Tuple[Any, ...] = ()

    def matches(self, entity: Any) -> bool:
        return all(predicate.matches(entity) for predicate in self.predicates)

    @property
    def is_open(self) -> bool:
        return not self.predicates


# ---------------------------------------------------------------------------
# View computations
# ---------------------------------------------------------------------------


def filter_entities(content: Sequence[T], spec: Optional[FilterSpec]) -> Tuple[T, ...]:
    if spec is None or spec.is_open:
        return tuple(content)
    return tuple(entity for entity in content if spec.matches(entity))


def sort_entities(content: Sequence[T], key: str, order: str = "asc") -> Tuple[T, ...]:
    """Stable sort on ``key``; missing values always go last."""
    if order not in SORT_ORDERS:
        raise ValueError(f"Sort order must be one of {SORT_ORDERS}.")
    present = [entity for entity in content if get_field(entity, key) is not None]
    missing = [entity for entity in content if get_field(entity, key) is None]
    present.sort(key=lambda entity: _sort_key(get_field(entity, key)), reverse=order == "desc")
    return tuple(present + missing)


def group_entities(content: Iterable[T], key: str) -> Dict[Any, Tuple[T, ...]]:
    """Partition by ``key`` value; groups keep content order."""
    groups: Dict[Any, list] = {}
    for entity in content:
        groups.setdefault(get_field(entity, key), []).append(entity)
    return {value: tuple(members) for value, members in groups.items()}


def distinct_values(content: Iterable[T], key: str) -> Tuple[Any, ...]:
    """Distinct non-null values of ``key`` in first-seen order."""
    return tuple(value for value in group_entities(content, key) if value is not None)
