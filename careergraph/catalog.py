"""Read-only position catalog consumed by the scoring and layout stages."""

from __future__ import annotations

import json
import logging
import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

PositionId = str

DEFAULT_CATALOG_PATH = Path(__file__).with_name("data") / "positions.json"


class CatalogError(ValueError):
    """Raised when a catalog source cannot be interpreted as position records."""


class MissingCatalogEntry(KeyError):
    """Raised when an identifier is not present in the catalog."""

    def __init__(self, position_id: str):
        super().__init__(position_id)
        self.position_id = position_id

    def __str__(self) -> str:
        return f"unknown position '{self.position_id}'"


def coerce_salary(value: object) -> Optional[float]:
    """Return ``value`` as a non-negative float, or ``None`` when unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(result) or result < 0.0:
        return None
    return result


@dataclass(frozen=True)
class Position:
    """Single catalog entry."""

    id: PositionId
    title: str
    level: str
    pillar: str
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    requirements: Tuple[str, ...] = ()
    connections: Tuple[PositionId, ...] = ()
    transferable_skills: Tuple[str, ...] = ()
    description: str = ""

    @property
    def salary_average(self) -> float:
        """Mean of the usable salary bounds (0.0 when neither is usable)."""

        bounds = [value for value in (self.salary_min, self.salary_max) if value is not None]
        if not bounds:
            return 0.0
        return sum(bounds) / len(bounds)

    @property
    def salary_bounds(self) -> Tuple[float, float]:
        """``(low, high)`` band; a missing bound falls back to the average."""

        average = self.salary_average
        low = self.salary_min if self.salary_min is not None else average
        high = self.salary_max if self.salary_max is not None else average
        return low, high

    @property
    def has_valid_salary_range(self) -> bool:
        if self.salary_min is None or self.salary_max is None:
            return False
        return self.salary_min <= self.salary_max

    def searchable_text(self) -> List[str]:
        return [self.title, self.pillar, self.level, self.description, *self.requirements]


_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "salary_min": ("salary_min", "salaryMin"),
    "salary_max": ("salary_max", "salaryMax"),
    "transferable_skills": ("transferable_skills", "transferableSkills"),
}


def _lookup(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    for key in _FIELD_ALIASES.get(name, (name,)):
        if key in record:
            return record[key]
    return default


def _string_tuple(value: object) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(item) for item in value)
    return ()


def position_from_record(position_id: str, record: Mapping[str, Any]) -> Position:
    """Build a :class:`Position` from a JSON-like record."""

    if not isinstance(record, Mapping):
        raise CatalogError(f"record for '{position_id}' must be an object, got {type(record).__name__}")

    raw_min = _lookup(record, "salary_min")
    raw_max = _lookup(record, "salary_max")
    salary_min = coerce_salary(raw_min)
    salary_max = coerce_salary(raw_max)
    if (raw_min is not None and salary_min is None) or (raw_max is not None and salary_max is None):
        logger.warning(
            "Position %s has unusable salary bounds (%r, %r); using the remaining values",
            position_id,
            raw_min,
            raw_max,
        )
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        logger.warning(
            "Position %s has salary_min > salary_max (%s > %s); averaging as given",
            position_id,
            salary_min,
            salary_max,
        )

    return Position(
        id=position_id,
        title=str(record.get("title", position_id)),
        level=str(record.get("level", "")),
        pillar=str(record.get("pillar", "")),
        salary_min=salary_min,
        salary_max=salary_max,
        requirements=_string_tuple(record.get("requirements")),
        connections=_string_tuple(record.get("connections")),
        transferable_skills=_string_tuple(_lookup(record, "transferable_skills")),
        description=str(record.get("description") or ""),
    )


class Catalog(Mapping[PositionId, Position]):
    """Immutable id → :class:`Position` mapping preserving source order."""

    def __init__(self, positions: Optional[Mapping[PositionId, Position]] = None) -> None:
        self._positions: Dict[PositionId, Position] = dict(positions or {})
        self._order: Dict[PositionId, int] = {pid: idx for idx, pid in enumerate(self._positions)}

    @classmethod
    def from_positions(cls, positions: Sequence[Position]) -> "Catalog":
        mapping: Dict[PositionId, Position] = {}
        for position in positions:
            if position.id in mapping:
                logger.warning("Duplicate position id %s; keeping the first record", position.id)
                continue
            mapping[position.id] = position
        return cls(mapping)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Catalog":
        if not isinstance(data, Mapping):
            raise CatalogError(f"catalog must be an object of records, got {type(data).__name__}")
        positions = [position_from_record(str(key), record) for key, record in data.items()]
        catalog = cls.from_positions(positions)
        catalog.log_dangling_connections()
        logger.info("Loaded catalog with %d positions", len(catalog))
        return catalog

    def __getitem__(self, position_id: PositionId) -> Position:
        return self._positions[position_id]

    def __iter__(self) -> Iterator[PositionId]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"Catalog({len(self._positions)} positions)"

    def require(self, position_id: PositionId) -> Position:
        try:
            return self._positions[position_id]
        except KeyError:
            raise MissingCatalogEntry(position_id) from None

    def index_of(self, position_id: PositionId) -> int:
        """Catalog iteration index, used as the canonical ordering key."""

        try:
            return self._order[position_id]
        except KeyError:
            raise MissingCatalogEntry(position_id) from None

    def canonical_order(self, ids: Union[Sequence[PositionId], set, frozenset]) -> List[PositionId]:
        """Known ids from ``ids`` in catalog order; unknown ids are logged and dropped."""

        known: List[PositionId] = []
        seen = set()
        for position_id in ids:
            if position_id in seen:
                continue
            seen.add(position_id)
            if position_id in self._positions:
                known.append(position_id)
            else:
                logger.warning("Dropping unknown position id %r", position_id)
        return sorted(known, key=self.index_of)

    def pillars(self) -> List[str]:
        """Distinct pillars in first-appearance order."""

        return list(dict.fromkeys(position.pillar for position in self._positions.values()))

    def dangling_connections(self) -> List[Tuple[PositionId, PositionId]]:
        return [
            (position.id, target)
            for position in self._positions.values()
            for target in position.connections
            if target not in self._positions
        ]

    def log_dangling_connections(self) -> None:
        for source, target in self.dangling_connections():
            logger.warning("Position %s lists unknown connection %s; ignoring it", source, target)

    def filter_by_salary(self, minimum: Optional[float] = None, maximum: Optional[float] = None) -> List[Position]:
        """Positions whose salary band lies inside ``[minimum, maximum]``."""

        selected: List[Position] = []
        for position in self._positions.values():
            low, high = position.salary_bounds
            if minimum is not None and low < minimum:
                continue
            if maximum is not None and high > maximum:
                continue
            selected.append(position)
        return selected


def load_catalog(path: Union[str, Path, None] = None) -> Catalog:
    """Load a catalog from a JSON object file (defaults to the bundled sample)."""

    source = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    logger.info("Reading catalog from %s", source)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{source}: invalid JSON ({exc})") from exc
    return Catalog.from_mapping(data)


__all__ = [
    "Catalog",
    "CatalogError",
    "DEFAULT_CATALOG_PATH",
    "MissingCatalogEntry",
    "Position",
    "PositionId",
    "coerce_salary",
    "load_catalog",
    "position_from_record",
]
