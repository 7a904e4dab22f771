# thermotreat/services/catalog.py
"""
Treater catalog matching.

The matcher is given the burner duty and retention volumes a design needs and
picks, from the standard catalog, the vessel with the lowest total duty
(required heat plus its own shell loss) that is both hot enough and big enough.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from loguru import logger

from thermotreat.services.geometry import internal_volume_bbl


@dataclass(frozen=True)
class CatalogOption:
    """A catalog row as the matcher sees it (ORM rows satisfy the same shape)."""

    type: str
    diameter: float
    length: float
    design_pressure: float
    min_heat_capacity: float
    id: Optional[int] = None
    notes: Optional[str] = None
    deleted: bool = False


class CatalogReader(Protocol):
    def find_candidate_treaters(
        self, min_heat_capacity: float, exclude_deleted: bool = True
    ) -> Sequence[CatalogOption]:
        """Options with min_heat_capacity >= the given duty,
        ordered by (min_heat_capacity, diameter) ascending."""
        ...


class InMemoryCatalog:
    """CatalogReader over a plain list; used by the CLI and tests."""

    def __init__(self, options: Iterable[CatalogOption]):
        self._options: List[CatalogOption] = list(options)

    def find_candidate_treaters(
        self, min_heat_capacity: float, exclude_deleted: bool = True
    ) -> List[CatalogOption]:
        rows = [
            o
            for o in self._options
            if o.min_heat_capacity >= min_heat_capacity
            and not (exclude_deleted and o.deleted)
        ]
        # sorted()는 안정 정렬: 동률이면 등록 순서 유지
        return sorted(rows, key=lambda o: (o.min_heat_capacity, o.diameter))


@dataclass(frozen=True)
class ScoredCandidate:
    option: CatalogOption
    internal_volume: float
    heat_loss: float
    total_heat: float


@dataclass(frozen=True)
class MatchResult:
    best: Optional[ScoredCandidate]
    feasible: List[ScoredCandidate] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.best is not None


def _num(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def treater_label(option: CatalogOption) -> str:
    kind = getattr(option.type, "value", option.type)
    return (
        f"Treater {kind} {_num(option.diameter)}ft - LSS {_num(option.length)} "
        f"- {_num(option.min_heat_capacity)} BTU/hr"
    )


class TreaterCatalogMatcher:
    def __init__(self, catalog: CatalogReader):
        self.catalog = catalog

    def match(
        self,
        heat_required: float,
        required_volumes: Sequence[float],
        heat_loss_fn: Callable[[float, float], float],
    ) -> MatchResult:
        """
        heat_loss_fn(diameter, length) -> shell loss of that candidate (BTU/hr).
        Returns MatchResult(best=None) when no option is feasible.
        """
        required_volume = max(required_volumes) if required_volumes else 0.0
        candidates = self.catalog.find_candidate_treaters(
            heat_required, exclude_deleted=True
        )

        feasible: List[ScoredCandidate] = []
        best: Optional[ScoredCandidate] = None

        for option in candidates:
            volume = internal_volume_bbl(option.diameter, option.length)
            if volume < required_volume:
                continue

            loss = heat_loss_fn(option.diameter, option.length)
            scored = ScoredCandidate(
                option=option,
                internal_volume=volume,
                heat_loss=loss,
                total_heat=heat_required + loss,
            )
            feasible.append(scored)

            # 엄격한 < 비교: 동률이면 카탈로그 순서상 앞선 후보 유지
            if best is None or scored.total_heat < best.total_heat:
                best = scored

        logger.debug(
            "catalog match: heat={:.1f} volume={:.3f} candidates={} feasible={}",
            heat_required,
            required_volume,
            len(candidates),
            len(feasible),
        )
        return MatchResult(best=best, feasible=feasible)
