from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DeviationEntry:
    """One negative loss-index deviation surfaced on the overview."""

    diretoria: str
    gerencia: str
    localidade: str
    ipd_desvio: str  # raw cell, e.g. "-20,00"
    date: datetime


@dataclass(frozen=True)
class LossPoint:
    """Total loss for one upload month ("YYYY-MM")."""

    period_key: str
    total_loss: float


@dataclass(frozen=True)
class DashboardMetrics:
    """Overview figures derived from the whole registry."""

    municipality_count: int = 0
    total_negative_loss: float = 0.0
    total_distributed_volume: float = 0.0
    average_loss_index_pct: str = "0%"
    directorates_with_issues: frozenset[str] = field(default_factory=frozenset)
    top_deviations: tuple[DeviationEntry, ...] = ()
    loss_time_series: tuple[LossPoint, ...] = ()
