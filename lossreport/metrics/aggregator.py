"""Cross-file summary metrics for the overview.

Only NEGATIVE_LOSS files feed the loss/volume totals and only
DEVIATION_REPORT files feed the deviation ranking; every other kind is
ignored. The loss time series is bucketed by each file's upload month,
since rows carry no date of their own.
"""

import math
from collections import defaultdict
from collections.abc import Iterable

from lossreport.logging.logger import Log
from lossreport.metrics.models import DashboardMetrics, DeviationEntry, LossPoint
from lossreport.numbers.normalizer import parse_number
from lossreport.registry.models import FileKind, FileRecord

DEFAULT_DEVIATION_LIMIT = 10


def aggregate(
    files: Iterable[FileRecord],
    limit: int = DEFAULT_DEVIATION_LIMIT,
) -> DashboardMetrics:
    """Compute DashboardMetrics from scratch for *files*."""
    municipalities: set[str] = set()
    directorates: set[str] = set()
    losses: list[float] = []
    volumes: list[float] = []
    loss_by_period: dict[str, list[float]] = defaultdict(list)
    deviations: list[tuple[float, DeviationEntry]] = []

    for record in files:
        if record.kind == FileKind.NEGATIVE_LOSS:
            period_key = record.period_key
            for row in record.rows:
                municipalities.add(row.get("Municipios") or "")
                loss = parse_number(row.get("Perda"))
                losses.append(loss)
                volumes.append(parse_number(row.get("VD")))
                loss_by_period[period_key].append(loss)
                directorate = row.get("Diretoria")
                if loss < 0 and directorate:
                    directorates.add(directorate)
        elif record.kind == FileKind.DEVIATION_REPORT:
            for row in record.rows:
                value = parse_number(row.get("IPDDesvio"))
                if value < 0:
                    deviations.append((value, _deviation_entry(row, record)))

    # fsum keeps the totals independent of file order.
    total_loss = math.fsum(losses)
    total_volume = math.fsum(volumes)
    deviations.sort(key=lambda item: item[0])
    return DashboardMetrics(
        municipality_count=len(municipalities),
        total_negative_loss=total_loss,
        total_distributed_volume=total_volume,
        average_loss_index_pct=format_loss_index(total_loss, total_volume),
        directorates_with_issues=frozenset(directorates),
        top_deviations=tuple(entry for _, entry in deviations[:limit]),
        loss_time_series=tuple(
            LossPoint(period_key=key, total_loss=math.fsum(loss_by_period[key]))
            for key in sorted(loss_by_period)
        ),
    )


def format_loss_index(total_loss: float, total_volume: float) -> str:
    """Loss as a percentage of distributed volume, "0%" without volume."""
    if total_volume > 0:
        return f"{total_loss / total_volume * 100:.2f}%"
    return "0%"


def _deviation_entry(row: dict[str, str | None], record: FileRecord) -> DeviationEntry:
    return DeviationEntry(
        diretoria=row.get("Diretoria") or "",
        gerencia=row.get("Gerencia") or "",
        localidade=row.get("Localidade") or "",
        ipd_desvio=row.get("IPDDesvio") or "",
        date=record.uploaded_at,
    )


class Aggregator:
    """Recomputes the overview metrics whenever the file set changes."""

    def __init__(self, limit: int = DEFAULT_DEVIATION_LIMIT) -> None:
        self._limit = limit

    def aggregate(self, files: Iterable[FileRecord]) -> DashboardMetrics:
        metrics = aggregate(files, limit=self._limit)
        Log.info(
            "Aggregated dashboard metrics",
            municipalities=metrics.municipality_count,
            loss_index=metrics.average_loss_index_pct,
            deviations=len(metrics.top_deviations),
        )
        return metrics
