from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from lossreport.metrics.aggregator import Aggregator, aggregate, format_loss_index
from lossreport.registry.models import FileKind, FileRecord, Row


def _make_record(
    kind: FileKind,
    rows: list[Row],
    file_id: str = "f1",
    uploaded_at: datetime | None = None,
) -> FileRecord:
    return FileRecord(
        id=file_id,
        name=f"{file_id}.csv",
        kind=kind,
        uploaded_at=uploaded_at or datetime(2024, 5, 10, tzinfo=timezone.utc),
        rows=tuple(rows),
    )


class TestNegativeLossTotals:
    def test_single_row_scenario(self) -> None:
        record = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Municipios": "A", "Perda": "-10,00", "VD": "100,00", "Diretoria": "D1"}],
        )

        metrics = aggregate([record])

        assert metrics.total_negative_loss == -10.0
        assert metrics.total_distributed_volume == 100.0
        assert metrics.average_loss_index_pct == "-10.00%"
        assert metrics.directorates_with_issues == frozenset({"D1"})
        assert metrics.municipality_count == 1

    def test_sums_every_row(self, negative_loss_rows: list[Row]) -> None:
        metrics = aggregate([_make_record(FileKind.NEGATIVE_LOSS, negative_loss_rows)])

        assert metrics.total_negative_loss == pytest.approx(-7.0)
        assert metrics.total_distributed_volume == pytest.approx(1150.0)
        assert metrics.municipality_count == 2

    def test_totals_do_not_depend_on_file_order(self) -> None:
        first = _make_record(FileKind.NEGATIVE_LOSS, [{"Perda": "0,10", "VD": "0,20"}], "a")
        second = _make_record(FileKind.NEGATIVE_LOSS, [{"Perda": "0,20", "VD": "0,10"}], "b")
        third = _make_record(FileKind.NEGATIVE_LOSS, [{"Perda": "-0,30", "VD": "1,00"}], "c")

        forward = aggregate([first, second, third])
        backward = aggregate([third, second, first])

        assert forward.total_negative_loss == backward.total_negative_loss
        assert forward.total_distributed_volume == backward.total_distributed_volume

    def test_only_negative_losses_flag_directorates(self, negative_loss_rows: list[Row]) -> None:
        metrics = aggregate([_make_record(FileKind.NEGATIVE_LOSS, negative_loss_rows)])

        # D2 has positive loss; the third row is negative but has no directorate
        assert metrics.directorates_with_issues == frozenset({"D1"})

    def test_empty_municipality_counts_as_member(self) -> None:
        record = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Municipios": "", "Perda": "1,00"}, {"Municipios": "A", "Perda": "1,00"}],
        )

        assert aggregate([record]).municipality_count == 2

    def test_malformed_cells_count_as_zero(self) -> None:
        record = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Municipios": "A", "Perda": "n/d", "VD": "10,00"}, {"Municipios": "B", "Perda": "-1,00"}],
        )

        metrics = aggregate([record])

        assert metrics.total_negative_loss == -1.0
        assert metrics.total_distributed_volume == 10.0

    @pytest.mark.parametrize(
        "kind",
        [
            FileKind.ANALYSIS,
            FileKind.DISTRIBUTED_VOLUME,
            FileKind.CONSUMED_VOLUME,
            FileKind.GENERIC,
        ],
    )
    def test_other_kinds_do_not_affect_totals(self, kind: FileKind) -> None:
        record = _make_record(kind, [{"Municipios": "A", "Perda": "-5,00", "VD": "10,00", "Diretoria": "D9"}])

        metrics = aggregate([record])

        assert metrics.total_negative_loss == 0.0
        assert metrics.total_distributed_volume == 0.0
        assert metrics.municipality_count == 0
        assert metrics.directorates_with_issues == frozenset()


class TestLossIndex:
    def test_zero_volume_gives_literal_zero_percent(self) -> None:
        record = _make_record(FileKind.NEGATIVE_LOSS, [{"Perda": "-50,00", "VD": "0"}])

        assert aggregate([record]).average_loss_index_pct == "0%"

    def test_formats_two_decimals(self) -> None:
        assert format_loss_index(1.0, 3.0) == "33.33%"

    def test_empty_registry(self) -> None:
        metrics = aggregate([])

        assert metrics.average_loss_index_pct == "0%"
        assert metrics.top_deviations == ()
        assert metrics.loss_time_series == ()


class TestTopDeviations:
    def test_keeps_negative_rows_most_negative_first(self) -> None:
        record = _make_record(
            FileKind.DEVIATION_REPORT,
            [
                {"Diretoria": "D1", "Gerencia": "G1", "Localidade": "L1", "IPDDesvio": "-5,00"},
                {"Diretoria": "D2", "Gerencia": "G2", "Localidade": "L2", "IPDDesvio": "-20,00"},
                {"Diretoria": "D3", "Gerencia": "G3", "Localidade": "L3", "IPDDesvio": "3,00"},
            ],
        )

        deviations = aggregate([record]).top_deviations

        assert [d.ipd_desvio for d in deviations] == ["-20,00", "-5,00"]
        assert deviations[0].localidade == "L2"
        assert deviations[0].date == record.uploaded_at

    def test_limits_to_ten_entries(self) -> None:
        rows = [{"IPDDesvio": f"-{i},00", "Localidade": f"L{i}"} for i in range(1, 16)]
        deviations = aggregate([_make_record(FileKind.DEVIATION_REPORT, rows)]).top_deviations

        assert len(deviations) == 10
        assert deviations[0].ipd_desvio == "-15,00"
        assert deviations[-1].ipd_desvio == "-6,00"

    def test_respects_custom_limit(self) -> None:
        rows = [{"IPDDesvio": f"-{i},00"} for i in range(1, 6)]

        deviations = aggregate([_make_record(FileKind.DEVIATION_REPORT, rows)], limit=2).top_deviations

        assert len(deviations) == 2

    def test_merges_entries_across_files(self) -> None:
        first = _make_record(FileKind.DEVIATION_REPORT, [{"IPDDesvio": "-1,00"}], "a")
        second = _make_record(FileKind.DEVIATION_REPORT, [{"IPDDesvio": "-9,00"}], "b")

        deviations = aggregate([first, second]).top_deviations

        assert [d.ipd_desvio for d in deviations] == ["-9,00", "-1,00"]

    def test_missing_columns_render_empty(self) -> None:
        record = _make_record(FileKind.DEVIATION_REPORT, [{"IPDDesvio": "-1,00"}])

        entry = aggregate([record]).top_deviations[0]

        assert entry.diretoria == ""
        assert entry.gerencia == ""


class TestLossTimeSeries:
    def test_buckets_by_upload_month_sorted(self) -> None:
        june = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Perda": "-1,00"}, {"Perda": "-2,00"}],
            "june",
            datetime(2024, 6, 3, tzinfo=timezone.utc),
        )
        may_a = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Perda": "-4,00"}],
            "may-a",
            datetime(2024, 5, 1, tzinfo=timezone.utc),
        )
        may_b = _make_record(
            FileKind.NEGATIVE_LOSS,
            [{"Perda": "1,00"}],
            "may-b",
            datetime(2024, 5, 31, tzinfo=timezone.utc),
        )

        series = aggregate([june, may_a, may_b]).loss_time_series

        assert [(p.period_key, p.total_loss) for p in series] == [
            ("2024-05", -3.0),
            ("2024-06", -3.0),
        ]


class TestAggregatorClass:
    def test_uses_configured_limit_and_logs(self) -> None:
        rows = [{"IPDDesvio": f"-{i},00"} for i in range(1, 6)]
        aggregator = Aggregator(limit=3)

        with patch("lossreport.metrics.aggregator.Log") as mock_log:
            metrics = aggregator.aggregate([_make_record(FileKind.DEVIATION_REPORT, rows)])

        assert len(metrics.top_deviations) == 3
        mock_log.info.assert_called_once()
