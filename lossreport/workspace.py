from lossreport.config.settings import Settings
from lossreport.export.models import ExportPayload
from lossreport.export.service import ExportService
from lossreport.ingestion.ingestor import Ingestor
from lossreport.metrics.aggregator import Aggregator
from lossreport.metrics.models import DashboardMetrics
from lossreport.registry.registry import FileRegistry
from lossreport.registry.storage.factory import BlobStoreFactory
from lossreport.table.collation.factory import CollatorFactory
from lossreport.table.engine import TableEngine
from lossreport.table.models import QueryResult, QueryState


class Workspace:
    """Wires registry, ingestion, metrics, table queries and export together.

    Holds no derived state: metrics and query results are recomputed from
    the registry snapshot on every call.
    """

    def __init__(
        self,
        registry: FileRegistry,
        ingestor: Ingestor,
        aggregator: Aggregator,
        table_engine: TableEngine,
        export_service: ExportService,
        default_page_size: int,
    ) -> None:
        self.registry = registry
        self.ingestor = ingestor
        self._aggregator = aggregator
        self._table_engine = table_engine
        self._export_service = export_service
        self._default_page_size = default_page_size

    def metrics(self) -> DashboardMetrics:
        return self._aggregator.aggregate(self.registry.files)

    def new_query_state(self) -> QueryState:
        return QueryState(page_size=self._default_page_size)

    def query(self, file_id: str, state: QueryState) -> QueryResult:
        record = self.registry.get(file_id)
        return self._table_engine.query(record.rows, state)

    def export(self, file_id: str | None, fmt: str) -> ExportPayload | None:
        record = self.registry.get(file_id) if file_id is not None else None
        return self._export_service.export(record, fmt)


def build_workspace(settings: Settings) -> Workspace:
    """Build a Workspace with the configured adapters and a loaded registry."""
    registry = FileRegistry(BlobStoreFactory.create(settings)).load()
    return Workspace(
        registry=registry,
        ingestor=Ingestor(registry, settings),
        aggregator=Aggregator(limit=settings.top_deviations_limit),
        table_engine=TableEngine(CollatorFactory.create(settings)),
        export_service=ExportService(settings),
        default_page_size=settings.default_page_size,
    )
