import sys
from pathlib import Path

from lossreport.config.settings import Settings
from lossreport.database.connection import close_pool, init_pool
from lossreport.ingestion.exceptions import IngestionError
from lossreport.logging.logger import Log
from lossreport.workspace import build_workspace


def main(argv: list[str] | None = None) -> int:
    """Entry point: load registry -> ingest given files -> log dashboard summary."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info("Starting lossreport", env=settings.app_env, storage=settings.storage_backend)
    uses_database = settings.storage_backend.lower() == "postgres"
    if uses_database:
        init_pool(settings)

    failures = 0
    try:
        workspace = build_workspace(settings)
        for arg in argv if argv is not None else sys.argv[1:]:
            path = Path(arg)
            try:
                workspace.ingestor.ingest(path.name, path.read_bytes())
            except (IngestionError, OSError) as exc:
                Log.error(f"Skipping {path}: {exc}")
                failures += 1

        metrics = workspace.metrics()
        Log.info(
            "Dashboard summary",
            files=len(workspace.registry),
            municipalities=metrics.municipality_count,
            total_loss=f"{metrics.total_negative_loss:.2f}",
            distributed_volume=f"{metrics.total_distributed_volume:.2f}",
            loss_index=metrics.average_loss_index_pct,
            directorates_with_issues=",".join(sorted(metrics.directorates_with_issues)) or "-",
        )
    finally:
        if uses_database:
            close_pool()
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
