"""Legacy data migration endpoint."""

from fastapi import APIRouter, Depends

from portfolio_cms.application.schemas import MigrationReportSchema, MigrationRunResponse
from portfolio_cms.application.services import MigrationRunner
from portfolio_cms.infrastructure.dependencies import get_migration_runner, require_owner

router = APIRouter(prefix="/migrations", tags=["Migrations"])


@router.post("/run", response_model=MigrationRunResponse, dependencies=[Depends(require_owner)])
async def run_migrations(
    runner: MigrationRunner = Depends(get_migration_runner),
) -> MigrationRunResponse:
    """Re-run the migration for every collection. Already migrated ones are no-ops."""
    results = await runner.run_all()
    return MigrationRunResponse(
        reports=[
            MigrationReportSchema(
                collection=report.collection.value,
                migrated=report.migrated,
                created=report.created,
                failed=report.failed,
                skipped_reason=report.skipped_reason,
                error=report.error,
            )
            for report in results.values()
        ]
    )
