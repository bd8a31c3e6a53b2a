"""Metrics endpoints for the dashboard.

Both endpoints read every stored movie row in a single query and
aggregate it in memory.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxoffice.api.dashboard import build_dashboard_view
from boxoffice.api.database import get_db
from boxoffice.api.schemas import DashboardView
from boxoffice.database.repositories import MovieRepository
from boxoffice.etl.aggregation import MetricsPayload, build_metrics
from boxoffice.etl.utils import setup_logger
from boxoffice.settings import settings

logger = setup_logger("api.metrics")

router = APIRouter(tags=["Metrics"])

STORE_UNAVAILABLE = "Metrics are unavailable: the database could not be read"


# =============================================================================
# HELPERS
# =============================================================================


def _load_metrics(db: Session) -> MetricsPayload:
    """Aggregate stored rows into the metrics payload.

    Raises:
        HTTPException: 503 if the store cannot be read.
    """
    try:
        rows = MovieRepository(db).fetch_metric_rows()
    except SQLAlchemyError as e:
        logger.error(f"Failed to read movies: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE,
        ) from e

    return build_metrics(rows, top_n=settings.etl.top_movies_limit)


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get(
    "/metrics",
    response_model=MetricsPayload,
    summary="Dashboard metrics",
    description="Deduplicated totals, grouped sums, top movies and box plots.",
)
def get_metrics(db: Annotated[Session, Depends(get_db)]) -> MetricsPayload:
    """Return the metrics payload.

    Args:
        db: Database session.

    Returns:
        Metrics payload (camelCase JSON).
    """
    return _load_metrics(db)


@router.get(
    "/dashboard",
    response_model=DashboardView,
    summary="Dashboard view",
    description="Formatted cards, chart series and top movies built from the metrics.",
)
def get_dashboard(db: Annotated[Session, Depends(get_db)]) -> DashboardView:
    """Return the dashboard render description.

    Args:
        db: Database session.

    Returns:
        Dashboard view.
    """
    return build_dashboard_view(_load_metrics(db))
