"""Services layer - business logic over the repositories.

This module is organized into domain-based subpackages:
- dividends/: Pure income calculators (aggregation, growth, projections, trailing series)
- portfolio/: Portfolio valuation and value history
- repositories/: Data access layer

Request-scoped services (DividendService, HoldingService, ProjectionService,
DashboardService) take a Session and compose the two.

Common imports for convenience:
    from app.services import NotFoundError, DividendRepository
"""

# Re-export commonly used components for convenience
from app.services.repositories import (
    DividendRepository,
    DuplicateError,
    HoldingRepository,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    # Repositories
    "DividendRepository",
    "DuplicateError",
    "HoldingRepository",
    "NotFoundError",
    "RepositoryError",
]
