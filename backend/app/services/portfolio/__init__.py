"""Portfolio valuation services.

Point-in-time snapshots, stored and reconstructed value history, and
per-ticker position roll-ups.
"""

from .valuation_service import (
    PortfolioValuationService,
    aggregate_positions,
    build_portfolio_value_series,
    compute_portfolio_snapshot,
)

__all__ = [
    "PortfolioValuationService",
    "aggregate_positions",
    "build_portfolio_value_series",
    "compute_portfolio_snapshot",
]
