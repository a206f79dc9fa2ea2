from .portfolio_record import PortfolioRecordModel

__all__ = [
    "PortfolioRecordModel",
]
