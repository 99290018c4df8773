"""Query/report package."""

from splitledger.queries.report import LedgerReporter

__all__ = ["LedgerReporter"]
