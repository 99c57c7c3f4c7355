"""housing_equity package.

Contains the tabular aggregation helpers behind the NC housing affordability
and equity dashboards (rollups, denial rates, income brackets, display
formatting) and a small pipeline that turns raw HMDA loan application CSVs
into chart-ready Gold tables.

Architecture:
- Library functions operate on plain lists of dict records
- Dask/pandas DataFrames are used for the Gold tables and CSV ingest
- Pydantic models validate cleaned records and Gold rows
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
