"""Data providers: where pages of records come from."""

from .base import DataProvider, FetchFailure
from .memory import DataFrameProvider
from .artic import ArticProvider

__all__ = ["DataProvider", "FetchFailure", "DataFrameProvider", "ArticProvider"]
