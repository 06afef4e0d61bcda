"""Shared test fixtures for paged-select."""

import pandas as pd
import pytest

from paged_select.core.record import Record, RecordSet
from paged_select.provider.memory import DataFrameProvider


def make_page(page, page_size, total, first_id=1):
    """RecordSet for ``page`` of a dataset with IDs first_id..first_id+total-1."""
    start = (page - 1) * page_size
    stop = min(start + page_size, total)
    records = tuple(
        Record(id=first_id + i, attributes={"title": f"Artwork {first_id + i}"})
        for i in range(start, stop)
    )
    return RecordSet(records=records, total_count=total, page=page, page_size=page_size)


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def small_page():
    """4-record page of a 10-record dataset."""
    return make_page(1, 4, 10)


@pytest.fixture
def artwork_frame():
    """100 artworks indexed by id (1..100)."""
    ids = list(range(1, 101))
    return pd.DataFrame(
        {
            "title": [f"Artwork {i}" for i in ids],
            "place_of_origin": ["France" if i % 2 else "Japan" for i in ids],
            "date_start": [1800 + i for i in ids],
        },
        index=pd.Index(ids, name="id"),
    )


@pytest.fixture
def provider(artwork_frame):
    return DataFrameProvider(artwork_frame)
