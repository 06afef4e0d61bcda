"""Tests for DataFrameProvider and ArticProvider."""

import asyncio

import httpx
import pandas as pd
import pytest

from paged_select.config import BrowserConfig
from paged_select.provider.artic import ArticProvider
from paged_select.provider.base import FetchFailure
from paged_select.provider.memory import DataFrameProvider


class TestDataFrameProvider:
    def test_first_page(self, provider):
        rs = asyncio.run(provider.fetch_page(1, 12))
        assert rs.ids == list(range(1, 13))
        assert rs.total_count == 100
        assert rs.records[0].get("title") == "Artwork 1"

    def test_last_partial_page(self, provider):
        rs = asyncio.run(provider.fetch_page(9, 12))
        assert rs.ids == [97, 98, 99, 100]
        assert rs.is_last_page

    def test_past_the_end_is_empty(self, provider):
        rs = asyncio.run(provider.fetch_page(20, 12))
        assert len(rs) == 0
        assert rs.total_count == 100

    def test_nan_becomes_none(self):
        frame = pd.DataFrame({"title": ["a", None]}, index=[1, 2])
        rs = asyncio.run(DataFrameProvider(frame).fetch_page(1, 10))
        assert rs.records[1].get("title") is None

    def test_fail_pages(self, artwork_frame):
        provider = DataFrameProvider(artwork_frame, fail_pages={2})
        with pytest.raises(FetchFailure) as excinfo:
            asyncio.run(provider.fetch_page(2, 12))
        assert excinfo.value.page == 2

    def test_invalid_args(self, provider):
        with pytest.raises(ValueError, match="page_size"):
            asyncio.run(provider.fetch_page(1, 0))

    def test_duplicate_index_rejected(self):
        frame = pd.DataFrame({"title": ["a", "b"]}, index=[1, 1])
        with pytest.raises(ValueError, match="unique"):
            DataFrameProvider(frame)

    def test_non_dataframe_rejected(self):
        with pytest.raises(TypeError, match="DataFrame"):
            DataFrameProvider([1, 2, 3])

    def test_columns_and_calls(self, provider):
        asyncio.run(provider.fetch_page(3, 5))
        assert provider.columns == ("title", "place_of_origin", "date_start")
        assert provider.calls == [(3, 5)]

    def test_from_csv(self, tmp_path, artwork_frame):
        path = tmp_path / "artworks.csv"
        artwork_frame.reset_index().to_csv(path, index=False)
        provider = DataFrameProvider.from_csv(path)
        assert provider.total_count == 100


def _artic(handler, **config):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ArticProvider(BrowserConfig(**config), client=client)


def _artworks_payload(page, limit, total):
    start = (page - 1) * limit
    ids = range(start + 1, min(start + limit, total) + 1)
    return {
        "pagination": {"total": total, "limit": limit, "current_page": page},
        "data": [
            {"id": i, "title": f"Artwork {i}", "place_of_origin": "France",
             "artist_display": "Unknown", "inscriptions": None,
             "date_start": 1900, "date_end": 1901}
            for i in ids
        ],
    }


class TestArticProvider:
    def test_query_params_and_parsing(self):
        seen = []

        def handler(request):
            seen.append(request.url)
            page = int(request.url.params["page"])
            limit = int(request.url.params["limit"])
            return httpx.Response(200, json=_artworks_payload(page, limit, 30))

        provider = _artic(handler)
        rs = asyncio.run(provider.fetch_page(2, 12))

        assert seen[0].params["page"] == "2"
        assert seen[0].params["limit"] == "12"
        assert seen[0].params["fields"].split(",")[0] == "id"
        assert rs.ids == list(range(13, 25))
        assert rs.total_count == 30
        assert rs.records[0].get("title") == "Artwork 13"
        assert "id" not in rs.records[0].attributes

    def test_missing_keys_degrade_to_empty(self):
        provider = _artic(lambda request: httpx.Response(200, json={}))
        rs = asyncio.run(provider.fetch_page(1, 12))
        assert len(rs) == 0
        assert rs.total_count == 0

    def test_http_error_status(self):
        provider = _artic(lambda request: httpx.Response(503, text="down"))
        with pytest.raises(FetchFailure, match="503"):
            asyncio.run(provider.fetch_page(1, 12))

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = _artic(handler)
        with pytest.raises(FetchFailure, match="failed"):
            asyncio.run(provider.fetch_page(1, 12))

    def test_malformed_json(self):
        provider = _artic(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(FetchFailure, match="Malformed"):
            asyncio.run(provider.fetch_page(1, 12))

    def test_record_without_id(self):
        payload = {"pagination": {"total": 1}, "data": [{"title": "x"}]}
        provider = _artic(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(FetchFailure, match="without id"):
            asyncio.run(provider.fetch_page(1, 12))

    def test_custom_api_url(self):
        urls = []

        def handler(request):
            urls.append(str(request.url))
            return httpx.Response(200, json=_artworks_payload(1, 5, 5))

        provider = _artic(handler, api_url="https://example.org/records")
        asyncio.run(provider.fetch_page(1, 5))
        assert urls[0].startswith("https://example.org/records?")

    def test_injected_client_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={}),
        ))
        provider = ArticProvider(client=client)
        asyncio.run(provider.aclose())
        assert not client.is_closed
