"""Tests for BrowserState: async loading, stale responses, published params."""

import asyncio

import pytest

from paged_select.config import BrowserConfig
from paged_select.core.record import Record, RecordSet
from paged_select.dashboard.state import FETCH_ERROR_MESSAGE, BrowserState
from paged_select.provider.base import DataProvider, FetchFailure
from paged_select.provider.memory import DataFrameProvider


class GatedProvider(DataProvider):
    """Provider whose responses are released one page at a time."""

    columns = ("title",)

    def __init__(self, total=100):
        self.total = total
        self.gates: dict[int, asyncio.Event] = {}
        self.failures: set[int] = set()

    def gate(self, page):
        if page not in self.gates:
            self.gates[page] = asyncio.Event()
        return self.gates[page]

    async def fetch_page(self, page, page_size):
        await self.gate(page).wait()
        if page in self.failures:
            raise FetchFailure("boom", page=page)
        start = (page - 1) * page_size
        records = tuple(
            Record(id=i + 1, attributes={"title": f"Artwork {i + 1}"})
            for i in range(start, min(start + page_size, self.total))
        )
        return RecordSet(records=records, total_count=self.total, page=page, page_size=page_size)


class TestLoading:
    def test_start_loads_first_page(self, provider):
        state = BrowserState(provider)
        assert asyncio.run(state.start()) is True
        assert state.record_ids == list(range(1, 13))
        assert state.total_count == 100
        assert state.page_count == 9
        assert state.page_report == "Showing 1 to 12 of 100 entries"
        assert not state.has_previous
        assert state.has_next
        assert not state.loading
        assert list(state.records.columns) == ["title", "place_of_origin", "date_start"]

    def test_page_size_from_config(self, provider):
        state = BrowserState(provider, config=BrowserConfig(page_size=24))
        asyncio.run(state.start())
        assert len(state.record_ids) == 24

    def test_navigation(self, provider):
        state = BrowserState(provider)

        async def scenario():
            await state.start()
            await state.next_page()
            await state.next_page()
            assert state.current_page == 3
            await state.previous_page()
            assert state.record_ids[0] == 13
            await state.last_page()
            assert state.record_ids == [97, 98, 99, 100]
            assert not state.has_next
            await state.first_page()
            assert state.current_page == 1

        asyncio.run(scenario())

    def test_page_size_change(self, provider):
        state = BrowserState(provider)

        async def scenario():
            await state.go_to_page(3)
            await state.set_page_size(24)

        asyncio.run(scenario())
        assert state.page_size == 24
        assert state.offset == 24
        assert state.record_ids[0] == 25

    def test_navigation_issues_controller_requests(self, provider):
        state = BrowserState(provider)

        async def scenario():
            await state.start()
            generation = state.controller.generation
            await state.next_page()
            await state.last_page()
            await state.set_page_size(24)
            await state.reload()
            return generation

        generation = asyncio.run(scenario())
        latest = state.controller.latest_request
        assert state.controller.generation == generation + 4
        assert (latest.page, latest.page_size, latest.offset) == (5, 24, 96)
        assert (state.current_page, state.page_size, state.offset) == (5, 24, 96)
        assert state.record_ids[0] == 97

    def test_go_to_page_rejects_page_zero(self, provider):
        state = BrowserState(provider)
        with pytest.raises(ValueError, match="page"):
            asyncio.run(state.go_to_page(0))


class TestFetchFailure:
    def test_failure_keeps_page_and_selection(self, artwork_frame):
        provider = DataFrameProvider(artwork_frame, fail_pages={2})
        state = BrowserState(provider)

        async def scenario():
            await state.start()
            state.select_all_on_page()
            return await state.next_page()

        assert asyncio.run(scenario()) is False
        assert state.error_text == FETCH_ERROR_MESSAGE
        assert state.record_ids == list(range(1, 13))
        assert state.selected_count == 12
        assert not state.loading

    def test_reload_clears_error(self, artwork_frame):
        provider = DataFrameProvider(artwork_frame, fail_pages={1})
        state = BrowserState(provider)

        async def scenario():
            await state.start()
            assert state.error_text
            provider.fail_pages.clear()
            await state.reload()

        asyncio.run(scenario())
        assert state.error_text == ""
        assert state.record_ids[0] == 1


class TestStaleResponses:
    def test_late_page_two_is_discarded(self):
        provider = GatedProvider()
        state = BrowserState(provider)

        async def scenario():
            page2 = asyncio.ensure_future(state.go_to_page(2))
            await asyncio.sleep(0)
            page3 = asyncio.ensure_future(state.go_to_page(3))
            await asyncio.sleep(0)
            provider.gate(3).set()
            assert await page3 is True
            provider.gate(2).set()
            assert await page2 is False

        asyncio.run(scenario())
        assert state.current_page == 3
        assert state.record_ids[0] == 25
        assert not state.loading

    def test_stale_response_does_not_drain(self):
        provider = GatedProvider()
        state = BrowserState(provider)

        async def scenario():
            provider.gate(1).set()
            await state.start()
            state.request_spanning_selection(15)
            page2 = asyncio.ensure_future(state.go_to_page(2))
            await asyncio.sleep(0)
            page3 = asyncio.ensure_future(state.go_to_page(3))
            await asyncio.sleep(0)
            provider.gate(3).set()
            await page3
            provider.gate(2).set()
            await page2

        asyncio.run(scenario())
        assert state.selected_count == 15
        assert state.coordinator.store.ids == frozenset([*range(1, 13), 25, 26, 27])

    def test_stale_failure_is_ignored(self):
        provider = GatedProvider()
        provider.failures.add(2)
        state = BrowserState(provider)

        async def scenario():
            page2 = asyncio.ensure_future(state.go_to_page(2))
            await asyncio.sleep(0)
            page3 = asyncio.ensure_future(state.go_to_page(3))
            await asyncio.sleep(0)
            provider.gate(3).set()
            await page3
            provider.gate(2).set()
            await page2

        asyncio.run(scenario())
        assert state.error_text == ""
        assert state.current_page == 3


class TestSelectionCommands:
    def test_published_counters(self, provider):
        state = BrowserState(provider)
        asyncio.run(state.start())
        state.toggle_record(2)
        assert state.selected_ids_on_page == [2]
        assert state.selected_count == 1
        assert state.selected_label() == "Selected: 1 row"
        state.select_all_on_page()
        assert state.all_on_page_selected
        assert state.selected_label() == "Selected: 12 rows"
        state.clear_page()
        assert state.selected_count == 0

    def test_spanning_request_across_pages(self, provider):
        state = BrowserState(provider)

        async def scenario():
            await state.start()
            assert state.request_spanning_selection("20") is True
            assert state.selected_count == 12
            assert state.pending_remaining == 8
            assert state.status_text == "Selecting remaining rows (8 left)"
            await state.next_page()

        asyncio.run(scenario())
        assert state.selected_count == 20
        assert state.pending_remaining == 0
        assert state.selected_ids_on_page == list(range(13, 21))

    @pytest.mark.parametrize("raw", [0, "abc"])
    def test_invalid_request(self, provider, raw):
        state = BrowserState(provider)
        asyncio.run(state.start())
        assert state.request_spanning_selection(raw) is False
        assert state.selected_count == 0
        assert state.pending_remaining == 0
        assert state.status_text == "Enter number of rows to select across all pages"

    def test_set_page_selection_and_clear_all(self, provider):
        state = BrowserState(provider)
        asyncio.run(state.start())
        state.set_page_selection([1, 5])
        assert state.is_selected(5)
        state.clear_all()
        assert state.selected_count == 0
        assert state.selected_ids_on_page == []

    def test_param_watchers_fire(self, provider):
        state = BrowserState(provider)
        counts = []
        state.param.watch(lambda event: counts.append(event.new), "selected_count")
        asyncio.run(state.start())
        state.select_all_on_page()
        assert counts == [12]
