"""Engine tests over the in-memory document store.

These cover tenant isolation, pagination, search across joins and the
tolerance for unresolvable parent references, without a database.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync

from tenant_events.domain import TenantContext
from tenant_events.domain.errors import StoreUnavailableError
from tenant_events.query.engine import QueryEngine
from tenant_events.query.executor import total_pages
from tenant_events.query.filters import (
    EventFilter,
    EventSpeakersFilter,
    ScheduleFilter,
    SpeakerFilter,
)
from tenant_events.query.specs import EVENT_SCHEDULE_SPEC, EVENT_SPEC, SPEAKER_SPEC
from tenant_events.stores.memory_store import MemoryQueryStore

from conftest import BASE_TIME, TENANT_B


def run(engine, spec, context, filters):
    return async_to_sync(engine.list)(spec, context, filters)


class TestTotalPages:
    @pytest.mark.parametrize(
        "total, limit, expected", [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3)]
    )
    def test_total_pages(self, total, limit, expected):
        assert total_pages(total, limit) == expected


class TestTenantIsolation:
    def test_other_tenants_rows_are_invisible(
        self, memory_engine, context, add_schedule_doc, add_event_doc
    ):
        add_schedule_doc(title="Ours")
        add_schedule_doc(tenant_id=TENANT_B, title="Theirs")
        add_event_doc(tenant_id=TENANT_B)

        schedules = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter())
        events = run(memory_engine, EVENT_SPEC, context, EventFilter())

        assert [s.title for s in schedules.items] == ["Ours"]
        assert all(s.tenant_id == context.tenant_id for s in schedules.items)
        assert events.total == 0

    def test_foreign_tenant_filter_gives_empty_page(self, memory_engine, context, add_schedule_doc):
        """Asking for tenant B as tenant A returns nothing, not an error."""
        add_schedule_doc()
        add_schedule_doc(tenant_id=TENANT_B)

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(tenant_id=TENANT_B))

        assert page.items == ()
        assert page.total == 0
        assert page.total_pages == 1

    def test_joins_never_cross_tenants(
        self, memory_engine, context, add_schedule_doc, add_event_doc, add_speaker_doc
    ):
        foreign_event = add_event_doc(tenant_id=TENANT_B, title="Foreign event")
        foreign_speaker = add_speaker_doc(tenant_id=TENANT_B, name="Foreign speaker")
        add_schedule_doc(event_id=foreign_event["id"], speaker_ids=[foreign_speaker["id"]])

        (schedule,) = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter()).items

        assert schedule.event_title is None
        assert schedule.speakers == ()

    def test_search_cannot_hit_foreign_joined_rows(
        self, memory_engine, context, add_schedule_doc, add_speaker_doc
    ):
        foreign_speaker = add_speaker_doc(tenant_id=TENANT_B, bio="keynote legend")
        add_schedule_doc(speaker_ids=[foreign_speaker["id"]])

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(search="keynote"))

        assert page.total == 0


class TestPagination:
    def test_twenty_five_schedules_make_three_pages(self, memory_engine, context, add_schedule_doc):
        for index in range(25):
            add_schedule_doc(title=f"Slot {index:02d}", start_time=BASE_TIME + timedelta(hours=index))

        first = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter.from_params({"limit": "10"}))
        last = run(
            memory_engine,
            EVENT_SCHEDULE_SPEC,
            context,
            ScheduleFilter.from_params({"limit": "10", "page": "3"}),
        )

        assert (first.total, first.total_pages, len(first.items)) == (25, 3, 10)
        assert [s.title for s in first.items][:2] == ["Slot 00", "Slot 01"]
        assert (last.page, len(last.items)) == (3, 5)
        assert [s.title for s in last.items] == [f"Slot {i}" for i in range(20, 25)]

    def test_pages_partition_the_result(self, memory_engine, context, add_schedule_doc):
        """Pages are disjoint and cover every row, even when sort values tie."""
        ids = {add_schedule_doc()["id"] for _ in range(7)}

        seen = []
        for page_number in (1, 2, 3):
            page = run(
                memory_engine,
                EVENT_SCHEDULE_SPEC,
                context,
                ScheduleFilter.from_params({"limit": "3", "page": str(page_number)}),
            )
            seen.extend(s.id.value for s in page.items)

        assert len(seen) == len(ids)
        assert set(seen) == ids

    def test_page_past_the_end_is_empty(self, memory_engine, context, add_schedule_doc):
        add_schedule_doc()
        page = run(
            memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter.from_params({"page": "4"})
        )
        assert page.items == ()
        assert page.total == 1

    def test_listing_is_idempotent(self, memory_engine, context, add_schedule_doc, add_speaker_doc):
        speaker = add_speaker_doc(name="Ada")
        for index in range(4):
            add_schedule_doc(speaker_ids=[speaker["id"]], start_time=BASE_TIME + timedelta(minutes=index))

        filters = ScheduleFilter.from_params({"limit": "2", "search": "ada"})
        assert run(memory_engine, EVENT_SCHEDULE_SPEC, context, filters) == run(
            memory_engine, EVENT_SCHEDULE_SPEC, context, filters
        )


class TestScheduleEnrichment:
    def test_invalid_event_reference_is_still_listed(
        self, memory_engine, context, add_schedule_doc, add_event_doc
    ):
        event = add_event_doc(title="Platform Summit")
        add_schedule_doc(event_id=event["id"], start_time=BASE_TIME)
        add_schedule_doc(event_id="not-an-id", start_time=BASE_TIME + timedelta(hours=1))

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter())

        assert page.total == 2
        assert [s.event_title for s in page.items] == ["Platform Summit", None]
        assert page.items[1].event_id == "not-an-id"

    def test_uppercase_event_reference_resolves(
        self, memory_engine, context, add_schedule_doc, add_event_doc
    ):
        event = add_event_doc(title="Platform Summit")
        add_schedule_doc(event_id=event["id"].upper())

        (schedule,) = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter()).items

        assert schedule.event_title == "Platform Summit"

    def test_event_filters_match_uppercase_event_reference(
        self, memory_engine, context, add_schedule_doc, add_event_doc, add_speaker_doc
    ):
        """Filtering by event id agrees with the join on which schedules belong to it."""
        event = add_event_doc(title="Platform Summit")
        speaker = add_speaker_doc(name="Ada")
        add_schedule_doc(event_id=event["id"].upper(), speaker_ids=[speaker["id"]])
        add_schedule_doc(event_id="legacy-event-7")

        schedules = run(
            memory_engine,
            EVENT_SCHEDULE_SPEC,
            context,
            ScheduleFilter.from_params({"eventId": event["id"]}),
        )
        speakers = run(memory_engine, SPEAKER_SPEC, context, EventSpeakersFilter(event_id=event["id"]))

        assert [s.event_title for s in schedules.items] == ["Platform Summit"]
        assert [s.name for s in speakers.items] == ["Ada"]

    def test_speakers_keep_list_order_and_skip_missing(
        self, memory_engine, context, add_schedule_doc, add_speaker_doc
    ):
        zed = add_speaker_doc(name="Zed")
        amy = add_speaker_doc(name="Amy")
        add_schedule_doc(speaker_ids=[zed["id"], "ffffffffffffffffffffffff", amy["id"]])

        (schedule,) = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter()).items

        assert [s.name for s in schedule.speakers] == ["Zed", "Amy"]
        assert len(schedule.speaker_ids) == 3

    def test_scaffolding_is_not_exposed(self, memory_engine, context, add_schedule_doc, add_event_doc):
        event = add_event_doc()
        add_schedule_doc(event_id=event["id"])
        (schedule,) = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter()).items
        assert not hasattr(schedule, "event_key")
        assert not hasattr(schedule, "event")


class TestSearch:
    def test_search_finds_speaker_bio(
        self, memory_engine, context, add_schedule_doc, add_speaker_doc
    ):
        """A term only present in a joined speaker's bio still matches."""
        speaker = add_speaker_doc(name="Grace", bio="Gives the opening KEYNOTE every year")
        add_schedule_doc(title="Morning", speaker_ids=[speaker["id"]])
        add_schedule_doc(title="Afternoon")

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(search="keynote"))

        assert [s.title for s in page.items] == ["Morning"]
        assert page.total == 1

    def test_search_finds_parent_event_description(
        self, memory_engine, context, add_schedule_doc, add_event_doc
    ):
        event = add_event_doc(description="Hosted by the robotics guild")
        add_schedule_doc(event_id=event["id"])
        add_schedule_doc()

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(search="ROBOTICS"))

        assert page.total == 1

    def test_search_overrides_title_filter(self, memory_engine, context, add_schedule_doc):
        add_schedule_doc(title="Keynote: welcome")

        with_title = run(
            memory_engine,
            EVENT_SCHEDULE_SPEC,
            context,
            ScheduleFilter(search="keynote", title="does-not-match"),
        )
        title_only = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(title="does-not-match"))

        assert with_title.total == 1
        assert title_only.total == 0

    def test_search_input_is_literal(self, memory_engine, context, add_schedule_doc):
        add_schedule_doc(title="Intro to C++")
        add_schedule_doc(title="Intro to C")

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(search="c++"))

        assert [s.title for s in page.items] == ["Intro to C++"]

    def test_event_search_covers_locations(self, memory_engine, context, add_event_doc):
        add_event_doc(title="Harbour", locations=[{"name": "Dock 5", "address": "7 Quay Street"}])
        add_event_doc(title="Inland", locations=[{"name": "Barn", "address": "Farm Lane"}])

        page = run(memory_engine, EVENT_SPEC, context, EventFilter(search="quay"))

        assert [e.title for e in page.items] == ["Harbour"]


class TestFilters:
    def test_start_time_from_alone(self, memory_engine, context, add_schedule_doc):
        add_schedule_doc(title="Early", start_time=BASE_TIME - timedelta(days=1))
        add_schedule_doc(title="On time", start_time=BASE_TIME)
        add_schedule_doc(title="Late", start_time=BASE_TIME + timedelta(days=1))

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(start_time_from=BASE_TIME))

        assert [s.title for s in page.items] == ["On time", "Late"]

    def test_speaker_filter_matches_membership(
        self, memory_engine, context, add_schedule_doc, add_speaker_doc
    ):
        speaker = add_speaker_doc()
        add_schedule_doc(title="With", speaker_ids=[add_speaker_doc()["id"], speaker["id"]])
        add_schedule_doc(title="Without")

        page = run(memory_engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(speaker_id=speaker["id"]))

        assert [s.title for s in page.items] == ["With"]

    def test_event_participant_range_and_user(self, memory_engine, context, add_event_doc):
        user_id = "aaaaaaaaaaaaaaaaaaaaaaaa"
        add_event_doc(title="Small", number_of_participants=5, created_by=user_id)
        add_event_doc(title="Large", number_of_participants=500, updated_by=user_id)
        add_event_doc(title="Mid", number_of_participants=50)

        ranged = run(memory_engine, EVENT_SPEC, context, EventFilter(min_participants=10))
        by_user = run(memory_engine, EVENT_SPEC, context, EventFilter(user_id=user_id))

        assert sorted(e.title for e in ranged.items) == ["Large", "Mid"]
        assert sorted(e.title for e in by_user.items) == ["Large", "Small"]


class TestSpeakerListings:
    def test_speakers_of_an_event(
        self, memory_engine, context, add_schedule_doc, add_speaker_doc, add_event_doc
    ):
        event = add_event_doc()
        ada = add_speaker_doc(name="Ada", company="Acme")
        bob = add_speaker_doc(name="Bob", company="Globex")
        add_speaker_doc(name="Cy")
        add_schedule_doc(event_id=event["id"], speaker_ids=[bob["id"], ada["id"]])
        add_schedule_doc(event_id=event["id"], speaker_ids=[ada["id"]])

        page = run(memory_engine, SPEAKER_SPEC, context, EventSpeakersFilter(event_id=event["id"]))
        searched = run(
            memory_engine,
            SPEAKER_SPEC,
            context,
            EventSpeakersFilter(event_id=event["id"], search="globex"),
        )

        assert [s.name for s in page.items] == ["Ada", "Bob"]
        assert page.total == 2
        assert [s.name for s in searched.items] == ["Bob"]

    def test_speakers_sorted_by_name(self, memory_engine, context, add_speaker_doc):
        for name in ("Moe", "Al", "Zoe"):
            add_speaker_doc(name=name)
        page = run(memory_engine, SPEAKER_SPEC, context, SpeakerFilter())
        assert [s.name for s in page.items] == ["Al", "Moe", "Zoe"]


class TestStoreFailure:
    def test_store_failure_is_propagated(self, collections, context, caplog):
        class BrokenStore(MemoryQueryStore):
            async def count(self, plan):
                raise StoreUnavailableError(plan.entity)

        engine = QueryEngine(BrokenStore(collections))
        with pytest.raises(StoreUnavailableError):
            run(engine, EVENT_SCHEDULE_SPEC, context, ScheduleFilter(title="secret words"))

        assert "event_schedule" in caplog.text
        assert "secret words" not in caplog.text

    def test_detail_lookup_misses_other_tenant(self, memory_engine, add_event_doc):
        event = add_event_doc(tenant_id=TENANT_B)
        found = async_to_sync(memory_engine.get)(EVENT_SPEC, TenantContext(tenant_id="tenant-a"), event["id"])
        assert found is None

    def test_detail_lookup_failure_is_logged(self, collections, context, caplog):
        class BrokenStore(MemoryQueryStore):
            async def fetch(self, plan):
                raise StoreUnavailableError(plan.entity)

        engine = QueryEngine(BrokenStore(collections))
        with pytest.raises(StoreUnavailableError):
            async_to_sync(engine.get)(EVENT_SPEC, context, "a" * 24)

        assert "Store lookup failed for event" in caplog.text
        assert "tenant=tenant-a" in caplog.text
