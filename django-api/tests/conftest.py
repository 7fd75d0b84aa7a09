"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from rest_framework.test import APIClient

from tenant_events import models as orm
from tenant_events.domain import EntityId, TenantContext
from tenant_events.query.engine import QueryEngine
from tenant_events.stores.memory_store import (
    MemoryEventStore,
    MemoryQueryStore,
    empty_collections,
)

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"
BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def new_id() -> str:
    return EntityId.generate().value


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def tenant_client(api_client: APIClient) -> APIClient:
    api_client.credentials(HTTP_X_TENANT_ID=TENANT_A, HTTP_X_USER_ID=new_id())
    return api_client


@pytest.fixture
def context() -> TenantContext:
    return TenantContext(tenant_id=TENANT_A)


@pytest.fixture
def other_context() -> TenantContext:
    return TenantContext(tenant_id=TENANT_B)


# In-memory documents


@pytest.fixture
def collections():
    return empty_collections()


@pytest.fixture
def memory_engine(collections) -> QueryEngine:
    return QueryEngine(MemoryQueryStore(collections))


@pytest.fixture
def memory_event_store(collections) -> MemoryEventStore:
    return MemoryEventStore(collections)


@pytest.fixture
def add_event_doc(collections):
    def add(tenant_id: str = TENANT_A, **overrides) -> dict:
        doc = {
            "id": new_id(),
            "tenant_id": tenant_id,
            "title": "Platform Summit",
            "description": "Annual platform engineering summit",
            "type": "CONFERENCE",
            "format": "IN_PERSON",
            "status": "PUBLISHED",
            "start_date": BASE_TIME,
            "end_date": BASE_TIME + timedelta(days=2),
            "locations": [{"name": "Main Hall", "address": "1 Harbour Road"}],
            "number_of_participants": 100,
            "currency": "EUR",
            "is_public": True,
            "created_by": None,
            "updated_by": None,
        }
        doc.update(overrides)
        collections["event"].append(doc)
        return doc

    return add


@pytest.fixture
def add_speaker_doc(collections):
    def add(tenant_id: str = TENANT_A, **overrides) -> dict:
        doc = {
            "id": new_id(),
            "tenant_id": tenant_id,
            "name": f"Speaker {len(collections['speaker']) + 1}",
            "bio": None,
            "company": None,
            "email": None,
            "linkedin_url": None,
            "speaker_type": "SPEAKER",
        }
        doc.update(overrides)
        collections["speaker"].append(doc)
        return doc

    return add


@pytest.fixture
def add_schedule_doc(collections):
    def add(tenant_id: str = TENANT_A, **overrides) -> dict:
        doc = {
            "id": new_id(),
            "tenant_id": tenant_id,
            "event_id": new_id(),
            "title": "Opening session",
            "description": None,
            "session_type": "SESSION",
            "start_time": BASE_TIME,
            "end_time": BASE_TIME + timedelta(hours=1),
            "location": "Room 1",
            "speaker_ids": [],
        }
        doc.update(overrides)
        collections["event_schedule"].append(doc)
        return doc

    return add


# Database rows


@pytest.fixture
def make_event(db):
    def make(tenant_id: str = TENANT_A, locations=(("Main Hall", "1 Harbour Road"),), **fields):
        values = {
            "title": "Platform Summit",
            "description": "Annual platform engineering summit",
            "type": "CONFERENCE",
            "format": "IN_PERSON",
            "status": "PUBLISHED",
            "start_date": BASE_TIME,
            "end_date": BASE_TIME + timedelta(days=2),
            "currency": "EUR",
            "number_of_participants": 100,
            "is_public": True,
        }
        values.update(fields)
        event = orm.Event.objects.create(tenant_id=tenant_id, **values)
        for position, (name, address) in enumerate(locations):
            orm.EventLocation.objects.create(
                event=event, position=position, name=name, address=address
            )
        return event

    return make


@pytest.fixture
def make_speaker(db):
    def make(name: str, tenant_id: str = TENANT_A, **fields):
        return orm.Speaker.objects.create(tenant_id=tenant_id, name=name, **fields)

    return make


@pytest.fixture
def make_schedule(db):
    def make(event_id: str, tenant_id: str = TENANT_A, speakers=(), **fields):
        values = {
            "title": "Opening session",
            "session_type": "SESSION",
            "start_time": BASE_TIME,
            "end_time": BASE_TIME + timedelta(hours=1),
            "location": "Room 1",
        }
        values.update(fields)
        schedule = orm.EventSchedule.objects.create(
            tenant_id=tenant_id, event_id=event_id, **values
        )
        for position, speaker in enumerate(speakers):
            orm.ScheduleSpeaker.objects.create(schedule=schedule, speaker=speaker, position=position)
        return schedule

    return make
