"""Tests for the Supabase document store adapter"""
import json

import pytest
import requests

from core.document_store import DocumentStore, build_record
from core.errors import DocumentStoreError
from core.models import SectionList, SectionStatus


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        if payload is not None:
            self.content = json.dumps(payload).encode()
            self.text = json.dumps(payload)
        else:
            self.text = text or ""
            self.content = self.text.encode()

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records requests and replays canned responses"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_store(*responses):
    session = FakeSession(*responses)
    store = DocumentStore(url="https://demo.supabase.co/", api_key="anon-key", table="documents", session=session)
    return store, session


@pytest.fixture()
def sections():
    sections = SectionList.from_titles(["Introduction", "Conclusion"])
    sections[0].append("Body text")
    sections[0].status = SectionStatus.DONE
    return sections


def test_insert_posts_row_and_returns_stored_record(form, sections):
    record = build_record(form, sections)
    stored_row = dict(record.to_row(), id=11)
    store, session = make_store(FakeResponse(201, [stored_row]))

    saved = store.insert(record)

    method, url, kwargs = session.requests[0]
    assert method == "POST"
    assert url == "https://demo.supabase.co/rest/v1/documents"
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["headers"]["Prefer"] == "return=representation"
    assert kwargs["json"] == [record.to_row()]
    assert saved.id == 11
    assert saved.sections().to_list() == sections.to_list()


def test_build_record_snapshots_form(form, sections):
    record = build_record(form, sections)
    assert record.title == "Water Scarcity in Kurdistan"
    assert record.topic == form["topic"]
    assert record.type == form["type"]
    assert record.level == form["level"]
    assert json.loads(record.content) == sections.to_list()
    assert record.created_at


def test_list_orders_newest_first(form, sections):
    rows = [dict(build_record(form, sections).to_row(), id=i) for i in (3, 2)]
    store, session = make_store(FakeResponse(200, rows))

    records = store.list(limit=10)

    _, _, kwargs = session.requests[0]
    assert kwargs["params"]["order"] == "created_at.desc"
    assert kwargs["params"]["limit"] == "10"
    assert [r.id for r in records] == [3, 2]


def test_get_missing_returns_none():
    store, session = make_store(FakeResponse(200, []))
    assert store.get(99) is None
    assert session.requests[0][2]["params"]["id"] == "eq.99"


def test_delete_by_id():
    store, session = make_store(FakeResponse(204))
    store.delete(5)
    method, _, kwargs = session.requests[0]
    assert method == "DELETE"
    assert kwargs["params"] == {"id": "eq.5"}


def test_http_error_surfaces_postgrest_message():
    store, _ = make_store(FakeResponse(401, {"message": "Invalid API key"}))
    with pytest.raises(DocumentStoreError) as exc:
        store.list()
    assert exc.value.status_code == 401
    assert "Invalid API key" in str(exc.value)


def test_network_error_is_wrapped():
    store, _ = make_store(requests.ConnectionError("offline"))
    with pytest.raises(DocumentStoreError):
        store.delete(1)


def test_unconfigured_store_raises_without_request():
    session = FakeSession()
    store = DocumentStore(url="", api_key="", session=session)
    assert not store.is_configured
    with pytest.raises(DocumentStoreError):
        store.list()
    assert session.requests == []
