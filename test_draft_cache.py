"""Tests for the local auto-save snapshot"""
import sqlite3

from core.models import SectionList, SectionStatus
from utils.draft_cache import DraftCache


def test_empty_cache_loads_none(tmp_path):
    assert DraftCache(str(tmp_path / "draft.db")).load() is None


def test_save_and_load_round_trip(tmp_path, form):
    cache = DraftCache(str(tmp_path / "draft.db"))
    sections = SectionList.from_titles(["پێشەکی", "Method"])
    sections[0].append("دەق")
    sections[0].status = SectionStatus.DONE

    saved_at = cache.save(sections, form)
    snapshot = DraftCache(str(tmp_path / "draft.db")).load()

    assert snapshot.sections.to_list() == sections.to_list()
    assert snapshot.form == form
    assert snapshot.saved_at == saved_at


def test_last_write_wins(tmp_path, form):
    cache = DraftCache(str(tmp_path / "draft.db"))
    cache.save(SectionList.from_titles(["Old"]), form)
    cache.save(SectionList.from_titles(["New", "Newer"]), dict(form, title="Second"))

    snapshot = cache.load()
    assert [s.title for s in snapshot.sections] == ["New", "Newer"]
    assert snapshot.form["title"] == "Second"


def test_clear(tmp_path, form):
    cache = DraftCache(str(tmp_path / "draft.db"))
    cache.save(SectionList.from_titles(["A"]), form)
    cache.clear()
    assert cache.load() is None


def test_corrupt_snapshot_is_discarded(tmp_path):
    path = str(tmp_path / "draft.db")
    cache = DraftCache(path)
    conn = sqlite3.connect(path)
    conn.execute(
        "INSERT INTO drafts (id, sections, form, saved_at) VALUES (1, '{broken', '{}', 'now')"
    )
    conn.commit()
    conn.close()

    assert cache.load() is None
