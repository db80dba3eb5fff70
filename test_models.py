"""Tests for sections and saved-document models"""
import pytest

from core.errors import ContentParseError
from core.models import DocumentRecord, Section, SectionList, SectionStatus


def test_ids_are_sequential_from_one():
    sections = SectionList.from_titles(["Introduction", "Method", "Results"])
    assert sections.ids == [1, 2, 3]
    assert all(s.status == SectionStatus.PENDING for s in sections)


def test_ids_never_reused_after_removal():
    sections = SectionList.from_titles(["A", "B", "C"])
    sections.remove(3)
    sections.remove(1)
    new = sections.add("D")
    assert new.id == 4
    assert sections.ids == [2, 4]
    assert len(set(sections.ids)) == len(sections)


def test_ids_stable_when_reordered():
    sections = SectionList.from_titles(["A", "B", "C"])
    sections.move(3, -2)
    assert sections.ids == [3, 1, 2]
    assert sections.get(3).title == "C"
    sections.move(1, 10)
    assert sections.ids == [3, 2, 1]


def test_insert_at_position():
    sections = SectionList.from_titles(["A", "C"])
    sections.add("B", position=1)
    assert [s.title for s in sections] == ["A", "B", "C"]
    assert sections.ids == [1, 3, 2]


def test_json_round_trip_preserves_everything():
    sections = SectionList.from_titles(["Introduction", "Conclusion"])
    sections[0].append("Some **text**")
    sections[0].status = SectionStatus.DONE
    sections.remove(2)
    sections.add("Appendix")

    reloaded = SectionList.from_json(sections.to_json())

    assert reloaded.to_list() == sections.to_list()
    assert reloaded.add("Next").id == 4


def test_reloaded_list_continues_after_highest_id():
    reloaded = SectionList.from_list([
        {"id": 7, "title": "B", "content": "", "status": "pending"},
        {"id": 2, "title": "A", "content": "", "status": "done"},
    ])
    assert reloaded.ids == [7, 2]
    assert reloaded.add("C").id == 8


def test_legacy_and_unknown_status_values():
    assert Section.from_dict({"id": 1, "title": "x", "status": "humanizing"}).status == SectionStatus.REWRITING
    assert Section.from_dict({"id": 1, "title": "x", "status": "weird"}).status == SectionStatus.PENDING


def test_malformed_section_json_raises():
    with pytest.raises(ContentParseError):
        SectionList.from_json("{not json")
    with pytest.raises(ContentParseError):
        SectionList.from_json('{"id": 1}')
    with pytest.raises(ContentParseError):
        SectionList.from_list([{"id": 1, "title": "a"}, {"id": 1, "title": "b"}])


def test_is_complete_and_word_count():
    sections = SectionList.from_titles(["A", "B"])
    assert not sections.is_complete
    for section in sections:
        section.append("one two three")
        section.status = SectionStatus.DONE
    assert sections.is_complete
    assert sections.word_count == 6
    assert not SectionList().is_complete


def test_document_record_row_round_trip():
    sections = SectionList.from_titles(["Intro"])
    record = DocumentRecord(
        title="T", topic="Science", type="Book", level="Professor",
        content=sections.to_json(),
    )
    row = record.to_row()
    assert "id" not in row
    row["id"] = 42

    loaded = DocumentRecord.from_row(row)
    assert loaded.id == 42
    assert loaded.created_at == record.created_at
    assert loaded.sections().to_list() == sections.to_list()


def test_non_text_content_raises():
    with pytest.raises(ContentParseError):
        Section.from_dict({"id": 1, "title": "A", "content": 42})
    with pytest.raises(ContentParseError):
        SectionList.from_json('[{"id": 1, "title": "A", "content": ["x"]}]')
