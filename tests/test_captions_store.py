import pytest

from services.captions_store import CaptionStore
from services.captions_types import Caption, CaptionDraft, CaptionErrorKind


@pytest.fixture
def store():
    return CaptionStore()


def add(store, text, start, end):
    result = store.submit(CaptionDraft(text, start, end))
    assert result.success, result.error
    return result


def assert_non_overlapping(store):
    captions = store.snapshot()
    for i, a in enumerate(captions):
        for b in captions[i + 1:]:
            assert not (a.start < b.end and b.start < a.end)


@pytest.mark.parametrize("draft", [
    CaptionDraft("", "1", "2"),
    CaptionDraft("   ", "1", "2"),
    CaptionDraft("Hi", "", "2"),
    CaptionDraft("Hi", "1", ""),
    CaptionDraft("Hi", "abc", "2"),
    CaptionDraft("Hi", "1", None),
    CaptionDraft("Hi", "nan", "2"),
    CaptionDraft("Hi", "1", "inf"),
    CaptionDraft(None, "1", "2"),
])
def test_missing_fields(store, draft):
    result = store.validate_draft(draft)
    assert not result.success
    assert result.error == CaptionErrorKind.MISSING_FIELD
    assert result.message == "Please fill all fields."


@pytest.mark.parametrize("start,end", [("3", "3"), ("4", "2"), ("-1", "2")])
def test_invalid_range(store, start, end):
    result = store.validate_draft(CaptionDraft("Hi", start, end))
    assert result.error == CaptionErrorKind.INVALID_RANGE
    assert result.message == "Start time must be less than end time."


def test_zero_start_is_valid(store):
    result = store.validate_draft(CaptionDraft("Hi", "0", "1"))
    assert result.success
    assert result.caption == Caption("Hi", 0.0, 1.0)


def test_numeric_draft_values(store):
    result = store.validate_draft(CaptionDraft("Hi", 1, 2.5))
    assert result.caption == Caption("Hi", 1.0, 2.5)


def test_validate_is_pure(store):
    store.validate_draft(CaptionDraft("Hi", "1", "3"))
    assert len(store) == 0
    assert store.editing_index is None


def test_overlap_then_touching_endpoints(store):
    add(store, "Hi", "1", "3")

    result = store.submit(CaptionDraft("Bye", "2", "4"))
    assert result.error == CaptionErrorKind.OVERLAP
    assert result.message == "The specified time range overlaps with an existing caption."
    assert len(store) == 1

    result = store.submit(CaptionDraft("Bye", "3", "4"))
    assert result.success
    assert result.action == "added"
    assert result.message == "Caption added successfully!"
    assert len(store) == 2


@pytest.mark.parametrize("start,end", [("4", "12"), ("6", "8"), ("0", "20"), ("9.999", "10")])
def test_overlap_cases(store, start, end):
    add(store, "Middle", "5", "10")
    result = store.validate_draft(CaptionDraft("X", start, end))
    assert result.error == CaptionErrorKind.OVERLAP
    assert result.index == 0


@pytest.mark.parametrize("start,end", [("0", "5"), ("10", "12"), ("0", "2")])
def test_adjacent_or_disjoint_is_allowed(store, start, end):
    add(store, "Middle", "5", "10")
    assert store.validate_draft(CaptionDraft("X", start, end)).success


def test_insertion_order_is_preserved(store):
    add(store, "Later", "10", "12")
    add(store, "Earlier", "1", "2")
    assert [c.text for c in store.snapshot()] == ["Later", "Earlier"]


def test_edit_in_place_does_not_overlap_itself(store):
    add(store, "A", "1", "3")
    add(store, "B", "5", "7")

    begin = store.begin_edit(0)
    assert begin.caption == Caption("A", 1.0, 3.0)
    assert store.editing_index == 0

    result = store.submit(CaptionDraft("A2", "1.5", "4"))
    assert result.success
    assert result.action == "updated"
    assert result.message == "Caption updated successfully!"
    assert store.snapshot() == (Caption("A2", 1.5, 4.0), Caption("B", 5.0, 7.0))
    assert store.editing_index is None


def test_edit_rejected_when_overlapping_other(store):
    add(store, "A", "1", "3")
    add(store, "B", "5", "7")
    store.begin_edit(0)

    result = store.submit(CaptionDraft("A", "1", "6"))
    assert result.error == CaptionErrorKind.OVERLAP
    assert store.editing_index == 0
    assert store.snapshot()[0] == Caption("A", 1.0, 3.0)


def test_commit_without_edit_index_appends(store):
    caption = store.validate_draft(CaptionDraft("A", "1", "2")).caption
    store.commit(caption)
    assert store.snapshot() == (caption,)


def test_commit_bad_edit_index_raises(store):
    with pytest.raises(IndexError):
        store.commit(Caption("A", 1.0, 2.0), edit_index=3)


def test_begin_edit_out_of_range(store):
    add(store, "A", "1", "2")
    result = store.begin_edit(5)
    assert result.error == CaptionErrorKind.INDEX_OUT_OF_RANGE
    assert store.editing_index is None
    assert store.begin_edit(-1).error == CaptionErrorKind.INDEX_OUT_OF_RANGE


def test_delete_shifts_indices(store):
    add(store, "A", "1", "2")
    add(store, "B", "3", "4")
    add(store, "C", "5", "6")

    result = store.delete(1)
    assert result.success
    assert result.message == "Caption deleted successfully!"
    assert [c.text for c in store.snapshot()] == ["A", "C"]


def test_delete_out_of_range(store):
    assert store.delete(0).error == CaptionErrorKind.INDEX_OUT_OF_RANGE


def test_delete_edited_caption_returns_to_idle(store):
    add(store, "A", "1", "2")
    add(store, "B", "3", "4")
    store.begin_edit(1)

    store.delete(1)
    assert store.editing_index is None
    assert not store.is_editing


def test_delete_before_cursor_shifts_cursor(store):
    add(store, "A", "1", "2")
    add(store, "B", "3", "4")
    add(store, "C", "5", "6")
    store.begin_edit(2)

    store.delete(0)
    assert store.editing_index == 1
    assert store.snapshot()[store.editing_index].text == "C"


def test_delete_after_cursor_keeps_cursor(store):
    add(store, "A", "1", "2")
    add(store, "B", "3", "4")
    store.begin_edit(0)

    store.delete(1)
    assert store.editing_index == 0


def test_clear(store):
    add(store, "A", "1", "2")
    add(store, "B", "3", "4")
    store.begin_edit(1)

    store.clear()
    assert len(store.snapshot()) == 0
    assert store.editing_index is None


def test_cancel_edit(store):
    add(store, "A", "1", "2")
    store.begin_edit(0)
    store.cancel_edit()
    assert store.editing_index is None
    assert store.submit(CaptionDraft("B", "3", "4")).action == "added"
    assert len(store) == 2


def test_snapshot_is_read_only(store):
    add(store, "A", "1", "2")
    snap = store.snapshot()
    assert isinstance(snap, tuple)
    add(store, "B", "3", "4")
    assert len(snap) == 1


def test_no_overlaps_after_mixed_operations(store):
    drafts = [
        ("A", "0", "2"), ("B", "1", "3"), ("C", "2", "4"), ("D", "10", "11"),
        ("E", "3.5", "10.5"), ("F", "4", "10"), ("G", "11", "12"),
    ]
    for text, start, end in drafts:
        store.submit(CaptionDraft(text, start, end))
        assert_non_overlapping(store)

    store.begin_edit(0)
    store.submit(CaptionDraft("A", "0", "3"))
    assert_non_overlapping(store)
    store.delete(1)
    store.submit(CaptionDraft("H", "2.5", "4"))
    assert_non_overlapping(store)


@pytest.mark.parametrize("start,end", [("1.0001", "1.0003"), ("2", "2.0004")])
def test_sub_millisecond_caption_is_invalid_range(store, start, end):
    result = store.submit(CaptionDraft("x", start, end))
    assert result.error == CaptionErrorKind.INVALID_RANGE
    assert len(store) == 0


def test_one_millisecond_caption_is_valid(store):
    assert store.submit(CaptionDraft("x", "1", "1.001")).success
