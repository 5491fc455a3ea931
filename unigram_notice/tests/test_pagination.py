import pytest

from unigram_notice.pagination import PaginationCursor


def test_advance_moves_by_page_size():
    cursor = PaginationCursor(page_size=10)
    assert cursor.current() == 0

    cursor.advance()
    cursor.advance()

    assert cursor.current() == 20
    assert cursor.state.page_size == 10


def test_exhausted_until_reset():
    cursor = PaginationCursor(page_size=10)
    cursor.start_after_first_page()
    cursor.advance()
    cursor.mark_exhausted()

    cursor.advance()
    assert cursor.exhausted is True
    assert cursor.current() == 20

    cursor.reset()
    assert cursor.exhausted is False
    assert cursor.current() == 0


def test_state_is_an_immutable_value():
    cursor = PaginationCursor(page_size=5)
    before = cursor.state

    cursor.advance()

    assert before.offset == 0
    assert cursor.state.offset == 5


def test_invalid_page_size():
    with pytest.raises(ValueError):
        PaginationCursor(page_size=0)
