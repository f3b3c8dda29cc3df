import pytest

from pnl_graph.core.paginator import count_pages, last_page, paginate


def test_pages_cover_series_without_gaps():
    items = list(range(250))
    first = paginate(items, 0)
    pages = [paginate(items, p).items for p in range(first.total_pages)]
    assert first.total_pages == 3
    assert [x for page in pages for x in page] == items


def test_last_page_is_partial():
    page = paginate(list(range(250)), 2)
    assert page.items == list(range(200, 250))
    assert page.current_page == 2
    assert page.has_previous
    assert not page.has_next


@pytest.mark.parametrize('requested, expected', [(-3, 0), (0, 0), (7, 2)])
def test_requested_page_is_clamped(requested, expected):
    assert paginate(list(range(250)), requested).current_page == expected


def test_exact_multiple_of_page_size():
    assert count_pages(200, 100) == 2
    assert len(paginate(list(range(200)), 1).items) == 100


def test_empty_series():
    page = paginate([], 0)
    assert page.total_pages == 0
    assert page.current_page is None
    assert page.items == []
    assert not page.has_next


def test_custom_page_size():
    page = paginate(list('abcdefg'), 1, page_size=3)
    assert page.items == ['d', 'e', 'f']
    assert page.total_pages == 3


def test_default_page_is_most_recent():
    assert last_page(250) == 2
    assert last_page(100) == 0
    assert last_page(0) == 0


@pytest.mark.parametrize('page_size', [0, -5])
def test_page_size_must_be_positive(page_size):
    with pytest.raises(ValueError):
        paginate([1, 2], 0, page_size=page_size)
