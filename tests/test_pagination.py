"""
Pagination helper tests.
"""
import pytest

from shared.interfaces import PageRequest, total_pages
from shared.interfaces.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE


class TestPageRequest:

    @pytest.mark.parametrize('params, page, per_page', [
        ({}, 1, DEFAULT_PAGE_SIZE),
        ({'page': '2', 'per_page': '10'}, 2, 10),
        ({'page': '-3', 'per_page': '-1'}, 1, DEFAULT_PAGE_SIZE),
        ({'page': 'two', 'per_page': '1.5'}, 1, DEFAULT_PAGE_SIZE),
        ({'per_page': '500'}, 1, MAX_PAGE_SIZE),
        ({'page': str(10 ** 19)}, MAX_PAGE, DEFAULT_PAGE_SIZE),
    ])
    def test_from_query(self, params, page, per_page):
        request = PageRequest.from_query(params)

        assert (request.page, request.per_page) == (page, per_page)

    def test_window(self):
        request = PageRequest(page=3, per_page=25)

        assert request.offset == 50
        assert request.limit == 25


@pytest.mark.parametrize('total, per_page, expected', [
    (0, 20, 0),
    (1, 20, 1),
    (20, 20, 1),
    (21, 20, 2),
    (26, 10, 3),
    (5, 0, 0),
])
def test_total_pages(total, per_page, expected):
    assert total_pages(total, per_page) == expected


def test_largest_offset_fits_a_signed_64_bit_integer():
    request = PageRequest.from_query({'page': str(10 ** 30), 'per_page': '100'})

    assert request.offset + request.limit < 2 ** 63
