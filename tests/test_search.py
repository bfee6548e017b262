"""
Order search tests.
"""
from unittest import mock

import pytest
from django.core.management import call_command

from modules.search.exceptions import SearchBackendError
from modules.search.manticore import (
    ManticoreClient,
    decode_rows,
    escape_match,
    escape_value,
    normalize_query,
    parse_count,
    parse_match_ids,
)
from modules.search.services import SOURCE_DATABASE, SOURCE_INDEX, OrderSearchService
from shared.interfaces.pagination import MAX_PAGE

TABLE_RESPONSE = """+------+-------------+----------------+
| id   | client_name | client_surname |
+------+-------------+----------------+
| 12   | John        | Doe            |
| 7    | Johnny      | Smith          |
+------+-------------+----------------+
2 rows in set (0.00 sec)
"""

COUNT_RESPONSE = """+----------+
| count(*) |
+----------+
| 42       |
+----------+
"""


def fake_client(responses):
    client = mock.Mock(spec=ManticoreClient)
    client.match_sql.return_value = 'SELECT'
    client.count_sql.return_value = 'COUNT'
    client.execute.side_effect = responses
    return client


class TestQueryHelpers:

    @pytest.mark.parametrize('query, expected', [
        ('john', '*john*'),
        ('  john  ', '*john*'),
        ('john*', 'john*'),
        ('*john', '*john'),
        ('j?hn', 'j?hn'),
        ('ORD-2024', '*ORD-2024*'),
    ])
    def test_normalize_query(self, query, expected):
        assert normalize_query(query) == expected

    def test_normalize_is_idempotent(self):
        assert normalize_query(normalize_query('john')) == '*john*'

    def test_escape_match(self):
        assert escape_match("o'neil") == "o\\'neil"
        assert escape_match('say "hi"') == 'say \\"hi\\"'
        assert escape_match('back\\slash') == 'back\\\\slash'

    def test_escape_value(self):
        assert escape_value("O'Brien") == "'O''Brien'"
        assert escape_value(None) == "''"

    def test_statements(self):
        client = ManticoreClient(host='search', port=9306, index='orders')

        assert client.match_sql('john', 20, 10) == "SELECT * FROM orders WHERE MATCH('*john*') LIMIT 20, 10"
        assert client.count_sql("o'neil*") == "SELECT COUNT(*) FROM orders WHERE MATCH('o\\'neil*')"
        assert client.delete_sql(5) == 'DELETE FROM orders WHERE id = 5'


class TestResponseDecoding:

    def test_table_rows_keyed_by_header(self):
        rows = decode_rows(TABLE_RESPONSE)

        assert rows == [
            {'id': '12', 'client_name': 'John', 'client_surname': 'Doe'},
            {'id': '7', 'client_name': 'Johnny', 'client_surname': 'Smith'},
        ]

    def test_match_ids_from_table(self):
        assert parse_match_ids(TABLE_RESPONSE) == [12, 7]

    def test_match_ids_from_plain_lines(self):
        response = "12 John Doe\n\n7\tJohnny Smith\n-----\nQuery OK\n12 duplicate\n"

        assert parse_match_ids(response) == [12, 7]

    def test_empty_response_has_no_ids(self):
        assert parse_match_ids('') == []

    def test_count_from_table(self):
        assert parse_count(COUNT_RESPONSE) == 42

    def test_count_from_plain_text(self):
        assert parse_count('total: 17 matches') == 17

    def test_count_without_number_fails(self):
        with pytest.raises(SearchBackendError):
            parse_count('no numbers here')

    def test_daemon_error_is_raised(self):
        with pytest.raises(SearchBackendError):
            parse_match_ids("ERROR 1064 (42000): syntax error\n")


@pytest.mark.django_db
class TestOrderSearchService:

    def test_remote_hits_are_hydrated_in_order(self, make_order):
        first = make_order()
        second = make_order()
        response = f"| id |\n| {second.id} |\n| 999 |\n| {first.id} |\n"
        service = OrderSearchService(client=fake_client([response, '| count(*) |\n| 3 |\n']))

        result = service.search('client', page=1, per_page=20)

        assert result.source == SOURCE_INDEX
        assert [order.id for order in result.orders] == [second.id, first.id]
        assert result.total == 3

    def test_fallback_equals_database_search(self, make_order):
        make_order(client_name='John', client_surname='Doe')
        make_order(client_name='Johnny', client_surname='Walker')
        make_order(client_name='Maria', email='john.m@example.com')
        make_order(client_name='Peter', client_surname='Parker')
        service = OrderSearchService(client=fake_client(SearchBackendError('connection refused')))

        for query, page, per_page in (('john', 1, 20), ('john', 2, 2), ('Doe', 1, 1), ('jo*n', 1, 20)):
            result = service.search(query, page, per_page)
            assert result == service.search_database(query, page, per_page)
            assert result.source == SOURCE_DATABASE

    def test_fallback_matches_across_fields(self, make_order):
        by_name = make_order(client_name='John')
        by_email = make_order(email='johnson@example.com')
        by_company = make_order(company_name='Johns Tiles')
        make_order(client_name='Zed')
        service = OrderSearchService(client=fake_client(SearchBackendError('down')))

        result = service.search('JOHN', 1, 20)

        assert {order.id for order in result.orders} == {by_name.id, by_email.id, by_company.id}
        assert result.total == 3

    def test_fallback_on_parse_failure(self, make_order):
        make_order(client_name='John')
        service = OrderSearchService(client=fake_client(['| id |\n| 1 |\n', 'garbage']))

        result = service.search('john', 1, 20)

        assert result.source == SOURCE_DATABASE
        assert result.total == 1

    def test_fallback_orders_newest_first(self, make_order):
        from datetime import datetime, timezone as dt_timezone

        old = make_order(client_name='John', created_at=datetime(2023, 1, 1, tzinfo=dt_timezone.utc))
        new = make_order(client_name='John', created_at=datetime(2024, 1, 1, tzinfo=dt_timezone.utc))
        service = OrderSearchService(client=fake_client(SearchBackendError('down')))

        result = service.search('john', 1, 20)

        assert [order.id for order in result.orders] == [new.id, old.id]

    def test_wildcard_fallback(self, make_order):
        match = make_order(number='ORD-2024-777')
        make_order(number='ORD-2023-001')
        service = OrderSearchService(client=fake_client(SearchBackendError('down')))

        result = service.search('ORD-2024-7*', 1, 20)

        assert [order.id for order in result.orders] == [match.id]

    def test_empty_result_shape(self):
        service = OrderSearchService(client=fake_client(SearchBackendError('down')))

        result = service.search('john*', page=1, per_page=20)

        assert result.to_dict() == {
            'meta': {'query': 'john*', 'page': 1, 'per_page': 20, 'total': 0, 'total_pages': 0},
            'data': [],
        }


@pytest.mark.django_db
class TestIndexMaintenance:

    def test_index_order(self, make_order):
        order = make_order(client_name="O'Brien", articles=[
            {'article_id': 1, 'article_name': 'Marble', 'amount': 1, 'price': 1},
            {'article_id': 2, 'article_name': 'Slate', 'amount': 1, 'price': 1},
        ])
        client = ManticoreClient(host='search', port=9306, index='orders')
        with mock.patch.object(client, 'execute', return_value='Query OK, 1 rows affected') as execute:
            assert OrderSearchService(client=client).index_order(order) is True

        sql = execute.call_args[0][0]
        assert sql.startswith('REPLACE INTO orders (id, client_name')
        assert "'O''Brien'" in sql
        assert "'Marble Slate'" in sql
        assert f"'{order.hash}'" in sql

    def test_index_order_failure(self, make_order):
        order = make_order()
        client = mock.Mock(spec=ManticoreClient)
        client.execute.side_effect = SearchBackendError('down')

        assert OrderSearchService(client=client).index_order(order) is False

    def test_index_order_rejected(self, make_order):
        order = make_order()
        client = mock.Mock(spec=ManticoreClient)
        client.execute.return_value = 'ERROR: unknown index'

        assert OrderSearchService(client=client).index_order(order) is False

    def test_remove_order(self):
        client = mock.Mock(spec=ManticoreClient)
        client.execute.return_value = 'Query OK, 1 rows affected'

        assert OrderSearchService(client=client).remove_order(5) is True

    def test_rebuild_index(self, make_order):
        make_order()
        make_order()
        make_order()
        client = mock.Mock(spec=ManticoreClient)
        client.execute.side_effect = ['Query OK', SearchBackendError('down'), 'Query OK']

        assert OrderSearchService(client=client).rebuild_index() == {'indexed': 2, 'failed': 1}

    def test_rebuild_command(self, make_order, capsys):
        make_order()
        with mock.patch.object(ManticoreClient, 'execute', return_value='Query OK'):
            call_command('rebuild_search_index')

        assert 'Indexed 1 orders, 0 failed' in capsys.readouterr().out

    def test_index_task(self, make_order):
        from modules.search.tasks import index_order

        order = make_order()
        with mock.patch.object(ManticoreClient, 'execute', return_value='Query OK') as execute:
            assert index_order.delay(order.id).get() is True

        assert execute.called

    def test_index_task_missing_order(self):
        from modules.search.tasks import index_order

        assert index_order.delay(404).get() is False


@pytest.mark.django_db
class TestSearchEndpoint:
    url = '/api/orders/search'

    @pytest.fixture(autouse=True)
    def daemon_down(self):
        with mock.patch.object(ManticoreClient, 'execute', side_effect=SearchBackendError('down')):
            yield

    def test_scenario_empty_wildcard(self, api_client):
        response = api_client.get(self.url, {'q': 'john*'})

        assert response.status_code == 200
        assert response.data == {
            'meta': {'query': 'john*', 'page': 1, 'per_page': 20, 'total': 0, 'total_pages': 0},
            'data': [],
        }

    def test_results(self, api_client, make_order):
        order = make_order(client_name='John')

        response = api_client.get(self.url, {'q': 'john'})

        assert response.status_code == 200
        assert response.data['meta']['total'] == 1
        assert response.data['data'][0]['id'] == order.id

    @pytest.mark.parametrize('params', [
        {},
        {'q': ''},
        {'q': 'a'},
        {'q': 'john;drop'},
        {'q': "o'neil"},
        {'q': 'jo\nhn'},
        {'q': 'a\tb'},
        {'q': 'jo\rhn'},
        {'q': 'x' * 201},
    ])
    def test_invalid_query(self, api_client, params):
        with mock.patch.object(OrderSearchService, 'search') as search:
            response = api_client.get(self.url, params)

        assert response.status_code == 400
        search.assert_not_called()

    @pytest.mark.parametrize('params, page, per_page', [
        ({'page': '0', 'per_page': '0'}, 1, 20),
        ({'page': 'x', 'per_page': 'y'}, 1, 20),
        ({'page': '3', 'per_page': '1000'}, 3, 100),
    ])
    def test_pagination_defaults(self, api_client, params, page, per_page):
        response = api_client.get(self.url, {'q': 'john', **params})

        assert response.status_code == 200
        assert response.data['meta']['page'] == page
        assert response.data['meta']['per_page'] == per_page

    def test_huge_page_still_falls_back(self, api_client, make_order):
        make_order(client_name='John')

        response = api_client.get(self.url, {'q': 'john', 'page': str(10 ** 19)})

        assert response.status_code == 200
        assert response.data['meta']['page'] == MAX_PAGE
        assert response.data['meta']['total'] == 1
        assert response.data['data'] == []

    def test_control_characters_never_reach_the_daemon(self, api_client):
        with mock.patch.object(ManticoreClient, 'execute') as execute:
            response = api_client.get(self.url, {'q': 'jo\nhn\tx'})

        assert response.status_code == 400
        execute.assert_not_called()
