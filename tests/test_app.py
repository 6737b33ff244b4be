import io

import pandas as pd
import pytest

import app as app_module

BODY = {
    'url': 'https://demo.odoo.com/',
    'dbName': 'db1',
    'username': 'user@x.com',
    'password': 'pw',
}


class StubManager:
    def __init__(self, auth_result=None, fetch_result=None, error=None):
        self.auth_result = auth_result or {'success': True, 'uid': 5}
        self.fetch_result = fetch_result or {'success': True, 'data': [], 'count': 0}
        self.error = error
        self.calls = []

    def authenticate_odoo(self, *args):
        self.calls.append(('authenticate_odoo', args))
        if self.error:
            raise self.error
        return self.auth_result

    def fetch_sales_orders(self, *args, **kwargs):
        self.calls.append(('fetch_sales_orders', args, kwargs))
        if self.error:
            raise self.error
        return self.fetch_result


@pytest.fixture
def stub_manager(monkeypatch):
    manager = StubManager()
    monkeypatch.setattr(app_module, 'odoo_manager', manager)
    return manager


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'message': 'NetZero Backend API is running'}


def test_cors_headers(client):
    response = client.get('/health', headers={'Origin': 'http://localhost:5173'})
    assert response.headers['Access-Control-Allow-Origin'] == '*'


def test_cors_preflight(client, stub_manager):
    response = client.options('/api/odoo/connect', headers={
        'Origin': 'http://localhost:5173',
        'Access-Control-Request-Method': 'POST',
        'Access-Control-Request-Headers': 'Content-Type',
    })

    assert response.status_code == 200
    assert response.headers['Access-Control-Allow-Origin'] == '*'
    assert 'POST' in response.headers['Access-Control-Allow-Methods']
    assert 'content-type' in response.headers['Access-Control-Allow-Headers'].lower()
    assert stub_manager.calls == []


@pytest.mark.parametrize('value, expected', [
    ('*', '*'),
    ('', '*'),
    ('http://a.test, *', '*'),
    ('http://a.test, http://b.test', ['http://a.test', 'http://b.test']),
])
def test_cors_origins(value, expected):
    assert app_module.cors_origins(value) == expected


def test_unknown_route(client):
    response = client.get('/api/nope')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'error': 'Route not found'}


def test_wrong_method_is_json(client):
    response = client.get('/api/odoo/connect')
    assert response.status_code == 405
    assert response.get_json()['success'] is False


@pytest.mark.parametrize('path', ['/api/odoo/connect', '/api/odoo/sales'])
@pytest.mark.parametrize('field', ['url', 'dbName', 'username', 'password'])
def test_missing_field_makes_no_remote_call(client, jsonrpc_server, xmlrpc_server, path, field):
    body = dict(BODY)
    body[field] = ''

    response = client.post(path, json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload['success'] is False
    assert field in payload['error']
    assert jsonrpc_server.calls == []
    assert xmlrpc_server.calls == []


def test_missing_body(client, stub_manager):
    response = client.post('/api/odoo/connect', data='not json')

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing required fields: url, dbName, username, password'
    assert stub_manager.calls == []


def test_connect_success(client, jsonrpc_server):
    response = client.post('/api/odoo/connect', json=BODY)

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'authenticatedUser': 5}


def test_connect_invalid_credentials(client, jsonrpc_server, xmlrpc_server):
    jsonrpc_server.uid = False
    xmlrpc_server.uid = False

    response = client.post('/api/odoo/connect', json=BODY)

    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'error': 'Invalid credentials'}


def test_sales_success(client, jsonrpc_server):
    response = client.post('/api/odoo/sales', json=dict(BODY, limit=2))

    assert response.status_code == 200
    payload = response.get_json()
    assert payload['success'] is True
    assert payload['count'] == 3
    assert len(payload['data']) == 2
    assert payload['data'][0]['customer'] == 'Acme Co'


def test_sales_default_pagination(client, stub_manager):
    client.post('/api/odoo/sales', json=BODY)

    name, args, kwargs = stub_manager.calls[0]
    assert args == ('https://demo.odoo.com/', 'db1', 'user@x.com', 'pw')
    assert kwargs == {'limit': 100, 'offset': 0}


def test_sales_result_is_passed_through(client, stub_manager):
    order = {'id': 1, 'name': 'S1', 'total': 10.0, 'weird': 'kept'}
    stub_manager.fetch_result = {'success': True, 'data': [order], 'count': 42}

    response = client.post('/api/odoo/sales', json=BODY)

    assert response.get_json() == {'success': True, 'data': [order], 'count': 42}


@pytest.mark.parametrize('limit', [-1, 'ten', 2.5, True])
def test_sales_invalid_limit(client, stub_manager, limit):
    response = client.post('/api/odoo/sales', json=dict(BODY, limit=limit))

    assert response.status_code == 400
    assert 'limit' in response.get_json()['error']
    assert stub_manager.calls == []


def test_sales_accepts_numeric_strings(client, stub_manager):
    client.post('/api/odoo/sales', json=dict(BODY, limit='20', offset='40'))

    assert stub_manager.calls[0][2] == {'limit': 20, 'offset': 40}


def test_sales_authentication_failure(client, stub_manager):
    stub_manager.fetch_result = {'success': False, 'error': 'Authentication failed'}

    response = client.post('/api/odoo/sales', json=BODY)

    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'error': 'Authentication failed'}


def test_sales_fetch_failure(client, stub_manager):
    stub_manager.fetch_result = {'success': False, 'error': 'XML-RPC read failed: boom'}

    response = client.post('/api/odoo/sales', json=BODY)

    assert response.status_code == 502
    assert response.get_json()['error'] == 'XML-RPC read failed: boom'


def test_unexpected_error_is_json(client, monkeypatch):
    monkeypatch.setattr(app_module, 'odoo_manager', StubManager(error=RuntimeError('kaboom')))

    response = client.post('/api/odoo/connect', json=BODY)

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'kaboom'}


def test_unexpected_error_status_passthrough(client, monkeypatch):
    class UpstreamUnavailable(Exception):
        status = 503

    monkeypatch.setattr(app_module, 'odoo_manager', StubManager(error=UpstreamUnavailable('busy')))

    response = client.post('/api/odoo/sales', json=BODY)

    assert response.status_code == 503
    assert response.get_json() == {'success': False, 'error': 'busy'}


def test_sales_export(client, jsonrpc_server):
    response = client.post('/api/odoo/sales/export', json=BODY)

    assert response.status_code == 200
    assert response.mimetype == app_module.EXCEL_MIMETYPE
    assert 'sales_orders_' in response.headers['Content-Disposition']

    df = pd.read_excel(io.BytesIO(response.data))
    assert list(df['Order']) == ['S00011', 'S00012', 'S00013']
    assert list(df['Total']) == [250.0, 138.0, 99.5]


def test_sales_export_failure(client, stub_manager):
    stub_manager.fetch_result = {'success': False, 'error': 'Authentication failed'}

    response = client.post('/api/odoo/sales/export', json=BODY)

    assert response.status_code == 401


def test_sales_summary(client, jsonrpc_server):
    response = client.post('/api/odoo/sales/summary', json=BODY)

    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'count': 3,
        'fetched': 3,
        'totalsByCurrency': {'EUR': 99.5, 'INR': 138.0, 'USD': 250.0},
        'ordersByState': {'sale': 1, 'draft': 1, 'cancel': 1},
    }
