import xmlrpc.client

import pytest
import requests


class MockResponse:
    def __init__(self, status_code, json_data=None, invalid_json=False):
        self.status_code = status_code
        self._json_data = json_data
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


class FakeJsonRpcServer:
    """Reemplaza requests.post simulando el endpoint /jsonrpc de Odoo."""

    def __init__(self, orders, uid=5, auth_error=None, data_error=None, empty_data=False):
        self.orders = orders
        self.uid = uid
        self.auth_error = auth_error
        self.data_error = data_error
        # Respuestas de datos sin "result" ni "error"
        self.empty_data = empty_data
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None, **kwargs):
        self.calls.append({'url': url, 'payload': json, 'timeout': timeout})
        params = json['params']

        if params['service'] == 'common':
            if self.auth_error:
                raise self.auth_error
            return MockResponse(200, {'jsonrpc': '2.0', 'id': json['id'], 'result': self.uid})

        if self.data_error:
            raise self.data_error
        if self.empty_data:
            return MockResponse(200, {'jsonrpc': '2.0', 'id': json['id']})

        args = params['args']
        method = args[4]
        if method == 'search_count':
            result = len(self.orders)
        elif method == 'search_read':
            options = args[6]
            start = options['offset']
            result = self.orders[start:start + options['limit']]
        else:
            return MockResponse(200, {'jsonrpc': '2.0', 'id': json['id'],
                                      'error': {'message': f'Unknown method {method}'}})
        return MockResponse(200, {'jsonrpc': '2.0', 'id': json['id'], 'result': result})

    def methods(self):
        """Métodos llamados en orden, ej: ['authenticate', 'search_count']."""
        names = []
        for call in self.calls:
            params = call['payload']['params']
            names.append(params['method'] if params['service'] == 'common' else params['args'][4])
        return names


class FakeXmlRpcServer:
    """Reemplaza xmlrpc.client.ServerProxy simulando /xmlrpc/2/common y /xmlrpc/2/object."""

    def __init__(self, orders, uid=5, fail_on=()):
        self.orders = orders
        self.uid = uid
        self.fail_on = set(fail_on)
        # método -> excepción a lanzar, ej: {'read': ExpatError(...)}
        self.errors = {}
        self.uris = []
        self.transports = []
        self.calls = []

    def __call__(self, uri, transport=None, **kwargs):
        self.uris.append(uri)
        self.transports.append(transport)
        return _FakeProxy(self)

    def methods(self):
        return [call[0] for call in self.calls]


class _FakeProxy:
    def __init__(self, server):
        self.server = server

    def authenticate(self, db, username, password, context):
        self.server.calls.append(('authenticate', db, username))
        if 'authenticate' in self.server.fail_on:
            raise ConnectionRefusedError(111, 'Connection refused')
        return self.server.uid

    def execute_kw(self, db, uid, password, model, method, args, kwargs=None):
        kwargs = kwargs or {}
        self.server.calls.append((method, model, args, kwargs))
        if method in self.server.errors:
            raise self.server.errors[method]
        if method in self.server.fail_on:
            raise xmlrpc.client.Fault(1, f'{method} boom')

        orders = self.server.orders
        if method == 'search':
            ids = [order['id'] for order in orders]
            start = kwargs.get('offset', 0)
            return ids[start:start + kwargs['limit']]
        if method == 'search_count':
            return len(orders)
        if method == 'read':
            ids = args[0]
            return [order for order in orders if order['id'] in ids]
        raise xmlrpc.client.Fault(2, f'Unknown method {method}')


@pytest.fixture
def raw_orders():
    return [
        {
            'id': 11,
            'name': 'S00011',
            'partner_id': [7, 'Acme Co'],
            'date_order': '2024-03-01 10:00:00',
            'amount_total': 250.0,
            'amount_untaxed': 200.0,
            'amount_tax': 36.0,
            'state': 'sale',
            'order_line': [101, 102, 103],
            'user_id': [2, 'Mitchell Admin'],
            'team_id': [1, 'Sales'],
            'currency_id': [20, 'USD'],
            'client_order_ref': 'PO-778',
            'note': 'Deliver before noon',
        },
        {
            'id': 12,
            'name': 'S00012',
            'partner_id': [8, 'Gemini Furniture'],
            'date_order': '2024-03-02 09:30:00',
            'amount_total': 0,
            'amount_untaxed': 120,
            'amount_tax': 18,
            'state': 'draft',
            'order_line': [104],
            'user_id': False,
            'team_id': False,
            'currency_id': False,
            'client_order_ref': False,
            'note': False,
        },
        {
            'id': 13,
            'name': 'S00013',
            'partner_id': False,
            'date_order': '2024-03-03 15:45:00',
            'amount_total': 99.5,
            'state': 'cancel',
            'currency_id': [21, 'EUR'],
        },
    ]


@pytest.fixture
def jsonrpc_server(monkeypatch, raw_orders):
    server = FakeJsonRpcServer(raw_orders)
    monkeypatch.setattr(requests, 'post', server)
    return server


@pytest.fixture
def xmlrpc_server(monkeypatch, raw_orders):
    server = FakeXmlRpcServer(raw_orders)
    monkeypatch.setattr(xmlrpc.client, 'ServerProxy', server)
    return server


@pytest.fixture
def client():
    import app as app_module

    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as test_client:
        yield test_client
