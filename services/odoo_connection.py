# -*- coding: utf-8 -*-
"""
Servicio de conexión a Odoo.

Maneja la autenticación contra Odoo y las llamadas remotas por los dos
transportes que expone el servidor:

- JSON-RPC (``/jsonrpc``), transporte principal.
- XML-RPC (``/xmlrpc/2/common`` y ``/xmlrpc/2/object``), transporte de respaldo.

Cada instancia vive lo que dura una petición: las credenciales llegan desde
el dashboard y no se guardan en ningún lado.
"""

import http.client
import logging
import random
import ssl
import xmlrpc.client
from urllib.parse import urlsplit
from xml.parsers.expat import ExpatError

import requests

INVALID_CREDENTIALS = 'Invalid credentials'


class OdooRPCError(Exception):
    """Fallo de una llamada remota a Odoo (red, timeout, HTTP o respuesta inválida)."""


def normalize_url(url):
    """Quita una barra final de la URL de la instancia."""
    url = (url or '').strip()
    if url.endswith('/'):
        url = url[:-1]
    return url


def describe_xmlrpc_error(error):
    """Mensaje legible para los errores que lanza xmlrpc.client."""
    if isinstance(error, xmlrpc.client.Fault):
        return error.faultString
    if isinstance(error, xmlrpc.client.ProtocolError):
        return f'{error.errcode} {error.errmsg}'
    return str(error) or error.__class__.__name__


class _TimeoutTransport(xmlrpc.client.Transport):
    """Transporte HTTP para XML-RPC con timeout explícito."""

    def __init__(self, timeout, **kwargs):
        super().__init__(**kwargs)
        self.timeout = timeout

    def make_connection(self, host):
        connection = super().make_connection(host)
        connection.timeout = self.timeout
        return connection


class _TimeoutSafeTransport(xmlrpc.client.SafeTransport):
    """Transporte HTTPS para XML-RPC con timeout explícito."""

    def __init__(self, timeout, **kwargs):
        super().__init__(**kwargs)
        self.timeout = timeout

    def make_connection(self, host):
        connection = super().make_connection(host)
        connection.timeout = self.timeout
        return connection


class OdooConnection:
    """
    Conexión a una instancia de Odoo para una sola petición.

    Args:
        url (str): URL de la instancia (ej: https://demo.odoo.com/)
        db (str): Nombre de la base de datos
        username (str): Usuario (email)
        password (str): Contraseña o API key
        auth_timeout (float): Timeout en segundos de la autenticación JSON-RPC
        data_timeout (float): Timeout en segundos de las consultas JSON-RPC
        xmlrpc_timeout (float): Timeout en segundos de cada llamada XML-RPC
        verify_ssl (bool): Validar certificados en XML-RPC sobre https.
            Por defecto se aceptan certificados autofirmados.
        logger (logging.Logger, optional): Destino de los eventos de diagnóstico
    """

    def __init__(self, url, db, username, password, auth_timeout=10.0,
                 data_timeout=30.0, xmlrpc_timeout=30.0, verify_ssl=False,
                 logger=None):
        self.url = normalize_url(url)
        self.db = db
        self.username = username
        self.password = password
        self.auth_timeout = auth_timeout
        self.data_timeout = data_timeout
        self.xmlrpc_timeout = xmlrpc_timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)
        self.uid = None

    # --- Autenticación ---

    def authenticate(self):
        """
        Autentica contra Odoo: primero JSON-RPC y, si falla, XML-RPC.

        Nunca lanza excepciones; cualquier fallo se devuelve como resultado.

        Returns:
            dict: ``{'success': True, 'uid': int}`` o ``{'success': False, 'error': str}``
        """
        try:
            try:
                result = self._authenticate_jsonrpc()
            except OdooRPCError as e:
                result = {'success': False, 'error': str(e)}

            if not result['success']:
                self.logger.warning(
                    "Autenticación JSON-RPC falló para %s (%s), probando XML-RPC",
                    self.url, result['error']
                )
                result = self._authenticate_xmlrpc()

            if result['success']:
                self.uid = result['uid']
                self.logger.info("Autenticación exitosa en %s (uid=%s)", self.url, self.uid)
            return result
        except Exception as e:
            self.logger.exception("Error inesperado autenticando contra %s", self.url)
            return {'success': False, 'error': str(e) or 'Authentication failed'}

    def _authenticate_jsonrpc(self):
        uid = self.jsonrpc_call(
            'common', 'authenticate',
            [self.db, self.username, self.password, {}],
            timeout=self.auth_timeout
        )
        if uid:
            return {'success': True, 'uid': uid}
        return {'success': False, 'error': INVALID_CREDENTIALS}

    def _authenticate_xmlrpc(self):
        try:
            common = self.server_proxy('common')
            uid = common.authenticate(self.db, self.username, self.password, {})
        except (OdooRPCError, xmlrpc.client.Error, http.client.HTTPException,
                OSError, ExpatError) as e:
            message = str(e) if isinstance(e, OdooRPCError) else describe_xmlrpc_error(e)
            self.logger.error("Autenticación XML-RPC falló para %s: %s", self.url, message)
            return {'success': False, 'error': message or 'Authentication failed'}

        if uid:
            return {'success': True, 'uid': uid}
        return {'success': False, 'error': INVALID_CREDENTIALS}

    # --- JSON-RPC ---

    def jsonrpc_call(self, service, method, args, timeout=None):
        """
        Llamada JSON-RPC a ``<url>/jsonrpc``.

        Args:
            service (str): Servicio de Odoo ('common' u 'object')
            method (str): Método del servicio (ej: 'authenticate', 'execute_kw')
            args (list): Argumentos posicionales
            timeout (float, optional): Timeout en segundos

        Returns:
            El campo ``result`` de la respuesta

        Raises:
            OdooRPCError: Si falla la red, el HTTP o el cuerpo de la respuesta
        """
        if timeout is None:
            timeout = self.data_timeout

        payload = {
            'jsonrpc': '2.0',
            'method': 'call',
            'params': {
                'service': service,
                'method': method,
                'args': args,
            },
            'id': random.randint(0, 999999),
        }

        try:
            response = requests.post(
                f'{self.url}/jsonrpc',
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=timeout
            )
            response.raise_for_status()
            body = response.json()
        except requests.Timeout as e:
            raise OdooRPCError(f'JSON-RPC timeout after {timeout}s') from e
        except requests.RequestException as e:
            raise OdooRPCError(f'JSON-RPC request failed: {e}') from e
        except ValueError as e:
            raise OdooRPCError('JSON-RPC response is not valid JSON') from e

        if not isinstance(body, dict):
            raise OdooRPCError('Malformed JSON-RPC response')

        error = body.get('error')
        if error:
            message = error
            if isinstance(error, dict):
                data = error.get('data') or {}
                message = (data.get('message') if isinstance(data, dict) else None) \
                    or error.get('message') or 'Unknown error'
            raise OdooRPCError(f'JSON-RPC error: {message}')

        return body.get('result')

    def execute_kw_json(self, model, method, args, kwargs=None):
        """``execute_kw`` por JSON-RPC con la sesión autenticada."""
        call_args = [self.db, self.uid, self.password, model, method, args]
        if kwargs is not None:
            call_args.append(kwargs)
        return self.jsonrpc_call('object', 'execute_kw', call_args, timeout=self.data_timeout)

    # --- XML-RPC ---

    def xmlrpc_endpoint(self, service):
        """
        URL XML-RPC del servicio a partir del host de la instancia.

        Usa el puerto de la URL o, si no viene, 443 para https y 80 para http.
        """
        parts = urlsplit(self.url)
        if parts.scheme not in ('http', 'https') or not parts.hostname:
            raise OdooRPCError(f'Invalid Odoo URL: {self.url!r}')
        try:
            port = parts.port
        except ValueError as e:
            raise OdooRPCError(f'Invalid Odoo URL: {self.url!r}') from e
        if port is None:
            port = 443 if parts.scheme == 'https' else 80

        host = parts.hostname
        if ':' in host:
            host = f'[{host}]'
        return f'{parts.scheme}://{host}:{port}/xmlrpc/2/{service}'

    def server_proxy(self, service):
        """
        Crea un ``ServerProxy`` para 'common' u 'object'.

        Sobre https se usa un contexto SSL sin verificación salvo que
        ``verify_ssl`` esté activo.
        """
        endpoint = self.xmlrpc_endpoint(service)
        if endpoint.startswith('https://'):
            context = ssl.create_default_context() if self.verify_ssl \
                else ssl._create_unverified_context()
            transport = _TimeoutSafeTransport(self.xmlrpc_timeout, context=context)
        else:
            transport = _TimeoutTransport(self.xmlrpc_timeout)
        return xmlrpc.client.ServerProxy(endpoint, transport=transport, allow_none=True)

    def execute_kw_xml(self, proxy, model, method, args, kwargs=None):
        """
        ``execute_kw`` por XML-RPC con la sesión autenticada.

        Raises:
            OdooRPCError: Si la llamada falla
        """
        try:
            return proxy.execute_kw(
                self.db, self.uid, self.password,
                model, method, args, kwargs or {}
            )
        except (xmlrpc.client.Error, http.client.HTTPException, OSError, ExpatError) as e:
            raise OdooRPCError(describe_xmlrpc_error(e)) from e
