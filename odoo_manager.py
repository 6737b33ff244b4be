# -*- coding: utf-8 -*-
# odoo_manager.py - Punto de entrada a Odoo para el backend NetZero

import logging

from services.odoo_connection import OdooConnection
from services.sales_service import SalesService

AUTHENTICATION_FAILED = 'Authentication failed'


class OdooManager:
    """
    Fachada sobre los servicios de Odoo.

    Cada llamada recibe las credenciales del dashboard, abre una conexión
    nueva y la descarta al terminar. Ningún método lanza excepciones: los
    fallos se devuelven como ``{'success': False, 'error': str}``.

    Args:
        auth_timeout (float): Timeout de autenticación JSON-RPC (segundos)
        data_timeout (float): Timeout de consultas JSON-RPC (segundos)
        xmlrpc_timeout (float): Timeout de cada llamada XML-RPC (segundos)
        verify_ssl (bool): Validar certificados en XML-RPC
        logger (logging.Logger, optional): Destino de los eventos de diagnóstico
    """

    def __init__(self, auth_timeout=10.0, data_timeout=30.0, xmlrpc_timeout=30.0,
                 verify_ssl=False, logger=None):
        self.auth_timeout = auth_timeout
        self.data_timeout = data_timeout
        self.xmlrpc_timeout = xmlrpc_timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings, logger=None):
        """Crea el manager con los valores de ``config.Settings``."""
        return cls(
            auth_timeout=settings.ODOO_AUTH_TIMEOUT,
            data_timeout=settings.ODOO_DATA_TIMEOUT,
            xmlrpc_timeout=settings.ODOO_XMLRPC_TIMEOUT,
            verify_ssl=settings.ODOO_VERIFY_SSL,
            logger=logger,
        )

    def _connect(self, url, db_name, username, password):
        return OdooConnection(
            url, db_name, username, password,
            auth_timeout=self.auth_timeout,
            data_timeout=self.data_timeout,
            xmlrpc_timeout=self.xmlrpc_timeout,
            verify_ssl=self.verify_ssl,
            logger=self.logger,
        )

    def authenticate_odoo(self, url, db_name, username, password):
        """
        Autentica contra Odoo.

        Args:
            url (str): URL de la instancia
            db_name (str): Base de datos
            username (str): Usuario (email)
            password (str): Contraseña

        Returns:
            dict: ``{'success': True, 'uid': int}`` o ``{'success': False, 'error': str}``
        """
        try:
            return self._connect(url, db_name, username, password).authenticate()
        except Exception as e:
            self.logger.exception("Error de autenticación")
            return {'success': False, 'error': str(e) or AUTHENTICATION_FAILED}

    def fetch_sales_orders(self, url, db_name, username, password, limit=100, offset=0):
        """
        Obtiene órdenes de venta de Odoo.

        Autentica primero; si falla, no se hace ninguna consulta de datos.

        Args:
            url (str): URL de la instancia
            db_name (str): Base de datos
            username (str): Usuario (email)
            password (str): Contraseña
            limit (int): Máximo de registros
            offset (int): Desplazamiento para paginación

        Returns:
            dict: ``{'success': True, 'data': list, 'count': int}`` o
            ``{'success': False, 'error': str}``
        """
        try:
            connection = self._connect(url, db_name, username, password)
            auth_result = connection.authenticate()

            if not auth_result.get('success') or not auth_result.get('uid'):
                return {'success': False, 'error': AUTHENTICATION_FAILED}

            sales = SalesService(connection, logger=self.logger)
            return sales.fetch_sales_orders(limit=int(limit), offset=int(offset))
        except Exception as e:
            self.logger.error("Error obteniendo órdenes de venta: %s", e)
            return {'success': False, 'error': str(e) or 'Failed to fetch sales orders'}
