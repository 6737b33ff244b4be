# -*- coding: utf-8 -*-
"""
Servicio de Ventas.

Obtiene órdenes de venta (sale.order) de una conexión ya autenticada.
Intenta primero por JSON-RPC; si esa ruta lanza una excepción, repite la
consulta una sola vez por XML-RPC.

El conteo total y la lectura de registros son llamadas separadas: si los
datos cambian en Odoo entre una y otra, ``count`` puede no coincidir
exactamente con lo leído. No se intenta detectar ese caso.
"""

import json
import logging

from services.odoo_connection import OdooRPCError
from utils.formatters import SALE_ORDER_FIELDS, format_sales_orders

SALE_ORDER_MODEL = 'sale.order'


class SalesService:
    """
    Servicio de órdenes de venta.

    Args:
        connection (OdooConnection): Conexión autenticada (con ``uid``)
        logger (logging.Logger, optional): Destino de los eventos de diagnóstico
    """

    def __init__(self, connection, logger=None):
        self.connection = connection
        self.logger = logger or logging.getLogger(__name__)

    def fetch_sales_orders(self, limit=100, offset=0):
        """
        Obtiene una página de órdenes de venta y el total de órdenes.

        Args:
            limit (int): Máximo de registros a devolver
            offset (int): Desplazamiento para paginación

        Returns:
            dict: ``{'success': True, 'data': [...], 'count': int}``

        Raises:
            OdooRPCError: Si fallan ambos transportes
        """
        try:
            return self._fetch_with_jsonrpc(limit, offset)
        except OdooRPCError as e:
            self.logger.warning("JSON-RPC falló, probando XML-RPC: %s", e)
        return self._fetch_with_xmlrpc(limit, offset)

    def _fetch_with_jsonrpc(self, limit, offset):
        try:
            count = self.connection.execute_kw_json(
                SALE_ORDER_MODEL, 'search_count', [[]]
            )

            # search_read: búsqueda y lectura en una sola llamada
            orders = self.connection.execute_kw_json(
                SALE_ORDER_MODEL, 'search_read', [[]],
                {'fields': SALE_ORDER_FIELDS, 'limit': limit, 'offset': offset}
            )
        except OdooRPCError as e:
            raise OdooRPCError(f'JSON-RPC fetch failed: {e}') from e

        # Sin "result" no se puede distinguir de una consulta vacía
        if count is None or orders is None:
            raise OdooRPCError('JSON-RPC fetch failed: response without result')
        if not isinstance(orders, list) or not isinstance(count, int):
            raise OdooRPCError('JSON-RPC fetch failed: unexpected response shape')

        self._log_sample(orders, 'JSON-RPC')

        return {
            'success': True,
            'data': format_sales_orders(orders),
            'count': count,
        }

    def _fetch_with_xmlrpc(self, limit, offset):
        try:
            models = self.connection.server_proxy('object')
        except OdooRPCError as e:
            raise OdooRPCError(f'XML-RPC fetch failed: {e}') from e

        # 1. IDs de la página pedida
        try:
            order_ids = self.connection.execute_kw_xml(
                models, SALE_ORDER_MODEL, 'search', [[]],
                {'limit': limit, 'offset': offset}
            )
        except OdooRPCError as e:
            raise OdooRPCError(f'XML-RPC search failed: {e}') from e

        if not order_ids:
            return {'success': True, 'data': [], 'count': 0}

        # 2. Conteo total (no es crítico)
        count = None
        try:
            count = self.connection.execute_kw_xml(
                models, SALE_ORDER_MODEL, 'search_count', [[]]
            )
        except Exception as e:
            self.logger.warning("No se pudo obtener el conteo por XML-RPC: %s", e)

        # 3. Lectura de las órdenes encontradas
        try:
            orders = self.connection.execute_kw_xml(
                models, SALE_ORDER_MODEL, 'read', [order_ids],
                {'fields': SALE_ORDER_FIELDS}
            ) or []
        except OdooRPCError as e:
            raise OdooRPCError(f'XML-RPC read failed: {e}') from e

        self._log_sample(orders, 'XML-RPC')
        formatted_orders = format_sales_orders(orders)

        return {
            'success': True,
            'data': formatted_orders,
            'count': count or len(formatted_orders),
        }

    def _log_sample(self, orders, transport):
        if orders and self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "Orden de ejemplo (%s): %s",
                transport, json.dumps(orders[0], indent=2, default=str)
            )
