# -*- coding: utf-8 -*-
"""
Servicios del backend NetZero.

Este paquete contiene los servicios para interactuar con Odoo:
- odoo_connection: Conexión y autenticación (JSON-RPC con respaldo XML-RPC)
- sales_service: Órdenes de venta
- report_service: Excel y resumen de ventas
"""

from .odoo_connection import OdooConnection, OdooRPCError
from .sales_service import SalesService
from .report_service import ReportService

__all__ = ['OdooConnection', 'OdooRPCError', 'SalesService', 'ReportService']
