# -*- coding: utf-8 -*-
"""
Utilidades del backend NetZero.

Este paquete contiene funciones auxiliares:
- formatters: Normalización de órdenes de venta de Odoo
- validators: Validación de credenciales y paginación
"""

from .formatters import (
    SALE_ORDER_FIELDS,
    calcular_total_orden,
    format_sales_order,
    format_sales_orders,
    relation_id,
    relation_label,
    resolve_currency
)
from .validators import ValidationError, missing_credentials, parse_pagination, validate_credentials

__all__ = [
    'SALE_ORDER_FIELDS',
    'calcular_total_orden',
    'format_sales_order',
    'format_sales_orders',
    'relation_id',
    'relation_label',
    'resolve_currency',
    'ValidationError',
    'missing_credentials',
    'parse_pagination',
    'validate_credentials'
]
