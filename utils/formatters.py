# -*- coding: utf-8 -*-
"""
Formateo de órdenes de venta (sale.order) de Odoo.

Odoo devuelve los campos relacionales como ``[id, nombre]`` y los campos
vacíos como ``False``. Estas funciones aplanan el registro al formato que
consume el dashboard y asignan un valor por defecto a cada campo, de modo
que un registro incompleto nunca rompe el formateo.
"""

import math

# Campos que se piden a Odoo para cada orden de venta
SALE_ORDER_FIELDS = [
    'id',
    'name',
    'partner_id',
    'date_order',
    'amount_total',
    'amount_untaxed',
    'amount_tax',
    'state',
    'order_line',
    'user_id',
    'team_id',
    'currency_id',
    'client_order_ref',
    'note',
]

DEFAULT_CURRENCY = 'INR'
NOT_AVAILABLE = 'N/A'


def _is_pair(value):
    return isinstance(value, (list, tuple)) and len(value) > 1


def relation_label(value, default=NOT_AVAILABLE):
    """
    Nombre de un campo relacional.

    Args:
        value: Valor del campo (``[id, nombre]``, ``False`` o ausente)
        default: Valor si el campo no trae nombre

    Returns:
        str: Nombre del registro relacionado o ``default``
    """
    if _is_pair(value) and value[1]:
        return value[1]
    return default


def relation_id(value):
    """ID de un campo relacional, o None si viene vacío."""
    if _is_pair(value):
        return value[0]
    if isinstance(value, int) and not isinstance(value, bool) and value:
        return value
    return None


def to_number(value):
    """
    Convierte un monto de Odoo a float.

    Returns:
        float: El monto, o None si no es numérico o no es finito
    """
    # False es "vacío" en Odoo, no 0
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def resolve_currency(value):
    """Código de moneda desde ``currency_id``; INR si no viene."""
    if value:
        if _is_pair(value) and value[1]:
            return str(value[1])
        if isinstance(value, str):
            return value
    return DEFAULT_CURRENCY


def calcular_total_orden(order):
    """
    Total de la orden.

    Usa ``amount_total``; si es 0 o no es un número válido, lo calcula como
    ``amount_untaxed + amount_tax`` (cada uno 0 si falta).

    Args:
        order (dict): Registro crudo de sale.order

    Returns:
        float: Total siempre finito
    """
    total = to_number(order.get('amount_total'))

    if total is None or total == 0:
        untaxed = to_number(order.get('amount_untaxed')) or 0.0
        tax = to_number(order.get('amount_tax')) or 0.0
        total = untaxed + tax

    if not math.isfinite(total):
        return 0.0
    return total


def format_sales_order(order):
    """
    Aplana un registro de sale.order al formato del dashboard.

    Args:
        order (dict): Registro crudo devuelto por search_read o read

    Returns:
        dict: Orden normalizada
    """
    if not isinstance(order, dict):
        order = {}

    total = calcular_total_orden(order)
    order_lines = order.get('order_line')

    return {
        'id': order.get('id'),
        'name': order.get('name') or '',
        'customer': relation_label(order.get('partner_id')),
        'customerId': relation_id(order.get('partner_id')),
        'date': order.get('date_order') or None,
        'total': total,
        'amount': total,
        'currency': resolve_currency(order.get('currency_id')),
        'state': order.get('state') or '',
        'salesperson': relation_label(order.get('user_id')),
        'team': relation_label(order.get('team_id')),
        'reference': order.get('client_order_ref') or '',
        'note': order.get('note') or '',
        'lineCount': len(order_lines) if isinstance(order_lines, (list, tuple)) else 0,
    }


def format_sales_orders(orders):
    """Formatea una lista de registros manteniendo el orden de Odoo."""
    return [format_sales_order(order) for order in (orders or [])]
