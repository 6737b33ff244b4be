# -*- coding: utf-8 -*-
"""
Servicio de Reportes de Ventas.

Genera el Excel de órdenes de venta y el resumen por estado y moneda a
partir de las órdenes ya normalizadas.
"""

import io
import logging

import pandas as pd

# Columnas del Excel: clave de la orden normalizada -> encabezado
EXPORT_COLUMNS = {
    'id': 'ID',
    'name': 'Order',
    'customer': 'Customer',
    'customerId': 'Customer ID',
    'date': 'Date',
    'total': 'Total',
    'currency': 'Currency',
    'state': 'State',
    'salesperson': 'Salesperson',
    'team': 'Sales Team',
    'reference': 'Customer Reference',
    'lineCount': 'Lines',
    'note': 'Note',
}

EXCEL_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class ReportService:
    """
    Servicio para reportes de órdenes de venta.
    """

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(__name__)

    def build_sales_dataframe(self, orders):
        """
        DataFrame con las columnas de exportación, aunque no haya órdenes.

        Args:
            orders (list): Órdenes normalizadas

        Returns:
            pandas.DataFrame
        """
        df = pd.DataFrame(orders or [], columns=list(EXPORT_COLUMNS))
        return df.rename(columns=EXPORT_COLUMNS)

    def export_sales_excel(self, orders):
        """
        Genera el archivo Excel en memoria.

        Returns:
            io.BytesIO: Contenido del .xlsx, posicionado al inicio
        """
        df = self.build_sales_dataframe(orders)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='Sales Orders', index=False)

        output.seek(0)
        self.logger.info("Excel de ventas generado con %d órdenes", len(df))
        return output

    def build_sales_summary(self, orders, count):
        """
        Resumen de la página de órdenes obtenida.

        Args:
            orders (list): Órdenes normalizadas
            count (int): Total de órdenes en Odoo

        Returns:
            dict: Conteo, totales por moneda y órdenes por estado
        """
        df = pd.DataFrame(orders or [], columns=['total', 'currency', 'state'])

        totals_by_currency = {}
        orders_by_state = {}
        if not df.empty:
            totals = df.groupby('currency')['total'].sum().round(2)
            totals_by_currency = {str(k): float(v) for k, v in totals.items()}
            states = df['state'].value_counts()
            orders_by_state = {str(k): int(v) for k, v in states.items()}

        return {
            'success': True,
            'count': count,
            'fetched': len(df),
            'totalsByCurrency': totals_by_currency,
            'ordersByState': orders_by_state,
        }
