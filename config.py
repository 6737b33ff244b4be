# -*- coding: utf-8 -*-
"""
Configuración del backend NetZero.

Lee las variables del archivo .env (si existe) y del entorno del proceso.
Los valores se pasan explícitamente a los servicios; ningún servicio lee
variables de entorno por su cuenta.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name, default=False):
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _get_float(name, default):
    value = os.getenv(name)
    try:
        return float(value) if value else default
    except ValueError:
        return default


def _get_int(name, default):
    value = os.getenv(name)
    try:
        return int(value) if value else default
    except ValueError:
        return default


class Settings:
    """Valores de configuración de la aplicación."""

    def __init__(self):
        # Servidor
        self.HOST = os.getenv('HOST', '0.0.0.0')
        self.PORT = _get_int('PORT', 5002)
        self.DEBUG = _get_bool('DEBUG', False)
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

        # Odoo (timeouts en segundos)
        self.ODOO_AUTH_TIMEOUT = _get_float('ODOO_AUTH_TIMEOUT', 10.0)
        self.ODOO_DATA_TIMEOUT = _get_float('ODOO_DATA_TIMEOUT', 30.0)
        self.ODOO_XMLRPC_TIMEOUT = _get_float('ODOO_XMLRPC_TIMEOUT', 30.0)
        # Instancias privadas suelen usar certificados autofirmados
        self.ODOO_VERIFY_SSL = _get_bool('ODOO_VERIFY_SSL', False)

        # Solo para diagnostico.py
        self.ODOO_URL = os.getenv('ODOO_URL')
        self.ODOO_DB = os.getenv('ODOO_DB')
        self.ODOO_USER = os.getenv('ODOO_USER')
        self.ODOO_PASSWORD = os.getenv('ODOO_PASSWORD')


settings = Settings()
