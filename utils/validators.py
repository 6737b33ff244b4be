# -*- coding: utf-8 -*-
"""
Validación de los cuerpos JSON que llegan desde el dashboard.
"""

REQUIRED_CREDENTIAL_FIELDS = ('url', 'dbName', 'username', 'password')

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0


class ValidationError(ValueError):
    """Datos de entrada inválidos; se responde 400 sin llamar a Odoo."""


def missing_credentials(payload):
    """
    Lista de campos de credenciales ausentes o vacíos.

    Args:
        payload (dict): Cuerpo de la petición

    Returns:
        list: Nombres de los campos faltantes, en el orden del formulario
    """
    if not isinstance(payload, dict):
        return list(REQUIRED_CREDENTIAL_FIELDS)

    missing = []
    for field in REQUIRED_CREDENTIAL_FIELDS:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def validate_credentials(payload):
    """
    Verifica que vengan url, dbName, username y password.

    Returns:
        dict: Credenciales con los nombres que usa OdooManager

    Raises:
        ValidationError: Si falta algún campo
    """
    missing = missing_credentials(payload)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    return {
        'url': payload['url'].strip(),
        'db_name': payload['dbName'].strip(),
        'username': payload['username'].strip(),
        'password': payload['password'],
    }


def _parse_non_negative_int(payload, field, default):
    value = payload.get(field)
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a non-negative integer')
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f'{field} must be a non-negative integer')
    return value


def parse_pagination(payload):
    """
    Obtiene limit y offset del cuerpo de la petición.

    Returns:
        tuple: (limit, offset); por defecto (100, 0)

    Raises:
        ValidationError: Si alguno no es un entero no negativo
    """
    if not isinstance(payload, dict):
        payload = {}
    limit = _parse_non_negative_int(payload, 'limit', DEFAULT_LIMIT)
    offset = _parse_non_negative_int(payload, 'offset', DEFAULT_OFFSET)
    return limit, offset
