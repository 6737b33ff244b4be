# app.py - NetZero Backend: relay entre el dashboard y Odoo

import logging
import sys
from datetime import datetime

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import settings
from odoo_manager import OdooManager, AUTHENTICATION_FAILED
from services.report_service import ReportService, EXCEL_MIMETYPE
from utils.validators import ValidationError, validate_credentials, parse_pagination

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("netzero")

app = Flask(__name__)
app.json.sort_keys = False

# --- Inicialización de Servicios ---
odoo_manager = OdooManager.from_settings(settings, logger=logging.getLogger("netzero.odoo"))
report_service = ReportService(logger=logging.getLogger("netzero.reports"))

CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
CORS_HEADERS = ['Content-Type', 'Authorization']


# --- Funciones Auxiliares ---

def error_response(message, status):
    return jsonify({'success': False, 'error': message}), status


def read_payload():
    """Cuerpo JSON de la petición; cualquier otra cosa cuenta como vacío."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def fetch_status(result):
    """Código HTTP para un fallo de fetch_sales_orders."""
    if result.get('error') == AUTHENTICATION_FAILED:
        return 401
    return 502


def fetch_orders_from_request():
    """
    Valida el cuerpo y obtiene las órdenes de Odoo.

    Returns:
        dict: Resultado de ``OdooManager.fetch_sales_orders``
    """
    payload = read_payload()
    credentials = validate_credentials(payload)
    limit, offset = parse_pagination(payload)
    return odoo_manager.fetch_sales_orders(
        credentials['url'], credentials['db_name'],
        credentials['username'], credentials['password'],
        limit=limit, offset=offset
    )


# --- CORS ---

def cors_origins(value):
    """Lista de orígenes permitidos a partir de CORS_ORIGINS (separados por comas)."""
    origins = [origin.strip() for origin in value.split(',') if origin.strip()]
    if not origins or '*' in origins:
        return '*'
    return origins


_origins = cors_origins(settings.CORS_ORIGINS)
CORS(
    app,
    origins=_origins,
    methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
    send_wildcard=_origins == '*',
)


# --- Rutas ---

@app.route('/health')
def health():
    return jsonify({'status': 'ok', 'message': 'NetZero Backend API is running'})


@app.route('/api/odoo/connect', methods=['POST'])
def odoo_connect():
    credentials = validate_credentials(read_payload())

    result = odoo_manager.authenticate_odoo(
        credentials['url'], credentials['db_name'],
        credentials['username'], credentials['password']
    )

    if not result.get('success'):
        return error_response(result.get('error') or AUTHENTICATION_FAILED, 401)

    return jsonify({'success': True, 'authenticatedUser': result['uid']})


@app.route('/api/odoo/sales', methods=['POST'])
def odoo_sales():
    result = fetch_orders_from_request()

    if not result.get('success'):
        return error_response(result.get('error') or 'Failed to fetch sales orders', fetch_status(result))

    return jsonify(result)


@app.route('/api/odoo/sales/export', methods=['POST'])
def odoo_sales_export():
    result = fetch_orders_from_request()

    if not result.get('success'):
        return error_response(result.get('error') or 'Failed to fetch sales orders', fetch_status(result))

    output = report_service.export_sales_excel(result['data'])

    # Nombre de archivo con timestamp
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return send_file(
        output,
        as_attachment=True,
        download_name=f'sales_orders_{timestamp}.xlsx',
        mimetype=EXCEL_MIMETYPE
    )


@app.route('/api/odoo/sales/summary', methods=['POST'])
def odoo_sales_summary():
    result = fetch_orders_from_request()

    if not result.get('success'):
        return error_response(result.get('error') or 'Failed to fetch sales orders', fetch_status(result))

    return jsonify(report_service.build_sales_summary(result['data'], result['count']))


# --- Manejo de Errores ---

@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return error_response(str(e), 400)


@app.errorhandler(HTTPException)
def handle_http_exception(e):
    if e.code == 404:
        return error_response('Route not found', 404)
    return error_response(e.description or e.name, e.code)


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    logger.exception("Error no controlado en %s %s", request.method, request.path)
    status = getattr(e, 'status', None)
    if not isinstance(status, int) or not 400 <= status < 600:
        status = 500
    return error_response(str(e) or 'Internal server error', status)


if __name__ == '__main__':
    print("🚀 NetZero Backend Server iniciando...")
    print(f"📍 Health check: http://localhost:{settings.PORT}/health")
    try:
        app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
    except OSError as e:
        logger.error("No se pudo iniciar el servidor en el puerto %s: %s", settings.PORT, e)
        print("💡 Usa otro puerto: PORT=5001 python app.py")
        sys.exit(1)
