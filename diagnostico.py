# -*- coding: utf-8 -*-
"""
Script de Diagnóstico - NetZero Backend
Verifica la configuración y la conexión con Odoo usando las credenciales
de prueba del archivo .env (ODOO_URL, ODOO_DB, ODOO_USER, ODOO_PASSWORD).
"""

import sys

from config import settings as default_settings
from odoo_manager import OdooManager


def verificar_env(settings):
    """Verifica las variables de entorno"""
    print("\n" + "="*60)
    print("🔍 DIAGNÓSTICO DE CONFIGURACIÓN")
    print("="*60)

    vars_requeridas = {
        'ODOO_URL': settings.ODOO_URL,
        'ODOO_DB': settings.ODOO_DB,
        'ODOO_USER': settings.ODOO_USER,
        'ODOO_PASSWORD': settings.ODOO_PASSWORD,
    }

    print("\n📋 Variables de Entorno:")
    print("-" * 60)

    todas_configuradas = True
    for var, valor in vars_requeridas.items():
        if valor:
            # Ocultar contraseñas
            if 'PASSWORD' in var:
                display = "***"
            else:
                display = valor
            print(f"  ✅ {var:<20} = {display}")
        else:
            print(f"  ❌ {var:<20} = [NO CONFIGURADA]")
            todas_configuradas = False

    print(f"\n  ⏱️  Timeouts: auth={settings.ODOO_AUTH_TIMEOUT}s, "
          f"datos={settings.ODOO_DATA_TIMEOUT}s, xmlrpc={settings.ODOO_XMLRPC_TIMEOUT}s")

    if not todas_configuradas:
        print("\n⚠️  ADVERTENCIA: Faltan variables de entorno")
        print("   Crea un archivo .env con todas las variables requeridas")
        return False

    print("\n✅ Todas las variables están configuradas")
    return True


def probar_conexion(manager, settings):
    """Prueba la autenticación con Odoo"""
    print("\n" + "="*60)
    print("🔌 PROBANDO CONEXIÓN A ODOO")
    print("="*60)

    print("\n⏳ Intentando conectar...")
    result = manager.authenticate_odoo(
        settings.ODOO_URL, settings.ODOO_DB, settings.ODOO_USER, settings.ODOO_PASSWORD
    )

    if result.get('success'):
        print("✅ ¡CONEXIÓN EXITOSA!")
        print(f"   URL: {settings.ODOO_URL}")
        print(f"   Base de datos: {settings.ODOO_DB}")
        print(f"   Usuario: {settings.ODOO_USER}")
        print(f"   UID: {result['uid']}")
        return True

    print("❌ NO SE PUDO CONECTAR")
    print(f"   Error: {result.get('error')}")
    return False


def probar_extraccion_datos(manager, settings):
    """Prueba la lectura de órdenes de venta"""
    print("\n" + "="*60)
    print("📊 PROBANDO EXTRACCIÓN DE DATOS")
    print("="*60)

    print("\n⏳ Obteniendo órdenes de venta...")
    result = manager.fetch_sales_orders(
        settings.ODOO_URL, settings.ODOO_DB, settings.ODOO_USER, settings.ODOO_PASSWORD,
        limit=5
    )

    if not result.get('success'):
        print(f"❌ ERROR: {result.get('error')}")
        return False

    ordenes = result['data']
    print(f"✅ Se obtuvieron {len(ordenes)} de {result['count']} órdenes (límite 5)")
    if ordenes:
        orden = ordenes[0]
        print("   Ejemplo:")
        print(f"   - Orden: {orden['name']}")
        print(f"   - Cliente: {orden['customer']}")
        print(f"   - Total: {orden['total']:,.2f} {orden['currency']}")
        print(f"   - Estado: {orden['state']}")
    return True


def main(settings=None, manager=None):
    """
    Ejecuta todos los diagnósticos.

    Returns:
        int: 0 si todo funciona, 1 si hay problemas
    """
    settings = settings or default_settings
    manager = manager or OdooManager.from_settings(settings)

    print("\n╔" + "="*58 + "╗")
    print("║  🔧 DIAGNÓSTICO COMPLETO - NETZERO BACKEND               ║")
    print("╚" + "="*58 + "╝")

    # 1. Verificar variables de entorno
    env_ok = verificar_env(settings)

    # 2. Probar conexión
    if env_ok:
        conexion_ok = probar_conexion(manager, settings)
    else:
        print("\n⚠️  Saltando prueba de conexión (falta configuración)")
        conexion_ok = False

    # 3. Probar extracción de datos
    if conexion_ok:
        datos_ok = probar_extraccion_datos(manager, settings)
    else:
        print("\n⚠️  Saltando prueba de datos (no hay conexión)")
        datos_ok = False

    # Resumen final
    print("\n" + "="*60)
    print("📊 RESUMEN DEL DIAGNÓSTICO")
    print("="*60)

    print(f"\n  {'✅' if env_ok else '❌'} Variables de entorno")
    print(f"  {'✅' if conexion_ok else '❌'} Conexión a Odoo")
    print(f"  {'✅' if datos_ok else '❌'} Extracción de datos")

    if env_ok and conexion_ok and datos_ok:
        print("\n✅ ¡TODO ESTÁ FUNCIONANDO CORRECTAMENTE!")
        print("\n" + "="*60 + "\n")
        return 0

    print("\n⚠️  HAY PROBLEMAS QUE RESOLVER:")
    if not env_ok:
        print("   - Configura el archivo .env con las credenciales de prueba")
    if not conexion_ok:
        print("   - Verifica la URL, base de datos y credenciales de Odoo")
    if not datos_ok:
        print("   - Revisa los logs de error anteriores")
    print("\n" + "="*60 + "\n")
    return 1


if __name__ == '__main__':
    sys.exit(main())
