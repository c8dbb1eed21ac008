# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide rendimiento del endpoint y de las llamadas a los backends sin afectar
# la operación. Guarda logs legibles en logs/ para análisis humano.
#
# ACTIVAR/DESACTIVAR: variable de entorno COFOODIE_PROFILING (1/0)
# ==============================================================================

import os
import time
import threading
from datetime import datetime
from functools import wraps
from collections import defaultdict

from cofoodie import config

# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

ENABLE_PROFILING = config.ENABLE_PROFILING

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

LOGS_DIR = config.LOGS_DIR

PERFORMANCE_LOG = os.path.join(LOGS_DIR, 'performance.log')
SLOW_ROUTES_LOG = os.path.join(LOGS_DIR, 'slow_routes.log')
SLOW_FUNCTIONS_LOG = os.path.join(LOGS_DIR, 'slow_functions.log')

# Nombres legibles de las acciones del endpoint
ACTION_NAMES = {
    'GET_ALL_DATA': 'Descargar todos los datos',
    'SAVE_ORDER': 'Guardar pedido',
    'UPDATE_ALL_ORDERS': 'Reemplazar pedidos',
    'UPDATE_ALL_MENUS': 'Reemplazar menús',
    'UPDATE_ALL_EMPLOYEES': 'Reemplazar empleados',
    'UPDATE_ALL_ANNOUNCEMENTS': 'Reemplazar anuncios',
    'UPDATE_ALL_ADMINS': 'Reemplazar administradores',
    'UPDATE_CONFIG': 'Actualizar configuración',
}


# ═══════════════════════════════════════════════════════════════════════════
# ESTADÍSTICAS DE FUNCIONES (en memoria)
# ═══════════════════════════════════════════════════════════════════════════

# Estructura: {nombre_funcion: {calls: int, total_time: float, max_time: float}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()
_log_lock = threading.Lock()


# ═══════════════════════════════════════════════════════════════════════════
# FUNCIONES DE LOGGING
# ═══════════════════════════════════════════════════════════════════════════

def _get_timestamp():
    """Obtiene timestamp legible"""
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _write_log(filepath, content):
    """Escribe contenido a un archivo de log (thread-safe)"""
    try:
        with _log_lock:
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
            with open(filepath, 'a', encoding='utf-8') as f:
                f.write(content)
    except OSError:
        pass  # Errores de escritura de logs se ignoran


def _get_action_name(method, path, action=None):
    """Nombre legible de la petición; si no se conoce, la ruta raw."""
    if action:
        return ACTION_NAMES.get(action, action)
    return f"{method} {path}"


# ═══════════════════════════════════════════════════════════════════════════
# 1️⃣ PROFILING DE RUTAS (Middleware Flask)
# ═══════════════════════════════════════════════════════════════════════════

def log_route_performance(method, path, action, time_ms):
    """
    Registra el rendimiento de una petición en performance.log

    Args:
        method: GET, POST, etc.
        path: Ruta solicitada
        action: Acción del protocolo (si la hubo)
        time_ms: Tiempo en milisegundos
    """
    if not ENABLE_PROFILING:
        return

    log_entry = f"""
════════════════════════════════════════
[PERFORMANCE] {_get_timestamp()}
────────────────────────────────────────
Acción: {_get_action_name(method, path, action)}
Ruta: {method} {path}
Tiempo: {time_ms:.0f} ms
"""

    _write_log(PERFORMANCE_LOG, log_entry)


def log_slow_route(method, path, action, time_ms, level='WARNING'):
    """
    Registra una petición lenta en slow_routes.log

    Args:
        level: 'WARNING' (>300ms) o 'CRITICAL' (>700ms)
    """
    if not ENABLE_PROFILING:
        return

    severity = 'LENTA' if level == 'WARNING' else 'MUY LENTA'
    threshold = THRESHOLD_WARNING if level == 'WARNING' else THRESHOLD_CRITICAL

    log_entry = f"""
[{level}] {_get_timestamp()}
────────────────────────────────────────
Petición {severity}: {_get_action_name(method, path, action)}
Detalle: {method} {path}
Tiempo: {time_ms:.0f} ms (umbral: {threshold} ms)
────────────────────────────────────────
"""

    _write_log(SLOW_ROUTES_LOG, log_entry)


# ═══════════════════════════════════════════════════════════════════════════
# 2️⃣ HOOKS PARA FLASK (before/after request)
# ═══════════════════════════════════════════════════════════════════════════

def init_profiling(app):
    """
    Inicializa el sistema de profiling en una app Flask.
    Registra hooks before_request y after_request.

    La vista puede dejar la acción despachada en g.action para que el log
    muestre un nombre legible.

    Uso:
        from cofoodie.performance_logger import init_profiling
        init_profiling(app)
    """
    if not ENABLE_PROFILING:
        return

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request

        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000  # ms
        action = getattr(g, 'action', None)

        log_route_performance(request.method, request.path, action, elapsed)

        if elapsed >= THRESHOLD_CRITICAL:
            log_slow_route(request.method, request.path, action, elapsed, 'CRITICAL')
        elif elapsed >= THRESHOLD_WARNING:
            log_slow_route(request.method, request.path, action, elapsed, 'WARNING')

        return response


# ═══════════════════════════════════════════════════════════════════════════
# 3️⃣ DECORADOR PARA FUNCIONES CLAVE
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Decorador para medir rendimiento de funciones críticas.

    Uso:
        @profile_function
        def mi_funcion():
            ...

        @profile_function(name="remote.api_call")
        def api_call():
            ...

    Registra:
        - Cantidad de llamadas
        - Tiempo promedio
        - Tiempo máximo
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn

        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000

                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    if elapsed_ms > stats['max_time']:
                        stats['max_time'] = elapsed_ms

                if elapsed_ms >= THRESHOLD_WARNING:
                    _log_slow_function_call(func_name, elapsed_ms)

        return wrapper

    # Permitir uso sin paréntesis: @profile_function
    if func is not None:
        return decorator(func)
    return decorator


def _log_slow_function_call(func_name, time_ms):
    """Registra una llamada lenta a una función"""
    severity = 'CRÍTICO' if time_ms >= THRESHOLD_CRITICAL else 'LENTO'

    log_entry = f"""
[{severity}] {_get_timestamp()}
Función: {func_name}
Tiempo: {time_ms:.0f} ms
────────────────────────────────────────
"""

    _write_log(SLOW_FUNCTIONS_LOG, log_entry)


# ═══════════════════════════════════════════════════════════════════════════
# 4️⃣ REPORTE DE ESTADÍSTICAS
# ═══════════════════════════════════════════════════════════════════════════

def get_function_stats():
    """
    Obtiene estadísticas de todas las funciones perfiladas.

    Returns:
        dict: {nombre: {calls, avg_time, max_time}}
    """
    with _stats_lock:
        result = {}
        for func_name, stats in _function_stats.items():
            calls = stats['calls']
            avg = stats['total_time'] / calls if calls > 0 else 0
            result[func_name] = {
                'calls': calls,
                'avg_time': round(avg, 2),
                'max_time': round(stats['max_time'], 2)
            }
        return result


def write_function_stats_report():
    """Escribe un reporte legible de estadísticas en slow_functions.log"""
    if not ENABLE_PROFILING:
        return

    stats = get_function_stats()
    if not stats:
        return

    sorted_stats = sorted(stats.items(), key=lambda x: x[1]['avg_time'], reverse=True)

    report = f"""
REPORTE DE RENDIMIENTO DE FUNCIONES
Generado: {_get_timestamp()}

"""

    for func_name, data in sorted_stats:
        status = ''
        if data['avg_time'] >= THRESHOLD_CRITICAL:
            status = ' CRÍTICO'
        elif data['avg_time'] >= THRESHOLD_WARNING:
            status = ' LENTO'
        elif data['max_time'] >= THRESHOLD_CRITICAL:
            status = ' PICOS ALTOS'

        report += f"""FUNCIÓN: {func_name}{status}
  Llamadas totales: {data['calls']}
  Tiempo promedio:  {data['avg_time']:.0f} ms
  Tiempo máximo:    {data['max_time']:.0f} ms

"""

    _write_log(SLOW_FUNCTIONS_LOG, report)


def reset_stats():
    """Reinicia todas las estadísticas (útil para testing)"""
    with _stats_lock:
        _function_stats.clear()


def get_log_summary():
    """
    Obtiene un resumen del estado actual de los logs.

    Returns:
        dict: {archivo: {exists, size_kb, lines}}
    """
    summary = {}
    for name, path in [('performance', PERFORMANCE_LOG),
                       ('slow_routes', SLOW_ROUTES_LOG),
                       ('slow_functions', SLOW_FUNCTIONS_LOG)]:
        if os.path.exists(path):
            size = os.path.getsize(path) / 1024  # KB
            with open(path, 'r', encoding='utf-8') as f:
                lines = sum(1 for _ in f)
            summary[name] = {'exists': True, 'size_kb': round(size, 2), 'lines': lines}
        else:
            summary[name] = {'exists': False, 'size_kb': 0, 'lines': 0}
    return summary


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'write_function_stats_report',
    'reset_stats',
    'get_log_summary',
]
