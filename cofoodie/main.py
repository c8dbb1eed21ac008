# ==============================================================================
# ENDPOINT REMOTO - Aplicación Flask
# ==============================================================================
# Un único punto de entrada multiplexa todas las acciones:
#   GET  /  → texto de salud
#   POST /  → cuerpo {"action": ..., "data": ...}, respuesta JSON
#
# La respuesta es SIEMPRE HTTP 200: los errores viajan en el cuerpo como
# {"status": "error", "message": ...}.
# ==============================================================================

import atexit
import os

from flask import Flask, Response, g, jsonify, request

from cofoodie.app_container import AppContainer
from cofoodie.config import Settings
from cofoodie.performance_logger import init_profiling, write_function_stats_report
from cofoodie.services.endpoint_service import HEALTH_TEXT


def create_app(container: AppContainer = None) -> Flask:
    """
    Crea la aplicación del endpoint.

    Args:
        container: Contenedor ya construido (por defecto, desde el entorno)
    """
    container = container or AppContainer(Settings.from_env())
    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions['cofoodie'] = container

    # Mide rendimiento de cada acción. Logs en logs/
    init_profiling(app)

    @app.route('/', methods=['GET'])
    def health():
        return Response(HEALTH_TEXT, mimetype='text/plain')

    @app.route('/', methods=['POST'])
    def dispatch():
        # El cliente envía text/plain; se lee el cuerpo crudo
        raw = request.get_data(as_text=True)
        context = {}
        result = container.endpoint_service.handle_raw(raw, context)
        g.action = context.get('action')
        return jsonify(result)

    return app


if __name__ == "__main__":
    # Configuración para desarrollo local
    # En producción usar WSGI (gunicorn wsgi:app)
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    PORT = int(os.environ.get('FLASK_PORT', 5000))

    atexit.register(write_function_stats_report)

    if not DEBUG:
        print(f"\n{'='*50}")
        print(f"  Endpoint iniciado en http://{HOST}:{PORT}")
        print(f"  Configura COFOODIE_SCRIPT_URL=http://localhost:{PORT}/")
        print(f"{'='*50}\n")

    create_app().run(debug=DEBUG, host=HOST, port=PORT)
