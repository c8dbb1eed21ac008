# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# Este archivo es el punto de entrada para servidores WSGI como Gunicorn.
#
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# El endpoint guarda sus datos en COFOODIE_WORKBOOK_FILE.
# Los clientes apuntan COFOODIE_SCRIPT_URL a la URL de este servidor.
# ==============================================================================

from cofoodie.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
