# ==============================================================================
# BACKEND REMOTO - Endpoint HTTP JSON respaldado por hoja de cálculo
# ==============================================================================
# Cada operación es UN POST al endpoint con el cuerpo:
#     {"action": "<ACCIÓN>", "data": <payload>}
#
# El endpoint solo ofrece:
#   - GET_ALL_DATA       → todas las colecciones + config de una vez
#   - SAVE_ORDER         → agrega una fila de pedido
#   - UPDATE_ALL_*       → reemplaza una colección completa
#   - UPDATE_CONFIG      → reemplaza la configuración
#
# FALLOS: cualquier error de red, estado HTTP no exitoso o excepción se
# convierte en None. Las lecturas tratan None como colección vacía; por eso
# una caída del endpoint es indistinguible de una base vacía.
# ==============================================================================

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from cofoodie.performance_logger import profile_function
from cofoodie.repositories.interfaces import (
    ADMINS,
    ANNOUNCEMENTS,
    DEFAULT_FRONTEND_PASSWORD,
    EMPLOYEES,
    FRONTEND_PASSWORD_KEY,
    MENUS,
    ORDERS,
)

logger = logging.getLogger(__name__)


# Acciones del protocolo
ACTION_GET_ALL_DATA = 'GET_ALL_DATA'
ACTION_SAVE_ORDER = 'SAVE_ORDER'
ACTION_UPDATE_CONFIG = 'UPDATE_CONFIG'

REPLACE_ACTIONS = {
    ORDERS: 'UPDATE_ALL_ORDERS',
    MENUS: 'UPDATE_ALL_MENUS',
    EMPLOYEES: 'UPDATE_ALL_EMPLOYEES',
    ANNOUNCEMENTS: 'UPDATE_ALL_ANNOUNCEMENTS',
    ADMINS: 'UPDATE_ALL_ADMINS',
}

# El modo nube siempre se reporta como vinculado
CLOUD_ADMIN_SETTINGS = {
    'isGoogleBound': True,
    'googleAccountName': 'Cloud Mode',
    'googleAccountType': 'WORKSPACE',
}


def is_error_payload(payload: Any) -> bool:
    """True si la respuesta es el error estructurado del endpoint."""
    return isinstance(payload, dict) and payload.get('status') == 'error'


class RemoteStorageBackend:
    """
    Backend de persistencia contra el endpoint remoto.

    Uso:
        backend = RemoteStorageBackend('https://script.example.com/exec')
        orders = backend.load_collection('orders')
    """

    name = 'remote'

    def __init__(self, url: str, session: requests.Session = None, timeout: float = 30):
        """
        Args:
            url: URL del endpoint
            session: Sesión HTTP (inyectable para tests)
            timeout: Tiempo máximo por llamada en segundos
        """
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    # =========================================================================
    # LLAMADA AL ENDPOINT
    # =========================================================================

    @profile_function(name='remote.api_call')
    def api_call(self, action: str, data: Any = None) -> Optional[Any]:
        """
        Envía una acción al endpoint.

        El cuerpo va como text/plain para que el endpoint lo reciba crudo.

        Returns:
            Respuesta JSON parseada; {'success': True} si la respuesta no es
            JSON; None si la llamada falló
        """
        body = json.dumps({'action': action, 'data': data}, ensure_ascii=False)
        try:
            response = self.session.post(
                self.url,
                data=body.encode('utf-8'),
                headers={'Content-Type': 'text/plain;charset=utf-8'},
                timeout=self.timeout,
                allow_redirects=True,
            )
            if not response.ok:
                raise requests.HTTPError(f'API Error: {response.status_code}')
        except requests.RequestException as e:
            logger.error("Conexión con el endpoint falló (%s): %s", action, e)
            return None

        text = response.text
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning("Respuesta no es JSON (%s): %.200s", action, text)
            return {'success': True}

        if is_error_payload(payload):
            logger.error("El endpoint reportó error (%s): %s", action, payload.get('message'))
        return payload

    def fetch_all(self) -> Optional[Dict[str, Any]]:
        """Descarga todo el conjunto de datos (GET_ALL_DATA)."""
        payload = self.api_call(ACTION_GET_ALL_DATA)
        if not isinstance(payload, dict) or is_error_payload(payload):
            return None
        return payload

    # =========================================================================
    # COLECCIONES
    # =========================================================================

    def load_collection(self, collection: str) -> List[Dict[str, Any]]:
        """
        Obtiene una colección.

        Siempre descarga el conjunto completo y se queda con una parte.
        """
        data = self.fetch_all()
        if not data:
            return []
        records = data.get(collection)
        return records if isinstance(records, list) else []

    def save_collection(self, collection: str, records: List[Dict[str, Any]]) -> None:
        """Reemplaza la colección completa (UPDATE_ALL_*)."""
        self.api_call(REPLACE_ACTIONS[collection], list(records))

    def append_order(self, record: Dict[str, Any]) -> None:
        """Agrega un pedido (SAVE_ORDER)."""
        self.api_call(ACTION_SAVE_ORDER, record)

    # =========================================================================
    # CONFIGURACIÓN
    # =========================================================================

    def get_config(self) -> Dict[str, Any]:
        data = self.fetch_all()
        config = data.get('config') if data else None
        return config if isinstance(config, dict) else {}

    def get_frontend_password(self) -> str:
        return self.get_config().get(FRONTEND_PASSWORD_KEY) or DEFAULT_FRONTEND_PASSWORD

    def set_frontend_password(self, password: str) -> None:
        """Combina con la configuración actual y la reemplaza completa."""
        config = dict(self.get_config())
        config[FRONTEND_PASSWORD_KEY] = password
        self.api_call(ACTION_UPDATE_CONFIG, config)

    def get_admin_settings(self) -> Dict[str, Any]:
        return dict(CLOUD_ADMIN_SETTINGS)

    def set_admin_settings(self, settings: Dict[str, Any]) -> None:
        # En modo nube la vinculación es fija; no hay nada que guardar
        logger.debug("set_admin_settings ignorado en modo remoto")

    def check_connection(self) -> bool:
        """True si GET_ALL_DATA devuelve algo."""
        return bool(self.api_call(ACTION_GET_ALL_DATA))
