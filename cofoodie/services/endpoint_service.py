# ==============================================================================
# SERVICIO DEL ENDPOINT - Despacho de acciones del backend remoto
# ==============================================================================
# Implementa el lado servidor del protocolo {action, data}.
#
# CONCURRENCIA:
# Cada petición se procesa COMPLETA bajo un único lock global del proceso
# (espera acotada, por defecto 10 s) que se libera siempre al salir, incluso
# con error. Una escritura de empleados bloquea una de pedidos: no hay locks
# por colección ni por fila.
#
# ERRORES:
# Cualquier excepción (JSON inválido, acción desconocida, ...) se devuelve
# como {"status": "error", "message": "..."} y NUNCA como estado HTTP de
# error; el cliente detecta el fallo por la forma de la respuesta.
# ==============================================================================

import json
import logging
import threading
from typing import Any, Dict, List

from cofoodie.performance_logger import profile_function
from cofoodie.repositories.interfaces import ISheetRepository

logger = logging.getLogger(__name__)


# Hojas del libro
SHEETS = {
    'ORDERS': 'Orders',
    'MENUS': 'Menus',
    'EMPLOYEES': 'Employees',
    'ANNOUNCEMENTS': 'Announcements',
    'ADMINS': 'Admins',
    'CONFIG': 'Config',
}

# Acción → hoja que reemplaza completa
REPLACE_SHEETS = {
    'UPDATE_ALL_ORDERS': SHEETS['ORDERS'],
    'UPDATE_ALL_MENUS': SHEETS['MENUS'],
    'UPDATE_ALL_EMPLOYEES': SHEETS['EMPLOYEES'],
    'UPDATE_ALL_ANNOUNCEMENTS': SHEETS['ANNOUNCEMENTS'],
    'UPDATE_ALL_ADMINS': SHEETS['ADMINS'],
}

HEALTH_TEXT = 'Cofoodie Backend is Active.'

# Lock global: serializa TODAS las peticiones del proceso
_script_lock = threading.Lock()


class UnknownActionError(Exception):
    """Acción fuera del protocolo."""

    def __init__(self, action: Any):
        self.action = action
        super().__init__(f'Unknown Action: {action}')


def extract_readable_info(sheet_name: str, item: Dict[str, Any]) -> List[Any]:
    """
    Columnas B.. de una fila, solo para lectura humana en la hoja.

    Nunca se leen de vuelta; la fuente de verdad es la columna A.
    """
    if not isinstance(item, dict):
        return []
    if sheet_name == SHEETS['ORDERS']:
        return [
            item.get('dateStr'),
            item.get('employeeName'),
            item.get('categoryLabel'),
            item.get('totalAmount'),
            item.get('status'),
            'Paid' if item.get('isPaid') else 'Unpaid',
        ]
    if sheet_name == SHEETS['EMPLOYEES']:
        return [item.get('name')]
    if sheet_name == SHEETS['MENUS']:
        return [item.get('label'), (item.get('config') or {}).get('shopName')]
    if sheet_name == SHEETS['ADMINS']:
        return [item.get('username'), item.get('name')]
    return []


def encode_row(sheet_name: str, item: Any) -> List[Any]:
    """Fila completa: JSON en columna A + columnas legibles."""
    return [json.dumps(item, ensure_ascii=False)] + extract_readable_info(sheet_name, item)


class EndpointService:
    """
    Despachador de acciones del endpoint remoto.

    Uso:
        service = EndpointService(SheetRepository(path))
        result = service.handle_raw(request_body)
    """

    def __init__(self, sheet_repo: ISheetRepository, lock_timeout: float = 10):
        """
        Args:
            sheet_repo: Libro de hojas donde se guardan los datos
            lock_timeout: Espera máxima del lock global en segundos
        """
        self.sheet_repo = sheet_repo
        self.lock_timeout = lock_timeout

    # =========================================================================
    # PUNTO DE ENTRADA
    # =========================================================================

    def handle_raw(self, raw_body: str, context: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Procesa el cuerpo crudo de un POST bajo el lock global.

        Args:
            raw_body: Texto JSON {"action": ..., "data": ...}
            context: Dict opcional donde se deja la acción leída (para logs)

        Returns:
            Resultado de la acción, o {'status': 'error', 'message': ...}
        """
        acquired = _script_lock.acquire(timeout=self.lock_timeout)
        if not acquired:
            # Igual que la hoja de producción: se procesa aunque no haya lock
            logger.warning("No se obtuvo el lock global en %.1f s", self.lock_timeout)
        try:
            request = json.loads(raw_body)
            if context is not None and isinstance(request, dict):
                context['action'] = request.get('action')
            return self.handle_request(request)
        except Exception as e:
            logger.error("Error procesando petición: %s", e)
            return {'status': 'error', 'message': str(e)}
        finally:
            if acquired:
                _script_lock.release()

    @profile_function(name='endpoint.handle_request')
    def handle_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Enruta una petición {action, data} ya parseada.

        Raises:
            UnknownActionError: Si la acción no pertenece al protocolo
        """
        if not isinstance(request, dict):
            raise ValueError('Request body must be a JSON object')
        action = request.get('action')
        data = request.get('data')

        self.sheet_repo.ensure_sheets(list(SHEETS.values()))

        if action == 'GET_ALL_DATA':
            return self.get_all_data()
        if action == 'SAVE_ORDER':
            return self.append_row(SHEETS['ORDERS'], data)
        if action in REPLACE_SHEETS:
            return self.replace_sheet_data(REPLACE_SHEETS[action], data)
        if action == 'UPDATE_CONFIG':
            return self.update_config(data)
        raise UnknownActionError(action)

    # =========================================================================
    # CONTROLADORES
    # =========================================================================

    def get_all_data(self) -> Dict[str, Any]:
        return {
            'orders': self.get_sheet_data(SHEETS['ORDERS']),
            'menus': self.get_sheet_data(SHEETS['MENUS']),
            'employees': self.get_sheet_data(SHEETS['EMPLOYEES']),
            'announcements': self.get_sheet_data(SHEETS['ANNOUNCEMENTS']),
            'admins': self.get_sheet_data(SHEETS['ADMINS']),
            'config': self.get_config(),
        }

    def append_row(self, sheet_name: str, item: Any) -> Dict[str, Any]:
        self.sheet_repo.append_row(sheet_name, encode_row(sheet_name, item))
        return {'success': True}

    def replace_sheet_data(self, sheet_name: str, items: Any) -> Dict[str, Any]:
        """Borra la hoja y escribe una fila por registro."""
        rows = [encode_row(sheet_name, item) for item in (items or [])]
        self.sheet_repo.replace_rows(sheet_name, rows)
        return {'success': True}

    def get_sheet_data(self, sheet_name: str) -> List[Any]:
        """
        Lee los registros de una hoja desde la columna A.
        Las filas que no se pueden parsear se descartan.
        """
        records = []
        for row in self.sheet_repo.get_rows(sheet_name):
            if not row:
                continue
            try:
                item = json.loads(row[0])
            except (TypeError, ValueError):
                continue
            if item is not None:
                records.append(item)
        return records

    def update_config(self, new_config: Any) -> Dict[str, Any]:
        """Guarda la configuración completa en A1 de la hoja Config."""
        self.sheet_repo.replace_rows(SHEETS['CONFIG'], [[json.dumps(new_config, ensure_ascii=False)]])
        return {'success': True}

    def get_config(self) -> Dict[str, Any]:
        rows = self.sheet_repo.get_rows(SHEETS['CONFIG'])
        if not rows or not rows[0]:
            return {}
        try:
            config = json.loads(rows[0][0])
        except (TypeError, ValueError):
            return {}
        return config if isinstance(config, dict) else {}
