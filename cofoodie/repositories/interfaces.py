# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que los backends de
# almacenamiento deben implementar. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - StorageService depende de IStorageBackend, NO de una implementación
#    - Local (desarrollo) y remoto (hoja de cálculo) son intercambiables
#
# 2. TESTING
#    - Fácil crear dobles que implementen estas interfaces
#
# 3. DOCUMENTACIÓN
#    - Contratos claros de qué hace cada backend
#
# Los backends trabajan con registros crudos (dict en camelCase); la
# conversión a entidades se hace en la capa de servicios.
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


# Nombres de colección: coinciden con las claves de GET_ALL_DATA
ORDERS = 'orders'
MENUS = 'menus'
EMPLOYEES = 'employees'
ANNOUNCEMENTS = 'announcements'
ADMINS = 'admins'

COLLECTIONS = (ORDERS, MENUS, EMPLOYEES, ANNOUNCEMENTS, ADMINS)

# Clave de la contraseña del frontend dentro de la configuración remota
FRONTEND_PASSWORD_KEY = 'frontendPassword'
DEFAULT_FRONTEND_PASSWORD = '24664941'


@runtime_checkable
class IKeyValueStore(Protocol):
    """
    Almacenamiento clave → texto con semántica de localStorage.
    Usado por: LocalStorageBackend y la sesión.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Obtiene el texto de una clave o None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Guarda el texto de una clave."""
        ...

    def remove_item(self, key: str) -> None:
        """Elimina una clave."""
        ...

    def get_json(self, key: str, default: Any = None) -> Any:
        """Lee una clave JSON."""
        ...

    def set_json(self, key: str, value: Any) -> None:
        """Escribe una clave JSON."""
        ...


@runtime_checkable
class IStorageBackend(Protocol):
    """
    Contrato común de los backends de persistencia.

    Reglas:
    - load_collection nunca lanza: ante cualquier fallo retorna lista vacía
    - Las escrituras reemplazan la colección completa (save_collection)
      o agregan un pedido (append_order); no hay parches parciales
    - Las escrituras no reintentan y no notifican
    """

    name: str

    def load_collection(self, collection: str) -> List[Dict[str, Any]]:
        """Obtiene todos los registros de una colección."""
        ...

    def save_collection(self, collection: str, records: List[Dict[str, Any]]) -> None:
        """Reemplaza la colección completa."""
        ...

    def append_order(self, record: Dict[str, Any]) -> None:
        """Agrega un pedido al final."""
        ...

    def get_config(self) -> Dict[str, Any]:
        """Obtiene el mapa de configuración compartida."""
        ...

    def get_frontend_password(self) -> str:
        """Obtiene la contraseña del frontend (o la de por defecto)."""
        ...

    def set_frontend_password(self, password: str) -> None:
        """Cambia la contraseña del frontend."""
        ...

    def get_admin_settings(self) -> Dict[str, Any]:
        """Obtiene el estado de vinculación con Google."""
        ...

    def set_admin_settings(self, settings: Dict[str, Any]) -> None:
        """Guarda el estado de vinculación con Google."""
        ...

    def check_connection(self) -> bool:
        """Verifica que el almacenamiento responde."""
        ...


@runtime_checkable
class ISheetRepository(Protocol):
    """
    Interfaz del libro de hojas que respalda al endpoint remoto.
    Cada hoja es una lista de filas; la columna A guarda el JSON del registro.
    """

    def ensure_sheets(self, names: List[str]) -> None:
        """Crea las hojas que falten."""
        ...

    def get_rows(self, sheet: str) -> List[List[Any]]:
        """Obtiene todas las filas de una hoja."""
        ...

    def append_row(self, sheet: str, row: List[Any]) -> None:
        """Agrega una fila al final de una hoja."""
        ...

    def replace_rows(self, sheet: str, rows: List[List[Any]]) -> None:
        """Borra una hoja y escribe las filas dadas."""
        ...
