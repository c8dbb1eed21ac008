# ==============================================================================
# BACKEND LOCAL - Almacenamiento clave/valor (modo desarrollo)
# ==============================================================================
# Encapsula todo el acceso al almacenamiento local.
# Cada colección es UNA clave con la lista completa serializada en JSON.
#
# Si una clave nunca se escribió se devuelven datos semilla, así un entorno
# recién creado se puede usar sin pasos de aprovisionamiento.
# ==============================================================================

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List

from cofoodie.models import TabType
from cofoodie.performance_logger import profile_function
from cofoodie.repositories.interfaces import (
    ADMINS,
    ANNOUNCEMENTS,
    DEFAULT_FRONTEND_PASSWORD,
    EMPLOYEES,
    IKeyValueStore,
    MENUS,
    ORDERS,
)


STORAGE_KEYS = {
    ORDERS: 'cofoodie_orders',
    MENUS: 'cofoodie_menus_v3',
    EMPLOYEES: 'cofoodie_employees_v2',
    ANNOUNCEMENTS: 'cofoodie_announcements',
    ADMINS: 'cofoodie_admin_accounts',
    'admin_settings': 'cofoodie_admin_settings',
    'frontend_password': 'cofoodie_frontend_password',
    'session': 'cofoodie_session',
    'session_user_id': 'cofoodie_session_user_id',
}


# ═══════════════════════════════════════════════════════════════════════════════
# DATOS SEMILLA
# ═══════════════════════════════════════════════════════════════════════════════

INITIAL_EMPLOYEES = [
    {'id': '1', 'name': '王小明'},
    {'id': '2', 'name': '李美華'},
    {'id': '3', 'name': '陳大文'},
    {'id': '4', 'name': '張志豪'},
]

INITIAL_ANNOUNCEMENTS = [
    {'id': '1', 'content': '今日下午茶請在 14:00 前完成下單！', 'isActive': True},
    {'id': '2', 'content': '本週五團購項目：知名網紅蛋糕。', 'isActive': True},
]

INITIAL_ADMINS = [
    {
        'id': 'sysop',
        'username': 'sysop',
        'password': 'Admin@123',
        'name': '超級管理員',
        'isSuperAdmin': True,
    },
]

DEFAULT_ADMIN_SETTINGS = {
    'isGoogleBound': False,
    'googleAccountName': '',
    'googleAccountType': 'PERSONAL',
}


def _today_str() -> str:
    """Día actual en UTC (YYYY-MM-DD)."""
    return datetime.now(timezone.utc).date().isoformat()


def initial_menus() -> List[Dict[str, Any]]:
    """Menús semilla fechados hoy."""
    today = _today_str()
    return [
        {
            'id': TabType.FOOD.value,
            'label': '訂餐',
            'config': {'imageUrl': 'https://picsum.photos/800/600?random=1', 'shopName': '阿嬤古早味排骨飯', 'date': today},
        },
        {
            'id': TabType.DRINKS.value,
            'label': '訂飲料',
            'config': {'imageUrl': 'https://picsum.photos/800/600?random=2', 'shopName': '五桐號 - 台北通化店', 'date': today},
        },
        {
            'id': TabType.GROUP_BUY.value,
            'label': '揪團購',
            'config': {'imageUrl': 'https://picsum.photos/800/600?random=3', 'shopName': '諾貝爾奶凍捲', 'date': today},
        },
    ]


class LocalStorageBackend:
    """
    Backend de persistencia sobre un IKeyValueStore.

    Formato de cada clave:
        cofoodie_orders -> '[{"id": "...", "employeeName": "...", ...}]'
    """

    name = 'local'

    def __init__(self, store: IKeyValueStore):
        """
        Args:
            store: Almacenamiento clave/valor (carpeta local)
        """
        self.store = store

    def _seed_for(self, collection: str) -> List[Dict[str, Any]]:
        if collection == MENUS:
            return initial_menus()
        if collection == EMPLOYEES:
            return copy.deepcopy(INITIAL_EMPLOYEES)
        if collection == ANNOUNCEMENTS:
            return copy.deepcopy(INITIAL_ANNOUNCEMENTS)
        if collection == ADMINS:
            return copy.deepcopy(INITIAL_ADMINS)
        return []

    # =========================================================================
    # COLECCIONES
    # =========================================================================

    @profile_function(name='local.load_collection')
    def load_collection(self, collection: str) -> List[Dict[str, Any]]:
        """
        Obtiene todos los registros de una colección.

        Returns:
            Lista guardada, o los datos semilla si la clave nunca se escribió
        """
        key = STORAGE_KEYS[collection]
        data = self.store.get_json(key)
        if not isinstance(data, list):
            seed = self._seed_for(collection)
            # Las cuentas de administrador se persisten en la primera lectura
            if collection == ADMINS:
                self.store.set_json(key, seed)
            return seed
        return data

    @profile_function(name='local.save_collection')
    def save_collection(self, collection: str, records: List[Dict[str, Any]]) -> None:
        """Reemplaza la colección completa."""
        self.store.set_json(STORAGE_KEYS[collection], list(records))

    def append_order(self, record: Dict[str, Any]) -> None:
        """Agrega un pedido al final de la colección."""
        orders = self.load_collection(ORDERS)
        orders.append(record)
        self.save_collection(ORDERS, orders)

    # =========================================================================
    # CONFIGURACIÓN
    # =========================================================================

    def get_config(self) -> Dict[str, Any]:
        return {'frontendPassword': self.get_frontend_password()}

    def get_frontend_password(self) -> str:
        pwd = self.store.get_item(STORAGE_KEYS['frontend_password'])
        return pwd or DEFAULT_FRONTEND_PASSWORD

    def set_frontend_password(self, password: str) -> None:
        self.store.set_item(STORAGE_KEYS['frontend_password'], password)

    def get_admin_settings(self) -> Dict[str, Any]:
        data = self.store.get_json(STORAGE_KEYS['admin_settings'])
        if not isinstance(data, dict):
            return dict(DEFAULT_ADMIN_SETTINGS)
        return data

    def set_admin_settings(self, settings: Dict[str, Any]) -> None:
        self.store.set_json(STORAGE_KEYS['admin_settings'], settings)

    def check_connection(self) -> bool:
        """El almacenamiento local siempre está disponible."""
        return True
