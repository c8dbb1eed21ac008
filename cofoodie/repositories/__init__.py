# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia.
# Los servicios dependen de IStorageBackend, no de una implementación.
#
# ESTRUCTURA:
# ├── interfaces.py        → Protocolos (contratos de los backends)
# ├── base.py              → KeyValueStore y BaseRepository (archivos JSON)
# ├── local_repository.py  → Backend local (modo desarrollo)
# ├── remote_repository.py → Backend remoto (endpoint HTTP JSON)
# └── sheet_repository.py  → Libro de hojas del endpoint
# ==============================================================================

# Interfaces
from .interfaces import (
    IKeyValueStore,
    IStorageBackend,
    ISheetRepository,
    COLLECTIONS,
    ORDERS,
    MENUS,
    EMPLOYEES,
    ANNOUNCEMENTS,
    ADMINS,
)

# Implementaciones
from .base import BaseRepository, KeyValueStore
from .local_repository import LocalStorageBackend, STORAGE_KEYS
from .remote_repository import RemoteStorageBackend
from .sheet_repository import SheetRepository

__all__ = [
    # Interfaces
    'IKeyValueStore',
    'IStorageBackend',
    'ISheetRepository',
    'COLLECTIONS',
    'ORDERS',
    'MENUS',
    'EMPLOYEES',
    'ANNOUNCEMENTS',
    'ADMINS',

    # Clases base
    'BaseRepository',
    'KeyValueStore',

    # Implementaciones
    'LocalStorageBackend',
    'RemoteStorageBackend',
    'SheetRepository',
    'STORAGE_KEYS',
]
