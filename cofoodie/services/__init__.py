# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones sobre los backends
# 2. Aplican las reglas de negocio (usuario duplicado, cascadas)
# 3. Los servicios NO conocen el tipo de almacenamiento (local/remoto)
#
# ESTRUCTURA:
# ├── storage_service.py  → Fachada de persistencia (CRUD por entidad, sesión)
# ├── endpoint_service.py → Lado servidor del protocolo {action, data}
# ├── report_service.py   → Agrupación de pedidos por día/semana/mes
# └── seed_service.py     → Menús iniciales
# ==============================================================================

from cofoodie.services.storage_service import (
    StorageService,
    StorageError,
    DuplicateUsernameError,
)
from cofoodie.services.endpoint_service import EndpointService, UnknownActionError
from cofoodie.services.report_service import ReportService
from cofoodie.services.seed_service import seed_database

__all__ = [
    'StorageService',
    'StorageError',
    'DuplicateUsernameError',
    'EndpointService',
    'UnknownActionError',
    'ReportService',
    'seed_database',
]
