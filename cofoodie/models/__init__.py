# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Beneficios:
#   - Type hints para mejor documentación y autocompletado
#   - Serialización exacta al formato camelCase del almacenamiento
#   - Independiente del backend (local o remoto)
# ==============================================================================

from .entities import (
    # Pedidos
    Order,
    OrderItem,
    OrderStatus,

    # Menús
    MenuCategory,
    MenuConfig,
    MenuOption,
    TabType,

    # Personas y anuncios
    Employee,
    Announcement,

    # Administración
    AdminAccount,
    AdminSettings,
    Session,
    SessionRole,

    UNCATEGORIZED_LABEL,
)

__all__ = [
    # Pedidos
    'Order',
    'OrderItem',
    'OrderStatus',

    # Menús
    'MenuCategory',
    'MenuConfig',
    'MenuOption',
    'TabType',

    # Personas y anuncios
    'Employee',
    'Announcement',

    # Administración
    'AdminAccount',
    'AdminSettings',
    'Session',
    'SessionRole',

    'UNCATEGORIZED_LABEL',
]
