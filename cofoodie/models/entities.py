# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia.
#
# FORMATO DE ALMACENAMIENTO:
# Tanto el almacenamiento local como el endpoint remoto guardan cada registro
# como un objeto JSON con claves camelCase (employeeName, dateStr, ...).
# to_dict()/from_dict() hacen esa conversión y son inversas exactas:
# - Los campos opcionales sin valor NO se escriben (ni siquiera como null)
# - Las claves desconocidas se conservan en `extra`
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Union
from enum import Enum


# ==============================================================================
# ENUMERACIONES - Estados y tipos válidos
# ==============================================================================

class OrderStatus(str, Enum):
    """Estados posibles de un pedido."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class SessionRole(str, Enum):
    """Roles de sesión del navegador/cliente."""
    USER = "USER"
    ADMIN = "ADMIN"


class TabType(str, Enum):
    """Pestañas por defecto del menú."""
    FOOD = "FOOD"
    DRINKS = "DRINKS"
    GROUP_BUY = "GROUP_BUY"


# Etiqueta usada para pedidos sin categoría
UNCATEGORIZED_LABEL = '未分類'


def _split_extra(data: Dict[str, Any], known: frozenset) -> Dict[str, Any]:
    """Devuelve las claves no reconocidas de un registro."""
    return {k: v for k, v in data.items() if k not in known}


# ==============================================================================
# PEDIDOS
# ==============================================================================

@dataclass
class OrderItem:
    """
    Línea de un pedido.

    Attributes:
        id: Identificador generado por el cliente
        name: Nombre del producto
        note: Nota libre (sin hielo, poco azúcar, ...)
        price: Precio de la línea
    """
    id: str
    name: str
    note: str = ''
    price: float = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'name', 'note', 'price'])

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = dict(self.extra)
        d.update({
            'id': self.id,
            'name': self.name,
            'note': self.note,
            'price': self.price,
        })
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderItem':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            note=data.get('note', ''),
            price=data.get('price', 0),
            extra=_split_extra(data, cls._KEYS),
        )


@dataclass
class Order:
    """
    Pedido de un empleado.

    `total_amount` lo calcula quien crea el pedido; la capa de
    persistencia nunca lo recalcula a partir de `items`.
    Solo `status` e `is_paid` cambian después de creado.

    Attributes:
        id: Identificador generado por el cliente (timestamp en ms)
        employee_name: Nombre del empleado que pidió
        items: Líneas del pedido (orden significativo)
        total_amount: Monto total
        timestamp: Momento de creación en milisegundos Unix
        status: Estado del pedido (str crudo si no es un OrderStatus conocido)
        date_str: Día del pedido (YYYY-MM-DD), clave de agrupación
        category_label: Etiqueta del menú (訂餐, 訂飲料, ...)
        is_paid: Estado de pago
    """
    id: str
    employee_name: str
    items: List[OrderItem] = field(default_factory=list)
    total_amount: float = 0
    timestamp: int = 0
    status: Union[OrderStatus, str] = OrderStatus.PENDING
    date_str: str = ''
    category_label: Optional[str] = None
    is_paid: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset([
        'id', 'employeeName', 'items', 'totalAmount', 'timestamp',
        'status', 'dateStr', 'categoryLabel', 'isPaid',
    ])

    @property
    def paid(self) -> bool:
        """True si el pedido está marcado como pagado."""
        return bool(self.is_paid)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = dict(self.extra)
        d.update({
            'id': self.id,
            'employeeName': self.employee_name,
            'items': [item.to_dict() for item in self.items],
            'totalAmount': self.total_amount,
            'timestamp': self.timestamp,
            'status': self.status.value if isinstance(self.status, Enum) else self.status,
            'dateStr': self.date_str,
        })
        if self.category_label is not None:
            d['categoryLabel'] = self.category_label
        if self.is_paid is not None:
            d['isPaid'] = self.is_paid
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        """Crea instancia desde diccionario."""
        status_str = data.get('status', OrderStatus.PENDING.value)
        try:
            status = OrderStatus(status_str)
        except ValueError:
            # Estado ajeno al enum: se conserva tal cual para reescribirlo igual
            status = status_str
        return cls(
            id=str(data.get('id', '')),
            employee_name=data.get('employeeName', ''),
            items=[OrderItem.from_dict(i) for i in data.get('items') or []],
            total_amount=data.get('totalAmount', 0),
            timestamp=data.get('timestamp', 0),
            status=status,
            date_str=data.get('dateStr', ''),
            category_label=data.get('categoryLabel'),
            is_paid=data.get('isPaid'),
            extra=_split_extra(data, cls._KEYS),
        )


# ==============================================================================
# MENÚS
# ==============================================================================

@dataclass
class MenuOption:
    """Opción con precio fijo dentro de un menú."""
    id: str
    label: str
    price: float = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'label', 'price'])

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.extra)
        d.update({'id': self.id, 'label': self.label, 'price': self.price})
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MenuOption':
        return cls(
            id=str(data.get('id', '')),
            label=data.get('label', ''),
            price=data.get('price', 0),
            extra=_split_extra(data, cls._KEYS),
        )


@dataclass
class MenuConfig:
    """
    Configuración del menú de un día.

    Attributes:
        image_url: Imagen del menú
        shop_name: Nombre del local
        date: Día del menú (YYYY-MM-DD)
        cutoff_time: Hora límite de pedidos (HH:mm), opcional
        options: Opciones con precio, opcional
    """
    image_url: str = ''
    shop_name: str = ''
    date: str = ''
    cutoff_time: Optional[str] = None
    options: Optional[List[MenuOption]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['imageUrl', 'shopName', 'date', 'cutoffTime', 'options'])

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = dict(self.extra)
        d.update({
            'imageUrl': self.image_url,
            'shopName': self.shop_name,
            'date': self.date,
        })
        if self.cutoff_time is not None:
            d['cutoffTime'] = self.cutoff_time
        if self.options is not None:
            d['options'] = [o.to_dict() for o in self.options]
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MenuConfig':
        """Crea instancia desde diccionario."""
        options = data.get('options')
        return cls(
            image_url=data.get('imageUrl', ''),
            shop_name=data.get('shopName', ''),
            date=data.get('date', ''),
            cutoff_time=data.get('cutoffTime'),
            options=[MenuOption.from_dict(o) for o in options] if options is not None else None,
            extra=_split_extra(data, cls._KEYS),
        )


@dataclass
class MenuCategory:
    """
    Una pestaña de menú para un día concreto.

    La combinación etiqueta + fecha representa la ventana de pedidos de
    ese día. La etiqueta NO es única entre categorías.
    """
    id: str
    label: str
    config: MenuConfig = field(default_factory=MenuConfig)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'label', 'config'])

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = dict(self.extra)
        d.update({
            'id': self.id,
            'label': self.label,
            'config': self.config.to_dict(),
        })
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MenuCategory':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            label=data.get('label', ''),
            config=MenuConfig.from_dict(data.get('config') or {}),
            extra=_split_extra(data, cls._KEYS),
        )


# ==============================================================================
# EMPLEADOS Y ANUNCIOS
# ==============================================================================

@dataclass
class Employee:
    """Empleado que puede pedir. El orden de la lista es el orden manual."""
    id: str
    name: str
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'name'])

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.extra)
        d.update({'id': self.id, 'name': self.name})
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Employee':
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            extra=_split_extra(data, cls._KEYS),
        )


@dataclass
class Announcement:
    """
    Anuncio del tablero.

    El orden de la lista es la prioridad de visualización;
    `is_active` controla si se muestra.
    """
    id: str
    content: str
    is_active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'content', 'isActive'])

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.extra)
        d.update({'id': self.id, 'content': self.content, 'isActive': self.is_active})
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Announcement':
        return cls(
            id=str(data.get('id', '')),
            content=data.get('content', ''),
            is_active=bool(data.get('isActive', True)),
            extra=_split_extra(data, cls._KEYS),
        )


# ==============================================================================
# ADMINISTRADORES Y SESIÓN
# ==============================================================================

@dataclass
class AdminAccount:
    """
    Cuenta de administrador.

    Attributes:
        id: Identificador
        username: Nombre de login (único en la colección)
        password: Contraseña en texto plano
        name: Nombre visible
        is_super_admin: True solo para la cuenta semilla `sysop`
    """
    id: str
    username: str
    password: str
    name: str = ''
    is_super_admin: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = frozenset(['id', 'username', 'password', 'name', 'isSuperAdmin'])

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = dict(self.extra)
        d.update({
            'id': self.id,
            'username': self.username,
            'password': self.password,
            'name': self.name,
            'isSuperAdmin': self.is_super_admin,
        })
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdminAccount':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            username=data.get('username', ''),
            password=data.get('password', ''),
            name=data.get('name', ''),
            is_super_admin=bool(data.get('isSuperAdmin', False)),
            extra=_split_extra(data, cls._KEYS),
        )


@dataclass
class Session:
    """Sesión local del cliente. Nunca se envía al backend remoto."""
    role: Optional[SessionRole] = None
    user_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == SessionRole.ADMIN


@dataclass
class AdminSettings:
    """Estado de vinculación con la cuenta de Google (solo local)."""
    is_google_bound: bool = False
    google_account_name: str = ''
    google_account_type: str = 'PERSONAL'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isGoogleBound': self.is_google_bound,
            'googleAccountName': self.google_account_name,
            'googleAccountType': self.google_account_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdminSettings':
        return cls(
            is_google_bound=bool(data.get('isGoogleBound', False)),
            google_account_name=data.get('googleAccountName', ''),
            google_account_type=data.get('googleAccountType', 'PERSONAL'),
        )
