# ==============================================================================
# SERVICIO DE ALMACENAMIENTO - Fachada única de acceso a datos
# ==============================================================================
# Todo el código de presentación hace sus operaciones de datos AQUÍ.
# El servicio no sabe si el backend es local o remoto: recibe un
# IStorageBackend ya elegido por el contenedor al arrancar.
#
# REGLA DE ESCRITURA - LEER / MODIFICAR / ESCRIBIR COMPLETO:
# Toda actualización o borrado de un registro:
#   1. Lee la colección completa
#   2. La modifica en memoria
#   3. Escribe la colección completa
# La colección guardada nunca queda escrita a medias. Dos clientes que
# escriben la misma colección a la vez: gana la última escritura.
#
# ERRORES:
# - Las lecturas nunca lanzan (fallo = colección vacía)
# - La ÚNICA validación es el usuario duplicado al crear un administrador
# - No hay reintentos ni notificaciones; quien llama vuelve a listar
# ==============================================================================

import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

from cofoodie.models import (
    AdminAccount,
    AdminSettings,
    Announcement,
    Employee,
    MenuCategory,
    MenuConfig,
    Order,
    OrderStatus,
    Session,
    SessionRole,
)
from cofoodie.repositories.interfaces import (
    ADMINS,
    ANNOUNCEMENTS,
    COLLECTIONS,
    EMPLOYEES,
    IKeyValueStore,
    IStorageBackend,
    MENUS,
    ORDERS,
)
from cofoodie.repositories.local_repository import STORAGE_KEYS


T = TypeVar('T')


class StorageError(Exception):
    """Error base de la capa de almacenamiento."""
    pass


class DuplicateUsernameError(StorageError):
    """Excepción lanzada al crear un administrador con usuario existente."""

    def __init__(self, username: str):
        self.username = username
        super().__init__('帳號已存在')


def _now_ms() -> int:
    return int(time.time() * 1000)


class StorageService:
    """
    Fachada de persistencia.

    Responsabilidades:
    - CRUD por entidad (pedidos, menús, empleados, anuncios, administradores)
    - Configuración compartida (contraseña del frontend)
    - Sesión local (nunca se envía al backend remoto)

    IMPORTANTE: La fachada NO genera ids de registros; quien llama los
    asigna antes de agregar (salvo add_menu_category, que replica el id
    MENU_<timestamp> que generaba la vista de administración).
    """

    def __init__(self, backend: IStorageBackend, session_store: IKeyValueStore):
        """
        Inicializa la fachada.

        Args:
            backend: Backend elegido (LocalStorageBackend o RemoteStorageBackend)
            session_store: Almacenamiento local para la sesión
        """
        self.backend = backend
        self.session_store = session_store

    @property
    def use_cloud(self) -> bool:
        """True si el backend activo es el remoto."""
        return self.backend.name == 'remote'

    # =========================================================================
    # UTILIDADES INTERNAS
    # =========================================================================

    def _load(self, collection: str, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
        records = self.backend.load_collection(collection) or []
        return [factory(r) for r in records if isinstance(r, dict)]

    def _save(self, collection: str, entities: List[Any]) -> None:
        self.backend.save_collection(collection, [e.to_dict() for e in entities])

    def _replace_by_id(self, collection: str, factory, updated) -> bool:
        """
        Reemplaza el registro con el mismo id.

        Returns:
            True si se encontró y se escribió la colección
        """
        items = self._load(collection, factory)
        for idx, item in enumerate(items):
            if item.id == updated.id:
                items[idx] = updated
                self._save(collection, items)
                return True
        return False

    def _delete_by_id(self, collection: str, factory, record_id: str) -> None:
        items = self._load(collection, factory)
        self._save(collection, [item for item in items if item.id != record_id])

    # =========================================================================
    # PEDIDOS
    # =========================================================================

    def get_orders(self) -> List[Order]:
        """Obtiene todos los pedidos."""
        return self._load(ORDERS, Order.from_dict)

    def save_order(self, order: Order) -> None:
        """
        Agrega un pedido nuevo.

        En modo remoto es la única escritura que usa "agregar fila" en lugar
        de reemplazar la colección.
        """
        self.backend.append_order(order.to_dict())

    def update_order_status(self, order_id: str, status: OrderStatus) -> None:
        """
        Cambia el estado de un pedido. No hace nada si el id no existe.

        Args:
            order_id: Id del pedido
            status: Nuevo estado
        """
        orders = self.get_orders()
        for order in orders:
            if order.id == order_id:
                order.status = OrderStatus(status)
                self._save(ORDERS, orders)
                return

    def toggle_order_payment(self, order_id: str) -> None:
        """Invierte is_paid de un pedido. No hace nada si el id no existe."""
        orders = self.get_orders()
        for order in orders:
            if order.id == order_id:
                order.is_paid = not order.paid
                self._save(ORDERS, orders)
                return

    def delete_orders_by_context(self, date_str: str, category_label: str) -> None:
        """
        Elimina los pedidos de un día y una categoría.

        Se usa al retirar un menú: quedan todos los pedidos cuyo
        (date_str, category_label) no coincide en AMBOS campos.
        """
        orders = self.get_orders()
        kept = [
            o for o in orders
            if not (o.date_str == date_str and o.category_label == category_label)
        ]
        self._save(ORDERS, kept)

    # =========================================================================
    # MENÚS
    # =========================================================================

    def get_menu_categories(self) -> List[MenuCategory]:
        return self._load(MENUS, MenuCategory.from_dict)

    def save_menu_categories(self, menus: List[MenuCategory]) -> None:
        self._save(MENUS, menus)

    def add_menu_category(self, label: str, config: MenuConfig, menu_id: str = None) -> MenuCategory:
        """
        Agrega un menú.

        Args:
            label: Etiqueta de la pestaña (訂餐, 訂飲料, ...)
            config: Configuración del día
            menu_id: Id opcional; por defecto MENU_<timestamp en ms>

        Returns:
            El menú agregado
        """
        menus = self.get_menu_categories()
        menu = MenuCategory(id=menu_id or f'MENU_{_now_ms()}', label=label, config=config)
        menus.append(menu)
        self.save_menu_categories(menus)
        return menu

    def update_menu_category(self, menu_id: str, label: str, config: MenuConfig) -> None:
        menus = self.get_menu_categories()
        for menu in menus:
            if menu.id == menu_id:
                menu.label = label
                menu.config = config
                self.save_menu_categories(menus)
                return

    def delete_menu_category(self, menu_id: str) -> None:
        self._delete_by_id(MENUS, MenuCategory.from_dict, menu_id)

    def retract_menu(self, menu_id: str) -> int:
        """
        Retira un menú y elimina en cascada los pedidos de ese día y etiqueta.

        Returns:
            Cantidad de pedidos eliminados (0 si el menú no existe)
        """
        menu = next((m for m in self.get_menu_categories() if m.id == menu_id), None)
        if menu is None:
            return 0
        related = [
            o for o in self.get_orders()
            if o.date_str == menu.config.date and o.category_label == menu.label
        ]
        if related:
            self.delete_orders_by_context(menu.config.date, menu.label)
        self.delete_menu_category(menu_id)
        return len(related)

    # =========================================================================
    # EMPLEADOS
    # =========================================================================

    def get_employees(self) -> List[Employee]:
        """Obtiene los empleados en su orden manual."""
        return self._load(EMPLOYEES, Employee.from_dict)

    def save_employees(self, employees: List[Employee]) -> None:
        """Guarda la lista completa (también persiste el orden manual)."""
        self._save(EMPLOYEES, employees)

    def add_employee(self, employee: Employee) -> None:
        employees = self.get_employees()
        employees.append(employee)
        self.save_employees(employees)

    def update_employee(self, employee: Employee) -> None:
        self._replace_by_id(EMPLOYEES, Employee.from_dict, employee)

    def delete_employee(self, employee_id: str) -> None:
        self._delete_by_id(EMPLOYEES, Employee.from_dict, employee_id)

    # =========================================================================
    # ANUNCIOS
    # =========================================================================

    def get_announcements(self) -> List[Announcement]:
        return self._load(ANNOUNCEMENTS, Announcement.from_dict)

    def get_active_announcements(self) -> List[Announcement]:
        """Anuncios visibles, en orden de prioridad."""
        return [a for a in self.get_announcements() if a.is_active]

    def save_announcements(self, announcements: List[Announcement]) -> None:
        self._save(ANNOUNCEMENTS, announcements)

    def add_announcement(self, announcement: Announcement) -> None:
        announcements = self.get_announcements()
        announcements.append(announcement)
        self.save_announcements(announcements)

    def update_announcement(self, announcement: Announcement) -> None:
        self._replace_by_id(ANNOUNCEMENTS, Announcement.from_dict, announcement)

    def toggle_announcement(self, announcement_id: str) -> None:
        """Activa/desactiva un anuncio. No hace nada si el id no existe."""
        announcements = self.get_announcements()
        for announcement in announcements:
            if announcement.id == announcement_id:
                announcement.is_active = not announcement.is_active
                self.save_announcements(announcements)
                return

    def delete_announcement(self, announcement_id: str) -> None:
        self._delete_by_id(ANNOUNCEMENTS, Announcement.from_dict, announcement_id)

    # =========================================================================
    # ADMINISTRADORES
    # =========================================================================

    def get_admin_accounts(self) -> List[AdminAccount]:
        return self._load(ADMINS, AdminAccount.from_dict)

    def save_admin_accounts(self, admins: List[AdminAccount]) -> None:
        self._save(ADMINS, admins)

    def add_admin_account(self, account: AdminAccount) -> None:
        """
        Agrega un administrador.

        Raises:
            DuplicateUsernameError: Si el usuario ya existe (la colección
                no se modifica)
        """
        admins = self.get_admin_accounts()
        if any(a.username == account.username for a in admins):
            raise DuplicateUsernameError(account.username)
        admins.append(account)
        self.save_admin_accounts(admins)

    def update_admin_account(self, account: AdminAccount) -> None:
        self._replace_by_id(ADMINS, AdminAccount.from_dict, account)

    def delete_admin_account(self, admin_id: str) -> None:
        self._delete_by_id(ADMINS, AdminAccount.from_dict, admin_id)

    def verify_admin(self, username: str, password: str) -> Optional[AdminAccount]:
        """
        Busca un administrador por usuario y contraseña.

        Returns:
            La cuenta si coincide, None si no
        """
        for admin in self.get_admin_accounts():
            if admin.username == username and admin.password == password:
                return admin
        return None

    def get_admin_by_id(self, admin_id: str) -> Optional[AdminAccount]:
        return next((a for a in self.get_admin_accounts() if a.id == admin_id), None)

    # =========================================================================
    # CONFIGURACIÓN
    # =========================================================================

    def get_config(self) -> Dict[str, Any]:
        return self.backend.get_config()

    def get_frontend_password(self) -> str:
        return self.backend.get_frontend_password()

    def set_frontend_password(self, password: str) -> None:
        self.backend.set_frontend_password(password)

    def get_admin_settings(self) -> AdminSettings:
        return AdminSettings.from_dict(self.backend.get_admin_settings())

    def set_google_bound(self, is_bound: bool, account_name: str = '', account_type: str = 'PERSONAL') -> None:
        """Guarda la vinculación con Google (sin efecto en modo remoto)."""
        settings = AdminSettings(
            is_google_bound=is_bound,
            google_account_name=account_name,
            google_account_type=account_type,
        )
        self.backend.set_admin_settings(settings.to_dict())

    # =========================================================================
    # MANTENIMIENTO
    # =========================================================================

    def check_database_connection(self) -> bool:
        """False si el backend no responde (o responde vacío)."""
        return self.backend.check_connection()

    def clear_all_data(self) -> None:
        """
        Vacía pedidos, menús, empleados y anuncios.
        Administradores y configuración se conservan.
        """
        for collection in COLLECTIONS:
            if collection == ADMINS:
                continue
            self.backend.save_collection(collection, [])

    # =========================================================================
    # SESIÓN (solo local)
    # =========================================================================

    def set_session(self, role: SessionRole, user_id: str = None) -> None:
        """
        Guarda la sesión local.

        Args:
            role: USER o ADMIN
            user_id: Id del administrador (opcional)
        """
        self.session_store.set_item(STORAGE_KEYS['session'], SessionRole(role).value)
        if user_id:
            self.session_store.set_item(STORAGE_KEYS['session_user_id'], user_id)

    def get_session(self) -> Session:
        role_str = self.session_store.get_item(STORAGE_KEYS['session'])
        try:
            role = SessionRole(role_str) if role_str else None
        except ValueError:
            role = None
        user_id = self.session_store.get_item(STORAGE_KEYS['session_user_id'])
        return Session(role=role, user_id=user_id)

    def clear_session(self) -> None:
        self.session_store.remove_item(STORAGE_KEYS['session'])
        self.session_store.remove_item(STORAGE_KEYS['session_user_id'])
