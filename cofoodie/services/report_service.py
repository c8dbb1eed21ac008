# ==============================================================================
# SERVICIO DE REPORTES - Agrupación de pedidos por día, semana y mes
# ==============================================================================
# Toda la aritmética de fechas trabaja sobre Order.date_str (YYYY-MM-DD).
# Las comparaciones de rango son comparaciones de strings: el formato ISO
# ordena igual que las fechas.
#
# SEMANA LABORAL: lunes a viernes (5 días). Un domingo pertenece a la
# semana que terminó, no a la que empieza.
# ==============================================================================

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Union

from cofoodie.models import MenuCategory, Order, UNCATEGORIZED_LABEL


DateLike = Union[date, str]

HISTORY_WEEK = 'WEEK'
HISTORY_MONTH = 'MONTH'
HISTORY_CUSTOM = 'CUSTOM'

# Filtro que muestra todas las categorías
ALL_CATEGORIES = None


def to_date_str(value: DateLike) -> str:
    """Normaliza date/datetime/str a YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()


def start_of_week(ref: DateLike) -> date:
    """Lunes de la semana de `ref` (domingo → lunes anterior)."""
    d = _to_date(ref)
    return d - timedelta(days=d.weekday())


def week_days(ref: DateLike) -> List[str]:
    """Lunes a viernes de la semana de `ref`."""
    start = start_of_week(ref)
    return [(start + timedelta(days=i)).isoformat() for i in range(5)]


def month_days(ref: DateLike) -> List[str]:
    """Todos los días del mes de `ref`."""
    d = _to_date(ref)
    _, last = calendar.monthrange(d.year, d.month)
    return [date(d.year, d.month, day).isoformat() for day in range(1, last + 1)]


def _sum_amount(orders: List[Order]) -> float:
    return sum(o.total_amount for o in orders)


class ReportService:
    """
    Servicio de reportes sobre pedidos.

    Responsabilidades:
    - Pedidos de un día / semana / mes / rango
    - Totales por categoría y cobrado / pendiente
    - Conteo mensual de pedidos por empleado

    No conoce el backend: recibe funciones que cargan los datos.
    """

    def __init__(
        self,
        order_loader: Callable[[], List[Order]],
        menu_loader: Callable[[], List[MenuCategory]] = None
    ):
        """
        Args:
            order_loader: Función que retorna la lista de pedidos
            menu_loader: Función que retorna la lista de menús (opcional)
        """
        self._order_loader = order_loader
        self._menu_loader = menu_loader

    def _load_orders(self) -> List[Order]:
        return self._order_loader() if self._order_loader else []

    def _load_menus(self) -> List[MenuCategory]:
        return self._menu_loader() if self._menu_loader else []

    @staticmethod
    def _matches_label(order: Order, label: Optional[str]) -> bool:
        return label is ALL_CATEGORIES or order.category_label == label

    # =========================================================================
    # PEDIDOS POR DÍA
    # =========================================================================

    def orders_for_day(self, day: DateLike, label: Optional[str] = None, orders: List[Order] = None) -> List[Order]:
        """
        Pedidos de un día, del más reciente al más antiguo.

        Args:
            day: Día a consultar
            label: Categoría a filtrar (None = todas)
            orders: Lista ya cargada (evita otra lectura del backend)
        """
        key = to_date_str(day)
        source = orders if orders is not None else self._load_orders()
        result = [o for o in source if o.date_str == key and self._matches_label(o, label)]
        result.sort(key=lambda o: o.timestamp, reverse=True)
        return result

    def category_stats(self, day: DateLike) -> Dict[str, Dict[str, Any]]:
        """
        Monto y cantidad por categoría para un día.

        Returns:
            {etiqueta: {'amount': float, 'count': int}}; pedidos sin
            categoría se agrupan como 未分類
        """
        stats: Dict[str, Dict[str, Any]] = {}
        for order in self.orders_for_day(day):
            label = order.category_label or UNCATEGORIZED_LABEL
            bucket = stats.setdefault(label, {'amount': 0, 'count': 0})
            bucket['amount'] += order.total_amount
            bucket['count'] += 1
        return stats

    def grand_total(self, day: DateLike) -> float:
        return _sum_amount(self.orders_for_day(day))

    def day_summary(self, day: DateLike, label: Optional[str] = None, orders: List[Order] = None) -> Dict[str, Any]:
        """
        Resumen de un día.

        Returns:
            {'date', 'count', 'total', 'paid', 'unpaid'}
        """
        day_orders = self.orders_for_day(day, label, orders)
        return {
            'date': to_date_str(day),
            'count': len(day_orders),
            'total': _sum_amount(day_orders),
            'paid': _sum_amount([o for o in day_orders if o.paid]),
            'unpaid': _sum_amount([o for o in day_orders if not o.paid]),
        }

    # =========================================================================
    # SEMANA / MES / HISTORIAL
    # =========================================================================

    def week_summary(self, ref: DateLike, label: Optional[str] = None) -> List[Dict[str, Any]]:
        """Resumen de lunes a viernes de la semana de `ref`."""
        orders = self._load_orders()
        return [self.day_summary(d, label, orders) for d in week_days(ref)]

    def month_summary(self, ref: DateLike, label: Optional[str] = None) -> List[Dict[str, Any]]:
        """Resumen de cada día del mes de `ref`."""
        orders = self._load_orders()
        return [self.day_summary(d, label, orders) for d in month_days(ref)]

    def history_orders(
        self,
        mode: str,
        today: DateLike,
        ref: DateLike = None,
        start: DateLike = None,
        end: DateLike = None,
        label: Optional[str] = None
    ) -> List[Order]:
        """
        Pedidos históricos según el modo.

        Args:
            mode: 'WEEK' (todo lo anterior a hoy), 'MONTH' (mes de `ref`)
                o 'CUSTOM' (rango inclusivo start..end)
            today: Día actual
            ref: Día de referencia para MONTH (por defecto hoy)
            start: Inicio del rango CUSTOM
            end: Fin del rango CUSTOM
            label: Categoría a filtrar (None = todas)

        Returns:
            Lista de pedidos; vacía en CUSTOM si falta un extremo
        """
        orders = self._load_orders()
        today_key = to_date_str(today)

        if mode == HISTORY_WEEK:
            filtered = [o for o in orders if o.date_str < today_key]
        elif mode == HISTORY_MONTH:
            month_key = to_date_str(ref or today)[:7]
            filtered = [o for o in orders if o.date_str.startswith(month_key)]
        elif mode == HISTORY_CUSTOM:
            if not start or not end:
                return []
            start_key, end_key = to_date_str(start), to_date_str(end)
            filtered = [o for o in orders if start_key <= o.date_str <= end_key]
        else:
            raise ValueError(f'Modo de historial inválido: {mode}')

        return [o for o in filtered if self._matches_label(o, label)]

    def employee_monthly_counts(self, employees: List[Any], month: DateLike) -> Dict[str, int]:
        """
        Pedidos del mes por empleado (se cruza por nombre).

        Returns:
            {id_empleado: cantidad}
        """
        month_key = to_date_str(month)[:7]
        orders = [o for o in self._load_orders() if o.date_str.startswith(month_key)]
        return {
            emp.id: sum(1 for o in orders if o.employee_name == emp.name)
            for emp in employees
        }

    # =========================================================================
    # MENÚS
    # =========================================================================

    def menu_image_for(self, day: DateLike, label: Optional[str]) -> Optional[str]:
        """Imagen del menú de ese día y etiqueta, si existe."""
        if not label:
            return None
        key = to_date_str(day)
        for menu in self._load_menus():
            if menu.config.date == key and menu.label == label:
                return menu.config.image_url
        return None

    @staticmethod
    def is_past_cutoff(menu: MenuCategory, now: datetime) -> bool:
        """
        True si ya pasó la hora límite del menú.

        Sin cutoff_time o con un valor que no se puede parsear, nunca vence.
        """
        if not menu.config.cutoff_time or not menu.config.date:
            return False
        try:
            deadline = datetime.strptime(
                f'{menu.config.date} {menu.config.cutoff_time}', '%Y-%m-%d %H:%M'
            )
        except ValueError:
            return False
        if now.tzinfo is not None:
            now = now.replace(tzinfo=None)
        return now > deadline
