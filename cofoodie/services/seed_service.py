# ==============================================================================
# SERVICIO DE SEMILLA - Menús iniciales para una base vacía
# ==============================================================================

import logging

from cofoodie.models import MenuConfig, MenuOption
from cofoodie.services.storage_service import StorageService

logger = logging.getLogger(__name__)


INITIAL_MENUS = [
    ('美味便當', [
        MenuOption(id='opt_1', label='排骨飯', price=100),
        MenuOption(id='opt_2', label='雞腿飯', price=110),
        MenuOption(id='opt_3', label='鱈魚飯', price=120),
    ]),
    ('清涼飲料', [
        MenuOption(id='drink_1', label='紅茶', price=20),
        MenuOption(id='drink_2', label='綠茶', price=20),
        MenuOption(id='drink_3', label='奶茶', price=30),
    ]),
]


def seed_database(storage: StorageService) -> bool:
    """
    Carga los menús iniciales si todavía no hay ninguno.

    Returns:
        True si se sembró, False si ya había menús
    """
    logger.info("Iniciando semilla de la base de datos...")
    if storage.get_menu_categories():
        logger.info("La base ya tiene menús, se omite la semilla")
        return False

    for index, (label, options) in enumerate(INITIAL_MENUS, start=1):
        storage.add_menu_category(
            label,
            MenuConfig(options=list(options)),
            menu_id=f'MENU_{index:03d}',
        )
        logger.info("Menú agregado: %s", label)

    logger.info("Semilla completada")
    return True
