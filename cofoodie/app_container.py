# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Composition root
# ==============================================================================
# Este módulo construye UNA vez los repositorios y servicios del proceso.
# Facilita:
#   - Inyección de dependencias (el contenedor se pasa explícitamente)
#   - Testing (cada test crea su contenedor con rutas temporales)
#   - Elegir el backend una sola vez, no en cada llamada
#
# ELECCIÓN DE BACKEND:
#   Settings.script_url vacío → LocalStorageBackend (carpeta local)
#   Settings.script_url con URL → RemoteStorageBackend (endpoint HTTP)
# La sesión SIEMPRE usa el almacenamiento local.
# ==============================================================================

import logging
from typing import Optional

import requests

from cofoodie.config import Settings
from cofoodie.repositories import (
    IStorageBackend,
    KeyValueStore,
    LocalStorageBackend,
    RemoteStorageBackend,
    SheetRepository,
)
from cofoodie.services import EndpointService, ReportService, StorageService

logger = logging.getLogger(__name__)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Cada repositorio y servicio se crea en el primer acceso y luego se
    reutiliza.

    Uso:
        container = AppContainer(Settings.from_env())
        storage = container.storage
        orders = storage.get_orders()
    """

    def __init__(self, settings: Settings = None, http_session: requests.Session = None):
        """
        Inicializa el contenedor.

        Args:
            settings: Configuración del proceso (por defecto, desde el entorno)
            http_session: Sesión HTTP para el backend remoto (inyectable en tests)
        """
        self.settings = settings or Settings.from_env()
        self._http_session = http_session

        # Repositorios (lazy loading)
        self._key_value_store: Optional[KeyValueStore] = None
        self._backend: Optional[IStorageBackend] = None
        self._sheet_repo: Optional[SheetRepository] = None

        # Servicios (lazy loading)
        self._storage: Optional[StorageService] = None
        self._report_service: Optional[ReportService] = None
        self._endpoint_service: Optional[EndpointService] = None

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def key_value_store(self) -> KeyValueStore:
        """Almacenamiento local (datos en modo local y sesión siempre)."""
        if self._key_value_store is None:
            self._key_value_store = KeyValueStore(self.settings.data_dir)
        return self._key_value_store

    @property
    def backend(self) -> IStorageBackend:
        """Backend elegido según la configuración."""
        if self._backend is None:
            if self.settings.use_cloud:
                logger.info("Backend remoto: %s", self.settings.script_url)
                self._backend = RemoteStorageBackend(
                    self.settings.script_url,
                    session=self._http_session,
                    timeout=self.settings.request_timeout,
                )
            else:
                logger.info("Backend local: %s", self.settings.data_dir)
                self._backend = LocalStorageBackend(self.key_value_store)
        return self._backend

    @property
    def sheet_repo(self) -> SheetRepository:
        """Libro de hojas del endpoint."""
        if self._sheet_repo is None:
            self._sheet_repo = SheetRepository(self.settings.workbook_file)
        return self._sheet_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def storage(self) -> StorageService:
        """Fachada de persistencia."""
        if self._storage is None:
            self._storage = StorageService(self.backend, self.key_value_store)
        return self._storage

    @property
    def report_service(self) -> ReportService:
        if self._report_service is None:
            self._report_service = ReportService(
                self.storage.get_orders,
                self.storage.get_menu_categories,
            )
        return self._report_service

    @property
    def endpoint_service(self) -> EndpointService:
        if self._endpoint_service is None:
            self._endpoint_service = EndpointService(
                self.sheet_repo,
                lock_timeout=self.settings.lock_timeout,
            )
        return self._endpoint_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para recargar configuración.
        """
        self._key_value_store = None
        self._backend = None
        self._sheet_repo = None

        self._storage = None
        self._report_service = None
        self._endpoint_service = None
