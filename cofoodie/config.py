# ==============================================================================
# CONFIGURACIÓN - Variables de entorno y valores por defecto
# ==============================================================================
# Toda la configuración del proceso se lee UNA vez al arrancar.
# El backend (local o remoto) se decide por COFOODIE_SCRIPT_URL:
#   - vacío   → almacenamiento local (desarrollo)
#   - con URL → endpoint remoto respaldado por hoja de cálculo (producción)
#
# Comando: export COFOODIE_SCRIPT_URL="https://script.example.com/exec"
# ==============================================================================

import os
from dataclasses import dataclass

BASE = os.path.dirname(os.path.abspath(__file__))

# Endpoint remoto (Apps Script o cofoodie.main). Vacío = modo local.
SCRIPT_URL = os.environ.get('COFOODIE_SCRIPT_URL', '')

# Carpeta donde vive el almacenamiento local (un archivo JSON por clave)
DATA_DIR = os.environ.get('COFOODIE_DATA_DIR', os.path.join(BASE, 'data'))

# Archivo del libro de hojas usado por el endpoint
WORKBOOK_FILE = os.environ.get(
    'COFOODIE_WORKBOOK_FILE', os.path.join(DATA_DIR, 'workbook.json')
)

# Tiempo máximo (segundos) de una llamada HTTP al endpoint remoto
REQUEST_TIMEOUT = float(os.environ.get('COFOODIE_REQUEST_TIMEOUT', 30))

# Espera máxima (segundos) para obtener el lock global del endpoint
LOCK_TIMEOUT = float(os.environ.get('COFOODIE_LOCK_TIMEOUT', 10))

LOGS_DIR = os.environ.get('COFOODIE_LOGS_DIR', os.path.join(BASE, 'logs'))

ENABLE_PROFILING = os.environ.get('COFOODIE_PROFILING', '1') == '1'


@dataclass
class Settings:
    """
    Foto de la configuración del proceso.

    Se construye una sola vez (composition root) y se pasa explícitamente
    al contenedor; los tests crean la suya con rutas temporales.
    """
    script_url: str = ''
    data_dir: str = DATA_DIR
    workbook_file: str = WORKBOOK_FILE
    request_timeout: float = REQUEST_TIMEOUT
    lock_timeout: float = LOCK_TIMEOUT

    @property
    def use_cloud(self) -> bool:
        """True si hay URL remota configurada."""
        return bool(self.script_url)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Crea la configuración desde las variables de entorno."""
        return cls(
            script_url=SCRIPT_URL,
            data_dir=DATA_DIR,
            workbook_file=WORKBOOK_FILE,
            request_timeout=REQUEST_TIMEOUT,
            lock_timeout=LOCK_TIMEOUT,
        )
