# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================
# Dos piezas comparten la misma escritura atómica y el mismo lock global:
#
# - KeyValueStore: almacenamiento clave → texto con la semántica del
#   localStorage del navegador (getItem/setItem/removeItem). Cada clave es
#   un archivo dentro de una carpeta.
# - BaseRepository: un único archivo JSON con una estructura completa
#   (lo usa el libro de hojas del endpoint).
# ==============================================================================

import json
import os
import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional


# Lock global para evitar escrituras concurrentes a archivos
_file_lock = threading.RLock()


def _atomic_write(file_path: str, text: str) -> None:
    """
    Escribe texto a un archivo de forma atómica.

    Escribe a un archivo temporal y luego lo renombra; el archivo destino
    nunca queda a medio escribir.
    """
    with _file_lock:
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        temp_path = file_path + '.tmp'
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(temp_path, file_path)
        except Exception:
            # Limpiar archivo temporal si algo falla
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise


class KeyValueStore:
    """
    Almacenamiento clave → texto, acotado a una carpeta.

    Equivalente en proceso del localStorage del navegador: los valores son
    siempre strings y quien llama decide cómo serializar.

    Ejemplo: data/cofoodie_orders.json -> '[{"id": "1", ...}]'
    """

    _SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')

    def __init__(self, directory: str):
        """
        Args:
            directory: Carpeta donde se guardan las claves
        """
        self.directory = directory
        os.makedirs(self.directory, exist_ok=True)

    def _path_for(self, key: str) -> str:
        if not self._SAFE_KEY.match(key):
            raise ValueError(f'Clave inválida: {key!r}')
        return os.path.join(self.directory, key + '.json')

    def get_item(self, key: str) -> Optional[str]:
        """
        Obtiene el valor de una clave.

        Returns:
            Texto guardado o None si la clave nunca se escribió
        """
        path = self._path_for(key)
        with _file_lock:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    return f.read()
            except FileNotFoundError:
                return None

    def set_item(self, key: str, value: str) -> None:
        """Guarda el valor de una clave (reemplazo completo)."""
        _atomic_write(self._path_for(key), str(value))

    def remove_item(self, key: str) -> None:
        """Elimina una clave. No falla si no existe."""
        path = self._path_for(key)
        with _file_lock:
            if os.path.exists(path):
                os.remove(path)

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Lee y parsea una clave JSON.

        Si la clave no existe o el contenido está corrupto, retorna `default`.
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return default

    def set_json(self, key: str, value: Any) -> None:
        """Serializa y guarda una clave JSON."""
        self.set_item(key, json.dumps(value, ensure_ascii=False))


class BaseRepository(ABC):
    """
    Clase base abstracta para repositorios de un solo archivo JSON.
    Proporciona lectura/escritura con el lock global y escritura atómica.
    """

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo con datos vacíos si no existe."""
        if not os.path.exists(self.file_path):
            self._write_raw(self._empty_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.
        Debe ser implementado por cada repositorio concreto.
        """
        pass

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Returns:
            Datos parseados; estructura vacía si el archivo falta o está corrupto
        """
        with _file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (json.JSONDecodeError, FileNotFoundError):
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """Escribe datos al archivo JSON (reemplazo completo)."""
        _atomic_write(self.file_path, json.dumps(data, indent=2, ensure_ascii=False))
