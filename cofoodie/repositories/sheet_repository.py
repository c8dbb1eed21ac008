# ==============================================================================
# REPOSITORIO DEL LIBRO DE HOJAS - Almacenamiento del endpoint remoto
# ==============================================================================
# Encapsula todo el acceso a workbook.json.
# El libro tiene hojas con nombre; cada hoja es una lista de filas.
#
# Convención de columnas (igual que la hoja de cálculo de producción):
#   - Columna A: el registro completo serializado en JSON (fuente de verdad)
#   - Columnas B..: valores legibles solo para humanos, NUNCA se leen
# ==============================================================================

from typing import Any, Dict, List

from cofoodie.repositories.base import BaseRepository


class SheetRepository(BaseRepository):
    """
    Repositorio del libro de hojas.

    Formato de datos en workbook.json:
    {
        "Orders": [["{\"id\": \"1\", ...}", "2024-01-01", "王小明", ...]],
        "Config": [["{\"frontendPassword\": \"...\"}"]]
    }
    """

    def _empty_data(self) -> Dict[str, List[List[Any]]]:
        """Retorna libro vacío."""
        return {}

    def _load(self) -> Dict[str, List[List[Any]]]:
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def ensure_sheets(self, names: List[str]) -> None:
        """
        Crea las hojas que falten.

        Args:
            names: Nombres de hojas requeridas
        """
        data = self._load()
        missing = [name for name in names if name not in data]
        if not missing:
            return
        for name in missing:
            data[name] = []
        self._write_raw(data)

    def get_rows(self, sheet: str) -> List[List[Any]]:
        """
        Obtiene todas las filas de una hoja.

        Returns:
            Lista de filas (vacía si la hoja no existe)
        """
        rows = self._load().get(sheet)
        return rows if isinstance(rows, list) else []

    def append_row(self, sheet: str, row: List[Any]) -> None:
        """Agrega una fila al final de una hoja."""
        data = self._load()
        data.setdefault(sheet, []).append(list(row))
        self._write_raw(data)

    def replace_rows(self, sheet: str, rows: List[List[Any]]) -> None:
        """
        Borra el contenido de una hoja y escribe las filas dadas.

        Args:
            sheet: Nombre de la hoja
            rows: Filas nuevas (reemplazo completo)
        """
        data = self._load()
        data[sheet] = [list(row) for row in rows]
        self._write_raw(data)
