# backend/app/db/relations.py
"""
Reconstrucción de relaciones many-to-many a partir de las filas de unión.
"""

from typing import Any, Iterable, List, Optional


def reconstruct_related(join_rows: Optional[Iterable[Any]], key: str) -> List[Any]:
    """
    Devuelve las entidades anidadas en las filas de unión, en orden.

    Una fila cuyo destino fue borrado trae None en `key`; esa fila se descarta
    en lugar de producir un hueco o un error. Acepta objetos y diccionarios.

    Example:
        reconstruct_related([{"a": 1}, {"a": None}, {"a": 2}], "a") == [1, 2]
    """
    if not join_rows:
        return []
    related = (row.get(key) if isinstance(row, dict) else getattr(row, key, None) for row in join_rows)
    return [item for item in related if item is not None]
