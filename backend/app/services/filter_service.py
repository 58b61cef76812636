# backend/app/services/filter_service.py
"""
Modelo de relaciones y filtros del catálogo.

Aplica los filtros compuestos que usan los
listados del back-office:

- Texto: subcadena sin distinguir mayúsculas sobre los campos de cada entidad
- Regiones: intersección no vacía con las regiones seleccionadas (semántica OR)
- Categoría / subcategoría: igualdad de id

Los predicados se combinan con AND y cada uno es "sin restricción" cuando su
criterio está vacío. Las funciones trabajan tanto con objetos ORM o esquemas
Pydantic como con diccionarios, por lo que este módulo no importa modelos.
"""

from typing import Any, Iterable, List, Optional, Sequence, Set, TypeVar

from app.schemas.filter_schema import CategoryFilter, ProductFilter, SubCategoryFilter

T = TypeVar("T")


# ========================================
# ACCESO GENÉRICO A ATRIBUTOS
# ========================================

def _get(obj: Any, key: str, default: Any = None) -> Any:
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _set(obj: Any, key: str, value: Any) -> None:
    if isinstance(obj, dict):
        obj[key] = value
    else:
        setattr(obj, key, value)


def related_ids(entity: Any, key: str = "regions") -> Set[int]:
    """Ids de las entidades relacionadas (por defecto, regiones) de una entidad."""
    return {_get(item, "id") for item in (_get(entity, key) or [])}


# ========================================
# PREDICADOS
# ========================================

def matches_text(query: Optional[str], *values: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(value and needle in value.lower() for value in values)


def matches_regions(entity: Any, selected_region_ids: Sequence[int]) -> bool:
    if not selected_region_ids:
        return True
    return not related_ids(entity).isdisjoint(selected_region_ids)


def _matches_id(value: Any, selected: Optional[int]) -> bool:
    if selected is None:
        return True
    return value is not None and value == selected


# ========================================
# FILTROS COMPUESTOS
# ========================================

def filter_products(products: Iterable[T], criteria: ProductFilter) -> List[T]:
    """
    Aplica búsqueda de texto, categoría, subcategoría y regiones a una lista de productos.

    El texto se busca en name, description y reference. La categoría se compara con
    la categoría de la subcategoría del producto.
    """
    result = []
    for product in products:
        subcategory = _get(product, "subcategory")
        if not matches_text(
            criteria.search_query,
            _get(product, "name"),
            _get(product, "description"),
            _get(product, "reference"),
        ):
            continue
        if not _matches_id(_get(subcategory, "category_id"), criteria.category_id):
            continue
        if not _matches_id(_get(product, "subcategory_id"), criteria.subcategory_id):
            continue
        if not matches_regions(product, criteria.region_ids):
            continue
        result.append(product)
    return result


def filter_subcategories(subcategories: Iterable[T], criteria: SubCategoryFilter) -> List[T]:
    """El texto se busca en name, description y en el nombre de la categoría padre."""
    result = []
    for subcategory in subcategories:
        if not matches_text(
            criteria.search_query,
            _get(subcategory, "name"),
            _get(subcategory, "description"),
            _get(_get(subcategory, "category"), "name"),
        ):
            continue
        if not matches_regions(subcategory, criteria.region_ids):
            continue
        if not _matches_id(_get(subcategory, "category_id"), criteria.category_id):
            continue
        result.append(subcategory)
    return result


def filter_categories(categories: Iterable[T], criteria: CategoryFilter) -> List[T]:
    return [
        category for category in categories
        if matches_text(criteria.search_query, _get(category, "name"), _get(category, "description"))
        and matches_regions(category, criteria.region_ids)
    ]


def available_subcategories(subcategories: Iterable[T], category_id: Optional[int]) -> List[T]:
    """Opciones del desplegable de subcategoría: solo las de la categoría elegida."""
    if category_id is None:
        return list(subcategories)
    return [sc for sc in subcategories if _get(sc, "category_id") == category_id]


# ========================================
# COLOR POR DEFECTO
# ========================================

def apply_default_color(colors: List[T], index: int) -> List[T]:
    """
    Marca colors[index] como color por defecto y desmarca todos los demás.

    Como mucho un color por producto queda marcado tras la llamada.
    """
    if index < 0 or index >= len(colors):
        raise IndexError(f"Color index {index} out of range")
    for position, color in enumerate(colors):
        _set(color, "is_default", position == index)
    return colors


def ensure_single_default(colors: List[T]) -> List[T]:
    """Si varios colores llegan marcados, conserva solo el último."""
    flagged = [i for i, color in enumerate(colors) if _get(color, "is_default")]
    if len(flagged) > 1:
        apply_default_color(colors, flagged[-1])
    return colors
