# backend/app/schemas/filter_schema.py
"""
Criterios de filtrado de los listados del catálogo.

Los ids llegan de la query string como texto y Pydantic los convierte a int aquí,
en el borde de la API; la lógica de filtrado solo compara enteros.
"""

from typing import Any, Iterable, List, Optional
from pydantic import BaseModel, Field, field_validator


class CategoryFilter(BaseModel):
    search_query: str = ""
    region_ids: List[int] = Field(default_factory=list)

    @field_validator("search_query", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or ""


class SubCategoryFilter(CategoryFilter):
    category_id: Optional[int] = None


class ProductFilter(CategoryFilter):
    """
    Estado de los filtros del listado de productos.

    Cambiar de categoría vacía siempre la subcategoría: una subcategoría de otra
    categoría daría un par imposible.
    """
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None

    def select_category(self, category_id: Optional[int]) -> "ProductFilter":
        return self.model_copy(update={"category_id": category_id, "subcategory_id": None})

    def select_subcategory(self, subcategory_id: Optional[int]) -> "ProductFilter":
        return self.model_copy(update={"subcategory_id": subcategory_id})

    def cleared(self) -> "ProductFilter":
        return ProductFilter()

    def normalized(self, subcategories: Iterable[Any]) -> "ProductFilter":
        """Descarta la subcategoría si no pertenece a la categoría seleccionada."""
        if self.category_id is None or self.subcategory_id is None:
            return self
        for subcategory in subcategories:
            sc_id = subcategory.get("id") if isinstance(subcategory, dict) else getattr(subcategory, "id", None)
            if sc_id != self.subcategory_id:
                continue
            parent_id = (
                subcategory.get("category_id") if isinstance(subcategory, dict)
                else getattr(subcategory, "category_id", None)
            )
            if parent_id != self.category_id:
                return self.select_category(self.category_id)
            break
        return self
