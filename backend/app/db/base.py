# backend/app/db/base.py
"""
Registro de todos los modelos ORM.

Importar este módulo garantiza que cada tabla esté en Base.metadata y que las
relaciones declaradas por nombre ("Region", "ProductColor", ...) se resuelvan.
"""

from app.db.database import Base  # noqa: F401
from app.db.models.category_model import Category, SubCategory  # noqa: F401
from app.db.models.product_model import Product, ProductColor, ProductCareInstruction  # noqa: F401
from app.db.models.region_model import (  # noqa: F401
    Region,
    RegionCategoryMapping,
    RegionSubCategoryMapping,
    RegionProductMapping,
)
from app.db.models.message_model import ContactMessage  # noqa: F401
