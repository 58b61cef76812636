# backend/app/core/utils.py
"""
Utilidades compartidas por los servicios.
"""

from slugify import slugify


def build_slug(name: str) -> str:
    """
    Slug en minúsculas derivado del nombre.

    Es determinista: el mismo nombre produce siempre el mismo slug, y se
    recalcula en cada cambio de nombre.

    Example:
        build_slug("Hand-Tufted Rugs") == "hand-tufted-rugs"
    """
    return slugify(name, lowercase=True)
