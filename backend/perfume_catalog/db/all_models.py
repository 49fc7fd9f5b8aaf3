# backend/perfume_catalog/db/all_models.py
"""
Importa todos los modelos ORM para registrarlos en Base.metadata.

Las relaciones se declaran con nombres de clase en texto ("Brand", "Perfume"...),
así que todos los modelos deben estar importados antes de la primera consulta.
"""

from perfume_catalog.db.models.category_model import Category  # noqa: F401
from perfume_catalog.db.models.brand_model import Brand  # noqa: F401
from perfume_catalog.db.models.perfume_model import Perfume  # noqa: F401
from perfume_catalog.db.models.user_model import User, UserRole  # noqa: F401
