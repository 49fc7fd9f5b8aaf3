# perfume_catalog_project/scripts/seed_catalog.py

"""
Script de carga de datos de ejemplo para el catálogo.

Propósito:
Rellena una base de datos vacía con categorías, marcas y perfumes de
ejemplo para desarrollo y demostraciones. Usa los mismos servicios que la
API, de modo que se aplican todas las reglas de negocio (unicidad del
nombre de categoría, unicidad de la marca dentro de su categoría, etc.).

Flujo de Operaciones:
1.  Configuración: carga Settings desde el entorno / .env.
2.  Esquema: crea las tablas si no existen.
3.  Carga: para cada categoría, marca y perfume de SAMPLE_CATALOG se llama
    al servicio correspondiente. Lo que ya existe se reutiliza, por lo que
    el script se puede ejecutar varias veces sin duplicar datos.

Uso:
    python scripts/seed_catalog.py
"""

import asyncio
import logging
import os
import sys

# Añadir el directorio backend/ al PYTHONPATH
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend"))
sys.path.insert(0, project_root)

from perfume_catalog.core.config import Settings
from perfume_catalog.core.container import build_container
from perfume_catalog.core.logging_config import setup_logging
from perfume_catalog.crud import brand_crud, category_crud
from perfume_catalog.db.database import create_tables
from perfume_catalog.schemas.brand_schema import BrandCreate
from perfume_catalog.schemas.category_schema import CategoryCreate
from perfume_catalog.schemas.perfume_schema import PerfumeCreate

logger = logging.getLogger("seed_catalog")

SAMPLE_CATALOG = [
    {
        "name": "Men",
        "description": "Exclusive fragrances for men",
        "color": "blue",
        "brands": [
            ("Dior", "Luxury French fashion house", [("Sauvage", 1), ("Fahrenheit", 2), ("Eau Sauvage", 3)]),
            ("Chanel", "Iconic French luxury brand", [("Bleu de Chanel", 4), ("Antaeus", 5)]),
            ("Tom Ford", "Modern luxury and sophistication", [("Tobacco Vanille", 7), ("Oud Wood", 8)]),
        ],
    },
    {
        "name": "Women",
        "description": "Elegant fragrances for women",
        "color": "pink",
        "brands": [
            ("Chanel", "Iconic French luxury brand", [("N°5", 10), ("Coco Mademoiselle", 11), ("Chance", 12)]),
            ("Dior", "Luxury French fashion house", [("J'adore", 13), ("Miss Dior", 15)]),
        ],
    },
]


async def main():
    settings = Settings()
    setup_logging(settings)
    container = build_container(settings)
    await create_tables(container.engine)

    created = {"categories": 0, "brands": 0, "perfumes": 0}
    async with container.session_factory() as db:
        for category_data in SAMPLE_CATALOG:
            category = await category_crud.get_category_by_name(db, name=category_data["name"])
            if not category:
                result = await container.category_service.create_new_category(
                    db,
                    CategoryCreate(
                        name=category_data["name"],
                        description=category_data["description"],
                        color=category_data["color"],
                    ),
                )
                if not result.ok:
                    logger.error(f"No se pudo crear la categoría {category_data['name']}: {result.error.message}")
                    continue
                category = result.value
                created["categories"] += 1

            for brand_name, description, perfumes in category_data["brands"]:
                brand = await brand_crud.get_brand_by_name_and_category(db, name=brand_name, category_id=category.id)
                if brand:
                    # Marca ya cargada en una ejecución anterior: no se duplican sus perfumes
                    continue
                result = await container.brand_service.create_new_brand(
                    db, BrandCreate(name=brand_name, description=description, category_id=category.id)
                )
                if not result.ok:
                    logger.error(f"No se pudo crear la marca {brand_name}: {result.error.message}")
                    continue
                brand = result.value
                created["brands"] += 1

                for perfume_name, number in perfumes:
                    result = await container.perfume_service.create_new_perfume(
                        db, PerfumeCreate(name=perfume_name, number=number, brand_id=brand.id)
                    )
                    if result.ok:
                        created["perfumes"] += 1
                    else:
                        logger.error(f"No se pudo crear el perfume {perfume_name}: {result.error.message}")

    await container.engine.dispose()
    logger.info(
        f"Carga completada: {created['categories']} categorías, "
        f"{created['brands']} marcas y {created['perfumes']} perfumes nuevos."
    )


if __name__ == "__main__":
    asyncio.run(main())
