from dataclasses import dataclass

from app.infrastructure.repositories.crud_repository import CrudRepository

SAMPLE_CATEGORIES = [
    {"name": "Rice Mill Machines"},
    {"name": "Flour Mill Machines"},
    {"name": "Pulverizer Machines"},
    {"name": "Paddy Thresher"},
    {"name": "Spare Parts"},
]

SAMPLE_PRODUCTS = [
    {"name": "Rice Mill Screen 1mm", "price": 1200, "original_price": 1500, "category": "Spare Parts", "image": "Screen 1"},
    {"name": "6N40 Rice Polisher", "price": 45000, "original_price": 52000, "category": "Rice Mill Machines", "image": "Polisher"},
    {"name": "Heavy Duty Pulverizer", "price": 28000, "original_price": 32000, "category": "Pulverizer Machines", "image": "Pulverizer"},
    {"name": "Chaff Cutter Blade set", "price": 850, "original_price": 1200, "category": "Spare Parts", "image": "Blade"},
    {"name": "Digital Paddy Thresher", "price": 62000, "original_price": 68000, "category": "Paddy Thresher", "image": "Thresher"},
    {"name": "Rubber Roll 10 inch", "price": 4200, "original_price": 5000, "category": "Spare Parts", "image": "Rubber Roll"},
]


@dataclass
class Catalog:
    products: CrudRepository
    categories: CrudRepository
    banners: CrudRepository
    enquiries: CrudRepository

    def seed(self) -> dict:
        """Replace categories and products with the demo rice-mill catalog."""
        categories = self.categories.replace_all(SAMPLE_CATEGORIES)
        products = self.products.replace_all(SAMPLE_PRODUCTS)
        return {
            "message": "Database Seeded Successfully",
            "productCount": len(products),
            "categoryCount": len(categories),
        }
