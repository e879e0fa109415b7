# Import every model so Base.metadata is complete for create_all / Alembic
from db_models.user import User, UserRole
from db_models.room import Room
from db_models.category import Category, Subcategory, CategoryPermission
from db_models.inventory import Inventory, InventoryDetail

__all__ = [
    "User",
    "UserRole",
    "Room",
    "Category",
    "Subcategory",
    "CategoryPermission",
    "Inventory",
    "InventoryDetail",
]
