"""
Repository layer for FoodItem persistence.
All SQL for the `food_menu` table goes through MenuTableRepository.
"""
from venue_menu.models.menu_item import FoodItem
from venue_menu.repositories.menu_repository import MenuTableRepository


class FoodRepository(MenuTableRepository[FoodItem]):
    table = "food_menu"
    columns = (
        "name",
        "category",
        "description",
        "price",
        "vegetarian",
        "available",
        "tags",
        "featured",
    )
    from_row = staticmethod(FoodItem.from_row)
