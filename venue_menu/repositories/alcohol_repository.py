"""
Repository layer for AlcoholItem persistence.
All SQL for the `alcohol` table goes through MenuTableRepository.
"""
from venue_menu.models.menu_item import AlcoholItem
from venue_menu.repositories.menu_repository import MenuTableRepository


class AlcoholRepository(MenuTableRepository[AlcoholItem]):
    table = "alcohol"
    columns = (
        "name",
        "brand",
        "category",
        "price_30ml",
        "price_60ml",
        "price_90ml",
        "price_180ml",
        "price_bottle",
        "available",
        "tags",
        "featured",
    )
    from_row = staticmethod(AlcoholItem.from_row)
