"""
Item Catalog — read-only reference data for everything the shop sells.

The catalog is owned outside the engine. Components resolve item ids through
it (e.g. to learn the category of a worn item) but never modify it.
"""

from typing import Dict, Iterable, List, Optional

from manul_manor.models.item import Item, ItemCategory


SENTINEL_FOOD_ID = "food_grasshoppers"


class UnknownItemError(KeyError):
    """Raised when an item id is not in the catalog."""
    pass


DEFAULT_ITEMS: List[Item] = [
    Item(id=SENTINEL_FOOD_ID, name="Grasshoppers",
         description="Common food for your manul - always free",
         price=0, category=ItemCategory.FOOD, unlock_level=1,
         is_consumable=True, owned_by_default=True),
    Item(id="food_pika", name="Pika", description="A tasty small mammal",
         price=15, category=ItemCategory.FOOD, unlock_level=1, is_consumable=True),
    Item(id="food_partridge", name="Partridge", description="A flavorful bird",
         price=30, category=ItemCategory.FOOD, unlock_level=2, is_consumable=True),
    Item(id="food_marmot", name="Marmot", description="A favorite high-calorie meal",
         price=45, category=ItemCategory.FOOD, unlock_level=3, is_consumable=True),
    Item(id="food_chicken", name="Chicken", description="Premium protein source",
         price=60, category=ItemCategory.FOOD, unlock_level=4, is_consumable=True),
    Item(id="food_fish", name="Fish", description="Super premium food for special occasions",
         price=75, category=ItemCategory.FOOD, unlock_level=5, is_consumable=True),

    Item(id="hat_beanie", name="Beanie", description="A cozy hat for cold weather",
         price=50, category=ItemCategory.HAT, unlock_level=2),
    Item(id="accessory_bowtie", name="Bow Tie", description="For formal occasions",
         price=40, category=ItemCategory.ACCESSORY, unlock_level=2),

    Item(id="furniture_bed", name="Cozy Bed", description="A comfy bed for your manul",
         price=100, category=ItemCategory.FURNITURE, unlock_level=3),
    Item(id="decoration_plant", name="Plant", description="Adds some nature to the manor",
         price=75, category=ItemCategory.DECORATION, unlock_level=3),

    Item(id="toy_ball", name="Yarn Ball", description="A fun toy to play with",
         price=30, category=ItemCategory.TOY, unlock_level=1, owned_by_default=True),
]


class ItemCatalog:
    """Immutable lookup over a fixed set of items."""

    def __init__(self, items: Optional[Iterable[Item]] = None):
        source = DEFAULT_ITEMS if items is None else items
        self._items: Dict[str, Item] = {item.id: item for item in source}

    def get(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    def require(self, item_id: str) -> Item:
        """Resolve an id or raise UnknownItemError."""
        item = self._items.get(item_id)
        if item is None:
            raise UnknownItemError(item_id)
        return item

    def all(self) -> List[Item]:
        return list(self._items.values())

    def by_category(self, category: ItemCategory) -> List[Item]:
        return [i for i in self._items.values() if i.category == category]

    def default_owned(self) -> List[Item]:
        return [i for i in self._items.values() if i.owned_by_default]

    @property
    def sentinel_food(self) -> Item:
        return self.require(SENTINEL_FOOD_ID)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)
