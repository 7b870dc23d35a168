"""
models/part.py
--------------
Domain model for the parts inventory.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class PartCategory(str, Enum):
    DRIVETRAIN = "DRIVETRAIN"
    STRUCTURAL = "STRUCTURAL"
    ELECTRONICS = "ELECTRONICS"
    PNEUMATICS = "PNEUMATICS"
    GAME_SPECIFIC = "GAME_SPECIFIC"
    FASTENERS = "FASTENERS"
    TOOLS = "TOOLS"
    RAW_MATERIALS = "RAW_MATERIALS"
    SAFETY = "SAFETY"
    OTHER = "OTHER"


@dataclass
class Part:
    """
    Represents a stocked inventory item.

    Attributes:
        id: Database primary key (None for new records).
        part_number: Catalog number, unique regardless of case.
        name: Human-readable name.
        category: Inventory category.
        quantity_on_hand: Units currently in stock.
        minimum_stock: Reorder threshold ("low stock" at or below it).
        safety_stock: Critical threshold ("critically low" at or below it).
        unit_cost: Cost per unit.
        vendor: Supplier name.
        storage_location: Shelf/bin where the part lives.
        last_restock_date / last_used_date: Inventory activity dates.
        lead_time_days: Typical vendor lead time.
        is_active: False once the part is retired from the catalog.
        is_consumable: True for parts used up by builds (fasteners, rivets).
    """
    part_number: str
    name: str
    category: PartCategory
    quantity_on_hand: int = 0
    minimum_stock: int = 0
    safety_stock: int = 0
    description: Optional[str] = None
    unit: Optional[str] = None
    unit_cost: Optional[Decimal] = None
    vendor: Optional[str] = None
    storage_location: Optional[str] = None
    last_restock_date: Optional[date] = None
    last_used_date: Optional[date] = None
    lead_time_days: Optional[int] = None
    is_active: bool = True
    is_consumable: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        self.category = PartCategory(self.category)

    def is_low_stock(self) -> bool:
        return self.quantity_on_hand <= self.minimum_stock

    def is_critically_low(self) -> bool:
        return self.quantity_on_hand <= self.safety_stock

    def __str__(self) -> str:
        return f"{self.part_number} {self.name} ({self.quantity_on_hand} on hand)"
