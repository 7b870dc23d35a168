"""
repositories/part_repo.py
-------------------------
Data access layer for the parts inventory.
All SQL queries related to the `parts` table live here.

Stock-level queries only consider active parts. "Low stock" and
"critically low" are two independent thresholds: a part can be at or
below its safety stock without being at or below its minimum stock.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from models.part import Part, PartCategory
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_enum,
    require_non_negative,
    require_range,
)

_NAME_ORDER = "name ASC, id ASC"


class PartRepository(BaseRepository):
    """Read-only queries on the parts table."""

    table = "parts"
    model = Part
    columns = (
        "id", "part_number", "name", "description", "category",
        "quantity_on_hand", "minimum_stock", "safety_stock", "unit", "unit_cost",
        "vendor", "storage_location", "last_restock_date", "last_used_date",
        "lead_time_days", "is_active", "is_consumable",
    )

    # ── LOOKUP ────────────────────────────────────────────

    def find_by_part_number(self, part_number: str) -> Optional[Part]:
        require(part_number, "part_number")
        return self._fetch_one(
            "find_by_part_number", self._select("part_number = %s", order_by=""), (part_number,)
        )

    def find_by_part_number_ignore_case(self, part_number: str) -> Optional[Part]:
        require(part_number, "part_number")
        return self._fetch_one(
            "find_by_part_number_ignore_case",
            self._select("LOWER(part_number) = LOWER(%s)", order_by=""),
            (part_number,),
        )

    def exists_by_part_number_ignore_case(self, part_number: str) -> bool:
        require(part_number, "part_number")
        return self._exists(
            "exists_by_part_number_ignore_case", "LOWER(part_number) = LOWER(%s)", (part_number,)
        )

    def search(self, text: str) -> list[Part]:
        """Case-insensitive substring search over name, description and part number."""
        pattern = contains_pattern(text, "text")
        return self._fetch_all(
            "search",
            self._select(
                "name ILIKE %s OR description ILIKE %s OR part_number ILIKE %s",
                order_by=_NAME_ORDER,
            ),
            (pattern, pattern, pattern),
        )

    def find_by_vendor_containing_ignore_case(self, text: str) -> list[Part]:
        return self._fetch_all(
            "find_by_vendor_containing_ignore_case",
            self._select("vendor ILIKE %s", order_by=_NAME_ORDER),
            (contains_pattern(text, "text"),),
        )

    def find_by_storage_location_containing_ignore_case(self, text: str) -> list[Part]:
        return self._fetch_all(
            "find_by_storage_location_containing_ignore_case",
            self._select("storage_location ILIKE %s", order_by="storage_location ASC, id ASC"),
            (contains_pattern(text, "text"),),
        )

    # ── CATALOG ───────────────────────────────────────────

    def find_active(self) -> list[Part]:
        return self._fetch_all("find_active", self._select("is_active = TRUE", order_by=_NAME_ORDER))

    def find_by_category(self, category: PartCategory) -> list[Part]:
        return self._fetch_all(
            "find_by_category",
            self._select("category = %s", order_by=_NAME_ORDER),
            (require_enum(category, PartCategory, "category"),),
        )

    def find_by_category_and_active(self, category: PartCategory) -> list[Part]:
        return self._fetch_all(
            "find_by_category_and_active",
            self._select("category = %s AND is_active = TRUE", order_by=_NAME_ORDER),
            (require_enum(category, PartCategory, "category"),),
        )

    def count_by_category(self, category: PartCategory) -> int:
        return self._count(
            "count_by_category", "category = %s", (require_enum(category, PartCategory, "category"),)
        )

    def find_by_consumable(self, consumable: bool) -> list[Part]:
        require(consumable, "consumable")
        return self._fetch_all(
            "find_by_consumable",
            self._select("is_consumable = %s AND is_active = TRUE", order_by=_NAME_ORDER),
            (consumable,),
        )

    def find_by_lead_time_greater_than(self, days: int) -> list[Part]:
        require_non_negative(days, "days")
        return self._fetch_all(
            "find_by_lead_time_greater_than",
            self._select("lead_time_days > %s AND is_active = TRUE", order_by="lead_time_days DESC, id ASC"),
            (days,),
        )

    def find_by_unit_cost_between(self, min_cost: Decimal, max_cost: Decimal) -> list[Part]:
        """Parts priced within [min_cost, max_cost], both ends inclusive."""
        require_range(min_cost, max_cost, "min_cost", "max_cost")
        return self._fetch_all(
            "find_by_unit_cost_between",
            self._select("unit_cost BETWEEN %s AND %s", order_by="unit_cost ASC, id ASC"),
            (min_cost, max_cost),
        )

    def find_active_order_by_unit_cost_desc(self) -> list[Part]:
        return self._fetch_all(
            "find_active_order_by_unit_cost_desc",
            self._select("is_active = TRUE", order_by="unit_cost DESC NULLS LAST, id ASC"),
        )

    # ── STOCK LEVELS ──────────────────────────────────────

    def find_low_stock(self) -> list[Part]:
        """Active parts at or below their minimum stock."""
        return self._fetch_all(
            "find_low_stock",
            self._select("quantity_on_hand <= minimum_stock AND is_active = TRUE", order_by=_NAME_ORDER),
        )

    def count_low_stock(self) -> int:
        return self._count("count_low_stock", "quantity_on_hand <= minimum_stock AND is_active = TRUE")

    def find_below_minimum_stock(self) -> list[Part]:
        """Active parts strictly below their minimum stock."""
        return self._fetch_all(
            "find_below_minimum_stock",
            self._select("quantity_on_hand < minimum_stock AND is_active = TRUE", order_by=_NAME_ORDER),
        )

    def find_critically_low_stock(self) -> list[Part]:
        """Active parts at or below their safety stock."""
        return self._fetch_all(
            "find_critically_low_stock",
            self._select("quantity_on_hand <= safety_stock AND is_active = TRUE", order_by=_NAME_ORDER),
        )

    def find_out_of_stock(self) -> list[Part]:
        return self._fetch_all(
            "find_out_of_stock",
            self._select("quantity_on_hand = 0 AND is_active = TRUE", order_by=_NAME_ORDER),
        )

    def find_unused_since(self, day: date) -> list[Part]:
        """Active parts last used strictly before `day`."""
        require(day, "day")
        return self._fetch_all(
            "find_unused_since",
            self._select("last_used_date < %s AND is_active = TRUE", order_by="last_used_date ASC, id ASC"),
            (day,),
        )

    def find_not_restocked_since(self, day: date) -> list[Part]:
        require(day, "day")
        return self._fetch_all(
            "find_not_restocked_since",
            self._select(
                "last_restock_date < %s AND is_active = TRUE", order_by="last_restock_date ASC, id ASC"
            ),
            (day,),
        )

    # ── SUMMARIES ─────────────────────────────────────────

    def get_total_inventory_value(self) -> Decimal:
        """Sum of quantity x unit cost over active parts (parts without a cost count as zero)."""
        sql = """
            SELECT COALESCE(SUM(quantity_on_hand * unit_cost), 0)
            FROM parts
            WHERE is_active = TRUE AND unit_cost IS NOT NULL;
        """
        return Decimal(self._fetch_scalar("get_total_inventory_value", sql) or 0)

    def get_category_summary(self) -> list[dict]:
        """
        Active part counts and stock value grouped by category.

        Returns:
            List of dicts: [{'category': PartCategory, 'parts': int,
            'quantity': int, 'value': Decimal}, ...] ordered by value descending.
        """
        sql = """
            SELECT category,
                   COUNT(*) AS parts,
                   COALESCE(SUM(quantity_on_hand), 0) AS quantity,
                   COALESCE(SUM(quantity_on_hand * unit_cost), 0) AS value
            FROM parts
            WHERE is_active = TRUE
            GROUP BY category
            ORDER BY value DESC, category ASC;
        """
        return [
            {
                "category": PartCategory(r[0]),
                "parts": r[1],
                "quantity": int(r[2]),
                "value": Decimal(r[3]),
            }
            for r in self._fetch_rows("get_category_summary", sql)
        ]
