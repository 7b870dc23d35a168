"""
models/component.py
-------------------
Domain model for purchased components that tasks depend on.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Component:
    """
    Represents an ordered component (motor, sensor, gearbox, ...).

    Attributes:
        id: Database primary key (None for new records).
        name: Component name.
        part_number: Vendor part number, unique regardless of case.
        expected_delivery: Promised delivery date.
        actual_delivery: Date it actually arrived.
        delivered: Flips to True once the component arrives.
    """
    name: str
    part_number: Optional[str] = None
    description: Optional[str] = None
    expected_delivery: Optional[date] = None
    actual_delivery: Optional[date] = None
    delivered: bool = False
    id: Optional[int] = None

    def is_overdue(self, reference: date) -> bool:
        """Not delivered and expected strictly before `reference`."""
        return (
            not self.delivered
            and self.expected_delivery is not None
            and self.expected_delivery < reference
        )
