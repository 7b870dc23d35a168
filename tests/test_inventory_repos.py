"""
Tests for part and component repositories.
"""

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_row
from models.part import PartCategory
from repositories.base import InvalidQueryError
from repositories.component_repo import ComponentRepository
from repositories.part_repo import PartRepository


class TestPartRepository:
    """Test inventory queries."""

    @pytest.fixture
    def repo(self):
        return PartRepository()

    @pytest.fixture
    def falcon_row(self, repo):
        return make_row(
            repo, id=1, part_number="REV-21-1650", name="NEO Brushless Motor",
            category="ELECTRONICS", quantity_on_hand=4, minimum_stock=4, safety_stock=1,
            unit_cost=Decimal("45.00"), is_active=True, is_consumable=False,
        )

    def test_row_mapping_converts_category(self, repo, db, falcon_row):
        db.returns_row(falcon_row)
        part = repo.find_by_part_number("REV-21-1650")
        assert part.category is PartCategory.ELECTRONICS
        assert part.unit_cost == Decimal("45.00")
        assert part.is_low_stock()
        assert not part.is_critically_low()

    def test_find_by_part_number_is_case_sensitive(self, repo, db):
        repo.find_by_part_number("rev-21-1650")
        assert "WHERE part_number = %s" in db.sql

    def test_exists_by_part_number_ignore_case(self, repo, db):
        db.returns_scalar(True)
        assert repo.exists_by_part_number_ignore_case("rev-21-1650") is True
        assert "LOWER(part_number) = LOWER(%s)" in db.sql

    def test_search_matches_three_fields(self, repo, db):
        repo.search("neo")
        assert "name ILIKE %s OR description ILIKE %s OR part_number ILIKE %s" in db.sql
        assert db.params == ("%neo%", "%neo%", "%neo%")

    def test_find_by_category_accepts_name(self, repo, db):
        repo.find_by_category("FASTENERS")
        assert db.params == ("FASTENERS",)

    def test_find_by_category_rejects_unknown(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_by_category("MOTORS")

    def test_low_stock_threshold_is_inclusive(self, repo, db):
        repo.find_low_stock()
        assert "quantity_on_hand <= minimum_stock AND is_active = TRUE" in db.sql

    def test_below_minimum_is_strict(self, repo, db):
        repo.find_below_minimum_stock()
        assert "quantity_on_hand < minimum_stock" in db.sql

    def test_critically_low_uses_safety_stock(self, repo, db):
        repo.find_critically_low_stock()
        assert "quantity_on_hand <= safety_stock" in db.sql

    def test_unit_cost_between(self, repo, db):
        repo.find_by_unit_cost_between(Decimal("1.00"), Decimal("10.00"))
        assert "unit_cost BETWEEN %s AND %s" in db.sql

    def test_total_inventory_value(self, repo, db):
        db.returns_scalar(Decimal("1234.50"))
        assert repo.get_total_inventory_value() == Decimal("1234.50")

    def test_total_inventory_value_empty(self, repo, db):
        db.returns_scalar(None)
        assert repo.get_total_inventory_value() == Decimal(0)

    def test_category_summary(self, repo, db):
        db.returns_rows([
            ("ELECTRONICS", 3, 12, Decimal("540.00")),
            ("FASTENERS", 10, 900, Decimal("45.00")),
        ])
        summary = repo.get_category_summary()
        assert summary[0] == {
            "category": PartCategory.ELECTRONICS,
            "parts": 3,
            "quantity": 12,
            "value": Decimal("540.00"),
        }
        assert summary[1]["category"] is PartCategory.FASTENERS


class TestComponentRepository:
    """Test component delivery queries."""

    @pytest.fixture
    def repo(self):
        return ComponentRepository()

    def test_find_by_part_number_ignore_case(self, repo, db):
        db.returns_row(make_row(repo, id=2, name="Gearbox", part_number="am-4255", delivered=False))
        component = repo.find_by_part_number_ignore_case("AM-4255")
        assert component.name == "Gearbox"
        assert "LOWER(part_number) = LOWER(%s)" in db.sql

    def test_expected_delivery_before_is_strict(self, repo, db):
        repo.find_by_expected_delivery_before(date(2025, 1, 15))
        assert "expected_delivery < %s" in db.sql

    def test_expected_delivery_after_is_strict(self, repo, db):
        repo.find_by_expected_delivery_after(date(2025, 1, 15))
        assert "expected_delivery > %s" in db.sql

    def test_find_overdue_components(self, repo, db):
        reference = date(2025, 1, 15)
        db.returns_rows([
            make_row(repo, id=3, name="Encoder", expected_delivery=date(2025, 1, 10), delivered=False),
        ])
        overdue = repo.find_overdue_components(reference)
        assert overdue[0].is_overdue(reference)
        assert "delivered = FALSE AND expected_delivery IS NOT NULL AND expected_delivery < %s" in db.sql
        assert db.params == (reference,)

    def test_find_due_soon(self, repo, db):
        repo.find_due_soon(3, today=date(2025, 1, 30))
        assert db.params == (date(2025, 1, 30), date(2025, 2, 2))

    def test_find_by_required_task_joins_association(self, repo, db):
        repo.find_by_required_task(8)
        assert "JOIN component_tasks ct ON ct.component_id = c.id" in db.sql
        assert "SELECT DISTINCT c.id" in db.sql
        assert db.params == (8,)

    def test_count_by_delivered(self, repo, db):
        db.returns_scalar(5)
        assert repo.count_by_delivered(True) == 5
        assert db.params == (True,)
