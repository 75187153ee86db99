# backend/tests/modules/customers/test_customer_service.py

"""
Tests for customer onboarding, lookups and tier placement.
"""

import pytest

from core.error_handling import ConflictError, NotFoundError
from modules.customers.models.customer_models import CustomerTier
from modules.customers.models.loyalty_config import (
    calculate_tier_for_points,
    calculate_tier_progress,
    next_tier_config,
    tier_rank,
)
from modules.customers.schemas.customer_schemas import CustomerCreate
from modules.customers.services.customer_service import CustomerService
from modules.loyalty.models.loyalty_models import TransactionType
from tests.factories import (
    CustomerFactory,
    LoyaltyTransactionFactory,
    RestaurantFactory,
)


@pytest.fixture
def service(db_session):
    return CustomerService(db_session)


def signup(email="Layla@Example.com", **overrides):
    data = {"first_name": "Layla", "last_name": "Haddad", "email": email}
    data.update(overrides)
    return CustomerCreate(**data)


class TestTierRules:

    @pytest.mark.parametrize("points,tier", [
        (0, CustomerTier.BRONZE),
        (1999, CustomerTier.BRONZE),
        (2000, CustomerTier.SILVER),
        (4999, CustomerTier.SILVER),
        (5000, CustomerTier.GOLD),
        (10000, CustomerTier.PLATINUM),
        (250000, CustomerTier.PLATINUM),
    ])
    def test_tier_for_points(self, points, tier):
        assert calculate_tier_for_points(points) == tier

    def test_progress_within_tier(self):
        assert calculate_tier_progress(0) == 0
        assert calculate_tier_progress(1000) == 50
        assert calculate_tier_progress(3500) == 50

    def test_top_tier_progress_is_complete(self):
        assert calculate_tier_progress(12000) == 100
        assert next_tier_config(CustomerTier.PLATINUM) is None

    def test_tier_rank(self):
        assert tier_rank("bronze") < tier_rank("silver") < tier_rank("gold") < tier_rank("platinum")
        assert tier_rank("diamond") == 0


class TestCreateCustomer:

    def test_create_normalizes_email(self, service):
        restaurant = RestaurantFactory()

        customer = service.create_customer(restaurant.id, signup())

        assert customer.email == "layla@example.com"
        assert customer.total_points == 0
        assert customer.current_tier == CustomerTier.BRONZE

    def test_welcome_bonus_credited(self, service):
        restaurant = RestaurantFactory(settings={"welcome_bonus_points": 50})

        customer = service.create_customer(restaurant.id, signup())
        transactions = service.get_customer_transactions(restaurant.id, customer.id)

        assert customer.total_points == 50
        assert customer.lifetime_points == 50
        assert len(transactions) == 1
        assert transactions[0].type == TransactionType.BONUS
        assert transactions[0].balance_after == 50

    def test_duplicate_email_case_insensitive(self, service):
        restaurant = RestaurantFactory()
        service.create_customer(restaurant.id, signup())

        with pytest.raises(ConflictError):
            service.create_customer(restaurant.id, signup(email="LAYLA@example.com"))

    def test_same_email_at_another_restaurant(self, service):
        first = RestaurantFactory()
        second = RestaurantFactory()
        service.create_customer(first.id, signup())

        customer = service.create_customer(second.id, signup())

        assert customer.restaurant_id == second.id

    def test_unknown_restaurant(self, service):
        with pytest.raises(NotFoundError):
            service.create_customer(999999, signup())


class TestLookups:

    def test_get_customer_scoped_to_restaurant(self, service):
        customer = CustomerFactory()
        other = RestaurantFactory()

        assert service.get_customer(customer.restaurant_id, customer.id) is customer
        with pytest.raises(NotFoundError):
            service.get_customer(other.id, customer.id)

    def test_lookup_by_email(self, service):
        customer = CustomerFactory(email="omar@example.com")

        found = service.get_customer_by_email(customer.restaurant_id, "  OMAR@example.com ")

        assert found is customer
        assert service.get_customer_by_email(customer.restaurant_id, "") is None

    def test_list_customers_paginates(self, service):
        restaurant = RestaurantFactory()
        CustomerFactory.create_batch(5, restaurant_id=restaurant.id)
        CustomerFactory()

        page, total = service.list_customers(restaurant.id, page=2, page_size=2)

        assert total == 5
        assert len(page) == 2

    def test_transactions_newest_first(self, service):
        customer = CustomerFactory()
        older = LoyaltyTransactionFactory(
            restaurant_id=customer.restaurant_id, customer_id=customer.id, points=10
        )
        newer = LoyaltyTransactionFactory(
            restaurant_id=customer.restaurant_id, customer_id=customer.id, points=20
        )

        transactions = service.get_customer_transactions(
            customer.restaurant_id, customer.id
        )

        assert [t.id for t in transactions] == [newer.id, older.id]


class TestCreditPoints:

    def test_credit_updates_tier_and_progress(self, service, db_session):
        customer = CustomerFactory(total_points=100, lifetime_points=4900)

        service.credit_points(customer, 150, TransactionType.BONUS, description="Promo")
        db_session.flush()

        assert customer.total_points == 250
        assert customer.lifetime_points == 5050
        assert customer.current_tier == CustomerTier.GOLD
        assert customer.tier_progress == 1
