# backend/tests/modules/loyalty/test_loyalty_routes.py

"""
API tests for the reward engine and wallet routes.
"""

import pytest

from modules.customers.models.customer_models import CustomerTier
from tests.factories import CustomerFactory, RestaurantFactory, RewardFactory


@pytest.fixture
def restaurant(db_session):
    return RestaurantFactory(with_reward_engine=True)


def engine_url(restaurant_id, path=""):
    return f"/api/v1/restaurants/{restaurant_id}/reward-engine{path}"


class TestRewardEngineRoutes:
    """Test /api/v1/restaurants/{id}/reward-engine"""

    def test_get_default_config(self, client):
        restaurant = RestaurantFactory()

        response = client.get(engine_url(restaurant.id))

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "manual"
        assert data["tier_multipliers"]["platinum"] == 2.0
        assert data["max_points_per_order"] == 1000

    def test_get_config_unknown_restaurant(self, client):
        response = client.get(engine_url(424242))

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]["message"]

    def test_update_config(self, client, restaurant):
        payload = {
            "mode": "smart",
            "smart_settings": {"cost_price": 5, "selling_price": 10, "profit_allocation_percent": 20},
            "manual_settings": {"aed_value": 10, "point_value": 1},
            "tier_multipliers": {"bronze": 1, "silver": 1.25, "gold": 1.5, "platinum": 2},
            "max_points_per_order": 500,
        }

        response = client.put(engine_url(restaurant.id), json=payload)
        assert response.status_code == 200

        stored = client.get(engine_url(restaurant.id)).json()
        assert stored["mode"] == "smart"
        assert stored["max_points_per_order"] == 500

    @pytest.mark.parametrize("payload", [
        {"max_points_per_order": 0},
        {"mode": "random"},
        {"manual_settings": {"aed_value": 0, "point_value": 1}},
        {"smart_settings": {"profit_allocation_percent": 150}},
        {"tier_multipliers": {"gold": -1}},
    ])
    def test_update_config_validation(self, client, restaurant, payload):
        response = client.put(engine_url(restaurant.id), json=payload)
        assert response.status_code == 422

    def test_preview_does_not_persist(self, client, restaurant):
        response = client.post(engine_url(restaurant.id, "/preview"), json={
            "order_amount": 100,
            "customer_tier": "bronze",
            "config": {
                "mode": "smart",
                "smart_settings": {"cost_price": 5, "selling_price": 10},
            },
        })

        assert response.status_code == 200
        assert response.json()["points"] == 10
        assert client.get(engine_url(restaurant.id)).json()["mode"] == "manual"

    def test_preview_unknown_restaurant(self, client):
        response = client.post(engine_url(424242, "/preview"), json={
            "order_amount": 100,
            "config": {"mode": "manual"},
        })

        assert response.status_code == 404

    def test_calculate_with_stored_config(self, client, restaurant):
        response = client.post(
            engine_url(restaurant.id, "/calculate"),
            json={"order_amount": 95, "customer_tier": "silver"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["points"] == 11
        assert data["tier_multiplier"] == 1.25
        assert data["capped"] is False

    def test_calculate_negative_amount_is_zero(self, client, restaurant):
        response = client.post(
            engine_url(restaurant.id, "/calculate"), json={"order_amount": -20}
        )

        assert response.status_code == 200
        assert response.json()["points"] == 0


class TestWalletRoutes:
    """Test customer wallet, purchase and redemption endpoints"""

    def test_record_purchase(self, client, restaurant):
        customer = CustomerFactory(restaurant_id=restaurant.id)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/purchases",
            json={"order_amount": 95, "description": "Dinner"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["points_earned"] == 9
        assert data["transaction"]["description"] == "Dinner"
        assert data["current_tier"] == "bronze"

    def test_record_purchase_negative_amount(self, client, restaurant):
        customer = CustomerFactory(restaurant_id=restaurant.id)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/purchases",
            json={"order_amount": -5},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("amount", ["Infinity", "NaN"])
    def test_record_purchase_non_finite_amount(self, client, restaurant, amount):
        customer = CustomerFactory(restaurant_id=restaurant.id)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/purchases",
            content=f'{{"order_amount": {amount}}}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

        wallet = client.get(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/wallet"
        ).json()
        assert wallet["customer"]["visit_count"] == 0
        assert wallet["customer"]["total_spent"] == 0.0

    def test_record_purchase_unknown_customer(self, client, restaurant):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/999999/purchases",
            json={"order_amount": 10},
        )

        assert response.status_code == 404

    def test_get_wallet(self, client, restaurant):
        customer = CustomerFactory(
            restaurant_id=restaurant.id,
            total_points=120,
            lifetime_points=120,
        )
        RewardFactory(restaurant_id=restaurant.id, name="Free Coffee", points_required=100)

        response = client.get(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/wallet"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["customer"]["total_points"] == 120
        assert data["available_rewards"][0]["name"] == "Free Coffee"
        assert data["available_rewards"][0]["can_redeem"] is True
        assert data["recent_transactions"] == []

    def test_redeem_reward(self, client, restaurant):
        customer = CustomerFactory(
            restaurant_id=restaurant.id, total_points=300, lifetime_points=300
        )
        reward = RewardFactory(restaurant_id=restaurant.id, points_required=100)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}"
            f"/rewards/{reward.id}/redeem"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_points"] == 200
        assert data["transaction"]["points"] == -100

    def test_redeem_insufficient_points(self, client, restaurant):
        customer = CustomerFactory(restaurant_id=restaurant.id, total_points=10)
        reward = RewardFactory(restaurant_id=restaurant.id, points_required=100)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}"
            f"/rewards/{reward.id}/redeem"
        )

        assert response.status_code == 422
        assert response.json()["detail"]["message"] == "Insufficient points balance"

    def test_redeem_unknown_reward(self, client, restaurant):
        customer = CustomerFactory(restaurant_id=restaurant.id, total_points=1000)

        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/customers/{customer.id}/rewards/999999/redeem"
        )

        assert response.status_code == 404


class TestRewardCatalogRoutes:

    def test_create_and_list_rewards(self, client, restaurant):
        response = client.post(
            f"/api/v1/restaurants/{restaurant.id}/rewards",
            json={"name": "  Free Dessert ", "points_required": 250, "min_tier": "silver"},
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Free Dessert"

        listed = client.get(f"/api/v1/restaurants/{restaurant.id}/rewards").json()
        assert [r["name"] for r in listed] == ["Free Dessert"]

    @pytest.mark.parametrize("payload", [
        {"name": "Free Dessert", "points_required": 0},
        {"name": "   ", "points_required": 10},
        {"name": "Free Dessert", "points_required": 10, "min_tier": "diamond"},
    ])
    def test_create_reward_validation(self, client, restaurant, payload):
        response = client.post(f"/api/v1/restaurants/{restaurant.id}/rewards", json=payload)
        assert response.status_code == 422

    def test_patch_reward(self, client, restaurant):
        reward = RewardFactory(restaurant_id=restaurant.id)

        response = client.patch(
            f"/api/v1/restaurants/{restaurant.id}/rewards/{reward.id}",
            json={"is_active": False},
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_seed_default_rewards(self, client, restaurant):
        response = client.post(f"/api/v1/restaurants/{restaurant.id}/rewards/defaults")

        assert response.status_code == 200
        tiers = {r["min_tier"] for r in response.json()}
        assert tiers == {tier.value for tier in CustomerTier}
