# backend/modules/loyalty/services/loyalty_service.py

"""
Core service for the customer wallet: purchases, reward catalog and
redemptions.
"""

from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging
import math

from core.error_handling import NotFoundError, APIValidationError
from modules.customers.models.customer_models import Customer, CustomerTier
from modules.customers.models.loyalty_config import tier_rank
from modules.customers.services.customer_service import CustomerService
from modules.restaurants.services.restaurant_service import RestaurantService

from .rewards_engine import RewardEngineService
from ..data.default_rewards import DEFAULT_REWARDS
from ..models.loyalty_models import (
    LoyaltyTransaction,
    Reward,
    RewardRedemption,
    TransactionType,
)
from ..schemas.loyalty_schemas import (
    AvailableReward,
    PurchaseCreate,
    PurchaseResponse,
    PointsTransactionResponse,
    RewardCreate,
    RewardRedemptionResponse,
    RewardUpdate,
    WalletResponse,
)

logger = logging.getLogger(__name__)


class LoyaltyService:
    """Service for wallets, purchases and reward redemption"""

    def __init__(self, db: Session):
        self.db = db
        self.customers = CustomerService(db)
        self.reward_engine = RewardEngineService(db)

    # ========== Purchases ==========

    def record_purchase(
        self, restaurant_id: int, customer_id: int, purchase: PurchaseCreate
    ) -> PurchaseResponse:
        """Credit points for a completed order and update visit statistics.

        Points come from the restaurant's reward engine at the customer's
        current tier.

        Raises:
            NotFoundError: If the restaurant or customer doesn't exist
            APIValidationError: If the order amount is negative or not finite
        """
        if not math.isfinite(purchase.order_amount):
            raise APIValidationError(
                "Order amount must be a finite number",
                {"order_amount": str(purchase.order_amount)},
            )
        if purchase.order_amount < 0:
            raise APIValidationError(
                "Order amount must not be negative",
                {"order_amount": purchase.order_amount},
            )

        customer = self.customers.get_customer(restaurant_id, customer_id)
        previous_tier = CustomerTier(customer.current_tier)

        points = self.reward_engine.calculate_points_for_order(
            restaurant_id, purchase.order_amount, previous_tier.value
        )

        transaction = self.customers.credit_points(
            customer,
            points,
            TransactionType.EARNED,
            description=purchase.description or f"Purchase of {purchase.order_amount:.2f}",
            amount_spent=purchase.order_amount,
        )

        customer.total_spent = (customer.total_spent or 0.0) + purchase.order_amount
        customer.visit_count = (customer.visit_count or 0) + 1
        customer.last_visit = datetime.utcnow()

        self.db.commit()
        self.db.refresh(customer)
        self.db.refresh(transaction)

        current_tier = CustomerTier(customer.current_tier)
        logger.info(
            f"Customer {customer_id} earned {points} points on {purchase.order_amount:.2f}"
        )

        return PurchaseResponse(
            transaction=PointsTransactionResponse.model_validate(transaction),
            points_earned=points,
            total_points=customer.total_points,
            lifetime_points=customer.lifetime_points,
            previous_tier=previous_tier,
            current_tier=current_tier,
            tier_upgraded=tier_rank(current_tier) > tier_rank(previous_tier),
        )

    # ========== Reward Catalog ==========

    def list_rewards(
        self, restaurant_id: int, include_inactive: bool = False
    ) -> List[Reward]:
        RestaurantService(self.db).get_restaurant(restaurant_id)

        query = self.db.query(Reward).filter(Reward.restaurant_id == restaurant_id)
        if not include_inactive:
            query = query.filter(Reward.is_active == True)  # noqa: E712
        return query.order_by(Reward.points_required, Reward.id).all()

    def get_reward(self, restaurant_id: int, reward_id: int) -> Reward:
        reward = self.db.query(Reward).filter(
            Reward.id == reward_id,
            Reward.restaurant_id == restaurant_id,
        ).first()

        if not reward:
            raise NotFoundError("Reward", reward_id)

        return reward

    def create_reward(self, restaurant_id: int, reward_data: RewardCreate) -> Reward:
        RestaurantService(self.db).get_restaurant(restaurant_id)

        reward = Reward(
            restaurant_id=restaurant_id,
            name=reward_data.name,
            description=reward_data.description,
            points_required=reward_data.points_required,
            min_tier=reward_data.min_tier.value,
            is_active=reward_data.is_active,
        )
        self.db.add(reward)
        self.db.commit()
        self.db.refresh(reward)
        return reward

    def update_reward(
        self, restaurant_id: int, reward_id: int, update: RewardUpdate
    ) -> Reward:
        reward = self.get_reward(restaurant_id, reward_id)

        for field, value in update.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            if field == "min_tier":
                value = CustomerTier(value).value
            if field == "name":
                value = value.strip()
                if not value:
                    raise APIValidationError("Reward name is required")
            setattr(reward, field, value)

        self.db.commit()
        self.db.refresh(reward)
        return reward

    def seed_default_rewards(self, restaurant_id: int) -> List[Reward]:
        """Create the starter catalog if the restaurant has no rewards yet"""
        existing = self.list_rewards(restaurant_id, include_inactive=True)
        if existing:
            return existing

        rewards = [Reward(restaurant_id=restaurant_id, **data) for data in DEFAULT_REWARDS]
        self.db.add_all(rewards)
        self.db.commit()

        logger.info(f"Seeded {len(rewards)} default rewards for restaurant {restaurant_id}")
        return self.list_rewards(restaurant_id, include_inactive=True)

    # ========== Wallet ==========

    def get_available_rewards(
        self, restaurant_id: int, customer_id: int
    ) -> List[AvailableReward]:
        """Active rewards the customer's tier unlocks, cheapest first"""
        customer = self.customers.get_customer(restaurant_id, customer_id)
        return self._available_rewards_for(customer)

    def _available_rewards_for(self, customer: Customer) -> List[AvailableReward]:
        customer_rank = tier_rank(customer.current_tier)
        rewards = self.list_rewards(customer.restaurant_id)

        available = []
        for reward in rewards:
            if tier_rank(reward.min_tier) > customer_rank:
                continue
            short = max(reward.points_required - (customer.total_points or 0), 0)
            available.append(AvailableReward(
                id=reward.id,
                name=reward.name,
                description=reward.description,
                points_required=reward.points_required,
                min_tier=reward.min_tier,
                can_redeem=short == 0,
                points_short=short,
            ))
        return available

    def redeem_reward(
        self, restaurant_id: int, customer_id: int, reward_id: int
    ) -> RewardRedemptionResponse:
        """Exchange points for a reward.

        Only the spendable balance is reduced; lifetime points (and so the
        tier) are unaffected.

        Raises:
            NotFoundError: Unknown customer or reward
            APIValidationError: Inactive reward, tier too low or insufficient points
        """
        customer = self.customers.get_customer(restaurant_id, customer_id)
        reward = self.get_reward(restaurant_id, reward_id)

        if not reward.is_active:
            raise APIValidationError("Reward is no longer available", {"reward_id": reward_id})

        if tier_rank(reward.min_tier) > tier_rank(customer.current_tier):
            raise APIValidationError(
                "Customer tier is too low for this reward",
                {"required_tier": reward.min_tier, "customer_tier": CustomerTier(customer.current_tier).value},
            )

        balance = customer.total_points or 0
        if balance < reward.points_required:
            raise APIValidationError(
                "Insufficient points balance",
                {"current_balance": balance, "requested": reward.points_required},
            )

        customer.total_points = balance - reward.points_required

        redemption = RewardRedemption(
            restaurant_id=restaurant_id,
            customer_id=customer_id,
            reward_id=reward.id,
            points_used=reward.points_required,
            redeemed_at=datetime.utcnow(),
        )
        transaction = LoyaltyTransaction(
            restaurant_id=restaurant_id,
            customer_id=customer_id,
            type=TransactionType.REDEMPTION,
            points=-reward.points_required,
            description=f"Redeemed {reward.name}",
            balance_after=customer.total_points,
            reward_id=reward.id,
        )
        self.db.add(redemption)
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(redemption)
        self.db.refresh(transaction)

        logger.info(
            f"Customer {customer_id} redeemed reward {reward.id} for {reward.points_required} points"
        )

        return RewardRedemptionResponse(
            redemption_id=redemption.id,
            reward_id=reward.id,
            reward_name=reward.name,
            points_used=redemption.points_used,
            total_points=customer.total_points,
            redeemed_at=redemption.redeemed_at,
            transaction=PointsTransactionResponse.model_validate(transaction),
        )

    def get_wallet(
        self, restaurant_id: int, customer_id: int, transaction_limit: Optional[int] = 20
    ) -> WalletResponse:
        customer = self.customers.get_customer(restaurant_id, customer_id)
        transactions = self.customers.get_customer_transactions(
            restaurant_id, customer_id, limit=transaction_limit
        )

        return WalletResponse(
            customer=customer,
            available_rewards=self._available_rewards_for(customer),
            recent_transactions=transactions,
        )
