# backend/modules/customers/services/customer_service.py

from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Optional, List, Tuple
from datetime import datetime
import logging

from core.error_handling import NotFoundError, ConflictError
from modules.restaurants.services.restaurant_service import RestaurantService
from modules.loyalty.models.loyalty_models import LoyaltyTransaction, TransactionType

from ..models.customer_models import Customer, CustomerTier
from ..models.loyalty_config import calculate_tier_for_points, calculate_tier_progress
from ..schemas.customer_schemas import CustomerCreate


logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer onboarding and lookups"""

    def __init__(self, db: Session):
        self.db = db
        self.restaurants = RestaurantService(db)

    def create_customer(self, restaurant_id: int, customer_data: CustomerCreate) -> Customer:
        """Create a loyalty member, crediting the welcome bonus when configured.

        Raises:
            NotFoundError: If the restaurant doesn't exist
            ConflictError: If the email is already registered at this restaurant
        """
        restaurant = self.restaurants.get_restaurant(restaurant_id)

        existing = self.get_customer_by_email(restaurant_id, customer_data.email)
        if existing:
            raise ConflictError(
                f"Customer with email {customer_data.email} already exists",
                {"customer_id": existing.id},
            )

        customer = Customer(
            restaurant_id=restaurant_id,
            first_name=customer_data.first_name,
            last_name=customer_data.last_name,
            email=customer_data.email,
            phone=customer_data.phone,
            date_of_birth=customer_data.date_of_birth,
            marketing_opt_in=customer_data.marketing_opt_in,
            total_points=0,
            lifetime_points=0,
            current_tier=CustomerTier.BRONZE,
            tier_progress=0,
            visit_count=0,
            total_spent=0.0,
        )
        self.db.add(customer)
        self.db.flush()

        welcome_bonus = int(restaurant.get_setting("welcome_bonus_points", 0) or 0)
        if welcome_bonus > 0:
            self.credit_points(
                customer,
                welcome_bonus,
                TransactionType.BONUS,
                description="Welcome bonus",
            )

        self.db.commit()
        self.db.refresh(customer)

        logger.info(f"Created customer {customer.id} for restaurant {restaurant_id}")
        return customer

    def credit_points(
        self,
        customer: Customer,
        points: int,
        transaction_type: TransactionType,
        description: Optional[str] = None,
        amount_spent: Optional[float] = None,
    ) -> LoyaltyTransaction:
        """Add earned points to the balance and lifetime total, re-tiering the customer.

        The caller commits.
        """
        customer.total_points = (customer.total_points or 0) + points
        customer.lifetime_points = (customer.lifetime_points or 0) + points
        self.refresh_tier(customer)

        transaction = LoyaltyTransaction(
            restaurant_id=customer.restaurant_id,
            customer_id=customer.id,
            type=transaction_type,
            points=points,
            amount_spent=amount_spent,
            description=description,
            balance_after=customer.total_points,
        )
        self.db.add(transaction)
        return transaction

    def refresh_tier(self, customer: Customer) -> bool:
        """Recompute tier and progress from lifetime points. Returns True on change."""
        lifetime = customer.lifetime_points or 0
        new_tier = calculate_tier_for_points(lifetime)
        customer.tier_progress = calculate_tier_progress(lifetime)

        if customer.current_tier != new_tier:
            logger.info(
                f"Customer {customer.id} tier changed {customer.current_tier} -> {new_tier.value}"
            )
            customer.current_tier = new_tier
            customer.tier_updated_at = datetime.utcnow()
            return True
        return False

    def get_customer(self, restaurant_id: int, customer_id: int) -> Customer:
        customer = self.db.query(Customer).filter(
            Customer.id == customer_id,
            Customer.restaurant_id == restaurant_id,
        ).first()

        if not customer:
            raise NotFoundError("Customer", customer_id)

        return customer

    def get_customer_by_email(self, restaurant_id: int, email: str) -> Optional[Customer]:
        """Case-insensitive lookup used by the onboarding login/signup switch"""
        normalized = (email or "").strip().lower()
        if not normalized:
            return None

        return self.db.query(Customer).filter(
            Customer.restaurant_id == restaurant_id,
            func.lower(Customer.email) == normalized,
        ).first()

    def list_customers(
        self, restaurant_id: int, page: int = 1, page_size: int = 50
    ) -> Tuple[List[Customer], int]:
        query = self.db.query(Customer).filter(Customer.restaurant_id == restaurant_id)
        total = query.count()
        customers = (
            query.order_by(Customer.created_at.desc(), Customer.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return customers, total

    def get_customer_transactions(
        self, restaurant_id: int, customer_id: int, limit: int = 50
    ) -> List[LoyaltyTransaction]:
        """Most recent points movements first"""
        self.get_customer(restaurant_id, customer_id)

        return (
            self.db.query(LoyaltyTransaction)
            .filter(
                LoyaltyTransaction.restaurant_id == restaurant_id,
                LoyaltyTransaction.customer_id == customer_id,
            )
            .order_by(LoyaltyTransaction.created_at.desc(), LoyaltyTransaction.id.desc())
            .limit(limit)
            .all()
        )
