from .customer_models import Customer, CustomerTier

__all__ = ["Customer", "CustomerTier"]
