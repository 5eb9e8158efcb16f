from admin_cache.modules.order_items.repositories.http_repository import HttpOrderItemRepository
from admin_cache.modules.order_items.repositories.interfaces import IOrderItemRepository

__all__ = ["HttpOrderItemRepository", "IOrderItemRepository"]
