from admin_cache.modules.brands.repositories.http_repository import HttpBrandRepository
from admin_cache.modules.brands.repositories.interfaces import IBrandRepository

__all__ = ["HttpBrandRepository", "IBrandRepository"]
