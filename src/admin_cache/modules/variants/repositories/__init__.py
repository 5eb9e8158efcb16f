from admin_cache.modules.variants.repositories.http_repository import HttpVariantRepository
from admin_cache.modules.variants.repositories.interfaces import IVariantRepository

__all__ = ["HttpVariantRepository", "IVariantRepository"]
