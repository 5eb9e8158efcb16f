from admin_cache.modules.addresses.repositories.http_repository import HttpAddressRepository
from admin_cache.modules.addresses.repositories.interfaces import IAddressRepository

__all__ = ["HttpAddressRepository", "IAddressRepository"]
