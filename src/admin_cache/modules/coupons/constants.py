"""Coupon endpoints, types and display labels."""

from enum import Enum

DOMAIN = "coupon"

LIST_PATH = "/coupons"
SEARCH_PATH = "/coupons/search"
VIEW_PATH = "/coupons/{id}"
VIEW_BY_CODE_PATH = "/coupons/code/{code}"
CREATE_PATH = "/coupons"
UPDATE_PATH = "/coupons/{id}"
DELETE_PATH = "/coupons/{id}"
TOGGLE_PATH = "/coupons/{id}/toggle"
VALID_PATH = "/coupons/valid"
PUBLIC_PATH = "/coupons/public"
STATISTICS_PATH = "/coupons/statistics"

DEFAULT_SORT = "code,asc"


class CouponType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"
STATUS_EXPIRED = "Expired"
STATUS_FULLY_USED = "Fully used"
UNLIMITED = "Unlimited"
NO_EXPIRY = "No expiry"
EXPIRING_SOON = "Expiring soon!"
