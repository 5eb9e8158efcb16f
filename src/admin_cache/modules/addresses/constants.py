"""User-address endpoints."""

DOMAIN = "address"

USER_ADDRESSES_PATH = "/user-addresses/user/{user_id}"
ADDRESS_PATH = "/user-addresses/{id}"
SET_DEFAULT_PATH = "/user-addresses/{id}/default"

DEFAULT_BADGE = "Default"
