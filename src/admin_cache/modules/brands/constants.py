"""Brand endpoints and display labels."""

DOMAIN = "brand"

LIST_PATH = "/brands/list"
ACTIVE_PATH = "/brands/list/active"
VIEW_PATH = "/brands/view/{id}"
CREATE_PATH = "/brands/create"
UPDATE_PATH = "/brands/edit/{id}"
DELETE_PATH = "/brands/delete/{id}"
STATUS_PATH = "/brands/status/{id}"

DEFAULT_SORT = "brandId,desc"

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"
