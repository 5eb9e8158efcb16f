"""Product-variant endpoints."""

DOMAIN = "variant"

LIST_PATH = "/product-variants/filter"
VIEW_PATH = "/product-variants/view/{id}"
CREATE_PATH = "/product-variants/create"
UPDATE_PATH = "/product-variants/edit/{id}"
DELETE_PATH = "/product-variants/delete/{id}"
STATUS_PATH = "/product-variants/status/{id}"
STOCK_PATH = "/product-variants/{id}/stock"
LOW_STOCK_PATH = "/product-variants/low-stock"
OUT_OF_STOCK_PATH = "/product-variants/out-of-stock"
BY_PRODUCT_PATH = "/product-variants/product/{product_id}"
BY_SKU_PATH = "/product-variants/sku/{sku}"

DEFAULT_SORT = "variantId,desc"
