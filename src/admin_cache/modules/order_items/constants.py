"""Order-item endpoints."""

DOMAIN = "order_item"

ITEMS_PATH = "/api/orders/{order_id}/items"
ITEM_PATH = "/api/orders/{order_id}/items/{item_id}"
ADD_ITEM_PATH = "/api/orders/{order_id}/items/add"

BESTSELLING_VARIANTS_PATH = "/api/orders/admin/items/bestselling-variants"
BESTSELLING_PRODUCTS_PATH = "/api/orders/admin/items/bestselling-products"
PRODUCT_SALES_PATH = "/api/orders/admin/items/product/{product_id}/sales"

DEFAULT_BESTSELLER_LIMIT = 10
PRICE_SYMBOL = "$"
PRICE_PLACES = 2
