from enum import StrEnum


class Table(StrEnum):
    PRODUCTS = "products"
    CATEGORIES = "categories"
    CART_LINES = "cart_lines"
    ORDERS = "orders"
    ORDER_LINES = "order_lines"
    RETURN_REQUESTS = "return_requests"
    REVIEWS = "reviews"
    ADDRESSES = "addresses"
    USERS = "users"
    STORES = "stores"
