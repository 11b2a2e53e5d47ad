from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    USER = "user"


class TransactionType(str, Enum):
    STOCK_IN = "in"
    STOCK_OUT = "out"


class ItemSortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    QUANTITY = "quantity"
    CATEGORY = "category"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
