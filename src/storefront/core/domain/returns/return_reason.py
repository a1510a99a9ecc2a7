from enum import StrEnum


class ReturnReason(StrEnum):
    DEFECTIVE_PRODUCT = "defective_product"
    NOT_AS_EXPECTED = "not_as_expected"
    ORDER_ERROR = "order_error"
    SIZE_CHANGE = "size_change"
    BUYER_REMORSE = "buyer_remorse"
    OTHER = "other"


class ReturnStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
