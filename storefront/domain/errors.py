# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy wyjatek domenowy."""


class Unauthenticated(StorefrontError):
    pass


class NotFoundError(StorefrontError):
    pass


class EmptyCartError(StorefrontError):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InvalidAddressError(StorefrontError):
    def __init__(self, message: str = "Invalid address"):
        super().__init__(message)


class InsufficientStockError(StorefrontError):
    def __init__(self, sku: str):
        self.sku = sku
        super().__init__(f"Insufficient stock for {sku}")


class StockLimitError(StorefrontError):
    """Dodanie/zmiana ilosci w koszyku przekracza stan magazynowy (400, nie 409)."""


class CheckoutInProgressError(StorefrontError):
    def __init__(self, message: str = "Checkout already in progress"):
        super().__init__(message)


class PersistenceError(StorefrontError):
    def __init__(self, message: str = "Could not create order"):
        super().__init__(message)
