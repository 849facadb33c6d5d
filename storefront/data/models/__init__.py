#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.data.models.address import AddressModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.discount_code import DiscountCodeModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.data.models.quote import QuoteModel
from storefront.data.models.quote_item import QuoteItemModel

__all__ = [
    "ProductModel",
    "ProductVariantModel",
    "AddressModel",
    "CartItemModel",
    "DiscountCodeModel",
    "OrderModel",
    "OrderItemModel",
    "WishlistItemModel",
    "QuoteModel",
    "QuoteItemModel",
]
