from storefront.cart import Cart, SoldOutError
from storefront.client import StorefrontClient, StorefrontError
