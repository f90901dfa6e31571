from .product import Product
from .customer import Customer
from .supplier import Supplier
