from .sales import SalesDocument, SalesLine
from .purchase import PurchaseDocument, PurchaseLine
