from .base import SheetFetcher
from .remote import HttpSheetFetcher

__all__ = ["SheetFetcher", "HttpSheetFetcher"]
