"""
Controllers package.

Importing this package registers every controller with the router.
"""

from .home import HomeController
from .store import StoreController
from .account import AccountController
from .store_manager import StoreManagerController

__all__ = [
    "HomeController",
    "StoreController",
    "AccountController",
    "StoreManagerController",
]
