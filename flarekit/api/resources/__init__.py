"""Resource APIs of the Cloudflare REST client."""

from .accounts import AccountsApi
from .d1 import D1Api
from .dns import DnsApi
from .members import MembersApi
from .roles import RolesApi
from .zones import ZonesApi

__all__ = [
    "AccountsApi",
    "D1Api",
    "DnsApi",
    "MembersApi",
    "RolesApi",
    "ZonesApi",
]
