"""
下游注册表 API 客户端。
"""

from .base import APIClient
from .registry_client import RegistryClient

__all__ = ["APIClient", "RegistryClient"]
