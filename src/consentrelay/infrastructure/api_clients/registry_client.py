"""
MTB 文件注册表客户端
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from .base import APIClient
from consentrelay.application.ports.downstream_port import HttpResponse

logger = logging.getLogger(__name__)


class RegistryClient(APIClient):
    """Client for the registry's ``/MTBFile`` resource."""

    RESOURCE = "MTBFile"

    async def submit(self, content: Any) -> HttpResponse:
        """
        Upsert a full MTB file.

        Args:
            content: the decoded MTB file, re-serialized as compact JSON

        Returns:
            status and raw body of the registry response
        """
        response = await self.post_json(self.RESOURCE, content)
        logger.debug(f"POST {self.RESOURCE} -> {response.status_code}")
        return response

    async def delete(self, subject_id: str) -> HttpResponse:
        """Remove the MTB files of one patient."""
        endpoint = f"{self.RESOURCE}/{quote(subject_id, safe='')}"
        response = await self.send_delete(endpoint)
        logger.debug(f"DELETE {endpoint} -> {response.status_code}")
        return response
