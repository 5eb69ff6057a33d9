"""
NoteAPI Backend — Admin Directory (Allow-List Source)
=======================================================

What:  Abstract base class and implementations for looking up the set of
       tokens the AuthGate accepts.
Why:   The allow-list is an external collaborator: it may live in config,
       in a file maintained by operators, or (later) behind another service.
       The AuthGate only depends on the `get_admins()` contract.
How:   Concrete implementations inherit from AdminDirectory and implement
       get_admins(). Lookup failures surface as AdminDirectoryError.
Who:   Called by the AuthGate on every /notes request and by GET /health.

Implementations:
    - StaticAdminDirectory: fixed list (ADMIN_TOKENS); never fails
    - FileAdminDirectory:   JSON array re-read from disk on each lookup,
                            so edits take effect without a restart
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List

import aiofiles

from noteapi.config import Settings
from noteapi.exceptions import AdminDirectoryError

logger = logging.getLogger(__name__)


class AdminDirectory(ABC):
    """
    Abstract interface for the admin allow-list.

    Contract:
        - get_admins() returns the current list of authorized tokens
        - Any failure to produce the list raises (AdminDirectoryError for
          known failure modes); the caller treats every exception as a
          failed lookup
    """

    @abstractmethod
    async def get_admins(self) -> List[str]:
        """
        Return the tokens currently allowed to use the API.

        Raises:
            AdminDirectoryError: The allow-list could not be read.
        """
        ...

    async def health_check(self) -> bool:
        """
        Check whether the allow-list can currently be read.

        Who:     Called by the health check endpoint.
        Returns: True if get_admins() succeeds, False otherwise.
        """
        try:
            await self.get_admins()
        except Exception as e:
            logger.warning("Admin directory health check failed: %s", str(e))
            return False
        return True


class StaticAdminDirectory(AdminDirectory):
    """Allow-list fixed at construction time."""

    def __init__(self, tokens: Iterable[str]):
        self._tokens = list(tokens)

    async def get_admins(self) -> List[str]:
        return list(self._tokens)


class FileAdminDirectory(AdminDirectory):
    """
    Allow-list stored as a JSON array of strings on disk.

    Example file:
        ["ops-token", "alice"]

    Why re-read on every call:
        Operators rotate tokens by editing the file; no restart or reload
        signal is needed. The file is small, and the read is async so it
        does not block other requests.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    async def get_admins(self) -> List[str]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise AdminDirectoryError(
                reason=f"Could not read admin file: {e}",
                context={"path": str(self.path)},
            ) from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AdminDirectoryError(
                reason=f"Admin file is not valid JSON: {e}",
                context={"path": str(self.path)},
            ) from e

        if not isinstance(payload, list) or not all(isinstance(t, str) for t in payload):
            raise AdminDirectoryError(
                reason="Admin file must contain a JSON array of strings",
                context={"path": str(self.path)},
            )
        return payload


def build_admin_directory(settings: Settings) -> AdminDirectory:
    """
    Select the allow-list source from configuration.

    ADMIN_FILE wins over ADMIN_TOKENS when both are set.
    """
    if settings.admin_file:
        logger.info("Admin allow-list: file %s", settings.admin_file)
        return FileAdminDirectory(settings.admin_file)
    tokens = settings.admin_tokens_list
    logger.info("Admin allow-list: %d static token(s)", len(tokens))
    return StaticAdminDirectory(tokens)
