"""Credential registry and reference-variable naming."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "$Creds"


def resolve_reference_name(username: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the variable name generated configurations use for *username*.

    ``DOMAIN\\user`` keeps the part after the backslash, ``user@domain``
    keeps the part before ``@``. Hyphens and dots become underscores,
    spaces and ``@`` are dropped.

    Example::

        resolve_reference_name("CONTOSO\\admin-user.name")  # → "$Credsadmin_user_name"
    """
    if "\\" in username:
        name = username.split("\\", 1)[1]
    elif "@" in username:
        name = username.split("@", 1)[0]
    else:
        name = username
    name = name.replace("-", "_").replace(".", "_").replace(" ", "").replace("@", "")
    return prefix + name


class CredentialRegistry:
    """Usernames seen during one extraction run, compared case-insensitively."""

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix
        self._usernames: set[str] = set()
        self._lock = threading.Lock()

    def save(self, username: str) -> None:
        key = username.lower()
        with self._lock:
            if key in self._usernames:
                return
            self._usernames.add(key)
        logger.debug("Registered credential %s", key)

    def test(self, username: str) -> bool:
        return username.lower() in self._usernames

    def __contains__(self, username: object) -> bool:
        return isinstance(username, str) and self.test(username)

    def __len__(self) -> int:
        return len(self._usernames)

    def resolve_reference_name(self, username: str) -> str:
        return resolve_reference_name(username, self.prefix)

    def clear(self) -> None:
        with self._lock:
            self._usernames.clear()
