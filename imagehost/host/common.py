# -*- coding: utf-8 -*-
"""
Host Capabilities - Support gating, refresh policy, and failure reporting.

Provides the collaborators an image host is composed from: the platform
support predicates that gate remotes and aliases, the time-to-live
policy deciding when manifests are refreshed, and the sink notified when
a refresh fails.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import logging
import threading
import time
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

# imagehost internal
from imagehost.core.config import HostConfig
from imagehost.core.errors import UnsupportedAliasError, UnsupportedRemoteError


class PlatformSupport:
    """Decides which remotes and aliases this platform serves.

    Parameters
    ----------
    supported_remotes : Iterable[str]
        Remote names accepted. Default is only the unnamed remote.
    unsupported_aliases : Iterable[str]
        Aliases rejected on every remote.
    """

    def __init__(
        self,
        supported_remotes: Iterable[str] = ("",),
        unsupported_aliases: Iterable[str] = (),
    ) -> None:
        self._remotes = frozenset(supported_remotes)
        self._unsupported_aliases = frozenset(unsupported_aliases)

    def is_remote_supported(self, remote_name: str) -> bool:
        return remote_name in self._remotes

    def is_alias_supported(self, alias: str, remote_name: str) -> bool:
        return (
            self.is_remote_supported(remote_name)
            and alias not in self._unsupported_aliases
        )

    def check_remote_is_supported(self, remote_name: str) -> None:
        """Raise UnsupportedRemoteError for remotes this platform rejects."""
        if not self.is_remote_supported(remote_name):
            raise UnsupportedRemoteError(
                f'Remote "{remote_name}" is not supported on this platform.'
            )

    def check_alias_is_supported(self, alias: str, remote_name: str) -> None:
        """Raise UnsupportedAliasError for aliases this platform rejects."""
        if not self.is_alias_supported(alias, remote_name):
            raise UnsupportedAliasError(f"'{alias}' is not a supported alias.")

    def alias_verifies_image_is_supported(
        self,
        aliases: Iterable[str],
        remote_name: str,
    ) -> bool:
        """True if an image with these aliases may be listed.

        Images without aliases are always listed; otherwise at least one
        alias must be supported.
        """
        aliases = list(aliases)
        if not aliases:
            return True
        return any(self.is_alias_supported(a, remote_name) for a in aliases)


class RefreshPolicy:
    """Time-to-live bookkeeping for cached manifests.

    A refresh is due when none has succeeded yet, when the TTL has
    elapsed since the last success, or when the previous attempt failed.

    Parameters
    ----------
    ttl : float
        Manifest lifetime in seconds.
    clock : Callable[[], float]
        Monotonic time source. Default ``time.monotonic``.
    """

    def __init__(
        self,
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._last_refresh: Optional[float] = None
        self._need_extra_update = False

    def is_due(self) -> bool:
        with self._lock:
            if self._need_extra_update or self._last_refresh is None:
                return True
            return self._clock() - self._last_refresh >= self.ttl

    def mark_refreshed(self) -> None:
        with self._lock:
            self._last_refresh = self._clock()
            self._need_extra_update = False

    def mark_failed(self) -> None:
        with self._lock:
            self._need_extra_update = True


FailureSink = Callable[[str], None]


def log_manifest_update_failure(message: str) -> None:
    logger.warning("Could not update manifest: %s", message)


class HostCapabilities:
    """Collaborators injected into an image host.

    Parameters
    ----------
    support : Optional[PlatformSupport]
        Remote/alias predicates. Default accepts the unnamed remote.
    refresh_policy : Optional[RefreshPolicy]
        TTL policy. Default refreshes every 300 seconds.
    failure_sink : Optional[FailureSink]
        Called with the message of every failed refresh. Default logs
        a warning.
    """

    def __init__(
        self,
        support: Optional[PlatformSupport] = None,
        refresh_policy: Optional[RefreshPolicy] = None,
        failure_sink: Optional[FailureSink] = None,
    ) -> None:
        self.support = support or PlatformSupport()
        self.refresh_policy = refresh_policy or RefreshPolicy(ttl=300)
        self.failure_sink = failure_sink or log_manifest_update_failure

    @classmethod
    def from_config(
        cls,
        config: HostConfig,
        failure_sink: Optional[FailureSink] = None,
    ) -> 'HostCapabilities':
        return cls(
            support=PlatformSupport(
                supported_remotes=config.supported_remotes,
                unsupported_aliases=config.unsupported_aliases,
            ),
            refresh_policy=RefreshPolicy(ttl=config.manifest_ttl),
            failure_sink=failure_sink,
        )

    def on_manifest_update_failure(self, message: str) -> None:
        """Record a failed refresh and notify the failure sink."""
        self.refresh_policy.mark_failed()
        self.failure_sink(message)
