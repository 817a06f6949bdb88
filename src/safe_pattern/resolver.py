"""Resolution of bare command names to executable paths on Windows.

npm-style CLI tools on Windows are ``.cmd`` shims that only a shell can run.
Resolving them to a full path lets callers spawn them without ``shell=True``.
On other platforms command names are returned unchanged.
"""

import ntpath
import os
import subprocess
import sys
from threading import Lock
from typing import Callable, Optional

from safe_pattern.utils.logging import get_logger

logger = get_logger(__name__)


class CommandResolver:
    """Resolves command names with ``where`` and memoizes the results.

    Entries are never evicted; the cache lives as long as the resolver.
    """

    def __init__(
        self,
        platform: Optional[str] = None,
        timeout: float = 5.0,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        """Initialize resolver.

        Args:
            platform: Platform name as in ``sys.platform``. Defaults to the host.
            timeout: Seconds to wait for the lookup utility.
            runner: Subprocess runner, replaceable in tests.
            exists: Filesystem existence check, replaceable in tests.
        """
        self.platform = platform if platform is not None else sys.platform
        self.timeout = timeout
        self.runner = runner
        self.exists = exists
        self.cache: dict[str, str] = {}
        self.lock = Lock()

    def resolve(self, cmd: str) -> str:
        """Resolve a command name to its full path.

        Args:
            cmd: Command name such as ``codex`` or an absolute path.

        Returns:
            The resolved path on Windows when lookup succeeds, otherwise
            ``cmd`` unchanged.
        """
        if self.platform != "win32" or ntpath.isabs(cmd):
            return cmd

        with self.lock:
            cached = self.cache.get(cmd)
        if cached:
            return cached

        try:
            result = self.runner(
                ["where", cmd],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            logger.debug("command_resolution_failed", command=cmd, error=str(e))
            return cmd

        # where may print several matches; the first one wins
        lines = result.stdout.strip().splitlines()
        resolved = lines[0].strip() if lines else ""
        if not resolved or not self.exists(resolved):
            logger.debug("command_resolution_failed", command=cmd, error="path_not_found")
            return cmd

        with self.lock:
            self.cache[cmd] = resolved
        logger.info("command_resolved", command=cmd, path=resolved)
        return resolved

    def clear(self) -> None:
        """Forget every cached resolution."""
        with self.lock:
            self.cache.clear()
