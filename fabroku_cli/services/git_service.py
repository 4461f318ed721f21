"""
Git Context Service

Reads the local repository's remote and branch, and normalizes remote URLs
so that SSH and HTTPS forms of the same repository compare equal.
"""

import re
import subprocess
from pathlib import Path
from typing import Optional, Union

from fabroku_cli.models.app import GitIdentity

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_USERINFO_RE = re.compile(r"^[^@/]*@")
_PORT_RE = re.compile(r"^([^/:]+):[^/]*")
_SCP_RE = re.compile(r"^(?:[^@/]+@)?([^:/]+):/*(.*)$")
_SUFFIX_RE = re.compile(r"(?:\.git|/|\s)+$", re.IGNORECASE)


def normalize_git_url(url: str) -> str:
    """
    Canonical form of a git remote URL, for comparison only.

    git@github.com:org/repo.git, https://github.com/org/repo/ and
    ssh://git@github.com:22/org/repo all become github.com/org/repo.
    """
    normalized = url.strip()

    if _SCHEME_RE.match(normalized):
        normalized = _SCHEME_RE.sub("", normalized)
        normalized = _USERINFO_RE.sub("", normalized)
        normalized = _PORT_RE.sub(r"\1", normalized)
    else:
        scp = _SCP_RE.match(normalized)
        if scp:
            normalized = f"{scp.group(1)}/{scp.group(2)}"

    normalized = _SUFFIX_RE.sub("", normalized)
    return normalized.strip().lower()


class GitService:
    """Runs git in a project directory. Failures degrade to None."""

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    def _git(self, directory: Union[str, Path], *args: str) -> Optional[str]:
        try:
            result = subprocess.run(
                [self.git_binary, *args],
                cwd=str(directory),
                capture_output=True,
                text=True,
            )
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            # git missing or directory unusable
            return None

        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_remote_url(self, directory: Union[str, Path]) -> Optional[str]:
        """URL of the origin remote, or None."""
        return self._git(directory, "remote", "get-url", "origin")

    def get_branch(self, directory: Union[str, Path]) -> Optional[str]:
        """Current branch name, or None (also for detached HEAD)."""
        return self._git(directory, "branch", "--show-current")

    def identity(self, directory: Union[str, Path]) -> Optional[GitIdentity]:
        remote_url = self.get_remote_url(directory)
        if not remote_url:
            return None
        return GitIdentity(remote_url=remote_url, branch=self.get_branch(directory))
