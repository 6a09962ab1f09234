"""Async runner for the git executable."""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .utils import sanitize_environment

logger = logging.getLogger(__name__)


class GitRunnerError(RuntimeError):
    """Base class for git runner errors."""


class GitNotFoundError(GitRunnerError):
    """Raised when the git executable cannot be located."""


@dataclass(slots=True)
class GitExecutionResult:
    """Holds the outcome of a git invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GitRunner:
    """Execute git commands asynchronously inside a checked-out repository."""

    def __init__(self, repo_path: Path, executable: Path | None = None) -> None:
        self._repo_path = Path(repo_path)
        self._executable_path = self._resolve_executable(executable)

    @staticmethod
    def _resolve_executable(explicit: Path | None) -> Path:
        if explicit is not None:
            candidate = Path(explicit)
            if candidate.exists() and candidate.is_file():
                return candidate
            raise GitNotFoundError(f"git executable not found at {candidate}")

        binary = shutil.which("git")
        if binary is None:
            raise GitNotFoundError("git executable not found on PATH")
        return Path(binary)

    async def diff_stat(self, *, width: int = 50, rev: str = "HEAD") -> str:
        """Return the ``git show --stat`` summary of ``rev``.

        Needs the parent commit to be fetched for a meaningful summary. A failed
        invocation yields an empty string.
        """

        result = await self._invoke("show", f"--stat={width}", rev)
        if not result.ok:
            logger.warning(
                "git show exited with %s; using empty diff stat: %s",
                result.returncode,
                result.stderr.strip(),
            )
            return ""
        return result.stdout.rstrip("\n")

    async def short_sha(self, rev: str = "HEAD") -> str:
        """Return git's abbreviated hash for ``rev``."""

        result = await self._invoke("rev-parse", "--short", rev)
        if not result.ok:
            raise GitRunnerError(
                result.stderr.strip() or f"git rev-parse exited with {result.returncode}"
            )
        return result.stdout.strip()

    async def _invoke(self, *args: str) -> GitExecutionResult:
        cmd = [str(self._executable_path), *args]
        logger.debug("Running %s in %s", " ".join(cmd), self._repo_path)
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(self._repo_path),
            env=sanitize_environment(),
        )
        stdout_bytes, stderr_bytes = await process.communicate()
        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        return GitExecutionResult(args=tuple(cmd), returncode=process.returncode, stdout=stdout, stderr=stderr)


class FakeGitRunner(GitRunner):
    """Test double that replays canned git responses."""

    def __init__(self, responses: Iterable[GitExecutionResult] | None = None) -> None:  # type: ignore[override]
        self._responses = list(responses or [])
        self._invocations: list[tuple[str, ...]] = []
        self._executable_path = Path("/tmp/fake-git")
        self._repo_path = Path(".")

    async def _invoke(self, *args: str) -> GitExecutionResult:  # type: ignore[override]
        self._invocations.append(tuple(args))
        if self._responses:
            return self._responses.pop(0)
        return GitExecutionResult(args=tuple(args), returncode=0, stdout="", stderr="")

    @property
    def invocations(self) -> list[tuple[str, ...]]:
        return self._invocations
