"""Protocol interfaces for dependency inversion.

The install pipeline depends on these abstractions rather than on the
SSH implementation, so tests can pass an in-memory runner:

    class FakeRunner:
        async def run(self, server, command):
            return CommandResult(output="ok", error="", returncode=0)

    await run_install(request, config, FakeRunner())
"""

from typing import Protocol, runtime_checkable

from install_mcp.models import CommandResult, ServerProfile


@runtime_checkable
class RemoteCommandRunner(Protocol):
    """Runs a composed command line on a server."""

    async def run(self, server: ServerProfile, command: str) -> CommandResult:
        """Run a command line and capture its result.

        Args:
            server: Target server profile
            command: Exact command line to execute

        Returns:
            Captured output, stderr and exit status

        Raises:
            RemoteExecutionError: If the command could not be run
        """
        ...

