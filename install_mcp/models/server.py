"""Managed server data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServerProfile:
    """A managed server and the account used to install software on it.

    ``privilege_user`` decides the command shape: ``root`` targets are
    treated as apk-based and run commands directly, any other user is
    treated as apt-based and escalates with ``sudo -S``.
    """

    address: str
    privilege_user: str = "root"
    privilege_secret: str = field(default="", repr=False)
    port: int = 22
    name: str | None = None
    identity_file: str | None = None

    @property
    def is_root(self) -> bool:
        """Whether commands run as root without escalation."""
        return self.privilege_user == "root"

    @property
    def label(self) -> str:
        """Display name, falling back to the address."""
        return self.name or self.address
