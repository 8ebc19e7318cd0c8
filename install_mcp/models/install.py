"""Install request and outcome data models."""

from dataclasses import dataclass
from enum import Enum


class InstallMode(str, Enum):
    """How the package is selected."""

    CATALOG = "common"
    CUSTOM = "custom"


class PackageManagerFamily(str, Enum):
    """Package-manager syntax targeted by a composed command."""

    APT = "apt"
    APK = "apk"

    @property
    def install_prefix(self) -> str:
        """Install verb for this family."""
        return _INSTALL_PREFIXES[self]


_INSTALL_PREFIXES = {
    PackageManagerFamily.APT: "apt install -y",
    PackageManagerFamily.APK: "apk add",
}


@dataclass(frozen=True)
class InstallRequest:
    """A single install request from an operator."""

    server_address: str
    mode: InstallMode | str
    selector: str

    @property
    def summary(self) -> str:
        """Short human-readable form, e.g. ``common/nginx``."""
        mode = self.mode.value if isinstance(self.mode, InstallMode) else self.mode
        return f"{mode}/{self.selector}"


@dataclass(frozen=True)
class ComposedCommand:
    """Command line ready to be sent to a server."""

    text: str
    server_address: str
    family: PackageManagerFamily
    install_command: str


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of running a composed command."""

    command: ComposedCommand
    success: bool
    remote_output: str
    failure_detail: str | None = None
