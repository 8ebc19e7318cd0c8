"""Exceptions raised by the install pipeline.

Every rejection carries an HTTP-style ``status_code`` so the tool and HTTP
layers can classify it without inspecting the message.
"""


class InstallError(Exception):
    """Base class for install pipeline errors."""

    status_code: int = 500


class InvalidRequest(InstallError):
    """Request is malformed (missing server, unknown mode, empty package name)."""

    status_code = 400


class CatalogEntryNotFoundError(InvalidRequest):
    """Catalog key does not match any catalog entry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Selected software not found: {key!r}")


class ServerNotFoundError(InstallError):
    """Server address is not in the registry."""

    status_code = 404

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Server not found: {address}")


class RemoteExecutionError(InstallError):
    """Remote command could not be run or exited unsuccessfully."""

    def __init__(self, address: str, detail: str, output: str = ""):
        self.address = address
        self.detail = detail
        self.output = output
        super().__init__(f"Remote execution on {address} failed: {detail}")
