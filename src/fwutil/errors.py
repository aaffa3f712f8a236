"""
Exceptions raised by fwutil.

Unknown symbolic names are not errors: translators return None for them.
"""


class FwutilError(Exception):
    """Base exception for fwutil errors."""
    pass


class PortLookupError(FwutilError, LookupError):
    """Service name not found in the services database."""
    pass


class HostResolutionError(FwutilError, LookupError):
    """Hostname did not resolve to an address of the requested family."""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__(f"Failed to resolve hostname {hostname}")


class ExecutionFailure(FwutilError):
    """External command exited non-zero or could not be started."""

    def __init__(
        self,
        command: list[str] | tuple[str, ...],
        detail: str,
        returncode: int | None = None,
        output: str = "",
    ):
        self.command = tuple(command)
        self.detail = detail
        self.returncode = returncode
        self.output = output
        super().__init__(detail)
