"""Error taxonomy for the props extraction pipeline.

Only ``InvalidInputError`` and an exhausted ``WriteFailure`` reach the CLI;
every other failure is caught by the stage that owns it.
"""


class PropsExtractError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(PropsExtractError):
    """Empty or unusable component identifier."""


class DiscoveryFailure(PropsExtractError):
    """No source file could be located for the component."""


class ExtractionFailure(PropsExtractError):
    """A single extraction tier could not process the source text."""


class DependencyInstallFailure(PropsExtractError):
    """The package manager (or installer CLI) could not install something."""


class WriteFailure(PropsExtractError):
    """The generated document could not be written anywhere."""


class TimeoutFailure(PropsExtractError):
    """A bounded external call exceeded its time limit."""

    def __init__(self, command, timeout: float):
        self.command = command
        self.timeout = timeout
        cmd = " ".join(command) if isinstance(command, (list, tuple)) else str(command)
        super().__init__(f"Command timed out after {timeout:g} seconds: {cmd}")
