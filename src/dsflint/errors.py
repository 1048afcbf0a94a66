"""Exception hierarchy for dsflint.

Data problems never raise; they become diagnostics. Only setup failures
escape the engine, and single-file collaborator failures are raised as
DocumentParseError so call sites can downgrade them.
"""


class LinterError(Exception):
    """Base class for all dsflint errors."""


class SetupError(LinterError):
    """A failure that prevents any meaningful validation of the run."""


class ResourceRootNotFoundError(SetupError):
    """The resource root handed to the engine does not exist."""

    def __init__(self, resource_root):
        self.resource_root = resource_root
        super().__init__(f"Resource root does not exist: {resource_root}")


class NoUnitsDiscoveredError(SetupError):
    """Discovery produced no plugin units to validate."""

    def __init__(self, location=None):
        self.location = location
        where = f" under {location}" if location else ""
        super().__init__(f"No plugin units discovered{where}")


class CodeCacheSeedError(SetupError):
    """The authorization code cache could not reach its knowledge sources."""


class DocumentParseError(LinterError):
    """A single BPMN or FHIR document could not be parsed."""

    def __init__(self, file, reason: str):
        self.file = file
        self.reason = reason
        super().__init__(f"Failed to parse {file}: {reason}")
