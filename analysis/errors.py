"""
Error taxonomy for label analysis.

UpstreamFailure     - the vision / chat model call did not complete
ExtractionFailure   - no JSON object could be recovered from the model text
SchemaViolation     - a recovered object does not match the record contract

All three stop the pipeline; nothing here is retried.
"""

CONFIGURATION = "configuration"
GENERIC = "generic"


class LabelAnalysisError(Exception):
    """Base class for all pipeline failures."""


class UpstreamFailure(LabelAnalysisError):
    def __init__(self, message: str, kind: str = GENERIC):
        super().__init__(message)
        self.kind = kind

    @property
    def is_configuration(self) -> bool:
        return self.kind == CONFIGURATION


class ExtractionFailure(LabelAnalysisError):
    pass


class SchemaViolation(LabelAnalysisError):
    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.reason = message
