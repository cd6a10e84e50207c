"""
Custom exceptions for the TableIlp solver
"""


class TableIlpError(Exception):
    """Base exception for all TableIlp errors"""
    pass


class ConfigurationError(TableIlpError):
    """Invalid configuration: unknown alignment type, unknown table, malformed row"""
    pass


class MissingDependencyError(TableIlpError):
    """A collaborator required by the selected configuration was not supplied"""
    def __init__(self, dependency: str, required_by: str):
        self.dependency = dependency
        self.required_by = required_by
        super().__init__(f"No {dependency} available (required by {required_by})")


class EntailmentServiceError(TableIlpError):
    """Error from the remote entailment service"""
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message + (f" (status: {status_code})" if status_code else ""))
