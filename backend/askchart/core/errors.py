from typing import Optional

from ..schemas.sql import ValidationResult


# each error carries the status code the routes answer with
class PipelineError(Exception):
    status_code = 500


class InputError(PipelineError):
    status_code = 400

    def __init__(self, message: str = "Query is required"):
        super().__init__(message)


class SchemaError(PipelineError):
    pass


class GenerationError(PipelineError):
    pass


class ExecutionError(PipelineError):
    pass


class ValidationFailed(PipelineError):
    status_code = 400

    def __init__(self, result: ValidationResult):
        super().__init__(result.error or "SQL syntax error")
        self.result = result

    @property
    def sql(self) -> Optional[str]:
        return self.result.sql
