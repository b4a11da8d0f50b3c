"""
archpass.errors
Validation errors raised by the generator. Each carries a stable ``code``
that the HTTP layer and the CLI report verbatim.
"""


class PasswordGenerationError(ValueError):
    code = "GENERATION_ERROR"


class InvalidPreset(PasswordGenerationError):
    code = "INVALID_PRESET"


class InvalidLength(PasswordGenerationError):
    code = "INVALID_LENGTH"


class InvalidCount(PasswordGenerationError):
    code = "INVALID_COUNT"


class BatchLimitExceeded(PasswordGenerationError):
    code = "BATCH_LIMIT_EXCEEDED"
