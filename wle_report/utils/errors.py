# wle_report/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (config paths, missing files).
    Should NOT print traceback.
    """


class SchemaError(ValueError):
    """
    A table lacks a column the fitted parameters expect, or a predictor
    column cannot be read as numeric. Fatal for the run.
    """

    def __init__(self, message: str, column: str | None = None):
        super().__init__(message)
        self.column = column


class FitError(RuntimeError):
    """
    A trainer received degenerate input or the library failed to fit.
    Fatal for that trainer only.
    """

    def __init__(self, model_name: str, message: str):
        super().__init__(f"[{model_name}] {message}")
        self.model_name = model_name


class AlignmentError(ValueError):
    """
    Predictions and ground truth (or two tables that must share rows)
    differ in row count or row identity. Never truncated silently.
    """
