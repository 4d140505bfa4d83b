from .errors import MessageLevel, MigrateError, MigrateFailure, RowResult, RowStatus

__all__ = ["MessageLevel", "MigrateError", "MigrateFailure", "RowResult", "RowStatus"]
