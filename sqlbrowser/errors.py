from __future__ import annotations

# sqlbrowser/errors.py
# 数据层错误：都继承 DatabaseError，message 优先取引擎给出的诊断信息


class DatabaseError(Exception):
    fallback = "database error"

    def __init__(self, message: str | None = None):
        self.message = message or self.fallback
        super().__init__(self.message)


class OpenFailed(DatabaseError):
    fallback = "Unable to open database"


class PrepareFailed(DatabaseError):
    fallback = "Unable to prepare statement"


class BindingArityMismatch(PrepareFailed):
    fallback = "Incorrect number of bindings supplied"


class StepFailed(DatabaseError):
    fallback = "Statement execution failed"


class HandleClosed(DatabaseError):
    fallback = "Database handle is closed"


class InvalidIdentifier(DatabaseError, ValueError):
    fallback = "invalid_identifier"


class TableNotFound(DatabaseError, LookupError):
    fallback = "table_not_found"


class RowNotFound(DatabaseError, LookupError):
    fallback = "row_not_found"
