class MsmPrepError(Exception):
    pass


class ConfigurationError(MsmPrepError, ValueError):
    pass


class SchemaError(MsmPrepError, ValueError):
    pass


class DataQualityError(MsmPrepError):
    pass

    def __init__(self, message: str, *, column: str, count: int = 0) -> None:
        super().__init__(message)
        self.column = column
        self.count = count


class AugmentWarning(UserWarning):
    pass
