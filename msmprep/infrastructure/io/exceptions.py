from ...exceptions import MsmPrepError


class DataSourceError(MsmPrepError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class DataWriteError(DataSourceError):
    pass
