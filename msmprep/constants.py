from typing import ClassVar


class Defaults:
    STATE_LABELS: ClassVar[tuple[str, str, str]] = ("IN", "OUT", "DEAD")
    DEFAULT_SECONDARY = "df"
    TIME_COLUMN = "augmented"
    EXPANDED_SEPARATOR = "_"
    SEQUENCE_SEPARATOR = "."
    OUTPUT_FORMAT = "frame"
    MAX_WORKERS = 1
    POLISH_KEEP = "last"
    CONFIG_FILE = "msmprep.toml"


class OutputColumns:
    STATUS = "status"
    STATUS_NUM = "status_num"
    N_STATUS = "n_status"
    STATUS_EXP = "status_exp"
    STATUS_EXP_NUM = "status_exp_num"
    N_STATUS_EXP = "n_status_exp"
    CALENDAR_SUFFIX = "_int"
    ELAPSED_SUFFIX = "_num"
    BASE: ClassVar[tuple[str, ...]] = (STATUS, STATUS_NUM, N_STATUS)
    EXPANDED: ClassVar[tuple[str, ...]] = (STATUS_EXP, STATUS_EXP_NUM, N_STATUS_EXP)


class OutputFormats:
    FRAME = "frame"
    RECORDS = "records"
    ALL: ClassVar[tuple[str, ...]] = (FRAME, RECORDS)


class PolishModes:
    LAST = "last"
    FIRST = "first"
    NONE = "none"
    ALL: ClassVar[tuple[str, ...]] = (LAST, FIRST, NONE)


class TimeTypes:
    AUTO = "auto"
    DATE = "date"
    NUMBER = "number"
    ALL: ClassVar[tuple[str, ...]] = (AUTO, DATE, NUMBER)


class LogLevels:
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


class MissingValues:
    STRING_MARKERS: ClassVar[frozenset[str]] = frozenset(
        {"NA", "NAN", "<NA>", "NONE", "NULL", "NAT"}
    )
