from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults, OutputFormats
from .exceptions import ConfigurationError

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class AugmentConfig:
    state_labels: tuple[str, ...] = Defaults.STATE_LABELS
    default_secondary: str = Defaults.DEFAULT_SECONDARY
    time_column: str = Defaults.TIME_COLUMN
    expanded_separator: str = Defaults.EXPANDED_SEPARATOR
    sequence_separator: str = Defaults.SEQUENCE_SEPARATOR
    validate_missing: bool = False
    output_format: str = Defaults.OUTPUT_FORMAT
    max_workers: int = Defaults.MAX_WORKERS
    verbosity: int = 0

    def __post_init__(self) -> None:
        if len(self.state_labels) != len(Defaults.STATE_LABELS):
            raise ConfigurationError(
                f"state_labels must have exactly 3 elements, got {len(self.state_labels)}: "
                f"{list(self.state_labels)}"
            )
        if len(set(self.state_labels)) != len(self.state_labels):
            raise ConfigurationError(
                f"state_labels must be distinct, got {list(self.state_labels)}"
            )
        if self.output_format not in OutputFormats.ALL:
            raise ConfigurationError(
                f"output_format must be one of {list(OutputFormats.ALL)}, got {self.output_format!r}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be positive, got {self.max_workers}")
        if not self.time_column.strip():
            raise ConfigurationError("time_column must be a non-empty name")
        if not self.expanded_separator or not self.sequence_separator:
            raise ConfigurationError("label separators must be non-empty strings")
        if self.verbosity < 0:
            raise ConfigurationError(f"verbosity must not be negative, got {self.verbosity}")

    @classmethod
    def from_env(cls) -> AugmentConfig:
        raw_labels = os.getenv("MSMPREP_STATE_LABELS")
        state_labels = (
            _split_labels(raw_labels) if raw_labels else Defaults.STATE_LABELS
        )
        return cls(
            state_labels=state_labels,
            default_secondary=os.getenv(
                "MSMPREP_DEFAULT_SECONDARY", Defaults.DEFAULT_SECONDARY
            ),
            time_column=os.getenv("MSMPREP_TIME_COLUMN", Defaults.TIME_COLUMN),
            validate_missing=_coerce_bool(
                os.getenv("MSMPREP_VALIDATE_MISSING", "0"),
                key="MSMPREP_VALIDATE_MISSING",
            ),
            output_format=os.getenv("MSMPREP_OUTPUT_FORMAT", Defaults.OUTPUT_FORMAT),
            max_workers=_coerce_int(
                os.getenv("MSMPREP_MAX_WORKERS", str(Defaults.MAX_WORKERS)),
                key="MSMPREP_MAX_WORKERS",
            ),
            verbosity=_coerce_int(
                os.getenv("MSMPREP_VERBOSITY", "0"), key="MSMPREP_VERBOSITY"
            ),
        )

    def with_overrides(self, **kwargs: object) -> AugmentConfig:
        values: dict[str, object] = {
            name: getattr(self, name) for name in self.__dataclass_fields__
        }
        values.update({k: v for k, v in kwargs.items() if v is not None})
        return AugmentConfig(**values)  # type: ignore[arg-type]


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> AugmentConfig:
        config = AugmentConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: AugmentConfig) -> AugmentConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        section = _get_table(data, "augment")
        state_labels = base_config.state_labels
        if (value := section.get("state_labels")) is not None:
            if isinstance(value, str):
                state_labels = _split_labels(value)
            elif isinstance(value, list):
                state_labels = tuple(str(v) for v in cast("list[object]", value))
            else:
                raise ConfigurationError(
                    "augment.state_labels must be a list or comma-separated string"
                )
        default_secondary = base_config.default_secondary
        if (value := section.get("default_secondary")) is not None:
            default_secondary = str(value)
        time_column = base_config.time_column
        if value := section.get("time_column"):
            time_column = str(value)
        validate_missing = base_config.validate_missing
        if (value := section.get("validate_missing")) is not None:
            validate_missing = _coerce_bool(value, key="augment.validate_missing")
        output_format = base_config.output_format
        if (value := section.get("output_format")) is not None:
            output_format = str(value)
        max_workers = base_config.max_workers
        if (value := section.get("max_workers")) is not None:
            max_workers = _coerce_int(value, key="augment.max_workers")
        verbosity = base_config.verbosity
        if (value := section.get("verbosity")) is not None:
            verbosity = _coerce_int(value, key="augment.verbosity")
        return AugmentConfig(
            state_labels=state_labels,
            default_secondary=default_secondary,
            time_column=time_column,
            expanded_separator=base_config.expanded_separator,
            sequence_separator=base_config.sequence_separator,
            validate_missing=validate_missing,
            output_format=output_format,
            max_workers=max_workers,
            verbosity=verbosity,
        )


def _split_labels(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"{key} must be a boolean, got {value!r}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(f"{key} must be int-like, got {value!r}") from e
    raise ConfigurationError(f"{key} must be int-like or string, got {type(value).__name__}")
