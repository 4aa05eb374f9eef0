from pathlib import Path

import msgspec

from kicker.logutils import logger

CONFIGURATION_FILE = "Kickerfile.toml"


class ConfigurationError(Exception):
    """Raised when a configuration file can't be read or doesn't validate."""


class KickerConfig(msgspec.Struct, forbid_unknown_fields=True, kw_only=True):
    """Contents of Kickerfile.toml. All fields are optional."""

    silent: bool = False
    quiet: bool = False
    clear_console: bool = False
    notifications: bool = True
    shell: bool = False
    watch: list[str] = msgspec.field(default_factory=list)


def has_configuration_file(path: Path | str = CONFIGURATION_FILE) -> bool:
    return Path(path).is_file()


def read_config_file(path: Path | str | None = None) -> KickerConfig:
    """
    Read the configuration from path, or from Kickerfile.toml in the current directory
    if no path is given. A missing Kickerfile.toml gives the default configuration; a
    missing explicitly given file is an error.

    Raises
    ------
    ConfigurationError
        If the file can't be read, isn't valid TOML or has unknown or mistyped fields.
    """
    if path is None:
        if not has_configuration_file():
            logger.debug("No %s, using the defaults", CONFIGURATION_FILE)
            return KickerConfig()
        path = CONFIGURATION_FILE

    logger.info("Reading configuration from %s", path)
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e

    try:
        return msgspec.toml.decode(data, type=KickerConfig)
    except msgspec.DecodeError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e


def dump_schema():
    schema = msgspec.json.encode(msgspec.json.schema(KickerConfig))
    print(msgspec.json.format(schema, indent=2).decode())
