from typing import NotRequired, TypedDict
import logging
from scripts.cssblocks.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "cssblocks",
    "is_enabled": True,
    "level": logging.WARNING,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class ComponentLogger(logging.LoggerAdapter):
    """A view of a shared named logger that one component can switch off for itself."""

    def __init__(self, logger: logging.Logger, enabled: bool = True):
        super().__init__(logger, {})
        self.enabled = enabled

    @property
    def disabled(self) -> bool:
        return not self.enabled

    def isEnabledFor(self, level: int) -> bool:
        return self.enabled and self.logger.isEnabledFor(level)


class Logger:
    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.logger = ComponentLogger(logging.getLogger(self.config["name"]), self.config["is_enabled"])
        self.set_configuration()

    def set_configuration(self):
        if not self.config["is_enabled"]:
            return

        shared = self.logger.logger
        # loggers are process-wide: set up a name once and keep levels set by the caller
        if shared.level == logging.NOTSET:
            shared.setLevel(self.config["level"])
        if not shared.handlers:
            self.formatter = logging.Formatter(self.config["format"])
            self.ch = logging.StreamHandler()
            self.ch.setFormatter(self.formatter)
            shared.addHandler(self.ch)
