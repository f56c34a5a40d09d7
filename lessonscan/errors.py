"""Exception types raised by lessonscan."""


class LessonScanError(Exception):
    """Base class for lessonscan errors."""


class ConfigError(LessonScanError, ValueError):
    """Configuration file is malformed or names unknown settings."""
