import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from abacus.core.calculator import DEFAULT_TOLERANCE
from abacus.core.errors import ConfigError

MANIFEST_FILENAME = "abacus.toml"

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class LexerConfig:
    """Tokenizer policy."""

    reject_unknown_characters: bool = False


@dataclass
class SelfTestConfig:
    """Self-test comparison settings."""

    tolerance: float = DEFAULT_TOLERANCE  # 0 is exact, else relative as in math.isclose


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ProjectManifest:
    lexer: LexerConfig = field(default_factory=LexerConfig)
    selftest: SelfTestConfig = field(default_factory=SelfTestConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)


def normalize_log_level(level: str) -> str:
    """Upper-case a level name, rejecting names logging does not know."""
    name = level.strip().upper()
    if name not in _LOG_LEVELS:
        raise ConfigError(f"unknown log level {level!r}")
    return name


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"cannot read {path}: {e}") from e

    lexer_data = data.get("lexer", {})
    selftest_data = data.get("selftest", {})
    logging_data = data.get("logging", {})

    strict = lexer_data.get("reject_unknown_characters", False)
    if not isinstance(strict, bool):
        raise ConfigError("lexer.reject_unknown_characters must be true or false")

    tolerance = selftest_data.get("tolerance", DEFAULT_TOLERANCE)
    if (
        isinstance(tolerance, bool)
        or not isinstance(tolerance, int | float)
        or not tolerance >= 0  # also rejects nan
    ):
        raise ConfigError("selftest.tolerance must be zero or a positive number")

    level = logging_data.get("level", "WARNING")
    if not isinstance(level, str):
        raise ConfigError("logging.level must be a string")

    manifest = ProjectManifest(
        lexer=LexerConfig(reject_unknown_characters=strict),
        selftest=SelfTestConfig(tolerance=float(tolerance)),
        log=LoggingConfig(level=normalize_log_level(level)),
    )
    logger.debug("Loaded manifest from %s", path)
    return manifest


def resolve_manifest(path: Path | None = None) -> ProjectManifest:
    """Load ``path`` (default ./abacus.toml), or defaults if it does not exist."""
    path = path or Path.cwd() / MANIFEST_FILENAME
    if not path.exists():
        return ProjectManifest()
    return load_manifest(path)
