"""Loading env files from disk."""

import errno
from pathlib import Path

import structlog

from stand.environment.errors import (
    EnvFileNotFoundError,
    EnvFileParseError,
    EnvIoError,
    EnvLoadError,
    EnvNotAFileError,
    EnvParseError,
    EnvPermissionError,
)
from stand.environment.parser import ParseOptions, parse_env_content
from stand.observability.metrics import ResolutionMetrics


logger = structlog.get_logger()


def load_env_file(
    path: Path | str,
    options: ParseOptions | None = None,
) -> dict[str, str]:
    """Read and parse an env file.

    Args:
        path: Path to the env file.
        options: Parse options (default: in-file expansion enabled).

    Returns:
        Ordered mapping of variables defined in the file.

    Raises:
        EnvFileNotFoundError: If the path does not exist.
        EnvNotAFileError: If the path is not a regular file.
        EnvPermissionError: If the file cannot be read.
        EnvIoError: If reading or decoding fails for another reason.
        EnvFileParseError: If the content is not valid env syntax.
    """
    path = Path(path)
    log = logger.bind(component="environment", file_path=str(path))

    try:
        content = _read_text(path)
        variables = parse_env_content(content, options)
    except EnvParseError as e:
        error: EnvLoadError = EnvFileParseError(path, e)
        log.error("env_file_load_failed", **error.to_dict())
        raise error from e
    except EnvLoadError as e:
        log.error("env_file_load_failed", **e.to_dict())
        raise

    ResolutionMetrics.get_instance().record_env_file_loaded()
    log.info("env_file_loaded", variable_count=len(variables))
    return variables


def _read_text(path: Path) -> str:
    if not path.exists():
        raise EnvFileNotFoundError(path)
    if not path.is_file():
        raise EnvNotAFileError(path)

    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise EnvPermissionError(path) from e
    except OSError as e:
        if e.errno == errno.EACCES:
            raise EnvPermissionError(path) from e
        raise EnvIoError(path, e) from e
    except UnicodeDecodeError as e:
        raise EnvIoError(path, e) from e
