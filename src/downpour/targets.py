import logging
from collections.abc import Sequence

from .errors import MissingTarget, ResolutionError

logger = logging.getLogger(__name__)


def read_url_file(path: str) -> list[str]:
    """Read one URL per line, keeping order and blank lines."""
    try:
        with open(path, encoding="utf-8") as f:
            urls = [line.rstrip("\r\n") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise ResolutionError(f"cannot read URL file {path}: {e}") from e

    if not urls:
        raise ResolutionError(f"URL file {path} is empty")
    blanks = sum(1 for u in urls if not u)
    if blanks:
        logger.warning(f"{path} contains {blanks} blank line(s); they will be requested as empty URLs")
    logger.debug(f"Loaded {len(urls)} URLs from {path}")
    return urls


def resolve_targets(
    file_path: str | None = None,
    url: str | None = None,
    args: Sequence[str] | None = None,
) -> list[str]:
    if file_path:
        return read_url_file(file_path)
    if url:
        return [url]
    if args:
        return [args[0]]
    raise MissingTarget()
