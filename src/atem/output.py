"""Output path resolution.

Two default naming strategies exist side by side:

- ``suffix``: ``<stem>_out.<ext>`` in the current working directory
  (command-line convention).
- ``videos``: ``<stem>-8m.mp4`` in the user's videos directory, falling back
  to the input's directory and then the working directory (desktop
  convention).

An explicit output path always wins over either strategy.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from atem.config.env import EnvReader
from atem.errors import NoFileStemError
from atem.host import normalize_os_family

logger = logging.getLogger(__name__)

SUFFIX_MARKER = "_out"
VIDEOS_MARKER = "-8m"
DEFAULT_CONTAINER_EXTENSION = "mp4"

# Sentinel: detect the videos directory from the environment
_DETECT = object()


class OutputStrategy(str, Enum):
    """Default output naming strategy when no output path is given."""

    SUFFIX = "suffix"
    VIDEOS = "videos"


def file_stem(input_path: Path) -> str:
    """Return the base name of ``input_path`` without its extension.

    Raises:
        NoFileStemError: If the path has no file name component.
    """
    if input_path.name in ("", ".", ".."):
        raise NoFileStemError(input_path)
    return input_path.stem


def _read_user_dirs_file(config_home: Path, home: Path) -> Path | None:
    """Read XDG_VIDEOS_DIR from ``user-dirs.dirs``, if present."""
    user_dirs = config_home / "user-dirs.dirs"
    try:
        lines = user_dirs.read_text(encoding="utf-8").splitlines()
    except OSError:
        return None

    for line in lines:
        line = line.strip()
        if not line.startswith("XDG_VIDEOS_DIR="):
            continue
        value = line.split("=", 1)[1].strip().strip('"')
        value = value.replace("$HOME", str(home))
        return Path(value)
    return None


def get_user_videos_dir(
    env: EnvReader | None = None,
    home: Path | None = None,
    system: str | None = None,
) -> Path | None:
    """Locate the current user's videos directory.

    Lookup order: ``XDG_VIDEOS_DIR``, ``$XDG_CONFIG_HOME/user-dirs.dirs``
    (Linux), then the conventional ``~/Videos`` (``~/Movies`` on macOS).
    A directory that does not exist, or that is the home directory itself
    (how XDG marks a disabled entry), counts as unavailable.

    Returns:
        The videos directory, or None if there is none.
    """
    reader = env or EnvReader()
    home = home or Path.home()
    family = normalize_os_family(system)

    candidates: list[Path] = []
    env_value = reader.get_str("XDG_VIDEOS_DIR")
    if env_value:
        candidates.append(Path(env_value.replace("$HOME", str(home))).expanduser())

    if family not in ("windows", "macos"):
        config_home = reader.get_path("XDG_CONFIG_HOME") or home / ".config"
        from_file = _read_user_dirs_file(config_home, home)
        if from_file is not None:
            candidates.append(from_file)

    candidates.append(home / ("Movies" if family == "macos" else "Videos"))

    for candidate in candidates:
        if candidate == home:
            continue
        if candidate.is_dir():
            return candidate

    logger.debug("No user videos directory found")
    return None


def resolve_output_path(
    input_path: Path | str,
    output: Path | str | None = None,
    *,
    strategy: OutputStrategy | str = OutputStrategy.SUFFIX,
    cwd: Path | None = None,
    videos_dir: Path | None | object = _DETECT,
    extension: str = DEFAULT_CONTAINER_EXTENSION,
) -> Path:
    """Decide where the encoded file is written.

    Args:
        input_path: The file being converted.
        output: Explicit output path. Rooted paths are used verbatim,
            relative ones are resolved against ``cwd``.
        strategy: Default naming when ``output`` is None.
        cwd: Working directory (None = Path.cwd()).
        videos_dir: Videos directory for the ``videos`` strategy. Omit to
            detect it; pass None to simulate its absence.
        extension: Container extension for the ``videos`` strategy.

    Returns:
        The resolved output path.

    Raises:
        NoFileStemError: If ``input_path`` has no base file name.
    """
    input_path = Path(input_path)
    stem = file_stem(input_path)
    base = cwd if cwd is not None else Path.cwd()

    if output is not None:
        output_path = Path(output)
        if output_path.anchor:
            return output_path
        return base / output_path

    if OutputStrategy(strategy) is OutputStrategy.SUFFIX:
        return base / f"{stem}{SUFFIX_MARKER}{input_path.suffix}"

    directory = get_user_videos_dir() if videos_dir is _DETECT else videos_dir
    if directory is None:
        # Path("clip.mp4").parent is Path("."), so bare names land in cwd
        directory = base / input_path.parent
    return Path(directory) / f"{stem}{VIDEOS_MARKER}.{extension}"
