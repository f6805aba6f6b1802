"""Filesystem tools: directory summary, save, read and regex search."""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.core.errors import ToolError

logger = logging.getLogger(__name__)

DISPLAY_LIMIT = 20
EXAMPLE_COUNT = 3
DEFAULT_MAX_READ_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_RESULTS = 50


def _resolve(path: str, root: Path | None) -> Path:
    return ((root or Path.cwd()) / path).resolve()


def _plural(n: int, one: str, many: str) -> str:
    return f"{n} {one if n == 1 else many}"


async def summarize_directory(path: str, *, root: Path | None = None) -> str:
    """Plain-text summary of a directory: counts, examples and first entries."""
    if not path:
        msg = "Error: Invalid input. Expected { path: string } where path is non-empty."
        raise ToolError(msg)

    resolved = _resolve(path, root)
    if not resolved.is_dir():
        msg = (
            f'The directory "{path}" doesn\'t seem to exist. '
            "Please check the path and try again."
        )
        raise ToolError(msg)

    try:
        entries = sorted(resolved.iterdir(), key=lambda p: p.name)
    except OSError as e:
        msg = f'Oops! Something went wrong reading "{path}": {e}'
        raise ToolError(msg) from e

    files = [e.name for e in entries if e.is_file()]
    dirs = [e.name for e in entries if e.is_dir()]

    lines = [
        f"Directory: {path}",
        "",
        f"Found {_plural(len(files), 'file', 'files')} and "
        f"{_plural(len(dirs), 'directory', 'directories')} ({len(entries)} total)",
        "",
    ]
    if files:
        lines.append(f"Example files: {', '.join(files[:EXAMPLE_COUNT])}")
    if dirs:
        lines.append(f"Example directories: {', '.join(dirs[:EXAMPLE_COUNT])}")

    if len(entries) > DISPLAY_LIMIT:
        lines += ["", f"Showing first {DISPLAY_LIMIT} of {len(entries)} items:"]
    elif entries:
        lines += ["", "All items:"]

    for entry in entries[:DISPLAY_LIMIT]:
        marker = "[dir] " if entry.is_dir() else "[file]"
        lines.append(f"  {marker} {entry.name}")

    return "\n".join(lines)


async def save_to_file(
    content: str,
    filename: str,
    *,
    files_dir: Path,
    category: str | None = None,
    overwrite: bool = False,
) -> dict[str, Any]:
    """Write ``content`` under ``files_dir[/category]/filename``."""
    base = files_dir.resolve()
    target = (base / category / filename) if category else (base / filename)
    resolved = target.resolve()

    if not resolved.is_relative_to(base):
        msg = "Error: Invalid path. Directory traversal not allowed."
        raise ToolError(msg)

    if resolved.exists() and not overwrite:
        msg = f'File already exists at "{resolved}". Set overwrite=true to replace it.'
        raise ToolError(msg)

    try:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(content, encoding="utf-8")
    except OSError as e:
        msg = f"Error saving file: {e}"
        raise ToolError(msg) from e

    logger.info("Saved %d characters to %s", len(content), resolved)
    return {"success": True, "path": str(resolved), "message": "File saved successfully"}


async def read_file(
    path: str,
    *,
    encoding: str = "utf-8",
    max_size: int = DEFAULT_MAX_READ_BYTES,
    root: Path | None = None,
) -> dict[str, Any]:
    """Read a text file, refusing directories and files above ``max_size``."""
    resolved = _resolve(path, root)
    if not resolved.exists():
        msg = f"Error reading file: no such file: '{path}'"
        raise ToolError(msg)
    if not resolved.is_file():
        msg = f'Error: "{path}" is not a file.'
        raise ToolError(msg)

    stat = resolved.stat()
    if stat.st_size > max_size:
        msg = (
            f"Error: File too large ({stat.st_size} bytes). "
            f"Maximum size is {max_size} bytes."
        )
        raise ToolError(msg)

    try:
        content = resolved.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        msg = f"Error reading file: {e}"
        raise ToolError(msg) from e

    modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
    return {
        "content": content,
        "metadata": {
            "path": str(resolved),
            "size": stat.st_size,
            "modified": modified.isoformat(),
            "encoding": encoding,
        },
    }


async def search_files(
    query: str,
    path: str,
    *,
    file_types: list[str] | None = None,
    case_sensitive: bool = False,
    max_results: int = DEFAULT_MAX_RESULTS,
    recursive: bool = True,
    root: Path | None = None,
) -> dict[str, Any]:
    """Regex search line by line; unreadable or binary files are skipped."""
    base = (root or Path.cwd()).resolve()
    resolved = _resolve(path, root)
    if not resolved.is_dir():
        msg = f"Error searching files: not a directory: '{path}'"
        raise ToolError(msg)

    try:
        pattern = re.compile(query, 0 if case_sensitive else re.IGNORECASE)
    except re.error as e:
        msg = f"Error searching files: invalid pattern: {e}"
        raise ToolError(msg) from e

    extensions = {t.lstrip(".") for t in file_types or []}
    candidates = resolved.rglob("*") if recursive else resolved.glob("*")

    matches: list[dict[str, Any]] = []
    files_searched = 0
    for file in sorted(candidates):
        if len(matches) >= max_results:
            break
        if not file.is_file():
            continue
        if extensions and file.suffix.lstrip(".") not in extensions:
            continue

        files_searched += 1
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Skipping unreadable file %s", file)
            continue

        for lineno, line in enumerate(text.split("\n"), start=1):
            if len(matches) >= max_results:
                break
            if pattern.search(line):
                try:
                    shown = file.relative_to(base)
                except ValueError:
                    shown = file
                matches.append({"file": str(shown), "line": lineno, "content": line.strip()})

    return {
        "matches": matches,
        "totalMatches": len(matches),
        "filesSearched": files_searched,
    }
