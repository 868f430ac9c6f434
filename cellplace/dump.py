"""Text dump of a placement: a header line then one line per instance."""

from __future__ import annotations

import os

from .model import Design


class DumpError(Exception):
    """Raised when a placement dump cannot be written or read."""


def write_dump(design: Design, path: str | os.PathLike[str]) -> None:
    """Write the placement of ``design`` to ``path``."""
    lines = [
        f"{len(design.instances)} {int(design.max_width)} "
        f"{int(design.max_height)} {design.row_count}\n"
    ]
    lines.extend(f"{inst.name} {inst.x:f} {inst.y:f}\n" for inst in design.instances)
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(lines)
    except OSError as exc:
        raise DumpError(f"Cannot write dump file {path}") from exc


def read_dump(design: Design, path: str | os.PathLike[str]) -> int:
    """Load positions and layout frame from ``path`` into ``design``.

    Returns the number of instances loaded.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            tokens = handle.read().split()
    except OSError as exc:
        raise DumpError(f"Cannot read dump file {path}") from exc

    try:
        count, max_width, max_height, row_count = (int(tok) for tok in tokens[:4])
    except ValueError as exc:
        raise DumpError(f"Malformed dump header in {path}") from exc

    body = tokens[4:]
    if count < 0 or len(body) < 3 * count:
        raise DumpError(f"Dump file {path} is truncated")

    design.max_width = max_width
    design.max_height = max_height
    design.row_count = row_count

    loaded = 0
    for name, left, top in zip(body[0::3], body[1::3], body[2::3]):
        if loaded == count:
            break
        inst = design.find_instance(name)
        if inst is None:
            raise DumpError(f"Instance {name} is not found in instance list.")
        try:
            inst.x = float(left)
            inst.y = float(top)
        except ValueError as exc:
            raise DumpError(f"Malformed position for instance {name}") from exc
        loaded += 1
    return loaded