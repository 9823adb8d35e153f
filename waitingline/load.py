from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from waitingline.secondary import WaitingLineSecondary


def load_lines_from_file(path: str) -> list[type[WaitingLineSecondary]] | str:
    """Import a .py file and return the concrete waiting-line classes it defines.

    A class qualifies when it subclasses
    :class:`~waitingline.secondary.WaitingLineSecondary`, is not abstract,
    and is defined in the file itself (imported classes are ignored).

    Returns the classes in definition order on success, or an error string
    on any failure.
    """
    file = Path(path)
    if not file.is_file():
        return f"Could not read file: {path}"

    module_name = f"_waitingline_user_{file.stem.replace('-', '_')}"
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        return f"Not an importable Python file: {path}"
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module

    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        return f"Code execution failed: {type(e).__name__}: {e}"

    found = [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj)
        and issubclass(obj, WaitingLineSecondary)
        and obj.__module__ == module_name
        and not inspect.isabstract(obj)
    ]
    if not found:
        return "No concrete WaitingLineSecondary subclass found in file"
    return found
