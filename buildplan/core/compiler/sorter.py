"""Priority ordering of compiled scripts."""

from functools import cmp_to_key
from typing import Iterable, List

from .script import WEB_MODULES_SCRIPT_ID, CompiledScript


def compare_scripts(a: CompiledScript, b: CompiledScript) -> int:
    """
    Comparator for the plan order.

    1. ``mount:web_modules`` always sorts first
    2. Scripts of the same type sort by id (code point order)
    3. Otherwise by type weight (proxy < mount < run < build < bundle)
    """
    if a.id == WEB_MODULES_SCRIPT_ID:
        return -1
    if b.id == WEB_MODULES_SCRIPT_ID:
        return 1
    if a.type is b.type:
        return (a.id > b.id) - (a.id < b.id)
    return a.type.weight - b.type.weight


def sort_scripts(scripts: Iterable[CompiledScript]) -> List[CompiledScript]:
    """Return scripts in the order the engine evaluates them."""
    return sorted(scripts, key=cmp_to_key(compare_scripts))
