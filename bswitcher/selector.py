"""Menu presentation and mapping the choice back to a window"""

import logging
from typing import Dict, Hashable, List, Optional, Sequence

from .errors import Cancelled, CommandError, SelectionNotFound
from .render import RenderedLine
from .shell import sh

logger = logging.getLogger(__name__)


def presentation_order(lines: Sequence[RenderedLine], reverse: bool = False) -> List[RenderedLine]:
    """Lines in the order they are shown in the menu"""
    ordered = list(lines)
    if reverse:
        ordered.reverse()
    return ordered


class DmenuSelector:
    """Selector Bridge backed by dmenu(1) or any dmenu-compatible program"""

    def __init__(self, dmenu_args: str = "", program: str = "dmenu"):
        self.dmenu_args = dmenu_args
        self.program = program

    def select(self, texts: Sequence[str]) -> Optional[str]:
        """Show the menu and wait for a choice

        Args:
            texts: Menu lines, top to bottom

        Returns:
            The chosen line, or None if the menu was dismissed
        """
        command = f"{self.program} {self.dmenu_args}".strip()
        menu = "".join(f"{text}\n" for text in texts)
        try:
            out, _ = sh(command, input_text=menu)
        except CommandError as e:
            # dmenu exits 1 when escaped
            logger.debug(f"Selector exited without a choice: {e}")
            return None

        # No output at all is a dismissal; a bare newline is an empty line chosen
        if not out:
            return None
        if out.endswith("\n"):
            out = out[:-1]
        return out


def build_lookup(lines: Sequence[RenderedLine]) -> Dict[str, Hashable]:
    """Map display text to window id, first line in display order winning"""
    lookup = {}
    for line in lines:
        if line.text in lookup:
            logger.debug(f"Duplicate menu line {line.text!r}; keeping the first")
            continue
        lookup[line.text] = line.id
    return lookup


def resolve_selection(choice: Optional[str], lines: Sequence[RenderedLine]) -> Hashable:
    """Find the window behind the chosen line

    Args:
        choice: Text returned by the selector, None on cancellation
        lines: Rendered lines in display order

    Returns:
        The window id bound to the first matching line

    Raises:
        Cancelled: If there is no choice
        SelectionNotFound: If the text matches no line exactly
    """
    if choice is None:
        raise Cancelled()

    lookup = build_lookup(lines)
    try:
        return lookup[choice]
    except KeyError:
        raise SelectionNotFound(choice) from None
