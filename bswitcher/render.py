"""Line rendering through user format strings"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence

from .constants import COUNT_VAR, LINE_NUMBER_VAR, QUOTE_SUBSTITUTE, TITLE_VAR
from .errors import CommandError, RenderFailure
from .ordering import OrderedEntry
from .shell import sh

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedLine:
    """A menu line and the window it stands for"""
    text: str
    id: Hashable


class TemplateEvaluator:
    """Expands a format string against named values"""

    def evaluate(self, template: str, bindings: Dict[str, str]) -> str:
        """Return the expanded text

        Raises:
            CommandError: If expansion fails
        """
        raise NotImplementedError


class ShellTemplateEvaluator(TemplateEvaluator):
    """Expands format strings with bash, optionally piping through a filter

    The format string is placed inside double quotes, so parameter,
    arithmetic and command substitution all apply.
    """

    def __init__(self, pipe: Optional[str] = None):
        self.pipe = pipe

    def build_script(self, template: str, bindings: Dict[str, str]) -> str:
        lines = ["set -o pipefail"]
        lines.extend(f"{name}='{value}'" for name, value in bindings.items())
        command = f'printf "%s\\n" "{template}"'
        if self.pipe:
            command += f" | {self.pipe}"
        lines.append(command)
        return "\n".join(lines)

    def evaluate(self, template: str, bindings: Dict[str, str]) -> str:
        out, _ = sh(self.build_script(template, bindings))
        return out


def escape_title(title: str) -> str:
    """Replace characters that would close the shell quoting around a title"""
    return title.replace("'", QUOTE_SUBSTITUTE)


def first_line(text: str, position: int = 0) -> str:
    """Reduce evaluator output to a single menu line"""
    if text.endswith("\n"):
        text = text[:-1]
    line, _, rest = text.partition("\n")
    if rest:
        logger.debug(f"Entry {position}: discarded {rest.count(chr(10)) + 1} extra output line(s)")
    return line


def render_lines(entries: Sequence[OrderedEntry], template: str,
                 evaluator: TemplateEvaluator) -> List[RenderedLine]:
    """Render every entry, in position order

    Args:
        entries: Ordered entries
        template: Format string
        evaluator: Template backend

    Returns:
        One rendered line per entry, in the same order

    Raises:
        RenderFailure: On the first entry that fails to render
    """
    count = len(entries)
    rendered = []
    for entry in entries:
        bindings = {
            LINE_NUMBER_VAR: str(entry.position),
            TITLE_VAR: escape_title(entry.title),
            COUNT_VAR: str(count),
        }
        try:
            output = evaluator.evaluate(template, bindings)
        except CommandError as e:
            raise RenderFailure(entry.position, entry.title, str(e)) from e

        rendered.append(RenderedLine(first_line(output, entry.position), entry.id))

    logger.debug(f"Rendered {len(rendered)} line(s)")
    return rendered
