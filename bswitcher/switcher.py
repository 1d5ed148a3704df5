"""Selection pipeline: history, titles, ordering, rendering, menu, focus"""

import logging
from typing import Callable, Dict, Hashable, List, Optional, Sequence

from .errors import Cancelled
from .ordering import SortOrder, dedupe_history, order_entries, pair_titles
from .render import RenderedLine, ShellTemplateEvaluator, TemplateEvaluator, render_lines
from .selector import DmenuSelector, presentation_order, resolve_selection
from .windows import WnckWindows, bspc_focus, bspwm_focus_history, xtitle_titles

logger = logging.getLogger(__name__)


class Switcher:
    """Runs one window selection from start to finish

    Every external capability is passed in, so any of them can be
    replaced (for tests, or for another window manager).
    """

    def __init__(self, config: Dict,
                 history: Callable[[], Sequence[Hashable]],
                 titles: Callable[[List[Hashable]], List[str]],
                 select: Callable[[List[str]], Optional[str]],
                 focus: Callable[[Hashable], None],
                 evaluator: TemplateEvaluator):
        """Initialize the pipeline

        Args:
            config: Configuration dictionary (see args_to_config)
            history: History Source, returns ids most recent last
            titles: Title Resolver, one title per id
            select: Selector Bridge, returns the chosen line or None
            focus: Focus sink
            evaluator: Template evaluator for the format string
        """
        self.config = config
        self.history = history
        self.titles = titles
        self.select = select
        self.focus = focus
        self.evaluator = evaluator
        self.sort_order = SortOrder.from_name(config['sort_order'])

    def render(self) -> List[RenderedLine]:
        """Collect windows and render them, in display order"""
        window_ids = dedupe_history(self.history())
        logger.debug(f"{len(window_ids)} distinct window(s) in focus history")

        entries = pair_titles(window_ids, self.titles(window_ids))
        ordered = order_entries(entries, self.sort_order)
        lines = render_lines(ordered, self.config['format_string'], self.evaluator)
        return presentation_order(lines, self.config.get('reverse', False))

    def run(self) -> Optional[Hashable]:
        """Show the menu and focus the chosen window

        Returns:
            The focused window id, or None if the menu was dismissed
        """
        lines = self.render()
        logger.info(f"Showing {len(lines)} window(s), sorted by {self.sort_order.value}")

        choice = self.select([line.text for line in lines])
        try:
            window_id = resolve_selection(choice, lines)
        except Cancelled:
            logger.debug("Selection cancelled")
            return None

        logger.debug(f"Selected {choice!r} -> window {window_id}")
        self.focus(window_id)
        return window_id

    def list_windows(self) -> List[str]:
        """Rendered lines with their window ids, for --list"""
        return [f"{line.id}\t{line.text}" for line in self.render()]


def build_switcher(config: Dict) -> Switcher:
    """Wire the pipeline to bspwm, xtitle or libwnck, bash and dmenu"""
    if config.get('wnck'):
        wnck = WnckWindows()
        titles = wnck.get_titles
        focus = wnck.activate
    else:
        titles = xtitle_titles
        focus = bspc_focus

    return Switcher(
        config,
        history=bspwm_focus_history,
        titles=titles,
        select=DmenuSelector(config['dmenu_args']).select,
        focus=focus,
        evaluator=ShellTemplateEvaluator(config.get('pipe')),
    )
