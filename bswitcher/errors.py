"""Error taxonomy for the selection pipeline"""

from typing import Iterable, Optional


class SwitcherError(Exception):
    """Base class for every failure that ends a run"""

    stage = "bswitcher"


class CommandError(SwitcherError):
    """An external command exited non-zero or produced unusable output"""

    stage = "command"

    def __init__(self, command: str, returncode: Optional[int] = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        # Scripts are reported by their last line to keep diagnostics on one line
        lines = command.strip().splitlines()
        message = f"`{lines[-1] if lines else command}` failed"
        if returncode is not None:
            message += f" with exit status {returncode}"
        if self.stderr:
            message += f": {self.stderr.splitlines()[0]}"
        super().__init__(message)


class MissingDependency(SwitcherError):
    stage = "dependencies"

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"required program(s) not found on PATH: {', '.join(self.missing)}")


class ResolutionMismatch(SwitcherError):
    """The title resolver returned a different number of titles than ids"""

    stage = "title resolution"

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"asked for {expected} title(s) but received {received}")


class RenderFailure(SwitcherError):
    """Template expansion or the post-filter failed for one entry"""

    stage = "rendering"

    def __init__(self, position: int, title: str, reason: str):
        self.position = position
        self.title = title
        self.reason = reason
        super().__init__(f"entry {position} ({title!r}): {reason}")


class SelectionNotFound(SwitcherError):
    stage = "resolution"

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"selector returned a line that was never offered: {text!r}")


class DispatchFailure(SwitcherError):
    stage = "focus"

    def __init__(self, window_id, reason: str):
        self.window_id = window_id
        self.reason = reason
        super().__init__(f"could not focus window {window_id}: {reason}")


class Cancelled(Exception):
    """The selector was dismissed without a choice (not an error)"""
