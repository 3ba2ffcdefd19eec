"""Interactive, searchable target picker built on prompt_toolkit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.validation import Validator

from makes.models import NoTargetsError, SelectionAbortedError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from prompt_toolkit.completion import CompleteEvent
    from prompt_toolkit.document import Document

    from makes.models import Target

logger = logging.getLogger(__name__)

LABEL = "Select a make target: "


def _normalize(text: str) -> str:
    return text.lower().replace(" ", "")


def matches(name: str, query: str) -> bool:
    """Check if query is a substring of name, ignoring case and spaces."""
    return _normalize(query) in _normalize(name)


def describe(target: Target) -> str:
    """Return the details line shown next to a target in the menu."""
    if target.is_phony:
        status = "Phony target"
    elif target.updated is None:
        status = "Last updated: never"
    else:
        status = f"Last updated: {target.updated:%Y-%m-%d %H:%M:%S %Z}"
    return f"Help: {target.help} | {status}"


def menu_size(count: int, max_size: int) -> int:
    """Return how many rows the menu should reserve."""
    return min(max_size, count)


class TargetCompleter(Completer):
    """Offer every target whose name matches what has been typed so far."""

    def __init__(self, targets: Sequence[Target]) -> None:
        """Initialize with the targets to search, in display order."""
        self.targets = targets

    def get_completions(
        self,
        document: Document,
        complete_event: CompleteEvent,  # noqa: ARG002
    ) -> Iterator[Completion]:
        """Yield a completion per matching target."""
        query = document.text_before_cursor
        for target in self.targets:
            if matches(target.name, query):
                yield Completion(
                    target.name,
                    start_position=-len(query),
                    display=target.name,
                    display_meta=describe(target),
                )


def select_target(targets: Sequence[Target], max_size: int) -> Target:
    """Let the operator pick a target.

    The completion menu is open from the start so typing filters it right away.

    Raises:
        NoTargetsError: If targets is empty
        SelectionAbortedError: If the operator presses Ctrl-C or Ctrl-D
    """
    if not targets:
        msg = "no make targets found"
        raise NoTargetsError(msg)

    by_name: dict[str, Target] = {}
    for target in targets:
        by_name.setdefault(target.name, target)

    session: PromptSession[str] = PromptSession()
    validator = Validator.from_callable(
        lambda text: text in by_name,
        error_message="Not a make target",
        move_cursor_to_end=True,
    )
    try:
        answer = session.prompt(
            LABEL,
            completer=TargetCompleter(targets),
            complete_while_typing=True,
            validator=validator,
            validate_while_typing=False,
            reserve_space_for_menu=menu_size(len(targets), max_size),
            pre_run=lambda: session.default_buffer.start_completion(select_first=False),
        )
    except KeyboardInterrupt as e:
        msg = "^C"
        raise SelectionAbortedError(msg) from e
    except EOFError as e:
        msg = "^D"
        raise SelectionAbortedError(msg) from e

    logger.debug("Selected %r", answer)
    return by_name[answer]
