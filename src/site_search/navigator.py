"""Keyboard selection state over the current result list.

The navigator is a pure state machine: it holds navigation targets and a
selection index, and the UI reads ``selected_index`` to render highlighting.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging


logger = logging.getLogger(__name__)

NO_SELECTION = -1


class ResultNavigator:
    """Wrapping cursor over an ordered list of navigation targets.

    ``selected_index`` stays in ``[-1, len - 1]``; ``-1`` means nothing is
    selected. Replacing the list always resets the selection.
    """

    def __init__(self, targets: Sequence[str] = ()) -> None:
        self._targets: tuple[str, ...] = tuple(targets)
        self._selected = NO_SELECTION

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def selected(self) -> str | None:
        """Return the selected target, or None when nothing is selected."""
        if self._selected == NO_SELECTION:
            return None
        return self._targets[self._selected]

    @property
    def targets(self) -> tuple[str, ...]:
        return self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def replace(self, targets: Sequence[str]) -> None:
        """Swap in a new result list and clear the selection."""
        self._targets = tuple(targets)
        self.reset()

    def reset(self) -> None:
        self._selected = NO_SELECTION

    def next(self) -> int:
        """Move down one result, wrapping to the first after the last."""
        if not self._targets:
            return self._selected
        self._selected = (self._selected + 1) % len(self._targets)
        return self._selected

    def prev(self) -> int:
        """Move up one result, wrapping to the last before the first."""
        if not self._targets:
            return self._selected
        if self._selected <= 0:
            self._selected = len(self._targets) - 1
        else:
            self._selected -= 1
        return self._selected

    def activate(self) -> str | None:
        """Return the selected result's target, or None when nothing is selected."""
        target = self.selected
        if target is not None:
            logger.debug("Activated result %d -> %s", self._selected, target)
        return target
