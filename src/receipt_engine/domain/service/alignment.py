"""Ambient alignment: the one piece of state threaded through a design.

Two formulations of the same rule live here:

- ``AlignmentState`` is the forward-running variable the interpreter
  updates as it walks the element list once.
- ``alignment_after()`` / ``effective_alignment()`` answer the same
  question for a single position by scanning backwards, the way the
  editor's preview does.
- ``track_alignment()`` runs the forward form over a whole list so the
  two can be checked against each other.

Only ``align`` elements move the ambient alignment.  Dividers print
centered but leave the ambient value alone.
"""

from __future__ import annotations

from collections.abc import Sequence

from receipt_engine.domain.model.elements import AlignElement, DividerElement, Element
from receipt_engine.domain.model.value_objects import Alignment

DEFAULT_ALIGNMENT = Alignment.LEFT


class AlignmentState:

    def __init__(self, initial: Alignment = DEFAULT_ALIGNMENT) -> None:
        self._current = initial

    def set_alignment(self, alignment: Alignment) -> None:
        self._current = alignment

    def current_alignment(self) -> Alignment:
        return self._current

    def apply(self, element: Element) -> None:
        """Advance past *element*."""
        if isinstance(element, AlignElement):
            self._current = element.alignment


def track_alignment(elements: Sequence[Element]) -> list[Alignment]:
    """Ambient alignment after each element, computed in one forward pass."""
    state = AlignmentState()
    result: list[Alignment] = []
    for element in elements:
        state.apply(element)
        result.append(state.current_alignment())
    return result


def alignment_after(elements: Sequence[Element], index: int) -> Alignment:
    """Ambient alignment after element *index*, by backward scan."""
    for i in range(index, -1, -1):
        element = elements[i]
        if isinstance(element, AlignElement):
            return element.alignment
    return DEFAULT_ALIGNMENT


def effective_alignment(elements: Sequence[Element], index: int) -> Alignment:
    """Alignment element *index* prints with."""
    if isinstance(elements[index], DividerElement):
        return Alignment.CENTER
    return alignment_after(elements, index - 1) if index > 0 else DEFAULT_ALIGNMENT
