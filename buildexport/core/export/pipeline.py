"""
Element pipeline — ordered generator functions over a scope.

An element is ``f(scope, doc) -> None``: it reads the scope and appends
a contiguous block to the document.  A pipeline is just a sequence of
elements run in order; the first failure aborts the rest and propagates
to the exporter, which then writes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from buildexport.core.export.document import GeneratedDocument

logger = logging.getLogger(__name__)

Element = Callable[[Any, GeneratedDocument], None]


def run_elements(elements: Sequence[Element], scope: Any, doc: GeneratedDocument) -> None:
    """Run every element, in order, against the same scope and document."""
    for element in elements:
        logger.debug("element %s(%r)", getattr(element, "__name__", element), scope)
        element(scope, doc)


def render_cascade(
    doc: GeneratedDocument,
    branches: Sequence[tuple[str, Any]],
    elements: Sequence[Element],
    variable: str = "config",
) -> None:
    """Emit a mutually exclusive ``ifeq`` chain, one branch per entry.

    Args:
        doc: Document to append to.
        branches: ``(condition value, scope)`` pairs in declaration order.
            The condition value is written verbatim.
        elements: Pipeline run against each branch's scope, one level deeper.
        variable: Make variable the branches compare against.

    Zero branches emit nothing, not even ``endif``.
    """
    for index, (value, scope) in enumerate(branches):
        keyword = "ifeq" if index == 0 else "else ifeq"
        doc.write_line("%s ($(%s), %s)", keyword, variable, value)
        with doc.indented():
            run_elements(elements, scope, doc)

    if branches:
        doc.write_line("endif")
