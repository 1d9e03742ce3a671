"""Directive line parser for item templates.

An item template is split into lines; each line may start with one
directive followed by literal text::

    {{align:right}}$12.50      -> SetAlignment(RIGHT), Text("$12.50")
    {{feedLine:3}}             -> Feed(3)
    2x Soda                    -> Text("2x Soda")

Only the first directive on a line is honoured.  Anything after it,
including a second directive, is literal text.
"""

from __future__ import annotations

import re
from typing import Union

import structlog

from receipt_engine.domain.model.commands import Feed, SetAlignment, Text
from receipt_engine.domain.model.value_objects import Alignment

logger = structlog.get_logger()

Instruction = Union[SetAlignment, Feed, Text]

_ALIGN_DIRECTIVES = (
    ("{{align:left}}", Alignment.LEFT),
    ("{{align:center}}", Alignment.CENTER),
    ("{{align:right}}", Alignment.RIGHT),
)
_FEED_WITH_COUNT = "{{feedLine:"
_FEED = "{{feedLine}}"
_CLOSE = "}}"

# A real newline, or the two characters backslash + n as typed in the editor.
_LINE_BREAK = re.compile(r"\n|\\n")


def split_template_lines(template: str) -> list[str]:
    return _LINE_BREAK.split(template)


def parse_line(line: str) -> list[Instruction]:
    """Turn one (already substituted) template line into instructions."""
    line = line.strip()
    if not line:
        return []

    instructions: list[Instruction] = []
    directive, rest = _leading_directive(line)
    if directive is not None:
        instructions.append(directive)
    if rest:
        instructions.append(Text(rest))
    return instructions


def parse_template(template: str) -> list[Instruction]:
    """Parse every line of *template* in order."""
    instructions: list[Instruction] = []
    for line in split_template_lines(template):
        instructions.extend(parse_line(line))
    return instructions


def _leading_directive(line: str) -> tuple[Instruction | None, str]:
    for token, alignment in _ALIGN_DIRECTIVES:
        if line.startswith(token):
            return SetAlignment(alignment), line[len(token):]

    if line.startswith(_FEED_WITH_COUNT):
        end = line.find(_CLOSE, len(_FEED_WITH_COUNT))
        if end != -1:
            count = _feed_count(line[len(_FEED_WITH_COUNT):end])
            return Feed(count), line[end + len(_CLOSE):]
        # Unterminated: falls through and prints literally.

    if line.startswith(_FEED):
        return Feed(1), line[len(_FEED):]

    return None, line


def _feed_count(raw: str) -> int:
    raw = raw.strip()
    if raw.isascii() and raw.isdigit() and int(raw) >= 1:
        return int(raw)
    logger.debug("malformed_feed_directive", count=raw)
    return 1
