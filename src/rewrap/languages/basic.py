"""Line-comment and plain-text sections, reflowed with :mod:`textwrap`."""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.sections import Section, SectionSet, SectionTier
from ..editor.edits import SectionWrapError
from ..services.settings import WrappingOptions


@dataclass(slots=True)
class _CommentLine:
    indent: str
    marker: str
    content: str


class BasicLanguage:
    """Processor for languages with a single line-comment marker.

    With ``line_comment=None`` the whole document is treated as prose and
    every run of non-blank lines is a section.
    """

    def __init__(self, line_comment: Optional[str] = None) -> None:
        self.line_comment = line_comment
        self._pattern: re.Pattern[str] | None = None
        if line_comment:
            marker = re.escape(line_comment) + re.escape(line_comment[-1]) + "*"
            self._pattern = re.compile(rf"^(?P<indent>[ \t]*)(?P<marker>{marker})(?P<content>.*)$")

    def __repr__(self) -> str:
        return f"BasicLanguage(line_comment={self.line_comment!r})"

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------
    def find_sections(self, lines: Sequence[str], tab_size: int) -> SectionSet:
        del tab_size  # indentation is compared verbatim
        if self._pattern is None:
            return self._find_prose_sections(lines)
        return self._find_comment_sections(lines)

    def _find_prose_sections(self, lines: Sequence[str]) -> SectionSet:
        primary: list[Section] = []
        index = 0
        while index < len(lines):
            if not lines[index].strip():
                index += 1
                continue
            start = index
            while index < len(lines) and lines[index].strip():
                index += 1
            first = lines[start]
            indent = first[: len(first) - len(first.lstrip())]
            primary.append(Section(start, index, tuple(lines[start:index]), indent=indent))
        return SectionSet(primary=primary)

    def _find_comment_sections(self, lines: Sequence[str]) -> SectionSet:
        primary: list[Section] = []
        secondary: list[Section] = []
        index = 0
        while index < len(lines):
            head = self._parse(lines[index], index)
            if head is None:
                index += 1
                continue
            start = index
            parsed = [head]
            index += 1
            while index < len(lines):
                current = self._parse(lines[index], index)
                if current is None or current.indent != head.indent or current.marker != head.marker:
                    break
                parsed.append(current)
                index += 1

            block = Section(
                start,
                index,
                tuple(lines[start:index]),
                indent=head.indent,
                prefix=head.marker + " ",
            )
            primary.append(block)
            secondary.extend(self._paragraphs(block, parsed))
        return SectionSet(primary=primary, secondary=secondary)

    def _parse(self, line: str, index: int) -> _CommentLine | None:
        assert self._pattern is not None
        if index == 0 and self.line_comment == "#" and line.startswith("#!"):
            return None
        match = self._pattern.match(line)
        if match is None:
            return None
        return _CommentLine(match.group("indent"), match.group("marker"), match.group("content"))

    @staticmethod
    def _paragraphs(block: Section, parsed: Sequence[_CommentLine]) -> List[Section]:
        paragraphs: list[Section] = []
        start: int | None = None
        filled = [bool(entry.content.strip()) for entry in parsed] + [False]
        for offset, has_text in enumerate(filled):
            if has_text and start is None:
                start = offset
            elif not has_text and start is not None:
                paragraphs.append(
                    Section(
                        block.start_line + start,
                        block.start_line + offset,
                        block.lines[start:offset],
                        indent=block.indent,
                        prefix=block.prefix,
                        tier=SectionTier.SECONDARY,
                    )
                )
                start = None
        return paragraphs

    # ------------------------------------------------------------------
    # Wrapping
    # ------------------------------------------------------------------
    def wrap_section(self, options: WrappingOptions, section: Section) -> list[str]:
        decoration = section.indent + section.prefix
        marker = section.prefix.rstrip()
        width = options.wrapping_column - len(decoration.expandtabs(options.tab_size))
        wrapper = textwrap.TextWrapper(
            width=max(1, width),
            break_long_words=False,
            break_on_hyphens=False,
            fix_sentence_endings=options.double_sentence_spacing,
        )

        output: list[str] = []
        words: list[str] = []
        for line in section.lines:
            content = self._strip_decoration(section, marker, line)
            if content.strip():
                words.extend(content.split())
                continue
            if words:
                output.extend(decoration + row for row in wrapper.wrap(" ".join(words)))
                words = []
            output.append(section.indent + marker if marker else "")
        if words:
            output.extend(decoration + row for row in wrapper.wrap(" ".join(words)))
        return output

    @staticmethod
    def _strip_decoration(section: Section, marker: str, line: str) -> str:
        if not marker:
            return line
        lead = section.indent + marker
        if not line.startswith(lead):
            raise SectionWrapError(
                f"Line {line!r} does not start with {lead!r}",
                section=section,
                reason="missing_decoration",
            )
        return line[len(lead):]


__all__ = ["BasicLanguage"]
