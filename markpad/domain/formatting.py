"""
Markdown formatting as pure text transforms.

Every function takes the full buffer plus a selection expressed in ``str``
indices and returns a :class:`TextEdit`; widgets only supply offsets and apply
the resulting edit. Nothing here touches Qt.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TextEdit:
    """Replace ``text[start:start + length]`` with ``replacement``.

    ``selection`` is the ``(start, length)`` a widget should select afterwards.
    """

    start: int
    length: int
    replacement: str
    selection: tuple[int, int]

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class WrapMarker:
    prefix: str
    suffix: str


WRAP_MARKERS: dict[str, WrapMarker] = {
    "bold": WrapMarker("**", "**"),
    "italic": WrapMarker("*", "*"),
    "strikethrough": WrapMarker("~~", "~~"),
    "inline_code": WrapMarker("`", "`"),
    "code_block": WrapMarker("```\n", "\n```"),
    "link": WrapMarker("[", "](https://example.com)"),
    "image": WrapMarker("![", "](https://example.com/image.png)"),
}

LINE_PREFIXES: dict[str, str] = {
    "heading1": "# ",
    "heading2": "## ",
    "heading3": "### ",
    "bullet_list": "- ",
    "numbered_list": "1. ",
    "task_list": "- [ ] ",
}


def clamp_selection(text: str, start: int, length: int) -> tuple[int, int]:
    """Clamp ``(start, length)`` so the span lies inside `text`."""
    if length < 0:
        raise ValueError(f"Selection length must not be negative: {length}")
    start = min(max(start, 0), len(text))
    length = min(length, len(text) - start)
    return start, length


def toggle_wrap(text: str, start: int, length: int, prefix: str, suffix: str) -> TextEdit:
    """
    Wrap the selection in ``prefix``/``suffix`` or, when the markers are already
    there, remove them.

    Checked in order:
      1. the selection itself begins with prefix and ends with suffix -> strip them
      2. prefix sits right before and suffix right after the selection -> remove those
      3. otherwise wrap the selection
    An empty selection just inserts ``prefix + suffix`` at the cursor.
    """
    start, length = clamp_selection(text, start, length)

    if length == 0:
        return TextEdit(start, 0, prefix + suffix, (start + len(prefix), 0))

    selected = text[start : start + length]
    p_len, s_len = len(prefix), len(suffix)

    if selected.startswith(prefix) and selected.endswith(suffix) and length > p_len + s_len:
        inner = selected[p_len : length - s_len]
        return TextEdit(start, length, inner, (start, len(inner)))

    end = start + length
    has_prefix_before = start >= p_len and text[start - p_len : start] == prefix
    has_suffix_after = end + s_len <= len(text) and text[end : end + s_len] == suffix
    if has_prefix_before and has_suffix_after:
        # one edit spanning both markers; equivalent to removing the suffix then the prefix
        return TextEdit(start - p_len, length + p_len + s_len, selected, (start - p_len, length))

    return TextEdit(start, length, f"{prefix}{selected}{suffix}", (start + p_len, length))


def line_start(text: str, cursor: int) -> int:
    """Offset of the first character on the line holding `cursor`."""
    cursor = min(max(cursor, 0), len(text))
    if cursor == 0:
        return 0
    return text.rfind("\n", 0, cursor) + 1


def line_prefix(text: str, cursor: int, prefix: str) -> TextEdit:
    """Insert `prefix` at the start of the cursor's line.

    There is no toggle: applying the same prefix twice inserts it twice.
    """
    at = line_start(text, cursor)
    cursor = min(max(cursor, 0), len(text))
    return TextEdit(at, 0, prefix, (cursor + len(prefix), 0))


def apply_edit(text: str, edit: TextEdit) -> str:
    return text[: edit.start] + edit.replacement + text[edit.end :]
