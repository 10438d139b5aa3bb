"""Built-in handlers for the supported man macros.

Every handler receives the page being converted, the macro name as written,
and the argument text that follows it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import TopicHeadingError
from .rules import MacroKind, macro
from .state import Block, Font, HeadingLevel
from .tokens import iter_values, parse_value
from .units import DEFAULT_INDENT, DEFAULT_INSET, parse_measurement
from .xref import resolve_reference


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .converter import PageConverter
    from .document import HtmlDocument


ALTERNATING_FONTS: dict[str, tuple[Font, Font]] = {
    ".BI": (Font.BOLD, Font.ITALIC),
    ".BR": (Font.BOLD, Font.REGULAR),
    ".IB": (Font.ITALIC, Font.BOLD),
    ".IR": (Font.ITALIC, Font.REGULAR),
    ".RB": (Font.REGULAR, Font.BOLD),
    ".RI": (Font.REGULAR, Font.ITALIC),
}

SINGLE_FONTS: dict[str, Font] = {
    ".B": Font.BOLD,
    ".I": Font.ITALIC,
    ".SB": Font.SMALL_BOLD,
    ".SM": Font.SMALL,
}

# ``.IP`` tags that keep the list bullet.
BULLET_TAGS = frozenset({"\\(bu", "-", "*"})

HANGING_STYLE = '    <p style="margin-left: %s; text-indent: -%s;">'


def _is_section_number(value: str) -> bool:
    return bool(value) and "0" <= value[0] <= "9"


def alternate_fonts(
    document: HtmlDocument,
    first: Font,
    second: Font,
    text: str,
    *,
    link_references: bool = False,
) -> None:
    """Render each argument of ``text`` alternating between two fonts.

    With ``link_references``, a first-font argument followed by a ``(N)``
    section argument becomes a link when the referenced page exists next to
    the current source file. Inside a ``.UR``/``.MT`` link no cross-reference
    is made, since anchors cannot nest.
    """
    state = document.state
    previous = state.font
    use_first = True

    word, remainder = parse_value(text)
    while word is not None:
        href = None
        if link_references and use_first and not state.open_link:
            section, _ = parse_value(remainder)
            if section is not None:
                href = resolve_reference(state.base_path, word, section)

        if href is not None:
            document.set_font(Font.REGULAR)
            document.writer.format('<a href="%s">', href)
            state.open_link = True

        document.set_font(first if use_first else second)
        document.inline.render(word)

        if href is not None:
            section, remainder = parse_value(remainder)
            document.set_font(second)
            document.inline.render(section or "")
            document.set_font(Font.REGULAR)
            document.writer.write("</a>")
            state.open_link = False
        else:
            use_first = not use_first

        word, remainder = parse_value(remainder)

    document.set_font(previous)
    document.writer.line()


@macro(".TH", kind=MacroKind.TOPIC, requires_topic=False)
def topic_heading(page: PageConverter, name: str, args: str) -> None:
    """``.TH title section [extra...]`` starts a page."""
    title, remainder = parse_value(args)
    if not title:
        raise TopicHeadingError("title", page.location())
    section, _ = parse_value(remainder)
    if section is None or not _is_section_number(section):
        raise TopicHeadingError("section", page.location())

    topic = f"{title}({section})"
    document = page.document
    if not document.state.header_written:
        document.write_header(topic)
    document.heading(HeadingLevel.TOPIC, topic)
    page.topic_seen = True


@macro(".SH", ".SS", kind=MacroKind.HEADING)
def section_heading(page: PageConverter, name: str, args: str) -> None:
    """``.SH``/``.SS`` headings; without arguments the next line is the title."""
    text = " ".join(iter_values(page.argument_line(args)))
    level = HeadingLevel.SECTION if name == ".SH" else HeadingLevel.SUBSECTION
    page.document.heading(level, text)


@macro(*SINGLE_FONTS, kind=MacroKind.FONT)
def single_font(page: PageConverter, name: str, args: str) -> None:
    """Render one line in a font, then restore the previous font."""
    document = page.document
    text = " ".join(iter_values(page.argument_line(args)))
    previous = document.state.font

    document.set_font(SINGLE_FONTS[name])
    document.inline.render(text)
    document.set_font(previous)
    page.emit_break()


@macro(*ALTERNATING_FONTS, kind=MacroKind.ALTERNATING_FONT)
def alternating_font(page: PageConverter, name: str, args: str) -> None:
    first, second = ALTERNATING_FONTS[name]
    alternate_fonts(
        page.document,
        first,
        second,
        page.argument_line(args),
        link_references=name == ".BR",
    )
    page.emit_break()


@macro(".LP", ".P", ".PP", kind=MacroKind.PARAGRAPH)
def paragraph(page: PageConverter, name: str, args: str) -> None:
    page.document.start_block(Block.PARAGRAPH, "    <p>")


@macro(".HP", ".TP", kind=MacroKind.INDENTED_PARAGRAPH)
def hanging_paragraph(page: PageConverter, name: str, args: str) -> None:
    """``.HP``/``.TP [indent]``; a tagged paragraph breaks after its tag line."""
    indent, _ = parse_measurement(args, "n")
    indent = indent or DEFAULT_INDENT
    page.document.start_block(Block.PARAGRAPH, HANGING_STYLE, indent, indent)
    if name == ".TP":
        page.break_text = "<br>"


@macro(".IP", kind=MacroKind.INDENTED_PARAGRAPH)
def indented_paragraph(page: PageConverter, name: str, args: str) -> None:
    """``.IP [tag [indent]]`` as a list item, reusing an open list."""
    document = page.document
    tag, remainder = parse_value(args)
    indent = None
    if tag is not None:
        indent, _ = parse_measurement(remainder, "n")
    indent = indent or DEFAULT_INDENT

    if document.state.open_block is Block.LIST:
        document.close_link()
        document.close_font()
    else:
        document.close_block()
        document.writer.line("    <ul>")

    bullet = tag in BULLET_TAGS
    style = "" if bullet else "list-style-type: none; "
    document.writer.format('    <li style="%smargin-left: %s;">', style, indent)
    document.state.open_block = Block.LIST
    page.break_text = ""

    if tag and not bullet:
        document.inline.render(tag)
        document.writer.line("<br>")


@macro(".EX", ".nf", kind=MacroKind.PREFORMATTED)
def example_start(page: PageConverter, name: str, args: str) -> None:
    page.document.start_block(Block.PREFORMATTED, "    <pre>")


@macro(".EE", ".fi", kind=MacroKind.PREFORMATTED)
def example_end(page: PageConverter, name: str, args: str) -> None:
    document = page.document
    if document.state.open_block is not Block.PREFORMATTED:
        page.warn(f"'{name}' with no '.EX' or '.nf'")
        return
    document.close_block()


@macro(".RS", kind=MacroKind.INDENT)
def relative_inset_start(page: PageConverter, name: str, args: str) -> None:
    indent, _ = parse_measurement(args, "n")
    page.document.push_indent(indent or DEFAULT_INSET)


@macro(".RE", kind=MacroKind.INDENT)
def relative_inset_end(page: PageConverter, name: str, args: str) -> None:
    if not page.document.pop_indent():
        page.warn("Unbalanced '.RE'")


@macro(".in", kind=MacroKind.INDENT)
def indent(page: PageConverter, name: str, args: str) -> None:
    """``.in INDENT`` pushes an indentation wrapper, bare ``.in`` pops one."""
    length, _ = parse_measurement(args, "m")
    if length is not None:
        page.document.push_indent(length)
    elif not page.document.pop_indent():
        page.warn("'.in' seen without prior '.in INDENT'")


@macro(".SY", kind=MacroKind.SYNOPSIS)
def synopsis_start(page: PageConverter, name: str, args: str) -> None:
    document = page.document
    document.start_block(Block.PARAGRAPH, '    <p style="font-family: monospace;">')
    command, _ = parse_value(args)
    if command:
        document.set_font(Font.BOLD)
        document.inline.render(command)
        document.set_font(Font.REGULAR)
        document.writer.write(" ")


@macro(".YS", kind=MacroKind.SYNOPSIS)
def synopsis_end(page: PageConverter, name: str, args: str) -> None:
    document = page.document
    if document.state.open_block is not Block.PARAGRAPH:
        page.warn("'.YS' seen without prior '.SY'")
        return
    document.close_block()


@macro(".MT", ".UR", kind=MacroKind.LINK)
def link_start(page: PageConverter, name: str, args: str) -> None:
    """``.MT address`` and ``.UR url`` open a hyperlink."""
    target, _ = parse_value(args)
    if not target:
        return
    page.document.open_link(f"mailto:{target}" if name == ".MT" else target)


@macro(".ME", ".UE", kind=MacroKind.LINK)
def link_end(page: PageConverter, name: str, args: str) -> None:
    """Close the open hyperlink; trailing arguments follow the link."""
    document = page.document
    document.close_link(keep_font=True)
    trailer = " ".join(iter_values(args))
    if trailer:
        document.ensure_paragraph()
        document.inline.render(trailer)
        page.emit_break()


@macro(".br", kind=MacroKind.SPACING)
def line_break(page: PageConverter, name: str, args: str) -> None:
    page.document.writer.line("<br>")


@macro(".sp", kind=MacroKind.SPACING)
def vertical_space(page: PageConverter, name: str, args: str) -> None:
    page.document.writer.line("<br>&nbsp;<br>")


__all__ = [
    "ALTERNATING_FONTS",
    "BULLET_TAGS",
    "SINGLE_FONTS",
    "alternate_fonts",
]
