# src/rendering/text_renderer.py — v1
"""Line-windowed rendering of textual content with best-effort highlighting.

Only the visible lines are highlighted. A missing or failing lexer for the
guessed language falls back to the plain text lexer; the render itself
never fails because of highlighting.
"""

from __future__ import annotations

import html
import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from filepreview.classification.classifier import extension_of
from filepreview.core.errors import HighlightError
from filepreview.rendering.models import NumberedLine, RenderWindow, TextView

logger = logging.getLogger(__name__)

PLAIN_LANGUAGE = "text"

# Extension → pygments lexer alias.
_LANGUAGES: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "html": "html",
    "css": "css",
    "json": "json",
    "md": "markdown",
    "yml": "yaml",
    "yaml": "yaml",
    "csv": "csv",
    "txt": PLAIN_LANGUAGE,
}

_FORMATTER = HtmlFormatter(nowrap=True)


def language_for_filename(filename: str) -> str:
    """Guess a highlighting language from the file extension."""
    return _LANGUAGES.get(extension_of(filename), PLAIN_LANGUAGE)


def highlight_lines(lines: list[str], language: str) -> list[str]:
    """Highlight lines as HTML, one markup string per input line."""
    if not lines:
        return []
    code = "\n".join(lines)
    try:
        markup = _highlight(code, language)
    except HighlightError as exc:
        logger.debug("%s; falling back to plain text", exc)
        markup = highlight(code, TextLexer(stripnl=False), _FORMATTER)

    rendered = markup.split("\n")[: len(lines)]
    # The formatter may drop trailing blank lines.
    for line in lines[len(rendered):]:
        rendered.append(html.escape(line))
    return rendered


def _highlight(code: str, language: str) -> str:
    try:
        lexer = get_lexer_by_name(language, stripnl=False)
    except ClassNotFound as exc:
        raise HighlightError(language) from exc
    try:
        return highlight(code, lexer, _FORMATTER)
    except Exception as exc:
        raise HighlightError(language) from exc


def render_text(
    text: str,
    window: RenderWindow | None = None,
    display_name: str = "",
) -> TextView:
    """Render the visible window of ``text`` with 1-based line numbers.

    Args:
        text: Decoded payload.
        window: Current window; its total is re-synced to the payload.
        display_name: Used to guess the highlighting language.
    """
    # Pygments treats a lone CR as a line break; line numbers must agree.
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if window is None:
        window = RenderWindow.initial(len(lines))
    else:
        window = window.with_total(len(lines))

    language = language_for_filename(display_name)
    visible = lines[: window.shown]
    markup = highlight_lines(visible, language)

    numbered = [
        NumberedLine(number=i + 1, text=line, markup=markup[i])
        for i, line in enumerate(visible)
    ]
    return TextView(language=language, lines=numbered, window=window)
