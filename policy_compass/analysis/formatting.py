"""Minimal markdown-to-HTML rendering for free-text engine output."""

import html
import re

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])")
_BULLET_RE = re.compile(r"^\s*[*-]\s+(.*)$")
_HR_RE = re.compile(r"^\s*-{3,}\s*$")


def render_markdown_html(text: str) -> str:
    """Render bold, italics, h2/h3 headers, rules, bullet lists and paragraphs."""
    if not text or not text.strip():
        return ""
    blocks: list[str] = []
    paragraph: list[str] = []
    bullets: list[str] = []

    def flush() -> None:
        if paragraph:
            blocks.append(f"<p>{' '.join(paragraph)}</p>")
            paragraph.clear()
        if bullets:
            blocks.append("<ul>" + "".join(f"<li>{b}</li>" for b in bullets) + "</ul>")
            bullets.clear()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        bullet = _BULLET_RE.match(line)
        if not line:
            flush()
        elif _HR_RE.match(line):
            flush()
            blocks.append("<hr />")
        elif line.startswith("### "):
            flush()
            blocks.append(f"<h3>{_inline(line[4:])}</h3>")
        elif line.startswith("## "):
            flush()
            blocks.append(f"<h2>{_inline(line[3:])}</h2>")
        elif bullet:
            if paragraph:
                blocks.append(f"<p>{' '.join(paragraph)}</p>")
                paragraph.clear()
            bullets.append(_inline(bullet.group(1)))
        else:
            if bullets:
                flush()
            paragraph.append(_inline(line))
    flush()
    return "".join(blocks)


def _inline(text: str) -> str:
    escaped = html.escape(text, quote=False)
    escaped = _BOLD_RE.sub(r"<strong>\1</strong>", escaped)
    return _ITALIC_RE.sub(r"<em>\1</em>", escaped)
