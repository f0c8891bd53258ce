"""folio.render.markup

Body text to HTML. Markdown does the heavy lifting; `{% highlight %}` blocks
become fenced code first so Markdown leaves their contents alone.
"""

from __future__ import annotations

import re
from pathlib import PurePath

import markdown

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

_HIGHLIGHT_RE = re.compile(
    r"^[ \t]*\{%-?\s*highlight\s+(?P<lang>[\w+#.-]+)(?:\s+[^%]*)?-?%\}[ \t]*\n?"
    r"(?P<code>.*?)"
    r"\n?[ \t]*\{%-?\s*endhighlight\s*-?%\}[ \t]*$",
    re.DOTALL | re.MULTILINE,
)


def expand_highlight_blocks(text: str) -> str:
    def _fence(m: re.Match[str]) -> str:
        code = m.group("code").rstrip("\n")
        fence = "````" if "```" in code else "```"
        return f"{fence}{m.group('lang')}\n{code}\n{fence}"

    return _HIGHLIGHT_RE.sub(_fence, text)


def markdownify(text: str) -> str:
    return markdown.markdown(expand_highlight_blocks(text), extensions=MARKDOWN_EXTENSIONS, output_format="html")


def is_markdown(path: PurePath, extensions: list[str]) -> bool:
    return path.suffix.lower().lstrip(".") in extensions
