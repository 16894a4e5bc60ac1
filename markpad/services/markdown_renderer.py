from __future__ import annotations

from typing import Literal

import markdown

from markpad.domain.interfaces import IMarkdownRenderer
from markpad.utils.constants import CSS_PREVIEW, HTML_TEMPLATE

MathEngine = Literal["mathjax", "katex"]

_EXTENSIONS = [
    "abbr",
    "attr_list",
    "def_list",
    "footnotes",
    "tables",
    "toc",
    "sane_lists",
    "pymdownx.superfences",
    "pymdownx.highlight",
    "pymdownx.tilde",  # ~~strikethrough~~
    "pymdownx.tasklist",  # - [ ] items
    "pymdownx.arithmatex",
]

_EXTENSION_CONFIGS = {
    "pymdownx.highlight": {"guess_lang": True, "noclasses": True},
    "pymdownx.tasklist": {"custom_checkbox": False},
    # generic=True wraps math in arithmatex spans/divs for the JS renderer
    "pymdownx.arithmatex": {"generic": True},
}

_MATHJAX_ASSETS = """
<script>
window.MathJax = {
  tex: { inlineMath: [['\\\\(', '\\\\)']], displayMath: [['\\\\[', '\\\\]']], processEscapes: true },
  options: { skipHtmlTags: ['script', 'noscript', 'style', 'textarea', 'pre', 'code'] }
};
</script>
<script id="MathJax-script" async src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml.js"></script>
"""

_KATEX_CSS = (
    '<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.10/dist/katex.min.css">'
)

_KATEX_ASSETS = """
<script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.10/dist/katex.min.js"></script>
<script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.10/dist/contrib/auto-render.min.js"></script>
<script>
document.addEventListener("DOMContentLoaded", function() {
  if (typeof renderMathInElement === "function") {
    renderMathInElement(document.body, {
      delimiters: [
        {left: "\\\\(", right: "\\\\)", display: false},
        {left: "\\\\[", right: "\\\\]", display: true}
      ]
    });
  }
});
</script>
"""


class MarkdownRenderer(IMarkdownRenderer):
    """
    GitHub-flavoured-ish Markdown to HTML for the preview pane.

    Tables, fenced code, strikethrough and task lists come from Python-Markdown
    plus pymdown-extensions. Math is wrapped by arithmatex and rendered client-side
    by MathJax (default) or KaTeX, so it only shows up in a JS-capable preview.
    """

    def __init__(self, math_engine: MathEngine = "mathjax") -> None:
        if math_engine not in ("mathjax", "katex"):
            raise ValueError(f"Unknown math engine: {math_engine!r}")
        self.math_engine: MathEngine = math_engine
        self._md = markdown.Markdown(
            extensions=_EXTENSIONS,
            extension_configs=_EXTENSION_CONFIGS,
            output_format="html",
        )

    def render_body(self, markdown_text: str) -> str:
        """HTML fragment for `markdown_text`, without the page template."""
        if not markdown_text:
            return ""
        self._md.reset()
        return self._md.convert(markdown_text)

    def to_html(self, markdown_text: str) -> str:
        body = self.render_body(markdown_text)
        if not body:
            return ""
        if self.math_engine == "katex":
            return HTML_TEMPLATE.format(css=CSS_PREVIEW, body=_KATEX_CSS + body + _KATEX_ASSETS)
        return HTML_TEMPLATE.format(css=CSS_PREVIEW, body=body + _MATHJAX_ASSETS)
