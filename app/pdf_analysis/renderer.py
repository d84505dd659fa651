"""
Rendering helpers for the taxonomy result page.
"""
import markdown
from markupsafe import Markup, escape

CONFIDENCE_LEVELS = (
    (80, "high"),
    (50, "medium"),
    (0, "low"),
)


class TaxonomyRenderer:
    """Turns model text into safe HTML for the result tree."""

    def render_markdown(self, md_text: str) -> Markup:
        """Convert Markdown → HTML, escaping any raw HTML from the model first."""
        html = markdown.markdown(
            str(escape(md_text or "")),
            extensions=[
                "fenced_code",
                "tables",
                "sane_lists",
            ],
        )
        return Markup(html)

    def confidence_level(self, score: int) -> str:
        """Bucket a 0-100 confidence score into high/medium/low."""
        for threshold, level in CONFIDENCE_LEVELS:
            if score >= threshold:
                return level
        return "low"

    def template_helpers(self) -> dict:
        return {
            "render_markdown": self.render_markdown,
            "confidence_level": self.confidence_level,
        }
