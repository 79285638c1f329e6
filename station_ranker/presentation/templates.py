"""Rendering of ranking results for terminal and machine consumers.

Text output is rendered with Jinja2 from templates shipped in the
station_ranker.presentation package; JSON output is the plain payload.
"""

import json
from typing import Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from station_ranker.domain.models import DEFAULT_PRICE_FIELD
from station_ranker.logging import get_logger
from station_ranker.pipeline.models import RankingRunResult

from .payloads import build_result_context

logger = get_logger(__name__, component="presentation")


class PresentationError(Exception):
    """Raised when a result cannot be rendered."""


def _format_km(value: float) -> str:
    if value < 1:
        return f"{value * 1000:.0f} m"
    return f"{value:.1f} km"


def _format_price(value) -> str:
    if value is None:
        return "n/a"
    # Prices are shown the way the feed writes them: decimal comma
    return f"{value:.3f}".replace(".", ",") + " €/L"


class ResultRenderer:
    """Renders RankingRunResult objects to text using Jinja2.

    Templates are loaded once per renderer and cached by the environment.
    """

    def __init__(
        self,
        template_dir: str = "templates",
        text_template: str = "ranking.txt.j2",
        price_field: str = DEFAULT_PRICE_FIELD,
    ):
        self.text_template_name = text_template
        self.price_field = price_field

        self.env = Environment(
            loader=PackageLoader("station_ranker.presentation", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["km"] = _format_km
        self.env.filters["price"] = _format_price

    def build_context(self, run_result: RankingRunResult) -> Dict:
        return build_result_context(run_result, self.price_field)

    def render_text(self, run_result: RankingRunResult) -> str:
        """Render a run result as human-readable text.

        Raises:
            PresentationError: If template rendering fails
        """
        context = self.build_context(run_result)
        try:
            template = self.env.get_template(self.text_template_name)
            return template.render(context).rstrip() + "\n"
        except TemplateError as e:
            logger.error(f"Template rendering failed: {e}", exc_info=True)
            raise PresentationError(f"Template rendering failed: {e}") from e

    def render_json(self, run_result: RankingRunResult) -> str:
        """Render a run result as an indented JSON document."""
        return json.dumps(self.build_context(run_result), ensure_ascii=False, indent=2)
