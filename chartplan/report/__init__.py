"""Report assembly and rendering."""

from chartplan.report.formatter import Formatter
from chartplan.report.recommender import Recommender, build_report

__all__ = ["Formatter", "Recommender", "build_report"]
