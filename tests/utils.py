from io import StringIO
from textwrap import dedent
from typing import Any

from lxml.etree import XML

from svgextract.svgextract import NodeTracker, svg2data


def shapes_from_svg(content: str) -> Any:
    """Extract the shapes of a SVG string."""
    return svg2data(StringIO(dedent(content).strip()))  # type: ignore


def minimal_svg_node(content: str) -> NodeTracker:
    """Convert a minimal SVG snippet to a NodeTracker."""
    return NodeTracker(XML(content), None, 0, None, False)
