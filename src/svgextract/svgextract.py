"""A library for extracting structured data from SVG files.

This module reads the geometry and styling of SVG shapes and returns it as
plain Python values (dicts, lists, strings and floats) that can be serialized
freely, e.g. to JSON. It handles basic shapes, paths, inline styles,
presentation attributes and linear/radial gradients referenced through
``url(#id)`` values.

Groups are flattened away, so the result is a flat list of shapes in document
order. Nothing is rendered and no transformation is applied: attribute values
are captured as written in the document.

Example:
    To extract all shapes of an SVG file::

        from svgextract.svgextract import svg2data
        shapes = svg2data("foo.svg")

    To convert an SVG file to JSON from the command-line::

        $ svg2json foo.svg
"""

import gzip
import logging
import os
import pathlib
import re
from typing import Any, Dict, Iterable, List, Optional, Union

import cssselect2
from lxml import etree

from .utils import is_numeric, parse_float, split_coordinates, split_whitespace

logger = logging.getLogger(__name__)

# Relevant geometric attributes, in output order, for each basic shape.
SHAPE_ATTRIBUTES: Dict[str, List[str]] = {
    "circle": ["cx", "cy", "r"],
    "ellipse": ["cx", "cy", "rx", "ry"],
    "rect": ["x", "y", "width", "height", "rx", "ry"],
    "line": ["x1", "y1", "x2", "y2"],
    "polyline": ["points"],
    "polygon": ["points"],
}

GRADIENT_ATTRIBUTES: Dict[str, List[str]] = {
    "linearGradient": ["x1", "y1", "x2", "y2"],
    "radialGradient": ["cx", "cy", "r", "fx", "fy"],
}

# Presentation attributes merged into the style record.
STYLE_ATTRIBUTES = [
    "fill",
    "stroke",
    "stroke-width",
    "opacity",
    "transform",
    "clip-path",
]

DEFAULT_STOP_OFFSET = 0
DEFAULT_STOP_COLOR = "#000000"

AttributeValue = Union[None, float, str, List[List[float]]]
ShapeAttributes = Union[None, str, Dict[str, AttributeValue]]


class NodeTracker(cssselect2.ElementWrapper):
    """A wrapper for lxml nodes to track attribute usage.

    This class wraps an lxml node and keeps a record of which attributes
    have been accessed, which is useful for debugging unused attributes.
    It also offers the few DOM-style lookups the extraction needs.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.usedAttrs: List[str] = []

    def __repr__(self) -> str:
        return f"<NodeTracker for node {self.etree_element}>"

    def getAttribute(self, name: str) -> Optional[str]:
        """Get an attribute value and record that it has been used.

        Returns None if the attribute is not set on the node.
        """
        if name not in self.usedAttrs:
            self.usedAttrs.append(name)
        return self.etree_element.attrib.get(name)

    def getElementsByTagName(self, name: str) -> List["NodeTracker"]:
        """Return all descendants with the given tag name, in document order."""
        return [
            node
            for node in self.iter_subtree()
            if node is not self and node_name(node) == name
        ]

    def getElementById(self, id: str) -> Optional["NodeTracker"]:
        """Find the element with the given id in the document owning this node."""
        root = self.etree_element.getroottree().getroot()
        found = root.xpath("//*[@id=$id]", id=id)
        if not found:
            return None
        return type(self).from_xml_root(found[0])

    def unusedAttributes(self) -> List[str]:
        """Return the names of the node attributes that were never read."""
        return [
            attr for attr in self.etree_element.attrib if attr not in self.usedAttrs
        ]

    def __getattr__(self, name: str) -> Any:
        """Forward attribute access to the wrapped lxml node."""
        return getattr(self.etree_element, name)


def as_node(node: Any) -> Any:
    """Wrap a bare lxml element into a NodeTracker, return anything else as is."""
    if isinstance(node, etree._Element):
        return NodeTracker.from_xml_root(node)
    return node


def node_name(node: Any) -> Optional[str]:
    """Return the name of an lxml node without the namespace prefix.

    Args:
        node: The lxml node.

    Returns:
        The node name as a string, or None if the node is invalid.
    """
    try:
        return node.tag.split("}")[-1]
    except AttributeError:
        return None


def flatten_shapes(elements: Iterable[Any]) -> List[Any]:
    """Flatten a sequence of SVG elements into a list of non-group elements.

    Group (``<g>``) elements are replaced by their flattened children, all
    other elements are kept as they are, so the result follows the document
    order of a depth-first traversal.

    Args:
        elements: Sibling nodes, e.g. the children of an ``<svg>`` element.

    Returns:
        A list of NodeTracker objects, none of which is a group.

    Example:
        >>> [node_name(n) for n in flatten_shapes(root.iter_children())]
        ['rect', 'circle', 'path']
    """
    result: List[Any] = []
    for el in elements:
        el = as_node(el)
        if (node_name(el) or "").lower() == "g":
            result.extend(flatten_shapes(el.iter_children()))
        else:
            result.append(el)
    return result


def get_shape_attributes(element: Any) -> ShapeAttributes:
    """Extract the relevant geometric attributes of an SVG shape.

    Numeric values are converted to floats, other values are kept as strings
    and missing attributes are set to None. The ``points`` of polygons and
    polylines are parsed into coordinate lists.

    Args:
        element: The shape node (e.g. circle, rect, polygon).

    Returns:
        A dictionary with exactly the attributes relevant for the shape type,
        or for ``<path>`` elements the raw path data string (None if missing).
        Unknown shape types give an empty dictionary.

    Example:
        >>> get_shape_attributes(as_node(XML('<circle cx="5" cy="10"/>')))
        {'cx': 5.0, 'cy': 10.0, 'r': None}
    """
    element = as_node(element)
    shape_type = (node_name(element) or "").lower()
    if shape_type == "path":
        return element.getAttribute("d")

    attributes: Dict[str, AttributeValue] = {}
    for attr in SHAPE_ATTRIBUTES.get(shape_type, []):
        value = element.getAttribute(attr)
        if value is None:
            attributes[attr] = None
        elif attr == "points":
            attributes[attr] = parse_points(value)
        elif not is_numeric(value):
            # e.g. "10%" or "auto"
            attributes[attr] = value
        else:
            attributes[attr] = parse_float(value)
    return attributes


def parse_points(points: str) -> List[List[float]]:
    """Parse a points attribute into a list of coordinate pairs.

    Args:
        points: Coordinate pairs separated by whitespace, the coordinates of
            a pair separated by a comma, e.g. ``"0,0 10,10 20,0"``.

    Returns:
        A list like ``[[0.0, 0.0], [10.0, 10.0], [20.0, 0.0]]``. Coordinates
        that are not numbers become ``nan``, and a token with more or fewer
        commas gives a list of another length.
    """
    tokens = split_whitespace(points) or [""]
    return [split_coordinates(token) for token in tokens]


def parse_inline_style(style: str) -> Dict[str, str]:
    """Parse the content of a style attribute into a dictionary.

    Declarations without a colon are ignored, a later declaration of the same
    property replaces an earlier one.
    """
    attrs: Dict[str, str] = {}
    for declaration in style.split(";"):
        if not declaration.strip() or ":" not in declaration:
            continue
        k, v = declaration.split(":", 1)
        attrs[k.strip()] = v.strip()
    return attrs


def get_style_attributes(element: Any) -> Dict[str, Any]:
    """Extract the style of an SVG element.

    Declarations of the inline ``style`` attribute are merged with the
    presentation attributes listed in `STYLE_ATTRIBUTES`. Inline values take
    precedence over plain attribute values, but an attribute referencing a
    gradient with ``url(#id)`` is replaced by the parsed gradient whenever
    the id exists in the document.

    Args:
        element: The SVG element node.

    Returns:
        A dictionary mapping style properties to strings, or to gradient
        dictionaries (see `parse_gradient`).
    """
    element = as_node(element)
    styles: Dict[str, Any] = {}

    inline_style = element.getAttribute("style")
    if inline_style:
        styles.update(parse_inline_style(inline_style))

    for attr in STYLE_ATTRIBUTES:
        value = element.getAttribute(attr)
        if not value or value == "none":
            continue

        if value.startswith("url("):
            m = re.search(r"#(.*)\)", value)
            if not m:
                continue
            ref = m.group(1)
            gradient = element.getElementById(ref)
            if gradient is None:
                logger.warning("Unable to find a gradient with id %s", ref)
                continue
            styles[attr] = parse_gradient(gradient)
        elif attr not in styles:
            styles[attr] = value

    return styles


def parse_gradient(gradient: Any) -> Optional[Dict[str, Any]]:
    """Parse a linear or radial gradient element.

    Args:
        gradient: A ``<linearGradient>`` or ``<radialGradient>`` node, or None.

    Returns:
        A dictionary with the gradient ``type`` ("linear" or "radial"), its
        geometric attributes as raw strings (None where missing) and its
        ``stops`` as a list of ``{"offset": ..., "color": ...}`` dictionaries
        in document order. Returns None if no gradient is given.

    Example:
        >>> parse_gradient(node)
        {'type': 'linear', 'x1': '0', 'y1': '0', 'x2': '1', 'y2': None,
         'stops': [{'offset': '0', 'color': '#fff'}]}
    """
    if gradient is None:
        return None
    gradient = as_node(gradient)
    name = node_name(gradient) or ""

    result: Dict[str, Any] = {"type": name.replace("Gradient", "", 1).lower()}
    for attr in GRADIENT_ATTRIBUTES.get(name, []):
        result[attr] = gradient.getAttribute(attr)
    result["stops"] = [
        {
            "offset": stop.getAttribute("offset") or DEFAULT_STOP_OFFSET,
            "color": stop.getAttribute("stop-color") or DEFAULT_STOP_COLOR,
        }
        for stop in gradient.getElementsByTagName("stop")
    ]
    return result


def print_unused_attributes(node: NodeTracker) -> None:
    """Log any attributes that were not read during extraction.

    This is a debugging helper to identify unsupported SVG attributes.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    unused_attrs = node.unusedAttributes()
    if unused_attrs:
        logger.debug("Unused attrs: %s %s", node_name(node), unused_attrs)


def extract_shapes(svg_node: Any) -> List[Dict[str, Any]]:
    """Extract geometry and style of all shapes below an SVG root node.

    Args:
        svg_node: The root node of the SVG document.

    Returns:
        One dictionary per shape, in document order, with the keys ``type``,
        ``id``, ``attributes`` (see `get_shape_attributes`) and ``style``
        (see `get_style_attributes`).
    """
    svg_node = as_node(svg_node)
    shapes = []
    for node in flatten_shapes(svg_node.iter_children()):
        name = node_name(node)
        if name not in SHAPE_ATTRIBUTES and name != "path":
            logger.debug("Ignoring node: %s", name)
            continue
        shapes.append(
            {
                "type": name,
                "id": node.getAttribute("id"),
                "attributes": get_shape_attributes(node),
                "style": get_style_attributes(node),
            }
        )
        print_unused_attributes(node)
    return shapes


def load_svg_file(
    path: Union[str, os.PathLike, Any], resolve_entities: bool = False
) -> Optional[NodeTracker]:
    """Load an SVG file and return its root node.

    Gzip-compressed files with the .svgz extension are decompressed on the fly.

    Args:
        path: A file path, pathlib.Path or file-like object for the SVG file.
        resolve_entities: Whether to resolve XML entities.

    Returns:
        The root NodeTracker of the SVG document, or None on failure.
    """
    if isinstance(path, pathlib.Path):
        path = str(path)

    parser = etree.XMLParser(
        remove_comments=True, recover=True, resolve_entities=resolve_entities
    )
    try:
        if isinstance(path, str) and os.path.splitext(path)[1].lower() == ".svgz":
            with gzip.open(path, "rb") as f_in:
                doc = etree.parse(f_in, parser=parser)
        else:
            doc = etree.parse(path, parser=parser)
        svg_root = doc.getroot()
    except Exception as exc:
        logger.error("Failed to load input file! (%s)", exc)
        return None
    if svg_root is None:
        logger.error("Failed to load input file! (no root element)")
        return None
    return NodeTracker.from_xml_root(svg_root)


def svg2data(
    path: Union[str, os.PathLike, Any], resolve_entities: bool = False
) -> Optional[List[Dict[str, Any]]]:
    """Extract all shapes of an SVG file.

    Args:
        path: A file path, file-like object, or pathlib.Path to the SVG file.
        resolve_entities: Whether to resolve XML entities (default False).

    Returns:
        The list returned by `extract_shapes`, or None if the file cannot
        be processed.
    """
    svg_root = load_svg_file(path, resolve_entities=resolve_entities)
    if svg_root is None:
        return None
    return extract_shapes(svg_root)
