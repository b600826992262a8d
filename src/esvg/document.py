"""SVG documents sized to a page.

A ``Document`` owns the root ``svg`` element and derives its ``width``,
``height`` and ``viewBox`` from a ``Page``. Serialization always starts with
the fixed XML declaration and SVG 1.0 doctype and ends with a newline.
"""

from pathlib import Path
from typing import List, Optional, Union

from esvg.page import Page
from esvg.shared.config import EsvgConfig
from esvg.shared.logging import get_logger
from esvg.tree.node import Element, Node, format_value
from esvg.tree.serializer import OutputMode, Serializer

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"


class Document:
    """Root ``svg`` element plus page metadata.

    Example:
        >>> document = Document(Page.a4(96))
        >>> document.add(Element("g"))
        >>> document.root.get_attribute("viewBox")
        '0, 0, 794, 1123'
    """

    def __init__(
        self,
        page: Page,
        config: Optional[EsvgConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.page = page
        self.config = config or EsvgConfig()
        self.logger = get_logger(__name__, correlation_id, "document")
        self.serializer = Serializer(self.config.serializer, correlation_id)
        self.root = Element("svg")
        self.root.set_attribute("xmlns", SVG_NAMESPACE)
        self.root.set_attribute("xmlns:xlink", XLINK_NAMESPACE)
        self._apply_page_attributes()

    @classmethod
    def from_paper(cls, name: str, dpi: int = 96, margin: float = 0.5) -> "Document":
        """Create a document for a preset or ``WxH`` paper name."""
        return cls(Page.build(name, dpi, margin))

    @property
    def children(self) -> List[Node]:
        return self.root.children

    def add(self, node: Node) -> None:
        """Append a node to the root element."""
        self.root.add_child(node)

    def _apply_page_attributes(self) -> None:
        width_px, height_px, width_mm, height_mm = self.page.dimensions()
        self.root.set_attribute("viewBox", f"0, 0, {width_px}, {height_px}")
        self.root.set_attribute("width", f"{format_value(width_mm)}mm")
        self.root.set_attribute("height", f"{format_value(height_mm)}mm")

    def _render(self, mode: OutputMode) -> str:
        self._apply_page_attributes()
        return self.serializer.serialize(self.root, mode, preamble=True)

    def to_string(self) -> str:
        """Preamble plus compact markup."""
        return self._render(OutputMode.COMPACT)

    def to_pretty_string(self) -> str:
        """Preamble plus indented markup."""
        return self._render(OutputMode.PRETTY)

    def save(self, path: Union[str, Path], pretty: bool = True) -> Path:
        """Write the document to a file, returning the path written."""
        target = Path(path)
        output = self.to_pretty_string() if pretty else self.to_string()
        target.write_text(output, encoding="utf-8")
        self.logger.info(
            "Document saved",
            extra={"path": str(target), "bytes": len(output.encode("utf-8"))}
        )
        return target
