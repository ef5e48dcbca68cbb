"""
Document walker: the single depth-first traversal.

Order of work on every element:
  1. classify its class tokens
  2. open a new item if it is an item root (top-level items go straight
     into the result, so they keep document order)
  3. adopt a <base href> / record rel links
  4. walk the children in document order, with the new item (if any) as
     their enclosing item
  5. infer implied properties of the new item
  6. attach property values to the enclosing item, or attach the new item
     as a child of the enclosing item when it carries no property marker

The enclosing item is a plain recursion parameter, so restoring it after a
subtree is just returning from the call. Everything else that changes during
a walk lives on a TraversalContext created per call to ``walk``.
"""

from typing import Optional

from bs4 import Tag

from .classifier import get_classes, property_classes, root_classes
from .exceptions import InvalidInputError, TraversalLimitError
from .implied import apply_implied_properties
from .rels import RelCollector
from .schemas import DocumentResult, EmbeddedValue, Item, ParserLimits, TextValue
from .values import get_attr, resolve_property
from .logger import get_module_logger

logger = get_module_logger("walker")


class TraversalContext:
    """State of one traversal: result under construction, base URL, element count."""

    def __init__(self, base_url: Optional[str] = None):
        self.result = DocumentResult()
        self.base = base_url or None
        self.base_found = False  # Only the first <base href> counts
        self.node_count = 0


class DocumentWalker:
    """Walks one element tree and assembles its DocumentResult."""

    def __init__(self, limits: Optional[ParserLimits] = None):
        self.limits = limits or ParserLimits()
        self.rel_collector = RelCollector()

    def walk(self, root, base_url: Optional[str] = None) -> DocumentResult:
        """
        Extract items and relations from ``root`` and everything below it.

        Args:
            root: BeautifulSoup element (a whole document or any subtree)
            base_url: Base for relative URLs until a <base href> is found

        Returns:
            DocumentResult for this tree

        Raises:
            InvalidInputError: root is None or not an element
            TraversalLimitError: depth or element count above the configured limits
        """
        if root is None:
            raise InvalidInputError("No element tree to parse")
        if not isinstance(root, Tag):
            raise InvalidInputError(
                "Expected an element tree",
                details={"type": type(root).__name__}
            )

        ctx = TraversalContext(base_url)
        try:
            self._visit(root, None, ctx, 0)
        except RecursionError:
            # max_depth configured above what the interpreter stack allows
            raise TraversalLimitError(
                "Markup nesting exceeds the interpreter recursion limit",
                limit="max_depth",
                value=self.limits.max_depth
            )

        logger.info(
            f"Parsed {ctx.node_count} elements: {len(ctx.result.items)} items, "
            f"{len(ctx.result.rels)} rel tokens, {len(ctx.result.alternates)} alternates"
        )
        return ctx.result

    def _check_limits(self, ctx: TraversalContext, depth: int) -> None:
        if depth > self.limits.max_depth:
            raise TraversalLimitError(
                f"Markup nesting deeper than {self.limits.max_depth} elements",
                limit="max_depth",
                value=depth
            )
        if ctx.node_count > self.limits.max_nodes:
            raise TraversalLimitError(
                f"Document has more than {self.limits.max_nodes} elements",
                limit="max_nodes",
                value=ctx.node_count
            )

    def _new_item(self, node, types: list[str]) -> Item:
        item = Item(types=types)
        if node.name == 'area':
            item.shape = get_attr(node, 'shape')
            item.coords = get_attr(node, 'coords')
        return item

    def _visit(self, node, parent_item: Optional[Item], ctx: TraversalContext, depth: int) -> None:
        ctx.node_count += 1
        self._check_limits(ctx, depth)

        classes = get_classes(node)
        types = root_classes(classes)

        item = None
        if types:
            item = self._new_item(node, types)
            if parent_item is None:
                ctx.result.items.append(item)

        self.rel_collector.note_base(node, ctx)
        self.rel_collector.collect(node, ctx)

        enclosing = item if item is not None else parent_item
        for child in node.children:
            if isinstance(child, Tag):
                self._visit(child, enclosing, ctx, depth + 1)

        if item is not None:
            apply_implied_properties(item, node, ctx.base)

        # Markers outside any item have nothing to attach to
        if parent_item is None:
            return

        markers = property_classes(classes)
        if not markers:
            if item is not None:
                parent_item.children.append(item)
            return

        for marker in markers:
            resolved = resolve_property(node, marker.prefix, ctx.base)
            if item is not None:
                # Compound property: the nested item, carrying the resolved value
                parent_item.add_property(marker.name, item.model_copy(update={
                    "value": resolved.value,
                    "html": resolved.html or None,
                }))
            elif marker.prefix == 'e':
                if resolved.value or resolved.html:
                    parent_item.add_property(
                        marker.name,
                        EmbeddedValue(value=resolved.value, html=resolved.html)
                    )
            elif resolved.value:
                parent_item.add_property(marker.name, TextValue(value=resolved.value))
            else:
                logger.debug(f"No value for {marker.prefix}-{marker.name} on <{node.name}>")
