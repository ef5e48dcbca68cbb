"""
Document-level relations.

Collects rel links into three structures on the result:
  rels       → token → absolute URLs (document order, duplicates kept)
  rel_urls   → absolute URL → RelURL metadata (last link wins)
  alternates → rel="alternate ..." links, kept out of ``rels`` entirely

Also tracks the document base: the first <base href> in document order
becomes the base for every URL resolved after it.
"""

from .schemas import AlternateRel, RelURL
from .values import get_attr, resolve_url, text_content
from .logger import get_module_logger

logger = get_module_logger("rels")

# Elements whose rel attribute describes a link
LINK_TAGS = ['a', 'link', 'area']


class RelCollector:
    """Updates a traversal context's base URL and relation data."""

    def note_base(self, node, ctx) -> None:
        """Adopt the first <base href> seen; later ones are ignored."""
        if ctx.base_found or node.name != 'base':
            return
        href = get_attr(node, 'href')
        if not href:
            return
        ctx.base = resolve_url(href, ctx.base) if ctx.base else href
        ctx.base_found = True
        logger.debug(f"Document base set to {ctx.base}")

    def collect(self, node, ctx) -> None:
        """Record a link element's rel tokens against its absolute URL."""
        if node.name not in LINK_TAGS:
            return
        rel = get_attr(node, 'rel')
        if not rel:
            return

        # A missing or empty href points at the document itself, i.e. the base
        href = get_attr(node, 'href') or ""
        url = resolve_url(href, ctx.base) if href else (ctx.base or "")
        tokens = rel.split()
        if not tokens:
            return

        media = get_attr(node, 'media') or ""
        hreflang = get_attr(node, 'hreflang') or ""
        content_type = get_attr(node, 'type') or ""

        if 'alternate' in tokens:
            remaining = [token for token in tokens if token != 'alternate']
            ctx.result.alternates.append(AlternateRel(
                url=url,
                rel=" ".join(remaining),
                media=media,
                hreflang=hreflang,
                type=content_type
            ))
            return

        for token in tokens:
            ctx.result.rels.setdefault(token, []).append(url)

        # Token set for this link, first occurrence order
        unique_tokens = list(dict.fromkeys(tokens))
        ctx.result.rel_urls[url] = RelURL(
            rels=unique_tokens,
            text=text_content(node),
            media=media,
            hreflang=hreflang,
            type=content_type
        )
