"""High-level orchestration for a documentation build.

:class:`DocsPipeline` runs the whole build for one :class:`SiteConfig`:
create the output directory, walk the content listing, download every
document on a bounded worker pool, render pages, and write the HTML,
``sitemap.xml`` and ``robots.txt`` artifacts. Any failure aborts the
remaining steps; files written before the failure are left in place.

Example
-------
>>> from mdpages.config import load_site_config
>>> from mdpages.pipeline import DocsPipeline
>>> summary = DocsPipeline(load_site_config()).run()  # doctest: +SKIP
>>> summary.document_count  # doctest: +SKIP
42
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from mdpages._constants import INDEX_FILENAME
from mdpages.config import DeploymentMode, PageLayout, SiteConfig
from mdpages.contents import DocumentRef, GitHubContentsClient, discover_documents
from mdpages.generator import SitePageBuilder
from mdpages.markdown_parser import parse_documents
from mdpages.output import ensure_output_dir, write_artifact
from mdpages.sitemap import write_robots, write_sitemap

if typ.TYPE_CHECKING:
    from pathlib import Path

    from mdpages.markdown_parser import ParsedDocument
    from mdpages.sitemap import LinkStyle

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class BuildSummary:
    """Outcome of a successful build.

    Attributes
    ----------
    document_count : int
        Number of Markdown documents rendered.
    pages : tuple[Path, ...]
        HTML files written, index first.
    sitemap : Path
        Location of ``sitemap.xml``.
    robots : Path
        Location of ``robots.txt``.
    html_bytes : int
        Total UTF-8 size of the written HTML.
    """

    document_count: int
    pages: tuple[Path, ...]
    sitemap: Path
    robots: Path
    html_bytes: int

    @property
    def written(self) -> tuple[Path, ...]:
        """Return every artifact path in write order."""
        return (*self.pages, self.sitemap, self.robots)


class DocsPipeline:
    """Discover, fetch, render and write one documentation site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        client: GitHubContentsClient | None = None,
        builder: SitePageBuilder | None = None,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        config : SiteConfig
            Build configuration resolved at startup.
        client : GitHubContentsClient, optional
            Content client; defaults to one built from ``config``.
        builder : SitePageBuilder, optional
            Page builder; defaults to one built from ``config``.
        """
        self.config = config
        self._owns_client = client is None
        self.client = client or GitHubContentsClient(
            token=config.token, timeout=config.timeout, pool_size=config.max_workers
        )
        self.builder = builder or SitePageBuilder(config)

    def run(self) -> BuildSummary:
        """Execute the build and return a summary of what was written.

        Raises
        ------
        MdPagesError
            Any listing, fetch, render or write failure.
        """
        try:
            return self._run()
        finally:
            if self._owns_client:
                self.client.close()

    def _run(self) -> BuildSummary:
        out_dir = ensure_output_dir(self.config.output_dir)
        documents: list[ParsedDocument] = []
        if self.config.mode is DeploymentMode.BUILD_TIME:
            refs = self.discover()
            texts = self.fetch_all(refs)
            documents = parse_documents(
                ((ref.name, ref.path, text) for ref, text in zip(refs, texts, strict=True)),
                reserved=self._reserved_identifiers(len(refs)),
            )
        else:
            logger.info("Client-rendered mode: skipping server-side fetch")

        logger.info("Generating HTML...")
        pages = self.builder.render(documents)

        logger.info("Writing output files...")
        written: list[Path] = []
        html_bytes = 0
        for page in pages:
            written.append(write_artifact(out_dir / page.filename, page.html))
            html_bytes += len(page.html.encode("utf-8"))

        identifiers, link_style = self._sitemap_targets(documents)
        sitemap_path = write_sitemap(
            out_dir,
            self.config.base_url,
            identifiers,
            link_style=link_style,
        )
        robots_path = write_robots(
            out_dir, self.config.base_url, crawl_delay=self.config.crawl_delay
        )
        return BuildSummary(
            document_count=len(documents),
            pages=tuple(written),
            sitemap=sitemap_path,
            robots=robots_path,
            html_bytes=html_bytes,
        )

    def discover(self) -> list[DocumentRef]:
        """Walk the listing tree, optionally sorting the result by path."""
        refs = discover_documents(
            self.client, self.config.listing_url, suffixes=self.config.suffixes
        )
        logger.info("Found %d markdown files", len(refs))
        if self.config.sort_by_path:
            refs = sorted(refs, key=lambda ref: ref.path)
        return refs

    def fetch_all(self, refs: list[DocumentRef]) -> list[str]:
        """Download every document on a bounded pool, preserving ``refs`` order.

        The first failure cancels fetches that have not started yet and is
        re-raised; requests already in flight are left to finish and their
        results discarded.
        """
        if not refs:
            return []
        texts: list[str | None] = [None] * len(refs)
        executor = ThreadPoolExecutor(
            max_workers=min(self.config.max_workers, len(refs)),
            thread_name_prefix="mdpages-fetch",
        )
        try:
            futures: dict[Future[str], int] = {}
            for index, ref in enumerate(refs):
                logger.info(
                    "Fetching content %d/%d: %s", index + 1, len(refs), ref.content_url
                )
                futures[executor.submit(self.client.fetch_text, ref.content_url)] = index
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            failed = next((f for f in done if f.exception() is not None), None)
            if failed is not None:
                for future in pending:
                    future.cancel()
                raise typ.cast("BaseException", failed.exception())
            for future, index in futures.items():
                texts[index] = future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return [text or "" for text in texts]

    def _reserved_identifiers(self, count: int) -> set[str]:
        """Return identifiers documents must not take for the current layout."""
        if self.config.layout is PageLayout.MULTI_PAGE:
            return {INDEX_FILENAME.removesuffix(".html")}
        if self.config.layout is PageLayout.TOC:
            return {f"section-{index}" for index in range(1, count + 1)}
        return set()

    def _sitemap_targets(
        self, documents: list[ParsedDocument]
    ) -> tuple[list[str], LinkStyle]:
        """Return sitemap identifiers and link style for the current output."""
        if self.config.mode is DeploymentMode.CLIENT_RENDERED:
            return [], "anchor"
        identifiers = [doc.identifier for doc in documents]
        if self.config.layout is PageLayout.MULTI_PAGE:
            return identifiers, "page"
        if self.config.layout is PageLayout.TOC:
            return identifiers, "anchor"
        return [], "anchor"


__all__ = ["BuildSummary", "DocsPipeline"]
