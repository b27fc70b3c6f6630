"""
Discovery Module - Build the module list through ordered fallbacks.
===================================================================

Strategies are tried in order and the first one that returns at least one
module wins. Results are never merged.

1. module_files: per-module descriptor entries (``.../module_<n>.xml``)
2. manifest_organizations: top-level ``<item>`` blocks of the manifest's
   ``<organizations>`` section, or the children of a single untitled root item
3. synthetic_default: one placeholder module named after the course

Adding a strategy means adding a ``DiscoveryStrategy`` to the tuple passed to
``run_discovery``.
"""

import random
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Iterator, NamedTuple, Optional, Sequence

from coursemap.extraction.archive import CourseArchive
from coursemap.extraction.counter import count_elements
from coursemap.extraction.manifest import ManifestInfo, extract_title
from coursemap.extraction.module_parser import module_id, module_name, parse_module_xml
from coursemap.extraction.scoring import default_compliance, fallback_compliance
from coursemap.shared.config import ArchiveConfig
from coursemap.shared.logging import get_logger
from coursemap.shared.schemas import Module

logger = get_logger(__name__)

ORGANIZATIONS_PATTERN = re.compile(r"<organizations>([\s\S]*?)</organizations>")
# Opening, closing and self-closing <item> tags; <items>/<itemref> are not items
ITEM_TAG_PATTERN = re.compile(r"<(/?)item\b([^>]*)>")

# Sub-items per estimated assessment in the manifest fallback
ACTIVITIES_PER_ASSESSMENT = 3


# ─────────────────────────────────────────────────────────────────────────────
# Strategy Plumbing
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DiscoveryContext:
    """Inputs shared by all strategies of one parse."""

    archive: CourseArchive
    manifest: ManifestInfo
    config: ArchiveConfig = field(default_factory=ArchiveConfig)
    rng: Optional[random.Random] = None

    @property
    def course_title(self) -> str:
        return self.manifest.title


class DiscoveryStrategy(NamedTuple):
    name: str
    run: Callable[[DiscoveryContext], list[Module]]


@dataclass(frozen=True)
class DiscoveryResult:
    strategy: str
    modules: list[Module]


# ─────────────────────────────────────────────────────────────────────────────
# Strategy 1: Per-module descriptor files
# ─────────────────────────────────────────────────────────────────────────────


def is_module_entry(path: str, marker: str, extensions: Sequence[str]) -> bool:
    """True if a path segment starts with ``marker`` and the path has a descriptor extension."""
    if not path.endswith(tuple(extensions)):
        return False
    return any(segment.startswith(marker) for segment in path.split("/"))


def find_module_entries(
    entries: Sequence[str],
    marker: str = "module_",
    extensions: Sequence[str] = (".xml",),
) -> list[str]:
    """Module descriptor entries, in archive listing order."""
    return [path for path in entries if is_module_entry(path, marker, extensions)]


def read_entries(archive: CourseArchive, paths: Sequence[str], workers: int = 1) -> list[Optional[str]]:
    """
    Read several entries, optionally on a thread pool.

    The result list is index-aligned with ``paths`` regardless of the order
    in which reads complete.
    """
    if workers <= 1 or len(paths) <= 1:
        return [archive.read_text(path) for path in paths]

    results: list[Optional[str]] = [None] * len(paths)
    with ThreadPoolExecutor(max_workers=min(workers, len(paths))) as pool:
        futures = {pool.submit(archive.read_text, path): index for index, path in enumerate(paths)}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results


def from_module_files(context: DiscoveryContext) -> list[Module]:
    """Parse every per-module descriptor entry, numbered in archive order."""
    config = context.config
    paths = find_module_entries(
        context.archive.list_entries(),
        marker=config.module_marker,
        extensions=config.descriptor_extensions,
    )
    if not paths:
        logger.debug("No module descriptor entries found")
        return []

    texts = read_entries(context.archive, paths, workers=config.read_workers)

    modules = []
    for path, text in zip(paths, texts):
        if text is None:
            continue
        number = len(modules) + 1
        modules.append(parse_module_xml(text, number, rng=context.rng))
        logger.debug(f"Parsed {path} as {module_id(number)}")

    return modules


# ─────────────────────────────────────────────────────────────────────────────
# Strategy 2: Manifest organization structure
# ─────────────────────────────────────────────────────────────────────────────


def iter_top_level_items(organizations: str) -> Iterator[str]:
    """
    Yield the body of each top-level ``<item>…</item>`` block, in order.

    Items nested in another item belong to their parent's body. Self-closing
    top-level items and an item left open at the end are not yielded.
    """
    depth = 0
    body_start = 0

    for match in ITEM_TAG_PATTERN.finditer(organizations):
        is_closing = match.group(1) == "/"
        is_self_closing = match.group(2).rstrip().endswith("/")

        if is_closing:
            if depth == 0:
                continue
            depth -= 1
            if depth == 0:
                yield organizations[body_start:match.start()]
        elif not is_self_closing:
            if depth == 0:
                body_start = match.end()
            depth += 1


def module_item_bodies(organizations: str) -> list[str]:
    """
    Bodies of the items that stand for modules.

    A rooted hierarchy wraps every module in a single untitled item (Canvas
    names it ``LearningModules``). When the only top-level item has no
    ``<title>`` before its first child item, its children are used instead.
    """
    bodies = list(iter_top_level_items(organizations))
    if len(bodies) != 1:
        return bodies

    root = bodies[0]
    first_child = ITEM_TAG_PATTERN.search(root)
    if first_child is None or extract_title(root[:first_child.start()]) is not None:
        return bodies

    logger.debug("Organizations use a single root item, descending into its children")
    return list(iter_top_level_items(root))


def from_manifest_organizations(context: DiscoveryContext) -> list[Module]:
    """Estimate modules from the manifest's organization items."""
    manifest_text = context.manifest.text
    if manifest_text is None:
        return []

    org_match = ORGANIZATIONS_PATTERN.search(manifest_text)
    if not org_match:
        logger.debug("Manifest has no <organizations> block")
        return []

    modules = []
    for number, body in enumerate(module_item_bodies(org_match.group(1)), start=1):
        title = extract_title(body) or f"Module {number}"
        activities = count_elements(body, "item")

        modules.append(
            Module(
                id=module_id(number),
                name=module_name(title, number),
                qm_compliance=fallback_compliance(activities),
                objectives=1,
                activities=activities,
                assessments=activities // ACTIVITIES_PER_ASSESSMENT,
            )
        )

    return modules


# ─────────────────────────────────────────────────────────────────────────────
# Strategy 3: Synthetic default
# ─────────────────────────────────────────────────────────────────────────────


def default_module(course_title: str, number: int = 1) -> Module:
    """Placeholder module used when the package exposes no structure."""
    return Module(
        id=module_id(number),
        name=f"Module {number}: Introduction to {course_title}",
        qm_compliance=default_compliance(),
        objectives=1,
        activities=2,
        assessments=1,
    )


def synthetic_default(context: DiscoveryContext) -> list[Module]:
    return [default_module(context.course_title)]


# ─────────────────────────────────────────────────────────────────────────────
# Cascade
# ─────────────────────────────────────────────────────────────────────────────


DEFAULT_STRATEGIES: tuple[DiscoveryStrategy, ...] = (
    DiscoveryStrategy("module_files", from_module_files),
    DiscoveryStrategy("manifest_organizations", from_manifest_organizations),
    DiscoveryStrategy("synthetic_default", synthetic_default),
)


def run_discovery(
    context: DiscoveryContext,
    strategies: Sequence[DiscoveryStrategy] = DEFAULT_STRATEGIES,
) -> DiscoveryResult:
    """
    Try strategies in order and keep the first non-empty result.

    If every strategy comes back empty the synthetic default module is used,
    so the result always holds at least one module.
    """
    for strategy in strategies:
        modules = strategy.run(context)
        if modules:
            logger.info(f"Discovered {len(modules)} module(s) via {strategy.name}")
            return DiscoveryResult(strategy=strategy.name, modules=modules)
        logger.debug(f"Strategy {strategy.name} found no modules")

    logger.info("No strategy found modules, using synthetic default")
    return DiscoveryResult(strategy="synthetic_default", modules=synthetic_default(context))


def discover_modules(
    context: DiscoveryContext,
    strategies: Sequence[DiscoveryStrategy] = DEFAULT_STRATEGIES,
) -> list[Module]:
    """Module list for a course, see ``run_discovery``."""
    return run_discovery(context, strategies).modules
