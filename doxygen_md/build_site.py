"""Build the Markdown site from a Doxygen XML provider.

Phase 1 parses every compound (in parallel) and registers the results in provider
order. Phase 2 resolves references against the frozen symbol table, renders pages
and assembles the navigation. Nothing is written until the whole tree is built.
"""

import fnmatch
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from doxygen_md.assemble_navigation import (
    NavigationTree,
    assemble_navigation,
    navigation_to_yaml,
)
from doxygen_md.compound_node import CompoundNode
from doxygen_md.compute_config_hash import compute_config_hash
from doxygen_md.errors import DoxygenMdError, MalformedInput, UnsupportedSchema
from doxygen_md.input_provider import InputProvider
from doxygen_md.load_config import load_config
from doxygen_md.output_sink import OutputSink
from doxygen_md.parse_compound import parse_compound
from doxygen_md.parse_index import DoxygenIndex, parse_index
from doxygen_md.render_compound_page import render_compound_page
from doxygen_md.render_index_page import render_index_page
from doxygen_md.resolve_references import resolve_all
from doxygen_md.run_report import RunReport
from doxygen_md.symbol_table import SymbolTable, SymbolTableBuilder


@dataclass(frozen=True)
class SiteBuild:
    """The generated file tree, its navigation and the run report."""

    files: dict[str, str]  # site-relative path -> Markdown/YAML text, sorted by path
    navigation: NavigationTree
    report: RunReport
    table: SymbolTable


def build_site(
    provider: InputProvider, config: dict[str, Any] | None = None
) -> SiteBuild:
    """Run both phases and return the full site.

    Raises MalformedInput (bad index, or any bad compound once all are parsed) and
    DuplicateId. Unsupported compounds, excluded names and orphaned navigation
    entries are reported, not raised.
    """
    config = config if config is not None else load_config()
    report = RunReport(compute_config_hash(config))

    index_data = provider.read_index()
    index = parse_index(index_data) if index_data is not None else DoxygenIndex()

    compound_ids = provider.list_compounds()
    results = _parse_all(
        provider,
        compound_ids,
        workers=int(config["parse"]["workers"]),
        include_private=bool(config["members"]["include_private"]),
    )
    report.count("documents", len(compound_ids))

    malformed = [r for r in results if isinstance(r, MalformedInput)]
    if malformed:
        first = malformed[0]
        if len(malformed) == 1:
            raise first
        msg = f"{len(malformed)} compound documents are malformed; first: {first}"
        raise MalformedInput(msg, first.compound_id) from first

    builder = SymbolTableBuilder(index)
    exclude = list(config.get("exclude_names") or [])
    for result in results:
        if isinstance(result, DoxygenMdError):
            report.warn(result)
            report.skip(result.compound_id or "")
            continue
        if _excluded(result, exclude):
            report.skip(result.id)
            report.count("excluded")
            continue
        builder.register(result)
    table = builder.freeze()

    code_language = str(config["site"]["code_language"])
    files: dict[str, str] = {}
    entries = []
    for resolved in resolve_all(table).values():
        page = render_compound_page(resolved, table, code_language=code_language)
        files[page.path] = page.text
        entries.append(page.entry)
        report.count(page.entry.section)
    report.count("pages", len(entries))

    navigation = assemble_navigation(entries)
    for warning in navigation.warnings:
        report.warn(warning)

    index_page = str(config["output"]["index_page"])
    files[index_page] = render_index_page(
        navigation, str(config["site"]["title"]), index_page
    )
    files[str(config["output"]["nav_file"])] = navigation_to_yaml(navigation, index_page)

    return SiteBuild(
        files=dict(sorted(files.items())),
        navigation=navigation,
        report=report,
        table=table,
    )


def write_site(site: SiteBuild, sink: OutputSink) -> int:
    """Hand every file to the sink, in path order. Returns the number written."""
    for path, text in site.files.items():
        sink.write_file(path, text)
    return len(site.files)


def _parse_one(
    provider: InputProvider, compound_id: str, *, include_private: bool
) -> CompoundNode | DoxygenMdError:
    try:
        return parse_compound(
            provider.read_compound(compound_id),
            compound_id,
            include_private=include_private,
        )
    except (MalformedInput, UnsupportedSchema) as e:
        return e


def _parse_all(
    provider: InputProvider,
    compound_ids: list[str],
    *,
    workers: int,
    include_private: bool,
) -> list[CompoundNode | DoxygenMdError]:
    """Parse every compound, returning results in provider order."""
    if workers <= 1:
        return [
            _parse_one(provider, cid, include_private=include_private)
            for cid in compound_ids
        ]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_parse_one, provider, cid, include_private=include_private)
            for cid in compound_ids
        ]
        return [f.result() for f in futures]


def _excluded(node: CompoundNode, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatchcase(node.name, p) for p in patterns)
