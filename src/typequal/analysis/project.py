"""Runs the rule over a set of modules in import order. Uses networkx for the import graph."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import networkx as nx

from typequal.analysis.aggregate import ProjectAggregate, self_named_exposure
from typequal.analysis.context import collect_defined_types
from typequal.analysis.lookup import ModuleNameLookupTable, build_lookup_table
from typequal.analysis.rule import NoRedundantlyQualifiedType
from typequal.ast.nodes import Module
from typequal.models.errors import AnalysisResult, Diagnostic, ModuleDiagnostics
from typequal.settings import Settings

logger = logging.getLogger("typequal.project")

ModuleName = tuple[str, ...]


def import_graph(modules: Sequence[Module]) -> nx.DiGraph[ModuleName]:
    """Modules as nodes, ``importer -> imported`` edges, restricted to ``modules``."""
    graph: nx.DiGraph[ModuleName] = nx.DiGraph()
    names = {m.name for m in modules}
    for module in modules:
        graph.add_node(module.name)
        for import_ in module.imports:
            if import_.module_name in names and import_.module_name != module.name:
                graph.add_edge(module.name, import_.module_name)
    return graph


def analysis_order(graph: nx.DiGraph[ModuleName]) -> list[ModuleName]:
    """Dependencies before their importers.

    Import cycles are collapsed into one step (members in name order) rather
    than rejected.
    """
    condensed = nx.condensation(graph)
    order: list[ModuleName] = []
    for component in reversed(list(nx.topological_sort(condensed))):
        order.extend(sorted(condensed.nodes[component]["members"]))
    return order


class ProjectAnalysis:
    """Orchestrates: import graph -> self-named exposures -> per-module rule runs."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._rule = NoRedundantlyQualifiedType()

    def run(
        self,
        modules: Sequence[Module],
        lookups: Mapping[ModuleName, ModuleNameLookupTable] | None = None,
    ) -> AnalysisResult:
        """Analyse ``modules`` and collect their diagnostics.

        ``lookups`` supplies an externally computed lookup table per module;
        modules without one get a table built from their own imports.
        """
        by_name: dict[ModuleName, Module] = {}
        for module in modules:
            if module.name in by_name:
                logger.warning("Module %s given twice; keeping the last", module.dotted_name)
            by_name[module.name] = module

        defined = {name: collect_defined_types(m.declarations) for name, m in by_name.items()}
        contributions = {name: self_named_exposure(name, defined[name]) for name in by_name}
        graph = import_graph(list(by_name.values()))

        diagnostics: dict[ModuleName, list[Diagnostic]] = {}
        for name in analysis_order(graph):
            module = by_name[name]
            visible = ProjectAggregate.fold(
                contributions[dep] for dep in {name} | nx.descendants(graph, name)
            )
            lookup = lookups.get(name) if lookups else None
            if lookup is None:
                lookup = build_lookup_table(
                    module,
                    known_modules=defined,
                    implicit_imports=self._settings.implicit_imports,
                )
            diagnostics[name] = self._rule.check(module, lookup, visible)

        project = ProjectAggregate.fold(contributions.values())
        result = AnalysisResult(
            modules=[
                ModuleDiagnostics(module_name=name, diagnostics=diagnostics[name])
                for name in by_name
            ],
            self_named_exposures=sorted(project.self_named_exposures),
        )
        logger.info(
            "Analysed %d module(s): %d diagnostic(s)",
            len(by_name),
            len(result.diagnostics),
        )
        return result
