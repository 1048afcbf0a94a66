"""Leftover resources and their attribution to plugin units.

A leftover is a catalog file below the BPMN or FHIR sub-root that no unit
references. With several units sharing one resource tree, a leftover goes to
the unit whose id occurs (case-insensitively) in the file path; files that
match no unit land in a single unassigned bucket reported on the last unit.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from dsflint.constants import BPMN_DIRECTORY, FHIR_DIRECTORY
from dsflint.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, SubjectKind
from dsflint.models.unit import Unit
from dsflint.resources.catalog import ResourceCatalog
from dsflint.resources.resolver import ReferenceResolver, ResolutionStatus

logger = logging.getLogger(__name__)


@dataclass
class LeftoverReport:
    """Unreferenced files, partitioned into per-unit sets and an unassigned bucket."""
    all_leftovers: list[str] = field(default_factory=list)
    per_unit: dict[str, list[str]] = field(default_factory=dict)
    unassigned: list[str] = field(default_factory=list)
    unassigned_owner: str | None = None
    unit_order: list[str] = field(default_factory=list)

    def for_unit(self, unit_id: str) -> list[str]:
        """Leftovers reported on ``unit_id``, including the unassigned bucket for its owner."""
        leftovers = list(self.per_unit.get(unit_id, []))
        if unit_id == self.unassigned_owner:
            leftovers.extend(self.unassigned)
        return leftovers

    def diagnostics_for(self, unit_id: str) -> list[Diagnostic]:
        sink = DiagnosticSink(SubjectKind.PLUGIN, unit_id=unit_id)
        if not self.all_leftovers:
            if self.unit_order and unit_id == self.unit_order[-1]:
                sink.success(unit_id, "All BPMN and FHIR resources are referenced by a plugin")
            return sink.diagnostics

        for path in self.per_unit.get(unit_id, []):
            sink.warn(DiagnosticCode.PLUGIN_DEFINITION_PROCESS_PLUGIN_RESOURCE_NOT_LOADED, path,
                      f"Resource {path} is not referenced by plugin {unit_id}")
        if unit_id == self.unassigned_owner:
            for path in self.unassigned:
                sink.warn(DiagnosticCode.PLUGIN_DEFINITION_PROCESS_PLUGIN_RESOURCE_NOT_LOADED, path,
                          f"Resource {path} is not referenced by any plugin")
        return sink.diagnostics

    def to_dict(self) -> dict:
        return {
            "allLeftovers": self.all_leftovers,
            "perUnit": self.per_unit,
            "unassigned": self.unassigned,
            "unassignedOwner": self.unassigned_owner,
        }


def referenced_paths(unit: Unit, catalog: ResourceCatalog) -> set[str]:
    """Catalog paths of the unit's declared references."""
    resolver = ReferenceResolver(catalog, unit_id=unit.id)
    paths = set()
    for reference in unit.declared_references:
        result = resolver.resolve(reference)
        if result.status == ResolutionStatus.IN_ROOT and result.path:
            paths.add(result.path)
    return paths


def owning_unit(path: str, unit_ids: Sequence[str]) -> str | None:
    """Unit whose id occurs in ``path``; the longest id wins, then input order."""
    lowered = path.lower()
    best = None
    for unit_id in unit_ids:
        if unit_id and unit_id.lower() in lowered and (best is None or len(unit_id) > len(best)):
            best = unit_id
    return best


def reconcile(
    catalog: ResourceCatalog,
    units: Sequence[Unit],
    directories: Sequence[str] = (BPMN_DIRECTORY, FHIR_DIRECTORY),
) -> LeftoverReport:
    """Compute leftovers and attribute them to units."""
    unit_ids = [unit.id for unit in units]
    report = LeftoverReport(unit_order=unit_ids, per_unit={unit_id: [] for unit_id in unit_ids})

    discovered: set[str] = set()
    for directory in directories:
        discovered |= catalog.paths_under(directory)

    referenced: set[str] = set()
    for unit in units:
        referenced |= referenced_paths(unit, catalog)

    report.all_leftovers = sorted(discovered - referenced)
    if not report.all_leftovers or not unit_ids:
        return report

    if len(unit_ids) == 1:
        report.per_unit[unit_ids[0]] = list(report.all_leftovers)
    else:
        for path in report.all_leftovers:
            owner = owning_unit(path, unit_ids)
            if owner is None:
                report.unassigned.append(path)
            else:
                report.per_unit[owner].append(path)
        if report.unassigned:
            report.unassigned_owner = unit_ids[-1]

    logger.info(f"Found {len(report.all_leftovers)} leftover resources "
                f"({len(report.unassigned)} not attributable to a plugin)")
    return report
