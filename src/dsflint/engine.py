"""Validation engine: validates plugin units against a shared resource tree.

A run has three phases:

1. build the resource catalog from a single walk over the project tree;
2. seed and seal the authorization code cache;
3. validate every unit, one worker per unit, then reconcile leftovers.

Phases 1 and 2 complete before any rule runs, so the catalog and the code
cache are read-only while units are validated in parallel. Setup failures
raise; everything found in the documents is reported as diagnostics.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from dsflint.analysis.leftovers import LeftoverReport, reconcile
from dsflint.authorization import AuthorizationCodeCache
from dsflint.config import ApiVersionSetting, LinterConfig
from dsflint.constants import ApiVersion
from dsflint.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    ErrorCollector,
    ErrorContext,
    Severity,
    SubjectKind,
    UnitReport,
    ValidationStatus,
)
from dsflint.errors import NoUnitsDiscoveredError
from dsflint.introspection import TypeIntrospector
from dsflint.models.unit import Unit
from dsflint.parser import DocumentParser
from dsflint.resources.catalog import ResourceCatalog, build_catalog
from dsflint.resources.dependencies import DependencyArtifactIndex
from dsflint.resources.resolver import ReferenceResolver, ResolutionStatus
from dsflint.validation import (
    ProcessGraphRuleEngine,
    ResourceDocumentRuleEngine,
    RuleContext,
    check_unit_references,
)

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Result of one run: diagnostics per unit, leftovers and statistics."""
    per_unit: dict[str, UnitReport] = field(default_factory=dict)
    leftovers: LeftoverReport = field(default_factory=LeftoverReport)
    stats: dict[str, dict[str, int]] = field(default_factory=dict)
    collaborator_errors: ErrorCollector | None = None

    @property
    def status(self) -> ValidationStatus:
        statuses = {report.status for report in self.per_unit.values()}
        if ValidationStatus.FAIL in statuses:
            return ValidationStatus.FAIL
        if ValidationStatus.WARN in statuses:
            return ValidationStatus.WARN
        return ValidationStatus.PASS

    def diagnostics(self) -> list[Diagnostic]:
        return [d for report in self.per_unit.values() for d in report.diagnostics]

    def count(self, severity: Severity) -> int:
        return sum(report.count(severity) for report in self.per_unit.values())

    def exit_code(self, fail_on_warn: bool = False) -> int:
        """0 when clean, 1 when an Error (or a Warn with ``fail_on_warn``) was found."""
        status = self.status
        if status == ValidationStatus.FAIL:
            return 1
        if status == ValidationStatus.WARN and fail_on_warn:
            return 1
        return 0

    def to_dict(self, include_success: bool = True) -> dict:
        return {
            "status": self.status.value,
            "units": {unit_id: report.to_dict(include_success) for unit_id, report in self.per_unit.items()},
            "leftovers": self.leftovers.to_dict(),
            "stats": {"countsByKindAndSeverity": self.stats},
            "collaboratorErrors": (
                self.collaborator_errors.to_dict()["errors"] if self.collaborator_errors else []
            ),
        }


def count_by_kind_and_severity(diagnostics: Sequence[Diagnostic]) -> dict[str, dict[str, int]]:
    counts = {kind.value: {severity.value: 0 for severity in Severity} for kind in SubjectKind}
    for diagnostic in diagnostics:
        counts[diagnostic.kind.value][diagnostic.severity.value] += 1
    return counts


def seed_code_cache(
    resource_root: Path,
    units: Sequence[Unit],
    dependency_index: DependencyArtifactIndex | None = None,
    parser: DocumentParser | None = None,
    extra_codes: dict[str, list[str]] | None = None,
) -> AuthorizationCodeCache:
    """Seed a fresh code cache from every knowledge source and seal it."""
    parser = parser or DocumentParser()
    codes = AuthorizationCodeCache()
    codes.seed(resource_root, dependency_index, parser.fhir_parser, extra_codes)

    seen = {id(dependency_index)} if dependency_index is not None else set()
    for unit in units:
        if unit.dependency_index is None or id(unit.dependency_index) in seen:
            continue
        seen.add(id(unit.dependency_index))
        codes.register_dependency_code_systems(unit.dependency_index, parser.fhir_parser)

    codes.seal()
    return codes


class UnitValidator:
    """Runs every check for a single unit against the sealed shared state."""

    def __init__(
        self,
        catalog: ResourceCatalog,
        codes: AuthorizationCodeCache,
        introspector: TypeIntrospector | None = None,
        dependency_index: DependencyArtifactIndex | None = None,
        api_version: ApiVersionSetting = ApiVersionSetting.AUTO,
        errors: ErrorCollector | None = None,
    ):
        self.catalog = catalog
        self.codes = codes
        self.introspector = introspector
        self.dependency_index = dependency_index
        self.api_version = api_version
        self.errors = errors
        self.process_engine = ProcessGraphRuleEngine()
        self.resource_engine = ResourceDocumentRuleEngine()

    def validate(self, unit: Unit) -> UnitReport:
        report = UnitReport(unit.id)
        try:
            report.extend(self._validate(unit))
        except Exception as e:
            logger.error(f"Validation of unit {unit.id} aborted: {e}")
            if self.errors is not None:
                self.errors.collect_error(e, ErrorContext(operation="validate unit", component="engine",
                                                          unit_id=unit.id))
            sink = DiagnosticSink(SubjectKind.PLUGIN, unit_id=unit.id)
            sink.error(DiagnosticCode.RULE_EXECUTION_FAILED, unit.id, f"Validation of unit aborted: {e}")
            report.extend(sink.diagnostics)
        return report

    def _context(self, unit: Unit, resolver: ReferenceResolver) -> RuleContext:
        api_version = unit.api_version
        if self.api_version != ApiVersionSetting.AUTO:
            api_version = ApiVersion(self.api_version.value)
        return RuleContext(
            unit_id=unit.id,
            api_version=api_version,
            catalog=self.catalog,
            resolver=resolver,
            codes=self.codes,
            introspector=self.introspector,
            errors=self.errors,
        )

    def _validate(self, unit: Unit) -> list[Diagnostic]:
        resolver = ReferenceResolver(self.catalog, unit.dependency_index or self.dependency_index, unit.id)
        context = self._context(unit, resolver)

        diagnostics, results = check_unit_references(unit, resolver)

        process_files = list(unit.process_files)
        resource_documents = list(unit.resource_documents)
        attached = {pf.file for pf in process_files} | {doc.path for doc in resource_documents}
        for result in results:
            if result.status != ResolutionStatus.IN_ROOT or result.path in attached:
                continue
            document = result.document
            if document is None or not document.parsed:
                continue
            attached.add(result.path)
            if document.resource_kind.is_fhir:
                resource_documents.append(document)
            else:
                process_file = self.catalog.process_file(result.path)
                if process_file is not None:
                    process_files.append(process_file)

        for process_file in process_files:
            diagnostics.extend(self.process_engine.evaluate_file(process_file, context))
        for document in resource_documents:
            diagnostics.extend(self.resource_engine.evaluate(document, context))

        logger.info(f"Validated unit {unit.id}: {len(process_files)} process models, "
                    f"{len(resource_documents)} resources, {len(diagnostics)} diagnostics")
        return diagnostics


def validate_units(
    units: Sequence[Unit],
    resource_root: Path,
    *,
    project_root: Path | None = None,
    introspector: TypeIntrospector | None = None,
    dependency_index: DependencyArtifactIndex | None = None,
    parser: DocumentParser | None = None,
    config: LinterConfig | None = None,
    errors: ErrorCollector | None = None,
) -> ValidationReport:
    """Validate ``units`` against the resources below ``resource_root``.

    Raises:
        NoUnitsDiscoveredError: If ``units`` is empty
        ResourceRootNotFoundError: If the resource root does not exist
        CodeCacheSeedError: If the code cache cannot read its sources
    """
    if not units:
        raise NoUnitsDiscoveredError(project_root or resource_root)

    config = config or LinterConfig()
    parser = parser or DocumentParser()
    errors = errors or ErrorCollector()

    catalog = build_catalog(resource_root, parser, project_root, config.scan.exclude)
    for document in catalog.parse_failures():
        errors.collect_error(
            ValueError(document.parse_error),
            ErrorContext(operation="parse", component="parser", file=document.path),
        )

    codes = seed_code_cache(catalog.resource_root, units, dependency_index, parser, config.codes.extra)

    validator = UnitValidator(catalog, codes, introspector, dependency_index,
                              config.validation.api_version, errors)
    workers = min(config.validation.workers, len(units))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        reports = list(executor.map(validator.validate, units))

    leftovers = reconcile(catalog, units, (config.scan.bpmn_directory, config.scan.fhir_directory))

    report = ValidationReport(leftovers=leftovers, collaborator_errors=errors)
    for unit, unit_report in zip(units, reports):
        unit_report.extend(leftovers.diagnostics_for(unit.id))
        report.per_unit[unit.id] = unit_report
    report.stats = count_by_kind_and_severity(report.diagnostics())

    logger.info(f"Validated {len(units)} units: {report.count(Severity.ERROR)} errors, "
                f"{report.count(Severity.WARN)} warnings")
    return report
