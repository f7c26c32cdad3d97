from typing import Optional

from authaudit.config import AuditSettings
from authaudit.ir.graph import SchemaGraph
from authaudit.ir.markers import MarkerTable
from authaudit.pipeline.context import AuditContext
from authaudit.pipeline.multi_origin_stage import MultiOriginStage
from authaudit.pipeline.polymorphism_stage import PolymorphismStage
from authaudit.pipeline.registry_stage import RegistryBuildStage
from authaudit.pipeline.renamed_marker_stage import RenamedMarkerStage
from authaudit.pipeline.report import AuditReport
from authaudit.pipeline.transitive_stage import TransitiveExposureStage, ValidatorFactory


class AuditController:
    """
    Runs every audit stage over one graph snapshot.

    Stages never stop the run: fixing one defect must not hide another, so
    the verdict is the AND of all stage results and every finding is kept.
    """

    def __init__(
        self,
        settings: Optional[AuditSettings] = None,
        validator_factory: Optional[ValidatorFactory] = None,
    ):
        self.settings = settings or AuditSettings.from_env()

        self.stages = [
            RegistryBuildStage(),        # must run first, everything reads the registry
            MultiOriginStage(),
            RenamedMarkerStage(),
            PolymorphismStage(),
            TransitiveExposureStage(validator_factory),
        ]

    def run(self, graph: SchemaGraph, markers: Optional[MarkerTable] = None) -> AuditReport:
        # fresh context per run, nothing carries over between runs
        context = AuditContext(
            graph=graph,
            markers=markers if markers is not None else MarkerTable.for_graph(graph),
            settings=self.settings,
        )
        context.debug("Controller", f"Markers: {[h.name for h in context.markers]}")

        is_secure = True
        for stage in self.stages:
            result = stage.run(context)
            context.debug("Controller", f"{stage.__class__.__name__}: valid={result.is_valid}")
            is_secure = result.is_valid and is_secure

        is_secure = is_secure and not any(f.is_error for f in context.findings)

        return AuditReport(
            is_secure=is_secure,
            findings=list(context.findings),
            stats={
                "interfaces": len(graph.interfaces),
                "objects": len(graph.objects),
                "requirements": len(context.registry),
                "interfaces_checked": len(context.interfaces_that_need_checking),
                "fields_with_requires": len(context.fields_with_cross_service_dependency),
                "fields_with_context": len(context.fields_with_context_forwarding),
            },
        )


def audit_graph(
    graph: SchemaGraph,
    settings: Optional[AuditSettings] = None,
    markers: Optional[MarkerTable] = None,
) -> AuditReport:
    """Convenience function to audit a graph."""
    return AuditController(settings=settings).run(graph, markers=markers)
