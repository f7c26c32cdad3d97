from dataclasses import dataclass, field
from typing import Dict, List

from authaudit.config import AuditSettings, debug_printer
from authaudit.ir.errors import Finding
from authaudit.ir.graph import SchemaGraph
from authaudit.ir.markers import MarkerTable
from authaudit.ir.registry import RequirementRegistry
from authaudit.pipeline.extractor import RequirementExtractor


@dataclass
class AuditContext:
    # Raw input (authoritative, never mutated)
    graph: SchemaGraph
    markers: MarkerTable
    settings: AuditSettings = field(default_factory=AuditSettings)

    # Built by the registry stage
    registry: RequirementRegistry = field(default_factory=RequirementRegistry)
    interfaces_that_need_checking: Dict[str, None] = field(default_factory=dict)
    fields_with_cross_service_dependency: Dict[str, None] = field(default_factory=dict)
    fields_with_context_forwarding: Dict[str, None] = field(default_factory=dict)

    # Accumulated by every stage, in stage order
    findings: List[Finding] = field(default_factory=list)

    def __post_init__(self):
        self.log = debug_printer(self.settings.debug)
        self.extractor = RequirementExtractor(self.markers, log=self.log)

    def add_finding(self, finding: Finding):
        self.findings.append(finding)

    def debug(self, tag: str, message: str):
        self.log(tag, message)
