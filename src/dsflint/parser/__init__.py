"""Parsers turning BPMN and FHIR files into the typed document model."""

from dsflint.parser.bpmn import BpmnParser
from dsflint.parser.documents import DocumentParser, DocumentType
from dsflint.parser.fhir import FhirParser

__all__ = ["BpmnParser", "DocumentParser", "DocumentType", "FhirParser"]
