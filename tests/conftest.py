"""Shared fixtures: miniature plugin projects written to tmp_path."""

import json
from pathlib import Path

import pytest

from dsflint.authorization import AuthorizationCodeCache
from dsflint.constants import ApiVersion
from dsflint.diagnostics import ErrorCollector
from dsflint.resources.catalog import build_catalog
from dsflint.resources.resolver import ReferenceResolver
from dsflint.validation.framework import RuleContext

BPMN_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" '
    'xmlns:camunda="http://camunda.org/schema/1.0/bpmn" id="definitions">\n'
)


def bpmn_document(process_body: str, declarations: str = "", process_id: str = "dsfdev_ping",
                  executable: str = "true", history_time_to_live: str | None = "P30D") -> str:
    ttl = f' camunda:historyTimeToLive="{history_time_to_live}"' if history_time_to_live else ""
    return (
        BPMN_HEADER
        + f'  <bpmn:process id="{process_id}" isExecutable="{executable}"{ttl}>\n'
        + process_body
        + "\n  </bpmn:process>\n"
        + declarations
        + "\n</bpmn:definitions>\n"
    )


def fhir_document(resource_type: str, body: str) -> str:
    return f'<{resource_type} xmlns="http://hl7.org/fhir">\n{body}\n</{resource_type}>\n'


PING_PROFILE = "http://dsf.dev/fhir/StructureDefinition/task-start-ping"
PING_PROCESS_URL = "http://dsf.dev/bpe/Process/ping"

START_PING_STRUCTURE_DEFINITION = fhir_document("StructureDefinition", f"""
  <meta>
    <tag><system value="http://dsf.dev/fhir/CodeSystem/read-access-tag"/><code value="ALL"/></tag>
  </meta>
  <url value="{PING_PROFILE}"/>
  <version value="#{{version}}"/>
  <date value="#{{date}}"/>
  <status value="unknown"/>
  <differential>
    <element id="Task.instantiatesCanonical">
      <path value="Task.instantiatesCanonical"/>
      <fixedCanonical value="{PING_PROCESS_URL}|#{{version}}"/>
    </element>
    <element id="Task.input">
      <path value="Task.input"/>
      <min value="1"/>
      <max value="2"/>
    </element>
    <element id="Task.input:message-name">
      <path value="Task.input"/>
      <sliceName value="message-name"/>
      <min value="1"/>
      <max value="1"/>
    </element>
    <element id="Task.input:message-name.value[x]">
      <path value="Task.input.value[x]"/>
      <fixedString value="startPing"/>
    </element>
  </differential>""")

PING_ACTIVITY_DEFINITION = fhir_document("ActivityDefinition", f"""
  <meta>
    <profile value="http://dsf.dev/fhir/StructureDefinition/activity-definition"/>
    <tag><system value="http://dsf.dev/fhir/CodeSystem/read-access-tag"/><code value="ALL"/></tag>
  </meta>
  <extension url="http://dsf.dev/fhir/StructureDefinition/extension-process-authorization">
    <extension url="message-name"><valueString value="startPing"/></extension>
    <extension url="task-profile"><valueCanonical value="{PING_PROFILE}|#{{version}}"/></extension>
    <extension url="requester">
      <valueCoding>
        <system value="http://dsf.dev/fhir/CodeSystem/process-authorization"/>
        <code value="LOCAL_ALL"/>
      </valueCoding>
    </extension>
    <extension url="recipient">
      <valueCoding>
        <system value="http://dsf.dev/fhir/CodeSystem/process-authorization"/>
        <code value="LOCAL_ALL"/>
      </valueCoding>
    </extension>
  </extension>
  <url value="{PING_PROCESS_URL}"/>
  <version value="#{{version}}"/>
  <status value="unknown"/>
  <kind value="Task"/>""")

PING_PROCESS_BODY = f"""
    <bpmn:startEvent id="start" name="start">
      <bpmn:outgoing>flow1</bpmn:outgoing>
    </bpmn:startEvent>
    <bpmn:sendTask id="sendTask1" name="send ping" camunda:class="dev.example.SendPing">
      <bpmn:extensionElements>
        <camunda:field name="profile"><camunda:string>{PING_PROFILE}|#{{version}}</camunda:string></camunda:field>
        <camunda:field name="messageName"><camunda:string>startPing</camunda:string></camunda:field>
        <camunda:field name="instantiatesCanonical">
          <camunda:string>{PING_PROCESS_URL}|#{{version}}</camunda:string>
        </camunda:field>
      </bpmn:extensionElements>
    </bpmn:sendTask>
    <bpmn:endEvent id="end" name="end"/>
    <bpmn:sequenceFlow id="flow1" sourceRef="start" targetRef="sendTask1"/>
    <bpmn:sequenceFlow id="flow2" sourceRef="sendTask1" targetRef="end"/>"""


@pytest.fixture
def write_file():
    """Factory writing ``content`` to ``root / relative`` and returning the path."""
    def _write(root: Path, relative: str, content: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def ping_project(tmp_path, write_file):
    """A single plugin project with a ping process, its profile and ActivityDefinition."""
    resources = tmp_path / "src" / "main" / "resources"
    write_file(resources, "bpe/ping.bpmn", bpmn_document(PING_PROCESS_BODY))
    write_file(resources, "fhir/StructureDefinition/task-start-ping.xml", START_PING_STRUCTURE_DEFINITION)
    write_file(resources, "fhir/ActivityDefinition/ping.xml", PING_ACTIVITY_DEFINITION)
    write_file(tmp_path, "dsf-plugin.json", json.dumps({
        "id": "dsf-plugin-ping",
        "apiVersion": "v2",
        "processModels": ["bpe/ping.bpmn"],
        "fhirResources": {
            "dsfdev_ping": [
                "fhir/ActivityDefinition/ping.xml",
                "fhir/StructureDefinition/task-start-ping.xml",
            ]
        },
    }))
    return tmp_path


@pytest.fixture
def make_context():
    """Factory for a RuleContext over a catalog of ``resource_root``."""
    def _make(resource_root: Path, introspector=None, api_version: ApiVersion = ApiVersion.V2,
              codes: AuthorizationCodeCache | None = None, errors: ErrorCollector | None = None) -> RuleContext:
        catalog = build_catalog(resource_root)
        if codes is None:
            codes = AuthorizationCodeCache()
            codes.seed(catalog.resource_root)
            codes.seal()
        return RuleContext(
            unit_id="unit",
            api_version=api_version,
            catalog=catalog,
            resolver=ReferenceResolver(catalog),
            codes=codes,
            introspector=introspector,
            errors=errors,
        )
    return _make
