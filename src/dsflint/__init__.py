"""dsflint - Cross-document linter for DSF process plugins.

dsflint checks BPMN process models and the FHIR resources they reference
(ActivityDefinitions, StructureDefinitions, Questionnaires, CodeSystems,
ValueSets, Tasks) and reports graded diagnostics per plugin unit.
"""

__version__ = "0.1.0"
__author__ = "dsf-linter contributors"
__email__ = "linter@dsf.dev"
__description__ = "Cross-document linter for DSF process plugins"

from dsflint.config import LinterConfig
from dsflint.engine import validate_units

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "LinterConfig",
    "validate_units",
]
