"""Envelope pipeline registry: one EnvelopeSteps value per dialect.

WHY: The encoder, CLI and HTTP API need a single lookup from a dialect
identifier to its envelope steps. A central dict makes adding a dialect
trivial: write the steps module, import it here, add one line.

RULES:
- Keys match the identifiers in core.separators.DIALECTS exactly
- Values are EnvelopeSteps instances (immutable, shareable)
"""

from __future__ import annotations

from typing import Dict

from edi_envelope.core.envelope import EnvelopeSteps
from edi_envelope.dialects.edifact import EDIFACT_STEPS
from edi_envelope.dialects.x12 import X12_STEPS

PIPELINES: Dict[str, EnvelopeSteps] = {
    "edifact": EDIFACT_STEPS,
    "x12": X12_STEPS,
}
