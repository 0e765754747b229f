"""Mapping from element kinds to supported interactions."""

import logging
from typing import Dict, NamedTuple, Optional, Tuple

from src.models.page_models import CandidateElement, Capability, ElementKind

logger = logging.getLogger(__name__)


CAPABILITY_TABLE: Dict[ElementKind, Tuple[Capability, ...]] = {
    ElementKind.TEXT_INPUT: (Capability.SET_VALUE, Capability.CLICK),
    ElementKind.TEXTAREA: (Capability.SET_VALUE, Capability.CLICK),
    ElementKind.CHECKBOX: (Capability.CLICK,),
    ElementKind.RADIO: (Capability.CLICK,),
    ElementKind.BUTTON: (Capability.CLICK,),
    ElementKind.SUBMIT: (Capability.CLICK,),
    ElementKind.ANCHOR: (Capability.CLICK,),
    ElementKind.SELECT: (Capability.SELECT, Capability.CLICK),
    ElementKind.OTHER: (Capability.CLICK,),
}


class Classification(NamedTuple):
    """Capabilities of a candidate plus an optional diagnostic."""

    capabilities: Tuple[Capability, ...]
    warning: Optional[str] = None


class CapabilityClassifier:
    """Classify candidates into capability sets.

    The table covers every ElementKind; kinds the generator cannot interpret
    more precisely (OTHER) fall back to click and carry a warning.
    """

    def __init__(self, table: Optional[Dict[ElementKind, Tuple[Capability, ...]]] = None):
        self.table = table or CAPABILITY_TABLE

    def classify(self, candidate: CandidateElement) -> Classification:
        capabilities = self.table[candidate.kind]

        if candidate.kind is ElementKind.OTHER:
            described = candidate.tag
            if candidate.type:
                described += f' type="{candidate.type}"'
            if candidate.role:
                described += f' role="{candidate.role}"'
            warning = f"unrecognized interactive element <{described}>, exposing click only"
            logger.warning(f"Candidate #{candidate.scan_index}: {warning}")
            return Classification(capabilities, warning)

        return Classification(capabilities)
