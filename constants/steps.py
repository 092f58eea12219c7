from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final, Mapping


class StepId(StrEnum):
    """Form sections in the order they are filled in."""

    PERSONAL = "personal"
    ADDRESS = "address"
    PAYMENT = "payment"


STEP_ORDER: Final[tuple[StepId, ...]] = (StepId.PERSONAL, StepId.ADDRESS, StepId.PAYMENT)

STEP_LABELS: Final[Mapping[StepId, str]] = MappingProxyType(
    {
        StepId.PERSONAL: "Personal Info",
        StepId.ADDRESS: "Address",
        StepId.PAYMENT: "Payment Info",
    }
)

# ``payment`` only offers the final submit.
SAVE_MESSAGES: Final[Mapping[StepId, str]] = MappingProxyType(
    {
        StepId.PERSONAL: "Saved Personal Data",
        StepId.ADDRESS: "Saved Address Data",
    }
)
