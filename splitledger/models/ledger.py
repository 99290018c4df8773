"""
Core Ledger Models

Participants and tasks are plain records keyed by name. They refer to
each other by NAME only, never by object reference; the EntityStore
owns both mappings and resolves names at the point of use.

Money is stored as integer minor units (cents). Conversion from the
decimal text the user types happens once, in parse_amount().
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from splitledger.errors import InvalidAmountError


# =============================================================================
# CONSTANTS
# =============================================================================

ALL_TOKEN = "all"
ALL_FLAG = "-a"

# Tokens with a special meaning on the command line, never entity names
RESERVED_NAMES = frozenset({ALL_TOKEN, ALL_FLAG})

MINOR_UNITS = 100
CENT = Decimal("0.01")

# Largest single amount in minor units (10 trillion major units). Keeps every
# sum the calculator forms well inside the 28-digit default Decimal context.
MAX_MINOR = 10 ** 15
MAX_AMOUNT = Decimal(MAX_MINOR) / MINOR_UNITS


class AssociationPolicy(str, Enum):
    """
    What associating a task's owner with that task does.

    The owner is always a participant already, so the only question is
    whether the request is silently accepted or reported.
    """
    IGNORE = "ignore"
    REJECT = "reject"


# =============================================================================
# ENTITIES
# =============================================================================

class Participant(BaseModel):
    """A named party who may owe or be owed money."""
    model_config = ConfigDict(validate_assignment=False)

    name: str = Field(..., min_length=1)
    tasks: set[str] = Field(
        default_factory=set,
        description="Tasks whose cost this participant shares"
    )
    paid_tasks: set[str] = Field(
        default_factory=set,
        description="Tasks this participant fronted the money for"
    )
    payments: list[int] = Field(
        default_factory=list,
        description="Direct transfers in minor units; positive = paid out"
    )
    cached_balance: Optional[Decimal] = Field(
        default=None,
        exclude=True,
        description="Last computed balance, None once invalidated"
    )

    def invalidate(self) -> None:
        self.cached_balance = None


class Task(BaseModel):
    """A shared expense with exactly one paying owner."""

    name: str = Field(..., min_length=1)
    owner: str = Field(..., min_length=1)
    participants: set[str] = Field(default_factory=set)
    cost: int = Field(..., ge=0, le=MAX_MINOR, description="Cost in minor units")


# =============================================================================
# AMOUNTS
# =============================================================================

def is_reserved(name: str) -> bool:
    return name in RESERVED_NAMES


def in_range(minor: int) -> bool:
    """Whether a minor-unit amount (of either sign) is within MAX_MINOR."""
    return -MAX_MINOR <= minor <= MAX_MINOR


def round_minor(value: Decimal) -> int:
    """Round a (fractional) minor-unit amount to the nearest whole unit, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_amount(text: str) -> int:
    """
    Parse decimal text in major units into integer minor units.

    "30" -> 3000, "12.345" -> 1235. Rejects anything non-numeric,
    non-finite, negative or above MAX_AMOUNT with InvalidAmountError.
    """
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise InvalidAmountError(str(text))

    if not value.is_finite():
        raise InvalidAmountError(text)
    if value < 0:
        raise InvalidAmountError(text, f"Amount cannot be negative: {text}")
    if value > MAX_AMOUNT:
        raise InvalidAmountError(text, f"Amount cannot exceed {MAX_AMOUNT}: {text}")

    return round_minor(value * MINOR_UNITS)


def to_major(minor: int) -> Decimal:
    """Minor units -> major units with two decimal places."""
    return (Decimal(minor) / MINOR_UNITS).quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Render a major-unit amount the way the console shows money."""
    return f"{amount.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"
