"""
Canonical trade schema for CSV imports.

Every import converges to the fixed set of TRADELENS_FIELDS. Each field
carries a FieldKind that selects how its raw cells are coerced.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple


class FieldKind(str, Enum):
    """Coercion family of a canonical field."""
    TIMESTAMP = 'timestamp'
    ACTION = 'action'
    NUMBER = 'number'
    INSTRUMENT = 'instrument'
    TEXT = 'text'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TradelensField:
    """Descriptor of one canonical trade field."""
    key: str
    label: str
    required: bool
    kind: FieldKind
    description: str = ""


TRADELENS_FIELDS: Tuple[TradelensField, ...] = (
    TradelensField('entry_time', 'Entry Time', True, FieldKind.TIMESTAMP,
                   'When the trade was opened'),
    TradelensField('exit_time', 'Exit Time', False, FieldKind.TIMESTAMP,
                   'When the trade was closed'),
    TradelensField('action', 'Action', True, FieldKind.ACTION, 'Buy or Sell'),
    TradelensField('quantity', 'Quantity', True, FieldKind.NUMBER,
                   'Number of units traded'),
    TradelensField('instrument', 'Instrument', True, FieldKind.INSTRUMENT,
                   'Trading symbol/instrument'),
    TradelensField('entry_price', 'Entry Price', True, FieldKind.NUMBER, 'Price at entry'),
    TradelensField('exit_price', 'Exit Price', False, FieldKind.NUMBER, 'Price at exit'),
    TradelensField('sl', 'Stop Loss', False, FieldKind.NUMBER, 'Stop loss price'),
    TradelensField('target', 'Target', False, FieldKind.NUMBER, 'Target price'),
    TradelensField('commission', 'Commission', False, FieldKind.NUMBER, 'Commission paid'),
    TradelensField('fees', 'Fees', False, FieldKind.NUMBER, 'Additional fees'),
    TradelensField('profit', 'Profit/Loss', False, FieldKind.NUMBER,
                   'Profit or loss amount (used for contract multiplier calculation)'),
    TradelensField('market_type', 'Market Type', False, FieldKind.TEXT,
                   'Type of market (Stock, Forex, etc.)'),
    TradelensField('contract_multiplier', 'Contract Multiplier', False, FieldKind.NUMBER,
                   'Contract multiplier (calculated when profit is provided)'),
)

FIELDS_BY_KEY: Dict[str, TradelensField] = {f.key: f for f in TRADELENS_FIELDS}

FIELD_KEYS: Tuple[str, ...] = tuple(f.key for f in TRADELENS_FIELDS)

REQUIRED_FIELD_KEYS: Tuple[str, ...] = tuple(f.key for f in TRADELENS_FIELDS if f.required)

# Order in which fields claim source headers during de-duplication
MAPPING_PRIORITY: Tuple[str, ...] = (
    'entry_time', 'exit_time', 'action', 'quantity', 'instrument',
    'entry_price', 'exit_price', 'profit', 'commission', 'fees',
    'sl', 'target', 'market_type', 'contract_multiplier',
)

# Column order of the formatted export
EXPORT_COLUMNS: Tuple[str, ...] = (
    'entry_price', 'exit_price', 'entry_time', 'exit_time', 'action', 'quantity',
    'contract_multiplier', 'instrument', 'sl', 'target', 'commission', 'fees', 'market_type',
)

VALID_ACTIONS: FrozenSet[str] = frozenset({'buy', 'sell'})
DEFAULT_ACTION: str = 'buy'

MARKET_TYPES: Tuple[str, ...] = (
    'Stock', 'Forex', 'Crypto', 'Options', 'Futures', 'Commodities', 'Indices',
)


def get_field(key: str) -> TradelensField:
    """
    Look up a canonical field by key.

    Raises:
        KeyError: If the key is not part of the schema
    """
    try:
        return FIELDS_BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown trade field '{key}'. Valid fields: {', '.join(FIELD_KEYS)}") from None
