"""
Smart column mapping between broker CSV headers and the canonical schema.

Broker exports name their columns inconsistently ("Open Time", "Entry Date",
"Fill Price", "Side"...). For every canonical field a list of known synonyms,
ordered by specificity, is matched against the headers in four layers, each
more permissive than the last:

    1. exact          normalized header == normalized synonym
    2. contains       normalized header contains the synonym
    3. reverse        normalized header is contained in the synonym
    4. token overlap  a header token equals/contains/is contained in a synonym token

Within a layer synonyms are tried in list order and, for each synonym, the
headers in file order. After matching, a lone unclaimed "price" column
becomes the entry price, and fields claim headers in MAPPING_PRIORITY order
so that no header feeds two fields.
"""

import re
from collections import abc
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..logging import get_logger, log_with_context, ErrorCode
from ..utils import load_yaml
from .fields import FIELDS_BY_KEY, MAPPING_PRIORITY, REQUIRED_FIELD_KEYS

logger = get_logger('mapping')

FIELD_SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'entry_time': (
        'entry_time', 'entry_date', 'open_time', 'open_date',
        'order_time', 'trade_open_time', 'time_opened', 'start_time',
        'executed_at', 'timestamp', 'datetime', 'date_time',
        'date', 'time',
    ),
    'exit_time': (
        'exit_time', 'exit_date', 'close_time', 'close_date',
        'trade_close_time', 'time_closed', 'end_time', 'closed_at',
        'settled_at', 'settlement_time',
    ),
    'action': (
        'action', 'side', 'type', 'order_type', 'direction',
        'buy_sell', 'position_type', 'trade_type', 'operation',
    ),
    'quantity': (
        'quantity', 'volume', 'size', 'lots', 'shares', 'amount',
        'units', 'contracts', 'qty', 'vol', 'lot_size', 'position_size',
    ),
    'instrument': (
        'instrument', 'symbol', 'ticker', 'asset', 'product',
        'market', 'security', 'pair', 'currency_pair', 'trading_pair',
    ),
    'entry_price': (
        'entry_price', 'open_price', 'fill_price', 'execution_price',
        'avg_entry_price', 'opening_price', 'entry', 'open', 'price_open',
    ),
    'exit_price': (
        'exit_price', 'close_price', 'closing_price', 'avg_exit_price',
        'settlement_price', 'exit', 'close', 'price_close',
    ),
    'sl': (
        'sl', 'stop_loss', 'stoploss', 'stop_price', 'stop', 'stop_level',
    ),
    'target': (
        'target', 'tp', 'take_profit', 'takeprofit', 'limit_price',
        'target_price', 'profit_target',
    ),
    'commission': (
        'commission', 'commissions', 'brokerage', 'trading_fees',
        'execution_fees', 'comm', 'broker_fee',
    ),
    'fees': (
        'fees', 'swap', 'swaps', 'overnight_fee', 'financing_cost',
        'funding_fee', 'rollover', 'other_fees', 'financing', 'interest',
    ),
    'profit': (
        'profit', 'pnl', 'p&l', 'pl', 'net_pnl', 'realized_pnl',
        'gain_loss', 'profit_loss', 'result', 'outcome', 'closed_pnl',
        'net_profit', 'total_pnl',
    ),
    'market_type': (
        'market_type', 'market', 'asset_type', 'instrument_type',
        'product_type', 'category',
    ),
    'contract_multiplier': (
        'contract_multiplier', 'multiplier', 'lot_size', 'contract_size',
        'point_value', 'tick_value',
    ),
})

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def normalize_header(name: str) -> str:
    """
    Lower-case, collapse non-alphanumeric runs to '_' and trim underscores.

    Example:
        >>> normalize_header("  Open Price ($) ")
        'open_price'
    """
    return _NON_ALNUM.sub('_', str(name).lower()).strip('_')


def tokenize_header(name: str) -> List[str]:
    """Split a header into its normalized underscore-delimited tokens."""
    return [token for token in normalize_header(name).split('_') if token]


class ColumnMapping(abc.Mapping):
    """
    Read-only mapping of canonical field key -> source CSV header.

    Behaves like a plain dict for lookups and iteration (in canonical
    priority order). Built once per import.
    """

    __slots__ = ('_fields',)

    def __init__(self, fields: Optional[Mapping[str, str]] = None):
        fields = dict(fields or {})
        unknown = [key for key in fields if key not in FIELDS_BY_KEY]
        if unknown:
            raise ValueError(
                f"Unknown trade field(s) in column mapping: {', '.join(sorted(unknown))}. "
                f"Valid fields: {', '.join(MAPPING_PRIORITY)}"
            )
        ordered = {
            key: str(fields[key])
            for key in MAPPING_PRIORITY
            if key in fields and fields[key] not in (None, '')
        }
        self._fields = MappingProxyType(ordered)

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ColumnMapping({dict(self._fields)!r})"

    @property
    def source_headers(self) -> List[str]:
        return list(self._fields.values())

    def missing_required(self) -> List[str]:
        """Required canonical fields that have no source header."""
        return [key for key in REQUIRED_FIELD_KEYS if key not in self._fields]

    def has_all_required(self) -> bool:
        return not self.missing_required()

    def to_dict(self) -> Dict[str, str]:
        return dict(self._fields)


_Matcher = Callable[[str, str], bool]


def _exact(header: str, term: str) -> bool:
    return header == term


def _contains(header: str, term: str) -> bool:
    return term in header


def _reverse_contains(header: str, term: str) -> bool:
    return header in term


def _token_overlap(header: str, term: str) -> bool:
    header_tokens = [t for t in header.split('_') if t]
    term_tokens = [t for t in term.split('_') if t]
    return any(
        term_token == header_token
        or header_token in term_token
        or term_token in header_token
        for term_token in term_tokens
        for header_token in header_tokens
    )


MATCH_LAYERS: Tuple[Tuple[str, _Matcher], ...] = (
    ('exact', _exact),
    ('contains', _contains),
    ('reverse-contains', _reverse_contains),
    ('token', _token_overlap),
)


def find_best_match(field_key: str, headers: Sequence[str]) -> Optional[str]:
    """
    Find the source header for one canonical field.

    Args:
        field_key: Canonical field key
        headers: Source CSV headers in file order

    Returns:
        Matching header, or None when no layer matches
    """
    terms = [normalize_header(term) for term in FIELD_SYNONYMS.get(field_key, ())]
    # Headers that normalize to nothing (e.g. "#", "") cannot match anything
    candidates = [(header, normalize_header(header)) for header in headers]
    candidates = [(header, norm) for header, norm in candidates if norm]

    for layer_name, matcher in MATCH_LAYERS:
        for term in terms:
            for header, normalized in candidates:
                if matcher(normalized, term):
                    logger.debug(f"{layer_name} match for {field_key}: '{header}' (synonym '{term}')")
                    return header
    return None


def _apply_single_price_rule(headers: Sequence[str], mappings: Dict[str, str]) -> None:
    """Map a lone unclaimed price column to entry_price (open trades only have one)."""
    if 'entry_price' in mappings or 'exit_price' in mappings:
        return

    claimed = set(mappings.values())
    price_headers = [
        header for header in headers
        if 'price' in normalize_header(header) and header not in claimed
    ]
    if len(price_headers) == 1:
        mappings['entry_price'] = price_headers[0]
        logger.debug(f"Single price column mapped to entry_price: '{price_headers[0]}'")


def get_smart_mapping_defaults(csv_headers: Sequence[str]) -> ColumnMapping:
    """
    Propose a column mapping for the given CSV headers.

    Deterministic: the same header list always yields the same mapping. The
    result may be partial; required-field enforcement is left to the caller
    (see ColumnMapping.missing_required()).

    Args:
        csv_headers: Source CSV headers in file order

    Returns:
        ColumnMapping of canonical field key -> source header

    Example:
        >>> get_smart_mapping_defaults(["Open Time", "Side", "Ticker"]).to_dict()
        {'entry_time': 'Open Time', 'action': 'Side', 'instrument': 'Ticker'}
    """
    headers = [str(h) for h in csv_headers]
    logger.debug(f"Inferring column mapping for headers: {headers}")

    mappings: Dict[str, str] = {}
    for field_key in FIELD_SYNONYMS:
        match = find_best_match(field_key, headers)
        if match is not None:
            mappings[field_key] = match

    _apply_single_price_rule(headers, mappings)

    used_headers = set()
    final_mappings: Dict[str, str] = {}
    for field_key in MAPPING_PRIORITY:
        header = mappings.get(field_key)
        if header is not None and header not in used_headers:
            final_mappings[field_key] = header
            used_headers.add(header)
        elif header is not None:
            logger.debug(f"Header '{header}' already claimed; {field_key} left unmapped")

    mapping = ColumnMapping(final_mappings)
    logger.info(f"Mapped {len(mapping)} of {len(MAPPING_PRIORITY)} fields from {len(headers)} headers")
    return mapping


def load_mapping_override(
    source: Union[str, Path, Mapping[str, str]],
    headers: Optional[Sequence[str]] = None,
) -> ColumnMapping:
    """
    Build a user-edited mapping from a dict or a YAML file.

    Args:
        source: Mapping of field key -> header, or path to a YAML file holding one
        headers: Optional CSV headers to check the mapped columns against

    Returns:
        ColumnMapping

    Raises:
        ValueError: On unknown field keys or headers missing from the CSV
        FileNotFoundError: If the YAML file doesn't exist
    """
    if isinstance(source, (str, Path)):
        data = load_yaml(source)
        # Accept both a bare mapping and one nested under `mapping:`
        if isinstance(data.get('mapping'), dict):
            data = data['mapping']
    else:
        data = dict(source)

    try:
        mapping = ColumnMapping(data)
    except ValueError:
        log_with_context(logger, 'ERROR', "Invalid column mapping override",
                         error_code=ErrorCode.MAPPING_INVALID, fields=sorted(data))
        raise

    if headers is not None:
        known = set(headers)
        absent = {key: header for key, header in mapping.items() if header not in known}
        if absent:
            log_with_context(logger, 'ERROR', "Mapping refers to columns missing from the CSV",
                             error_code=ErrorCode.MAPPING_INVALID, absent=absent)
            raise ValueError(
                "Mapped columns not found in CSV headers: "
                + ', '.join(f"{key} -> '{header}'" for key, header in absent.items())
            )
    return mapping
