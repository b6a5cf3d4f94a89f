"""
CSV import configuration.

Provides the ImportConfig dataclass that carries the tunable constants of the
import pipeline.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from .core import load_settings

# Pipeline defaults (used when settings.yaml omits a value)
DEFAULT_PREVIEW_ROWS: int = 1000
DEFAULT_MAX_CONTRACT_MULTIPLIER: float = 1_000_000
DEFAULT_MULTIPLIER_PRECISION: int = 10
DEFAULT_DATE_ORDER: str = 'month_first'

DateOrder = Literal['month_first', 'day_first']
VALID_DATE_ORDERS = frozenset({'month_first', 'day_first'})


@dataclass(frozen=True)
class ImportConfig:
    """
    Configuration container for CSV import settings.

    Attributes:
        preview_rows: Row cap applied by read_csv_headers()
        max_contract_multiplier: Largest plausible derived multiplier
        multiplier_precision: Decimal places kept on derived multipliers
        date_order: How NN-NN-YYYY dates are read ('month_first' or 'day_first')
    """
    preview_rows: int = DEFAULT_PREVIEW_ROWS
    max_contract_multiplier: float = DEFAULT_MAX_CONTRACT_MULTIPLIER
    multiplier_precision: int = DEFAULT_MULTIPLIER_PRECISION
    date_order: DateOrder = DEFAULT_DATE_ORDER

    def __post_init__(self) -> None:
        if self.preview_rows <= 0:
            raise ValueError(f"preview_rows must be positive, got {self.preview_rows}")
        if self.max_contract_multiplier <= 0:
            raise ValueError(
                f"max_contract_multiplier must be positive, got {self.max_contract_multiplier}"
            )
        if self.multiplier_precision < 0:
            raise ValueError(
                f"multiplier_precision must be non-negative, got {self.multiplier_precision}"
            )
        if self.date_order not in VALID_DATE_ORDERS:
            raise ValueError(
                f"date_order must be one of {sorted(VALID_DATE_ORDERS)}, got '{self.date_order}'"
            )

    @property
    def day_first(self) -> bool:
        """True when ambiguous dash dates should be read day-first."""
        return self.date_order == 'day_first'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImportConfig':
        """Build a config from a `csv_import` settings section."""
        return cls(
            preview_rows=int(data.get('preview_rows', DEFAULT_PREVIEW_ROWS)),
            max_contract_multiplier=float(
                data.get('max_contract_multiplier', DEFAULT_MAX_CONTRACT_MULTIPLIER)
            ),
            multiplier_precision=int(data.get('multiplier_precision', DEFAULT_MULTIPLIER_PRECISION)),
            date_order=str(data.get('date_order', DEFAULT_DATE_ORDER)).lower(),
        )

    @classmethod
    def from_settings(cls, path: Optional[Path] = None) -> 'ImportConfig':
        """
        Build a config from settings.yaml.

        Raises:
            FileNotFoundError: If the settings file doesn't exist
            ValueError: If a setting holds an invalid value
        """
        settings = load_settings(path)
        return cls.from_dict(settings.get('csv_import') or {})
