"""
Tests for contract multiplier derivation.
"""

# Standard library imports
import math
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.csv_import import calculate_contract_multiplier


class TestCalculateContractMultiplier:
    """Test calculate_contract_multiplier()."""

    @pytest.mark.unit
    def test_long_trade_identity(self):
        """profit 150 net of 7 in costs over a 10 point move on 10 units."""
        result = calculate_contract_multiplier(150, 5, 2, 100, 110, 10, 'buy')
        assert result.multiplier == 1.43
        assert result.warning is None
        assert not result.is_fallback

    @pytest.mark.unit
    def test_short_trade(self):
        result = calculate_contract_multiplier(100, None, None, 110, 100, 10, 'sell')
        assert result.multiplier == 1.0
        assert result.warning is None

    @pytest.mark.unit
    def test_rounded_to_ten_places(self):
        result = calculate_contract_multiplier(1, 0, 0, 1, 4, 1, 'buy')
        assert result.multiplier == 0.3333333333

    @pytest.mark.unit
    def test_precision_is_configurable(self):
        result = calculate_contract_multiplier(1, 0, 0, 1, 4, 1, 'buy', precision=2)
        assert result.multiplier == 0.33

    @pytest.mark.unit
    @pytest.mark.parametrize("profit", [150, -150, 0, 1e12])
    def test_zero_quantity_never_raises(self, profit):
        result = calculate_contract_multiplier(profit, 5, 2, 100, 110, 0, 'buy')
        assert result.multiplier == 1
        assert result.warning == 'Quantity is zero, cannot calculate multiplier'

    @pytest.mark.unit
    @pytest.mark.parametrize("entry,exit_", [(0, 110), (100, 0)])
    def test_zero_price(self, entry, exit_):
        result = calculate_contract_multiplier(150, 0, 0, entry, exit_, 10, 'buy')
        assert result.multiplier == 1
        assert 'price is zero' in result.warning

    @pytest.mark.unit
    def test_zero_price_difference(self):
        result = calculate_contract_multiplier(150, 0, 0, 100, 100, 10, 'buy')
        assert result.multiplier == 1
        assert result.warning == 'Price difference is zero, cannot calculate multiplier'

    @pytest.mark.unit
    def test_negative_multiplier_uses_absolute_value(self):
        result = calculate_contract_multiplier(-150, 0, 0, 100, 110, 10, 'buy')
        assert result.multiplier == 1.5
        assert result.warning == 'Calculated multiplier is negative or zero'

    @pytest.mark.unit
    def test_zero_profit_flagged(self):
        result = calculate_contract_multiplier(0, 0, 0, 100, 110, 10, 'buy')
        assert result.multiplier == 0
        assert result.is_fallback

    @pytest.mark.unit
    def test_implausibly_large_multiplier(self):
        result = calculate_contract_multiplier(1e9, 0, 0, 100, 101, 1, 'buy')
        assert result.multiplier == 1
        assert result.warning == 'Calculated multiplier is unusually large'

    @pytest.mark.unit
    def test_custom_ceiling(self):
        result = calculate_contract_multiplier(5000, 0, 0, 100, 101, 1, 'buy', max_multiplier=1000)
        assert result.multiplier == 1
        assert result.is_fallback

    @pytest.mark.unit
    def test_overflow_is_not_propagated(self):
        result = calculate_contract_multiplier(1e308, -1e308, 0, 1e-308, 2e-308, 1e-10, 'buy')
        assert math.isfinite(result.multiplier)
        assert result.is_fallback
