"""Utility modules for fusionswap."""

from fusionswap.utils.log import configure_logging
from fusionswap.utils.units import format_units, parse_units

__all__ = ["configure_logging", "format_units", "parse_units"]
