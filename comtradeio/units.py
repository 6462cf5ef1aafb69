"""
Unit handling for COMTRADE channels.

Channel units are free text in configuration files ('kV', 'A', 'Volts',
'pu', ...). :func:`ensure_signal_units` maps them to :mod:`quantities`
units and falls back to dimensionless for anything it does not understand.
"""

import logging

import quantities as pq

logger = logging.getLogger(__name__)

unit_convert = {
    "Volts": "V",
    "volts": "V",
    "Volt": "V",
    "volt": "V",
    "Amps": "A",
    "amps": "A",
    "Amp": "A",
    "amp": "A",
    "deg": "degree",
    "Deg": "degree",
    "sec": "s",
}


def ensure_signal_units(units):
    # test units
    units = units.replace(" ", "")
    if units == "":
        return pq.dimensionless
    if units in unit_convert:
        units = unit_convert[units]
    try:
        units = pq.Quantity(1, units)
    except Exception:
        logger.warning(f'Units "{units}" not understood, using dimensionless instead')
        units = pq.dimensionless
    return units

