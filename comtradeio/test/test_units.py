"""
Tests of comtradeio.units
"""

import unittest

import quantities as pq

from comtradeio.units import ensure_signal_units


class TestEnsureSignalUnits(unittest.TestCase):
    def test__known_units(self):
        self.assertEqual(ensure_signal_units("kV").rescale(pq.V).magnitude, 1000.0)
        self.assertEqual(ensure_signal_units("A").dimensionality, pq.A.dimensionality)

    def test__aliases(self):
        self.assertEqual(ensure_signal_units("Volts").dimensionality, pq.V.dimensionality)
        self.assertEqual(ensure_signal_units("Amps").dimensionality, pq.A.dimensionality)
        self.assertEqual(ensure_signal_units("sec").dimensionality, pq.s.dimensionality)

    def test__blank(self):
        self.assertIs(ensure_signal_units(""), pq.dimensionless)
        self.assertIs(ensure_signal_units("  "), pq.dimensionless)

    def test__unknown(self):
        with self.assertLogs("comtradeio.units", level="WARNING"):
            self.assertIs(ensure_signal_units("xyz_per_blob"), pq.dimensionless)


if __name__ == "__main__":
    unittest.main()
