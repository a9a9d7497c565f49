import math
import unittest
from services.roi.assumptions import (
    DEFAULT_INPUTS, Scenario, inputs_from_dict, inputs_to_dict, validate_inputs
)


class TestDefaults(unittest.TestCase):
    def test_default_configuration(self):
        i = DEFAULT_INPUTS
        self.assertEqual(i.revenue, 14_000_000)
        self.assertEqual(i.investment_year1, 50_000)
        self.assertEqual([s.name for s in i.scenarios], ["A", "B", "C"])
        validate_inputs(i)  # should not raise

    def test_replace_returns_new_value(self):
        j = DEFAULT_INPUTS.replace(revenue=1.0)
        self.assertEqual(j.revenue, 1.0)
        self.assertEqual(DEFAULT_INPUTS.revenue, 14_000_000)


class TestFromDict(unittest.TestCase):
    def test_camel_and_snake_keys(self):
        i = inputs_from_dict({"marketingPct": 0.1, "gross_margin": 0.5})
        self.assertEqual(i.marketing_pct, 0.1)
        self.assertEqual(i.gross_margin, 0.5)
        self.assertEqual(i.revenue, DEFAULT_INPUTS.revenue)

    def test_scenarios_replace_base(self):
        i = inputs_from_dict({"scenarios": [{"name": "X", "salesUplift": "0.02"}]})
        self.assertEqual(i.scenarios, (Scenario("X", 0.0, 0.02),))

    def test_unknown_keys_ignored(self):
        self.assertEqual(inputs_from_dict({"locale": "es-ES"}), DEFAULT_INPUTS)

    def test_bad_values(self):
        with self.assertRaises(ValueError):
            inputs_from_dict({"revenue": "lots"})
        with self.assertRaises(ValueError):
            inputs_from_dict({"revenue": True})
        with self.assertRaises(ValueError):
            inputs_from_dict({"scenarios": {"name": "A"}})
        with self.assertRaises(ValueError):
            inputs_from_dict({"scenarios": [{"salesUplift": 0.1}]})

    def test_to_dict(self):
        d = inputs_to_dict(DEFAULT_INPUTS)
        self.assertEqual(d["marketing_pct"], 0.07)
        self.assertEqual(d["scenarios"][0], {"name": "A", "perf_uplift": 0.05, "sales_uplift": 0.0025})
        self.assertEqual(inputs_from_dict(d), DEFAULT_INPUTS)


class TestValidate(unittest.TestCase):
    def test_fraction_above_one_allowed(self):
        validate_inputs(DEFAULT_INPUTS.replace(replacement_pct=1.5, marketing_pct=2.0))

    def test_rejects_non_finite(self):
        for v in (math.nan, math.inf, -math.inf):
            with self.assertRaises(ValueError):
                validate_inputs(DEFAULT_INPUTS.replace(revenue=v))

    def test_rejects_negative(self):
        with self.assertRaises(ValueError):
            validate_inputs(DEFAULT_INPUTS.replace(investment_year1=-1.0))
        with self.assertRaises(ValueError):
            validate_inputs(DEFAULT_INPUTS.replace(scenarios=(Scenario("A", 0.0, -0.1),)))

    def test_duplicate_scenario_names(self):
        with self.assertRaises(ValueError):
            validate_inputs(DEFAULT_INPUTS.replace(scenarios=(Scenario("A", 0, 0), Scenario("A", 0, 0.1))))

    def test_blank_scenario_name(self):
        with self.assertRaises(ValueError):
            validate_inputs(DEFAULT_INPUTS.replace(scenarios=(Scenario(" ", 0, 0),)))


if __name__ == '__main__':
    unittest.main()
