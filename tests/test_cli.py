import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from services.roi.cli import main


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with redirect_stdout(out), redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    return code, out.getvalue(), err.getvalue()


class TestCLI(unittest.TestCase):
    def test_defaults_json(self):
        code, out, _ = _run([])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertAlmostEqual(data["annualSavings"], 58_800, places=4)
        self.assertEqual(len(data["scenarioResults"]), 3)

    def test_report_spanish(self):
        code, out, _ = _run(["--report", "--locale", "es"])
        self.assertEqual(code, 0)
        self.assertIn("# Resultados", out)
        self.assertIn("$58.800", out)

    def test_inputs_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "inputs.json")
            with open(path, "w") as f:
                json.dump({"investmentYear1": 0}, f)
            code, out, _ = _run([path])
        self.assertEqual(code, 0)
        self.assertIsNone(json.loads(out)["roi2yBase"])

    def test_bad_arguments(self):
        code, _, err = _run(["--locale", "xx"])
        self.assertEqual(code, 2)
        self.assertIn("usage:", err)
        self.assertIn("unsupported locale: xx", err)
        code, _, _ = _run(["--bogus"])
        self.assertEqual(code, 2)
        code, _, err = _run(["does-not-exist.json"])
        self.assertEqual(code, 2)
        self.assertIn("usage:", err)
        code, _, _ = _run(["a.json", "b.json"])
        self.assertEqual(code, 2)

    def test_help(self):
        code, out, _ = _run(["--help"])
        self.assertEqual(code, 0)
        self.assertIn("--report", out)
        self.assertIn("--locale", out)


if __name__ == "__main__":
    unittest.main()
