import json
import logging
import os
import unittest
from unittest import mock

from services.config.env import get_api_config, get_locale_config, get_log_config
from services.config.logger import JsonFormatter


class TestEnvConfig(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            api = get_api_config()
            self.assertIsNone(api.api_key)
            self.assertEqual(api.rate_limit_n, 5)
            self.assertEqual(api.rate_limit_window_sec, 1.0)
            self.assertFalse(api.trust_forwarded_for)
            self.assertEqual(get_locale_config().default_locale, "en-US")
            self.assertEqual(get_log_config().level, "INFO")

    def test_overrides(self):
        env = {"API_KEY": "k", "RATE_LIMIT_N": "3", "RATE_LIMIT_WINDOW_SEC": "2.5",
               "ROI_DEFAULT_LOCALE": "es-ES", "ROI_LOG_LEVEL": "debug",
               "TRUST_X_FORWARDED_FOR": "true"}
        with mock.patch.dict(os.environ, env, clear=True):
            api = get_api_config()
            self.assertEqual((api.api_key, api.rate_limit_n, api.rate_limit_window_sec), ("k", 3, 2.5))
            self.assertTrue(api.trust_forwarded_for)
            self.assertEqual(get_locale_config().default_locale, "es-ES")
            self.assertEqual(get_log_config().level, "DEBUG")


class TestJsonFormatter(unittest.TestCase):
    def test_format(self):
        rec = logging.LogRecord("services.api", logging.WARNING, __file__, 1, "rejected %s", ("x",), None)
        data = json.loads(JsonFormatter().format(rec))
        self.assertEqual(data["level"], "warning")
        self.assertEqual(data["logger"], "services.api")
        self.assertEqual(data["message"], "rejected x")
        self.assertIn("ts", data)


if __name__ == "__main__":
    unittest.main()
