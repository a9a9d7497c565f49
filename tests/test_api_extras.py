import time
from collections import deque
import unittest
import services.api.server as server
from services.api.server import app

class TestAPIExtras(unittest.TestCase):
    def setUp(self):
        app.testing = True
        # Clear API key and rate limiter state to avoid cross-test leakage
        app.config['API_KEY'] = None
        app.config['RATE_LIMIT_N'] = 0
        app.config['RATE_LIMIT_WINDOW_SEC'] = 1.0
        app.config['TRUST_X_FORWARDED_FOR'] = False
        server._recent.clear()
        self.client = app.test_client()

    def test_openapi_endpoint(self):
        rv = self.client.get('/openapi.json')
        self.assertEqual(rv.status_code, 200)
        spec = rv.get_json()
        self.assertIn('openapi', spec)
        self.assertIn('/calculate', spec.get('paths', {}))

    def test_rate_limit_post_calculate(self):
        app.config['RATE_LIMIT_N'] = 1
        app.config['RATE_LIMIT_WINDOW_SEC'] = 10.0
        rv1 = self.client.post('/calculate', json={})
        self.assertEqual(rv1.status_code, 200)
        rv2 = self.client.post('/calculate', json={})
        self.assertEqual(rv2.status_code, 429)
        self.assertEqual(rv2.get_json().get('error'), 'rate_limited')
        self.assertIn('Retry-After', rv2.headers)
        # Read-only routes are not limited
        self.assertEqual(self.client.get('/defaults').status_code, 200)

    def test_rate_limit_evicts_stale_clients(self):
        app.config['RATE_LIMIT_N'] = 5
        app.config['RATE_LIMIT_WINDOW_SEC'] = 10.0
        server._recent['10.9.9.9'] = deque([time.time() - 60.0])
        server._recent['10.9.9.8'] = deque()
        rv = self.client.post('/calculate', json={})
        self.assertEqual(rv.status_code, 200)
        self.assertNotIn('10.9.9.9', server._recent)
        self.assertNotIn('10.9.9.8', server._recent)
        self.assertEqual(len(server._recent), 1)

    def test_forwarded_for_ignored_unless_trusted(self):
        app.config['RATE_LIMIT_N'] = 1
        app.config['RATE_LIMIT_WINDOW_SEC'] = 10.0
        rv1 = self.client.post('/calculate', json={}, headers={'X-Forwarded-For': '1.1.1.1'})
        self.assertEqual(rv1.status_code, 200)
        rv2 = self.client.post('/calculate', json={}, headers={'X-Forwarded-For': '2.2.2.2'})
        self.assertEqual(rv2.status_code, 429)

        server._recent.clear()
        app.config['TRUST_X_FORWARDED_FOR'] = True
        rv3 = self.client.post('/calculate', json={}, headers={'X-Forwarded-For': '3.3.3.3'})
        rv4 = self.client.post('/calculate', json={}, headers={'X-Forwarded-For': '4.4.4.4, 10.0.0.1'})
        self.assertEqual((rv3.status_code, rv4.status_code), (200, 200))
        self.assertEqual(set(server._recent), {'3.3.3.3', '4.4.4.4'})

    def test_auth_api_key(self):
        app.config['API_KEY'] = 'secret'
        rv = self.client.post('/calculate', json={})
        self.assertEqual(rv.status_code, 401)
        rv2 = self.client.post('/calculate', json={}, headers={'X-API-Key': 'secret'})
        self.assertEqual(rv2.status_code, 200)
        # Defaults stay public
        self.assertEqual(self.client.get('/defaults').status_code, 200)

if __name__ == '__main__':
    unittest.main()
