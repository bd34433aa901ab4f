import io
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from scanner_field.main import (
    EXIT_CONFIG_ERROR,
    EXIT_NOT_DETECTED,
    EXIT_OK,
    main,
    simulate_scan,
)


class TestSimulateScan(unittest.TestCase):

    def test_fast_scan(self):
        count, text = simulate_scan('1234567&', 8, 50, interval=5)
        self.assertEqual((count, text), (1, '12345671'))

    def test_pause_between_first_and_second_char(self):
        count, text = simulate_scan('1234567&', 8, 50, interval=5, pause_after=1, pause=60)
        self.assertEqual((count, text), (0, '1234567&'))

    def test_wrong_length(self):
        count, text = simulate_scan('é!à', 8, 50)
        self.assertEqual((count, text), (0, 'é!à'))


@patch.dict(os.environ, {"SCANNER_FIELD_CONFIG": os.path.join(os.path.dirname(__file__), "no-such-config.json")})
class TestMain(unittest.TestCase):

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_simulate_detected(self):
        code, output = self.run_main(['--length', '4', 'simulate', "é!à'"])
        self.assertEqual(code, EXIT_OK)
        self.assertIn('Scan detected: 2804', output)

    def test_simulate_not_detected(self):
        code, output = self.run_main(['simulate', '1234567&', '--interval', '10'])
        self.assertEqual(code, EXIT_NOT_DETECTED)
        self.assertIn('1234567&', output)

    def test_invalid_length_is_config_error(self):
        with self.assertLogs('scanner_field.main', level='ERROR'):
            code, _ = self.run_main(['--length', '0', 'simulate', '1234'])
        self.assertEqual(code, EXIT_CONFIG_ERROR)

    def test_negative_delay_is_config_error(self):
        with self.assertLogs('scanner_field.main', level='ERROR'):
            code, _ = self.run_main(['--delay', '-1', 'simulate', '1234'])
        self.assertEqual(code, EXIT_CONFIG_ERROR)


if __name__ == '__main__':
    unittest.main(verbosity=2)
