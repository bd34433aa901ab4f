import unittest

from scanner_field.classifier import InputClassifier, Verdict
from scanner_field.validation import ScannerConfigError

from tests.helpers import FakeClock


class TestInputClassifier(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.classifier = InputClassifier(barcode_length=8, input_delay=50, clock=self.clock)

    def type_run(self, length, interval):
        """Insert characters one by one, returning the verdict of each insertion"""
        verdicts = []
        for new_length in range(1, length + 1):
            if new_length > 1:
                self.clock.advance(interval)
            verdicts.append(self.classifier.on_insert(new_length))
        return verdicts

    def test_defaults(self):
        classifier = InputClassifier()
        self.assertEqual(classifier.barcode_length, 8)
        self.assertEqual(classifier.input_delay, 50)
        self.assertTrue(classifier.still_valid)

    def test_fast_sequential_run_completes_once_at_last_char(self):
        verdicts = self.type_run(8, interval=5)
        self.assertEqual(verdicts.count(Verdict.COMPLETED), 1)
        self.assertIs(verdicts[-1], Verdict.COMPLETED)

    def test_slow_run_does_not_complete(self):
        verdicts = self.type_run(8, interval=10)
        self.assertNotIn(Verdict.COMPLETED, verdicts)

    def test_elapsed_equal_to_delay_is_within_window(self):
        # 7 gaps of 5 ms
        self.classifier.set_input_delay(35)
        verdicts = self.type_run(8, interval=5)
        self.assertIs(verdicts[-1], Verdict.COMPLETED)

    def test_one_ms_over_delay_continues(self):
        self.classifier.set_input_delay(34)
        verdicts = self.type_run(8, interval=5)
        self.assertIs(verdicts[-1], Verdict.CONTINUE)

    def test_pause_after_first_char_prevents_completion(self):
        self.classifier.on_insert(1)
        self.clock.advance(60)
        verdicts = [self.classifier.on_insert(n) for n in range(2, 9)]
        self.assertNotIn(Verdict.COMPLETED, verdicts)

    def test_growth_by_more_than_one_disqualifies(self):
        self.classifier.on_insert(1)
        self.assertIs(self.classifier.on_insert(4), Verdict.CONTINUE)
        self.assertFalse(self.classifier.still_valid)
        verdicts = [self.classifier.on_insert(n) for n in range(5, 9)]
        self.assertNotIn(Verdict.COMPLETED, verdicts)

    def test_paste_straight_to_barcode_length_is_not_a_scan(self):
        self.classifier.on_insert(1)
        self.assertIs(self.classifier.on_insert(8), Verdict.CONTINUE)

    def test_deletion_while_not_empty_disqualifies(self):
        self.type_run(5, interval=1)
        self.classifier.on_delete(4)
        self.assertFalse(self.classifier.still_valid)
        verdicts = [self.classifier.on_insert(n) for n in range(5, 9)]
        self.assertNotIn(Verdict.COMPLETED, verdicts)

    def test_deletion_to_empty_rearms_next_run(self):
        self.type_run(3, interval=1)
        self.classifier.on_delete(2)
        self.classifier.on_delete(0)
        self.assertTrue(self.classifier.still_valid)

        self.clock.advance(1000)
        verdicts = self.type_run(8, interval=5)
        self.assertIs(verdicts[-1], Verdict.COMPLETED)

    def test_paste_into_emptied_field_is_not_a_scan(self):
        self.type_run(7, interval=2)
        self.classifier.on_delete(0)
        self.assertEqual(self.classifier.previous_length, 0)
        self.assertIsNone(self.classifier.reference_time)

        self.clock.advance(2)
        self.assertIs(self.classifier.on_insert(8), Verdict.CONTINUE)
        self.assertFalse(self.classifier.still_valid)

    def test_first_char_rearms_reference_time(self):
        self.classifier.on_insert(1)
        self.clock.advance(500)
        self.classifier.on_delete(0)
        self.assertIs(self.classifier.on_insert(1), Verdict.CONTINUE)
        self.assertEqual(self.classifier.reference_time, 500)
        self.assertEqual(self.classifier.elapsed(), 0)

    def test_growth_past_length_after_completion_continues(self):
        self.type_run(8, interval=1)
        self.assertIs(self.classifier.on_insert(9), Verdict.CONTINUE)
        self.assertIs(self.classifier.on_insert(10), Verdict.CONTINUE)

    def test_barcode_length_of_one_completes_on_first_char(self):
        self.classifier.set_barcode_length(1)
        self.classifier.set_input_delay(0)
        self.assertIs(self.classifier.on_insert(1), Verdict.COMPLETED)

    def test_length_change_applies_to_running_evaluation(self):
        self.type_run(4, interval=1)
        self.classifier.set_barcode_length(5)
        self.clock.advance(1)
        self.assertIs(self.classifier.on_insert(5), Verdict.COMPLETED)

    def test_invalid_settings_are_rejected(self):
        for bad_length in (0, -3, 2.5, "8", True, None):
            with self.assertRaises(ScannerConfigError):
                self.classifier.set_barcode_length(bad_length)
        for bad_delay in (-1, 1.5, "50", None):
            with self.assertRaises(ScannerConfigError):
                self.classifier.set_input_delay(bad_delay)
        self.assertEqual(self.classifier.barcode_length, 8)
        self.assertEqual(self.classifier.input_delay, 50)

    def test_invalid_constructor_arguments(self):
        with self.assertRaises(ScannerConfigError):
            InputClassifier(barcode_length=0)
        with self.assertRaises(ScannerConfigError):
            InputClassifier(input_delay=-5)

    def test_config_error_is_value_error(self):
        with self.assertRaises(ValueError):
            InputClassifier(barcode_length=-1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
