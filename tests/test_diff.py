"""Tests for the change-detection rules.

Covers:
- is_empty on strings, lists, nested dicts and falsy scalars
- Asymmetry: empty new values never count as a change
- Arrays (length, order), objects (structure), scalars (trimmed text form)
- diff_fields over whole FieldSets
"""

import unittest

from formscribe.services.ai.form_extract.contracts import FieldDescriptor
from formscribe.services.ai.form_extract.diff import deep_equal, diff_fields, is_empty, string_form, value_changed


class IsEmptyTests(unittest.TestCase):
    def test_empty_values(self):
        for value in (None, "", "   \n\t", [], {}, {"a": ""}, {"a": {"b": None, "c": []}}):
            with self.subTest(value=value):
                self.assertTrue(is_empty(value))

    def test_non_empty_values(self):
        for value in ("x", 0, 0.0, False, [None], {"a": 0}, {"a": "", "b": "x"}):
            with self.subTest(value=value):
                self.assertFalse(is_empty(value))


class ValueChangedTests(unittest.TestCase):
    def test_blank_to_value_is_change(self):
        self.assertTrue(value_changed("", "John"))

    def test_value_to_blank_is_not_change(self):
        self.assertFalse(value_changed("John", ""))

    def test_value_to_none_is_not_change(self):
        self.assertFalse(value_changed("John", None))

    def test_none_to_value_is_change(self):
        self.assertTrue(value_changed(None, "20/40"))

    def test_equal_arrays_not_changed(self):
        self.assertFalse(value_changed(["a", "b"], ["a", "b"]))

    def test_longer_array_changed(self):
        self.assertTrue(value_changed(["a"], ["a", "b"]))

    def test_reordered_array_changed(self):
        self.assertTrue(value_changed(["a", "b"], ["b", "a"]))

    def test_empty_array_not_changed(self):
        self.assertFalse(value_changed(["a"], []))

    def test_objects_compared_structurally(self):
        self.assertFalse(value_changed({"sph": -1.25, "cyl": -0.5}, {"cyl": -0.5, "sph": -1.25}))
        self.assertTrue(value_changed({"sph": -1.25}, {"sph": -1.5}))

    def test_all_empty_object_not_changed(self):
        self.assertFalse(value_changed({"sph": -1.25}, {"sph": "", "cyl": None}))

    def test_number_vs_numeric_string_not_changed(self):
        self.assertFalse(value_changed("18", 18))
        self.assertFalse(value_changed(18, "18"))
        self.assertFalse(value_changed(18.0, "18"))

    def test_incidental_whitespace_not_changed(self):
        self.assertFalse(value_changed("20/40", "  20/40 "))

    def test_different_scalar_changed(self):
        self.assertTrue(value_changed("20/40", "20/30"))
        self.assertTrue(value_changed(18, 21))

    def test_boolean_text_form(self):
        self.assertFalse(value_changed("true", True))
        self.assertTrue(value_changed(False, True))

    def test_false_is_not_empty(self):
        self.assertTrue(value_changed(True, False))


class HelperTests(unittest.TestCase):
    def test_string_form(self):
        self.assertEqual(string_form(None), "")
        self.assertEqual(string_form(20.5), "20.5")
        self.assertEqual(string_form(21.0), "21")
        self.assertEqual(string_form(" OD "), "OD")

    def test_deep_equal_distinguishes_bool_and_int(self):
        self.assertFalse(deep_equal([True], [1]))
        self.assertTrue(deep_equal([{"a": [1, 2]}], [{"a": [1, 2]}]))
        self.assertFalse(deep_equal({"a": 1}, {"a": 1, "b": 2}))


def _field(path, label, value, type_="text"):
    return FieldDescriptor(path=path, label=label, value=value, type=type_)


class DiffFieldsTests(unittest.TestCase):
    def test_returns_changed_labels_in_order(self):
        previous = (
            _field("chiefComplaint", "Chief Complaint", ""),
            _field("vision.rightEye.uncorrected", "Vision Right Eye Uncorrected", "20/20"),
            _field("plan", "Plan", "Observe"),
        )
        updated = (
            _field("chiefComplaint", "Chief Complaint", "Blurry vision"),
            _field("vision.rightEye.uncorrected", "Vision Right Eye Uncorrected", "20/40"),
            _field("plan", "Plan", "Observe"),
        )
        self.assertEqual(diff_fields(previous, updated), ["Chief Complaint", "Vision Right Eye Uncorrected"])

    def test_no_changes(self):
        fields = (_field("a", "A", "x"), _field("b", "B", ""))
        self.assertEqual(diff_fields(fields, fields), [])

    def test_duplicate_labels_reported_once(self):
        previous = (_field("a", "Notes", ""), _field("b", "Notes", ""))
        updated = (_field("a", "Notes", "x"), _field("b", "Notes", "y"))
        self.assertEqual(diff_fields(previous, updated), ["Notes"])

    def test_size_mismatch_raises(self):
        with self.assertRaises(ValueError):
            diff_fields((_field("a", "A", ""),), ())

    def test_order_mismatch_raises(self):
        with self.assertRaises(ValueError):
            diff_fields(
                (_field("a", "A", ""), _field("b", "B", "")),
                (_field("b", "B", ""), _field("a", "A", "")),
            )
