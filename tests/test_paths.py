"""Tests for dot-path flatten / unflatten."""

import unittest

from formscribe.services.ai.form_extract.paths import flatten, get_path, has_nested_objects, unflatten


class FlattenTests(unittest.TestCase):
    def test_deeply_nested(self):
        self.assertEqual(flatten({"a": {"b": {"c": 1}}}), {"a.b.c": 1})

    def test_array_stays_a_leaf(self):
        self.assertEqual(flatten({"a": [1, 2]}), {"a": [1, 2]})

    def test_array_of_objects_is_not_descended(self):
        value = [{"code": "H40.1"}, {"code": "H25.9"}]
        self.assertEqual(flatten({"diagnosis": value}), {"diagnosis": value})

    def test_flat_input_is_identity(self):
        flat = {"chiefComplaint": "Blurry vision", "vision.rightEye.uncorrected": "20/40", "iop": 18}
        self.assertEqual(flatten(flat), flat)

    def test_none_and_scalars_are_leaves(self):
        self.assertEqual(
            flatten({"a": None, "b": {"c": False, "d": 0}}),
            {"a": None, "b.c": False, "b.d": 0},
        )

    def test_empty_nested_object_contributes_nothing(self):
        self.assertEqual(flatten({"a": {}, "b": 1}), {"b": 1})

    def test_dotted_keys_inside_nested_objects(self):
        self.assertEqual(
            flatten({"vision": {"rightEye.uncorrected": "20/40"}}),
            {"vision.rightEye.uncorrected": "20/40"},
        )

    def test_examination_payload(self):
        payload = {
            "chiefComplaint": "Blurry vision in right eye",
            "vision": {"rightEye": {"uncorrected": "20/40"}, "leftEye": {"uncorrected": "20/20"}},
            "intraocularPressure": {"rightEye": 18},
        }
        self.assertEqual(
            flatten(payload),
            {
                "chiefComplaint": "Blurry vision in right eye",
                "vision.rightEye.uncorrected": "20/40",
                "vision.leftEye.uncorrected": "20/20",
                "intraocularPressure.rightEye": 18,
            },
        )

    def test_rejects_non_dict(self):
        with self.assertRaises(TypeError):
            flatten([1, 2])

    def test_has_nested_objects(self):
        self.assertTrue(has_nested_objects({"a": {"b": 1}}))
        self.assertFalse(has_nested_objects({"a": [{"b": 1}], "c": None}))


class UnflattenTests(unittest.TestCase):
    def test_builds_nested_dicts(self):
        self.assertEqual(
            unflatten({"vision.rightEye.uncorrected": "20/40", "plan": "Return in 1 year"}),
            {"vision": {"rightEye": {"uncorrected": "20/40"}}, "plan": "Return in 1 year"},
        )

    def test_leaf_then_child_conflict(self):
        with self.assertRaises(ValueError):
            unflatten({"a": 1, "a.b": 2})

    def test_child_then_leaf_conflict(self):
        with self.assertRaises(ValueError):
            unflatten({"a.b": 2, "a": 1})

    def test_round_trip_from_flat(self):
        flat = {"a.b.c": 1, "a.d": [1, 2], "e": None, "f.g": "x"}
        self.assertEqual(flatten(unflatten(flat)), flat)

    def test_round_trip_from_nested(self):
        nested = {"vision": {"rightEye": {"uncorrected": "20/40", "corrected": ""}}, "diagnosis": ["H40.1"]}
        self.assertEqual(unflatten(flatten(nested)), nested)


class GetPathTests(unittest.TestCase):
    def test_reads_nested_value(self):
        self.assertEqual(get_path({"a": {"b": {"c": 3}}}, "a.b.c"), 3)

    def test_missing_returns_default(self):
        self.assertIsNone(get_path({"a": {}}, "a.b"))
        self.assertEqual(get_path({"a": 1}, "a.b", default=""), "")

    def test_stored_none_is_returned(self):
        self.assertIsNone(get_path({"a": None}, "a", default="x"))
