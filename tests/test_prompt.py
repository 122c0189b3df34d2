import unittest

from formscribe.services.ai.form_extract.contracts import FieldDescriptor
from formscribe.services.ai.form_extract.prompt import build_extraction_prompt, describe_field


class PromptBuilderTests(unittest.TestCase):
    def setUp(self):
        self.fields = (
            FieldDescriptor(path="chiefComplaint", label="Chief Complaint", type="text"),
            FieldDescriptor(path="intraocularPressure.rightEye", label="IOP Right Eye", type="number"),
            FieldDescriptor(
                path="lens.rightEye",
                label="Lens Right Eye",
                type="select",
                options=[{"label": "Clear", "value": "clear"}, {"label": "Nuclear sclerosis", "value": "ns"}],
            ),
        )

    def test_lists_every_field_with_path_and_type(self):
        prompt = build_extraction_prompt(self.fields, "IOP 18 in the right eye")
        self.assertIn("- Chief Complaint (chiefComplaint): text", prompt)
        self.assertIn("- IOP Right Eye (intraocularPressure.rightEye): number", prompt)

    def test_select_options_are_listed(self):
        self.assertEqual(
            describe_field(self.fields[2]),
            '- Lens Right Eye (lens.rightEye): select, options: ["Clear", "Nuclear sclerosis"]',
        )

    def test_utterance_embedded_unmodified(self):
        utterance = 'Patient says "it\'s blurry"\nsince {last week}'
        prompt = build_extraction_prompt(self.fields, utterance)
        self.assertIn(f"<utterance>\n{utterance}\n</utterance>", prompt)

    def test_hint_only_when_given(self):
        hint = "This is for an eye examination record in an ophthalmology EHR system"
        self.assertIn(f"Additional context: {hint}", build_extraction_prompt(self.fields, "x", hint))
        self.assertNotIn("Additional context", build_extraction_prompt(self.fields, "x"))

    def test_instructs_exact_dot_paths(self):
        prompt = build_extraction_prompt(self.fields, "x")
        self.assertIn("exact field path", prompt)
        self.assertIn("JSON object", prompt)

    def test_deterministic(self):
        self.assertEqual(
            build_extraction_prompt(self.fields, "same input", "hint"),
            build_extraction_prompt(self.fields, "same input", "hint"),
        )

    def test_large_forms_are_not_truncated(self):
        fields = [FieldDescriptor(path=f"section{i}.item", label=f"Item {i}") for i in range(200)]
        prompt = build_extraction_prompt(fields, "x")
        for i in range(200):
            self.assertIn(f"(section{i}.item)", prompt)
