import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from app.agent.context_loader import (
    ContextLoader,
    ProjectFileError,
    build_context_text,
    format_project,
    read_project_records,
)
from app.agent.prompts.chat import CONTEXT_INSTRUCTIONS, FALLBACK_CONTEXT, PROJECT_SEPARATOR
from app.models import ProjectRecord


class ContextLoaderTests(unittest.TestCase):
    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, content: str) -> Path:
        path = self.tmp / "projects.json"
        path.write_text(content, encoding="utf-8")
        return path

    def test_load_formats_every_record_in_order(self):
        path = self._write(json.dumps({"projects": [
            {"name": "Alpha", "description": "First", "type": "Website"},
            {"name": "Beta", "description": "Second", "type": "API", "technologies": "Go"},
        ]}))

        context = ContextLoader(path).load()

        self.assertFalse(context.fallback)
        self.assertEqual([r.name for r in context.records], ["Alpha", "Beta"])
        self.assertLess(context.text.index("PROJECT: Alpha"), context.text.index("PROJECT: Beta"))
        self.assertIn(PROJECT_SEPARATOR, context.text)
        self.assertTrue(context.text.endswith(CONTEXT_INSTRUCTIONS))

    def test_missing_optional_fields_use_defaults(self):
        text = format_project(ProjectRecord(name="Alpha", description="First", type="Website"))

        self.assertIn("Technologies: HTML, CSS, JavaScript", text)
        self.assertIn("Live URL: Not available", text)
        self.assertIn("Repository: Not available", text)
        self.assertIn("Documentation: Not available", text)

    def test_present_optional_fields_are_kept(self):
        record = ProjectRecord(
            name="Alpha",
            description="First",
            type="Web App",
            technologies="Vue",
            url="https://alpha.example.com",
            repository="https://github.com/example/alpha",
            readme="README.md",
        )

        text = format_project(record)

        self.assertIn("Technologies: Vue", text)
        self.assertIn("Live URL: https://alpha.example.com", text)
        self.assertIn("Repository: https://github.com/example/alpha", text)
        self.assertIn("Documentation: README.md", text)

    def test_missing_file_falls_back(self):
        context = ContextLoader(self.tmp / "absent.json").load()

        self.assertTrue(context.fallback)
        self.assertEqual(context.text, FALLBACK_CONTEXT)
        self.assertEqual(context.records, ())

    def test_non_utf8_file_falls_back(self):
        path = self.tmp / "projects.json"
        path.write_bytes(b'{"projects": [{"name": "Caf\xe9", "description": "Latin-1 bytes"}]}')

        context = ContextLoader(path).load()

        self.assertTrue(context.fallback)
        self.assertEqual(context.text, FALLBACK_CONTEXT)

        with self.assertRaises(ProjectFileError):
            read_project_records(path)

    def test_invalid_json_falls_back(self):
        context = ContextLoader(self._write("{not json")).load()

        self.assertTrue(context.fallback)
        self.assertEqual(context.text, FALLBACK_CONTEXT)

    def test_missing_projects_list_falls_back(self):
        for content in ('{"items": []}', '{"projects": {"name": "x"}}', "[]"):
            with self.subTest(content=content):
                context = ContextLoader(self._write(content)).load()
                self.assertTrue(context.fallback)

    def test_record_without_required_field_falls_back(self):
        path = self._write(json.dumps({"projects": [{"name": "No description"}]}))

        context = ContextLoader(path).load()

        self.assertTrue(context.fallback)
        self.assertEqual(context.text, FALLBACK_CONTEXT)

    def test_reload_returns_a_fresh_context(self):
        path = self._write(json.dumps({"projects": [{"name": "Alpha", "description": "First"}]}))
        loader = ContextLoader(path)
        first = loader.load()

        path.write_text(json.dumps({"projects": [{"name": "Gamma", "description": "Third"}]}), encoding="utf-8")
        second = loader.load()

        self.assertIn("PROJECT: Alpha", first.text)
        self.assertIn("PROJECT: Gamma", second.text)
        self.assertNotIn("PROJECT: Alpha", second.text)

    def test_read_project_records_raises_for_bad_shape(self):
        with self.assertRaises(ProjectFileError):
            read_project_records(self._write('{"projects": ["just a string"]}'))

    def test_empty_project_list_still_has_instructions(self):
        self.assertTrue(build_context_text([]).endswith(CONTEXT_INSTRUCTIONS))


if __name__ == "__main__":
    unittest.main()
