# coding=utf-8
"""Unit tests for :mod:`osde2e.docs`."""
import unittest

from osde2e import config, docs


class RenderConfigDocsTestCase(unittest.TestCase):
    """Test :func:`osde2e.docs.render_config_docs`."""

    @classmethod
    def setUpClass(cls):
        """Render the documentation once."""
        cls.text = docs.render_config_docs()

    def test_every_field(self):
        """Every field, env var and YAML path is documented."""
        for field in config.FIELDS:
            with self.subTest(field=field.qualified_name):
                self.assertIn("``{}``".format(field.qualified_name), self.text)
                self.assertIn("``{}``".format(field.env), self.text)
                self.assertIn("``{}``".format(field.yaml_path), self.text)

    def test_every_section(self):
        """Every section has a title."""
        for section in config.SECTIONS:
            with self.subTest(section=section):
                self.assertIn("\n{}\n{}\n".format(section, "-" * len(section)),
                              self.text)

    def test_required(self):
        """Required fields are marked as such."""
        self.assertIn("**required**", self.text)

    def test_defaults(self):
        """Defaults are rendered in their YAML form."""
        self.assertIn("``30``", self.text)
        self.assertIn("``osde2e-.*-aws-e2e-.*``", self.text)

    def test_subset(self):
        """Only the given fields are rendered."""
        fields = [
            field for field in config.FIELDS if field.section == "ocm"
        ]
        text = docs.render_config_docs(fields)
        self.assertIn("``ocm.token``", text)
        self.assertNotIn("``cluster.multi_az``", text)
        self.assertNotIn("\ncluster\n", text)
