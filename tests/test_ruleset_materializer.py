import tempfile
import unittest
import xml.etree.ElementTree as ET
from pathlib import Path

from analysis_prep.domain.profile import QualityProfile, RuleBinding
from analysis_prep.errors import OutputDirectoryMissingError, RuleSetNameError
from analysis_prep.io.layout import ruleset_filename
from pipeline.rulesets import materialize_profile, materialize_ruleset, render_ruleset


class TestRenderRuleset(unittest.TestCase):
    def test_document_lists_active_and_inactive_rules(self) -> None:
        xml = render_ruleset("cs", "fxcop", ["CA1000", "CA1001"], ["CA2000"])
        self.assertTrue(xml.startswith('<?xml version="1.0" encoding="utf-8"?>\n'))
        self.assertTrue(xml.endswith("\n"))

        root = ET.fromstring(xml.split("\n", 1)[1])
        self.assertEqual("RuleSet", root.tag)
        rules = root.find("Rules")
        self.assertEqual("fxcop", rules.get("AnalyzerId"))
        self.assertEqual(
            [("CA1000", "Warning"), ("CA1001", "Warning"), ("CA2000", "None")],
            [(r.get("Id"), r.get("Action")) for r in rules.findall("Rule")],
        )

    def test_rule_keys_are_escaped(self) -> None:
        xml = render_ruleset("cs", "fxcop", ['A<&>"B'])
        root = ET.fromstring(xml.split("\n", 1)[1])
        self.assertEqual('A<&>"B', root.find("Rules/Rule").get("Id"))

    def test_empty_rule_set_is_well_formed(self) -> None:
        root = ET.fromstring(render_ruleset("vbnet", "fxcop", []).split("\n", 1)[1])
        self.assertEqual([], root.findall("Rules/Rule"))


class TestMaterializeRuleset(unittest.TestCase):
    def test_writes_named_file_and_describes_it(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            conf = Path(td)
            artifact = materialize_ruleset(conf, "cs", "fxcop", ["CA1000"], ["CA2000"])

            self.assertEqual(str(conf / "SonarQube-cs-fxcop.ruleset"), artifact.path)
            self.assertEqual(("CA1000",), artifact.rule_keys)
            self.assertEqual(("CA2000",), artifact.inactive_rule_keys)
            self.assertTrue(Path(artifact.path).is_file())
            self.assertEqual([], list(conf.glob("*.tmp")))

    def test_same_input_gives_byte_identical_files(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            conf = Path(td)
            first = Path(materialize_ruleset(conf, "cs", "fxcop", ["CA1000", "CA1001"]).path).read_bytes()
            second = Path(materialize_ruleset(conf, "cs", "fxcop", ["CA1000", "CA1001"]).path).read_bytes()
            self.assertEqual(first, second)

    def test_missing_directory_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            missing = Path(td) / "conf"
            with self.assertRaises(OutputDirectoryMissingError):
                materialize_ruleset(missing, "cs", "fxcop", ["CA1000"])
            self.assertFalse(missing.exists())

    def test_missing_directory_error_is_a_file_not_found_error(self) -> None:
        self.assertTrue(issubclass(OutputDirectoryMissingError, FileNotFoundError))

    def test_unusable_plugin_name_is_rejected(self) -> None:
        with self.assertRaises(RuleSetNameError):
            ruleset_filename("cs", "   ")


class TestMaterializeProfile(unittest.TestCase):
    def test_one_file_per_plugin_with_active_rules(self) -> None:
        profile = QualityProfile(
            profile_id="qp-cs",
            language="cs",
            rules=(
                RuleBinding("CA1000", "fxcop"),
                RuleBinding("S100", "csharpsquid"),
                RuleBinding("X1", "inactiveonly", active=False),
            ),
        )
        with tempfile.TemporaryDirectory() as td:
            conf = Path(td)
            artifacts = materialize_profile(conf, profile)

            self.assertEqual(["fxcop", "csharpsquid"], [a.plugin for a in artifacts])
            self.assertEqual(
                ["SonarQube-cs-csharpsquid.ruleset", "SonarQube-cs-fxcop.ruleset"],
                sorted(p.name for p in conf.iterdir()),
            )

            with_inactive = materialize_profile(conf, profile, include_inactive_only=True)
            self.assertEqual(3, len(with_inactive))

    def test_profile_without_rules_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            conf = Path(td)
            self.assertEqual([], materialize_profile(conf, QualityProfile("qp", "cs")))
            self.assertEqual([], list(conf.iterdir()))


if __name__ == "__main__":
    unittest.main()
