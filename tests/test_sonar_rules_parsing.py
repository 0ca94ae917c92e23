import unittest

from analysis_prep.domain.profile import RuleBinding
from tools.sonar.rules import (
    has_more_pages,
    parse_languages,
    parse_rules_page,
    parse_settings_values,
    select_profile_key,
    split_rule_key,
)


class TestSonarPayloadParsing(unittest.TestCase):
    def test_settings_values_shapes(self) -> None:
        payload = {
            "settings": [
                {"key": "server.key", "value": "server value 1"},
                {"key": "sonar.exclusions", "values": ["**/bin/**", "**/obj/**"]},
                {
                    "key": "sonar.issue.ignore.multicriteria",
                    "fieldValues": [{"ruleKey": "S100", "resourceKey": "**/*.cs"}],
                },
                {"value": "no key"},
                "garbage",
            ]
        }
        out = parse_settings_values(payload)
        self.assertEqual("server value 1", out["server.key"])
        self.assertEqual("**/bin/**,**/obj/**", out["sonar.exclusions"])
        self.assertEqual("1", out["sonar.issue.ignore.multicriteria"])
        self.assertEqual("S100", out["sonar.issue.ignore.multicriteria.1.ruleKey"])
        self.assertEqual(5, len(out))

    def test_languages(self) -> None:
        payload = {"languages": [{"key": "cs", "name": "C#"}, {"key": "vbnet"}, {"name": "no key"}]}
        self.assertEqual({"cs", "vbnet"}, parse_languages(payload))
        self.assertEqual(set(), parse_languages({}))

    def test_select_profile_prefers_default(self) -> None:
        payload = {
            "profiles": [
                {"key": "qp-java", "language": "java", "isDefault": True},
                {"key": "qp-cs-custom", "language": "cs"},
                {"key": "qp-cs-default", "language": "cs", "isDefault": True},
            ]
        }
        self.assertEqual("qp-cs-default", select_profile_key(payload, "cs"))
        self.assertIsNone(select_profile_key(payload, "vbnet"))

    def test_select_profile_falls_back_to_first_match(self) -> None:
        payload = {"profiles": [{"key": "a", "language": "cs"}, {"key": "b", "language": "cs"}]}
        self.assertEqual("a", select_profile_key(payload, "cs"))

    def test_split_rule_key(self) -> None:
        self.assertEqual(("fxcop", "CA1000"), split_rule_key("fxcop:CA1000"))
        self.assertEqual(("roslyn.sonaranalyzer", "S1:x"), split_rule_key("other:S1:x", "roslyn.sonaranalyzer"))
        self.assertEqual(("", "CA1000"), split_rule_key("CA1000"))

    def test_rules_page(self) -> None:
        payload = {
            "rules": [
                {"key": "fxcop:CA1000", "repo": "fxcop"},
                {"key": "csharpsquid:S100"},
                {"key": "orphan"},
                {"repo": "fxcop"},
            ]
        }
        self.assertEqual(
            [RuleBinding("CA1000", "fxcop", active=False), RuleBinding("S100", "csharpsquid", active=False)],
            parse_rules_page(payload, active=False),
        )

    def test_pagination(self) -> None:
        self.assertTrue(has_more_pages({"total": 3}, page=1, page_size=2, got=2))
        self.assertFalse(has_more_pages({"total": 3}, page=2, page_size=2, got=1))
        self.assertTrue(has_more_pages({"paging": {"total": 5}}, page=1, page_size=2, got=2))
        self.assertFalse(has_more_pages({}, page=1, page_size=2, got=1))


if __name__ == "__main__":
    unittest.main()
