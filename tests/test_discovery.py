import json
import tempfile
import unittest
from pathlib import Path

from analysis_prep.domain.project import ProjectKind
from pipeline.discovery import discover_project_descriptors, load_project_descriptor

from prep_fakes import GUID_A, GUID_B


def _write_descriptor(root: Path, folder: str, payload) -> Path:
    d = root / folder
    d.mkdir(parents=True, exist_ok=True)
    p = d / "ProjectInfo.json"
    p.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return p


class TestDiscovery(unittest.TestCase):
    def test_loads_descriptor_and_its_file_list(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            files_list = root / "A" / "FilesToAnalyze.txt"
            p = _write_descriptor(
                root,
                "A",
                {
                    "projectGuid": GUID_A,
                    "projectName": "A",
                    "projectPath": "/src/A/A.csproj",
                    "projectType": "Test",
                    "isExcluded": "false",
                    "languages": ["cs"],
                    "filesToAnalyze": str(files_list),
                },
            )
            files_list.write_text("/src/A/One.cs\n\n  /src/A/Two.cs  \n", encoding="utf-8")

            record = load_project_descriptor(p)
            self.assertEqual(GUID_A, record.guid)
            self.assertEqual(ProjectKind.TEST, record.kind)
            self.assertFalse(record.is_excluded)
            self.assertEqual(("cs",), record.languages)
            self.assertEqual(("/src/A/One.cs", "/src/A/Two.cs"), record.analyzable_files)

    def test_missing_file_list_means_no_files(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = _write_descriptor(Path(td), "A", {"projectGuid": GUID_A, "filesToAnalyze": "missing.txt"})
            self.assertEqual((), load_project_descriptor(p).analyzable_files)

    def test_inline_files_are_used_without_a_list(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = _write_descriptor(Path(td), "A", {"projectGuid": GUID_A, "files": ["a.cs", " ", None]})
            self.assertEqual(("a.cs",), load_project_descriptor(p).analyzable_files)

    def test_unreadable_descriptors_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            _write_descriptor(root, "bad_json", "{not json")
            _write_descriptor(root, "not_object", "[1, 2]")
            _write_descriptor(root, "ok", {"projectGuid": GUID_B, "projectName": "ok"})
            (root / "no_descriptor").mkdir()

            records = discover_project_descriptors(root)
            self.assertEqual(["ok"], [r.name for r in records])

    def test_wrongly_typed_fields_are_ignored_not_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            _write_descriptor(root, "a", {"projectGuid": GUID_A, "projectName": "a", "languages": 5, "files": ["a.cs"]})
            _write_descriptor(root, "b", {"projectGuid": GUID_B, "projectName": "b", "files": 5})
            _write_descriptor(root, "c", {"projectName": "c", "filesToAnalyze": ["x.txt"], "files": ["c.cs"]})
            _write_descriptor(root, "d", {"projectName": "d", "filesToAnalyze": 7, "languages": {"cs": True}})

            records = {r.name: r for r in discover_project_descriptors(root)}

            self.assertEqual(["a", "b", "c", "d"], sorted(records))
            self.assertEqual((), records["a"].languages)
            self.assertEqual(("a.cs",), records["a"].analyzable_files)
            self.assertEqual((), records["b"].analyzable_files)
            self.assertIsNone(records["c"].files_list_path)
            self.assertEqual((), records["c"].analyzable_files)
            self.assertIsNone(records["d"].files_list_path)
            self.assertEqual((), records["d"].languages)

    def test_discovery_order_is_by_folder_name(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            for name in ("b", "a", "c"):
                _write_descriptor(root, name, {"projectName": name})
            self.assertEqual(["a", "b", "c"], [r.name for r in discover_project_descriptors(root)])

    def test_missing_output_dir_gives_no_records(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            self.assertEqual([], discover_project_descriptors(Path(td) / "absent"))


if __name__ == "__main__":
    unittest.main()
