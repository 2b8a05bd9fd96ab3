"""End-to-end tests for the run_loader command-line entry point."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import run_loader

MANIFEST = """
root_dir: docs
files:
  - path: docs/index.mdx
    kind: page
    data: {title: Home}
  - path: docs/guides/setup.mdx
    kind: page
  - path: docs/guides/meta.json
    kind: meta
"""


class TestRunLoaderCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)
        self.manifest = self.tmpdir / "manifest.yml"
        self.manifest.write_text(MANIFEST, encoding="utf-8")
        self.output = self.tmpdir / "out" / "graph.json"
        self.reports = self.tmpdir / "reports"
        env = patch.dict(os.environ, {}, clear=True)
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _argv(self, *extra: str) -> list:
        return [
            "--manifest", str(self.manifest),
            "--output-file", str(self.output),
            "--report-dir", str(self.reports),
            *extra,
        ]

    def _single_report(self) -> dict:
        reports = list(self.reports.glob("*.json"))
        self.assertEqual(len(reports), 1)
        return json.loads(reports[0].read_text(encoding="utf-8"))

    def test_writes_graph_and_report(self) -> None:
        run_loader.main(self._argv())

        payload = json.loads(self.output.read_text(encoding="utf-8"))
        self.assertEqual(payload["root_dir"], "docs")
        self.assertEqual(payload["graph"]["type"], "folder")
        self.assertEqual(payload["graph"]["children"][0]["page"]["title"], "Home")
        self.assertEqual(payload["stats"], {"pages": 2, "metas": 1, "folders": 2})

        report = self._single_report()
        self.assertEqual(report["status"], "success")
        self.assertEqual(report["files"], 3)

    def test_root_dir_argument_overrides_manifest(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            run_loader.main(self._argv("--root-dir", "elsewhere"))
        self.assertEqual(ctx.exception.code, 1)

        report = self._single_report()
        self.assertEqual(report["status"], "failed")
        self.assertIn("InvalidPathError", report["error"])
        self.assertFalse(self.output.exists())

    def test_invalid_root_dir_argument_fails(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            run_loader.main(self._argv("--root-dir", "../docs"))
        self.assertEqual(ctx.exception.code, 1)

        report = self._single_report()
        self.assertEqual(report["status"], "failed")
        self.assertIn("ConfigValidationError", report["error"])
        self.assertFalse(self.output.exists())

    def test_invalid_manifest_root_dir_fails(self) -> None:
        self.manifest.write_text(MANIFEST.replace("root_dir: docs", "root_dir: ../docs"), encoding="utf-8")
        with self.assertRaises(SystemExit):
            run_loader.main(self._argv())
        self.assertEqual(self._single_report()["status"], "failed")
        self.assertFalse(self.output.exists())

    def test_report_contains_stage_timings(self) -> None:
        run_loader.main(self._argv())
        timings = self._single_report()["stage_timings"]
        for stage in ("manifest", "resolve", "graph", "write"):
            self.assertIn(stage, timings)
        self.assertTrue(any(name.startswith("transform:") for name in timings))

    def test_language_flag_enables_locale_parsing(self) -> None:
        self.manifest.write_text(
            "files:\n  - path: index.fr.mdx\n    kind: page\n  - path: setup.old.mdx\n    kind: page\n",
            encoding="utf-8",
        )
        run_loader.main(self._argv("--language", "fr"))

        payload = json.loads(self.output.read_text(encoding="utf-8"))
        files = [child["page"]["file"] for child in payload["graph"]["children"]]
        self.assertEqual([(f["name"], f["locale"]) for f in files], [("index", "fr"), ("setup.old", None)])
        self.assertEqual(self._single_report()["languages"], ["fr"])

    def test_missing_manifest_fails(self) -> None:
        self.manifest.unlink()
        with self.assertRaises(SystemExit):
            run_loader.main(self._argv())
        self.assertEqual(self._single_report()["status"], "failed")


if __name__ == "__main__":
    unittest.main()
