"""Tests for load report writer."""

import json
import tempfile
import unittest
from pathlib import Path

from core.run_artifacts import write_json, write_load_report


class TestRunArtifacts(unittest.TestCase):
    def test_write_load_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_load_report(
                report={"status": "success", "stats": {"pages": 3}},
                load_id="load-123",
                output_dir=tmpdir,
            )
            self.assertEqual(Path(path).name, "load-123.json")
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["load_id"], "load-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["stats"], {"pages": 3})
            self.assertIn("timestamp_utc", payload)

    def test_write_json_creates_parent_dirs(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "nested" / "graph.json"
            write_json({"type": "folder", "children": []}, str(target))
            self.assertEqual(
                json.loads(target.read_text(encoding="utf-8")),
                {"type": "folder", "children": []},
            )


if __name__ == "__main__":
    unittest.main()
