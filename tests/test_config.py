from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from linkrank.config import (
    build_rank_config,
    load_rank_config,
    rank_config_from_mapping,
    resolve_config_path,
)
from linkrank.errors import InvalidParameterError
from linkrank.models import RankConfig


class ConfigTests(unittest.TestCase):
    def test_build_rank_config_defaults(self) -> None:
        config = build_rank_config()
        self.assertEqual(config, RankConfig())
        self.assertEqual(config.damping_factor, 0.85)
        self.assertEqual(config.max_iterations, 100)
        self.assertEqual(config.convergence_threshold, 1e-4)
        self.assertTrue(config.early_stop)
        self.assertEqual(config.workers, 1)

    def test_build_rank_config_applies_overrides_on_base(self) -> None:
        base = RankConfig(damping_factor=0.9)
        config = build_rank_config(base, max_iterations=25)
        self.assertEqual(config.damping_factor, 0.9)
        self.assertEqual(config.max_iterations, 25)

    def test_build_rank_config_rejects_unknown_and_invalid_options(self) -> None:
        with self.assertRaises(InvalidParameterError):
            build_rank_config(alpha=0.85)
        with self.assertRaises(InvalidParameterError):
            build_rank_config(damping_factor=1.0)
        with self.assertRaises(InvalidParameterError):
            build_rank_config(max_iterations=True)
        with self.assertRaises(InvalidParameterError):
            build_rank_config(convergence_threshold=float("nan"))

    def test_rank_config_from_mapping(self) -> None:
        config = rank_config_from_mapping(
            {"damping_factor": 0.5, "personalization": {"a": 1.0}, "workers": 2}
        )
        self.assertEqual(config.damping_factor, 0.5)
        self.assertEqual(dict(config.personalization or {}), {"a": 1.0})
        self.assertEqual(config.workers, 2)
        with self.assertRaises(InvalidParameterError):
            rank_config_from_mapping({"personalization": [1.0, 2.0]})

    def test_load_rank_config_reads_json_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "ranking.json"
            path.write_text(
                json.dumps({"max_iterations": 40, "convergence_threshold": 1e-6}),
                encoding="utf-8",
            )
            config = load_rank_config(path)
            self.assertEqual(config.max_iterations, 40)
            self.assertEqual(config.convergence_threshold, 1e-6)
            self.assertEqual(config.damping_factor, 0.85)

    def test_load_rank_config_rejects_bad_payloads(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            with self.assertRaises(FileNotFoundError):
                load_rank_config(root / "missing.json")
            with self.assertRaises(IsADirectoryError):
                resolve_config_path(root)
            malformed = root / "malformed.json"
            malformed.write_text("{not json", encoding="utf-8")
            with self.assertRaises(InvalidParameterError):
                load_rank_config(malformed)
            listed = root / "listed.json"
            listed.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(InvalidParameterError):
                load_rank_config(listed)


if __name__ == "__main__":
    unittest.main()
