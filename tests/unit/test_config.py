import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "color"))

from textoverlay_core.config import PluginConfig, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, PluginConfig)
            self.assertEqual(cfg.sampler.rendition_width, 200)
            self.assertEqual(cfg.logging.level, "INFO")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.sampler.timeout_s = 12
            cfg.logging.level = "DEBUG"
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.sampler.timeout_s, 12)
            self.assertEqual(reloaded.logging.level, "DEBUG")

    def test_unreadable_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), PluginConfig())

    def test_normalizes_and_ignores_unknown_keys(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "sampler": {"rendition_width": 5, "timeout_s": 9999, "colour": "red"},
                "logging": {"level": "chatty", "keep_log_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.sampler.rendition_width, 16)
            self.assertEqual(cfg.sampler.timeout_s, 300)
            self.assertFalse(hasattr(cfg.sampler, "colour"))
            self.assertEqual(cfg.logging.level, "INFO")
            self.assertEqual(cfg.logging.keep_log_files, 2)


if __name__ == "__main__":
    unittest.main()
