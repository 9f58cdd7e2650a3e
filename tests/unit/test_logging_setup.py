import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "color"))

from textoverlay_core.config import PluginConfig
from textoverlay_core.logging_setup import JsonLineFormatter, configure_logging, get_logger


class JsonLineFormatterTests(unittest.TestCase):
    def test_sampling_fields_are_serialized(self):
        record = logging.LogRecord("textoverlay.color", logging.DEBUG, __file__, 1, "line colors", (), None)
        record.event = "line_colors"
        record.url = "https://iiif.example/p1/full/200,/0/default.jpg"
        record.text_color = "rgb(0,0,0)"
        record.bg_color = None
        record.pixels = 4

        payload = json.loads(JsonLineFormatter().format(record))
        self.assertEqual(payload["logger"], "textoverlay.color")
        self.assertEqual(payload["event"], "line_colors")
        self.assertEqual(payload["url"], "https://iiif.example/p1/full/200,/0/default.jpg")
        self.assertEqual(payload["text_color"], "rgb(0,0,0)")
        self.assertIsNone(payload["bg_color"])
        self.assertEqual(payload["pixels"], 4)

    def test_absent_fields_are_left_out(self):
        record = logging.LogRecord("textoverlay", logging.INFO, __file__, 1, "plain %s", ("message",), None)
        payload = json.loads(JsonLineFormatter().format(record))
        self.assertEqual(payload["msg"], "plain message")
        self.assertEqual(set(payload), {"ts_utc", "level", "logger", "msg"})


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self):
        self.logger = get_logger()
        self._saved_handlers = list(self.logger.handlers)
        self._saved_level = self.logger.level
        self.logger.handlers.clear()

    def tearDown(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers[:] = self._saved_handlers
        self.logger.setLevel(self._saved_level)

    def test_level_and_retention_come_from_config(self):
        cfg = PluginConfig()
        cfg.logging.level = "WARNING"
        cfg.logging.keep_log_files = 3
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(cfg, console=False, directory=Path(tmp))
            self.assertEqual(logger.level, logging.WARNING)
            self.assertEqual(logger.handlers[0].backupCount, 3)
            self.assertIs(configure_logging(cfg, console=False, directory=Path(tmp)), logger)
            self.assertEqual(len(logger.handlers), 1)

    def test_child_records_reach_json_file(self):
        cfg = PluginConfig()
        cfg.logging.level = "DEBUG"
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(cfg, console=False, directory=Path(tmp))
            logging.getLogger("textoverlay.color").warning(
                "Unsupported color: %s", "red", extra={"event": "unsupported_color", "color": "red"}
            )
            logger.handlers[0].flush()

            lines = (Path(tmp) / "textoverlay.log").read_text(encoding="utf-8").splitlines()
            rows = [json.loads(line) for line in lines]
            self.assertEqual([row["event"] for row in rows], ["logging_configured", "unsupported_color"])
            self.assertEqual(rows[1]["color"], "red")


if __name__ == "__main__":
    unittest.main()
