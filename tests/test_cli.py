import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from alert_relay.cli import app


class CliTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.env = {
            "ALERT_RELAY_CONFIG_FILE": str(Path(self._tmpdir.name) / "settings.yaml"),
            "WEBHOOK_CONFIG": '{"team": {"url": "https://qyapi.example/send", "type": "wecom"}}',
        }
        self.runner = CliRunner()

    def test_classify(self):
        result = self.runner.invoke(app, ["classify", "600519", "700", "AAPL"], env=self.env)

        self.assertEqual(result.exit_code, 0, result.output)
        rows = [line.split() for line in result.output.splitlines()]
        self.assertTrue(any("600519" in row and "SH" in row for row in rows), result.output)
        self.assertTrue(any("700" in row and "HK" in row for row in rows), result.output)
        self.assertTrue(any("AAPL" in row and "UNKNOWN" in row for row in rows), result.output)

    def test_process_without_lookup(self):
        result = self.runner.invoke(
            app,
            ["process", "标的: 159565, 周期: 5, 买信号!", "--no-lookup"],
            env=self.env,
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("标的: 159565\n周期: 5, 买信号!", result.output)

    def test_process_requires_input(self):
        result = self.runner.invoke(app, ["process"], env=self.env)
        self.assertNotEqual(result.exit_code, 0)

    def test_init_config_writes_file(self):
        result = self.runner.invoke(app, ["init-config"], env=self.env)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(Path(self.env["ALERT_RELAY_CONFIG_FILE"]).exists())


if __name__ == "__main__":
    unittest.main()
