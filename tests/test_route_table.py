import json
import unittest

from alert_relay.config import RouteConfig
from alert_relay.services.route_table import RouteTable, parse_webhook_config


class RouteTableTest(unittest.TestCase):
    def test_parse_webhook_config(self):
        raw = json.dumps(
            {
                "team": {"url": "https://qyapi.example/send?key=1", "type": "wecom"},
                "bot": {"url": "https://hooks.example/raw"},
                "broken": "not-an-object",
            }
        )
        routes = parse_webhook_config(raw)

        self.assertEqual(set(routes), {"team", "bot"})
        self.assertEqual(routes["team"].type, "wecom")
        self.assertEqual(routes["bot"].type, "raw")

    def test_invalid_json_yields_empty_table(self):
        with self.assertLogs("alert_relay.services.route_table", level="ERROR"):
            self.assertEqual(parse_webhook_config("{not json"), {})
        with self.assertLogs("alert_relay.services.route_table", level="ERROR"):
            self.assertEqual(parse_webhook_config("[1, 2]"), {})

    def test_route_for(self):
        table = RouteTable(
            {
                "team": RouteConfig(url="https://qyapi.example/send", type="WeCom"),
                "empty": RouteConfig(url="  "),
            }
        )

        route = table.route_for("team")
        self.assertEqual(route.key, "team")
        self.assertEqual(route.type, "wecom")
        self.assertIsNone(table.route_for("empty"))
        self.assertIsNone(table.route_for("missing"))

    def test_env_routes_override_file_routes(self):
        table = RouteTable.from_sources(
            file_routes={
                "team": RouteConfig(url="https://file.example/team"),
                "ops": RouteConfig(url="https://file.example/ops"),
            },
            env_value=json.dumps({"team": {"url": "https://env.example/team", "type": "wecom"}}),
        )

        self.assertEqual(table.route_for("team").url, "https://env.example/team")
        self.assertEqual(table.route_for("ops").url, "https://file.example/ops")
        self.assertEqual(table.keys(), ["ops", "team"])

    def test_missing_env_logs_warning(self):
        with self.assertLogs("alert_relay.services.route_table", level="WARNING"):
            table = RouteTable.from_sources(file_routes={}, env_value=None)
        self.assertEqual(table.keys(), [])

    def test_describe_hides_urls(self):
        table = RouteTable({"team": RouteConfig(url="https://secret.example/x", type="wecom")})
        self.assertEqual(table.describe(), [{"key": "team", "type": "wecom", "configured": True}])


if __name__ == "__main__":
    unittest.main()
