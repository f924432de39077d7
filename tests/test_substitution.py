import unittest

from alert_relay.modules.message.extractor import extract_codes
from alert_relay.modules.message.substitution import (
    choose_paren_style,
    explode_fields,
    is_single_line,
    substitute,
)


class SubstitutionTest(unittest.TestCase):
    def test_single_line_becomes_two_line_block(self):
        text = "标的: 159565, 周期: 5, 买信号!"
        result = substitute(text, extract_codes(text), {"159565": "恒生科技"})

        self.assertEqual(result, "标的:恒生科技(159565)\n周期: 5, 买信号!")

    def test_single_line_without_name_keeps_code(self):
        text = "标的: 159565, 周期: 5, 买信号!"
        result = substitute(text, extract_codes(text), {"159565": None})

        self.assertEqual(result, "标的: 159565\n周期: 5, 买信号!")

    def test_multiline_replaces_in_place(self):
        text = "标的: 600519\n周期: 15\n信号: 买入"
        result = substitute(text, extract_codes(text), {"600519": "贵州茅台"})

        self.assertEqual(result, "标的:贵州茅台(600519)\n周期: 15\n信号: 买入")

    def test_multiline_keeps_trailing_fields_on_same_line(self):
        text = "提醒\n标的：000001，信号：卖\n价格：10.5"
        result = substitute(text, extract_codes(text), {"000001": "平安银行"})

        self.assertEqual(result, "提醒\n标的：平安银行（000001），信号：卖\n价格：10.5")

    def test_repeated_code_is_replaced_everywhere(self):
        text = "标的: 600519\n信号: 买\n标的: 600519\n信号: 卖"
        result = substitute(text, extract_codes(text), {"600519": "贵州茅台"})

        self.assertEqual(result.count("标的:贵州茅台(600519)"), 2)

    def test_single_line_batch_splits_per_alert(self):
        text = "批量提醒 标的: 600519, 周期: 5, 标的: 000001, 周期: 15"
        result = substitute(
            text,
            extract_codes(text),
            {"600519": "贵州茅台", "000001": None},
        )

        self.assertEqual(
            result,
            "批量提醒\n标的:贵州茅台(600519)\n周期: 5\n标的: 000001\n周期: 15",
        )

    def test_field_per_line_layout(self):
        text = "标的: 159565, 周期: 5, 当前价格: 0.81, 买信号!"
        result = substitute(
            text,
            extract_codes(text),
            {"159565": "恒生科技"},
            layout="field_per_line",
        )

        self.assertEqual(result, "标的:恒生科技(159565)\n周期: 5\n当前价格: 0.81\n买信号!")

    def test_explode_fields_without_codes(self):
        self.assertEqual(
            explode_fields("AAPL 信号: 买 价格: 190, 原因: 突破"),
            "AAPL\n信号: 买\n价格: 190\n原因: 突破",
        )

    def test_no_matches_returns_text(self):
        self.assertEqual(substitute("ticker: AAPL", [], {}), "ticker: AAPL")

    def test_paren_style_selection(self):
        self.assertEqual(choose_paren_style("标的: 1"), "ascii")
        self.assertEqual(choose_paren_style("标的：1"), "fullwidth")
        self.assertEqual(choose_paren_style("标的：1", "ascii"), "ascii")
        self.assertEqual(choose_paren_style("标的: 1", "fullwidth"), "fullwidth")

    def test_forced_fullwidth_style(self):
        text = "标的: 600519"
        result = substitute(text, extract_codes(text), {"600519": "贵州茅台"}, paren_style="fullwidth")
        self.assertEqual(result, "标的：贵州茅台（600519）")

    def test_is_single_line(self):
        self.assertTrue(is_single_line("  a, b  \n"))
        self.assertFalse(is_single_line("a\nb"))

    def test_detected_layout_is_traced(self):
        single = "标的: 159565, 周期: 5"
        multi = "标的: 600519\n周期: 15"

        with self.assertLogs("alert_relay.modules.message.substitution", level="DEBUG") as logs:
            substitute(single, extract_codes(single), {"159565": "恒生科技"})
            substitute(multi, extract_codes(multi), {"600519": "贵州茅台"})

        self.assertIn("Single-line alert, two_line layout", logs.output[0])
        self.assertIn("Multi-line alert", logs.output[1])


if __name__ == "__main__":
    unittest.main()
