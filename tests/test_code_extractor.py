import unittest

from alert_relay.core.types import Market
from alert_relay.modules.message.extractor import CodeExtractor, distinct_codes, extract_codes


class CodeExtractorTest(unittest.TestCase):
    def test_single_code_with_trailing_comma(self):
        text = "标的: 159565, 周期: 5, 买信号!"
        matches = extract_codes(text)

        self.assertEqual(len(matches), 1)
        match = matches[0]
        self.assertEqual(match.code, "159565")
        self.assertEqual(match.span, "标的: 159565")
        self.assertEqual(text[match.start : match.end], match.span)
        self.assertEqual(match.label, "标的")
        self.assertEqual(match.market, Market.SZ)

    def test_colon_and_spacing_variants(self):
        for text in ("标的:600519", "标的：600519", "标的 : 600519", "标的 ：600519，周期：15"):
            matches = extract_codes(text)
            self.assertEqual([m.code for m in matches], ["600519"], text)

    def test_code_at_line_end_in_multiline_text(self):
        text = "策略提醒\n标的: 00700\n价格: 380.2"
        matches = extract_codes(text)

        self.assertEqual([m.code for m in matches], ["00700"])
        self.assertEqual(matches[0].market, Market.HK)

    def test_every_occurrence_is_found(self):
        text = "标的: 600519\n信号: 买\n标的: 000001\n信号: 卖\n标的: 600519\n信号: 止损"
        matches = extract_codes(text)

        self.assertEqual([m.code for m in matches], ["600519", "000001", "600519"])
        self.assertEqual(distinct_codes(matches), ["600519", "000001"])

    def test_already_formatted_spans_are_skipped(self):
        extractor = CodeExtractor()
        for text in (
            "标的:恒生科技(159565)\n周期: 5",
            "标的：贵州茅台（600519）",
            "标的: 腾讯控股 ( 00700 )",
            "标的:(159565)",
        ):
            self.assertEqual(extractor.extract(text), [], text)
            self.assertTrue(extractor.is_formatted(text), text)

    def test_mixed_formatted_and_plain(self):
        text = "标的:贵州茅台(600519)\n标的: 000001, 信号: 买"
        matches = extract_codes(text)

        self.assertEqual([m.code for m in matches], ["000001"])

    def test_numbers_elsewhere_are_ignored(self):
        text = "标的: 600519, 价格(100), 周期: 5"
        matches = extract_codes(text)

        self.assertEqual([m.code for m in matches], ["600519"])
        self.assertEqual(extract_codes("价格: 600519\n数量: 100"), [])

    def test_rejects_long_digit_runs_and_attached_text(self):
        self.assertEqual(extract_codes("标的: 1234567"), [])
        self.assertEqual(extract_codes("标的: 600519ABC"), [])
        self.assertEqual(extract_codes("标的: AAPL"), [])

    def test_match_does_not_cross_lines(self):
        self.assertEqual(extract_codes("标的:\n600519"), [])

    def test_custom_label_synonyms(self):
        extractor = CodeExtractor(["标的", "代码", "股票代码"])
        matches = extractor.extract("股票代码: 300750, 代码：600000")

        self.assertEqual([(m.label, m.code) for m in matches], [("股票代码", "300750"), ("代码", "600000")])

    def test_permissive_shanghai_classification(self):
        matches = CodeExtractor(permissive_sh=True).extract("标的: 830799")
        self.assertEqual(matches[0].market, Market.SH)


if __name__ == "__main__":
    unittest.main()
