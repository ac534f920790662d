import unittest

from cell_report_extractor.core.model import CellValue, Sample
from cell_report_extractor.core.segmentation import (
    RecordRow,
    extract_sections,
    segment_phases,
    tokenize_record_rows,
)


def _rows(*specs):
    """(mode, t, cap) triples -> RecordRow list; None marks an unparseable field."""
    return [RecordRow(m, t, c) for m, t, c in specs]


def _sheet_row(mode, t, cap, width=14):
    row = [None] * width
    row[4], row[7], row[13] = mode, t, cap
    return [CellValue.from_raw(v) for v in row]


class SegmentPhasesTests(unittest.TestCase):
    def test_repeated_mode_after_rest_gets_suffix(self):
        rows = _rows(("Charge", 0.0, 0.1), ("Still", 5.0, 0.1), ("Charge", 10.0, 0.2))
        sections = segment_phases(rows)
        self.assertEqual(["Charge", "Charge 2"], list(sections))
        self.assertEqual((Sample(0.0, 0.1),), sections["Charge"])
        self.assertEqual((Sample(10.0, 0.2),), sections["Charge 2"])

    def test_unparseable_row_does_not_split_segment(self):
        rows = _rows(("Charge", 0.0, 0.1), (None, 5.0, 0.2), ("Charge", 10.0, 0.3))
        sections = segment_phases(rows)
        self.assertEqual({"Charge": (Sample(0.0, 0.1), Sample(10.0, 0.3))}, sections)

    def test_rest_rows_flush_open_block_and_are_dropped(self):
        rows = _rows(
            ("CC Charge", 0.0, 0.0),
            ("CC Charge", 1.0, 0.5),
            ("Still", 2.0, 0.5),
            ("STILL", 3.0, 0.5),
            ("CC Discharge", 4.0, 0.4),
        )
        sections = segment_phases(rows)
        self.assertEqual(2, len(sections["CC Charge"]))
        self.assertEqual(1, len(sections["CC Discharge"]))
        all_times = [s.relative_time for samples in sections.values() for s in samples]
        self.assertNotIn(2.0, all_times)
        self.assertNotIn(3.0, all_times)

    def test_mode_change_without_rest_starts_new_segment(self):
        rows = _rows(("CC Charge", 0.0, 0.0), ("CV Charge", 1.0, 0.1), ("CC Charge", 2.0, 0.2))
        self.assertEqual(["CC Charge", "CV Charge", "CC Charge 2"], list(segment_phases(rows)))

    def test_third_run_numbered_three(self):
        rows = _rows(("D", 0, 1), ("Still", 1, 1), ("D", 2, 1), ("Still", 3, 1), ("D", 4, 1))
        self.assertEqual(["D", "D 2", "D 3"], list(segment_phases(rows)))

    def test_literal_suffixed_label_does_not_collide(self):
        rows = _rows(("Charge 2", 0, 1), ("Charge", 1, 1), ("Still", 2, 1), ("Charge", 3, 1))
        sections = segment_phases(rows)
        self.assertEqual(3, len(sections))
        self.assertEqual((Sample(0, 1),), sections["Charge 2"])
        self.assertEqual((Sample(3, 1),), sections["Charge 3"])

    def test_empty_and_all_rest_inputs(self):
        self.assertEqual({}, segment_phases([]))
        self.assertEqual({}, segment_phases(_rows(("Still", 0, 0), ("still rest", 1, 0))))

    def test_single_continuous_mode(self):
        rows = _rows(*[("Discharge", float(i), 0.1 * i) for i in range(5)])
        sections = segment_phases(rows)
        self.assertEqual(["Discharge"], list(sections))
        self.assertEqual(5, len(sections["Discharge"]))

    def test_sample_count_conservation(self):
        rows = _rows(
            ("A", 0, 0), ("A", 1, None), ("B", 2, 1), ("Still", 3, 1),
            ("B", None, 1), ("B", 5, 2), ("A", 6, 3), (None, None, None),
        )
        expected = sum(1 for r in rows if r.is_valid and "still" not in r.mode.lower())
        sections = segment_phases(rows)
        self.assertEqual(expected, sum(len(s) for s in sections.values()))
        self.assertTrue(all(len(s) > 0 for s in sections.values()))


class TokenizerTests(unittest.TestCase):
    def test_reads_fixed_columns_and_coerces_numeric_text(self):
        tokens = tokenize_record_rows([_sheet_row("  CC Charge ", "12.5", 3)])
        self.assertEqual(RecordRow("CC Charge", 12.5, 3.0), tokens[0])

    def test_blank_or_numeric_mode_and_bad_numbers_are_missing(self):
        tokens = tokenize_record_rows([
            _sheet_row("   ", 1, 1),
            _sheet_row(7, 1, 1),
            _sheet_row("Charge", "abc", 1),
        ])
        self.assertIsNone(tokens[0].mode)
        self.assertIsNone(tokens[1].mode)
        self.assertIsNone(tokens[2].relative_time)
        self.assertFalse(any(t.is_valid for t in tokens))

    def test_short_rows_are_missing_not_errors(self):
        short = [CellValue.from_raw(v) for v in (None, None, None, None, "Charge")]
        self.assertEqual(RecordRow("Charge", None, None), tokenize_record_rows([short])[0])

    def test_extract_sections_skips_header(self):
        header = [CellValue.from_raw(h) for h in ["h"] * 14]
        rows = [header, _sheet_row("Charge", 0, 0.0), _sheet_row("Charge", 10, 1.2)]
        self.assertEqual({"Charge": (Sample(0, 0.0), Sample(10, 1.2))}, extract_sections(rows))
        self.assertEqual({}, extract_sections([header]))
        self.assertEqual({}, extract_sections([]))


if __name__ == "__main__":
    unittest.main()
