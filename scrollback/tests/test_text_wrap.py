import unittest

from scrollback import text_wrap


class TestWrapBreakPoints(unittest.TestCase):
    def test_short_text_is_one_line(self):
        self.assertEqual(text_wrap.wrap("hello", 10), ["hello"])
        self.assertEqual(text_wrap.wrap("hello", 5), ["hello"])

    def test_breaks_at_last_space_before_width(self):
        self.assertEqual(text_wrap.wrap("hello world foo", 11), ["hello world", "foo"])
        # space sitting exactly at the width column is a valid break
        self.assertEqual(text_wrap.wrap("abcde fgh", 5), ["abcde", "fgh"])

    def test_hard_breaks_words_longer_than_width(self):
        self.assertEqual(text_wrap.wrap("abcdefghij", 4), ["abcd", "efgh", "ij"])

    def test_leading_space_is_not_a_break_point(self):
        self.assertEqual(text_wrap.wrap(" abcdef", 3), [" ab", "cde", "f"])

    def test_continuation_drops_leading_spaces(self):
        # the break column keeps whatever precedes it, extra spaces included
        self.assertEqual(text_wrap.wrap("aa   bb", 3), ["aa ", "bb"])


class TestWrapNewlines(unittest.TestCase):
    def test_explicit_newlines_and_blank_lines(self):
        self.assertEqual(text_wrap.wrap("a\n\nb", 10), ["a", "", "b"])
        self.assertEqual(text_wrap.wrap("a\n", 10), ["a", ""])

    def test_empty_text_is_one_empty_line(self):
        self.assertEqual(text_wrap.wrap("", 10), [""])
        self.assertEqual(text_wrap.height("", 10), 1)

    def test_each_paragraph_wraps_on_its_own(self):
        self.assertEqual(text_wrap.wrap("one two\nthree four", 5), ["one", "two", "three", "four"])


class TestWrapDegenerateWidth(unittest.TestCase):
    def test_non_positive_width_means_one(self):
        self.assertEqual(text_wrap.wrap("abc", 0), ["a", "b", "c"])
        self.assertEqual(text_wrap.wrap("a b", -3), ["a", "b"])
        self.assertEqual(text_wrap.height("abc", 0), 3)


class TestWrapProperties(unittest.TestCase):
    PARAGRAPH = "the quick brown fox jumps over the lazy dog and keeps on running"

    def test_lines_fit_width(self):
        for w in range(1, 30):
            for line in text_wrap.wrap(self.PARAGRAPH, w):
                self.assertLessEqual(len(line), w)

    def test_rejoin_restores_paragraph(self):
        # widths at least as long as the longest word never hard-break
        for w in range(7, 70):
            lines = text_wrap.wrap(self.PARAGRAPH, w)
            self.assertEqual(" ".join(lines), self.PARAGRAPH, msg=f"width={w}")

    def test_height_matches_line_count(self):
        for w in (3, 8, 20, 200):
            self.assertEqual(text_wrap.height(self.PARAGRAPH, w), len(text_wrap.wrap(self.PARAGRAPH, w)))
            self.assertGreaterEqual(text_wrap.height(self.PARAGRAPH, w), 1)


if __name__ == "__main__":
    unittest.main()
