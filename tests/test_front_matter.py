from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from blog_content.errors import FrontMatterMalformed, FrontMatterMissing
from blog_content.front_matter import parse_front_matter, split_front_matter


_DOC = """\
---
title: Hello
date: 2023-01-01T00:00:00+00:00
description: First post
---
# Hi
"""


class TestSplitFrontMatter(unittest.TestCase):
    def test_splits_block_and_body(self) -> None:
        block, body = split_front_matter(_DOC)
        self.assertIn("title: Hello", block)
        self.assertNotIn("---", block)
        self.assertEqual(body, "# Hi\n")

    def test_tolerates_crlf_and_bom(self) -> None:
        doc = "\ufeff" + _DOC.replace("\n", "\r\n")
        block, body = split_front_matter(doc)
        self.assertIn("title: Hello", block)
        self.assertEqual(body.strip(), "# Hi")

    def test_requires_marker_on_first_line(self) -> None:
        with self.assertRaises(FrontMatterMissing):
            split_front_matter("\n" + _DOC)
        with self.assertRaises(FrontMatterMissing):
            split_front_matter("# Just markdown\n")

    def test_requires_closing_marker(self) -> None:
        with self.assertRaises(FrontMatterMissing):
            split_front_matter("---\ntitle: Hello\n# Hi\n")


class TestParseFrontMatter(unittest.TestCase):
    def test_parses_required_and_optional_fields(self) -> None:
        fm = parse_front_matter(_DOC)
        self.assertEqual(fm.title, "Hello")
        self.assertEqual(fm.date, datetime(2023, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(fm.description, "First post")
        self.assertIsNone(fm.image)

    def test_keeps_non_utc_offset(self) -> None:
        doc = '---\ntitle: T\ndate: "2023-05-02T10:30:00-07:00"\nimage: cover.png\n---\n'
        fm = parse_front_matter(doc)
        self.assertEqual(fm.date.utcoffset(), timedelta(hours=-7))
        self.assertEqual(fm.image, "cover.png")

    def test_ignores_unknown_keys(self) -> None:
        doc = "---\ntitle: T\ndate: 2023-01-01T00:00:00+00:00\ntags: [a, b]\n---\n"
        fm = parse_front_matter(doc)
        self.assertEqual(fm.title, "T")

    def test_missing_front_matter_is_an_error(self) -> None:
        with self.assertRaises(FrontMatterMissing):
            parse_front_matter("# Hi\n\nNo metadata here.\n", path="p")

    def test_unparsable_date_is_malformed(self) -> None:
        doc = "---\ntitle: T\ndate: last tuesday\n---\n"
        with self.assertRaises(FrontMatterMalformed) as ctx:
            parse_front_matter(doc, path="p")
        self.assertEqual(ctx.exception.path, "p")

    def test_date_without_offset_is_malformed(self) -> None:
        for value in ("2023-01-01", "2023-01-01T00:00:00", "2023-01-01 08:00:00"):
            with self.subTest(value=value):
                with self.assertRaises(FrontMatterMalformed):
                    parse_front_matter(f"---\ntitle: T\ndate: {value}\n---\n")

    def test_missing_or_empty_title_is_malformed(self) -> None:
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter("---\ndate: 2023-01-01T00:00:00+00:00\n---\n")
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter('---\ntitle: "  "\ndate: 2023-01-01T00:00:00+00:00\n---\n')

    def test_wrong_types_are_malformed(self) -> None:
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter("---\ntitle: [a, b]\ndate: 2023-01-01T00:00:00+00:00\n---\n")
        for value in ("1672531200", "1672531200.5", '"1672531200"', "true"):
            with self.subTest(date=value):
                with self.assertRaises(FrontMatterMalformed):
                    parse_front_matter(f"---\ntitle: T\ndate: {value}\n---\n")

    def test_title_is_kept_verbatim(self) -> None:
        fm = parse_front_matter('---\ntitle: "  Spaced Title "\ndate: 2023-01-01T00:00:00+00:00\n---\n')
        self.assertEqual(fm.title, "  Spaced Title ")

    def test_invalid_yaml_or_non_mapping_is_malformed(self) -> None:
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter("---\ntitle: [unclosed\n---\n")
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter("---\n- just\n- a list\n---\n")
        with self.assertRaises(FrontMatterMalformed):
            parse_front_matter("---\n---\n")


if __name__ == "__main__":
    unittest.main()
