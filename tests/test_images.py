from __future__ import annotations

import unittest

from blog_content.images import first_image_src, resolve_image


class TestImages(unittest.TestCase):
    def test_front_matter_image_wins(self) -> None:
        html = '<p><img src="body.png" alt="x" /></p>'
        self.assertEqual(resolve_image("cover.jpg", html), "cover.jpg")

    def test_falls_back_to_first_img(self) -> None:
        html = '<p>intro</p><img src="x.png"><img src="y.png">'
        self.assertEqual(resolve_image(None, html), "x.png")

    def test_none_when_no_image(self) -> None:
        self.assertIsNone(resolve_image(None, "<h1>Hi</h1>"))
        self.assertIsNone(resolve_image(None, ""))

    def test_attribute_order_and_quoting(self) -> None:
        html = "<img alt='a' class=\"c\" src='single.png'>"
        self.assertEqual(first_image_src(html), "single.png")

    def test_ignores_script_src(self) -> None:
        html = '<script src="app.js"></script><p><img alt="" src="pic.png"></p>'
        self.assertEqual(first_image_src(html), "pic.png")

    def test_skips_img_without_src(self) -> None:
        html = '<img alt="missing"><img src="real.png">'
        self.assertEqual(first_image_src(html), "real.png")

    def test_body_scan_can_be_disabled(self) -> None:
        html = '<img src="x.png">'
        self.assertIsNone(resolve_image(None, html, scan_body=False))
        self.assertEqual(resolve_image("c.png", html, scan_body=False), "c.png")


if __name__ == "__main__":
    unittest.main()
