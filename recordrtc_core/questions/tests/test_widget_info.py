from django.test import SimpleTestCase

from questions.widget_info import WidgetInfo, duration_to_string, format_time, make_placeholder, parse_duration


class DurationFormatTests(SimpleTestCase):

    def test_duration_to_string_uses_shortest_form(self):
        self.assertEqual(duration_to_string(120), "2m")
        self.assertEqual(duration_to_string(90), "1m30s")
        self.assertEqual(duration_to_string(45), "45s")

    def test_parse_duration(self):
        self.assertEqual(parse_duration("2m"), 120)
        self.assertEqual(parse_duration("1m30s"), 90)
        self.assertEqual(parse_duration("45s"), 45)
        self.assertIsNone(parse_duration(""))
        self.assertIsNone(parse_duration("90"))
        self.assertIsNone(parse_duration("1h"))
        self.assertIsNone(parse_duration(" 2m"))
        self.assertIsNone(parse_duration("2m\n"))

    def test_format_time(self):
        self.assertEqual(format_time(600), "10 mins")
        self.assertEqual(format_time(90), "1 min 30 secs")
        self.assertEqual(format_time(30), "30 secs")
        self.assertEqual(format_time(1), "1 sec")


class PlaceholderTests(SimpleTestCase):

    def test_make_placeholder(self):
        self.assertEqual(make_placeholder("recorder1", "audio", 120), "[[recorder1:audio:2m]]")
        self.assertEqual(make_placeholder("recorder2", "video", 90), "[[recorder2:video:1m30s]]")

    def test_widget_placeholder_without_duration(self):
        self.assertEqual(WidgetInfo("answer", "audio").placeholder, "[[answer:audio]]")
        self.assertEqual(WidgetInfo("answer", "video", 45).placeholder, "[[answer:video:45s]]")
