import os
from unittest import mock

from django.test import SimpleTestCase

from questions.config import RecordRTCConfig, get_config
from questions.defaults import SessionFieldDefaults
from questions.exceptions import ConfigurationError


class RecordRTCConfigTests(SimpleTestCase):

    def setUp(self):
        get_config.cache_clear()
        self.addCleanup(get_config.cache_clear)

    @mock.patch.dict(os.environ, {"RECORDRTC_AUDIOTIMELIMIT": "120", "RECORDRTC_VIDEOTIMELIMIT": "60"})
    def test_limits_from_environment(self):
        config = get_config()
        self.assertEqual(config.audiotimelimit, 120)
        self.assertEqual(config.videotimelimit, 60)

    def test_config_is_cached(self):
        self.assertIs(get_config(), get_config())

    @mock.patch.dict(os.environ, {"RECORDRTC_VIDEOTIMELIMIT": "0"})
    def test_invalid_limit(self):
        with self.assertRaises(ConfigurationError) as ctx:
            get_config()
        self.assertTrue(ctx.exception.context["errors"])
        self.assertIn("ConfigurationError", ctx.exception.to_json())

    @mock.patch.dict(os.environ, {"RECORDRTC_DEFAULT_MEDIATYPE": "screen"})
    def test_invalid_default_media_type(self):
        with self.assertRaises(ConfigurationError):
            get_config()

    def test_field_default(self):
        config = RecordRTCConfig(default_mediatype="video", default_timelimitinseconds=90)
        self.assertEqual(config.field_default("mediatype"), "video")
        self.assertEqual(config.field_default("timelimitinseconds"), 90)
        self.assertIsNone(config.field_default("unknown"))


class SessionFieldDefaultsTests(SimpleTestCase):

    def test_precedence(self):
        config = RecordRTCConfig(default_mediatype="video")
        self.assertEqual(SessionFieldDefaults({"recordrtc_mediatype": "customav"}, config).get("mediatype", "audio"),
                         "customav")
        self.assertEqual(SessionFieldDefaults({}, config).get("mediatype", "audio"), "video")
        self.assertEqual(SessionFieldDefaults({}).get("mediatype", "audio"), "audio")

    def test_save_remembers_recording_fields(self):
        session = {}
        SessionFieldDefaults(session).save({"mediatype": "video", "timelimitinseconds": 45, "name": "Q"})
        self.assertEqual(session, {"recordrtc_mediatype": "video", "recordrtc_timelimitinseconds": 45})
