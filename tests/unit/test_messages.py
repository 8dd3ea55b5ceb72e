import pytest

from domain.services.messages import MESSAGES, translate


class TestTranslate:
    def test_english_and_vietnamese(self):
        assert translate("error_occurred", "en") == "An error occurred"
        assert translate("error_occurred", "vn") == "Đã xảy ra lỗi"

    def test_unknown_language_falls_back_to_english(self):
        assert translate("ai_service_overloaded", "fr") == translate("ai_service_overloaded", "en")

    def test_parameters(self):
        assert translate("search_http_error_snippet", "en", status=429) == (
            "The search request failed with status code 429."
        )

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            translate("no_such_message")

    def test_every_message_has_both_languages(self):
        for key, entry in MESSAGES.items():
            assert entry.get("en"), key
            assert entry.get("vn"), key
