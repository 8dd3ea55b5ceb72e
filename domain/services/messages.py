"""Localized user-facing strings.

Only English ("en") and Vietnamese ("vn") are translated; any other language
code falls back to English.
"""

from typing import Dict

DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "search_missing_api_key_title": {
        "en": "API configuration error",
        "vn": "Lỗi cấu hình API",
    },
    "search_missing_api_key_snippet": {
        "en": "SEARCH_API_KEY (Google CSE API key) is not configured in the environment. Please check the .env file.",
        "vn": "SEARCH_API_KEY (Google CSE API Key) chưa được cấu hình trong biến môi trường. Vui lòng kiểm tra tệp .env.",
    },
    "search_missing_engine_id_title": {
        "en": "CSE ID configuration error",
        "vn": "Lỗi cấu hình CSE ID",
    },
    "search_missing_engine_id_snippet": {
        "en": "SEARCH_ENGINE_ID (Google CSE ID) is not configured in the environment. Please check the .env file.",
        "vn": "SEARCH_ENGINE_ID (Google CSE ID) chưa được cấu hình trong biến môi trường. Vui lòng kiểm tra tệp .env.",
    },
    "search_http_error_title": {
        "en": "Web search error",
        "vn": "Lỗi khi tìm kiếm trên Web",
    },
    "search_http_error_snippet": {
        "en": "The search request failed with status code {status}.",
        "vn": "Yêu cầu tìm kiếm thất bại với mã lỗi {status}.",
    },
    "search_http_error_detail": {
        "en": " Details: {detail}",
        "vn": " Chi tiết: {detail}",
    },
    "search_execution_error_title": {
        "en": "Web search execution error",
        "vn": "Lỗi thực thi tìm kiếm trên Web",
    },
    "search_execution_error_snippet": {
        "en": "An error occurred while performing the search: {error}",
        "vn": "Đã xảy ra lỗi khi thực hiện tìm kiếm: {error}",
    },
    "expand_off_topic_warning": {
        "en": "The provided text does not appear to be related to energy audits. The expansion below may not be relevant.",
        "vn": "Nội dung được cung cấp có vẻ không liên quan đến kiểm toán năng lượng. Phần mở rộng dưới đây có thể không phù hợp.",
    },
    "error_occurred": {
        "en": "An error occurred",
        "vn": "Đã xảy ra lỗi",
    },
    "ai_service_overloaded": {
        "en": "The AI service is currently overloaded or unavailable. Please try again in a few moments.",
        "vn": "Dịch vụ AI hiện đang quá tải hoặc không khả dụng. Vui lòng thử lại sau ít phút.",
    },
}


def translate(key: str, language: str = DEFAULT_LANGUAGE, **params: object) -> str:
    """Look up ``key`` in ``language`` and fill in ``params``.

    Raises KeyError for an unknown message key.
    """
    entry = MESSAGES[key]
    text = entry.get(language) or entry[DEFAULT_LANGUAGE]
    return text.format(**params) if params else text
