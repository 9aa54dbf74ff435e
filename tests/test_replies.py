from __future__ import annotations

import pytest

from healthmate.services.chat.replies import ReplyResolver, resolve, resolver

DIABETES_QUESTION = "糖尿病患者如何选择降糖药？"
DIABETES_REPLY = (
    "选择降糖药物需要考虑以下几个方面：\n1. 血糖水平和类型\n2. 年龄和身体状况\n"
    "3. 并发症情况\n4. 用药禁忌\n建议在医生指导下选择合适的降糖药物。"
)
FALLBACK = "您好，我是小美AI助手。您的问题是关于健康方面的吗？我可以为您提供专业的健康咨询和建议。"


def test_known_question_returns_predefined_reply():
    assert resolve(DIABETES_QUESTION) == DIABETES_REPLY


def test_unknown_text_returns_fallback():
    assert resolve("random unmapped text") == FALLBACK


def test_lookup_is_exact_match():
    assert resolve(f" {DIABETES_QUESTION}") == FALLBACK
    assert resolve(DIABETES_QUESTION.rstrip("？")) == FALLBACK


def test_every_reply_is_non_empty():
    assert resolve("") == FALLBACK
    assert len(resolver.replies) == 3
    for question in resolver.replies:
        assert resolve(question)


def test_reply_table_is_read_only():
    with pytest.raises(TypeError):
        resolver.replies["new question"] = "new answer"


def test_custom_table_and_fallback():
    custom = ReplyResolver({"hi": "hello"}, "sorry")
    assert custom.resolve("hi") == "hello"
    assert custom.resolve("bye") == "sorry"


def test_empty_fallback_is_rejected():
    with pytest.raises(ValueError):
        ReplyResolver({"hi": "hello"}, "")
