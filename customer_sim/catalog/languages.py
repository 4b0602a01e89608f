"""The six languages a customer can speak, with their stock phrases."""

import logging
from typing import Optional

from customer_sim.schemas.customer_schema import LanguageOption

logger = logging.getLogger(__name__)

LANGUAGE_OPTIONS: tuple[LanguageOption, ...] = (
    LanguageOption(
        code="en",
        name="English",
        flag="🇺🇸",
        country="United States",
        greeting="Hello",
        goodbye="Goodbye",
        common_phrases=("Thank you", "Sorry", "No problem", "Okay"),
    ),
    LanguageOption(
        code="vi",
        name="Tiếng Việt",
        flag="🇻🇳",
        country="Vietnam",
        greeting="Xin chào",
        goodbye="Tạm biệt",
        common_phrases=("Cảm ơn", "Xin lỗi", "Không sao", "Được rồi"),
    ),
    LanguageOption(
        code="ko",
        name="한국어",
        flag="🇰🇷",
        country="South Korea",
        greeting="안녕하세요",
        goodbye="안녕히 가세요",
        common_phrases=("감사합니다", "죄송합니다", "괜찮습니다", "네"),
    ),
    LanguageOption(
        code="ja",
        name="日本語",
        flag="🇯🇵",
        country="Japan",
        greeting="こんにちは",
        goodbye="さようなら",
        common_phrases=("ありがとう", "すみません", "大丈夫", "はい"),
    ),
    LanguageOption(
        code="zh",
        name="中文",
        flag="🇨🇳",
        country="China",
        greeting="你好",
        goodbye="再见",
        common_phrases=("谢谢", "对不起", "没关系", "好的"),
    ),
    LanguageOption(
        code="th",
        name="ไทย",
        flag="🇹🇭",
        country="Thailand",
        greeting="สวัสดี",
        goodbye="ลาก่อน",
        common_phrases=("ขอบคุณ", "ขอโทษ", "ไม่เป็นไร", "ได้"),
    ),
)

# Body of the first line a new customer says, appended to the greeting.
OPENING_LINES: dict[str, str] = {
    "en": "I want to eat here. Do you have any empty tables?",
    "vi": "Tôi muốn ăn ở đây. Có bàn trống không ạ?",
    "ko": "여기서 식사하고 싶습니다. 빈 테이블이 있나요?",
    "ja": "ここで食事をしたいです。空いているテーブルはありますか？",
    "zh": "我想在这里吃饭。有空桌子吗？",
    "th": "ฉันอยากทานอาหารที่นี่ มีโต๊ะว่างไหม?",
}

# Short walk-out lines quoted to the model as examples of an offended exit.
OFFENDED_FAREWELLS: dict[str, str] = {
    "vi": "Xin lỗi, thái độ như vậy thật không phù hợp. Tôi sẽ rời đi.",
    "en": "Sorry, that tone is not acceptable. I'm leaving now.",
    "ko": "죄송하지만 그런 말투는 불편하네요. 저는 떠나겠습니다.",
    "ja": "申し訳ありませんが、その言い方は失礼です。失礼します。",
    "zh": "抱歉，这样的语气让我不舒服。我先离开了。",
    "th": "ขอโทษนะคะ/ครับ น้ำเสียงแบบนั้นไม่เหมาะสม ฉันขอลาไปก่อน",
}

_BY_CODE: dict[str, LanguageOption] = {lang.code: lang for lang in LANGUAGE_OPTIONS}


def get_language(code: str) -> Optional[LanguageOption]:
    """Look up a language by its code (case-insensitive)."""
    return _BY_CODE.get(code.strip().lower())


def get_all_languages() -> list[LanguageOption]:
    return list(LANGUAGE_OPTIONS)


def get_language_codes() -> list[str]:
    return [lang.code for lang in LANGUAGE_OPTIONS]
