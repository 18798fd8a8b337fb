"""
Translation boundary.

Only a pass-through placeholder exists today: text is echoed back with a bracketed
note naming the target language. Swap `translator` for a real backend client
without touching the routes.
"""

SUPPORTED_LANGUAGES = [
    {"code": "en", "name": "English", "nativeName": "English"},
    {"code": "zu", "name": "Zulu", "nativeName": "isiZulu"},
    {"code": "st", "name": "Southern Sotho", "nativeName": "Sesotho"},
    {"code": "tn", "name": "Tswana", "nativeName": "Setswana"},
]

PENDING_NOTE = "Translation API integration pending"


class PassthroughTranslator:
    def translate(self, text: str, target_language: str, source_language: str | None = None) -> dict:
        if source_language and source_language == target_language:
            return {
                "originalText": text,
                "translatedText": text,
                "sourceLanguage": source_language,
                "targetLanguage": target_language,
            }
        return {
            "originalText": text,
            "translatedText": f"[Translation to {target_language}]: {text}",
            "sourceLanguage": source_language or "auto",
            "targetLanguage": target_language,
            "note": PENDING_NOTE,
        }

    def translate_many(self, texts: list[str], target_language: str, source_language: str | None = None) -> list[dict]:
        return [self.translate(t, target_language, source_language) for t in texts]

    def detect(self, text: str) -> dict:
        return {
            "text": text,
            "language": "en",
            "confidence": 0.95,
            "note": "Language detection API integration pending",
        }

    def tag(self, text: str | None, target_language: str) -> str:
        return f"[{target_language}] {text or ''}".rstrip()


translator = PassthroughTranslator()
