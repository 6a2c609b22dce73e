import copy
from types import SimpleNamespace

import pytest

VALID_PAYLOAD = {
    "product_name": "Crispy Potato Chips",
    "detected_ingredients_text": "Potato, vegetable oil, salt",
    "health_score": 62,
    "halal_analysis": {"status": "Halal Safe", "reason": "MUI logo present"},
    "allergen_list": ["Soy"],
    "nutrition_summary": {"sugar_g": 1.5, "sugar_teaspoons": 0.4},
    "alerts": [
        {"name": "High Sodium", "category": "Health", "risk": "Salty snack", "severity": "Medium"},
    ],
    "healthy_alternatives": [
        {"name": "Baked Veggie Chips", "reason": "Less oil"},
    ],
    "brief_conclusion": "Fine as an occasional snack.",
}


@pytest.fixture
def payload():
    return copy.deepcopy(VALID_PAYLOAD)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Stands in for openai.OpenAI: only chat.completions.create is used."""

    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_openai():
    return FakeOpenAI
