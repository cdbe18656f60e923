"""
Tests for the emotion taxonomy.

Run with: python -m pytest tests/test_emotion_mapping.py -v
"""

import pytest

from mood_analyzer.utils.emotion_mapping import (
    EMOTION_MAPPINGS,
    EmotionCategory,
    calculate_emotional_severity,
    emoji_for,
    map_emotion_to_category,
    resolve_emotion,
)


class TestTaxonomyTable:
    """Shape of the static emotion table."""

    def test_twelve_unique_emotions(self):
        ids = [m.id for m in EMOTION_MAPPINGS]
        assert len(ids) == 12
        assert len(set(ids)) == 12

    def test_values_and_severity_in_range(self):
        for emotion in EMOTION_MAPPINGS:
            assert 1 <= emotion.value <= 5
            assert 1 <= emotion.severity <= 5

    def test_all_categories_and_full_value_spread(self):
        assert {m.category for m in EMOTION_MAPPINGS} == set(EmotionCategory)
        assert {m.value for m in EMOTION_MAPPINGS} == {1, 2, 3, 4, 5}

    def test_ordered_most_positive_first(self):
        values = [m.value for m in EMOTION_MAPPINGS]
        assert values == sorted(values, reverse=True)

    def test_descriptors_are_immutable(self):
        emotion = map_emotion_to_category("calm")
        with pytest.raises(AttributeError):
            emotion.value = 1


class TestLookup:
    """Known and unknown ids."""

    def test_known_id(self):
        emotion = map_emotion_to_category("devastated")
        assert emotion is not None
        assert emotion.name == "Devastated"
        assert emotion.category == EmotionCategory.CONCERNING
        assert emotion.value == 1
        assert emotion.severity == 5
        assert "hopeless" in emotion.keywords

    def test_unknown_id_raw_lookup_is_none(self):
        assert map_emotion_to_category("bewildered") is None

    @pytest.mark.parametrize("mood_id", ["", "bewildered", "JOYFUL"])
    def test_unknown_id_resolves_to_neutral_default(self, mood_id):
        emotion = resolve_emotion(mood_id)
        assert emotion.value == 3
        assert emotion.severity == 3
        assert emotion.category == EmotionCategory.NEUTRAL
        assert emotion.keywords == ()

    def test_emoji_fallback(self):
        assert emoji_for("sad") == "😢"
        assert emoji_for("mystery") == "😐"

    def test_to_dict_uses_plain_values(self):
        d = resolve_emotion("tired").to_dict()
        assert d["category"] == "negative"
        assert d["keywords"] == ["exhausted", "drained", "fatigued", "weary"]


class TestEmotionalSeverity:
    def test_mean_severity_rounded(self):
        # (1 + 4 + 5) / 3 = 3.33
        assert calculate_emotional_severity(["joyful", "sad", "devastated"]) == 3

    def test_half_rounds_up(self):
        # (4 + 5) / 2 = 4.5
        assert calculate_emotional_severity(["anxious", "devastated"]) == 5

    def test_unknown_counts_as_three(self):
        assert calculate_emotional_severity(["unknown", "calm"]) == 2

    def test_empty_input_rejected(self):
        with pytest.raises(ValueError):
            calculate_emotional_severity([])
