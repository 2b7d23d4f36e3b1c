import pytest

from narrator.core.engine.style import (
    BASE_STYLE,
    DRAMA_INSTRUCTIONS,
    build_system_prompt,
    drama_instructions,
    drama_temperature,
    mood_clause,
    normalize_drama,
    normalize_mood,
)


@pytest.mark.parametrize(
    "drama, expected",
    [
        ("1", 0.4),
        ("2", 0.55),
        ("3", 0.7),
        ("4", 0.85),
        ("5", 1.0),
        (1, 0.4),
        (5, 1.0),
        (4.0, 0.85),
    ],
)
def test_drama_temperature_levels(drama, expected):
    assert drama_temperature(drama) == expected


@pytest.mark.parametrize(
    "drama", ["9", 9, 0, "0", "-1", "abc", None, "", " 3", "3.5", 3.5, True, []]
)
def test_unknown_drama_uses_level_three(drama):
    assert normalize_drama(drama) == "3"
    assert drama_temperature(drama) == 0.7
    assert drama_instructions(drama) == DRAMA_INSTRUCTIONS["3"]


def test_each_level_has_its_own_instruction():
    assert len(set(DRAMA_INSTRUCTIONS.values())) == 5
    assert drama_instructions(1).startswith("Narration style: Write very plain")
    assert "professional novelist" in drama_instructions("5")


@pytest.mark.parametrize("mood", ["default", None, ""])
def test_no_mood_clause_for_default(mood):
    assert normalize_mood(mood) is None
    assert mood_clause(mood) == ""


def test_mood_clause_names_the_mood():
    clause = mood_clause("horror")
    assert clause.startswith("Mood/Genre: This is a horror story.")
    assert "horror conventions, tone, and atmosphere" in clause
    # only the exact sentinel disables the clause
    assert mood_clause("Default") != ""


def test_system_prompt_layout():
    prompt = build_system_prompt("noir", "4")
    assert prompt.startswith(BASE_STYLE)
    assert prompt.endswith(DRAMA_INSTRUCTIONS["4"])
    assert "\n\nMood/Genre: This is a noir story." in prompt


def test_system_prompt_without_mood():
    prompt = build_system_prompt("default", 3)
    assert prompt == f"{BASE_STYLE}\n\n{DRAMA_INSTRUCTIONS['3']}"
    assert "Mood/Genre" not in prompt
