import pytest
from pydantic import ValidationError

from narrator.core.models.narration import ConversationTurn, NarrationRequest
from narrator.core.models.storyboard import ReactionInput, ShareStoryInput


def test_narration_request_defaults():
    request = NarrationRequest()
    assert request.history == []
    assert request.user_turn == ""
    assert request.mood == "default"
    assert request.drama == 3


def test_narration_request_accepts_camel_case_and_snake_case():
    assert NarrationRequest(**{"userTurn": "go north"}).user_turn == "go north"
    assert NarrationRequest(user_turn="go south").user_turn == "go south"


def test_narration_request_nulls_become_defaults():
    request = NarrationRequest(**{"history": None, "userTurn": None, "mood": None})
    assert request.history == []
    assert request.user_turn == ""
    assert request.mood is None


def test_drama_is_not_validated_here():
    assert NarrationRequest(drama="loud").drama == "loud"


def test_conversation_turn_is_kept_as_sent():
    turn = ConversationTurn(**{"content": "hi", "name": "bob"})
    assert turn.role is None
    assert turn.as_input() == {"content": "hi", "name": "bob"}

    parts = [{"type": "input_text", "text": "hi"}]
    assert ConversationTurn(role="user", content=parts).as_input() == {
        "role": "user",
        "content": parts,
    }


def test_mood_and_user_turn_are_stringified():
    request = NarrationRequest(**{"mood": 5, "userTurn": 42})
    assert request.mood == "5"
    assert request.user_turn == "42"


def test_history_entries_must_be_objects():
    with pytest.raises(ValidationError):
        NarrationRequest(history=["hi"])


def test_storyboard_inputs_are_lenient():
    assert ShareStoryInput().title is None
    reaction = ReactionInput(story_id="s1", value="1")
    assert reaction.value == "1"
    assert reaction.client_id is None
