import pytest

from toolhub.config import Settings
from toolhub.domain.status import ToolId, ToolState, ToolStatus


def test_ai_offline_without_key():
    status = ToolStatus.from_settings(Settings())
    assert status.is_online(ToolId.word_count)
    assert status.is_online(ToolId.generate_uuid)
    assert not status.is_online(ToolId.ai_tool)


def test_ai_online_with_key():
    status = ToolStatus.from_settings(Settings(ai_api_key="k"))
    assert status.is_online(ToolId.ai_tool)


def test_as_dict_lists_every_tool():
    status = ToolStatus({"word-count": "online"})
    assert status.as_dict() == {
        "word-count": {"status": "online"},
        "generate-uuid": {"status": "offline"},
        "ai-tool": {"status": "offline"},
    }


def test_states_cannot_be_mutated():
    status = ToolStatus({ToolId.word_count: ToolState.online})
    with pytest.raises(TypeError):
        status.states[ToolId.word_count] = ToolState.offline  # type: ignore[index]
    assert status.state_of(ToolId.word_count) is ToolState.online
