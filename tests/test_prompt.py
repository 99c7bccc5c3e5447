from datetime import date

from agent.prompt import get_coach_prompt


def test_prompt_names_every_tool_and_today():
    prompt = get_coach_prompt()

    assert date.today().isoformat() in prompt
    for tool in (
        "get_api_specification",
        "get_deployment_guide",
        "explain_authentication_model",
        "get_auth_token",
        "create_env_file",
    ):
        assert tool in prompt
