import dataclasses

import pytest

from aicommand.cli import build_parser
from aicommand.config import DEFAULT_MODEL, InvocationRequest, Settings
from aicommand.errors import InvalidLanguageError
from aicommand.prompts import Language


def test_settings_from_empty_environment():
    settings = Settings.load({})

    assert settings.openai_api_key is None
    assert settings.shell is None
    assert settings.base_url is None
    assert settings.default_language is Language.EN
    assert settings.default_model == DEFAULT_MODEL


def test_settings_from_environment():
    settings = Settings.load(
        {
            "OPENAI_API_KEY": " sk-test ",
            "OPENAI_BASE_URL": "http://localhost:8080/v1",
            "SHELL": "/bin/zsh",
            "LANG": "ja_JP.UTF-8",
            "AICOMMAND_MODEL": "gpt-4o",
        }
    )

    assert settings.openai_api_key == "sk-test"
    assert settings.base_url == "http://localhost:8080/v1"
    assert settings.shell == "/bin/zsh"
    assert settings.default_language is Language.JA
    assert settings.default_model == "gpt-4o"


def test_blank_values_count_as_unset():
    settings = Settings.load({"OPENAI_API_KEY": "  ", "SHELL": ""})
    assert settings.openai_api_key is None
    assert settings.shell is None


def test_parser_defaults_come_from_settings():
    settings = Settings.load({"LANG": "ja_JP.UTF-8", "AICOMMAND_MODEL": "gpt-4o"})
    args = build_parser(settings).parse_args([])

    request = InvocationRequest.from_args(args)

    assert request == InvocationRequest(args=(), language=Language.JA, model="gpt-4o", custom_prompt="")


def test_command_tokens_keep_their_own_flags():
    parser = build_parser(Settings.load({}))
    args = parser.parse_args(["-l", "ja", "-m", "gpt-x", "-p", "be brief", "ls", "-la", "--color"])

    request = InvocationRequest.from_args(args)

    assert request.args == ("ls", "-la", "--color")
    assert request.language is Language.JA
    assert request.model == "gpt-x"
    assert request.custom_prompt == "be brief"


def test_long_flags():
    parser = build_parser(Settings.load({}))
    args = parser.parse_args(["--language", "en", "--model", "m", "--prompt", "p", "uptime"])
    request = InvocationRequest.from_args(args)
    assert (request.args, request.language, request.model, request.custom_prompt) == (("uptime",), Language.EN, "m", "p")


def test_invalid_language_is_rejected_when_building_the_request():
    args = build_parser(Settings.load({})).parse_args(["-l", "fr"])
    with pytest.raises(InvalidLanguageError):
        InvocationRequest.from_args(args)


def test_request_is_immutable():
    request = InvocationRequest(args=("ls",))
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.model = "other"


def test_leading_separator_is_not_part_of_the_command():
    args = build_parser(Settings.load({})).parse_args(["--", "ls"])
    assert InvocationRequest.from_args(args).args == ("ls",)


@pytest.mark.parametrize(
    "value, expected",
    [(None, "WARNING"), ("debug", "DEBUG"), (" info ", "INFO"), ("verbose", "WARNING")],
)
def test_log_level_comes_from_environment(value, expected):
    environ = {} if value is None else {"AICOMMAND_LOGLEVEL": value}
    settings = Settings.load(environ)

    assert settings.log_level == expected
    assert build_parser(settings).parse_args([]).log_level == expected
