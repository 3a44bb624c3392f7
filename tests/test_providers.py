"""Tests for the OpenAI-compatible provider."""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from meetbrief.config import ProviderSettings
from meetbrief.errors import ProviderError, ProviderErrorKind
from meetbrief.providers import CompletionProvider, OpenAICompatibleProvider, classify_error

REQUEST = httpx.Request("POST", "https://api.example.com/v1/chat/completions")


def _status_error(cls: type, status: int) -> Exception:
    return cls("error", response=httpx.Response(status, request=REQUEST), body=None)


def _response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


def _settings(**overrides) -> ProviderSettings:
    values = {"name": "groq", "model": "llama-3.3-70b-versatile", "api_key": "gsk-test"}
    values.update(overrides)
    return ProviderSettings(**values)


class TestClassifyError:
    """Tests for mapping SDK exceptions to error kinds."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (_status_error(openai.AuthenticationError, 401), ProviderErrorKind.UNAUTHORIZED),
            (_status_error(openai.PermissionDeniedError, 403), ProviderErrorKind.UNAUTHORIZED),
            (_status_error(openai.RateLimitError, 429), ProviderErrorKind.RATE_LIMITED),
            (_status_error(openai.NotFoundError, 404), ProviderErrorKind.MODEL_UNAVAILABLE),
            (_status_error(openai.InternalServerError, 503), ProviderErrorKind.MODEL_UNAVAILABLE),
            (_status_error(openai.InternalServerError, 500), ProviderErrorKind.UNKNOWN),
            (openai.APITimeoutError(request=REQUEST), ProviderErrorKind.UNKNOWN),
        ],
    )
    def test_kinds(self, error: Exception, kind: ProviderErrorKind) -> None:
        result = classify_error("groq", error)
        assert result.kind is kind
        assert result.provider == "groq"
        assert str(result).startswith("groq: ")


class TestOpenAICompatibleProvider:
    """Tests for completion calls."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(OpenAICompatibleProvider(_settings()), CompletionProvider)

    def test_tag(self) -> None:
        provider = OpenAICompatibleProvider(_settings())
        assert provider.tag == "groq-llama-3.3-70b-versatile"

    def test_not_configured(self) -> None:
        provider = OpenAICompatibleProvider(_settings(api_key=None))
        assert provider.is_configured() is False

        with pytest.raises(ProviderError) as exc_info:
            provider.complete("sys", "user", max_tokens=10, temperature=0.3)
        assert exc_info.value.kind is ProviderErrorKind.NOT_CONFIGURED

    def test_complete_sends_request(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = _response("A summary")
        provider = OpenAICompatibleProvider(_settings(), client=client)

        result = provider.complete("system text", "user text", max_tokens=4000, temperature=0.3, top_p=0.9)

        assert result == "A summary"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-3.3-70b-versatile"
        assert kwargs["max_completion_tokens"] == 4000
        assert kwargs["temperature"] == 0.3
        assert kwargs["top_p"] == 0.9
        assert kwargs["messages"] == [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ]

    def test_empty_system_and_top_p_omitted(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = _response("ok")
        provider = OpenAICompatibleProvider(_settings(), client=client)

        provider.complete("", "only user", max_tokens=5, temperature=0.0)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "only user"}]
        assert "top_p" not in kwargs

    def test_none_content_becomes_empty_string(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = _response(None)
        provider = OpenAICompatibleProvider(_settings(), client=client)

        assert provider.complete("s", "u", max_tokens=5, temperature=0.3) == ""

    def test_empty_choices_raises_provider_error(self) -> None:
        response = MagicMock()
        response.choices = []
        client = MagicMock()
        client.chat.completions.create.return_value = response
        provider = OpenAICompatibleProvider(_settings(max_attempts=3), client=client)

        with pytest.raises(ProviderError, match="empty response") as exc_info:
            provider.complete("s", "u", max_tokens=5, temperature=0.3)

        assert exc_info.value.kind is ProviderErrorKind.UNKNOWN
        assert exc_info.value.provider == "groq"
        assert client.chat.completions.create.call_count == 1

    @patch("meetbrief.providers.openai_compat.OpenAI")
    def test_client_built_from_settings(self, mock_openai: MagicMock) -> None:
        mock_openai.return_value.chat.completions.create.return_value = _response("ok")
        settings = _settings(base_url="https://api.groq.com/openai/v1", timeout=30.0)

        OpenAICompatibleProvider(settings).complete("s", "u", max_tokens=5, temperature=0.3)

        mock_openai.assert_called_once_with(
            api_key="gsk-test",
            base_url="https://api.groq.com/openai/v1",
            timeout=30.0,
            max_retries=0,
        )

    def test_rate_limit_raises_without_retry(self) -> None:
        client = MagicMock()
        client.chat.completions.create.side_effect = _status_error(openai.RateLimitError, 429)
        provider = OpenAICompatibleProvider(_settings(max_attempts=3), client=client)

        with pytest.raises(ProviderError) as exc_info:
            provider.complete("s", "u", max_tokens=5, temperature=0.3)

        assert exc_info.value.kind is ProviderErrorKind.RATE_LIMITED
        assert client.chat.completions.create.call_count == 1

    @patch("meetbrief.providers.openai_compat.time.sleep")
    def test_connection_error_retried(self, mock_sleep: MagicMock) -> None:
        client = MagicMock()
        client.chat.completions.create.side_effect = [
            openai.APIConnectionError(request=REQUEST),
            _response("recovered"),
        ]
        provider = OpenAICompatibleProvider(_settings(max_attempts=2), client=client)

        assert provider.complete("s", "u", max_tokens=5, temperature=0.3) == "recovered"
        mock_sleep.assert_called_once_with(2)

    @patch("meetbrief.providers.openai_compat.time.sleep")
    def test_connection_error_exhausted(self, mock_sleep: MagicMock) -> None:
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=REQUEST)
        provider = OpenAICompatibleProvider(_settings(max_attempts=2), client=client)

        with pytest.raises(ProviderError) as exc_info:
            provider.complete("s", "u", max_tokens=5, temperature=0.3)

        assert exc_info.value.kind is ProviderErrorKind.UNKNOWN
        assert client.chat.completions.create.call_count == 2

    def test_timeout_not_retried(self) -> None:
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APITimeoutError(request=REQUEST)
        provider = OpenAICompatibleProvider(_settings(max_attempts=3), client=client)

        with pytest.raises(ProviderError, match="timed out"):
            provider.complete("s", "u", max_tokens=5, temperature=0.3)
        assert client.chat.completions.create.call_count == 1


class TestProbe:
    """Tests for the reachability probe."""

    def test_probe_success(self) -> None:
        client = MagicMock()
        client.chat.completions.create.return_value = _response("ok")
        provider = OpenAICompatibleProvider(_settings(), client=client)

        assert provider.probe() is True
        assert client.chat.completions.create.call_args.kwargs["max_completion_tokens"] == 1

    def test_probe_failure(self) -> None:
        client = MagicMock()
        client.chat.completions.create.side_effect = _status_error(openai.AuthenticationError, 401)
        provider = OpenAICompatibleProvider(_settings(), client=client)

        assert provider.probe() is False

    def test_probe_not_configured(self) -> None:
        assert OpenAICompatibleProvider(_settings(api_key=None)).probe() is False
